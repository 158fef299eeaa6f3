import json

import pytest

from course_api.dispatcher import Dispatcher
from course_api.errors import StorageFailure
from course_api.store import _item


class FakeStore:
    """In-memory stand-in for CourseStore with DynamoDB-like semantics."""

    def __init__(self):
        self.items = {}
        self.calls = []
        self.fail_with = None

    def _call(self, name):
        self.calls.append(name)
        if self.fail_with is not None:
            raise StorageFailure(self.fail_with)

    def put_course(self, fields):
        self._call("put_course")
        self.items[fields.key] = _item(fields)

    def get_course(self, course_code, teacher_name):
        self._call("get_course")
        return self.items.get((course_code, teacher_name))

    def update_course(self, fields):
        self._call("update_course")
        new = _item(fields)
        current = dict(self.items.get(fields.key, {}))
        current.update(new)
        self.items[fields.key] = current
        return current

    def delete_course(self, course_code, teacher_name):
        self._call("delete_course")
        self.items.pop((course_code, teacher_name), None)

    def scan_by_year(self, year):
        self._call("scan_by_year")
        return [i for i in self.items.values() if i["year"] == {"N": str(year)}]


def make_event(method, path=None, query=None, body=None):
    event = {"requestContext": {"http": {"method": method}}}
    if path is not None:
        event["pathParameters"] = path
    if query is not None:
        event["queryStringParameters"] = query
    if body is not None:
        event["body"] = body if isinstance(body, str) else json.dumps(body)
    return event


def course_body(**overrides):
    body = {
        "courseCode": "CS101",
        "teacherName": "Ada Lovelace",
        "courseName": "Intro to Computing",
        "month": 9,
        "year": 2024,
        "students": ["s-1", "s-2"],
    }
    body.update(overrides)
    return body


def body_of(response):
    return json.loads(response["body"])


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def dispatcher(store):
    return Dispatcher(store)
