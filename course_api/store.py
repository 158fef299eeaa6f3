"""DynamoDB access for the course table.

Items go in and come out in DynamoDB's attribute-value format
(``{"courseCode": {"S": "..."}, ...}``); callers get the raw representation.
"""

import functools
import logging

from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from .errors import StorageFailure

logger = logging.getLogger(__name__)

_serializer = TypeSerializer()


def _key(course_code, teacher_name):
    return {
        "courseCode": _serializer.serialize(course_code),
        "teacherName": _serializer.serialize(teacher_name),
    }


def _item(fields):
    item = _key(fields.course_code, fields.teacher_name)
    item.update({
        "courseName": _serializer.serialize(fields.course_name),
        "month": _serializer.serialize(fields.month),
        "year": _serializer.serialize(fields.year),
        # sorted so the request is stable across runs
        "students": {"SS": sorted(fields.students)},
    })
    return item


def _storage_call(operation):
    """Re-raise boto failures from *operation* as StorageFailure."""

    @functools.wraps(operation)
    def wrapper(self, *args, **kwargs):
        try:
            return operation(self, *args, **kwargs)
        except (ClientError, BotoCoreError) as exc:
            logger.error("%s on %s failed: %s", operation.__name__, self.table_name, exc)
            raise StorageFailure(str(exc)) from exc

    return wrapper


class CourseStore:
    """One course table, keyed by (courseCode, teacherName)."""

    def __init__(self, client, table_name):
        self.client = client
        self.table_name = table_name

    @_storage_call
    def put_course(self, fields):
        self.client.put_item(TableName=self.table_name, Item=_item(fields))

    @_storage_call
    def get_course(self, course_code, teacher_name):
        resp = self.client.get_item(
            TableName=self.table_name,
            Key=_key(course_code, teacher_name),
        )
        return resp.get("Item")

    @_storage_call
    def update_course(self, fields):
        resp = self.client.update_item(
            TableName=self.table_name,
            Key=_key(fields.course_code, fields.teacher_name),
            UpdateExpression=(
                "SET courseName = :courseName, #mn = :month, #yr = :year, students = :students"
            ),
            ExpressionAttributeNames={"#mn": "month", "#yr": "year"},
            ExpressionAttributeValues={
                ":courseName": _serializer.serialize(fields.course_name),
                ":month": _serializer.serialize(fields.month),
                ":year": _serializer.serialize(fields.year),
                ":students": {"SS": sorted(fields.students)},
            },
            ReturnValues="ALL_NEW",
        )
        return resp.get("Attributes", {})

    @_storage_call
    def delete_course(self, course_code, teacher_name):
        self.client.delete_item(
            TableName=self.table_name,
            Key=_key(course_code, teacher_name),
        )

    @_storage_call
    def scan_by_year(self, year):
        """Return every item whose ``year`` equals *year*, across all scan pages.

        The whole match set is held in memory and returned in one response.
        Lambda caps a synchronous response at 6 MB, and a larger match set
        makes the gateway answer 502 rather than a JSON error.
        """
        # full-table scan; the filter runs after each page is read
        paginator = self.client.get_paginator("scan")
        pages = paginator.paginate(
            TableName=self.table_name,
            FilterExpression="#yr = :year",
            ExpressionAttributeNames={"#yr": "year"},
            ExpressionAttributeValues={":year": _serializer.serialize(year)},
        )
        items = []
        for page in pages:
            items.extend(page.get("Items", []))
        return items
