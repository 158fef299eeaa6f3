import json

from conftest import FakeStore, make_event
from course_api import lambda_function
from course_api.config import Settings
from course_api.dispatcher import Dispatcher
from course_api.store import CourseStore


def test_handler_delegates_to_dispatcher(monkeypatch):
    store = FakeStore()
    monkeypatch.setattr(lambda_function, "_dispatcher", Dispatcher(store))
    resp = lambda_function.handler(make_event("DELETE", path={"courseCode": "CS101", "teacherName": "Ada"}), None)
    assert resp["statusCode"] == 200
    assert json.loads(resp["body"]) == {"message": "Course deleted successfully"}
    assert store.calls == ["delete_course"]


def test_lambda_handler_alias():
    assert lambda_function.lambda_handler is lambda_function.handler


def test_dispatcher_built_once(monkeypatch):
    built = []

    def fake_build(settings):
        built.append(settings)
        return Dispatcher(FakeStore())

    monkeypatch.setattr(lambda_function, "_dispatcher", None)
    monkeypatch.setattr(lambda_function, "build_dispatcher", fake_build)
    first = lambda_function.get_dispatcher()
    assert lambda_function.get_dispatcher() is first
    assert len(built) == 1


def test_build_dispatcher_uses_settings():
    settings = Settings(table_name="Courses-test", region="us-east-1",
                        endpoint_url="http://localhost:8000")
    dispatcher = lambda_function.build_dispatcher(settings)
    assert isinstance(dispatcher.store, CourseStore)
    assert dispatcher.store.table_name == "Courses-test"
    assert dispatcher.store.client.meta.endpoint_url == "http://localhost:8000"
