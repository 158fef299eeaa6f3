"""Normalize API Gateway proxy events into typed requests."""

import base64
import json
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional

from .errors import MalformedBody, MissingParameter

COURSE_FIELDS = ("courseCode", "teacherName", "courseName", "month", "year", "students")


def _method_of(event):
    # HTTP API (payload v2) first, REST API (v1) as fallback
    http = (event.get("requestContext") or {}).get("http") or {}
    method = http.get("method") or event.get("httpMethod") or ""
    return method.upper()


def _decode_body(event):
    body = event.get("body")
    if body is None:
        return None
    if event.get("isBase64Encoded") and isinstance(body, str):
        try:
            body = base64.b64decode(body, validate=True).decode("utf-8")
        except (ValueError, UnicodeDecodeError) as exc:
            raise MalformedBody(f"Invalid base64 body: {exc}") from exc
    return body


@dataclass(frozen=True)
class ApiRequest:
    method: str
    path_params: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, str] = field(default_factory=dict)
    raw_body: Any = None

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> "ApiRequest":
        return cls(
            method=_method_of(event),
            path_params=dict(event.get("pathParameters") or {}),
            query_params=dict(event.get("queryStringParameters") or {}),
            raw_body=_decode_body(event),
        )

    def path_param(self, name) -> Optional[str]:
        return self.path_params.get(name) or None

    def query_param(self, name) -> Optional[str]:
        return self.query_params.get(name) or None

    def json_body(self) -> Dict[str, Any]:
        """Return the body as a JSON object, decoding it if it arrived as text."""
        body = self.raw_body
        if body is None or body == "":
            raise MalformedBody("Request body is missing")
        if isinstance(body, (bytes, bytearray)):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise MalformedBody(f"Request body is not valid UTF-8: {exc}") from exc
        if isinstance(body, str):
            try:
                body = json.loads(body)
            except ValueError as exc:
                raise MalformedBody(f"Request body is not valid JSON: {exc}") from exc
        if not isinstance(body, Mapping):
            raise MalformedBody("Request body must be a JSON object")
        return dict(body)


def _as_text(body, name):
    value = body[name]
    if not isinstance(value, str) or not value:
        raise MalformedBody(f"{name} must be a non-empty string")
    return value


def _as_int(body, name):
    value = body[name]
    if isinstance(value, bool):
        raise MalformedBody(f"{name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise MalformedBody(f"{name} must be an integer")


def _as_string_set(body, name):
    value = body[name]
    if not isinstance(value, (list, tuple, set, frozenset)) or not value:
        raise MalformedBody(f"{name} must be a non-empty list of strings")
    if not all(isinstance(v, str) and v for v in value):
        raise MalformedBody(f"{name} must be a non-empty list of strings")
    return frozenset(value)


@dataclass(frozen=True)
class CourseFields:
    """The writable attributes of one course enrollment record."""

    course_code: str
    teacher_name: str
    course_name: str
    month: int
    year: int
    students: FrozenSet[str]

    @classmethod
    def from_body(cls, body: Mapping[str, Any]) -> "CourseFields":
        missing = [name for name in COURSE_FIELDS if body.get(name) is None]
        if missing:
            raise MissingParameter("Missing body fields: " + ", ".join(missing))
        return cls(
            course_code=_as_text(body, "courseCode"),
            teacher_name=_as_text(body, "teacherName"),
            course_name=_as_text(body, "courseName"),
            month=_as_int(body, "month"),
            year=_as_int(body, "year"),
            students=_as_string_set(body, "students"),
        )

    @property
    def key(self):
        return self.course_code, self.teacher_name
