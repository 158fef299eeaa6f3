"""Method-and-parameter dispatch for the course API."""

import json
import logging
from typing import Any, Dict, Mapping, Union

from .errors import CourseApiError, InvalidParameter, MissingParameter, NotFound, UnsupportedMethod
from .events import ApiRequest, CourseFields

logger = logging.getLogger(__name__)


def _resp(status, payload=None):
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(payload if payload is not None else {}, default=str),
    }


def _error(status, message):
    return _resp(status, {"error": message})


class Dispatcher:
    """Turns one API request into one store call and one response.

    ``store`` must provide put_course, get_course, update_course,
    delete_course and scan_by_year (see ``course_api.store.CourseStore``).
    It is shared by every request the process handles and never mutated.
    """

    def __init__(self, store):
        self.store = store

    def handle(self, request: Union[ApiRequest, Mapping[str, Any]]) -> Dict[str, Any]:
        req = None
        try:
            req = request if isinstance(request, ApiRequest) else ApiRequest.from_event(request)
            logger.info(
                "method=%s pathp=%s query=%s", req.method, req.path_params, req.query_params
            )
            return self._route(req)
        except CourseApiError as exc:
            if exc.status_code >= 500:
                logger.error("request failed: %s (request=%s)", exc.message, req)
            else:
                logger.info("rejected with %s: %s", exc.status_code, exc.message)
            return _error(exc.status_code, exc.message)
        except Exception:
            logger.exception("unhandled error (request=%s)", req)
            return _error(500, "Internal server error")

    def _route(self, req):
        method = req.method
        course_code = req.path_param("courseCode")
        teacher_name = req.path_param("teacherName")

        if method == "POST":
            return self.create(req)

        if method == "GET":
            if course_code and teacher_name:
                return self.read_one(course_code, teacher_name)
            if req.query_param("year"):
                return self.read_filtered(req)
            raise MissingParameter("Missing path or query string params")

        if method == "PUT":
            return self.update(req)

        if method == "DELETE":
            if course_code and teacher_name:
                return self.delete(course_code, teacher_name)
            raise MissingParameter("Missing path params")

        raise UnsupportedMethod("Unsupported HTTP method")

    # -------- operations --------

    def create(self, req):
        fields = CourseFields.from_body(req.json_body())
        self.store.put_course(fields)
        logger.info("created course %s/%s", *fields.key)
        return _resp(200, {"message": "Course added successfully"})

    def read_one(self, course_code, teacher_name):
        item = self.store.get_course(course_code, teacher_name)
        if not item:
            raise NotFound("Item not found")
        return _resp(200, item)

    def read_filtered(self, req):
        year = req.query_param("year")
        if year is None:
            raise MissingParameter("Year query parameter is missing")
        try:
            year = int(year)
        except ValueError as exc:
            raise InvalidParameter("Year query parameter must be an integer") from exc
        items = self.store.scan_by_year(year)
        logger.debug("year=%s matched %d items", year, len(items))
        return _resp(200, {"items": items})

    def update(self, req):
        fields = CourseFields.from_body(req.json_body())
        attributes = self.store.update_course(fields)
        logger.info("updated course %s/%s", *fields.key)
        return _resp(200, {"message": "Course updated successfully", "updatedAttributes": attributes})

    def delete(self, course_code, teacher_name):
        self.store.delete_course(course_code, teacher_name)
        logger.info("deleted course %s/%s", course_code, teacher_name)
        return _resp(200, {"message": "Course deleted successfully"})
