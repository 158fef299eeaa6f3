"""Error kinds raised by the request pipeline.

Each kind carries the HTTP status it maps to, so the dispatcher turns any of
them into a response in one place.
"""


class CourseApiError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class MissingParameter(CourseApiError):
    status_code = 400


class InvalidParameter(CourseApiError):
    status_code = 400


class MalformedBody(CourseApiError):
    status_code = 400


class UnsupportedMethod(CourseApiError):
    status_code = 400


class NotFound(CourseApiError):
    status_code = 404


class StorageFailure(CourseApiError):
    status_code = 500
