from enum import Enum


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    EMPTY_PAYLOAD = "empty_payload"
    NOT_FOUND = "not_found"


class JoblyError(Exception):
    """Base exception for jobly errors."""

    kind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class BadRequestError(JoblyError):
    """Input that cannot be turned into a valid statement."""

    kind = ErrorKind.BAD_REQUEST


class EmptyPayloadError(BadRequestError):
    """Update requested with no fields to assign."""

    kind = ErrorKind.EMPTY_PAYLOAD

    def __init__(self, message: str = "No data"):
        super().__init__(message)


class NotFoundError(JoblyError):
    """No row matches the given id or handle."""

    kind = ErrorKind.NOT_FOUND
