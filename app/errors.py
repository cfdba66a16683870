from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failures the service can report."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    INTERNAL = "internal"


# Transport mapping, applied only at the HTTP boundary.
STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_EXISTS: 500,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.INTERNAL: 500,
}


class TaskError(Exception):
    """Base error for task operations."""
    kind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


class ValidationError(TaskError):
    kind = ErrorKind.VALIDATION


class NotFoundError(TaskError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "task not found"):
        super().__init__(message)


class AlreadyExistsError(TaskError):
    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, message: str = "task already exists"):
        super().__init__(message)


class MethodNotAllowedError(TaskError):
    kind = ErrorKind.METHOD_NOT_ALLOWED

    def __init__(self, message: str = "method not allowed"):
        super().__init__(message)
