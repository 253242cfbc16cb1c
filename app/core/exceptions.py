from enum import Enum
from typing import Any, Dict, Optional
from fastapi import status


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    STORAGE = "STORAGE_ERROR"


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or parsed."""


class BaseAPIException(Exception):
    """
    Base class for every error rendered to the client.
    Keeps the error body format the same across the API.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class BadRequestException(BaseAPIException):
    """400: malformed input (non-numeric id, missing field...)"""
    def __init__(self, message: str = "Bad Request", details: dict = None):
        super().__init__(
            message=message,
            code=ErrorKind.VALIDATION.value,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


# =========================================================
# STUDENT DOMAIN ERRORS (raised by the repository)
# =========================================================

class StudentRepositoryError(Exception):
    """
    Failure category returned by the student repository.

    Callers match on `kind` rather than on the raw driver exception.
    """
    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class StudentNotFoundError(StudentRepositoryError):
    """No row matches the requested id."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, student_id: int):
        self.student_id = student_id
        super().__init__("student not found")


class DuplicateNameError(StudentRepositoryError):
    """The unique constraint on students.name was violated."""
    kind = ErrorKind.DUPLICATE_NAME

    def __init__(self, name: str):
        self.name = name
        super().__init__("student with this name already exists")


class StorageError(StudentRepositoryError):
    """Any other persistence failure."""
    kind = ErrorKind.STORAGE
