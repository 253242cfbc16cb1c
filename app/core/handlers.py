# app/core/handlers.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.exceptions import (
    BadRequestException,
    BaseAPIException,
    ErrorKind,
    StudentRepositoryError,
)
from app.core.logging import logger

# Domain error kind -> HTTP status
ERROR_KIND_STATUS = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_NAME: status.HTTP_409_CONFLICT,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {
                "code": code,
                "message": message,
                "details": details
            }
        },
    )


def to_api_exception(exc: StudentRepositoryError) -> BaseAPIException:
    return BaseAPIException(
        message=exc.message,
        code=exc.kind.value,
        status_code=ERROR_KIND_STATUS[exc.kind],
    )


# 1. Errors raised by our own code
async def custom_api_exception_handler(request: Request, exc: BaseAPIException):
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


# 2. Repository outcomes (not found, duplicate name, storage failure)
async def student_repository_exception_handler(request: Request, exc: StudentRepositoryError):
    return await custom_api_exception_handler(request, to_api_exception(exc))


# 3. Validation errors raised by FastAPI/Pydantic on bad ids or bodies
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = {}
    for error in exc.errors():
        # Get field name (e.g., "path.student_id" or just "name")
        field = ".".join(str(x) for x in error["loc"] if x != "body")
        details[field] = error["msg"]

    if any(error["loc"] and error["loc"][0] == "path" for error in exc.errors()):
        message = "invalid student id"
    else:
        message = "Input validation failed"

    return await custom_api_exception_handler(
        request, BadRequestException(message=message, details=details)
    )


# 4. Standard HTTP errors (unknown URL, method not allowed...)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))


# 5. Anything else (bugs, library failures)
async def general_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled Exception: {exc}", exc_info=True)

    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please contact support.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAPIException, custom_api_exception_handler)
    app.add_exception_handler(StudentRepositoryError, student_repository_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
