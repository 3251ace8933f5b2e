"""
Global exception handlers and custom exception classes.
"""
from typing import Iterable, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

# Set up logging
logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Base exception class for application-specific exceptions.

    The message is shown to the end user verbatim, so keep it readable.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppException):
    """Exception raised when a required field is missing or malformed."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, fields: Iterable[str] = ()):
        super().__init__(message)
        self.fields = list(fields)


class StorageError(AppException):
    """Exception raised when the database rejects or cannot run a statement."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class DuplicateRecordError(StorageError):
    """Exception raised when an insert violates a uniqueness rule."""
    status_code = status.HTTP_409_CONFLICT


class RecordNotFoundError(StorageError):
    """Exception raised when a referenced or requested row does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    logger.error(f"Application error on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message}
    )


def describe_validation_error(errors) -> str:
    """
    Turn the first request validation error into a sentence for the user,
    e.g. "Invalid email: value is not a valid email address: ...".
    """
    if not errors:
        return "Validation error"
    first = errors[0]
    fields = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    reason = first.get("msg", "invalid value")
    if not fields:
        return f"Invalid request: {reason}"
    return f"Invalid {'.'.join(fields)}: {reason}"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Standardized error response with validation details
    """
    logger.error(f"Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={
            "message": describe_validation_error(exc.errors()),
            "errors": jsonable_encoder(exc.errors())
        }
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Handler for anything the routes did not anticipate."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Something went wrong! Please try again."}
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
