"""Domain exceptions and the FastAPI handlers that turn them into responses."""
import logging

import pydantic
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CourseAppError(Exception):
    """Base class for errors the sample apps report to clients."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidMessageError(CourseAppError):
    """A worker message or scheduled-task request is malformed."""
    status_code = status.HTTP_400_BAD_REQUEST


class SignupExistsError(CourseAppError):
    """A signup for this email address is already stored."""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, email: str):
        super().__init__(f"A signup for {email} already exists")
        self.email = email


class SignupNotFoundError(CourseAppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, email: str):
        super().__init__(f"No signup found for {email}")
        self.email = email


async def handle_course_app_errors(request: Request, exc: CourseAppError) -> JSONResponse:
    """Return the status code carried by the exception with its message as ``detail``."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    """Report validation errors raised outside of FastAPI's own request parsing."""
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": [
                {
                    "msg": error["msg"],
                    "loc": list(error.get("loc", ())),
                }
                for error in errors
            ]
        },
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
