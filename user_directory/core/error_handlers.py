import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_directory.core.models import AppError
from user_directory.core.schemas import ErrorResponse

logger = logging.getLogger(__name__)

ILLEGAL_ARGUMENT = "Illegal argument"


def _error_response(status_code: int, error: str, details: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details).model_dump(),
    )


async def app_error_handler(request: Request, exc: AppError):
    """Domain errors carry their own status code and error label."""
    return _error_response(exc.status_code, exc.error, exc.message)


async def value_error_handler(request: Request, exc: ValueError):
    return _error_response(status.HTTP_400_BAD_REQUEST, ILLEGAL_ARGUMENT, str(exc))


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, non-integer ids and missing query parameters are bad input, not 422."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, ILLEGAL_ARGUMENT, details)


async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all: log the full error server-side, return a generic body."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "An unexpected error occurred.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
