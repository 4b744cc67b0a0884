"""Exception handlers translating service errors into HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shortener.exceptions import ShortenerError, ShortcodeExhaustedError

logger = logging.getLogger("shortener.web")


async def shortener_error_handler(request: Request, exc: ShortenerError) -> JSONResponse:
    """Map a service error to its HTTP status with an error body."""
    if isinstance(exc, ShortcodeExhaustedError):
        logger.error(f"Short code keyspace exhausted at {request.url.path}: {exc}")
    else:
        logger.info(f"{type(exc).__name__} ({exc.status_code}) at {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 instead of 422."""
    errors = exc.errors()
    logger.warning(f"Validation error at {request.url.path}: {errors}")
    detail = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
        for error in errors
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request data", "detail": detail},
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and return a generic 500."""
    logger.error(f"Unhandled error at {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the shortener's exception handlers to an app."""
    app.add_exception_handler(ShortenerError, shortener_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
