"""Error types raised by the Files API and the handlers that turn them into responses."""

import logging
from typing import Dict, Optional

from fastapi import (
    Request,
    status,
)
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FilesApiError(Exception):
    """Base exception for all Files API errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationMissing(FilesApiError):
    """Raised at startup when a required setting is absent."""


class StorageUnavailable(FilesApiError):
    """Raised when a call to the object store fails."""


class MalformedReference(FilesApiError):
    """Raised when a file URL was not produced by this service's bucket."""


async def handle_files_api_errors(request: Request, exc: FilesApiError) -> JSONResponse:
    """Map a `FilesApiError` onto an HTTP status code."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, MalformedReference):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, StorageUnavailable):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    logger.error(
        "%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message
    )
    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )


async def handle_request_validation_errors(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report each invalid request field as its message and the offending input."""
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder(
            {
                "detail": [
                    {
                        "msg": error["msg"],
                        "input": error.get("input"),
                    }
                    for error in errors
                ]
            }
        ),
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
