"""
JSON error envelope for the Frequency Translator API.

Every error leaves the API as ``{"error": {"code", "message", "status_code"}}``.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from translator.core.exceptions import BaseAppException, StorageError
from translator.services.language.store import StoreError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "status_code": status_code,
            }
        },
    )


async def base_exception_handler(
    request: Request, exc: BaseAppException
) -> JSONResponse:
    """Render an application exception with its own status and error code."""
    logger.error(
        f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code}: "
        f"{exc.detail}"
    )
    return _error_response(exc.status_code, exc.error_code, str(exc.detail))


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Render a profile store failure that was not mapped by the route."""
    return await base_exception_handler(
        request, StorageError(str(exc), exc.operation)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback and answer with a generic 500; details stay in the log."""
    logger.exception(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}"
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
    )
