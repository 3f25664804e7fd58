"""Global exception handlers — map SDK exceptions to HTTP status codes.

The SDK raises ``ValueError`` for invalid positions and malformed survey
files, and ``KeyError`` for unknown survey or question ids.  Rather than
catching these in every route, we install global handlers that pick the
right HTTP status code.  Route handlers stay focused on the happy path.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map SDK ``ValueError`` (bad position, malformed survey) to 400.

    The raw exception message is logged server-side; the client receives
    a generic description.
    """
    logger.warning("ValueError at %s: %s", request.url, exc)
    return JSONResponse(status_code=400, content={"detail": "Invalid request"})


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    """Map ``KeyError`` (unknown survey or question id) to 404."""
    logger.warning("KeyError at %s: %s", request.url, exc)
    return JSONResponse(status_code=404, content={"detail": "Resource not found"})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
