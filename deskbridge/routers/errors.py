"""
Error mapping - turns service errors into HTTP responses for the UI.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from deskbridge.logging import get_logger
from deskbridge.services.errors import (
    BridgeError,
    FileReadFailure,
    LockFailure,
    TransportFailure,
    UpstreamFailure,
)

logger = get_logger(__name__)


def status_for_error(error: BridgeError) -> int:
    """Pick the HTTP status the UI sees for a service error."""
    if isinstance(error, TransportFailure):
        return 504 if error.timed_out else 502
    if isinstance(error, UpstreamFailure):
        return 502
    if isinstance(error, FileReadFailure):
        return 400
    if isinstance(error, LockFailure):
        return 503
    return 500


async def bridge_error_handler(request: Request, exc: BridgeError) -> JSONResponse:
    """Relay the error's message as the response detail."""
    status_code = status_for_error(exc)
    logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BridgeError, bridge_error_handler)
