"""Error envelope and per-request log context for the wellness API.

Domain errors become ``{"error": {"code", "message", "details"}}`` bodies:

=============================  ======  =======================
exception                      status  code
=============================  ======  =======================
``RecordNotFoundError``        404     ``NOT_FOUND``
``OwnershipViolationError``    403     ``OWNERSHIP_VIOLATION``
``ValueError`` (incl. domain   400     ``VALIDATION_ERROR``
``ValidationError``)
anything else                  500     ``INTERNAL_ERROR``
=============================  ======  =======================

Request-model validation keeps FastAPI's own 422 response.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from wellness.api.deps import resolve_user_id
from wellness.api.models import ErrorDetail, ErrorResponse
from wellness.core.logging import reset_user_context, set_user_context
from wellness.errors import OwnershipViolationError, RecordNotFoundError

logger = logging.getLogger(__name__)


def _error(status: int, code: str, message: str, details: dict | None = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(status_code=status, content=body.model_dump())


async def _not_found(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    logger.info("%s %s: %s", request.method, request.url.path, exc)
    return _error(404, "NOT_FOUND", str(exc), {"kind": exc.kind, "id": str(exc.record_id)})


async def _ownership_violation(request: Request, exc: OwnershipViolationError) -> JSONResponse:
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return _error(
        403, "OWNERSHIP_VIOLATION", str(exc), {"kind": exc.kind, "id": str(exc.record_id)}
    )


async def _invalid_value(request: Request, exc: ValueError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return _error(400, "VALIDATION_ERROR", str(exc))


class CatchAllErrorMiddleware(BaseHTTPMiddleware):
    """Turn any exception that escapes the route handlers into a 500 envelope.

    Runs inside Starlette's ``ServerErrorMiddleware``, which would otherwise
    answer with a plain-text body.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return _error(500, "INTERNAL_ERROR", "Internal server error")


class UserContextMiddleware(BaseHTTPMiddleware):
    """Attribute log records to the caller for the duration of the request."""

    async def dispatch(self, request: Request, call_next):
        token = set_user_context(resolve_user_id(request, request.app.state.config))
        try:
            return await call_next(request)
        finally:
            reset_user_context(token)


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers and both middlewares on *app*."""
    handlers = (
        (RecordNotFoundError, _not_found),
        (OwnershipViolationError, _ownership_violation),
        (ValueError, _invalid_value),
    )
    for exc_class, handler in handlers:
        app.add_exception_handler(exc_class, handler)  # type: ignore[arg-type]
    app.add_middleware(CatchAllErrorMiddleware)
    app.add_middleware(UserContextMiddleware)
