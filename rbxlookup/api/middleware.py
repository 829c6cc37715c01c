"""API middleware: CORS, request logging, and error handling.

Starlette middleware is a stack (last added, first executed).  In
``main.py`` ErrorHandlingMiddleware is added before RequestLoggingMiddleware,
so the request flows

    Client -> RequestLogging -> ErrorHandling -> route handler

and RequestLoggingMiddleware sees the final status code even when
ErrorHandling replaced an exception with a structured JSON error.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from rbxlookup.api.schemas import ErrorResponse
from rbxlookup.utils.errors import InvalidInputError, RbxLookupError, UserNotFoundError
from rbxlookup.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

# Anything not listed here is a server-side failure (500).
_STATUS_BY_ERROR: dict[type[RbxLookupError], int] = {
    InvalidInputError: 400,
    UserNotFoundError: 404,
}


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit list of allowed origins.  Defaults to ``["*"]``.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


def error_status_code(exc: RbxLookupError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return 500


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Convert ``RbxLookupError`` subclasses into structured JSON errors.

    The body is ``{"error": <message>, "details": <cause>}``, with
    ``details`` omitted when there is none.  Stack traces stay in the
    server log.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except RbxLookupError as exc:
            status_code = error_status_code(exc)
            log = _logger.error if status_code >= 500 else _logger.info
            log(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                details=exc.details,
                provider=exc.provider_name,
                path=str(request.url.path),
                status=status_code,
            )
            body = ErrorResponse(error=exc.message, details=exc.details)
            return JSONResponse(
                status_code=status_code,
                content=body.model_dump(exclude_none=True),
            )
