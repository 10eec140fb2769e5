"""Middleware — CORS, request logging, error handling."""

from __future__ import annotations

import time
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from satisfaction_api.config import get_settings

logger = structlog.get_logger(__name__)


# ── CORS ──────────────────────────────────────────────────────


def add_cors(app: FastAPI) -> None:
    """Configure CORS from application settings.

    ``settings.cors_origins`` is a comma-separated string of allowed
    origins (or ``"*"`` to allow all).
    """
    settings = get_settings()
    origins_raw = settings.cors_origins.strip()

    if origins_raw == "*":
        origins = ["*"]
    else:
        origins = [o.strip() for o in origins_raw.split(",") if o.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )


# ── Request logging ───────────────────────────────────────────


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log request method, path, status, and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000, 1)

        # Skip noisy health checks
        if request.url.path != "/health":
            logger.info(
                "http.request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query),
                status=response.status_code,
                duration_ms=duration_ms,
            )
        return response


# ── Error handling ────────────────────────────────────────────


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Catch unhandled exceptions and return a clean 500 response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("http.unhandled_error", path=request.url.path, error=str(exc))
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal server error."},
            )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Upstream store failures surface as a plain 500; no retry is attempted."""
    logger.error("satisfaction.db_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"detail": "DB error"})


# ── Setup helper ──────────────────────────────────────────────


def setup_middleware(app: FastAPI) -> None:
    """Wire all middleware and exception handlers into the application.

    Order matters — outermost middleware runs first:
    1. Error handler (catch everything)
    2. Request logging
    3. CORS (handled by Starlette's built-in middleware)
    """
    # Add from innermost → outermost (FastAPI reverses the stack)
    add_cors(app)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
