"""Structured logging configuration using *structlog*."""

from __future__ import annotations

import logging
import sys

import structlog

# Stdlib loggers of the libraries the service runs on.  Access lines are
# already emitted as ``http.request`` by the request-logging middleware.
_QUIET_LOGGERS: dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
}


def setup_logging(level: str = "INFO", *, json_logs: bool | None = None) -> None:
    """Configure *structlog* and the stdlib loggers of uvicorn / SQLAlchemy.

    Everything goes to stderr so that CLI commands such as ``segments`` can
    print their JSON payload on stdout.  *json_logs* defaults to JSON output
    unless stderr is a terminal.

    Call once at application startup.
    """
    log_level = getattr(logging, level, logging.INFO)
    if json_logs is None:
        json_logs = not sys.stderr.isatty()

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        processors.append(structlog.processors.format_exc_info)
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(stream=sys.stderr, level=log_level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(log_level)
    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(log_level, quiet_level))
