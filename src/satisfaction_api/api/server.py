"""FastAPI application — satisfaction read endpoints and health checks.

This module wires together the infrastructure:
- CORS, request logging and error-handling middleware
- Database engine lifecycle (startup ping, shutdown dispose)
- The satisfaction router (``/api/...``)
- ``/health`` and ``/db-ping`` probes
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from satisfaction_api import __version__
from satisfaction_api.api.middleware import setup_middleware
from satisfaction_api.api.routes.satisfaction import router as satisfaction_router
from satisfaction_api.config import get_settings
from satisfaction_api.satisfaction import SatisfactionConfig
from satisfaction_api.storage.database import dispose_engine
from satisfaction_api.storage.repository import EmotionRepository

logger = structlog.get_logger(__name__)

# ── Shared state (initialised in lifespan) ────────────────────

_satisfaction_config: SatisfactionConfig | None = None


def get_satisfaction_config() -> SatisfactionConfig:
    """Scoring configuration for request handlers, built from settings on first use."""
    global _satisfaction_config
    if _satisfaction_config is None:
        _satisfaction_config = SatisfactionConfig.from_settings()
    return _satisfaction_config


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle hooks."""
    global _satisfaction_config

    settings = get_settings()
    _satisfaction_config = SatisfactionConfig.from_settings(settings)

    # An unreachable store is reported, not fatal: /db-ping keeps probing.
    try:
        await EmotionRepository().ping()
        logger.info("server.db_ready")
    except SQLAlchemyError as exc:
        logger.error("server.db_unavailable", error=str(exc))

    logger.info("server.started", port=settings.api_port)

    yield  # ← application runs

    await dispose_engine()
    logger.info("server.stopped")


app = FastAPI(
    title="Satisfaction API",
    description="Customer satisfaction derived from emotion-detection records.",
    version=__version__,
    lifespan=lifespan,
)

# ── Middleware ────────────────────────────────────────────────
setup_middleware(app)

# ── Routers ───────────────────────────────────────────────────
app.include_router(satisfaction_router)


# ── Health ────────────────────────────────────────────────────

@app.get("/health", tags=["system"])
async def health():
    return {"ok": True}


@app.get("/db-ping", tags=["system"])
async def db_ping():
    try:
        await EmotionRepository().ping()
    except SQLAlchemyError as exc:
        logger.warning("server.db_ping_failed", error=str(exc))
        return JSONResponse(status_code=500, content={"db": "fail", "error": str(exc)})
    return {"db": "ok"}
