"""SQLAlchemy async engine, session factory, and the emotion table mapping."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from sqlalchemy import DateTime, Float, Integer
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from satisfaction_api.config import get_settings

_settings = get_settings()


# ── Base ──────────────────────────────────────────────────────

class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


# ── ORM tables ────────────────────────────────────────────────

class EmotionRow(Base):
    """One emotion-detection event in the externally owned table.

    Table and timestamp column names come from settings; the timestamp is
    exposed as ``timestamp`` whatever the column is called.
    """

    __tablename__ = _settings.db_table

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timestamp: Mapped[datetime] = mapped_column(_settings.db_date_column, DateTime, index=True)
    happiness: Mapped[float | None] = mapped_column(Float, nullable=True)
    sadness: Mapped[float | None] = mapped_column(Float, nullable=True)
    anger: Mapped[float | None] = mapped_column(Float, nullable=True)
    surprise: Mapped[float | None] = mapped_column(Float, nullable=True)
    disgust: Mapped[float | None] = mapped_column(Float, nullable=True)
    fear: Mapped[float | None] = mapped_column(Float, nullable=True)
    neutral: Mapped[float | None] = mapped_column(Float, nullable=True)


# ── Engine & session ──────────────────────────────────────────

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _create_engine(url: str) -> AsyncEngine:
    if url.startswith("sqlite"):
        # Pool sizing does not apply to SQLite.
        return create_async_engine(url, echo=False)
    return create_async_engine(
        url,
        echo=False,
        pool_size=get_settings().db_pool_size,
        pool_pre_ping=True,
    )


def _get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = _create_engine(get_settings().database_url)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(_get_engine(), expire_on_commit=False)
    return _session_factory


async def configure_database(url: str) -> None:
    """Dispose the current engine and point the module at *url* instead."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = _create_engine(url)
    _session_factory = None


async def dispose_engine() -> None:
    """Release pooled connections (application shutdown)."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def init_db() -> None:
    """Create the emotion table if it is missing.

    Production data lives in an existing table; this is for local
    development against SQLite.
    """
    url = get_settings().database_url if _engine is None else str(_engine.url)
    if url.startswith("sqlite"):
        # URL format: sqlite+aiosqlite:///path/to/db
        db_path = Path(url.split("///", 1)[-1])
        if db_path.name and db_path.name != ":memory:":
            db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = _get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
