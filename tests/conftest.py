"""Shared pytest fixtures."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from satisfaction_api.models import EmotionRecord
from satisfaction_api.satisfaction import SatisfactionConfig
from satisfaction_api.storage.database import (
    EmotionRow,
    configure_database,
    dispose_engine,
    get_session_factory,
    init_db,
)


def _record(ts: str, **emotions: float) -> EmotionRecord:
    return EmotionRecord(timestamp=datetime.strptime(ts, "%Y-%m-%d %H:%M:%S"), **emotions)


@pytest.fixture
def make_record():
    """Factory building an :class:`EmotionRecord` from ``YYYY-MM-DD HH:MM:SS`` and emotion values."""
    return _record


@pytest.fixture
def config() -> SatisfactionConfig:
    return SatisfactionConfig()


@pytest.fixture
def day_records() -> list[EmotionRecord]:
    """Four records on 2024-05-01 spread over three minutes with a gap."""
    return [
        _record("2024-05-01 10:00:10", happiness=0.9),   # 95
        _record("2024-05-01 10:00:40", happiness=0.5),   # 75
        _record("2024-05-01 10:01:20"),                  # 50
        _record("2024-05-01 10:05:00", anger=100),       # 0
    ]


@pytest.fixture
async def db(tmp_path: Path, day_records: list[EmotionRecord]):
    """File-backed SQLite database seeded with ``day_records`` plus one later day."""
    await configure_database(f"sqlite+aiosqlite:///{tmp_path / 'emotion.db'}")
    await init_db()

    rows = [EmotionRow(**r.model_dump()) for r in day_records]
    rows.append(
        EmotionRow(
            timestamp=datetime(2024, 5, 2, 9, 0, 0),
            happiness=0.2,
            sadness=0.1,
        )
    )
    async with get_session_factory()() as session:
        session.add_all(rows)
        await session.commit()

    yield
    await dispose_engine()


@pytest.fixture
async def client(db):
    """Async test client with lifespan (startup / shutdown) fully executed."""
    from satisfaction_api.api.server import app

    async with LifespanManager(app) as manager:
        transport = ASGITransport(app=manager.app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
