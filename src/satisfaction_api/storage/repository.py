"""Data-access layer — thin async wrappers around SQLAlchemy queries."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date as date_type
from datetime import datetime, timedelta
from itertools import groupby
from typing import AsyncIterator, Sequence

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from satisfaction_api.models import AvailableDate, AvailableTime
from satisfaction_api.storage.database import EmotionRow, get_session_factory

_TS_FORMAT = "%Y-%m-%d %H:%M:%S"


class BaseRepository:
    """Shared base with session management for all repositories."""

    def __init__(self, session: AsyncSession | None = None) -> None:
        self._external_session = session

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        if self._external_session is not None:
            yield self._external_session
            return
        async with get_session_factory()() as session:
            yield session


class EmotionRepository(BaseRepository):
    """Read-only queries over the emotion-detection table."""

    # ── Raw records ───────────────────────────────────────────

    async def get_range(self, start: datetime, end: datetime) -> Sequence[EmotionRow]:
        """Records with ``start <= timestamp < end`` in chronological order."""
        async with self._session() as session:
            stmt = (
                select(EmotionRow)
                .where(EmotionRow.timestamp >= start, EmotionRow.timestamp < end)
                .order_by(EmotionRow.timestamp.asc(), EmotionRow.id.asc())
            )
            result = await session.execute(stmt)
            return result.scalars().all()

    async def get_day(self, day: date_type) -> Sequence[EmotionRow]:
        start = datetime.combine(day, datetime.min.time())
        return await self.get_range(start, start + timedelta(days=1))

    async def get_minute(self, start: datetime) -> Sequence[EmotionRow]:
        return await self.get_range(start, start + timedelta(minutes=1))

    # ── Availability ──────────────────────────────────────────

    async def available_times(self, day: date_type) -> list[AvailableTime]:
        """Minutes of *day* that hold at least one record, ascending."""
        start = datetime.combine(day, datetime.min.time())
        async with self._session() as session:
            stmt = (
                select(EmotionRow.timestamp)
                .where(
                    EmotionRow.timestamp >= start,
                    EmotionRow.timestamp < start + timedelta(days=1),
                )
                .order_by(EmotionRow.timestamp.asc())
            )
            result = await session.execute(stmt)
            stamps = result.scalars().all()

        times = []
        for hhmm, group in groupby(stamps, key=lambda ts: ts.strftime("%H:%M")):
            bucket = list(group)
            times.append(
                AvailableTime(
                    time=hhmm,
                    first=bucket[0].strftime(_TS_FORMAT),
                    last=bucket[-1].strftime(_TS_FORMAT),
                    count=len(bucket),
                )
            )
        return times

    async def available_dates(self, limit: int = 30) -> list[AvailableDate]:
        """Most recent dates that hold data, newest first."""
        day = func.date(EmotionRow.timestamp)
        async with self._session() as session:
            stmt = (
                select(day.label("d"), func.count().label("c"))
                .group_by(day)
                .order_by(day.desc())
                .limit(limit)
            )
            result = await session.execute(stmt)
            rows = result.all()
        # MySQL returns date objects, SQLite returns ISO strings.
        return [AvailableDate(date=str(r.d), count=int(r.c)) for r in rows]

    # ── Health ────────────────────────────────────────────────

    async def ping(self) -> None:
        """Round-trip a trivial statement; raises on connection failure."""
        async with self._session() as session:
            await session.execute(text("SELECT 1"))
