"""Shared Pydantic models used across the service."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ── Input ─────────────────────────────────────────────────────


class EmotionRecord(BaseModel):
    """One raw emotion-detection observation.

    Emotion fields are deliberately untyped: they may be fractions,
    percentages, ``None`` or garbage, and are normalised during scoring
    rather than rejected here.
    """

    model_config = ConfigDict(from_attributes=True)

    timestamp: datetime
    happiness: Any = None
    sadness: Any = None
    anger: Any = None
    surprise: Any = None
    disgust: Any = None
    fear: Any = None
    neutral: Any = None  # carried through, unused by scoring


# ── Daily segmented view ──────────────────────────────────────


class MinuteAggregate(BaseModel):
    """Mean satisfaction of every record observed within one calendar minute."""

    minute: str  # YYYY-MM-DD HH:MM:00
    value: float
    count: int = Field(default=1, exclude=True)


class Segment(BaseModel):
    """Maximal run of minute aggregates with no gap above the tolerance."""

    start: str
    end: str
    count: int
    points: list[MinuteAggregate]


class DailySegments(BaseModel):
    date: str
    first_minute: str | None = None
    overall_avg: float | None = None
    segments: list[Segment] = Field(default_factory=list)


# ── Single-minute view ────────────────────────────────────────


class MinutePoint(BaseModel):
    """Score of a single record inside the requested minute."""

    model_config = ConfigDict(populate_by_name=True)

    index: int
    timestamp: str  # YYYY-MM-DD HH:MM:SS
    hour: str
    minute: str
    second: str
    minute_key: str = Field(alias="minuteKey")  # HH:MM
    value: float


class MinuteDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    time: str
    minute_key: str = Field(alias="minuteKey")
    start: str
    end: str
    avg: float | None = None
    count: int = 0
    points: list[MinutePoint] = Field(default_factory=list)


# ── Availability ──────────────────────────────────────────────


class AvailableTime(BaseModel):
    time: str  # HH:MM
    first: str
    last: str
    count: int


class AvailableDate(BaseModel):
    date: str  # YYYY-MM-DD
    count: int
