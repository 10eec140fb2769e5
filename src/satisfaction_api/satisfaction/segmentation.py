"""Segmenter — group per-minute aggregates into contiguous runs.

Consecutive points whose timestamps differ by at most ``gap_seconds``
belong to the same segment; a larger gap (a minute with no data) opens a
new one.  Timestamps are naive civil time taken straight from the minute
key; no timezone conversion is applied.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable

from satisfaction_api.models import MinuteAggregate, Segment

MINUTE_KEY_FORMAT = "%Y-%m-%d %H:%M:00"


def parse_minute_key(key: str) -> datetime:
    """Parse ``YYYY-MM-DD HH:MM[:SS]`` into a naive :class:`datetime`."""
    for fmt in ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M"):
        try:
            return datetime.strptime(key, fmt)
        except ValueError:
            continue
    raise ValueError(f"invalid minute key: {key!r}")


class Segmenter:
    """Single left-to-right scan holding one open segment.

    Feed points in chronological order with :meth:`add`, then call
    :meth:`close` to flush the open segment and get the result.
    """

    def __init__(self, gap_seconds: float = 60) -> None:
        self.gap_seconds = gap_seconds
        self._segments: list[Segment] = []
        self._points: list[MinuteAggregate] = []
        self._last_ts: datetime | None = None

    def add(self, point: MinuteAggregate) -> None:
        ts = parse_minute_key(point.minute)
        if self._last_ts is not None:
            diff = math.floor((ts - self._last_ts).total_seconds())
            if diff > self.gap_seconds:
                self._flush()
        self._points.append(point)
        self._last_ts = ts

    def close(self) -> list[Segment]:
        self._flush()
        return self._segments

    def _flush(self) -> None:
        if not self._points:
            return
        self._segments.append(
            Segment(
                start=self._points[0].minute,
                end=self._points[-1].minute,
                count=len(self._points),
                points=self._points,
            )
        )
        self._points = []


def segment_minutes(points: Iterable[MinuteAggregate], gap_seconds: float = 60) -> list[Segment]:
    """Split chronologically ordered *points* into contiguous segments."""
    segmenter = Segmenter(gap_seconds=gap_seconds)
    for point in points:
        segmenter.add(point)
    return segmenter.close()
