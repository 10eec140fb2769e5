"""Minute aggregation and the two response builders."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Sequence

import structlog

from satisfaction_api.models import (
    DailySegments,
    MinuteAggregate,
    MinuteDetail,
    MinutePoint,
)
from satisfaction_api.satisfaction.config import SatisfactionConfig
from satisfaction_api.satisfaction.scoring import derive_satisfaction
from satisfaction_api.satisfaction.segmentation import MINUTE_KEY_FORMAT, segment_minutes

logger = structlog.get_logger(__name__)

DAILY_PRECISION = 6
DETAIL_PRECISION = 4
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def minute_key(ts: datetime) -> str:
    """Truncate *ts* to its minute: ``YYYY-MM-DD HH:MM:00``."""
    return ts.strftime(MINUTE_KEY_FORMAT)


def aggregate_minutes(
    records: Sequence[Any],
    config: SatisfactionConfig | None = None,
) -> tuple[list[MinuteAggregate], float | None]:
    """Average record scores per minute.

    Returns the minute aggregates in ascending order together with the
    overall average, which is taken over individual records rather than
    over minute means.
    """
    cells: dict[str, list[float]] = {}
    total = 0.0
    for record in records:
        score = derive_satisfaction(record, config)
        cells.setdefault(minute_key(record.timestamp), []).append(score)
        total += score

    minutes = [
        MinuteAggregate(
            minute=key,
            value=round(sum(scores) / len(scores), DAILY_PRECISION),
            count=len(scores),
        )
        for key, scores in sorted(cells.items())
    ]
    overall = round(total / len(records), DAILY_PRECISION) if records else None
    return minutes, overall


def build_daily_segments(
    date: str,
    records: Sequence[Any],
    config: SatisfactionConfig | None = None,
) -> DailySegments:
    """Score, aggregate and segment one day of records."""
    cfg = config or SatisfactionConfig()
    minutes, overall = aggregate_minutes(records, cfg)
    segments = segment_minutes(minutes, gap_seconds=cfg.gap_seconds)
    logger.debug(
        "satisfaction.segments_built",
        date=date,
        records=len(records),
        minutes=len(minutes),
        segments=len(segments),
    )
    return DailySegments(
        date=date,
        first_minute=segments[0].start if segments else None,
        overall_avg=overall,
        segments=segments,
    )


def build_minute_detail(
    date: str,
    time: str,
    records: Sequence[Any],
    config: SatisfactionConfig | None = None,
) -> MinuteDetail:
    """Per-record scores for the 60-second window starting at ``date time:00``."""
    start = datetime.strptime(f"{date} {time}:00", TIMESTAMP_FORMAT)
    end = start + timedelta(seconds=60)

    points = []
    for idx, record in enumerate(records):
        ts = record.timestamp
        points.append(
            MinutePoint(
                index=idx,
                timestamp=ts.strftime(TIMESTAMP_FORMAT),
                hour=f"{ts.hour:02d}",
                minute=f"{ts.minute:02d}",
                second=f"{ts.second:02d}",
                minute_key=ts.strftime("%H:%M"),
                value=round(derive_satisfaction(record, config), DETAIL_PRECISION),
            )
        )

    avg = None
    if points:
        avg = round(sum(p.value for p in points) / len(points), DETAIL_PRECISION)

    return MinuteDetail(
        date=date,
        time=time,
        minute_key=points[0].minute_key if points else time,
        start=start.strftime(TIMESTAMP_FORMAT),
        end=end.strftime(TIMESTAMP_FORMAT),
        avg=avg,
        count=len(points),
        points=points,
    )
