"""Export the per-minute satisfaction series for offline analysis."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Literal

import pandas as pd
import structlog

from satisfaction_api.models import DailySegments
from satisfaction_api.satisfaction import SatisfactionConfig, build_daily_segments
from satisfaction_api.storage.repository import EmotionRepository

logger = structlog.get_logger(__name__)


def segments_to_dataframe(daily: DailySegments) -> pd.DataFrame:
    """Flatten a :class:`DailySegments` payload into one row per minute.

    Columns: ``segment`` (zero-based segment index), ``value``, ``count``.
    The ``minute`` column is parsed and set as the index.
    """
    records = [
        {
            "minute": point.minute,
            "segment": idx,
            "value": point.value,
            "count": point.count,
        }
        for idx, segment in enumerate(daily.segments)
        for point in segment.points
    ]
    df = pd.DataFrame(records, columns=["minute", "segment", "value", "count"])
    if not df.empty:
        df["minute"] = pd.to_datetime(df["minute"])
    return df.set_index("minute")


async def export_minutes(
    day: date,
    output_path: str | Path,
    *,
    fmt: Literal["csv", "json"] = "csv",
    repo: EmotionRepository | None = None,
    config: SatisfactionConfig | None = None,
) -> Path:
    """Write the segmented minute series of *day* to *output_path*.

    Returns the resolved output path.
    """
    repo = repo or EmotionRepository()
    rows = await repo.get_day(day)
    daily = build_daily_segments(day.isoformat(), rows, config)
    df = segments_to_dataframe(daily)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    if fmt == "json":
        df.reset_index().to_json(output, orient="records", date_format="iso", indent=2)
    else:
        df.to_csv(output, date_format="%Y-%m-%d %H:%M:%S")

    logger.info("export.minutes_written", path=str(output), format=fmt, rows=len(df))
    return output
