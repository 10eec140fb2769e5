"""Satisfaction read routes — daily segments, minute detail, availability."""

from __future__ import annotations

from datetime import datetime

import structlog
from fastapi import APIRouter, HTTPException, Query

from satisfaction_api.api.validation import InvalidQueryError, clamp_limit, parse_date, parse_time
from satisfaction_api.satisfaction import SatisfactionConfig, build_daily_segments, build_minute_detail
from satisfaction_api.storage.repository import EmotionRepository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["satisfaction"])


def _satisfaction_config() -> SatisfactionConfig:
    from satisfaction_api.api.server import get_satisfaction_config

    return get_satisfaction_config()


@router.get("/satisfaction-segments")
async def satisfaction_segments(date: str | None = Query(None)):
    """Per-minute satisfaction for one day, split into contiguous segments."""
    try:
        day = parse_date(date)
    except InvalidQueryError as exc:
        raise HTTPException(400, str(exc)) from exc

    rows = await EmotionRepository().get_day(day)
    result = build_daily_segments(day.isoformat(), rows, _satisfaction_config())
    logger.info(
        "satisfaction.segments",
        date=result.date,
        records=len(rows),
        segments=len(result.segments),
    )
    return result.model_dump(mode="json")


@router.get("/minute-satisfaction")
async def minute_satisfaction(
    date: str | None = Query(None),
    time: str | None = Query(None),
):
    """Every record inside one minute with its individual score."""
    try:
        day = parse_date(date)
        hhmm = parse_time(time)
    except InvalidQueryError as exc:
        raise HTTPException(400, "date=YYYY-MM-DD, time=HH:mm required") from exc

    start = datetime.strptime(f"{day.isoformat()} {hhmm}", "%Y-%m-%d %H:%M")
    rows = await EmotionRepository().get_minute(start)
    detail = build_minute_detail(day.isoformat(), hhmm, rows, _satisfaction_config())
    return detail.model_dump(mode="json", by_alias=True)


@router.get("/available-times")
async def available_times(date: str | None = Query(None)):
    """Minutes of a day that have data (used as a time picker)."""
    try:
        day = parse_date(date)
    except InvalidQueryError as exc:
        raise HTTPException(400, str(exc)) from exc

    times = await EmotionRepository().available_times(day)
    return {"date": day.isoformat(), "times": [t.model_dump() for t in times]}


@router.get("/available-dates")
async def available_dates(limit: str | None = Query(None)):
    """Most recent dates with data, newest first."""
    dates = await EmotionRepository().available_dates(limit=clamp_limit(limit))
    return {"dates": [d.model_dump() for d in dates]}
