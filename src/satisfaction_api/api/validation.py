"""Query-string validation for the read endpoints."""

from __future__ import annotations

import re
from datetime import date, datetime

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")
_LEADING_INT_RE = re.compile(r"\s*[-+]?\d+")


class InvalidQueryError(ValueError):
    """Raised when a date or time parameter is malformed."""


def parse_date(raw: str | None) -> date:
    """Parse a ``YYYY-MM-DD`` query value into a :class:`date`."""
    value = (raw or "").strip()
    if not _DATE_RE.match(value):
        raise InvalidQueryError("invalid date, expected YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise InvalidQueryError(f"invalid date: {value}") from exc


def parse_time(raw: str | None) -> str:
    """Validate an ``HH:MM`` (24-hour) query value and return it normalised."""
    value = (raw or "").strip()
    if not _TIME_RE.match(value):
        raise InvalidQueryError("invalid time, expected HH:mm")
    hour, minute = (int(part) for part in value.split(":"))
    if hour > 23 or minute > 59:
        raise InvalidQueryError(f"invalid time: {value}")
    return value


def clamp_limit(raw: str | None, default: int = 30, low: int = 1, high: int = 365) -> int:
    """Parse a ``limit`` parameter, falling back to *default* and clamping.

    Only the leading integer is read, so ``"10abc"`` and ``"5.5"`` give 10
    and 5.  Missing, non-numeric or zero values fall back to *default*.
    """
    match = _LEADING_INT_RE.match(raw or "")
    n = int(match.group(0)) if match else 0
    if n == 0:
        n = default
    return max(low, min(high, n))
