"""
Date helpers shared by the layout components.

Parsing is forgiving: anything that cannot be read as a date yields None and
the caller picks its own fallback.
"""

import logging
import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

# Instants we saturate to when date arithmetic overflows
MAX_INSTANT = datetime.max.replace(tzinfo=timezone.utc)
MIN_INSTANT = datetime.min.replace(tzinfo=timezone.utc)

FALLBACK_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        # An offset pushed the instant past either end of the calendar
        return MAX_INSTANT if value.year == datetime.max.year else MIN_INSTANT


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a date value into an aware UTC datetime.

    Accepts datetime and date objects, ISO-8601 strings (a trailing "Z" is
    understood) and a handful of common human formats. Naive values are
    interpreted as UTC.

    Args:
        value: Raw value from the timeline record

    Returns:
        Parsed datetime, or None when the value is missing or unreadable
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return _as_utc(value)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        return _as_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except (ValueError, OverflowError):
        pass

    for fmt in FALLBACK_FORMATS:
        try:
            return _as_utc(datetime.strptime(text, fmt))
        except (ValueError, OverflowError):
            continue

    logger.debug(f"Unparseable date value: {text!r}")
    return None


def days_between(start: datetime, end: datetime) -> float:
    """Signed, fractional number of days from start to end."""
    return (end - start).total_seconds() / SECONDS_PER_DAY


def add_days(start: datetime, days: float) -> datetime:
    """Add fractional days, saturating at the latest representable instant."""
    if not math.isfinite(days):
        return MAX_INSTANT if days > 0 else start
    try:
        return start + timedelta(days=days)
    except OverflowError:
        return MAX_INSTANT if days > 0 else MIN_INSTANT


def format_date(value: Optional[datetime], fmt: str = "%b %d, %Y") -> str:
    """Format a date for display labels."""
    if value is None:
        return "N/A"
    return value.strftime(fmt)
