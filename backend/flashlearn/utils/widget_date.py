"""
Calendar-day helpers for the daily widget.

Day keys are ISO dates (YYYY-MM-DD). The day boundary is midnight in the
configured widget timezone, or the server's local time when none is set.
There is no compensation for users travelling across timezones.
"""
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from flashlearn.config import settings


def today(tz_name: Optional[str] = None) -> date:
    """Current calendar day in the widget timezone."""
    tz_name = tz_name if tz_name is not None else settings.WIDGET_TIMEZONE
    if tz_name:
        return datetime.now(ZoneInfo(tz_name)).date()
    return date.today()


def to_key(day: date) -> str:
    return day.isoformat()


def parse_key(key: Optional[str]) -> Optional[date]:
    """Parse a day key, returning None when missing or malformed."""
    if not key:
        return None
    try:
        return date.fromisoformat(key)
    except ValueError:
        return None


def yesterday(key: str) -> str:
    """Day key of the day before ``key``."""
    day = parse_key(key)
    if day is None:
        raise ValueError(f"Invalid day key: {key!r}")
    return to_key(day - timedelta(days=1))
