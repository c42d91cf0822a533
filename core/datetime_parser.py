"""
Date/time extraction from pasted export fragments.

Exports render timestamps as "Mar 14, 2024, 3:45 pm". Copying from the
browser sometimes glues the year to the time ("Mar 14, 20243:45 pm"), so
a space is reinserted before matching.
"""
import re
from datetime import datetime
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from core.config import get_settings

YEAR_TIME_GLUE = re.compile(r"(\d{4})(\d{1,2}:\d{2})")

DATETIME_PATTERN = re.compile(
    r"([A-Za-z]{3})\s+(\d{1,2}),\s*(\d{4}),?\s*(\d{1,2}):(\d{2})\s*(am|pm)",
    re.IGNORECASE,
)

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
    # Spanish abbreviations that differ from English
    "ene": 1, "abr": 4, "ago": 8, "dic": 12,
}


def to_24_hour(hour: int, period: str) -> int:
    """
    Convert a 12-hour clock reading to 24-hour.

    12am is midnight (0), 12pm stays 12, other pm hours add 12.
    """
    period = period.lower()
    if period == "pm" and hour != 12:
        return hour + 12
    if period == "am" and hour == 12:
        return 0
    return hour


def _match_fields(text: str) -> Optional[Tuple[int, int, int, int, int]]:
    normalized = YEAR_TIME_GLUE.sub(r"\1 \2", text)
    match = DATETIME_PATTERN.search(normalized)
    if not match:
        return None

    mon, day, year, hour, minute, period = match.groups()
    month = MONTHS.get(mon.lower())
    if month is None:
        return None
    return int(year), month, int(day), to_24_hour(int(hour), period), int(minute)


def parse_datetime(text: str, tz: Optional[ZoneInfo] = None) -> Optional[datetime]:
    """
    Extract a timestamp from a free-text date/time fragment.

    Args:
        text: Fragment such as "Mar 14, 2024, 3:45pm"
        tz: Timezone of the export (defaults to the configured timezone)

    Returns:
        Timezone-aware datetime, or None when no real date/time is present
    """
    if not text:
        return None

    fields = _match_fields(text)
    if fields is None:
        return None

    year, month, day, hour, minute = fields
    try:
        return datetime(year, month, day, hour, minute, tzinfo=tz or get_settings().zone)
    except ValueError:
        return None


def to_epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp()) * 1000
