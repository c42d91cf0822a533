"""
Human-readable labels for amounts and hour buckets.
"""
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from zoneinfo import ZoneInfo

from core.config import get_settings

CENT = Decimal("0.01")


def format_usd(amount: Decimal) -> str:
    """Format an amount as US dollars, e.g. "$1,234.50" or "-$3.00"."""
    rounded = Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.2f}"


def format_hour_am_pm(hour: int) -> str:
    """0 -> "12 AM", 13 -> "1 PM"."""
    display = hour % 12 or 12
    return f"{display} {'PM' if hour >= 12 else 'AM'}"


def format_month_day(timestamp: int, tz: Optional[ZoneInfo] = None) -> str:
    """Epoch milliseconds -> "Mar 1"."""
    dt = datetime.fromtimestamp(timestamp / 1000, tz or get_settings().zone)
    return f"{dt.strftime('%b')} {dt.day}"


def format_bucket_label(timestamp: int, tz: Optional[ZoneInfo] = None) -> str:
    """
    Axis label for an hour bucket. Midnight carries the date so day
    boundaries stay visible ("Mar 2 12 AM"), other hours show only the hour.
    """
    tz = tz or get_settings().zone
    hour = datetime.fromtimestamp(timestamp / 1000, tz).hour
    if hour == 0:
        return f"{format_month_day(timestamp, tz)} {format_hour_am_pm(0)}"
    return format_hour_am_pm(hour)
