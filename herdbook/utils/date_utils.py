"""Date manipulation utilities"""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from herdbook.config import settings


def add_days(from_date: date, days: int) -> date:
    """Add calendar days to a date (no month-length adjustment)"""
    return from_date + timedelta(days=days)


def today(tz_name: str | None = None) -> date:
    """Current date on the farm's calendar"""
    return datetime.now(ZoneInfo(tz_name or settings.timezone)).date()
