"""
Local wall-clock helpers

Business timestamps are stored as naive local datetimes in the configured
TIMEZONE; "today" always means the local calendar day.
"""
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from app.core.config import settings


def local_now() -> datetime:
    return datetime.now(ZoneInfo(settings.TIMEZONE)).replace(tzinfo=None)


def local_today() -> date:
    return local_now().date()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)
