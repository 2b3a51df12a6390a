"""
Local clock for attendance

Work dates and schedule clock times are wall-clock values in HR_TIMEZONE.
Timestamps are stored as aware datetimes in that zone; backends that drop the
offset (SQLite) hand them back naive, which ``as_local`` re-attaches.
"""
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import settings


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.HR_TIMEZONE)


def now_local() -> datetime:
    return datetime.now(local_tz())


def as_local(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=local_tz())
    return value.astimezone(local_tz())
