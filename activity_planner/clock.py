from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo
from activity_planner.config import settings


def local_zone() -> Optional[tzinfo]:
    """Configured zone, or None for the system's local time"""
    return ZoneInfo(settings.timezone) if settings.timezone else None


def current_moment() -> datetime:
    """
    Read the wall clock once, in the configured zone, as a naive datetime.

    Callers take this snapshot once per request and pass it down; the
    suggestion engine never reads the clock itself.
    """
    return datetime.now(local_zone()).replace(tzinfo=None)
