import re
from datetime import datetime
from typing import List, NamedTuple, Optional, Sequence, TypeVar

# Week starts on Sunday: datetime.weekday() is Monday-first, so it is shifted below
WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

C = TypeVar("C")


class TimeWindow(NamedTuple):
    """A recurring weekly window. Missing day means every day, missing bounds mean all day."""
    day: Optional[str]
    time_start: Optional[str]
    time_end: Optional[str]


def is_valid_time(value: Optional[str]) -> bool:
    """True for zero-padded 24-hour "HH:MM" strings"""
    return bool(value) and _TIME_RE.match(value) is not None


def weekday_code(moment: datetime) -> str:
    """Three-letter weekday code for a moment, Sunday-first convention"""
    return WEEKDAYS[(moment.weekday() + 1) % 7]


def time_code(moment: datetime) -> str:
    """Zero-padded "HH:MM" for a moment"""
    return moment.strftime("%H:%M")


def matches(window: TimeWindow, day: str, time: str) -> bool:
    """
    Check whether a day/time falls inside a recurring weekly window.
    
    Both bounds are inclusive. A window whose end is earlier than its start
    crosses midnight, so "22:00"-"02:00" contains 23:30 and 01:15. Zero-padded
    HH:MM strings order the same way as the times they spell, so plain string
    comparison is exact.
    
    Args:
        window: Window to test; day None means any day
        day: Current three-letter weekday code
        time: Current time as "HH:MM"
    
    Returns:
        True if the window contains the given moment. Malformed times never match.
    """
    if window.day is not None and window.day != day:
        return False
    
    if not window.time_start or not window.time_end:
        return True
    
    if not (is_valid_time(window.time_start) and is_valid_time(window.time_end) and is_valid_time(time)):
        return False
    
    if window.time_end < window.time_start:
        return time >= window.time_start or time <= window.time_end
    
    return window.time_start <= time <= window.time_end


def is_context_active(context, day: str, time: str) -> bool:
    """Day filter first, then the time window with the day left unset"""
    if context.days is not None and day not in context.days:
        return False
    return matches(TimeWindow(None, context.time_start, context.time_end), day, time)


def active_contexts(contexts: Sequence[C], now: datetime) -> List[C]:
    """
    Filter contexts down to those whose window contains `now`.
    
    Order of the input is preserved. `now` is taken once by the caller so
    that every context is judged against the same instant.
    """
    day = weekday_code(now)
    time = time_code(now)
    return [context for context in contexts if is_context_active(context, day, time)]
