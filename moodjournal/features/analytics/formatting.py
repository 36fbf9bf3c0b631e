"""Display strings for dates, times and the time-of-day greeting (en-US style)."""

from datetime import datetime
from typing import Optional


def _local(moment: datetime, tz=None) -> datetime:
    # Naive timestamps are taken as already local
    if tz is not None and moment.tzinfo is not None:
        return moment.astimezone(tz)
    return moment


def chart_date(moment: datetime, tz=None) -> str:
    """'Oct 19'"""
    moment = _local(moment, tz)
    return f"{moment:%b} {moment.day}"


def long_date(moment: datetime, tz=None) -> str:
    """'Monday, October 19, 2026'"""
    moment = _local(moment, tz)
    return f"{moment:%A, %B} {moment.day}, {moment.year}"


def entry_time(moment: datetime, tz=None) -> str:
    """'9:05 PM'"""
    moment = _local(moment, tz)
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment:%M %p}"


def greeting(now: Optional[datetime] = None) -> str:
    hour = (now or datetime.now()).hour
    if hour < 12:
        return "Good morning"
    if hour < 18:
        return "Good afternoon"
    return "Good evening"
