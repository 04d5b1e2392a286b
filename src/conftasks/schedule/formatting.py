# src/conftasks/schedule/formatting.py

from __future__ import annotations

from datetime import datetime, timezone

from .models import ScheduleCalendar
from .weeks import date_for_day_in_week, week_date_range

SHORT_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _local(instant: datetime, calendar: ScheduleCalendar) -> datetime:
    return instant.astimezone(timezone.utc) - calendar.offset


def format_date_short(instant: datetime | None, calendar: ScheduleCalendar) -> str:
    """e.g. "Nov 13", in event local time."""
    if instant is None:
        return ""
    local = _local(instant, calendar)
    return f"{SHORT_MONTHS[local.month - 1]} {local.day}"


def format_week_range(label: str | None, calendar: ScheduleCalendar) -> str:
    """e.g. "Oct 27 – Nov 2"."""
    rng = week_date_range(label, calendar)
    if rng is None:
        return ""
    return f"{format_date_short(rng.start, calendar)} – {format_date_short(rng.end, calendar)}"


def format_day_date(label: str | None, day_name: str | None, calendar: ScheduleCalendar) -> str:
    """e.g. "Thu, Nov 13"."""
    day_start = date_for_day_in_week(label, day_name, calendar)
    if day_start is None or not day_name:
        return ""
    return f"{day_name[:3]}, {format_date_short(day_start, calendar)}"


def format_time_12h(raw: str | None) -> str:
    """
    "14:00" -> "2:00 PM", "0:00" -> "12:00 AM".

    Strings that don't look like H:MM come back unchanged.
    """
    if not raw or not isinstance(raw, str):
        return ""

    parts = raw.split(":")
    if len(parts) < 2:
        return raw
    try:
        hours = int(parts[0])
    except ValueError:
        return raw
    minutes = parts[1]

    period = "PM" if hours >= 12 else "AM"
    if hours == 0:
        hours = 12
    elif hours > 12:
        hours -= 12
    return f"{hours}:{minutes} {period}"
