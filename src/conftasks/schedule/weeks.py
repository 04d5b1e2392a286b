# src/conftasks/schedule/weeks.py

"""
ISO calendar week arithmetic.

Week labels come from the sheet as "44", "CW44", "CW 45" or "cw46". Dates are
derived from the ISO week number and the configured event year; there is no
per-event date table on this path.

All returned instants are timezone-aware UTC datetimes. "Local" means event
local time, i.e. UTC shifted back by the calendar offset.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone

from .models import DateRange, ScheduleCalendar

DAY_OFFSETS = {
    "Monday": 0,
    "Tuesday": 1,
    "Wednesday": 2,
    "Thursday": 3,
    "Friday": 4,
    "Saturday": 5,
    "Sunday": 6,
}

_CW_PREFIX = re.compile(r"^cw\s*", re.IGNORECASE)
_LEADING_INT = re.compile(r"^[+-]?\d+")

# Last representable instant of a local day.
_END_OF_DAY = timedelta(days=1) - timedelta(milliseconds=1)


def parse_week_label(raw: object) -> int | None:
    """Return the week number in a label like "CW 45", or None if there is none."""
    if raw is None:
        return None
    cleaned = _CW_PREFIX.sub("", str(raw).strip())
    m = _LEADING_INT.match(cleaned)
    if not m:
        return None
    return int(m.group(0))


def monday_of_iso_week(week_number: int, year: int) -> date | None:
    """
    Monday of ISO week `week_number` in `year`.

    January 4 always falls in ISO week 1, so week 1 starts on the Monday on or
    before it.
    """
    if not 1 <= week_number <= 53:
        return None
    jan4 = date(year, 1, 4)
    monday_week1 = jan4 - timedelta(days=jan4.weekday())
    return monday_week1 + timedelta(weeks=week_number - 1)


def local_midnight(day: date, calendar: ScheduleCalendar) -> datetime:
    """UTC instant of 00:00 event-local time on `day`."""
    return datetime.combine(day, time(0, 0), tzinfo=timezone.utc) + calendar.offset


def local_date(instant: datetime, calendar: ScheduleCalendar) -> date:
    """Event-local calendar date of a UTC instant."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return (instant.astimezone(timezone.utc) - calendar.offset).date()


def _monday_for_label(label: object, calendar: ScheduleCalendar) -> date | None:
    week_number = parse_week_label(label)
    if week_number is None:
        return None
    return monday_of_iso_week(week_number, calendar.event_year)


def week_date_range(label: object, calendar: ScheduleCalendar) -> DateRange | None:
    """Monday 00:00 through Sunday 23:59:59.999 (local) of the labelled week."""
    monday = _monday_for_label(label, calendar)
    if monday is None:
        return None
    start = local_midnight(monday, calendar)
    sunday = local_midnight(monday + timedelta(days=6), calendar)
    return DateRange(start=start, end=sunday + _END_OF_DAY)


def date_for_day_in_week(label: object, day_name: str | None, calendar: ScheduleCalendar) -> datetime | None:
    """Local midnight of `day_name` within the labelled week."""
    offset = DAY_OFFSETS.get(day_name or "")
    if offset is None:
        return None
    monday = _monday_for_label(label, calendar)
    if monday is None:
        return None
    return local_midnight(monday + timedelta(days=offset), calendar)


def end_of_local_day(day_start: datetime) -> datetime:
    return day_start + _END_OF_DAY
