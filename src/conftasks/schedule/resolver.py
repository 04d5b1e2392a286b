# src/conftasks/schedule/resolver.py

"""
Task time resolution.

Each task is turned into a tagged schedule (TimeSlot / DaySlot / WeekSlot)
exactly once, then its start/end boundaries are resolved to UTC instants:

- TIME: week + day date, plus the H:MM of start (or end)
- DAY:  local midnight .. 23:59:59.999 of the day
- WEEK: Monday 00:00 .. Sunday 23:59:59.999 of the week

Tasks without a week label fall back to the legacy day->date table when the
calendar carries one. Anything unresolvable comes back as None.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta

from .models import (
    Boundary,
    DaySlot,
    ResolvedTask,
    Schedule,
    ScheduleCalendar,
    Task,
    TimeLevel,
    TimeSlot,
    WeekSlot,
)
from .weeks import date_for_day_in_week, end_of_local_day, local_midnight, week_date_range

_CLOCK_TIME = re.compile(r"^(\d{1,2}):(\d{2})$")


def schedule_of(task: Task) -> Schedule:
    """Tag a task with its time abstraction level."""
    if task.start and task.day:
        return TimeSlot(task=task, week=task.week, day=task.day, start=task.start, end=task.end)
    if task.day:
        return DaySlot(task=task, week=task.week, day=task.day)
    return WeekSlot(task=task, week=task.week)


def classify_level(task: Task) -> TimeLevel:
    return schedule_of(task).level


def parse_clock_time(raw: str | None) -> tuple[int, int] | None:
    """Parse a 24-hour "H:MM" / "HH:MM" string into (hour, minute)."""
    if not raw:
        return None
    m = _CLOCK_TIME.match(raw.strip())
    if not m:
        return None
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def _day_start(week: str | None, day: str, calendar: ScheduleCalendar) -> datetime | None:
    if week:
        return date_for_day_in_week(week, day, calendar)

    # No week context: legacy fixed table, if any.
    table = calendar.event_dates
    if not table:
        return None
    fixed = table.get(day)
    if fixed is None:
        return None
    return local_midnight(fixed, calendar)


def _resolve_time_slot(slot: TimeSlot, which: Boundary, calendar: ScheduleCalendar) -> datetime | None:
    raw = slot.start if which is Boundary.START else slot.end
    hm = parse_clock_time(raw)
    if hm is None:
        return None
    base = _day_start(slot.week, slot.day, calendar)
    if base is None:
        return None
    hour, minute = hm
    return base + timedelta(hours=hour, minutes=minute)


def resolve_schedule_boundary(
    schedule: Schedule,
    which: Boundary,
    calendar: ScheduleCalendar,
) -> datetime | None:
    if isinstance(schedule, TimeSlot):
        return _resolve_time_slot(schedule, which, calendar)

    if isinstance(schedule, DaySlot):
        start = _day_start(schedule.week, schedule.day, calendar)
        if start is None:
            return None
        return start if which is Boundary.START else end_of_local_day(start)

    rng = week_date_range(schedule.week, calendar)
    if rng is None:
        return None
    return rng.start if which is Boundary.START else rng.end


def resolve_boundary(task: Task, which: Boundary, calendar: ScheduleCalendar) -> datetime | None:
    """Start or end instant of a task at whatever level it is scheduled."""
    return resolve_schedule_boundary(schedule_of(task), Boundary(which), calendar)


def resolve_task(task: Task, calendar: ScheduleCalendar) -> ResolvedTask:
    schedule = schedule_of(task)
    return ResolvedTask(
        task=task,
        schedule=schedule,
        start=resolve_schedule_boundary(schedule, Boundary.START, calendar),
        end=resolve_schedule_boundary(schedule, Boundary.END, calendar),
    )
