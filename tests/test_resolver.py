# tests/test_resolver.py

from __future__ import annotations

from datetime import date, timedelta

import pytest

from conftasks.schedule.models import (
    Boundary,
    DaySlot,
    ScheduleCalendar,
    Task,
    TimeLevel,
    TimeSlot,
    WeekSlot,
)
from conftasks.schedule.resolver import (
    classify_level,
    parse_clock_time,
    resolve_boundary,
    resolve_task,
    schedule_of,
)

from .fakes import local


@pytest.mark.parametrize(
    ("task", "level"),
    [
        (Task(week="CW45", day="Monday", start="9:00", end="10:00"), TimeLevel.TIME),
        (Task(day="Monday", start="9:00"), TimeLevel.TIME),
        (Task(week="CW45", day="Monday"), TimeLevel.DAY),
        (Task(week="CW45", day="Monday", end="10:00"), TimeLevel.DAY),
        (Task(week="CW45"), TimeLevel.WEEK),
        # A start without a day has no date context.
        (Task(week="CW45", start="9:00"), TimeLevel.WEEK),
        (Task(), TimeLevel.WEEK),
    ],
)
def test_classify_level_is_total(task: Task, level: TimeLevel) -> None:
    assert classify_level(task) is level


def test_schedule_of_returns_tagged_variants() -> None:
    assert isinstance(schedule_of(Task(week="1", day="Monday", start="8:00")), TimeSlot)
    assert isinstance(schedule_of(Task(week="1", day="Monday")), DaySlot)
    assert isinstance(schedule_of(Task(week="1")), WeekSlot)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("9:30", (9, 30)),
        ("09:30", (9, 30)),
        ("14:00", (14, 0)),
        ("0:00", (0, 0)),
        ("23:59", (23, 59)),
        ("24:00", None),
        ("12:60", None),
        ("9:5", None),
        ("ab:cd", None),
        ("2:00 PM", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_clock_time(raw, expected) -> None:
    assert parse_clock_time(raw) == expected


def test_resolve_time_level(calendar: ScheduleCalendar, workshop: Task) -> None:
    assert resolve_boundary(workshop, Boundary.START, calendar) == local(2025, 11, 5, 14, 0)
    assert resolve_boundary(workshop, Boundary.END, calendar) == local(2025, 11, 5, 15, 30)


def test_resolve_time_level_malformed_times(calendar: ScheduleCalendar) -> None:
    task = Task(week="CW45", day="Wednesday", start="2pm", end="x:15")
    assert resolve_boundary(task, Boundary.START, calendar) is None
    assert resolve_boundary(task, Boundary.END, calendar) is None


def test_resolve_time_level_missing_end(calendar: ScheduleCalendar) -> None:
    task = Task(week="CW45", day="Wednesday", start="14:00")
    assert resolve_boundary(task, Boundary.START, calendar) == local(2025, 11, 5, 14, 0)
    assert resolve_boundary(task, Boundary.END, calendar) is None


def test_resolve_day_level(calendar: ScheduleCalendar) -> None:
    task = Task(week="CW45", day="Friday")
    start = resolve_boundary(task, Boundary.START, calendar)
    end = resolve_boundary(task, Boundary.END, calendar)
    assert start == local(2025, 11, 7)
    assert end == local(2025, 11, 8) - timedelta(milliseconds=1)


def test_resolve_week_level(calendar: ScheduleCalendar) -> None:
    rt = resolve_task(Task(week="45"), calendar)
    assert rt.level is TimeLevel.WEEK
    assert rt.start == local(2025, 11, 3)
    assert rt.end == local(2025, 11, 10) - timedelta(milliseconds=1)


def test_unknown_day_and_bad_week_resolve_to_none(calendar: ScheduleCalendar) -> None:
    for task in (
        Task(week="CW45", day="Someday", start="9:00", end="10:00"),
        Task(week="soon", day="Monday"),
        Task(week="TBD"),
        Task(),
    ):
        rt = resolve_task(task, calendar)
        assert rt.start is None
        assert rt.end is None


def test_legacy_table_used_only_without_week() -> None:
    cal = ScheduleCalendar(
        event_year=2025,
        timezone_offset=-5,
        event_dates={"Wednesday": date(2025, 11, 12)},
    )
    no_week = Task(day="Wednesday", start="14:00", end="15:00")
    assert resolve_boundary(no_week, Boundary.START, cal) == local(2025, 11, 12, 14, 0)

    day_only = Task(day="Wednesday")
    assert resolve_boundary(day_only, Boundary.START, cal) == local(2025, 11, 12)

    # Week context wins over the table.
    with_week = Task(week="CW45", day="Wednesday", start="14:00", end="15:00")
    assert resolve_boundary(with_week, Boundary.START, cal) == local(2025, 11, 5, 14, 0)

    # Days missing from the table stay unresolved.
    assert resolve_boundary(Task(day="Monday", start="9:00"), Boundary.START, cal) is None


def test_missing_week_without_table_is_unresolved(calendar: ScheduleCalendar) -> None:
    assert resolve_boundary(Task(day="Wednesday", start="14:00"), Boundary.START, calendar) is None


def test_resolve_boundary_accepts_string_boundary(calendar: ScheduleCalendar, workshop: Task) -> None:
    assert resolve_boundary(workshop, "end", calendar) == local(2025, 11, 5, 15, 30)
