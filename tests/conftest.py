# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from conftasks.core.state import BoardState
from conftasks.schedule.models import Person, ScheduleCalendar, Task

from .fakes import EVENT_OFFSET_HOURS, FakeClock, local


@pytest.fixture()
def calendar() -> ScheduleCalendar:
    return ScheduleCalendar(event_year=2025, timezone_offset=-EVENT_OFFSET_HOURS)


@pytest.fixture()
def directory() -> list[Person]:
    return [
        Person(name="Alice Smith", team="Logistics", role="Coordinator"),
        Person(name="Bob", team="Staff", contact_for="Badges"),
        Person(name="Ann", team="Finance"),
    ]


@pytest.fixture()
def workshop() -> Task:
    return Task(week="CW45", day="Wednesday", start="14:00", end="15:30", title="Workshop", lead="Alice Smith")


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with BoardState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Test Board",
        log_level="DEBUG",
        data_dir=tmp_path,
        snapshot_path=tmp_path / "snapshot.json",
        event_year=2025,
        timezone_offset=-EVENT_OFFSET_HOURS,
        event_dates={},
        refresh_interval_seconds=0.01,
        next_window_hours=2.0,
        user_name=None,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, calendar: ScheduleCalendar, directory: list[Person], workshop: Task) -> BoardState:
    """BoardState wired with a fixed clock: Wednesday Nov 5 2025, 13:00 local."""
    return BoardState(
        settings=settings,
        calendar=calendar,
        clock=FakeClock(local(2025, 11, 5, 13, 0)),
        tasks=[
            workshop,
            Task(week="CW45", title="Setup week", lead="Everyone"),
            Task(week="CW45", day="Friday", title="Teardown", team="Staff", lead="Staff"),
            Task(week="CW44", day="Monday", start="9:00", end="10:00", title="Kickoff", lead="Bob"),
        ],
        people=list(directory),
    )
