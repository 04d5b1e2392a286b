# src/conftasks/core/state.py

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..assignments.filters import TaskFilters
from ..schedule.models import Location, Person, ScheduleCalendar, Task, TimelineBuckets
from .ports import Clock


class SystemClock:
    """Wall clock. Only the outer layers use it; the core takes `now` as an argument."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass
class BoardState:
    # Settings object kept around for the console (/status etc.).
    settings: object
    calendar: ScheduleCalendar
    clock: Clock

    tasks: list[Task] = field(default_factory=list)
    people: list[Person] = field(default_factory=list)
    locations: list[Location] = field(default_factory=list)

    user_name: str | None = None
    filters: TaskFilters = field(default_factory=TaskFilters)

    # Written by the background refresher's sink.
    last_buckets: TimelineBuckets | None = None
    last_refresh: datetime | None = None

    # TaskSource / DirectorySource, so refresh_once can read straight from the state.
    def list_tasks(self) -> Sequence[Task]:
        return list(self.tasks)

    def list_people(self) -> Sequence[Person]:
        return list(self.people)
