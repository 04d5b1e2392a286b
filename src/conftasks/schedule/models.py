# src/conftasks/schedule/models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import StrEnum
from typing import Any

MAX_SUPPORTS = 5


class TimeLevel(StrEnum):
    """Granularity at which a task's schedule is known."""

    TIME = "time"
    DAY = "day"
    WEEK = "week"


class Boundary(StrEnum):
    START = "start"
    END = "end"


class Bucket(StrEnum):
    """
    Temporal state of a task relative to "now".

    Declaration order is the classifier's priority order.
    """

    NOW = "now"
    NEXT = "next"
    UPCOMING = "upcoming"
    FUTURE = "future"
    PAST = "past"


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


@dataclass(frozen=True, slots=True)
class Task:
    """
    One schedule row.

    Records arrive already normalized (24h times, trimmed text); empty strings
    are stored as None so presence checks stay simple. `supports` is
    positional (support1..support5), so blank columns are kept as None.
    """

    week: str | None = None
    day: str | None = None
    start: str | None = None
    end: str | None = None

    title: str | None = None
    location: str | None = None
    team: str | None = None
    lead: str | None = None
    supports: tuple[str | None, ...] = ()
    notes: str | None = None

    def __post_init__(self) -> None:
        if len(self.supports) > MAX_SUPPORTS:
            raise ValueError(f"At most {MAX_SUPPORTS} supports allowed, got {len(self.supports)}")

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Task:
        if "supports" in raw and raw["supports"] is not None:
            supports_any = list(raw["supports"])
        else:
            supports_any = [raw.get(f"support{i}") for i in range(1, MAX_SUPPORTS + 1)]

        # Positional: an empty support1 stays an empty slot ahead of support2.
        supports = tuple(_clean(v) for v in supports_any[:MAX_SUPPORTS])

        return cls(
            week=_clean(raw.get("week")),
            day=_clean(raw.get("day")),
            start=_clean(raw.get("start")),
            end=_clean(raw.get("end")),
            title=_clean(raw.get("title", raw.get("task"))),
            location=_clean(raw.get("location")),
            team=_clean(raw.get("team")),
            lead=_clean(raw.get("lead")),
            supports=supports,
            notes=_clean(raw.get("notes")),
        )

    def assignment_slots(self) -> tuple[str | None, ...]:
        """Lead + 5 support positions (missing ones padded with None)."""
        padded = list(self.supports) + [None] * (MAX_SUPPORTS - len(self.supports))
        return (self.lead, *padded)


@dataclass(frozen=True, slots=True)
class Person:
    name: str
    team: str | None = None
    role: str | None = None
    contact_for: str | None = None
    phone: str | None = None
    email: str | None = None

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Person:
        def pick(*keys: str) -> str | None:
            for k in keys:
                v = _clean(raw.get(k))
                if v is not None:
                    return v
            return None

        return cls(
            name=pick("name", "Name") or "",
            team=pick("team", "Team"),
            role=pick("role", "Role"),
            contact_for=pick("contact_for", "Contact for?"),
            phone=pick("phone", "Phone"),
            email=pick("email", "Email"),
        )


@dataclass(frozen=True, slots=True)
class Location:
    place: str
    notes: str | None = None

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Location:
        return cls(
            place=_clean(raw.get("place", raw.get("Place"))) or "",
            notes=_clean(raw.get("notes", raw.get("Instructions/Notes"))),
        )


@dataclass(frozen=True, slots=True)
class ScheduleCalendar:
    """
    Event calendar settings shared by the resolvers.

    timezone_offset is applied as a magnitude: local wall time + |offset| hours
    gives UTC. That is right for events west of UTC only.
    """

    event_year: int
    timezone_offset: int = 0
    event_dates: Mapping[str, date] | None = None

    @property
    def offset(self) -> timedelta:
        return timedelta(hours=abs(self.timezone_offset))


@dataclass(frozen=True, slots=True)
class DateRange:
    start: datetime
    end: datetime


# ---- Tagged schedule variants (built once per task by resolver.schedule_of) ----


@dataclass(frozen=True, slots=True)
class TimeSlot:
    task: Task
    day: str
    start: str
    week: str | None = None
    end: str | None = None

    level = TimeLevel.TIME


@dataclass(frozen=True, slots=True)
class DaySlot:
    task: Task
    day: str
    week: str | None = None

    level = TimeLevel.DAY


@dataclass(frozen=True, slots=True)
class WeekSlot:
    task: Task
    week: str | None = None

    level = TimeLevel.WEEK


Schedule = TimeSlot | DaySlot | WeekSlot


@dataclass(frozen=True, slots=True)
class ResolvedTask:
    """A task with both boundaries resolved to UTC instants (or None)."""

    task: Task
    schedule: Schedule
    start: datetime | None
    end: datetime | None

    @property
    def level(self) -> TimeLevel:
        return self.schedule.level


@dataclass(slots=True)
class TimelineBuckets:
    now: list[Task] = field(default_factory=list)
    next: list[Task] = field(default_factory=list)
    upcoming: list[Task] = field(default_factory=list)
    future: list[Task] = field(default_factory=list)
    past: list[Task] = field(default_factory=list)

    def bucket(self, name: Bucket) -> list[Task]:
        return getattr(self, name.value)

    def as_dict(self) -> dict[str, list[Task]]:
        return {b.value: list(self.bucket(b)) for b in Bucket}

    def total(self) -> int:
        return sum(len(self.bucket(b)) for b in Bucket)
