# src/conftasks/core/ports.py

"""
Ports (interfaces) used around the schedule core.

The core itself takes plain lists and an explicit `now`; these Protocols are
what the caller-side pieces (refresh loop, console) depend on, so data sources
and clocks stay swappable in tests.
"""

from __future__ import annotations

from datetime import datetime
from typing import Awaitable, Protocol, Sequence

from ..schedule.models import Person, Task, TimelineBuckets


class Clock(Protocol):
    """Source of the current instant (timezone-aware)."""
    def now(self) -> datetime: ...


class TaskSource(Protocol):
    """Whatever already holds normalized task records (sheet sync, JSON snapshot, ...)."""
    def list_tasks(self) -> Sequence[Task]: ...


class DirectorySource(Protocol):
    """People directory; used to resolve a user's team for "mine" views."""
    def list_people(self) -> Sequence[Person]: ...


class BucketSink(Protocol):
    """
    Receives each fresh classification.

    The sink decides what "display" means (console, web view, test recorder).
    """

    def publish(self, buckets: TimelineBuckets, *, now: datetime) -> Awaitable[None]: ...
