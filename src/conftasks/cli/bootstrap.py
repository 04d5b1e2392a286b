# src/conftasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists,
- reads the normalized task/people snapshot produced by the sheet sync,
- wires everything into BoardState.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..config import get_settings
from ..core.ports import Clock
from ..core.state import BoardState, SystemClock
from ..schedule.models import Location, Person, Task

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Snapshot:
    tasks: list[Task] = field(default_factory=list)
    people: list[Person] = field(default_factory=list)
    locations: list[Location] = field(default_factory=list)


def _records(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    raw = data.get(key)
    if not isinstance(raw, list):
        return []
    return [r for r in raw if isinstance(r, dict)]


def load_snapshot(path: str | Path | None) -> Snapshot:
    """
    Read {"tasks": [...], "people": [...], "locations": [...]} from JSON.

    Missing or unreadable files give an empty snapshot (logged), so the board
    still starts.
    """
    if not path:
        return Snapshot()
    path = Path(path)
    if not path.exists():
        logger.warning("Snapshot not found: %s", path)
        return Snapshot()

    try:
        data = json.loads(path.read_text("utf-8"))
    except (OSError, ValueError):
        logger.exception("Failed to read snapshot from %s", path)
        return Snapshot()

    if not isinstance(data, dict):
        logger.warning("Snapshot %s is not a JSON object; ignoring", path)
        return Snapshot()

    snap = Snapshot(
        tasks=[Task.from_record(r) for r in _records(data, "tasks")],
        people=[p for p in (Person.from_record(r) for r in _records(data, "people")) if p.name],
        locations=[loc for loc in (Location.from_record(r) for r in _records(data, "locations")) if loc.place],
    )
    logger.info(
        "Loaded snapshot: %d tasks, %d people, %d locations from %s",
        len(snap.tasks),
        len(snap.people),
        len(snap.locations),
        path,
    )
    return snap


def create_initial_state(*, settings=None, clock: Clock | None = None) -> BoardState:
    """
    Create BoardState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    snap = load_snapshot(settings.snapshot_path)

    return BoardState(
        settings=settings,
        calendar=settings.calendar(),
        clock=clock or SystemClock(),
        tasks=snap.tasks,
        people=snap.people,
        locations=snap.locations,
        user_name=settings.user_name,
    )
