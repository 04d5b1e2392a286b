# src/conftasks/assignments/filters.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, fields, replace

from ..schedule.models import Person, Task

logger = logging.getLogger(__name__)

# Group-assignment sentinel: a slot containing this applies to every person.
EVERYONE = "everyone"

# Placeholder name used in the sheet for blocked slots.
BLOCKER = "blocker"

SEARCH_SEPARATOR = " "


def _lower(value: str | None) -> str:
    return (value or "").lower()


def get_user_team(user_name: str | None, directory: Sequence[Person] | None) -> str | None:
    """Team of the directory entry whose name matches exactly (case-insensitive)."""
    if not user_name or not directory:
        return None

    wanted = user_name.strip().lower()
    for person in directory:
        if person.name and person.name.strip().lower() == wanted:
            return person.team or None
    return None


def is_assigned_to_user(task: Task, user_name: str | None, directory: Sequence[Person] | None = None) -> bool:
    """
    True when the user is on the task:
    - directly (a slot equals the name),
    - via the "everyone" sentinel,
    - or via their team name sitting in a slot.
    """
    if not user_name:
        return False

    wanted = user_name.strip().lower()
    slots = [_lower(s) for s in task.assignment_slots()]

    if any(s == wanted for s in slots):
        return True
    if any(EVERYONE in s for s in slots):
        return True

    team = get_user_team(user_name, directory)
    if team:
        team_l = team.strip().lower()
        return any(s == team_l for s in slots)
    return False


def filter_user_tasks(
    tasks: Iterable[Task] | None,
    user_name: str | None,
    directory: Sequence[Person] | None = None,
) -> list[Task]:
    if not tasks or not user_name:
        return []
    return [t for t in tasks if is_assigned_to_user(t, user_name, directory)]


def matches_person_query(task: Task, query: str | None, directory: Sequence[Person] | None = None) -> bool:
    """Person filter: substring on names, plus "everyone" and team matches."""
    if not query:
        return True

    query_l = query.lower()
    team = get_user_team(query, directory)
    team_l = team.lower() if team else None

    for slot in task.assignment_slots():
        if not slot:
            continue
        slot_l = slot.lower()
        if query_l in slot_l or EVERYONE in slot_l:
            return True
        if team_l is not None and slot_l == team_l:
            return True
    return False


def searchable_text(task: Task) -> str:
    """Descriptive fields joined into one lower-cased string for free-text search."""
    parts = [task.week, task.title, task.notes, task.location, task.team, *task.assignment_slots()]
    return SEARCH_SEPARATOR.join(p or "" for p in parts).lower()


@dataclass(frozen=True, slots=True)
class TaskFilters:
    """
    Active filter set for list views. Empty string means "not filtering".
    """

    week: str = ""
    day: str = ""
    location: str = ""
    team: str = ""
    person: str = ""
    search: str = ""

    @property
    def has_active_filters(self) -> bool:
        return any(getattr(self, f.name) != "" for f in fields(self))

    def with_filter(self, key: str, value: str | None) -> TaskFilters:
        if key not in {f.name for f in fields(self)}:
            raise KeyError(f"Unknown filter: {key}")
        return replace(self, **{key: value or ""})

    def cleared(self) -> TaskFilters:
        return TaskFilters()


def matches_filters(task: Task, filters: TaskFilters, directory: Sequence[Person] | None = None) -> bool:
    if filters.week and task.week != filters.week:
        return False
    if filters.day and task.day != filters.day:
        return False
    if filters.location and task.location != filters.location:
        return False
    if filters.team and task.team != filters.team:
        return False
    if filters.person and not matches_person_query(task, filters.person, directory):
        return False
    if filters.search and filters.search.lower() not in searchable_text(task):
        return False
    return True


def apply_filters(
    tasks: Iterable[Task] | None,
    filters: TaskFilters,
    directory: Sequence[Person] | None = None,
) -> list[Task]:
    if not tasks:
        return []
    out = [t for t in tasks if matches_filters(t, filters, directory)]
    logger.debug("apply_filters kept %d tasks (filters=%s)", len(out), filters)
    return out


def all_unique_names(tasks: Iterable[Task] | None) -> list[str]:
    """Every distinct person named in a slot, sorted, without blanks or "Blocker"."""
    if not tasks:
        return []
    names: set[str] = set()
    for task in tasks:
        for slot in task.assignment_slots():
            if slot:
                names.add(slot.strip())
    return sorted(n for n in names if n and n.lower() != BLOCKER)
