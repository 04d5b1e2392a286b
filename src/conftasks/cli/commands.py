# src/conftasks/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import timedelta

from ..assignments.directory import search_people
from ..assignments.filters import all_unique_names, apply_filters, filter_user_tasks
from ..core.state import BoardState
from ..schedule.classifier import sort_by_start
from ..schedule.formatting import format_day_date, format_time_12h, format_week_range
from ..schedule.models import Bucket, Task, TimeLevel
from ..schedule.refresher import refresh_once
from ..schedule.resolver import classify_level

CommandHandler = Callable[[BoardState, list[str]], str]

logger = logging.getLogger(__name__)

BUCKET_TITLES = {
    Bucket.NOW: "NOW",
    Bucket.NEXT: "NEXT UP",
    Bucket.UPCOMING: "LATER TODAY",
    Bucket.FUTURE: "FUTURE",
    Bucket.PAST: "PAST",
}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /now, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: BoardState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."
        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def describe_task(task: Task, state: BoardState) -> str:
    """One display line: when, what, where, who."""
    cal = state.calendar
    level = classify_level(task)
    if level is TimeLevel.TIME:
        when = f"{format_day_date(task.week, task.day, cal) or task.day} {format_time_12h(task.start)}"
        if task.end:
            when += f"-{format_time_12h(task.end)}"
    elif level is TimeLevel.DAY:
        when = format_day_date(task.week, task.day, cal) or task.day or ""
    else:
        when = format_week_range(task.week, cal) or task.week or "unscheduled"

    line = f"[{when}] {task.title or '(untitled)'}"
    if task.location:
        line += f" @ {task.location}"
    people = [p for p in task.assignment_slots() if p]
    if people:
        line += f" ({', '.join(people)})"
    return line


def _render_list(title: str, tasks: Sequence[Task], state: BoardState) -> str:
    if not tasks:
        return f"{title}: nothing to show."
    lines = [f"{title} ({len(tasks)}):"]
    lines.extend(f"  {describe_task(t, state)}" for t in tasks)
    return "\n".join(lines)


def _next_window(state: BoardState) -> timedelta:
    return timedelta(hours=float(getattr(state.settings, "next_window_hours", 2.0)))


def cmd_help(state: BoardState, args: list[str]) -> str:
    return registry.build_help()


def cmd_now(state: BoardState, args: list[str]) -> str:
    """
    /now        -> timeline for everyone
    /now mine   -> timeline for the current user only
    """
    user_name = None
    if args and args[0].lower() == "mine":
        if not state.user_name:
            return "No user set. Use /whoami <name> first."
        user_name = state.user_name

    buckets = refresh_once(
        state,
        state.clock.now(),
        state.calendar,
        next_window=_next_window(state),
        user_name=user_name,
        directory=state,
    )

    sections = [
        _render_list(BUCKET_TITLES[b], buckets.bucket(b), state) for b in Bucket if buckets.bucket(b)
    ]
    if not sections:
        return "No scheduled tasks."
    return "\n\n".join(sections)


def cmd_mine(state: BoardState, args: list[str]) -> str:
    name = " ".join(args).strip() or state.user_name
    if not name:
        return "Usage: /mine <name> (or set a user with /whoami <name>)."
    tasks = sort_by_start(filter_user_tasks(state.tasks, name, state.people), state.calendar)
    return _render_list(f"Tasks for {name}", tasks, state)


def cmd_all(state: BoardState, args: list[str]) -> str:
    tasks = sort_by_start(apply_filters(state.tasks, state.filters, state.people), state.calendar)
    title = "Filtered tasks" if state.filters.has_active_filters else "All tasks"
    return _render_list(title, tasks, state)


def cmd_find(state: BoardState, args: list[str]) -> str:
    """
    /find key=value ...   -> set filters (week, day, location, team, person, search)
    /find some words      -> free-text search
    /find clear           -> drop all filters
    """
    if not args:
        return cmd_all(state, args)

    if len(args) == 1 and args[0].lower() == "clear":
        state.filters = state.filters.cleared()
        return "Filters cleared."

    filters = state.filters
    words: list[str] = []
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep:
            words.append(arg)
            continue
        try:
            filters = filters.with_filter(key.lower(), value.replace("_", " "))
        except KeyError:
            return f"Unknown filter: {key}. Use week, day, location, team, person or search."

    if words:
        filters = filters.with_filter("search", " ".join(words))

    state.filters = filters
    logger.debug("Filters set: %s", filters)
    return cmd_all(state, [])


def cmd_people(state: BoardState, args: list[str]) -> str:
    people = search_people(state.people, " ".join(args))
    if not people:
        return "No matching people."
    lines = [f"People ({len(people)}):"]
    for p in people:
        extra = ", ".join(x for x in (p.team, p.role, p.contact_for) if x)
        lines.append(f"  {p.name}" + (f" - {extra}" if extra else ""))
    return "\n".join(lines)


def cmd_names(state: BoardState, args: list[str]) -> str:
    names = all_unique_names(state.tasks)
    if not names:
        return "No names on the board."
    return f"Names ({len(names)}): " + ", ".join(names)


def cmd_status(state: BoardState, args: list[str]) -> str:
    """Counts from the last background refresh (if the refresher is running)."""
    if state.last_refresh is None or state.last_buckets is None:
        return "No background refresh yet."
    counts = ", ".join(f"{BUCKET_TITLES[b]}={len(state.last_buckets.bucket(b))}" for b in Bucket)
    return f"Last refresh {state.last_refresh.isoformat(timespec='seconds')}: {counts}"


def cmd_whoami(state: BoardState, args: list[str]) -> str:
    """
    /whoami         -> show current user
    /whoami <name>  -> set current user
    /whoami clear   -> forget current user
    """
    if not args:
        return f"Current user: {state.user_name}" if state.user_name else "No user set."
    name = " ".join(args).strip()
    if name.lower() == "clear":
        state.user_name = None
        return "User cleared."
    state.user_name = name
    return f"Current user set to {name}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("now", cmd_now, help_text="Timeline buckets: /now | /now mine.")
registry.register("mine", cmd_mine, help_text="Tasks assigned to you (or /mine <name>).")
registry.register("all", cmd_all, help_text="All tasks with the active filters applied.")
registry.register(
    "find", cmd_find, help_text="Filter: /find team=Staff day=Monday | /find words | /find clear."
)
registry.register("people", cmd_people, help_text="Search the directory: /people [query].")
registry.register("names", cmd_names, help_text="Everyone named on a task.")
registry.register("status", cmd_status, help_text="Bucket counts from the background refresh.")
registry.register("whoami", cmd_whoami, help_text="Show or set the current user.")
