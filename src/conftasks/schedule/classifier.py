# src/conftasks/schedule/classifier.py

"""
Temporal classification of tasks.

Every task is evaluated once against a single `now` instant. Predicates run in
fixed priority (NOW, NEXT, UPCOMING, FUTURE, PAST) and the first match wins.
Tasks with no resolvable boundary match nothing and are left out of every
bucket.

This module never reads the clock: callers pass `now` explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone

from .models import Bucket, ResolvedTask, ScheduleCalendar, Task, TimeLevel, TimelineBuckets
from .resolver import resolve_task
from .weeks import local_date

logger = logging.getLogger(__name__)

NEXT_WINDOW = timedelta(hours=2)

_SORT_FLOOR = datetime.min.replace(tzinfo=timezone.utc)


def _aware(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def _same_local_date(a: datetime, b: datetime, calendar: ScheduleCalendar) -> bool:
    return local_date(a, calendar) == local_date(b, calendar)


def is_happening_now(rt: ResolvedTask, now: datetime, calendar: ScheduleCalendar) -> bool:
    if rt.level is TimeLevel.TIME:
        if rt.start is None or rt.end is None:
            return False
        if not _same_local_date(rt.start, now, calendar):
            return False
        return rt.start <= now < rt.end

    if rt.level is TimeLevel.DAY:
        if rt.start is None:
            return False
        return _same_local_date(rt.start, now, calendar)

    if rt.start is None or rt.end is None:
        return False
    return rt.start <= now <= rt.end


def starts_within(rt: ResolvedTask, now: datetime, window: timedelta = NEXT_WINDOW) -> bool:
    """Time-level task starting in (now, now + window]."""
    if rt.level is not TimeLevel.TIME or rt.start is None:
        return False
    return now < rt.start <= now + window


def is_later_today(
    rt: ResolvedTask,
    now: datetime,
    calendar: ScheduleCalendar,
    window: timedelta = NEXT_WINDOW,
) -> bool:
    if rt.level is not TimeLevel.TIME or rt.start is None:
        return False
    if not _same_local_date(rt.start, now, calendar):
        return False
    return rt.start > now and not starts_within(rt, now, window)


def is_future(rt: ResolvedTask, now: datetime, calendar: ScheduleCalendar) -> bool:
    if rt.start is None:
        return False
    return rt.start > now and not _same_local_date(rt.start, now, calendar)


def is_past(rt: ResolvedTask, now: datetime) -> bool:
    if rt.end is None:
        return False
    return rt.end < now


def classify(
    rt: ResolvedTask,
    now: datetime,
    calendar: ScheduleCalendar,
    *,
    next_window: timedelta = NEXT_WINDOW,
) -> Bucket | None:
    """Bucket for one resolved task, or None when it matches no predicate."""
    now = _aware(now)
    if is_happening_now(rt, now, calendar):
        return Bucket.NOW
    if starts_within(rt, now, next_window):
        return Bucket.NEXT
    if is_later_today(rt, now, calendar, next_window):
        return Bucket.UPCOMING
    if is_future(rt, now, calendar):
        return Bucket.FUTURE
    if is_past(rt, now):
        return Bucket.PAST
    return None


def _start_key(rt: ResolvedTask) -> tuple[int, datetime]:
    # Unresolvable starts sort after everything else; sorted() keeps ties stable.
    if rt.start is None:
        return (1, _SORT_FLOOR)
    return (0, rt.start)


def sort_by_start(tasks: Iterable[Task], calendar: ScheduleCalendar) -> list[Task]:
    """Order tasks by resolved start boundary (stable, unresolvable last)."""
    resolved = [resolve_task(t, calendar) for t in tasks]
    return [rt.task for rt in sorted(resolved, key=_start_key)]


def group_tasks_by_time_status(
    tasks: Sequence[Task] | None,
    now: datetime,
    calendar: ScheduleCalendar,
    *,
    next_window: timedelta = NEXT_WINDOW,
) -> TimelineBuckets:
    """
    Partition tasks into NOW / NEXT / UPCOMING / FUTURE / PAST.

    Each bucket is sorted ascending by resolved start. Dropped tasks are only
    visible as the difference between len(tasks) and the result's total().
    """
    out = TimelineBuckets()
    if not tasks:
        return out

    now = _aware(now)
    grouped: dict[Bucket, list[ResolvedTask]] = {b: [] for b in Bucket}
    dropped = 0

    for task in tasks:
        rt = resolve_task(task, calendar)
        bucket = classify(rt, now, calendar, next_window=next_window)
        if bucket is None:
            dropped += 1
            continue
        grouped[bucket].append(rt)

    for bucket, items in grouped.items():
        items.sort(key=_start_key)
        out.bucket(bucket).extend(rt.task for rt in items)

    if dropped:
        logger.debug("Timeline pass dropped %d of %d tasks (unresolvable or unmatched)", dropped, len(tasks))

    return out


def recompute(
    tasks: Sequence[Task] | None,
    now: datetime,
    calendar: ScheduleCalendar,
    *,
    next_window: timedelta = NEXT_WINDOW,
) -> TimelineBuckets:
    """Entry point for caller-owned schedulers: one fresh classification pass."""
    return group_tasks_by_time_status(tasks, now, calendar, next_window=next_window)
