# src/conftasks/schedule/refresher.py

"""
Board refresher.

A small polling loop owned by the caller, not by the classifier:
- reads the current task list from a TaskSource,
- optionally keeps one user's tasks (teams come from a DirectorySource),
- takes one `now` from the injected Clock,
- runs a fresh classification pass,
- hands the buckets to a BucketSink.

To stop the refresher, cancel the coroutine/task.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta

from ..assignments.filters import filter_user_tasks
from ..core.ports import BucketSink, Clock, DirectorySource, TaskSource
from .classifier import NEXT_WINDOW, recompute
from .models import ScheduleCalendar, TimelineBuckets

logger = logging.getLogger(__name__)


def refresh_once(
    source: TaskSource,
    now: datetime,
    calendar: ScheduleCalendar,
    *,
    next_window: timedelta = NEXT_WINDOW,
    user_name: str | None = None,
    directory: DirectorySource | None = None,
) -> TimelineBuckets:
    """
    One classification pass at `now`.

    With a user_name only that user's tasks are bucketed; the directory (if
    any) supplies team membership for the assignment check.
    """
    tasks = list(source.list_tasks())
    if user_name:
        people = list(directory.list_people()) if directory is not None else None
        tasks = filter_user_tasks(tasks, user_name, people)

    buckets = recompute(tasks, now, calendar, next_window=next_window)

    dropped = len(tasks) - buckets.total()
    if dropped:
        logger.info("Refresh at %s: %d tasks not bucketed", now.isoformat(), dropped)
    return buckets


async def run_board_refresher(
    source: TaskSource,
    sink: BucketSink,
    clock: Clock,
    calendar: ScheduleCalendar,
    *,
    interval_seconds: float = 60.0,
    next_window: timedelta = NEXT_WINDOW,
    user_name: str | None = None,
    directory: DirectorySource | None = None,
) -> None:
    """
    Re-classify every interval_seconds.

    Source or sink failures are logged and the next tick retries; only
    cancellation ends the loop.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while True:
        now = clock.now()
        try:
            buckets = refresh_once(
                source,
                now,
                calendar,
                next_window=next_window,
                user_name=user_name,
                directory=directory,
            )
        except Exception:
            logger.exception("Board refresh failed")
            buckets = None

        if buckets is not None:
            try:
                await sink.publish(buckets, now=now)
            except Exception:
                logger.exception("Publishing buckets failed")

        await asyncio.sleep(sleep_s)
