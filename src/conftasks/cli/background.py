# src/conftasks/cli/background.py

"""
Background board refresh for the console.

The console REPL blocks on input(), so the async refresher gets its own event
loop in a daemon thread. Each tick's buckets land on BoardState, where /status
reads them.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.state import BoardState
from ..schedule.models import TimelineBuckets
from ..schedule.refresher import run_board_refresher

logger = logging.getLogger(__name__)


class StateSink:
    """BucketSink that stores the latest classification on the board state."""

    def __init__(self, state: BoardState) -> None:
        self._state = state

    async def publish(self, buckets: TimelineBuckets, *, now: datetime) -> None:
        self._state.last_buckets = buckets
        self._state.last_refresh = now
        logger.debug("Board refreshed at %s (%d tasks bucketed)", now.isoformat(), buckets.total())


@dataclass
class RefresherRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Refresher loop already closed.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


async def _run_until_stopped(state: BoardState, stop_event: asyncio.Event) -> None:
    settings = state.settings
    refresher = asyncio.create_task(
        run_board_refresher(
            state,
            StateSink(state),
            state.clock,
            state.calendar,
            interval_seconds=float(getattr(settings, "refresh_interval_seconds", 60.0)),
            next_window=timedelta(hours=float(getattr(settings, "next_window_hours", 2.0))),
        )
    )
    try:
        await stop_event.wait()
    finally:
        refresher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await refresher


def start_refresher_in_background(state: BoardState) -> RefresherRunner | None:
    """Start the board refresher in a daemon thread; None when disabled (interval <= 0)."""
    interval = float(getattr(state.settings, "refresh_interval_seconds", 60.0))
    if interval <= 0:
        logger.info("Background refresh disabled.")
        return None

    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(_run_until_stopped(state, stop_event))
        finally:
            loop.close()

    t = threading.Thread(target=runner, name="conftasks-refresher", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Refresher thread did not initialize properly.")
        return None

    logger.info("Background refresh started (every %.0fs).", interval)
    return RefresherRunner(thread=t, loop=loop, stop_event=stop_event)
