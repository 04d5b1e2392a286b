# src/conftasks/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds BoardState from the snapshot, starts the
background board refresh, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..logging_setup import setup_logging
from .background import start_refresher_in_background
from .console import run_console_loop

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info(
        "Starting %s (event year %s, UTC offset %sh)...",
        settings.app_name,
        settings.event_year,
        settings.timezone_offset,
    )

    state = create_initial_state(settings=settings)
    runner = start_refresher_in_background(state)
    try:
        run_console_loop(state)
    finally:
        if runner is not None:
            runner.stop()
            runner.join(timeout=5.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
