# src/conftasks/cli/console.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.state import BoardState
from .commands import registry as command_registry

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(state: BoardState) -> None:
    app_name = str(getattr(state.settings, "app_name", "conftasks"))
    logger.info("Console started (tasks=%d people=%d).", len(state.tasks), len(state.people))
    _print_ts(f"[{app_name}] Use /help for commands, /now for the timeline, /exit to quit.\n")

    while True:
        try:
            line = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, line)
            if reply is None:
                # Plain text is a shortcut for a free-text search.
                reply = command_registry.handle(state, f"/find {line}")
        except Exception:
            logger.exception("Command failed: %s", line)
            reply = "Command failed; see the log for details."

        print(reply)
