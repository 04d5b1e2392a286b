# src/conftasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- The schedule core never reads settings itself: callers build a
  ScheduleCalendar from them and pass it in.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from .schedule.models import ScheduleCalendar
from .schedule.weeks import DAY_OFFSETS

ENV_PREFIX = "CONFTASKS"

logger = logging.getLogger(__name__)

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r (using %s)", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r (using %s)", name, raw, default)
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def parse_event_dates(raw: str | None) -> dict[str, date]:
    """
    Parse the legacy day->date table: "Monday=2026-11-09, Tuesday=2026-11-10".

    Unknown day names and malformed dates are skipped.
    """
    out: dict[str, date] = {}
    if not raw:
        return out
    for part in raw.split(","):
        if "=" not in part:
            continue
        day, _, value = part.partition("=")
        day = day.strip()
        if day not in DAY_OFFSETS:
            logger.warning("Ignoring legacy event date for unknown day %r", day)
            continue
        try:
            out[day] = date.fromisoformat(value.strip())
        except ValueError:
            logger.warning("Ignoring malformed legacy event date %r for %s", value, day)
    return out


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    snapshot_path: Path

    # ---- Event calendar ----
    event_year: int
    timezone_offset: int
    event_dates: dict[str, date]

    # ---- Board ----
    refresh_interval_seconds: float
    next_window_hours: float
    user_name: str | None

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Conference Tasks")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/conftasks"))
        snapshot_path = _env_path(_k("SNAPSHOT_PATH"), data_dir / "snapshot.json")

        event_year = _env_int(_k("EVENT_YEAR"), 2026)
        # Hours from UTC, e.g. -5 for EST. Applied as a magnitude.
        timezone_offset = _env_int(_k("TIMEZONE_OFFSET"), -5)
        event_dates = parse_event_dates(os.getenv(_k("EVENT_DATES")))

        refresh_interval_seconds = _env_float(_k("REFRESH_INTERVAL_SECONDS"), 60.0)
        next_window_hours = _env_float(_k("NEXT_WINDOW_HOURS"), 2.0)
        user_name = _env(_k("USER_NAME"), "").strip() or None

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            snapshot_path=snapshot_path,
            event_year=event_year,
            timezone_offset=timezone_offset,
            event_dates=event_dates,
            refresh_interval_seconds=refresh_interval_seconds,
            next_window_hours=next_window_hours,
            user_name=user_name,
        )

    def calendar(self) -> ScheduleCalendar:
        return ScheduleCalendar(
            event_year=self.event_year,
            timezone_offset=self.timezone_offset,
            event_dates=dict(self.event_dates) or None,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
