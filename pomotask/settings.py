"""Application settings with JSON persistence.

Settings are stored at:
    ~/.pomotask/settings.json

Set ``POMOTASK_HOME`` to use another data directory.

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path

from .timer.engine import DurationConfig

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path(os.environ.get("POMOTASK_HOME", Path.home() / ".pomotask"))
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer (minutes) ───────────────────────────────────────────────
    work_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15
    cycles_per_long_break: int = 4

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 520
    window_height: int = 760

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"

    def duration_config(self) -> DurationConfig:
        return DurationConfig(
            work_minutes=self.work_minutes,
            short_break_minutes=self.short_break_minutes,
            long_break_minutes=self.long_break_minutes,
            cycles_per_long_break=self.cycles_per_long_break,
        )

    def with_durations(self, config: DurationConfig) -> Settings:
        return replace(
            self,
            work_minutes=config.work_minutes,
            short_break_minutes=config.short_break_minutes,
            long_break_minutes=config.long_break_minutes,
            cycles_per_long_break=config.cycles_per_long_break,
        )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
        return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
