"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/WorkoutTimer/settings.json

Only preferences live here.  A run in progress is never saved; quitting
the app ends it.

Usage::

    settings = load_settings()
    settings.target_seconds = 60
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "WorkoutTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

DEFAULT_TARGET_SECONDS = 45
TARGET_STEP_SECONDS = 5
MIN_TARGET_SECONDS = 5


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    target_seconds: int = DEFAULT_TARGET_SECONDS   # last picked target

    # ── feedback ──────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100
    notifications_enabled: bool = True

    # ── background ────────────────────────────────────────────────────
    keep_awake: bool = True

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 360
    window_height: int = 420
    always_on_top: bool = False


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            settings = Settings(**filtered)
            target = int(settings.target_seconds)
            # The picker only moves in whole steps.
            settings.target_seconds = max(MIN_TARGET_SECONDS, target - target % TARGET_STEP_SECONDS)
            return settings
    except (OSError, ValueError, TypeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
