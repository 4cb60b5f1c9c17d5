"""
Configuration module for the Pomodoro timer.
Handles environment loading, period durations, and acknowledgment settings.
"""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class ConfigError(Exception):
    """Raised when a configured option cannot be honoured at start-up."""
    pass


def _read_seconds(name: str, default: int) -> int:
    """Read a positive whole number of seconds from the environment."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError:
        value = 0

    if value <= 0:
        print(f"ERROR: {name} must be a positive whole number of seconds, got '{raw}'.")
        sys.exit(1)

    return value


# Period durations in seconds
WORK_SECONDS = _read_seconds("POMODORO_WORK_SECONDS", 25 * 60)
REST_SECONDS = _read_seconds("POMODORO_REST_SECONDS", 5 * 60)

# Interval between reminder cues while a finished period waits for the user
NOTIFY_SECONDS = _read_seconds("POMODORO_NOTIFY_SECONDS", 15)

# How a finished period is acknowledged: "line" (enter) or "key" (global hook)
ACK_MODE = os.getenv("POMODORO_ACK_MODE", "line").strip().lower()
RESUME_KEY = os.getenv("POMODORO_RESUME_KEY", "f8").strip().lower()

# Cue sound files
SOUNDS_DIR = Path(os.getenv("POMODORO_SOUNDS_DIR", Path.cwd() / "sounds")).expanduser()

LOG_LEVEL = os.getenv("POMODORO_LOG_LEVEL", "WARNING").strip().upper()
