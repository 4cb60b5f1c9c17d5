"""
Cue playback module.
Handles sound file lookup, platform audio players, and graceful fallback.
"""

import logging
import platform
import shutil
import subprocess
import sys
import threading
from enum import Enum
from pathlib import Path
from config import SOUNDS_DIR

logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    """Raised when a cue cannot be played."""
    pass


class Cue(str, Enum):
    END_OF_PERIOD = "end_of_period"
    REMINDER = "reminder"
    CONFIRMATION = "confirmation"


CUE_FILES: dict[Cue, str] = {
    Cue.END_OF_PERIOD: "lingeringbells.wav",
    Cue.REMINDER: "notify.wav",
    Cue.CONFIRMATION: "confirm.wav",
}

# Players tried in order on Linux; the first one installed wins
LINUX_PLAYERS = ["paplay", "aplay", "play"]

# Longest a single cue may play before the player is killed
PLAYER_TIMEOUT = 30


# =============================================================================
# Players
# =============================================================================

def find_player(system: str | None = None) -> list[str] | None:
    """Return the command prefix used to play a sound file, if any."""
    system = system or platform.system()

    if system == "Darwin":
        return ["afplay"] if shutil.which("afplay") else None

    if system == "Linux":
        for player in LINUX_PLAYERS:
            if shutil.which(player):
                return [player, "-q"] if player == "play" else [player]

    return None


def run_player(args: list[str], timeout: int = PLAYER_TIMEOUT) -> None:
    """Run a player to completion; a non-zero exit is an error."""
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout
        )

        if result.returncode != 0:
            error_msg = result.stderr.strip() or f"{args[0]} failed with code {result.returncode}"
            raise ExecutionError(error_msg)

    except subprocess.TimeoutExpired:
        raise ExecutionError(f"{args[0]} timed out after {timeout} seconds")
    except FileNotFoundError:
        raise ExecutionError(f"Command not found: {args[0]}")
    except OSError as e:
        raise ExecutionError(f"Failed to start {args[0]}: {e}")


def play_sound(path: Path) -> None:
    """Play a sound file, blocking until playback ends."""
    if not path.exists():
        raise ExecutionError(f"Sound file not found: {path}")

    if platform.system() == "Windows":
        import winsound
        try:
            winsound.PlaySound(str(path), winsound.SND_FILENAME)
        except RuntimeError as e:
            raise ExecutionError(f"Failed to play {path.name}: {e}")
        return

    player = find_player()
    if player is None:
        raise ExecutionError("No audio player found (tried afplay, paplay, aplay, play)")

    run_player(player + [str(path)])


def ring_bell() -> None:
    """Terminal bell, used when no sound can be played."""
    sys.stdout.write("\a")
    sys.stdout.flush()


# =============================================================================
# Cues
# =============================================================================

def cue_path(cue: Cue, sounds_dir: Path | None = None) -> Path:
    return Path(sounds_dir or SOUNDS_DIR) / CUE_FILES[cue]


def play_cue_now(cue: Cue) -> None:
    """
    Play the sound for a cue on the calling thread.

    Audio is cosmetic: any playback failure is logged and replaced by the
    terminal bell so the timer keeps running.
    """
    try:
        play_sound(cue_path(cue))
    except ExecutionError as e:
        logger.warning("Cue %s degraded to terminal bell: %s", cue.value, e)
        ring_bell()


def play_cue(cue: Cue) -> threading.Thread:
    """Play a cue on a short-lived background thread and return that thread."""
    thread = threading.Thread(target=play_cue_now, args=(cue,), name=f"cue-{cue.value}", daemon=True)
    thread.start()
    return thread
