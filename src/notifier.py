"""
Reminder notifier.
Replays a cue at a fixed interval while a finished period waits for the user.
"""

import logging
import threading
from typing import Callable

from executor import Cue
from signals import WakeSignal

logger = logging.getLogger(__name__)


class Notifier:
    """
    Plays the reminder cue every `interval` seconds until stopped.

    Each instance drives one period-end episode: start() spawns a short-lived
    thread and stop() tears it down. The stop request uses its own signal so
    it never competes with the scheduler's wake signal.
    """

    def __init__(self, play_cue: Callable[[Cue], object], interval: float):
        self.play_cue = play_cue
        self.interval = interval
        self._stop = WakeSignal()
        self._thread: threading.Thread | None = None
        self.cues_played = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="notifier", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop reminding. No cue is started after this returns."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.play_cue(Cue.REMINDER)
            except Exception:
                logger.exception("Reminder cue failed")
            self.cues_played += 1
