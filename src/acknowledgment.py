"""
Acknowledgment sources.
Decide how the user resumes the timer after a period ends.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from config import ConfigError
from signals import WakeSignal

logger = logging.getLogger(__name__)


class AcknowledgmentSource(ABC):
    """Something that blocks until the user acknowledges a finished period."""

    prompt = "press enter to resume"

    def open(self) -> None:
        """Acquire any resources (hooks, listeners) for the lifetime of the timer."""

    def close(self) -> None:
        """Release what open() acquired."""

    @abstractmethod
    def wait(self, context) -> None:
        """Block until acknowledged or cancelled."""

    def cancel(self) -> None:
        """Unblock a pending wait. Called when the user quits."""


class LineAcknowledgment(AcknowledgmentSource):
    """
    Any line of input acknowledges.

    Puts the context into acknowledgment mode so the input reader forwards
    otherwise unrecognized lines, then waits on the context's wake signal.
    Quitting raises that same signal, so cancel() has nothing to do.
    """

    def wait(self, context) -> None:
        context.awaiting_ack = True
        try:
            context.wake.wait()
        finally:
            context.awaiting_ack = False


class KeyPressAcknowledgment(AcknowledgmentSource):
    """
    A single global key press acknowledges.

    Keys arrive through on_key(), normally from a pynput keyboard listener
    started in open(). Only presses that happen while a wait is armed and
    that match the resume key count.
    """

    def __init__(self, resume_key: str = "f8", listener_factory=None):
        self.resume_key = resume_key.lower()
        self.prompt = f"press {self.resume_key.upper()} to resume"
        self._signal = WakeSignal()
        self._armed = False
        self._cancelled = False
        self._listener_factory = listener_factory
        self._listener = None

    def matches(self, key: Any) -> bool:
        """Whether a pynput key (or a plain key name) is the resume key."""
        if isinstance(key, str):
            name = key
        else:
            name = getattr(key, "char", None) or getattr(key, "name", None)
        return name is not None and name.lower() == self.resume_key

    def on_key(self, key: Any) -> None:
        if self._armed and self.matches(key):
            logger.debug("Resume key %s pressed", self.resume_key)
            self._signal.set()

    def open(self) -> None:
        factory = self._listener_factory or _pynput_listener
        self._listener = factory(self.on_key)
        self._listener.start()
        logger.info("Global key hook started, resume key is %s", self.resume_key)

    def close(self) -> None:
        if self._listener is not None:
            self._listener.stop()
            self._listener = None

    def wait(self, context) -> None:
        # Presses made before the period ended do not count
        self._signal.clear()
        if self._cancelled:
            return
        self._armed = True
        try:
            self._signal.wait()
        finally:
            self._armed = False

    def cancel(self) -> None:
        self._cancelled = True
        self._signal.set()


def _pynput_listener(on_press):
    """Build a global keyboard listener."""
    try:
        from pynput import keyboard
    except ImportError:
        raise ConfigError("Key acknowledgment needs pynput: pip install 'pomodoro-cli[keyhook]'")
    return keyboard.Listener(on_press=on_press)


def build_acknowledgment(mode: str, resume_key: str = "f8") -> AcknowledgmentSource:
    """Create the acknowledgment source for a configured mode."""
    if mode == "line":
        return LineAcknowledgment()
    if mode == "key":
        return KeyPressAcknowledgment(resume_key)
    raise ConfigError(f"Unknown acknowledgment mode '{mode}' (expected 'line' or 'key')")
