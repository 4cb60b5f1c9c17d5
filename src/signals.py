"""
Wake signal.
An auto-resetting binary event used to interrupt a timed wait early.
"""

import threading


class WakeSignal:
    """
    Binary signal that clears itself when a wait observes it.

    Unlike threading.Event, a successful wait consumes the signal, so the
    next wait always blocks until the signal is raised again.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._flag = False

    def set(self) -> None:
        """Raise the signal. Raising an already raised signal is a no-op."""
        with self._cond:
            self._flag = True
            self._cond.notify_all()

    def clear(self) -> None:
        """Drop a pending raise without waiting."""
        with self._cond:
            self._flag = False

    def is_set(self) -> bool:
        with self._cond:
            return self._flag

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until the signal is raised or the timeout elapses.

        Returns True if the signal was raised, in which case it is cleared
        before returning. A timeout of None waits forever.
        """
        with self._cond:
            signalled = self._cond.wait_for(lambda: self._flag, timeout)
            if signalled:
                self._flag = False
            return signalled
