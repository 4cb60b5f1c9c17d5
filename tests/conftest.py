"""Shared fixtures for scheduler tests."""
import threading
import time

import pytest

from pomodoro import PomodoroTimer, TimerContext


def wait_until(predicate, timeout=3.0, interval=0.01):
    """Poll until predicate() is truthy; fail the test on timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return
        time.sleep(interval)
    raise AssertionError("condition not met within %.1fs" % timeout)


class CueRecorder:
    """Stands in for executor.play_cue and remembers every cue."""

    def __init__(self):
        self.cues = []
        self._lock = threading.Lock()

    def __call__(self, cue):
        with self._lock:
            self.cues.append(cue)

    def count(self, cue):
        with self._lock:
            return self.cues.count(cue)


class RunningTimer:
    """A PomodoroTimer running on its own thread."""

    def __init__(self, context, timer):
        self.context = context
        self.timer = timer
        self.thread = threading.Thread(target=timer.run, daemon=True)

    def start(self):
        self.thread.start()
        wait_until(lambda: self.timer.end_time is not None)
        return self

    def stop(self, timeout=2.0):
        self.context.quit()
        self.thread.join(timeout)
        return not self.thread.is_alive()


@pytest.fixture
def cues():
    return CueRecorder()


@pytest.fixture
def make_timer(cues):
    """Build and start a timer; anything left running is quit at teardown."""
    running = []

    def factory(work=5.0, rest=3.0, notify=5.0, context=None):
        context = context or TimerContext()
        timer = PomodoroTimer(
            context,
            work_seconds=work,
            rest_seconds=rest,
            notify_seconds=notify,
            play_cue=cues,
        )
        handle = RunningTimer(context, timer).start()
        running.append(handle)
        return handle

    yield factory

    for handle in running:
        if handle.thread.is_alive():
            handle.stop()
