"""
Pomodoro Timer.
Alternates work and rest periods, reacting to user commands as they arrive.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable

from acknowledgment import AcknowledgmentSource, LineAcknowledgment
from config import NOTIFY_SECONDS, REST_SECONDS, WORK_SECONDS
from executor import Cue, play_cue
from notifier import Notifier
from schemas import Command, CommandKind, TimerStatus
from signals import WakeSignal

logger = logging.getLogger(__name__)


class PeriodLabel(str, Enum):
    WORK = "WORK"
    REST = "REST"

    def flipped(self) -> "PeriodLabel":
        return PeriodLabel.REST if self is PeriodLabel.WORK else PeriodLabel.WORK


@dataclass
class PeriodState:
    """Current period of the timer."""
    label: PeriodLabel = PeriodLabel.WORK
    # Seconds left when the period (re)starts; never negative
    remaining: float = 0.0
    is_paused: bool = False
    was_just_restarted: bool = False


@dataclass
class TimerContext:
    """
    State shared by the input reader and the period scheduler.

    The reader is the only writer of `command`; the scheduler reads it only
    after observing `wake`. `awaiting_ack` is written by the scheduler (via
    the line acknowledgment) and read by the reader.
    """
    acknowledgment: AcknowledgmentSource = field(default_factory=LineAcknowledgment)
    wake: WakeSignal = field(default_factory=WakeSignal)
    command: Command = field(default_factory=Command)
    awaiting_ack: bool = False

    def submit(self, command: Command) -> None:
        """Publish a command and wake the scheduler."""
        self.command = command
        self.wake.set()
        logger.debug("Submitted %s", command.kind.value)

        if command.kind is CommandKind.QUIT:
            self.acknowledgment.cancel()

    def quit(self) -> None:
        self.submit(Command(kind=CommandKind.QUIT, text="quit"))


# =============================================================================
# Formatting
# =============================================================================

def format_clock(moment: datetime) -> str:
    """Wall-clock time as h:mm:ss AM/PM."""
    return moment.strftime("%I:%M:%S %p").lstrip("0")


def format_duration(seconds: float) -> str:
    """Duration as MM:SS, with minutes allowed past 59."""
    total = max(0, int(seconds))
    minutes = total // 60
    secs = total % 60
    return f"{minutes:02d}:{secs:02d}"


# =============================================================================
# Scheduler
# =============================================================================

class PomodoroTimer:
    """
    Period scheduler.

    A single wait on the context's wake signal serves both purposes: it
    times out when the period ends and returns early when a command arrives.
    """

    def __init__(
        self,
        context: TimerContext,
        work_seconds: float = WORK_SECONDS,
        rest_seconds: float = REST_SECONDS,
        notify_seconds: float = NOTIFY_SECONDS,
        play_cue: Callable[[Cue], object] = play_cue,
    ):
        self.context = context
        self.durations = {
            PeriodLabel.WORK: work_seconds,
            PeriodLabel.REST: rest_seconds,
        }
        self.notify_seconds = notify_seconds
        self.play_cue = play_cue
        self.state = PeriodState(label=PeriodLabel.WORK, remaining=work_seconds)
        self.end_time: datetime | None = None
        self.awaiting_acknowledgment = False
        self.completed_work_periods = 0
        self.stopped = False
        self._pause_ack = LineAcknowledgment()

    def default_duration(self, label: PeriodLabel) -> float:
        return self.durations[label]

    @property
    def time_remaining(self) -> float:
        """Seconds left in the current period."""
        if self.awaiting_acknowledgment:
            return self.default_duration(self.state.label)
        if self.state.is_paused or self.end_time is None:
            return self.state.remaining
        return max(0.0, (self.end_time - datetime.now()).total_seconds())

    def get_status(self) -> TimerStatus:
        remaining = self.time_remaining
        return TimerStatus(
            label=self.state.label.value,
            remaining_seconds=int(remaining),
            remaining=format_duration(remaining),
            paused=self.state.is_paused,
            awaiting_acknowledgment=self.awaiting_acknowledgment,
            completed_work_periods=self.completed_work_periods,
        )

    def run(self) -> None:
        """Scheduler loop. Returns once a quit command has been observed."""
        state = self.state

        while not self.stopped:
            now = datetime.now()

            if state.is_paused:
                # keep label and the remaining time captured at pause
                state.is_paused = False
                verb = "Resumed"
            elif state.was_just_restarted:
                # keep label, remaining was set by the restart
                state.was_just_restarted = False
                verb = "Restarted"
            else:
                state.remaining = self.default_duration(state.label)
                verb = "Start"

            self.end_time = now + timedelta(seconds=state.remaining)
            self._announce(verb, now)

            if self.context.wake.wait(state.remaining):
                self._handle(self.context.command)
            else:
                self._end_period()

        print(f"Quitting timer ({self.completed_work_periods} work periods completed)")

    def _announce(self, verb: str, now: datetime) -> None:
        print(
            f"[{self.state.label.value}] {verb}: {format_clock(now)} | "
            f"End: {format_clock(self.end_time)} ({format_duration(self.state.remaining)})"
        )

    def _remaining_now(self) -> float:
        return max(0.0, (self.end_time - datetime.now()).total_seconds())

    def _handle(self, command: Command) -> None:
        state = self.state
        kind = command.kind

        if kind is CommandKind.PAUSE:
            self._pause()
        elif kind is CommandKind.NEXT:
            state.label = state.label.flipped()
        elif kind is CommandKind.RESTART:
            if command.override_seconds is not None:
                state.remaining = command.override_seconds
            else:
                state.remaining = self.default_duration(state.label)
            state.was_just_restarted = True
        elif kind is CommandKind.QUIT:
            self.stopped = True
        else:
            # Stray acknowledgment line: carry on with the same period
            state.remaining = self._remaining_now()
            state.is_paused = True

    def _pause(self) -> None:
        """Hold the period until any line of input arrives."""
        self.state.remaining = self._remaining_now()
        self.state.is_paused = True

        print("Period paused, press enter to resume ", end="", flush=True)
        self._pause_ack.wait(self.context)

        if self.context.command.kind is CommandKind.QUIT:
            self.stopped = True

    def _end_period(self) -> None:
        """Flip to the next period, then remind until the user acknowledges."""
        finished = self.state.label
        if finished is PeriodLabel.WORK:
            self.completed_work_periods += 1

        # Flip before waiting so the next announcement shows the new period
        self.state.label = finished.flipped()
        self.play_cue(Cue.END_OF_PERIOD)

        acknowledgment = self.context.acknowledgment
        print(f"Period end, {acknowledgment.prompt} ", end="", flush=True)

        notifier = Notifier(self.play_cue, self.notify_seconds)
        self.awaiting_acknowledgment = True
        notifier.start()
        try:
            acknowledgment.wait(self.context)
        finally:
            notifier.stop()
            self.awaiting_acknowledgment = False

        # Lines typed while waiting on a key press are not replayed as commands
        self.context.wake.clear()

        if self.context.command.kind is CommandKind.QUIT:
            self.stopped = True
            return

        self.play_cue(Cue.CONFIRMATION)
