"""
Pomodoro CLI
Work/rest interval timer driven by typed commands.
"""

import logging
import sys
import threading

from acknowledgment import build_acknowledgment
from commands import QUIT, InputReader
from config import ACK_MODE, LOG_LEVEL, RESUME_KEY, ConfigError
from pomodoro import PomodoroTimer, TimerContext


def resolve_log_level(name: str) -> int:
    """Numeric level for a level name, WARNING when the name is not a level."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=resolve_log_level(level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> int:
    configure_logging()

    try:
        acknowledgment = build_acknowledgment(ACK_MODE, RESUME_KEY)
        acknowledgment.open()
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 1

    context = TimerContext(acknowledgment=acknowledgment)
    timer = PomodoroTimer(context)
    reader = InputReader(context)

    print(f'Pomodoro Timer start, enter "{QUIT}" to end the timer')

    # The reader blocks on stdin and cannot be interrupted, so it must not
    # keep the process alive after Ctrl-C or a scheduler failure.
    reader_thread = threading.Thread(target=reader.run, name="input-reader", daemon=True)
    timer_thread = threading.Thread(target=timer.run, name="period-scheduler")

    try:
        reader_thread.start()
        timer_thread.start()
        # The scheduler decides when the run is over; the reader has already
        # returned by then unless the scheduler failed.
        timer_thread.join()
        if not timer.stopped:
            print("ERROR: timer stopped unexpectedly")
            return 1
        reader_thread.join()
    except KeyboardInterrupt:
        print()
        context.quit()
        timer_thread.join()
    finally:
        acknowledgment.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
