"""
Command input.
Reads lines from the user, classifies them, and wakes the scheduler.
"""

import logging
import re
import sys
from typing import TextIO

from schemas import MAX_OVERRIDE_SECONDS, Command, CommandKind

logger = logging.getLogger(__name__)

PAUSE = "pause"
NEXT = "next"
RESTART = "restart"
HELP = "help"
QUIT = "quit"

EXACT_COMMANDS: dict[str, CommandKind] = {
    PAUSE: CommandKind.PAUSE,
    NEXT: CommandKind.NEXT,
    QUIT: CommandKind.QUIT,
    HELP: CommandKind.HELP,
}

COMMAND_REFERENCE = f"""
[Commands]
{PAUSE} - halts the current period while keeping the time
{NEXT} - proceeds to the next period
{RESTART} (MM:SS) - restarts the current period with the preset time or optionally with a specific time formatted as "MM:SS"
{QUIT} - ends the timer and exits the program
{HELP} - displays this command reference
"""


# =============================================================================
# Parsing
# =============================================================================

def parse_duration_override(text: str) -> int | None:
    """
    Extract an explicit period length from a restart command.

    The first two groups of digits are read as minutes then seconds, so
    "restart 5:30" gives 330. Anything with fewer than two groups, or a
    length above MAX_OVERRIDE_SECONDS, gives None.
    """
    numbers = re.findall(r"\d+", text)
    if len(numbers) < 2:
        return None

    minutes, seconds = int(numbers[0]), int(numbers[1])
    total = minutes * 60 + seconds
    if total > MAX_OVERRIDE_SECONDS:
        return None
    return total


def parse_command(line: str) -> Command:
    """Classify one line of input."""
    text = line.strip()

    kind = EXACT_COMMANDS.get(text)
    if kind is not None:
        return Command(kind=kind, text=text)

    if RESTART in text:
        return Command(
            kind=CommandKind.RESTART,
            text=text,
            override_seconds=parse_duration_override(text),
        )

    return Command(kind=CommandKind.UNRECOGNIZED, text=text)


def print_command_reference() -> None:
    print(COMMAND_REFERENCE)


# =============================================================================
# Reader
# =============================================================================

class InputReader:
    """
    Blocking line reader feeding a TimerContext.

    Interrupting commands are always submitted. Other lines are submitted
    only while the scheduler waits for an acknowledgment, where any input
    resumes the timer. End of input counts as quit.
    """

    def __init__(self, context, stream: TextIO | None = None):
        self.context = context
        self.stream = stream if stream is not None else sys.stdin

    def run(self) -> None:
        while True:
            line = self.stream.readline()
            if line == "":
                logger.info("End of input, quitting")
                command = Command(kind=CommandKind.QUIT)
            else:
                command = parse_command(line)

            if command.kind is CommandKind.HELP:
                print_command_reference()
                continue

            if command.interrupts or self.context.awaiting_ack:
                self.context.submit(command)

            if command.kind is CommandKind.QUIT:
                break
