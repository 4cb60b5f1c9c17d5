"""
Pydantic models for commands and timer status.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Commands
# =============================================================================

class CommandKind(str, Enum):
    PAUSE = "pause"
    NEXT = "next"
    RESTART = "restart"
    QUIT = "quit"
    HELP = "help"
    UNRECOGNIZED = "unrecognized"


# Longest period a "restart MM:SS" override may ask for
MAX_OVERRIDE_SECONDS = 24 * 60 * 60


# Commands that must wake the scheduler whatever it is doing
INTERRUPTING_KINDS = frozenset({
    CommandKind.PAUSE,
    CommandKind.NEXT,
    CommandKind.RESTART,
    CommandKind.QUIT,
})


class Command(BaseModel):
    """A single classified line of user input."""
    model_config = ConfigDict(frozen=True)

    kind: CommandKind = Field(CommandKind.UNRECOGNIZED, description="Classified command")
    text: str = Field("", description="Trimmed input line")
    override_seconds: int | None = Field(
        None, ge=0, le=MAX_OVERRIDE_SECONDS,
        description="Explicit period length from 'restart MM:SS'"
    )

    @property
    def interrupts(self) -> bool:
        """Whether this command wakes the scheduler outside acknowledgment mode."""
        return self.kind in INTERRUPTING_KINDS


# =============================================================================
# Status
# =============================================================================

class TimerStatus(BaseModel):
    """Snapshot of the period scheduler."""
    label: str
    remaining_seconds: int = Field(..., ge=0)
    remaining: str = Field(..., description="Remaining time as MM:SS")
    paused: bool = False
    awaiting_acknowledgment: bool = False
    completed_work_periods: int = Field(0, ge=0)
