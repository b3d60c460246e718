from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from colorflood.components.session_state import SessionStatus


class MoveOutcome(Enum):
    APPLIED = auto()
    NO_CHANGE = auto()
    INVALID = auto()


@dataclass(frozen=True, slots=True)
class MoveResult:
    """What a call to ``GameSession.apply_move`` did.

    ``reason`` is set for INVALID and NO_CHANGE outcomes.
    """
    outcome: MoveOutcome
    status: SessionStatus
    cells_changed: int
    moves_remaining: int
    reason: Optional[str] = None
