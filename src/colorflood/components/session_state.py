"""Play state for a single flood session."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from colorflood.components.color import Color


class SessionStatus(Enum):
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def terminal(self) -> bool:
        return self is not SessionStatus.IN_PROGRESS


@dataclass(slots=True)
class SessionState:
    """Singleton component stored next to the session's Board."""
    target_color: Color
    moves_remaining: int
    status: SessionStatus = SessionStatus.IN_PROGRESS
    selected_color: Optional[Color] = None
