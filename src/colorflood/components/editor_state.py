from dataclasses import dataclass
from typing import Optional

from colorflood.components.color import Color


@dataclass(slots=True)
class EditorState:
    """Brush and target selection for the level editor."""
    target_color: Color
    selected_color: Optional[Color] = None
