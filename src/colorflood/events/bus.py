from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so handlers bound to short-lived objects still fire.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_COLOR_SELECTED = "color_selected"    # payload: color=Color
EVENT_CELL_CLICK = "cell_click"            # payload: row, col
EVENT_COLOR_REJECTED = "color_rejected"    # payload: color, reason=str


# ============================================================================
# MOVES & BOARD
# ============================================================================
EVENT_MOVE_APPLIED = "move_applied"        # payload: row, col, color=Color, cells_changed=int, moves_remaining=int
EVENT_MOVE_NO_CHANGE = "move_no_change"    # payload: row, col, color=Color
EVENT_MOVE_REJECTED = "move_rejected"      # payload: row, col, color=Color|None, reason=str
EVENT_BOARD_CHANGED = "board_changed"      # payload: reason=str, positions=list[(r,c)]


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_SESSION_STARTED = "session_started"  # payload: session=GameSession
EVENT_SESSION_STATUS_CHANGED = "session_status_changed"  # payload: previous_status=SessionStatus, new_status=SessionStatus
EVENT_GAME_WON = "game_won"                # payload: moves_remaining=int
EVENT_GAME_LOST = "game_lost"              # payload: target_color=Color
EVENT_LEVEL_LOADED = "level_loaded"        # payload: source=str, target_color=Color


# ============================================================================
# EDITOR
# ============================================================================
EVENT_EDITOR_CELL_PAINTED = "editor_cell_painted"      # payload: row, col, color=Color
EVENT_EDITOR_CLEARED = "editor_cleared"                # payload: None
EVENT_EDITOR_TARGET_CHANGED = "editor_target_changed"  # payload: color=Color
EVENT_EDITOR_SAVE_REJECTED = "editor_save_rejected"    # payload: reason=str
EVENT_LEVEL_SAVED = "level_saved"                      # payload: timestamp=str
