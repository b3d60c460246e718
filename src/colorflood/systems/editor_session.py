from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Sequence

from esper import World

from colorflood.components.board import Board
from colorflood.components.color import Color, require_palette_color
from colorflood.components.editor_state import EditorState
from colorflood.components.level_spec import LevelSpec
from colorflood.constants import EDITOR_DEFAULT_TARGET, EDITOR_PALETTE, GRID_COLS, GRID_ROWS
from colorflood.errors import InvalidColor, InvalidLevelSpec
from colorflood.events.bus import (
    EventBus,
    EVENT_EDITOR_CELL_PAINTED,
    EVENT_EDITOR_CLEARED,
    EVENT_EDITOR_SAVE_REJECTED,
    EVENT_EDITOR_TARGET_CHANGED,
    EVENT_LEVEL_SAVED,
)
from colorflood.persistence.level_store import LevelStore


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EditorSession:
    """Paints a custom board and hands it to storage as a LevelSpec."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        palette: Sequence[Color] = EDITOR_PALETTE,
        target_color: Color = EDITOR_DEFAULT_TARGET,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.palette = tuple(palette)
        self._clock = clock
        target = require_palette_color(target_color, self.palette)
        self.editor_entity = self.world.create_entity(
            Board.empty(rows, cols),
            EditorState(target_color=target),
        )

    @property
    def board(self) -> Board:
        return self._board().copy()

    @property
    def target_color(self) -> Color:
        return self._state().target_color

    @property
    def selected_color(self) -> Color | None:
        return self._state().selected_color

    def select_color(self, color: Color | str) -> Color:
        chosen = require_palette_color(color, self.palette)
        self._state().selected_color = chosen
        return chosen

    def select_target_color(self, color: Color | str) -> Color:
        chosen = require_palette_color(color, self.palette)
        self._state().target_color = chosen
        self.event_bus.emit(EVENT_EDITOR_TARGET_CHANGED, color=chosen)
        return chosen

    def paint(self, row: int, col: int) -> None:
        board = self._board()
        board.check_bounds(row, col)
        color = self._state().selected_color
        if color is None:
            raise InvalidColor("Select a color before painting")
        board.set(row, col, color)
        self.event_bus.emit(EVENT_EDITOR_CELL_PAINTED, row=row, col=col, color=color)

    def clear(self) -> None:
        board = self._board()
        self.world.add_component(self.editor_entity, Board.empty(board.rows, board.cols))
        self.event_bus.emit(EVENT_EDITOR_CLEARED)

    def build_level(self, *, timestamp: str | None = None) -> LevelSpec:
        """Validate the painted board and turn it into a LevelSpec.

        Raises InvalidLevelSpec when the board is empty, lacks the target
        color, or still has unpainted cells.
        """
        board = self._board()
        target = self._state().target_color
        if board.is_empty():
            raise InvalidLevelSpec("Board is empty")
        if not board.contains_color(target):
            raise InvalidLevelSpec(f"Target color '{target.value}' must appear on the board")
        return LevelSpec.from_board(board, target, palette=self.palette, timestamp=timestamp)

    def save(self, store: LevelStore) -> LevelSpec:
        timestamp = self._clock().isoformat()
        try:
            level = self.build_level(timestamp=timestamp)
        except InvalidLevelSpec as exc:
            self.event_bus.emit(EVENT_EDITOR_SAVE_REJECTED, reason=str(exc))
            raise
        store.save(level)
        self.event_bus.emit(EVENT_LEVEL_SAVED, timestamp=timestamp)
        return level

    def _board(self) -> Board:
        return self.world.component_for_entity(self.editor_entity, Board)

    def _state(self) -> EditorState:
        return self.world.component_for_entity(self.editor_entity, EditorState)
