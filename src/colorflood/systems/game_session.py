from __future__ import annotations

from typing import Sequence

from esper import World

from colorflood.components.board import Board
from colorflood.components.color import Color, require_palette_color
from colorflood.components.level_spec import LevelSpec
from colorflood.components.move_result import MoveOutcome, MoveResult
from colorflood.components.session_state import SessionState, SessionStatus
from colorflood.constants import MOVE_BUDGET, PLAY_PALETTE
from colorflood.errors import InvalidColor
from colorflood.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_CELL_CLICK,
    EVENT_COLOR_REJECTED,
    EVENT_COLOR_SELECTED,
    EVENT_GAME_LOST,
    EVENT_GAME_WON,
    EVENT_LEVEL_LOADED,
    EVENT_MOVE_APPLIED,
    EVENT_MOVE_NO_CHANGE,
    EVENT_MOVE_REJECTED,
    EVENT_SESSION_STARTED,
    EVENT_SESSION_STATUS_CHANGED,
)
from colorflood.systems.flood_fill import fill_positions


class GameSession:
    """Plays one level: applies flood moves, spends the budget, decides win or loss.

    The session keeps its Board and SessionState on a single entity of the
    world. Callers either use ``apply_move`` directly or drive the session
    through the event bus with ``color_selected`` followed by ``cell_click``.
    Each accepted move is charged before the win check, and a win takes
    priority over running out of moves.

    Only the most recently started session on a bus answers input: a new
    session announces itself with ``session_started`` and older ones detach.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        level: LevelSpec,
        *,
        move_budget: int = MOVE_BUDGET,
        palette: Sequence[Color] = PLAY_PALETTE,
    ) -> None:
        if move_budget < 0:
            raise ValueError("move_budget must be non-negative")
        self.world = world
        self.event_bus = event_bus
        self.palette = tuple(palette)
        self.move_budget = move_budget
        self.session_entity = self.world.create_entity()
        self._level = level
        self._install(level)
        self.event_bus.emit(EVENT_SESSION_STARTED, session=self)
        self.event_bus.subscribe(EVENT_COLOR_SELECTED, self.on_color_selected)
        self.event_bus.subscribe(EVENT_CELL_CLICK, self.on_cell_click)
        self.event_bus.subscribe(EVENT_SESSION_STARTED, self.on_session_started)
        self.attached = True

    # Read-only views ---------------------------------------------------------

    @property
    def board(self) -> Board:
        """A copy of the current board; mutating it does not affect the session."""
        return self._board().copy()

    @property
    def status(self) -> SessionStatus:
        return self._state().status

    @property
    def moves_remaining(self) -> int:
        return self._state().moves_remaining

    @property
    def target_color(self) -> Color:
        return self._state().target_color

    @property
    def selected_color(self) -> Color | None:
        return self._state().selected_color

    @property
    def level(self) -> LevelSpec:
        return self._level

    # Commands ------------------------------------------------------------------

    def select_color(self, color: Color | str) -> Color:
        chosen = require_palette_color(color, self.palette)
        self._state().selected_color = chosen
        return chosen

    def apply_move(self, row: int, col: int, color: Color | str) -> MoveResult:
        board = self._board()
        board.check_bounds(row, col)
        state = self._state()

        reason = self._rejection_reason(state, color)
        if reason is not None:
            self.event_bus.emit(EVENT_MOVE_REJECTED, row=row, col=col, color=color, reason=reason)
            return MoveResult(
                outcome=MoveOutcome.INVALID,
                status=state.status,
                cells_changed=0,
                moves_remaining=state.moves_remaining,
                reason=reason,
            )
        chosen = Color.parse(color)

        if board.get(row, col) == chosen:
            self.event_bus.emit(EVENT_MOVE_NO_CHANGE, row=row, col=col, color=chosen)
            return MoveResult(
                outcome=MoveOutcome.NO_CHANGE,
                status=state.status,
                cells_changed=0,
                moves_remaining=state.moves_remaining,
                reason="same_color",
            )

        positions = fill_positions(board, row, col, chosen)
        state.moves_remaining -= 1
        if board.is_uniform(state.target_color):
            new_status = SessionStatus.WON
        elif state.moves_remaining <= 0:
            new_status = SessionStatus.LOST
        else:
            new_status = SessionStatus.IN_PROGRESS

        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="flood", positions=positions)
        self.event_bus.emit(
            EVENT_MOVE_APPLIED,
            row=row,
            col=col,
            color=chosen,
            cells_changed=len(positions),
            moves_remaining=state.moves_remaining,
        )
        self._set_status(new_status)
        return MoveResult(
            outcome=MoveOutcome.APPLIED,
            status=state.status,
            cells_changed=len(positions),
            moves_remaining=state.moves_remaining,
        )

    def reset(self) -> None:
        """Replay the current level from its initial board with a full budget."""
        self._replace(self._level, reason="reset")

    def load_level(self, level: LevelSpec, *, source: str = "level") -> None:
        self._replace(level, reason="level_loaded")
        self._level = level
        self.event_bus.emit(EVENT_LEVEL_LOADED, source=source, target_color=level.target_color)

    def close(self) -> None:
        """Stop reacting to bus input. Direct calls keep working."""
        if not self.attached:
            return
        self.event_bus.unsubscribe(EVENT_COLOR_SELECTED, self.on_color_selected)
        self.event_bus.unsubscribe(EVENT_CELL_CLICK, self.on_cell_click)
        self.event_bus.unsubscribe(EVENT_SESSION_STARTED, self.on_session_started)
        self.attached = False

    # Event handlers ------------------------------------------------------------

    def on_color_selected(self, sender, **payload) -> None:
        color = payload.get("color")
        if color is None:
            return
        try:
            self.select_color(color)
        except InvalidColor:
            self.event_bus.emit(EVENT_COLOR_REJECTED, color=color, reason="color_not_in_palette")

    def on_cell_click(self, sender, **payload) -> None:
        row = payload.get("row")
        col = payload.get("col")
        if row is None or col is None:
            return
        selected = self._state().selected_color
        if selected is None:
            return
        self.apply_move(row, col, selected)

    def on_session_started(self, sender, **payload) -> None:
        if payload.get("session") is not self:
            self.close()

    # Internals ------------------------------------------------------------------

    def _board(self) -> Board:
        return self.world.component_for_entity(self.session_entity, Board)

    def _state(self) -> SessionState:
        return self.world.component_for_entity(self.session_entity, SessionState)

    def _rejection_reason(self, state: SessionState, color: Color | str) -> str | None:
        if state.status.terminal:
            return "game_over"
        if state.moves_remaining <= 0:
            return "no_moves_remaining"
        try:
            require_palette_color(color, self.palette)
        except InvalidColor:
            return "color_not_in_palette"
        return None

    def _initial_status(self, board: Board, target: Color) -> SessionStatus:
        if board.is_uniform(target):
            return SessionStatus.WON
        if self.move_budget <= 0:
            return SessionStatus.LOST
        return SessionStatus.IN_PROGRESS

    def _install(self, level: LevelSpec) -> None:
        target = require_palette_color(level.target_color, self.palette)
        board = level.board
        state = SessionState(
            target_color=target,
            moves_remaining=self.move_budget,
            status=self._initial_status(board, target),
        )
        self.world.add_component(self.session_entity, board)
        self.world.add_component(self.session_entity, state)

    def _replace(self, level: LevelSpec, *, reason: str) -> None:
        previous = self._state().status
        self._install(level)
        board = self._board()
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason=reason, positions=list(board.positions()))
        current = self._state().status
        if current != previous:
            self.event_bus.emit(EVENT_SESSION_STATUS_CHANGED, previous_status=previous, new_status=current)

    def _set_status(self, status: SessionStatus) -> None:
        state = self._state()
        previous = state.status
        if previous == status:
            return
        state.status = status
        self.event_bus.emit(EVENT_SESSION_STATUS_CHANGED, previous_status=previous, new_status=status)
        if status is SessionStatus.WON:
            self.event_bus.emit(EVENT_GAME_WON, moves_remaining=state.moves_remaining)
        elif status is SessionStatus.LOST:
            self.event_bus.emit(EVENT_GAME_LOST, target_color=state.target_color)
