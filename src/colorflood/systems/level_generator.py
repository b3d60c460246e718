from __future__ import annotations

import random
from enum import Enum
from typing import Callable, Dict, Sequence, Tuple

from colorflood.components.board import Board
from colorflood.components.color import Color
from colorflood.components.level_spec import LevelSpec
from colorflood.constants import (
    CENTER_BLOCK_HEIGHT,
    CENTER_BLOCK_WIDTH,
    CORNER_BLOCK_SIZE,
    GRID_COLS,
    GRID_ROWS,
    PLAY_PALETTE,
    STRIPE_PERIOD,
)


class LevelStrategy(Enum):
    CROSS = "cross"
    BORDER = "border"
    STRIPES = "stripes"
    QUARTERS = "quarters"
    RANDOM = "random"


# Strategies the RANDOM option picks between.
FIXED_STRATEGIES: Tuple[LevelStrategy, ...] = (
    LevelStrategy.CROSS,
    LevelStrategy.BORDER,
    LevelStrategy.STRIPES,
)


# Pattern painters --------------------------------------------------------------
# Each painter writes every cell of ``board`` and touches nothing else.


def is_cross_band(board: Board, row: int, col: int) -> bool:
    mid_row = board.rows // 2
    mid_col = board.cols // 2
    return row in (mid_row - 1, mid_row) or col in (mid_col - 1, mid_col)


def is_corner_block(board: Board, row: int, col: int, size: int = CORNER_BLOCK_SIZE) -> bool:
    top = row < size
    bottom = row >= board.rows - size
    left = col < size
    right = col >= board.cols - size
    return (top or bottom) and (left or right)


def is_border(board: Board, row: int, col: int) -> bool:
    return row in (0, board.rows - 1) or col in (0, board.cols - 1)


def center_block(board: Board) -> Tuple[range, range]:
    """Rows and columns of the centered rectangle, clipped to the interior."""
    height = max(0, min(CENTER_BLOCK_HEIGHT, board.rows - 2))
    width = max(0, min(CENTER_BLOCK_WIDTH, board.cols - 2))
    top = (board.rows - height) // 2
    left = (board.cols - width) // 2
    return range(top, top + height), range(left, left + width)


def is_stripe(row: int, period: int = STRIPE_PERIOD) -> bool:
    return row % period in (0, 1)


def paint_cross(board: Board, band: Color, corner: Color, background: Color) -> None:
    for row, col in board.positions():
        if is_cross_band(board, row, col):
            board.set(row, col, band)
        elif is_corner_block(board, row, col):
            board.set(row, col, corner)
        else:
            board.set(row, col, background)


def paint_border(board: Board, border: Color, center: Color, background: Color) -> None:
    center_rows, center_cols = center_block(board)
    for row, col in board.positions():
        if is_border(board, row, col):
            board.set(row, col, border)
        elif row in center_rows and col in center_cols:
            board.set(row, col, center)
        else:
            board.set(row, col, background)


def paint_stripes(board: Board, stripe: Color, even: Color, odd: Color) -> None:
    for row, col in board.positions():
        if is_stripe(row):
            board.set(row, col, stripe)
        elif (row + col) % 2 == 0:
            board.set(row, col, even)
        else:
            board.set(row, col, odd)


def paint_quarters(board: Board, fixed: Sequence[Color], palette: Sequence[Color], rng: random.Random) -> None:
    """Top-left, top-right and bottom-left get ``fixed[0..2]``; bottom-right is drawn per cell."""
    mid_row = board.rows // 2
    mid_col = board.cols // 2
    for row, col in board.positions():
        if row < mid_row:
            board.set(row, col, fixed[0] if col < mid_col else fixed[1])
        elif col < mid_col:
            board.set(row, col, fixed[2])
        else:
            board.set(row, col, rng.choice(list(palette)))


# Generator ------------------------------------------------------------------------


class LevelGenerator:
    """Builds playable levels from named board patterns.

    Only QUARTERS and RANDOM draw from the random source; the other
    strategies are pure functions of the board size and palette.
    """

    def __init__(
        self,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        palette: Sequence[Color] = PLAY_PALETTE,
        *,
        rng: random.Random | None = None,
    ) -> None:
        if len(palette) < 3:
            raise ValueError("Level generation needs a palette of at least three colors")
        self.rows = rows
        self.cols = cols
        self.palette: Tuple[Color, ...] = tuple(palette)
        self._rng: random.Random = rng or random.Random()
        self._builders: Dict[LevelStrategy, Callable[[random.Random], LevelSpec]] = {
            LevelStrategy.CROSS: lambda _rng: self.cross(),
            LevelStrategy.BORDER: lambda _rng: self.border(),
            LevelStrategy.STRIPES: lambda _rng: self.stripes(),
            LevelStrategy.QUARTERS: self.quarters,
            LevelStrategy.RANDOM: self.random_level,
        }

    def generate(self, strategy: LevelStrategy | str, rng: random.Random | None = None) -> LevelSpec:
        strategy = LevelStrategy(strategy)
        return self._builders[strategy](rng or self._rng)

    # Level 1: bands of palette[0], corners of palette[2] on palette[1].
    def cross(self) -> LevelSpec:
        red, green, yellow = self.palette[:3]
        board = Board.empty(self.rows, self.cols)
        paint_cross(board, band=red, corner=yellow, background=green)
        return self._finish(board, yellow)

    # Level 2: palette[1] frame around a palette[0] block on palette[2].
    def border(self) -> LevelSpec:
        red, green, yellow = self.palette[:3]
        board = Board.empty(self.rows, self.cols)
        paint_border(board, border=green, center=red, background=yellow)
        return self._finish(board, yellow)

    # Level 3: palette[2] stripes over a palette[0]/palette[1] checkerboard.
    def stripes(self) -> LevelSpec:
        red, green, yellow = self.palette[:3]
        board = Board.empty(self.rows, self.cols)
        paint_stripes(board, stripe=yellow, even=red, odd=green)
        return self._finish(board, yellow)

    def quarters(self, rng: random.Random | None = None) -> LevelSpec:
        rng = rng or self._rng
        board = Board.empty(self.rows, self.cols)
        paint_quarters(board, self.palette[:3], self.palette, rng)
        # Small boards and wide palettes can leave colors off the board.
        placed = [color for color in self.palette if board.contains_color(color)]
        target = rng.choice(placed)
        return self._finish(board, target)

    def random_level(self, rng: random.Random | None = None) -> LevelSpec:
        rng = rng or self._rng
        return self.generate(rng.choice(FIXED_STRATEGIES), rng)

    def _finish(self, board: Board, target: Color) -> LevelSpec:
        # LevelSpec.from_board re-checks palette membership and target presence.
        return LevelSpec.from_board(board, target, palette=self.palette)
