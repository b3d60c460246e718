from __future__ import annotations

from typing import Sequence

from colorflood.components.board import Board
from colorflood.components.color import Color
from colorflood.components.level_spec import LevelSpec

LETTERS = {
    "R": Color.RED,
    "G": Color.GREEN,
    "Y": Color.YELLOW,
    "B": Color.BLUE,
    ".": None,
}
NAMES = {value: key for key, value in LETTERS.items()}


def board_from_strings(lines: Sequence[str], *, sealed: bool = True) -> Board:
    """Build a board from rows like ``"RGY"`` ('.' marks an empty cell)."""

    cells = [[LETTERS[ch] for ch in line] for line in lines]
    return Board(rows=len(cells), cols=len(cells[0]), cells=cells, sealed=sealed)


def board_to_strings(board: Board) -> list[str]:
    return ["".join(NAMES[cell] for cell in line) for line in board.cells]


def level_from_strings(lines: Sequence[str], target: Color) -> LevelSpec:
    return LevelSpec.from_board(board_from_strings(lines), target)
