from __future__ import annotations

from typing import List, Set

from colorflood.components.board import Board, Position
from colorflood.components.color import Color


def connected_region(board: Board, row: int, col: int) -> List[Position]:
    """Return the 4-connected cells sharing the color of (row, col).

    Uses an explicit stack so region size is bounded only by the board.
    Positions come back in discovery order, starting with (row, col).
    """
    source = board.get(row, col)
    seen: Set[Position] = {(row, col)}
    region: List[Position] = []
    stack: List[Position] = [(row, col)]
    while stack:
        pos = stack.pop()
        region.append(pos)
        for neighbor in board.neighbors4(*pos):
            if neighbor in seen:
                continue
            if board.cells[neighbor[0]][neighbor[1]] != source:
                continue
            seen.add(neighbor)
            stack.append(neighbor)
    return region


def fill(board: Board, start_row: int, start_col: int, new_color: Color) -> int:
    """Recolor the region around (start_row, start_col) to ``new_color``.

    Returns the number of cells recolored. A start cell that already holds
    ``new_color`` leaves the board untouched and returns 0.
    """
    return len(fill_positions(board, start_row, start_col, new_color))


def fill_positions(board: Board, start_row: int, start_col: int, new_color: Color) -> List[Position]:
    """Recolor like ``fill`` and return the recolored positions."""
    if board.get(start_row, start_col) == new_color:
        return []
    region = connected_region(board, start_row, start_col)
    for row, col in region:
        board.cells[row][col] = new_color
    return region
