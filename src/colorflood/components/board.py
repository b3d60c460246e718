from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from colorflood.components.color import Color
from colorflood.errors import InvalidColor, InvalidLevelSpec, OutOfBounds

Position = Tuple[int, int]
Cell = Optional[Color]


@dataclass(frozen=True, slots=True)
class Board:
    """Fixed-size grid of cell colors.

    ``None`` marks an empty cell, which only editor boards may hold. A sealed
    board is playable: it is fully populated and refuses empty writes. Use
    ``seal()`` to move from an editable board to a playable one.
    """
    rows: int
    cols: int
    cells: List[List[Cell]] = field(default_factory=list)
    sealed: bool = False

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.rows}x{self.cols}")
        if not self.cells:
            self.cells.extend([None] * self.cols for _ in range(self.rows))
        if len(self.cells) != self.rows or any(len(row) != self.cols for row in self.cells):
            raise InvalidLevelSpec(f"cells must form a {self.rows}x{self.cols} grid")
        if self.sealed and self.has_empty_cells():
            raise InvalidLevelSpec("Playable boards cannot contain empty cells")

    @classmethod
    def empty(cls, rows: int, cols: int) -> "Board":
        return cls(rows=rows, cols=cols)

    @classmethod
    def filled(cls, rows: int, cols: int, color: Color) -> "Board":
        return cls(rows=rows, cols=cols, cells=[[color] * cols for _ in range(rows)], sealed=True)

    # Access -----------------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)

    def get(self, row: int, col: int) -> Cell:
        self.check_bounds(row, col)
        return self.cells[row][col]

    def set(self, row: int, col: int, color: Cell) -> None:
        self.check_bounds(row, col)
        if color is None:
            if self.sealed:
                raise InvalidColor("Cannot clear a cell on a playable board")
        elif not isinstance(color, Color):
            raise InvalidColor(f"Unknown color {color!r}")
        self.cells[row][col] = color

    def neighbors4(self, row: int, col: int) -> List[Position]:
        out = []
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            rr, cc = row + dr, col + dc
            if self.in_bounds(rr, cc):
                out.append((rr, cc))
        return out

    def positions(self) -> Iterator[Position]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    # Queries ----------------------------------------------------------------

    def is_uniform(self, color: Color) -> bool:
        return all(cell == color for line in self.cells for cell in line)

    def is_empty(self) -> bool:
        return all(cell is None for line in self.cells for cell in line)

    def has_empty_cells(self) -> bool:
        return any(cell is None for line in self.cells for cell in line)

    def contains_color(self, color: Color) -> bool:
        return any(cell == color for line in self.cells for cell in line)

    def count(self, color: Cell) -> int:
        return sum(1 for line in self.cells for cell in line if cell == color)

    # Copies & transitions ----------------------------------------------------

    def copy(self) -> "Board":
        return Board(
            rows=self.rows,
            cols=self.cols,
            cells=[list(line) for line in self.cells],
            sealed=self.sealed,
        )

    def seal(self) -> "Board":
        """Return a playable copy; raises InvalidLevelSpec if any cell is empty."""
        empty = [pos for pos in self.positions() if self.cells[pos[0]][pos[1]] is None]
        if empty:
            raise InvalidLevelSpec(f"Board has {len(empty)} empty cell(s), first at {empty[0]}")
        return Board(
            rows=self.rows,
            cols=self.cols,
            cells=[list(line) for line in self.cells],
            sealed=True,
        )

    # Serialization -----------------------------------------------------------

    def to_serializable(self) -> List[List[Optional[str]]]:
        return [[cell.value if cell is not None else None for cell in line] for line in self.cells]

    @classmethod
    def from_serializable(
        cls,
        data: Sequence[Sequence[Optional[str]]],
        *,
        rows: int | None = None,
        cols: int | None = None,
        sealed: bool = False,
    ) -> "Board":
        """Build a board from nested lists of color names.

        ``rows``/``cols`` pin the expected dimensions; when omitted they are
        taken from the data. Raises InvalidLevelSpec for shape problems and
        InvalidColor for unknown color names.
        """
        if not isinstance(data, (list, tuple)) or not data:
            raise InvalidLevelSpec("Board data must be a non-empty list of rows")
        expected_rows = rows if rows is not None else len(data)
        if len(data) != expected_rows:
            raise InvalidLevelSpec(f"Expected {expected_rows} rows, got {len(data)}")
        first = data[0]
        if not isinstance(first, (list, tuple)):
            raise InvalidLevelSpec("Board rows must be lists")
        expected_cols = cols if cols is not None else len(first)
        cells: List[List[Cell]] = []
        for index, line in enumerate(data):
            if not isinstance(line, (list, tuple)) or len(line) != expected_cols:
                raise InvalidLevelSpec(f"Row {index} must hold {expected_cols} cells")
            cells.append([None if value is None else Color.parse(value) for value in line])
        return cls(rows=expected_rows, cols=expected_cols, cells=cells, sealed=sealed)
