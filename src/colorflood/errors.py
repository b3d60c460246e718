"""Error types raised by the puzzle engine."""


class OutOfBounds(IndexError):
    """Cell coordinates outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(f"Cell ({row}, {col}) outside {rows}x{cols} board")
        self.row = row
        self.col = col


class InvalidColor(ValueError):
    """A color that is not part of the palette in use."""


class InvalidLevelSpec(ValueError):
    """A level that cannot be played (bad dimensions, target, or empty cells)."""
