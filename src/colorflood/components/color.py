from enum import Enum
from typing import Iterable

from colorflood.errors import InvalidColor


class Color(Enum):
    """Cell colors. Values are the names used in stored levels."""
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"

    @classmethod
    def parse(cls, value: "Color | str") -> "Color":
        if isinstance(value, Color):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidColor(f"Unknown color {value!r}") from None


def require_palette_color(color: "Color | str", palette: Iterable[Color]) -> Color:
    """Parse ``color`` and make sure it belongs to ``palette``."""
    parsed = Color.parse(color)
    if parsed not in tuple(palette):
        raise InvalidColor(f"Color '{parsed.value}' is not in the palette")
    return parsed
