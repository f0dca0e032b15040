"""Typed RGB color, parsed once at the system boundary."""

import re
from dataclasses import dataclass

from sketchmesh.exceptions import ColorError

_HEX_LONG = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")
_HEX_SHORT = re.compile(r"^#?([0-9a-fA-F])([0-9a-fA-F])([0-9a-fA-F])$")


@dataclass(frozen=True, slots=True)
class Color:
    """An RGB color with 8-bit channels.

    Attributes:
        r: Red channel (0-255)
        g: Green channel (0-255)
        b: Blue channel (0-255)
    """

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not isinstance(channel, int) or not 0 <= channel <= 255:
                raise ColorError(f"({self.r}, {self.g}, {self.b})")

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse a ``#rrggbb`` or ``#rgb`` string.

        Raises:
            ColorError: If the string is not a valid hex color
        """
        text = value.strip()
        match = _HEX_LONG.match(text)
        if match:
            return cls(*(int(part, 16) for part in match.groups()))

        match = _HEX_SHORT.match(text)
        if match:
            return cls(*(int(part * 2, 16) for part in match.groups()))

        raise ColorError(value)

    def to_hex(self) -> str:
        """Format as lowercase ``#rrggbb``."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)
