"""Core geometric types for stroke representation.

This module defines the fundamental types used throughout sketchmesh:
- Point: A 2D sample on a drawn path
- Stroke: One continuous polyline with a fixed width and color

A drawing is simply an ordered list of strokes. Order is paint order and
has no meaning for analysis.
"""

from dataclasses import dataclass
from typing import Any

from sketchmesh.domain.color import Color
from sketchmesh.exceptions import StrokeError


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D drawing space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in drawing units (pixels)
        y: Y coordinate in drawing units, growing downwards
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True)
class Stroke:
    """One finalized polyline of the drawing.

    Attributes:
        path: Ordered sample points (at least two)
        width: Brush size the stroke was drawn with
        color: Stroke color
    """

    path: tuple[Point, ...]
    width: float = 2.0
    color: Color = Color(0, 0, 0)

    def __post_init__(self) -> None:
        # Accept any sequence but always store an immutable tuple
        object.__setattr__(self, "path", tuple(self.path))
        if len(self.path) < 2:
            raise StrokeError(f"path needs at least 2 points, got {len(self.path)}")
        if self.width <= 0:
            raise StrokeError(f"width must be positive, got {self.width}")

    @classmethod
    def from_points(
        cls,
        coords: list[tuple[float, float]],
        width: float = 2.0,
        color: Color | None = None,
    ) -> "Stroke":
        """Build a stroke from plain (x, y) tuples."""
        path = tuple(Point(float(x), float(y)) for x, y in coords)
        return cls(path=path, width=width, color=color or Color(0, 0, 0))

    def __len__(self) -> int:
        return len(self.path)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with path, width and color fields
        """
        return {
            "path": [p.to_dict() for p in self.path],
            "width": self.width,
            "color": self.color.to_hex(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stroke":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a stroke

        Returns:
            Stroke instance
        """
        color = data.get("color")
        return cls(
            path=tuple(Point.from_dict(p) for p in data["path"]),
            width=float(data.get("width", 2.0)),
            color=Color.from_hex(color) if color is not None else Color(0, 0, 0),
        )
