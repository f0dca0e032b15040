"""Domain models for sketchmesh.

This module contains the core domain models representing drawn strokes.
All models are immutable (frozen dataclasses) so a finalized stroke can be
shared between analysis calls without copying.

Key classes:
- Point: A 2D sample point
- Color: A validated RGB triple
- Stroke: A polyline with width and color
"""

from sketchmesh.domain.color import Color
from sketchmesh.domain.stroke import Point, Stroke

__all__: list[str] = [
    "Color",
    "Point",
    "Stroke",
]
