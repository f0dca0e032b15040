"""Drawing reader for loading saved stroke lists.

This module provides the DrawingReader class for loading JSON drawings
into domain models. Two layouts are accepted:

    {"strokes": [{"path": [{"x": 0, "y": 0}, ...], "width": 10, "color": "#000000"}]}

or the bare list of strokes.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from sketchmesh.domain import Stroke
from sketchmesh.exceptions import ColorError, DrawingLoadError, StrokeError


class DrawingReader:
    """Loads JSON drawings and converts them to strokes.

    Example:
        reader = DrawingReader(Path("fish.json"))
        reader.load()
        for stroke in reader.iter_strokes():
            print(len(stroke))
    """

    def __init__(self, drawing_path: Path) -> None:
        """Initialize the drawing reader.

        Args:
            drawing_path: Path to the JSON drawing file
        """
        self._drawing_path = drawing_path
        self._strokes: list[Stroke] | None = None
        self._dropped = 0

    def load(self) -> list[Stroke]:
        """Load the drawing file.

        Strokes with fewer than two points are dropped, as the drawing
        surface never stores them.

        Returns:
            The loaded strokes

        Raises:
            FileNotFoundError: If drawing file does not exist
            DrawingLoadError: If the file is not a valid drawing
        """
        if not self._drawing_path.exists():
            raise FileNotFoundError(f"Drawing file not found: {self._drawing_path}")

        try:
            data = json.loads(self._drawing_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DrawingLoadError(str(self._drawing_path), str(e)) from e

        items = self._stroke_items(data)

        strokes: list[Stroke] = []
        self._dropped = 0
        for idx, item in enumerate(items):
            if not isinstance(item, dict) or not isinstance(item.get("path"), list):
                raise DrawingLoadError(
                    str(self._drawing_path), f"stroke {idx} has no path list"
                )
            if len(item["path"]) < 2:
                self._dropped += 1
                continue
            try:
                strokes.append(Stroke.from_dict(item))
            except (ColorError, StrokeError) as e:
                raise DrawingLoadError(
                    str(self._drawing_path), f"stroke {idx}: {e}"
                ) from e
            except (KeyError, TypeError, ValueError) as e:
                raise DrawingLoadError(
                    str(self._drawing_path), f"stroke {idx}: malformed point ({e})"
                ) from e

        self._strokes = strokes
        return strokes

    def _stroke_items(self, data: Any) -> list[Any]:
        if isinstance(data, dict):
            data = data.get("strokes")
        if not isinstance(data, list):
            raise DrawingLoadError(
                str(self._drawing_path), "expected a list of strokes"
            )
        return data

    @property
    def strokes(self) -> list[Stroke]:
        """Return the loaded strokes.

        Raises:
            RuntimeError: If drawing has not been loaded yet
        """
        if self._strokes is None:
            raise RuntimeError("Drawing not loaded. Call load() first.")
        return self._strokes

    @property
    def dropped_count(self) -> int:
        """Number of strokes dropped for having fewer than two points."""
        return self._dropped

    def iter_strokes(self) -> Iterator[Stroke]:
        """Iterate over loaded strokes.

        Raises:
            RuntimeError: If drawing has not been loaded yet
        """
        yield from self.strokes
