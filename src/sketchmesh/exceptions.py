"""Exception hierarchy for Sketchmesh."""


class SketchmeshError(Exception):
    """Base exception for all Sketchmesh errors."""

    pass


class DrawingError(SketchmeshError):
    """Errors related to drawing data."""

    pass


class DrawingLoadError(DrawingError):
    """Error loading a drawing file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load drawing '{path}': {reason}")


class StrokeError(DrawingError):
    """Invalid stroke data."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid stroke: {reason}")


class ColorError(SketchmeshError):
    """Color value could not be parsed."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid color '{value}': expected #rrggbb or #rgb")


class GeometryError(SketchmeshError):
    """Errors in geometric calculations."""

    pass


class ShapeValidationError(GeometryError):
    """No usable closed outline could be extracted from the drawing."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class RingOrderError(GeometryError):
    """Closed outline could not be walked into a usable ring."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class BranchedOutlineError(RingOrderError):
    """Outline has nodes that are not of degree two."""

    def __init__(self, branch_count: int) -> None:
        self.branch_count = branch_count
        super().__init__(f"Outline branches at {branch_count} nodes")


class TriangulationError(GeometryError):
    """Outline could not be triangulated."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Triangulation failed: {reason}")


class GradientError(SketchmeshError):
    """Invalid gradient parameters or pixel buffer."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Gradient fill failed: {reason}")


class ExportError(SketchmeshError):
    """Errors related to mesh export."""

    pass


class MeshSaveError(ExportError):
    """Error saving an exported mesh."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save mesh '{path}': {reason}")


class BufferSaveError(ExportError):
    """Error saving a shaded pixel buffer."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save buffer '{path}': {reason}")
