"""Sketchmesh - Analyze and extrude free-drawn sketches.

Sketchmesh takes polyline strokes drawn by hand and classifies them into open
and closed shapes, closes accidentally unclosed outlines, shades enclosed
regions with distance-based gradients, flood-fills bounded regions, and
extrudes the largest closed outline into a solid exported as binary glTF.

Example:
    $ sketchmesh export fish.json

This will create fish-model.glb from the largest closed outline in fish.json.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
