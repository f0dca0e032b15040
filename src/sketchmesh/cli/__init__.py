"""Command-line interface for sketchmesh.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Open/closed shape report
- Repair of open outlines into a new drawing file
- Drawing and per-shape centroids
- Gradient shading and flood fill into a saved pixel buffer
- GLB export of the largest closed outline
"""

from sketchmesh.cli.app import cli, main

__all__ = ["cli", "main"]
