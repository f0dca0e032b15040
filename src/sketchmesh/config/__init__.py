"""Configuration management for sketchmesh.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GraphConfig: Node merge tolerance
- RepairConfig: Synthesized stroke sampling
- GradientConfig: Gradient ramp settings
- MeshConfig: Extrusion and export settings
- LoggingConfig: Logging settings
- SketchmeshSettings: Main application settings
"""

from sketchmesh.config.settings import (
    GradientConfig,
    GraphConfig,
    LoggingConfig,
    MeshConfig,
    RepairConfig,
    SketchmeshSettings,
    get_default_settings,
)

__all__ = [
    "GradientConfig",
    "GraphConfig",
    "LoggingConfig",
    "MeshConfig",
    "RepairConfig",
    "SketchmeshSettings",
    "get_default_settings",
]
