"""Configuration settings for Sketchmesh."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class GraphConfig(BaseModel):
    """Configuration for building the stroke graph."""

    merge_tolerance: float = Field(
        default=1.0,
        gt=0.0,
        le=50.0,
        description="Distance below which two samples merge into one node",
    )


class RepairConfig(BaseModel):
    """Configuration for closing open outlines."""

    subdivision_step: float = Field(
        default=5.0,
        gt=0.0,
        le=100.0,
        description="Approximate spacing between samples of a synthesized stroke",
    )


class GradientConfig(BaseModel):
    """Configuration for gradient shading.

    ``min_value`` may exceed ``max_value`` to flip the ramp.
    """

    min_value: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Gray level at the outline",
    )
    max_value: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Gray level at the center",
    )
    edge_threshold: float = Field(
        default=1.0,
        gt=0.0,
        le=1.0,
        description="Fraction of the widest interior distance that saturates to max",
    )


class MeshConfig(BaseModel):
    """Configuration for outline extrusion and export."""

    min_thickness: float = Field(
        default=15.0,
        gt=0.0,
        description="Thickness at the ring point farthest from the centroid",
    )
    max_thickness: float = Field(
        default=15.0,
        gt=0.0,
        description="Thickness at the ring point closest to the centroid",
    )
    strict_ring: bool = Field(
        default=False,
        description="Reject outlines with branch nodes instead of truncating the walk",
    )
    decimate: bool = Field(
        default=False,
        description="Simplify the mesh before export",
    )
    decimate_ratio: float = Field(
        default=0.5,
        gt=0.0,
        le=1.0,
        description="Target fraction of the original triangle count",
    )
    export_scale: float = Field(
        default=1.0,
        gt=0.0,
        description="Uniform scale applied before export",
    )
    material_color: tuple[int, int, int] = Field(
        default=(204, 204, 204),
        description="Base color of the exported material",
    )
    metallic: float = Field(default=0.2, ge=0.0, le=1.0)
    roughness: float = Field(default=0.5, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_thickness(self) -> "MeshConfig":
        if self.min_thickness > self.max_thickness:
            raise ValueError("min_thickness must not exceed max_thickness")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SketchmeshSettings(BaseModel):
    """Main application settings."""

    graph: GraphConfig = Field(default_factory=GraphConfig)
    repair: RepairConfig = Field(default_factory=RepairConfig)
    gradient: GradientConfig = Field(default_factory=GradientConfig)
    mesh: MeshConfig = Field(default_factory=MeshConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SketchmeshSettings:
    """Get default application settings."""
    return SketchmeshSettings()
