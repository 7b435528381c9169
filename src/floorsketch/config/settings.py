"""Configuration settings for Floorsketch."""

from pathlib import Path

from pydantic import BaseModel, Field


class SnapConfig(BaseModel):
    """Configuration for snapping cursor positions onto existing geometry.

    All distances are in canvas pixels (8 px = 1 ft).
    """

    vertex_snap_radius: float = Field(
        default=25.0,
        gt=0.0,
        le=200.0,
        description="Maximum distance for snapping to an area vertex or permanent point",
    )
    edge_snap_radius: float = Field(
        default=20.0,
        gt=0.0,
        le=200.0,
        description="Maximum distance for snapping onto an area edge",
    )
    grid_size: float = Field(
        default=40.0,
        gt=0.0,
        description="Grid pitch in pixels (40 px = 5 ft)",
    )
    grid_snap_radius: float = Field(
        default=15.0,
        ge=0.0,
        le=200.0,
        description="Maximum distance for snapping to a grid intersection",
    )
    permanent_dedup_tolerance: float = Field(
        default=2.0,
        ge=0.0,
        description="Permanent snap points closer than this are treated as duplicates",
    )
    path_reuse_tolerance: float = Field(
        default=5.0,
        ge=0.0,
        description="Snap targets this close to a vertex already in the path are rejected",
    )


class HelperConfig(BaseModel):
    """Configuration for alignment helper point generation."""

    proximity_threshold: float = Field(
        default=400.0,
        gt=0.0,
        description="Areas with a vertex closer than this to the last point are relevant",
    )
    helper_snap_radius: float = Field(
        default=20.0,
        gt=0.0,
        description="Maximum distance for picking a helper point as the next vertex",
    )
    permanent_dedup_tolerance: float = Field(
        default=2.0,
        ge=0.0,
        description="Permanent points closer than this are treated as duplicates",
    )


class SplitConfig(BaseModel):
    """Configuration for the area split engine."""

    merge_tolerance: float = Field(
        default=5.0,
        gt=0.0,
        le=50.0,
        description="Vertices closer than this merge into one graph vertex",
    )
    coordinate_quantum: float = Field(
        default=0.1,
        gt=0.0,
        le=1.0,
        description="Grid used to quantize coordinates before hashing",
    )


class DrawingConfig(BaseModel):
    """Configuration for path drawing and validation."""

    close_radius: float = Field(
        default=25.0,
        gt=0.0,
        description="A point this close to the first vertex closes the path",
    )
    min_vertex_spacing: float = Field(
        default=2.0,
        ge=0.0,
        description="Minimum distance between a new vertex and any path vertex",
    )
    min_edge_feet: float = Field(
        default=0.1,
        ge=0.0,
        description="Shortest allowed edge in feet",
    )
    max_edge_feet: float = Field(
        default=1000.0,
        gt=0.0,
        description="Longest allowed edge in feet",
    )
    min_vertices: int = Field(
        default=3,
        ge=3,
        description="Minimum vertices of a closed area",
    )
    max_vertices: int = Field(
        default=100,
        ge=3,
        description="Maximum vertices of a closed area",
    )
    min_area_sq_ft: float = Field(
        default=1.0,
        ge=0.0,
        description="Smallest area that can be committed",
    )
    max_coordinate: float = Field(
        default=50_000.0,
        gt=0.0,
        description="Largest absolute coordinate accepted for a vertex",
    )


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


class SketchSettings(BaseModel):
    """Main application settings."""

    snap: SnapConfig = Field(default_factory=SnapConfig)
    helpers: HelperConfig = Field(default_factory=HelperConfig)
    split: SplitConfig = Field(default_factory=SplitConfig)
    drawing: DrawingConfig = Field(default_factory=DrawingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SketchSettings:
    """Get default application settings."""
    return SketchSettings()
