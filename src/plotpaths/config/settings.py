"""Configuration settings for PlotPaths."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# SVG user units per inch
UNITS_PER_INCH = 96


class DocumentSize(BaseModel):
    """Target document size in inches. Zero on either axis means fit content."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(default=0.0, ge=0.0, description="Document width in inches")
    height: float = Field(default=0.0, ge=0.0, description="Document height in inches")

    @property
    def is_fixed(self) -> bool:
        """Whether a fixed page size is configured."""
        return self.width > 0 and self.height > 0


class RenderOptions(BaseModel):
    """Immutable style and layout options read by the SVG exporter.

    Lengths given in inches (margin, offsets, document size) are converted
    to user units at export time.
    """

    model_config = ConfigDict(frozen=True)

    background_color: str = Field(default="#ccc", description="Document background color")
    foreground_color: str = Field(default="#000", description="Default stroke color")
    stroke_width: float = Field(default=1.0, gt=0.0, description="Base stroke width")
    document_size: DocumentSize = Field(default_factory=DocumentSize)
    margin: float = Field(default=0.0, ge=0.0, description="Page margin in inches")
    offset_x: float = Field(default=0.0, description="Horizontal content offset in inches")
    offset_y: float = Field(default=0.0, description="Vertical content offset in inches")
    draw_lines_back_and_forth: bool = Field(
        default=False,
        description="Retrace each pen-down run in reverse instead of lifting the pen",
    )
    no_pen_up: bool = Field(
        default=False,
        description="Never emit move commands between line segments",
    )
    equal_scale: float = Field(
        default=1.0,
        gt=0.0,
        description="Tolerance scale used to decide whether line segments connect",
    )
    draw_skirt: bool = Field(default=False, description="Draw a registration skirt mark")
    debug_mode: bool = Field(default=False, description="Overlay every point as a dot")
    debug_grid: int = Field(default=0, ge=0, description="Debug grid cell size, 0 disables")


class MergeConfig(BaseModel):
    """Configuration for polygon boolean merge."""

    enabled: bool = Field(default=False, description="Merge shapes before export")
    subtract: bool = Field(
        default=False,
        description="Subtract later shapes from the first instead of union",
    )
    center: bool = Field(default=False, description="Recenter the merged outline")
    cleanup: bool = Field(default=False, description="Remove orphaned segments")
    jitter: bool = Field(
        default=True,
        description="Nudge pivots by a per-index offset to break coincident vertices",
    )


class OffsetConfig(BaseModel):
    """Configuration for outline offsetting."""

    distance: float = Field(
        default=0.0,
        description="Offset distance, 0 disables",
    )


class SmoothingConfig(BaseModel):
    """Configuration for corner-cutting smoothing."""

    iterations: int = Field(default=0, ge=0, le=10, description="Smoothing passes, 0 disables")
    min_dist: float = Field(
        default=5.0,
        ge=0.0,
        description="Segments shorter than twice this are not subdivided",
    )
    d1: float = Field(default=0.25, ge=0.0, le=1.0, description="Near cut ratio")
    d2: float = Field(default=0.75, ge=0.0, le=1.0, description="Far cut ratio")


class PathFinderConfig(BaseModel):
    """Configuration for mesh flow-line extraction."""

    angle_threshold: float = Field(
        default=15.0,
        ge=0.0,
        le=180.0,
        description="Turn angle threshold in degrees (violations above 5x this)",
    )
    length_threshold: float = Field(
        default=0.0,
        ge=0.0,
        description="Maximum hop length, 0 disables",
    )
    path_length_threshold: int = Field(
        default=5,
        ge=0,
        description="Paths must contain more points than this",
    )
    swirl: bool = Field(default=False, description="Prefer consistent turning over straight paths")
    extend_ends: int = Field(
        default=0,
        ge=0,
        le=10,
        description="Passes that grow finished paths into unused neighbors",
    )


class ColorConfig(BaseModel):
    """Configuration for color-sampled output."""

    min_alpha: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Geometry sampled below this alpha is dropped",
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


class PlotPathsSettings(BaseModel):
    """Main application settings."""

    render: RenderOptions = Field(default_factory=RenderOptions)
    merge: MergeConfig = Field(default_factory=MergeConfig)
    offset: OffsetConfig = Field(default_factory=OffsetConfig)
    smoothing: SmoothingConfig = Field(default_factory=SmoothingConfig)
    pathfinder: PathFinderConfig = Field(default_factory=PathFinderConfig)
    color: ColorConfig = Field(default_factory=ColorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PlotPathsSettings:
    """Get default application settings."""
    return PlotPathsSettings()
