"""CLI application entry point for plotpaths.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from plotpaths import __version__
from plotpaths.cli.output import (
    console,
    print_error,
    print_header,
    print_input_info,
    print_search_info,
    print_step,
    print_success,
)
from plotpaths.config import (
    DocumentSize,
    LoggingConfig,
    MergeConfig,
    OffsetConfig,
    PathFinderConfig,
    PlotPathsSettings,
    RenderOptions,
    SmoothingConfig,
)
from plotpaths.core.pipeline import PlotPipeline, RenderResult
from plotpaths.exceptions import DocumentSaveError, InputError, PlotPathsError
from plotpaths.io import MeshReader, ShapeReader, SVGWriter, write_diagnostics
from plotpaths.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="plotpaths",
    help="Turn parametric shapes and triangle meshes into plotter-ready SVG paths.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]PlotPaths[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Generate plotter paths from shapes or meshes."""


OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Output path (default: {name}-paths.svg)"),
]
MarginOption = Annotated[
    float, typer.Option("--margin", "-m", help="Page margin in inches", min=0.0)
]
WidthOption = Annotated[
    float, typer.Option("--width", help="Fixed page width in inches (0 fits content)", min=0.0)
]
HeightOption = Annotated[
    float, typer.Option("--height", help="Fixed page height in inches (0 fits content)", min=0.0)
]
StrokeOption = Annotated[
    float, typer.Option("--stroke-width", help="Base stroke width", min=0.01)
]
BackAndForthOption = Annotated[
    bool,
    typer.Option("--back-and-forth", help="Reverse every other run to shorten pen travel"),
]
SmoothOption = Annotated[
    int, typer.Option("--smooth", "-s", help="Smoothing passes (0-10)", min=0, max=10)
]
LogFileOption = Annotated[
    Path | None, typer.Option("--log-file", help="Write detailed logs to file")
]
LogLevelOption = Annotated[
    str, typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Verbose console output")]
QuietOption = Annotated[bool, typer.Option("--quiet", "-q", help="Minimal console output")]


def _check_input(input_path: Path, verbose: bool, quiet: bool) -> None:
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_path.exists():
        print_error(
            f"Input file not found: {input_path}",
            details=f"The file '{input_path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_path.is_file():
        print_error(
            f"Input path is not a file: {input_path}",
            details="Please provide a path to a JSON geometry file.",
        )
        raise typer.Exit(code=1)


def _render_options(
    margin: float, width: float, height: float, stroke_width: float, back_and_forth: bool
) -> RenderOptions:
    return RenderOptions(
        margin=margin,
        stroke_width=stroke_width,
        document_size=DocumentSize(width=width, height=height),
        draw_lines_back_and_forth=back_and_forth,
    )


def _pipeline(settings: PlotPathsSettings, quiet: bool) -> PlotPipeline:
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    return PlotPipeline(settings, logger=logger)


def _save(result: RenderResult, input_path: Path, output: Path | None, quiet: bool) -> None:
    writer = SVGWriter(output or SVGWriter.get_output_path(input_path))
    size = writer.save(result.svg)

    if not quiet:
        stats = result.stats
        print_success(
            output_path=str(writer.output_path),
            file_size=_format_file_size(size),
            total_time_s=stats.duration_seconds,
            exported=len(result.paths),
            segments=stats.segments_count,
            dropped=stats.dropped_count,
            width=stats.document_width,
            height=stats.document_height,
        )


@app.command()
def flowlines(
    input_mesh: Annotated[
        Path,
        typer.Argument(help="Path to a triangle mesh JSON file", show_default=False),
    ],
    output: OutputOption = None,
    angle_threshold: Annotated[
        float,
        typer.Option(
            "--angle-threshold",
            "-a",
            help="Maximum turn per step in degrees (0 disables)",
            min=0.0,
            max=180.0,
        ),
    ] = 15.0,
    length_threshold: Annotated[
        float,
        typer.Option(
            "--length-threshold",
            "-l",
            help="Maximum step length (0 disables)",
            min=0.0,
        ),
    ] = 0.0,
    min_length: Annotated[
        int,
        typer.Option(
            "--min-length",
            "-n",
            help="Node count a path must exceed to be kept",
            min=1,
        ),
    ] = 5,
    swirl: Annotated[
        bool,
        typer.Option("--swirl", help="Prefer consistent turning over straight paths"),
    ] = False,
    extend_ends: Annotated[
        int,
        typer.Option(
            "--extend-ends",
            help="Passes that grow each path by one node per end",
            min=0,
            max=10,
        ),
    ] = 0,
    smooth: SmoothOption = 0,
    margin: MarginOption = 0.0,
    width: WidthOption = 0.0,
    height: HeightOption = 0.0,
    stroke_width: StrokeOption = 1.0,
    back_and_forth: BackAndForthOption = False,
    diagnostics: Annotated[
        Path | None,
        typer.Option(
            "--diagnostics",
            help="Write unused nodes, paths and triangles to a JSON file",
        ),
    ] = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Walk long, low-curvature flow lines across a triangle mesh.

    Example:
        plotpaths flowlines mesh.json --angle-threshold 20 --smooth 2

    This will create mesh-paths.svg with one open path per flow line.
    """
    _check_input(input_mesh, verbose, quiet)

    if not quiet:
        print_header(__version__)

    settings = PlotPathsSettings(
        render=_render_options(margin, width, height, stroke_width, back_and_forth),
        pathfinder=PathFinderConfig(
            angle_threshold=angle_threshold,
            length_threshold=length_threshold,
            path_length_threshold=min_length,
            swirl=swirl,
            extend_ends=extend_ends,
        ),
        smoothing=SmoothingConfig(iterations=smooth),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    try:
        if not quiet:
            print_step("Loading mesh")
        triangles = MeshReader(input_mesh).load()
        if not quiet:
            print_input_info(str(input_mesh), "triangles", len(triangles))
            print_step("Finding paths")

        result = _pipeline(settings, quiet).render_mesh(triangles)

        if not quiet and result.search is not None:
            print_search_info(
                paths=len(result.search.paths),
                iterations=result.search.iterations,
                unused=result.search.unused_count,
                hit_cap=result.search.hit_iteration_cap,
                verbose=verbose,
            )

        if diagnostics is not None:
            write_diagnostics(
                diagnostics,
                points=result.unused,
                paths=result.search.paths if result.search else [],
                triangles=result.triangles,
            )

        _save(result, input_mesh, output, quiet)

    except InputError as e:
        print_error(f"Could not load mesh: {e}")
        raise typer.Exit(code=1)
    except DocumentSaveError as e:
        print_error(f"Could not save document: {e.reason}")
        raise typer.Exit(code=1)
    except PlotPathsError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def shapes(
    input_shapes: Annotated[
        Path,
        typer.Argument(help="Path to a shape specification JSON file", show_default=False),
    ],
    output: OutputOption = None,
    merge: Annotated[
        bool,
        typer.Option("--merge", help="Merge overlapping shapes into one outline"),
    ] = False,
    subtract: Annotated[
        bool,
        typer.Option("--subtract", help="Subtract later shapes from the first (implies --merge)"),
    ] = False,
    offset: Annotated[
        float,
        typer.Option("--offset", help="Offset every outline by this distance (0 disables)"),
    ] = 0.0,
    smooth: SmoothOption = 0,
    margin: MarginOption = 0.0,
    width: WidthOption = 0.0,
    height: HeightOption = 0.0,
    stroke_width: StrokeOption = 1.0,
    back_and_forth: BackAndForthOption = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Render parametric shapes described in a JSON file.

    Example:
        plotpaths shapes scene.json --merge --offset 4

    This will create scene-paths.svg with the merged, offset outline.
    """
    _check_input(input_shapes, verbose, quiet)

    if not quiet:
        print_header(__version__)

    settings = PlotPathsSettings(
        render=_render_options(margin, width, height, stroke_width, back_and_forth),
        merge=MergeConfig(enabled=merge or subtract, subtract=subtract),
        offset=OffsetConfig(distance=offset),
        smoothing=SmoothingConfig(iterations=smooth),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    try:
        if not quiet:
            print_step("Loading shapes")
        loaded = ShapeReader(input_shapes).load()
        if not quiet:
            print_input_info(str(input_shapes), "shapes", len(loaded))
            if verbose:
                for shape in loaded:
                    console.print(f"    {type(shape).__name__}")
            print_step("Rendering")

        result = _pipeline(settings, quiet).render_shapes(loaded)
        _save(result, input_shapes, output, quiet)

    except InputError as e:
        print_error(f"Could not load shapes: {e}")
        raise typer.Exit(code=1)
    except DocumentSaveError as e:
        print_error(f"Could not save document: {e.reason}")
        raise typer.Exit(code=1)
    except PlotPathsError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def _format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable form.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable file size (e.g., "42 KB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
