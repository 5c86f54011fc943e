"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted step, summary and error messages.
"""


from rich.console import Console
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]PlotPaths[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_input_info(input_path: str, kind: str, count: int) -> None:
    """Print input information.

    Args:
        input_path: Path to the input file
        kind: What the file holds (e.g., "triangles", "shapes")
        count: Number of items loaded
    """
    line = Text("  ")
    line.append(input_path)
    console.print(line)
    console.print(f"  {count:,} {kind}")


def print_search_info(
    paths: int, iterations: int, unused: int, hit_cap: bool, verbose: bool
) -> None:
    """Print flow-line search result.

    Args:
        paths: Number of paths found
        iterations: Queue pops performed
        unused: Nodes left out of every path
        hit_cap: Whether the search stopped on its iteration cap
        verbose: Whether to show iteration details
    """
    console.print(f"  [green]{paths}[/green] paths {SYM_DOT} {unused:,} unused nodes")
    if hit_cap:
        console.print(f"  [yellow]Stopped at iteration cap[/yellow] ({iterations:,} tries)")
    elif verbose:
        console.print(f"  {iterations:,} tries")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    exported: int,
    segments: int,
    dropped: int,
    width: float,
    height: float,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
        exported: Number of collections exported
        segments: Number of input segments
        dropped: Number of collections dropped by colour filtering
        width: Document width in user units
        height: Document height in user units
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    dropped_style = "yellow" if dropped > 0 else "green"
    console.print(
        f"  {exported} paths {SYM_DOT} {segments} segments {SYM_DOT} "
        f"[{dropped_style}]{dropped} dropped[/{dropped_style}]"
    )
    console.print(f"  {width:.0f} {SYM_DOT} {height:.0f} units")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
