"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from imagebridge.domain import CentroidList, FilterId

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

_FILTER_DESCRIPTIONS: dict[FilterId, str] = {
    FilterId.NONE: "Leave the image unchanged",
    FilterId.GRAYSCALE_THRESHOLD: "Mark objects on the largest background region",
    FilterId.KMEANS_SEGMENTATION: "Overlay color k-means clusters",
}


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]imagebridge[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_image_info(image_path: str, width: int, height: int) -> None:
    """Print input image information.

    Args:
        image_path: Path to the image file
        width: Image width in pixels
        height: Image height in pixels
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(image_path)
    console.print(line)
    console.print(f"  {width} x {height} px {SYM_DOT} RGB")


def print_centroids(centroids: CentroidList, limit: int = 20) -> None:
    """Print detected centroids as a table.

    Args:
        centroids: Centroids to show
        limit: Maximum number of rows
    """
    console.print(f"  [green]{len(centroids)}[/green] objects found")
    if not centroids:
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for idx, centroid in enumerate(centroids[:limit], start=1):
        table.add_row(str(idx), f"{centroid.x:.1f}", f"{centroid.y:.1f}")
    console.print(table)
    if len(centroids) > limit:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(centroids) - limit} more)")


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


def print_success(output_path: str, filter_name: str, total_time_s: float) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output image
        filter_name: Filter that was applied
        total_time_s: Total time in seconds
    """
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}"
    )
    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({filter_name})")
    console.print(line)


def print_filters() -> None:
    """Print the known filter identifiers."""
    for filter_id in FilterId:
        console.print(f"  {filter_id.value:<22}{_FILTER_DESCRIPTIONS[filter_id]}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
