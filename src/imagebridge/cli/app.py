"""CLI application entry point for imagebridge.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from imagebridge import __version__
from imagebridge.cli.output import (
    console,
    print_centroids,
    print_error,
    print_filters,
    print_header,
    print_image_info,
    print_step,
    print_success,
)
from imagebridge.config import (
    CentroidConfig,
    EngineConfig,
    ImageBridgeSettings,
    LoggingConfig,
    MarkerColor,
    SegmentationConfig,
)
from imagebridge.core import FilterPipeline, rgb_array_to_bitmap
from imagebridge.domain import BitmapHeader, FilterId
from imagebridge.engine import EngineSession, exit_code_for
from imagebridge.exceptions import ImageBridgeError
from imagebridge.io import get_filtered_path, read_rgb_image, write_bitmap, write_centroids
from imagebridge.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="imagebridge",
    help="Run MATLAB image filters on image files.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]imagebridge[/bold blue] v{__version__}")
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
    """Run MATLAB image filters on image files."""


@app.command()
def filters() -> None:
    """List the available filter identifiers."""
    print_filters()


@app.command()
def apply(
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image file",
            show_default=False,
        ),
    ],
    filter_name: Annotated[
        str,
        typer.Option(
            "--filter",
            "-f",
            help="Color filter to apply (see 'imagebridge filters')",
        ),
    ] = FilterId.GRAYSCALE_THRESHOLD.value,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-filtered.{ext})",
        ),
    ] = None,
    centroids_out: Annotated[
        Path | None,
        typer.Option(
            "--centroids-out",
            help="Write detected centroids to a JSON file",
        ),
    ] = None,
    min_area: Annotated[
        int,
        typer.Option(
            "--min-area",
            help="Drop objects whose area is at or below this many pixels",
            min=0,
        ),
    ] = 60,
    marker_radius: Annotated[
        int,
        typer.Option(
            "--marker-radius",
            help="Radius of the circle drawn at each object",
            min=1,
            max=500,
        ),
    ] = 20,
    marker_color: Annotated[
        str,
        typer.Option(
            "--marker-color",
            help="Marker color (green|red|blue|yellow|white|black)",
        ),
    ] = "green",
    clusters: Annotated[
        int,
        typer.Option(
            "--clusters",
            "-k",
            help="Number of clusters for kmeans_segmentation",
            min=2,
            max=64,
        ),
    ] = 5,
    show_engine: Annotated[
        bool,
        typer.Option(
            "--show-engine",
            help="Show the MATLAB desktop while filtering",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Apply a color filter to an image file.

    The image is sent to a MATLAB engine session, filtered there, and the
    result is written next to the input.

    Example:
        imagebridge apply scene.png --filter grayscale_threshold
    """
    if not input_image.exists() or not input_image.is_file():
        print_error(
            f"Input file not found: {input_image}",
            details=f"The file '{input_image}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    try:
        filter_id = FilterId(filter_name.lower())
    except ValueError:
        print_error(
            f"Invalid filter: {filter_name}",
            details="Valid values: " + ", ".join(f.value for f in FilterId),
        )
        raise typer.Exit(code=1)

    try:
        color = MarkerColor(marker_color.lower())
    except ValueError:
        print_error(
            f"Invalid marker color: {marker_color}",
            details="Valid values: " + ", ".join(c.value for c in MarkerColor),
        )
        raise typer.Exit(code=1)

    settings = ImageBridgeSettings(
        engine=EngineConfig(show_ui=show_engine),
        centroids=CentroidConfig(
            min_object_area=min_area,
            marker_radius=marker_radius,
            marker_color=color,
        ),
        segmentation=SegmentationConfig(cluster_count=clusters),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    output_path = output if output is not None else get_filtered_path(input_image)
    start_time = time.time()

    if not quiet:
        print_header(__version__)
        print_step("Loading image")

    try:
        image = read_rgb_image(input_image)
    except Exception as e:
        print_error(f"Could not load image: {e}")
        raise typer.Exit(code=1)

    height, width, _ = image.dims
    if not quiet:
        print_image_info(str(input_image), width=width, height=height)
        print_step("Starting engine")

    try:
        with EngineSession(config=settings.engine, logger=logger) as session:
            pipeline = FilterPipeline(session, settings=settings, logger=logger)
            pipeline.set_color_filter(filter_id)

            if not quiet:
                print_step(f"Applying {filter_id.value}")
            result = pipeline.apply_color_filter(image)

        bitmap = rgb_array_to_bitmap(image, BitmapHeader.top_down(width, height))
        write_bitmap(bitmap, output_path)
        if centroids_out is not None:
            write_centroids(result.centroids, centroids_out)
    except ImageBridgeError as e:
        print_error(str(e), details=f"kind: {e.kind.value}")
        raise typer.Exit(code=exit_code_for(e.kind))
    except OSError as e:
        print_error(f"Could not save output: {e}")
        raise typer.Exit(code=1)
    finally:
        image.destroy()

    if not quiet:
        if filter_id is FilterId.GRAYSCALE_THRESHOLD:
            print_centroids(result.centroids)
        print_success(str(output_path), filter_id.value, time.time() - start_time)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
