"""Command-line interface for imagebridge.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Apply a color filter to an image file
- Centroid table and JSON export for object detection
- Detailed error reporting with stable exit codes
"""

from imagebridge.cli.app import cli, main

__all__ = ["cli", "main"]
