"""imagebridge - Run MATLAB image filters on host bitmaps.

imagebridge marshals RGB images between a host application's interleaved
BGRX bitmaps and the column-major, plane-separated arrays of a MATLAB engine
session. It drives a fixed sequence of engine expressions for the selected
filter and moves the computed image back into the caller's array.

Example:
    $ imagebridge apply scene.png --filter grayscale_threshold

This will write scene-filtered.png with a marker drawn on every object
detected on the largest background region, and print the centroids.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
