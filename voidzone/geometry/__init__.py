"""
Geometry Layer
==============

Bounded Context: Vector geometry and coordinate spaces.

Responsibilities:
- SVG path data parsing and formatting
- Screen / view / raster coordinate mapping
- Polyline density reduction
- NO rasterization, NO flood fill (see voidzone.raster)
"""

from voidzone.geometry.mapping import CoordinateMapper, RasterGrid, ViewSpace, ViewportTransform
from voidzone.geometry.path import MalformedPathError, format_path_data, parse_path_data
from voidzone.geometry.simplify import simplify

__all__ = [
    "CoordinateMapper",
    "RasterGrid",
    "ViewSpace",
    "ViewportTransform",
    "MalformedPathError",
    "format_path_data",
    "parse_path_data",
    "simplify",
]
