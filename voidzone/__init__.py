"""
voidzone v1.0
=============

Bounded Context: Creating map zones from empty space.

Given the zones already drawn on a map and one operator click, find the
unoccupied region under the click and return its outline as a new zone.

Architecture:

    voidzone/
    ├── geometry/          # Vector side (pure, stateless)
    │   ├── path.py        # SVG path data parse/format
    │   ├── mapping.py     # screen <-> view <-> raster
    │   └── simplify.py    # polyline density reduction
    │
    ├── raster/            # Grid side (pure, per-query buffers)
    │   ├── rasterizer.py  # zones -> OccupancySurface
    │   ├── region.py      # flood fill -> Region
    │   └── contour.py     # marching squares -> Polyline
    │
    ├── rendering/         # Diagnostic preview images
    ├── logging/           # Structured JSON logging
    ├── zone.py            # ZoneRecord, VectorPolygon
    ├── results.py         # Typed query outcomes, ZoneCandidate
    ├── config.py          # DetectorConfig (YAML)
    └── detector.py        # VoidDetector (orchestration)

Usage:

    from voidzone import VoidDetector, ViewportTransform, ZoneVoidCreated

    detector = VoidDetector()
    result = detector.detect(
        zones=[{"id": "Z01", "shape": "path", "d": "M100 100 H600 V500 H100 Z"}],
        screen_point=(800, 300),
        viewport=ViewportTransform(left=0, top=0, width=1280, height=844),
    )

    if isinstance(result, ZoneVoidCreated):
        new_zone = result.candidate.to_dict()   # {"id": "ZVOID01", ...}
    else:
        print(result.message)                   # SeedOccupied, NoContour, ...
"""

from voidzone.config import DetectorConfig, MapModeConfig
from voidzone.detector import VoidAnalysis, VoidDetector
from voidzone.geometry.mapping import CoordinateMapper, RasterGrid, ViewSpace, ViewportTransform
from voidzone.results import (
    MalformedPolygon,
    NoContour,
    QueryFailure,
    RegionTooLarge,
    SeedOccupied,
    SeedOutOfBounds,
    ZoneCandidate,
    ZoneVoidCreated,
)
from voidzone.zone import ShapeKind, VectorPolygon, ZoneRecord

__all__ = [
    # Configuration
    "DetectorConfig",
    "MapModeConfig",
    # Orchestration
    "VoidDetector",
    "VoidAnalysis",
    # Coordinates
    "CoordinateMapper",
    "RasterGrid",
    "ViewSpace",
    "ViewportTransform",
    # Zones
    "ShapeKind",
    "VectorPolygon",
    "ZoneRecord",
    # Outcomes
    "QueryFailure",
    "SeedOccupied",
    "SeedOutOfBounds",
    "NoContour",
    "RegionTooLarge",
    "MalformedPolygon",
    "ZoneCandidate",
    "ZoneVoidCreated",
]

__version__ = "1.0.0"
