"""
Raster Layer
============

Bounded Context: Occupancy grids and what is derived from them.

Responsibilities:
- Rasterize zone polygons (nonzero winding, cell centers)
- Flood fill the unoccupied region around a seed
- Trace the region's outer boundary (marching squares)
"""

from voidzone.raster.rasterizer import OccupancySurface, rasterize
from voidzone.raster.region import Region, grow
from voidzone.raster.contour import Polyline, trace

__all__ = [
    "OccupancySurface",
    "rasterize",
    "Region",
    "grow",
    "Polyline",
    "trace",
]
