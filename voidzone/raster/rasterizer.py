"""
Occupancy Rasterizer
====================

Fills zone polygons into a boolean occupancy grid.

Fill rule:
- Nonzero winding, sampled at cell centers: cell (i, j) is occupied iff the
  view-space point under raster (i + 0.5, j + 0.5) has a nonzero winding
  number for at least one zone
- All subpaths of one zone share the winding count (holes cut by opposite
  orientation stay empty); different zones simply union
- Every subpath is closed implicitly

Design:
- Scanline per row, vectorized over edges with numpy
- Line zones never occupy area
- A zone whose path does not parse is skipped and recorded, never fatal
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Union

import numpy as np

from voidzone.geometry.mapping import RasterGrid
from voidzone.geometry.path import MalformedPathError
from voidzone.logging import LogEvent, create_logger
from voidzone.results import MalformedPolygon
from voidzone.zone import ShapeKind, VectorPolygon, ZoneRecord

logger = create_logger("rasterizer")


@dataclass(frozen=True)
class OccupancySurface:
    """
    Boolean coverage grid, True = covered by some zone.

    Attributes:
        occupied: (height, width) bool array, read-only
        skipped: Zones left out because their path data was malformed
    """

    occupied: np.ndarray
    skipped: Tuple[MalformedPolygon, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.occupied, np.ndarray):
            raise TypeError(f"occupied must be np.ndarray, got {type(self.occupied)}")
        if self.occupied.ndim != 2 or self.occupied.dtype != np.bool_:
            raise ValueError(
                f"occupied must be a 2-D bool array, got {self.occupied.dtype} "
                f"with shape {self.occupied.shape}"
            )
        self.occupied.flags.writeable = False

    @property
    def width(self) -> int:
        return self.occupied.shape[1]

    @property
    def height(self) -> int:
        return self.occupied.shape[0]

    @property
    def size(self) -> int:
        return self.occupied.size

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        return bool(self.occupied[y, x])


def fill_winding(winding: np.ndarray, subpaths: Sequence[np.ndarray]) -> None:
    """
    Accumulate winding numbers of raster-space subpaths at cell centers.

    Args:
        winding: (height, width) int array updated in place
        subpaths: Nx2 vertex arrays already scaled to raster space
    """
    height, width = winding.shape
    edges = []
    for vertices in subpaths:
        if len(vertices) < 2:
            continue
        edges.append(np.hstack([vertices, np.roll(vertices, -1, axis=0)]))
    if not edges:
        return

    x0, y0, x1, y1 = np.vstack(edges).T
    lo = np.minimum(y0, y1)
    hi = np.maximum(y0, y1)
    direction = np.where(y1 > y0, 1, -1).astype(np.int32)

    # Only rows whose center lies inside [lo, hi) of some edge
    first_row = max(int(np.floor(lo.min() - 0.5)), 0)
    last_row = min(int(np.ceil(hi.max() - 0.5)), height - 1)
    if first_row > last_row:
        return

    rows = np.arange(first_row, last_row + 1)
    centers = rows[:, None] + 0.5
    crosses = (lo[None, :] <= centers) & (centers < hi[None, :])
    row_idx, edge_idx = np.nonzero(crosses)
    if row_idx.size == 0:
        return

    yc = centers[row_idx, 0]
    with np.errstate(over="ignore"):
        t = (yc - y0[edge_idx]) / (y1[edge_idx] - y0[edge_idx])
        # Half differences stay finite for any finite endpoints
        half_dx = x1[edge_idx] / 2.0 - x0[edge_idx] / 2.0
        x_cross = x0[edge_idx] + (t * half_dx) * 2.0
    # Crossings far off the grid behave like ones just past its edge
    x_cross = np.clip(x_cross, -1.0, width + 1.0)

    # Crossing at x contributes to every cell whose center lies right of x
    start_col = np.clip(np.floor(x_cross - 0.5).astype(np.int64) + 1, 0, width)
    delta = np.zeros((rows.size, width + 1), dtype=np.int32)
    np.add.at(delta, (row_idx, start_col), direction[edge_idx])
    winding[first_row:last_row + 1] += np.cumsum(delta, axis=1)[:, :width]


def rasterize(
    zones: Sequence[Union[ZoneRecord, VectorPolygon]],
    grid: RasterGrid,
    curve_steps: int = 16,
) -> OccupancySurface:
    """
    Build the occupancy surface for a zone snapshot.

    Args:
        zones: Zone records (parsed here) or already parsed polygons
        grid: Target raster grid over the view space
        curve_steps: Segments per curve when parsing records

    Returns:
        OccupancySurface with the union of all polygon zones
    """
    occupied = np.zeros(grid.shape, dtype=bool)
    skipped: List[MalformedPolygon] = []
    scale = np.array([grid.scale_x, grid.scale_y])
    filled = 0

    for zone in zones:
        if isinstance(zone, ZoneRecord):
            if zone.shape_kind is ShapeKind.LINE or not zone.path_data.strip():
                continue
            try:
                polygon = VectorPolygon.from_record(zone, curve_steps=curve_steps)
            except MalformedPathError as e:
                skipped.append(MalformedPolygon(zone_id=zone.zone_id, reason=str(e)))
                logger.warning(
                    event=LogEvent.RASTER_POLYGON_SKIPPED,
                    message="Skipped zone with malformed path data",
                    metadata={'zone_id': zone.zone_id},
                    exc_info=e,
                )
                continue
        else:
            polygon = zone

        if not polygon.occupies_area:
            continue

        raster_subpaths = [subpath * scale for subpath in polygon.subpaths]
        if not all(np.isfinite(s).all() for s in raster_subpaths):
            skipped.append(MalformedPolygon(zone_id=polygon.zone_id, reason="non-finite coordinates"))
            logger.warning(
                event=LogEvent.RASTER_POLYGON_SKIPPED,
                message="Skipped zone with non-finite coordinates",
                metadata={'zone_id': polygon.zone_id},
            )
            continue

        winding = np.zeros(grid.shape, dtype=np.int32)
        fill_winding(winding, raster_subpaths)
        occupied |= winding != 0
        filled += 1

    logger.debug(
        event=LogEvent.RASTER_BUILT,
        message="Occupancy surface built",
        metadata={
            'width': grid.width,
            'height': grid.height,
            'zones_filled': filled,
            'zones_skipped': len(skipped),
            'occupied_cells': int(occupied.sum()),
        },
    )
    return OccupancySurface(occupied=occupied, skipped=tuple(skipped))
