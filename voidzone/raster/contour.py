"""
Contour Tracer
==============

Marching squares over a Region, stitched into one closed outer boundary.

Geometry:
- Samples sit at cell centers: region cell (x, y) is the sample at
  raster point (x + 0.5, y + 0.5)
- A block is the 2x2 group of samples whose top-left sample is (bx, by);
  boundary points are midpoints between two samples, so they land on the
  half-cell lattice
- Cells outside the surface count as "not in region", which closes
  boundaries that run along the surface edge

Block code bits: top-left 8, top-right 4, bottom-right 2, bottom-left 1.

Saddles (5 and 10) always emit both segments and keep the in-region corners
connected. This can merge or split contours at single-cell diagonal
contacts; accepted because the region itself is 4-connected.

Only the outer boundary is returned. Holes are ignored.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

import numpy as np

from voidzone.logging import LogEvent, create_logger
from voidzone.raster.region import Region
from voidzone.results import NoContour

logger = create_logger("contour")

# Edge midpoints of block (bx, by) in doubled raster coordinates
# (raster = doubled / 2), so lattice points compare as integers.
_TOP, _RIGHT, _BOTTOM, _LEFT = range(4)
_MIDPOINT_OFFSETS = {
    _TOP: (2, 1),
    _RIGHT: (3, 2),
    _BOTTOM: (2, 3),
    _LEFT: (1, 2),
}

# Standard marching-squares table: code -> segments as (edge, edge)
EDGE_TABLE: Dict[int, Tuple[Tuple[int, int], ...]] = {
    0: (),
    1: ((_LEFT, _BOTTOM),),
    2: ((_BOTTOM, _RIGHT),),
    3: ((_LEFT, _RIGHT),),
    4: ((_TOP, _RIGHT),),
    5: ((_TOP, _LEFT), (_BOTTOM, _RIGHT)),
    6: ((_TOP, _BOTTOM),),
    7: ((_TOP, _LEFT),),
    8: ((_TOP, _LEFT),),
    9: ((_TOP, _BOTTOM),),
    10: ((_TOP, _RIGHT), (_BOTTOM, _LEFT)),
    11: ((_TOP, _RIGHT),),
    12: ((_LEFT, _RIGHT),),
    13: ((_BOTTOM, _RIGHT),),
    14: ((_LEFT, _BOTTOM),),
    15: (),
}

SADDLE_CODES = frozenset({5, 10})

LatticePoint = Tuple[int, int]
Segment = Tuple[LatticePoint, LatticePoint]


@dataclass(frozen=True)
class Polyline:
    """
    Closed polyline in raster space.

    The closing edge (last -> first) is implicit; the first point is not
    repeated at the end.

    Attributes:
        points: Nx2 float array, read-only
    """

    points: np.ndarray

    def __post_init__(self):
        if not isinstance(self.points, np.ndarray):
            raise TypeError(f"points must be np.ndarray, got {type(self.points)}")
        if self.points.ndim != 2 or self.points.shape[1] != 2:
            raise ValueError(f"points must be Nx2 array, got shape {self.points.shape}")
        self.points.flags.writeable = False

    def __len__(self) -> int:
        return len(self.points)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y)"""
        min_x, min_y = self.points.min(axis=0)
        max_x, max_y = self.points.max(axis=0)
        return float(min_x), float(min_y), float(max_x), float(max_y)


def block_codes(region: Region) -> Tuple[np.ndarray, int, int]:
    """
    Marching-squares codes for every block around the region's bbox.

    Returns:
        (codes, origin_x, origin_y) where codes[r, c] is the code of block
        (origin_x + c, origin_y + r)
    """
    padded = np.pad(region.visited, 1, mode="constant", constant_values=False)
    # padded[y + 1, x + 1] == visited[y, x]; blocks span samples
    # min-1 .. max+1 on each axis
    window = padded[region.min_y:region.max_y + 3, region.min_x:region.max_x + 3].astype(np.uint8)
    codes = (
        (window[:-1, :-1] << 3)
        | (window[:-1, 1:] << 2)
        | (window[1:, 1:] << 1)
        | window[1:, :-1]
    )
    return codes, region.min_x - 1, region.min_y - 1


def march(region: Region) -> List[Segment]:
    """
    Emit boundary segments for a region, in row-major block order.

    Segment endpoints are doubled raster coordinates.
    """
    codes, origin_x, origin_y = block_codes(region)
    segments: List[Segment] = []
    rows, cols = np.nonzero((codes != 0) & (codes != 15))
    for r, c in zip(rows.tolist(), cols.tolist()):
        bx2 = 2 * (origin_x + c)
        by2 = 2 * (origin_y + r)
        for a, b in EDGE_TABLE[int(codes[r, c])]:
            ax, ay = _MIDPOINT_OFFSETS[a]
            cx, cy = _MIDPOINT_OFFSETS[b]
            segments.append(((bx2 + ax, by2 + ay), (bx2 + cx, by2 + cy)))
    return segments


def stitch(segments: List[Segment]) -> Union[List[LatticePoint], None]:
    """
    Greedily chain segments from the first one until the loop closes.

    A segment may be entered from either end. Each lattice point touches at
    most two segments, so the walk is unambiguous.

    Returns:
        Loop vertices (start not repeated), or None if the walk dead-ends
    """
    by_point: Dict[LatticePoint, List[int]] = defaultdict(list)
    for index, (a, b) in enumerate(segments):
        by_point[a].append(index)
        by_point[b].append(index)

    used = [False] * len(segments)
    used[0] = True
    start, current = segments[0]
    loop = [start]

    for _ in range(len(segments)):
        if current == start:
            return loop
        loop.append(current)
        following = next((i for i in by_point[current] if not used[i]), None)
        if following is None:
            return None
        used[following] = True
        a, b = segments[following]
        current = b if a == current else a

    return loop if current == start else None


def trace(region: Region, min_vertices: int = 10) -> Union[Polyline, NoContour]:
    """
    Trace the outer boundary of a region.

    Args:
        region: Flood-fill result
        min_vertices: Smallest loop accepted as a usable zone

    Returns:
        Closed Polyline in raster space, or NoContour
    """
    if region.covers_surface:
        return NoContour(reason="region covers the whole surface")

    segments = march(region)
    if not segments:
        return NoContour(reason="no boundary segments")

    loop = stitch(segments)
    if loop is None:
        logger.warning(
            event=LogEvent.CONTOUR_OPEN,
            message="Boundary segments did not close into a loop",
            metadata={'segments': len(segments), 'seed': list(region.seed)},
        )
        return NoContour(reason="open contour")

    if len(loop) < min_vertices:
        return NoContour(reason="contour too small", vertex_count=len(loop))

    points = np.asarray(loop, dtype=np.float64) / 2.0
    logger.debug(
        event=LogEvent.CONTOUR_TRACED,
        message="Outer boundary traced",
        metadata={'segments': len(segments), 'vertices': len(loop)},
    )
    return Polyline(points=points)
