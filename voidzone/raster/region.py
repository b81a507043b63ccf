"""
Region Grower
=============

Breadth-first flood fill over the unoccupied cells of an OccupancySurface.

Design:
- 4-connectivity only: diagonal gaps between zones never leak
- Work list preallocated to the surface size, no recursion
- Bounding box tracked while expanding
- Seed failures are returned as values (SeedOccupied / SeedOutOfBounds)
"""

import math
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from voidzone.logging import LogEvent, create_logger
from voidzone.raster.rasterizer import OccupancySurface
from voidzone.results import SeedOccupied, SeedOutOfBounds

logger = create_logger("region")


@dataclass(frozen=True)
class Region:
    """
    Maximal 4-connected unoccupied area containing a seed.

    Attributes:
        visited: (height, width) bool membership grid, read-only
        min_x, max_x, min_y, max_y: Inclusive bounding box of member cells
        seed: (ix, iy) cell the fill started from
        cell_count: Number of member cells

    Invariants:
        - visited[seed] is True
        - every member cell is inside the bounding box
    """

    visited: np.ndarray
    min_x: int
    max_x: int
    min_y: int
    max_y: int
    seed: Tuple[int, int]
    cell_count: int

    def __post_init__(self):
        if self.visited.ndim != 2 or self.visited.dtype != np.bool_:
            raise ValueError("visited must be a 2-D bool array")
        if not (self.min_x <= self.max_x and self.min_y <= self.max_y):
            raise ValueError(
                f"Invalid bounding box x[{self.min_x}, {self.max_x}] y[{self.min_y}, {self.max_y}]"
            )
        self.visited.flags.writeable = False

    @property
    def width(self) -> int:
        return self.visited.shape[1]

    @property
    def height(self) -> int:
        return self.visited.shape[0]

    @property
    def bbox(self) -> Tuple[int, int, int, int]:
        """(min_x, max_x, min_y, max_y)"""
        return self.min_x, self.max_x, self.min_y, self.max_y

    @property
    def covers_surface(self) -> bool:
        """True when every cell of the surface belongs to the region."""
        return self.cell_count == self.visited.size

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height and bool(self.visited[y, x])


def grow(
    surface: OccupancySurface,
    seed: Tuple[float, float],
) -> Union[Region, SeedOccupied, SeedOutOfBounds]:
    """
    Flood-fill the unoccupied region around a seed cell.

    Args:
        surface: Occupancy grid
        seed: (x, y) in raster space; fractional values select the containing cell

    Returns:
        Region, or SeedOutOfBounds / SeedOccupied when the seed is unusable

    Example:
        >>> result = grow(surface, (12, 40))
        >>> if isinstance(result, Region):
        ...     print(result.cell_count, result.bbox)
    """
    if not all(math.isfinite(v) for v in seed):
        return SeedOutOfBounds(point=(float(seed[0]), float(seed[1])), space="raster")

    ix, iy = math.floor(seed[0]), math.floor(seed[1])
    if not surface.in_bounds(ix, iy):
        return SeedOutOfBounds(point=(float(seed[0]), float(seed[1])), space="raster")
    if surface.is_occupied(ix, iy):
        return SeedOccupied(cell=(ix, iy))

    width, height = surface.width, surface.height
    size = width * height
    # Flat python lists index far faster than numpy scalars in the hot loop
    occupied = surface.occupied.ravel().tolist()
    visited = bytearray(size)
    queue = [0] * size
    head, tail = 0, 0

    start = iy * width + ix
    visited[start] = 1
    queue[tail] = start
    tail += 1
    min_x = max_x = ix
    min_y = max_y = iy

    while head < tail:
        index = queue[head]
        head += 1
        y, x = divmod(index, width)

        if x < min_x:
            min_x = x
        elif x > max_x:
            max_x = x
        if y < min_y:
            min_y = y
        elif y > max_y:
            max_y = y

        # right, left, down, up
        if x + 1 < width:
            n = index + 1
            if not visited[n] and not occupied[n]:
                visited[n] = 1
                queue[tail] = n
                tail += 1
        if x > 0:
            n = index - 1
            if not visited[n] and not occupied[n]:
                visited[n] = 1
                queue[tail] = n
                tail += 1
        if y + 1 < height:
            n = index + width
            if not visited[n] and not occupied[n]:
                visited[n] = 1
                queue[tail] = n
                tail += 1
        if y > 0:
            n = index - width
            if not visited[n] and not occupied[n]:
                visited[n] = 1
                queue[tail] = n
                tail += 1

    mask = np.frombuffer(bytes(visited), dtype=np.uint8).reshape(height, width).astype(bool)

    logger.debug(
        event=LogEvent.REGION_GROWN,
        message="Flood fill finished",
        metadata={
            'seed': [ix, iy],
            'cells': tail,
            'bbox': [min_x, max_x, min_y, max_y],
        },
    )
    return Region(
        visited=mask,
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
        seed=(ix, iy),
        cell_count=tail,
    )
