"""Shared fixtures for voidzone tests."""

import numpy as np
import pytest

from voidzone import DetectorConfig, MapModeConfig, RasterGrid, ViewSpace
from voidzone.raster.rasterizer import OccupancySurface


def _rect_path(x0, y0, x1, y1):
    return f"M{x0} {y0} H{x1} V{y1} H{x0} Z"


@pytest.fixture
def rect_path():
    """Factory: axis-aligned rectangle as path data (clockwise on screen)."""
    return _rect_path


@pytest.fixture
def rect_zone():
    """Factory: editor zone dict for an axis-aligned rectangle."""
    def make(zone_id, x0, y0, x1, y1):
        return {"id": zone_id, "shape": "path", "d": _rect_path(x0, y0, x1, y1)}
    return make


@pytest.fixture
def make_surface():
    """Factory: OccupancySurface from a bool-like array (copied)."""
    def make(occupied):
        return OccupancySurface(occupied=np.array(occupied, dtype=bool, copy=True))
    return make


@pytest.fixture
def square_grid():
    """100x100 view rasterized at one cell per view unit."""
    return RasterGrid(view=ViewSpace(width=100, height=100), width=100)


@pytest.fixture
def square_config():
    """Detector config over a single 100x100 map mode at full resolution."""
    return DetectorConfig(
        raster_width=100,
        map_modes=(MapModeConfig(name="square", view_width=100, view_height=100),),
        default_mode="square",
    )


@pytest.fixture
def l_gap_zones(rect_zone):
    """
    Three rectangles leaving an L-shaped gap open to the right/bottom edges.

        x: 0    30   50        100
        +----------------------+ y=0
        |         top          |
        +----+----+------------+ y=30
        |left|    |   block    |
        |    |    +------------+ y=70
        |    |   gap (L)       |
        +----+-----------------+ y=100
    """
    return [
        rect_zone("top", 0, 0, 100, 30),
        rect_zone("left", 0, 30, 30, 100),
        rect_zone("block", 50, 30, 100, 70),
    ]


@pytest.fixture
def l_gap_mask():
    """Expected free cells of l_gap_zones on the 100x100 grid."""
    mask = np.zeros((100, 100), dtype=bool)
    mask[30:100, 30:50] = True
    mask[70:100, 50:100] = True
    return mask
