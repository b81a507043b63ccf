"""
Coordinate Mapping Module
=========================

Pure scale+translate mappings between the three coordinate spaces:

    screen (pointer)  <->  view (zone geometry)  <->  raster (occupancy grid)

Design:
- Immutable value objects (frozen dataclass pattern)
- Screen <-> view is recomputed from the live ViewportTransform on every call
- View <-> raster is a fixed per-axis scale; raster cell (i, j) covers
  [i, i+1) x [j, j+1) in raster space
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

Point = Tuple[float, float]


@dataclass(frozen=True)
class ViewSpace:
    """
    Fixed logical canvas all zone geometry is authored in.

    Attributes:
        width: Canvas width in view units
        height: Canvas height in view units
    """

    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"ViewSpace dimensions must be positive, got {self.width}x{self.height}"
            )


@dataclass(frozen=True)
class RasterGrid:
    """
    Downscaled occupancy grid laid over a ViewSpace.

    Height is derived from width so the view aspect ratio is kept.

    Attributes:
        view: ViewSpace being sampled
        width: Number of raster columns
        height: Number of raster rows (derived)
    """

    view: ViewSpace
    width: int
    height: int = field(init=False)

    def __post_init__(self):
        if self.width < 2:
            raise ValueError(f"Raster width must be >= 2, got {self.width}")
        height = round(self.width * self.view.height / self.view.width)
        if height < 2:
            raise ValueError(
                f"Raster height derived from width {self.width} is too small ({height})"
            )
        object.__setattr__(self, 'height', height)

    @property
    def shape(self) -> Tuple[int, int]:
        """(rows, cols) for numpy allocation."""
        return self.height, self.width

    @property
    def scale_x(self) -> float:
        """Raster cells per view unit along x."""
        return self.width / self.view.width

    @property
    def scale_y(self) -> float:
        """Raster cells per view unit along y."""
        return self.height / self.view.height


@dataclass(frozen=True)
class ViewportTransform:
    """
    Live pan/zoom state of the map on screen.

    The viewport box is the on-screen element hosting the map. Pan and zoom
    are applied about the center of that box (``translate(pan) scale(zoom)``),
    and the ViewSpace is fitted inside the box keeping its aspect ratio,
    centered (``meet``).

    Attributes:
        left: Screen x of the viewport box
        top: Screen y of the viewport box
        width: Viewport box width in screen pixels
        height: Viewport box height in screen pixels
        pan_x: Horizontal pan offset in screen pixels
        pan_y: Vertical pan offset in screen pixels
        zoom: Zoom scale factor
    """

    left: float
    top: float
    width: float
    height: float
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Viewport dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.zoom <= 0:
            raise ValueError(f"zoom must be > 0, got {self.zoom}")

    @classmethod
    def identity(cls, view: ViewSpace) -> "ViewportTransform":
        """Viewport where screen coordinates equal view coordinates."""
        return cls(left=0.0, top=0.0, width=view.width, height=view.height)

    def fit(self, view: ViewSpace) -> Tuple[float, float, float]:
        """
        Contain-fit of the view into the untransformed viewport box.

        Returns:
            (scale, offset_x, offset_y) in viewport-local pixels
        """
        scale = min(self.width / view.width, self.height / view.height)
        offset_x = (self.width - view.width * scale) / 2.0
        offset_y = (self.height - view.height * scale) / 2.0
        return scale, offset_x, offset_y


class CoordinateMapper:
    """
    Maps points between screen, view and raster spaces.

    Usage:
        mapper = CoordinateMapper(RasterGrid(ViewSpace(1280, 844), width=420))

        view_pt = mapper.screen_to_view((640, 400), viewport)
        cell = mapper.raster_cell(view_pt)          # (ix, iy) or None
        view_poly = mapper.raster_to_view(raster_poly)
    """

    def __init__(self, grid: RasterGrid):
        self.grid = grid

    @property
    def view(self) -> ViewSpace:
        return self.grid.view

    def screen_to_view(self, point: Point, viewport: ViewportTransform) -> Point:
        """Invert the live pan/zoom/fit transform for one screen point."""
        sx, sy = point
        center_x = viewport.left + viewport.width / 2.0
        center_y = viewport.top + viewport.height / 2.0

        # Undo translate(pan) scale(zoom) about the box center
        local_x = (sx - center_x - viewport.pan_x) / viewport.zoom + viewport.width / 2.0
        local_y = (sy - center_y - viewport.pan_y) / viewport.zoom + viewport.height / 2.0

        scale, offset_x, offset_y = viewport.fit(self.view)
        return (local_x - offset_x) / scale, (local_y - offset_y) / scale

    def view_to_screen(self, point: Point, viewport: ViewportTransform) -> Point:
        """Forward mapping, inverse of screen_to_view."""
        vx, vy = point
        scale, offset_x, offset_y = viewport.fit(self.view)
        local_x = vx * scale + offset_x
        local_y = vy * scale + offset_y

        center_x = viewport.left + viewport.width / 2.0
        center_y = viewport.top + viewport.height / 2.0
        sx = (local_x - viewport.width / 2.0) * viewport.zoom + center_x + viewport.pan_x
        sy = (local_y - viewport.height / 2.0) * viewport.zoom + center_y + viewport.pan_y
        return sx, sy

    def view_to_raster(self, points: np.ndarray) -> np.ndarray:
        """Scale Nx2 view points into raster space."""
        points = np.asarray(points, dtype=np.float64)
        return points * np.array([self.grid.scale_x, self.grid.scale_y])

    def raster_to_view(self, points: np.ndarray) -> np.ndarray:
        """Scale Nx2 raster points back into view space."""
        points = np.asarray(points, dtype=np.float64)
        return points / np.array([self.grid.scale_x, self.grid.scale_y])

    def raster_cell(self, point: Point) -> Optional[Tuple[int, int]]:
        """
        Raster cell containing a view point.

        Returns:
            (ix, iy), or None if the point falls outside the grid
        """
        rx = point[0] * self.grid.scale_x
        ry = point[1] * self.grid.scale_y
        if not (math.isfinite(rx) and math.isfinite(ry)):
            return None
        ix, iy = math.floor(rx), math.floor(ry)
        if not (0 <= ix < self.grid.width and 0 <= iy < self.grid.height):
            return None
        return ix, iy
