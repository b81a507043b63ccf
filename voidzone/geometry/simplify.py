"""
Polyline density reduction.

Single forward pass: the first point is always kept, every later point is
kept only if it lies more than ``min_spacing`` from the last kept point.
No curvature awareness; raster resolution already bounds fidelity.
"""

import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from voidzone.raster.contour import Polyline


def simplify(polyline: "Polyline", min_spacing: float = 0.3) -> "Polyline":
    """
    Drop points closer than ``min_spacing`` to the previously kept point.

    Args:
        polyline: Closed raster-space polyline
        min_spacing: Minimum distance between consecutive kept points

    Returns:
        New Polyline of the same type; the closing edge is not checked
    """
    if min_spacing < 0:
        raise ValueError(f"min_spacing must be >= 0, got {min_spacing}")

    points = polyline.points
    if len(points) == 0:
        return polyline

    coords = points.tolist()
    last_x, last_y = coords[0]
    kept = [(last_x, last_y)]
    for x, y in coords[1:]:
        if math.hypot(x - last_x, y - last_y) > min_spacing:
            kept.append((x, y))
            last_x, last_y = x, y

    return type(polyline)(points=np.asarray(kept, dtype=np.float64))
