"""
Zone Input Module
=================

Bounded Context: Zone records handed over by the editor.

Design:
- ZoneRecord mirrors what the editor stores ({id, shape, d})
- VectorPolygon is the parsed form the rasterizer consumes
- Both immutable; the zone list is passed in as a snapshot per query
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Tuple

import numpy as np

from voidzone.geometry.mapping import ViewSpace
from voidzone.geometry.path import format_path_data, parse_path_data


class ShapeKind(str, Enum):
    """Zone shape discriminator. Lines never occupy area."""

    POLYGON = "polygon"
    LINE = "line"


# Editor shape names -> kind; "rect" zones are converted to a path first
_SHAPE_ALIASES = {
    "polygon": ShapeKind.POLYGON,
    "path": ShapeKind.POLYGON,
    "rect": ShapeKind.POLYGON,
    "line": ShapeKind.LINE,
}


def rect_to_path(rect: Mapping[str, Any], view: ViewSpace) -> str:
    """
    Convert a percent rectangle ({x, y, w, h} in 0..100) to view-space path data.

    Example:
        >>> rect_to_path({"x": 0, "y": 0, "w": 50, "h": 50}, ViewSpace(200, 100))
        'M0.00 0.00 L100.00 0.00 L100.00 50.00 L0.00 50.00 Z'
    """
    try:
        x = float(rect["x"]) / 100.0 * view.width
        y = float(rect["y"]) / 100.0 * view.height
        w = float(rect["w"]) / 100.0 * view.width
        h = float(rect["h"]) / 100.0 * view.height
    except KeyError as e:
        raise ValueError(f"Missing required rect field: {e}")
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid rect data: {e}")
    return format_path_data([(x, y), (x + w, y), (x + w, y + h), (x, y + h)])


@dataclass(frozen=True)
class ZoneRecord:
    """
    One zone as stored by the editor.

    Attributes:
        zone_id: Unique zone identifier
        shape_kind: polygon or line
        path_data: SVG path data in view-space units (may be empty)
    """

    zone_id: str
    shape_kind: ShapeKind
    path_data: str

    def __post_init__(self):
        if not self.zone_id:
            raise ValueError("zone_id cannot be empty")
        if not isinstance(self.shape_kind, ShapeKind):
            raise TypeError(f"shape_kind must be ShapeKind, got {type(self.shape_kind)}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], view: ViewSpace) -> "ZoneRecord":
        """
        Build a record from the editor's zone dict.

        Accepts ``{"id", "shape", "d"}``; ``shape`` defaults to ``path``.
        Rect zones (``shape: rect``) carry ``rect`` in percent of the view.

        Raises:
            ValueError: If id is missing or the shape is unknown
        """
        if "id" not in data:
            raise ValueError("Missing required zone field: 'id'")

        shape_name = str(data.get("shape") or "path").lower()
        if shape_name not in _SHAPE_ALIASES:
            raise ValueError(
                f"Invalid shape for zone '{data['id']}': {shape_name}. "
                f"Must be one of {sorted(_SHAPE_ALIASES)}"
            )

        path_data = data.get("d") or ""
        if shape_name == "rect" and not path_data and data.get("rect"):
            path_data = rect_to_path(data["rect"], view)

        return cls(
            zone_id=str(data["id"]),
            shape_kind=_SHAPE_ALIASES[shape_name],
            path_data=str(path_data),
        )


@dataclass(frozen=True)
class VectorPolygon:
    """
    Parsed zone boundary.

    Attributes:
        zone_id: Owning zone
        kind: polygon or line
        subpaths: Flattened Nx2 vertex arrays (view units), implicitly closed
    """

    zone_id: str
    kind: ShapeKind
    subpaths: Tuple[np.ndarray, ...]

    def __post_init__(self):
        for subpath in self.subpaths:
            if subpath.ndim != 2 or subpath.shape[1] != 2:
                raise ValueError(f"subpaths must be Nx2 arrays, got shape {subpath.shape}")
            subpath.flags.writeable = False

    @classmethod
    def from_record(cls, record: ZoneRecord, curve_steps: int = 16) -> "VectorPolygon":
        """
        Parse a zone record.

        Raises:
            MalformedPathError: If the record's path data cannot be parsed
        """
        subpaths = parse_path_data(record.path_data, curve_steps=curve_steps)
        return cls(zone_id=record.zone_id, kind=record.shape_kind, subpaths=tuple(subpaths))

    @property
    def occupies_area(self) -> bool:
        return self.kind is ShapeKind.POLYGON and len(self.subpaths) > 0
