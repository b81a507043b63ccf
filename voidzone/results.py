"""
Query Result Types
==================

Bounded Context: Outcomes of a void-detection query.

Design Principles:
- Tagged variants: one frozen dataclass per outcome, no sentinel values
- Every failure is an ordinary value carrying a user-facing ``message``
- Serialization: to_dict() for JSON export

Variants:
- ZoneVoidCreated: success, carries the ZoneCandidate
- SeedOccupied: click landed inside an existing zone
- SeedOutOfBounds: click landed outside the rasterized view
- NoContour: region has no usable boundary
- RegionTooLarge: region exceeds the optional area cap

MalformedPolygon is not a query outcome: it is recorded per skipped zone
while the occupancy surface is built and the query carries on.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Tuple, Union

from voidzone.zone import ShapeKind


@dataclass(frozen=True)
class MalformedPolygon:
    """A zone left out of the occupancy surface because its path did not parse."""

    zone_id: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class QueryFailure:
    """Base for failed query outcomes."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def message(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["kind"] = self.kind
        payload["message"] = self.message
        return payload


@dataclass(frozen=True)
class SeedOccupied(QueryFailure):
    """
    Seed cell is covered by an existing zone.

    Attributes:
        cell: (ix, iy) raster cell of the seed
    """

    cell: Tuple[int, int]

    @property
    def message(self) -> str:
        return "Not a void here (or the gap is too small)."


@dataclass(frozen=True)
class SeedOutOfBounds(QueryFailure):
    """
    Seed falls outside the raster grid.

    Attributes:
        point: Seed position in the space it was rejected in
        space: "view" or "raster"
    """

    point: Tuple[float, float]
    space: str = "view"

    @property
    def message(self) -> str:
        return "Click is outside the map."


@dataclass(frozen=True)
class NoContour(QueryFailure):
    """
    Region produced no closed boundary, or one too small to be a zone.

    Attributes:
        reason: Short machine-readable cause
        vertex_count: Vertices traced before rejection, if any
    """

    reason: str
    vertex_count: int = 0

    @property
    def message(self) -> str:
        return "Could not build the void contour."


@dataclass(frozen=True)
class RegionTooLarge(QueryFailure):
    """
    Region exceeds the configured area cap (e.g. the background around the map).

    Attributes:
        cell_count: Cells in the region
        limit: Largest accepted cell count
    """

    cell_count: int
    limit: int

    @property
    def message(self) -> str:
        return "This looks like the outer background, not a local void."


@dataclass(frozen=True)
class ZoneCandidate:
    """
    New zone proposed for the clicked void.

    Owned by the caller once returned.

    Attributes:
        zone_id: Fresh unique id (e.g. ZVOID01)
        name: Placeholder display name
        path_data: Closed polygon in view-space SVG path data
        shape: Always polygon
    """

    zone_id: str
    name: str
    path_data: str
    shape: ShapeKind = ShapeKind.POLYGON

    def to_dict(self) -> Dict[str, str]:
        """Serialize to the editor's zone dict shape."""
        return {
            "id": self.zone_id,
            "name": self.name,
            "shape": self.shape.value,
            "d": self.path_data,
        }


@dataclass(frozen=True)
class ZoneVoidCreated:
    """
    Successful query.

    Attributes:
        candidate: Zone to insert
        vertex_count: Vertices in the emitted polygon
        region_cells: Raster cells in the filled void
        skipped: Zones left out of the occupancy surface
    """

    candidate: ZoneCandidate
    vertex_count: int
    region_cells: int
    skipped: Tuple[MalformedPolygon, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": type(self).__name__,
            "candidate": self.candidate.to_dict(),
            "vertex_count": self.vertex_count,
            "region_cells": self.region_cells,
            "skipped": [s.to_dict() for s in self.skipped],
        }


VoidQueryResult = Union[ZoneVoidCreated, SeedOccupied, SeedOutOfBounds, NoContour, RegionTooLarge]


def next_void_id(existing_ids, prefix: str = "ZVOID", width: int = 2) -> str:
    """
    First free id of the form ``<prefix><n>`` with n zero-padded.

    Example:
        >>> next_void_id({"ZVOID01", "ZVOID02"})
        'ZVOID03'
    """
    taken = set(existing_ids)
    n = 1
    while f"{prefix}{n:0{width}d}" in taken:
        n += 1
    return f"{prefix}{n:0{width}d}"
