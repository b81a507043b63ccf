"""
Void Detector Module
====================

Bounded Context: One "create zone from void" query, end to end.

Flow:

    screen click --(CoordinateMapper)--> view point --> raster cell
        --> rasterize zones --> grow region --> trace --> simplify
        --(CoordinateMapper)--> view-space path --> ZoneCandidate

Design:
- Pure function of (zone snapshot, click, viewport, map mode)
- Seed bounds are checked before any rasterization
- Every outcome is a typed value (see voidzone.results)
- Intermediate artifacts exposed through VoidAnalysis for diagnostics
"""

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np

from voidzone.config import DetectorConfig
from voidzone.geometry.mapping import CoordinateMapper, RasterGrid, ViewportTransform
from voidzone.geometry.path import format_path_data
from voidzone.geometry.simplify import simplify
from voidzone.logging import LogEvent, create_logger
from voidzone.raster.contour import Polyline, trace
from voidzone.raster.rasterizer import OccupancySurface, rasterize
from voidzone.raster.region import Region, grow
from voidzone.results import (
    MalformedPolygon,
    NoContour,
    QueryFailure,
    RegionTooLarge,
    SeedOccupied,
    SeedOutOfBounds,
    VoidQueryResult,
    ZoneCandidate,
    ZoneVoidCreated,
    next_void_id,
)
from voidzone.zone import ZoneRecord

logger = create_logger("detector")

ZoneInput = Union[ZoneRecord, Mapping[str, Any]]


@dataclass(frozen=True)
class VoidAnalysis:
    """
    Everything one query produced, for diagnostics and previews.

    Attributes:
        result: Final outcome
        grid: Raster grid used
        view_point: Seed in view space
        surface: Occupancy surface (None if rejected before rasterization)
        region: Flood-fill result (None if the seed was unusable)
        polyline: Simplified raster-space contour (None on failure)
    """

    result: VoidQueryResult
    grid: RasterGrid
    view_point: Tuple[float, float]
    surface: Optional[OccupancySurface] = None
    region: Optional[Region] = None
    polyline: Optional[Polyline] = None

    @property
    def succeeded(self) -> bool:
        return isinstance(self.result, ZoneVoidCreated)


@dataclass
class _ZoneSnapshot:
    records: List[ZoneRecord] = field(default_factory=list)
    skipped: List[MalformedPolygon] = field(default_factory=list)
    ids: set = field(default_factory=set)


class VoidDetector:
    """
    Detects the unoccupied region under a click and proposes a zone for it.

    Usage:
        detector = VoidDetector(DetectorConfig())

        result = detector.detect(
            zones=[{"id": "Z01", "shape": "path", "d": "M10 10 H200 V200 H10 Z"}],
            screen_point=(640, 400),
            viewport=ViewportTransform(left=0, top=0, width=1280, height=844),
            mode="base",
        )
        if isinstance(result, ZoneVoidCreated):
            editor.insert(result.candidate.to_dict())
        else:
            editor.notify(result.message)
    """

    def __init__(self, config: Optional[DetectorConfig] = None):
        self.config = config or DetectorConfig()

    def grid_for(self, mode: Optional[str] = None) -> RasterGrid:
        """Raster grid over the view space of a map mode."""
        view = self.config.map_mode(mode).view_space
        return RasterGrid(view=view, width=self.config.raster_width)

    def detect(
        self,
        zones: Iterable[ZoneInput],
        screen_point: Tuple[float, float],
        viewport: Optional[ViewportTransform] = None,
        mode: Optional[str] = None,
    ) -> VoidQueryResult:
        """
        Run one query from a screen click.

        Args:
            zones: Snapshot of the current zones (records or editor dicts)
            screen_point: Click position in screen pixels
            viewport: Live pan/zoom state; identity when None
            mode: Map mode name; configured default when None

        Returns:
            ZoneVoidCreated or a QueryFailure variant
        """
        return self.analyze(zones, screen_point, viewport, mode).result

    def analyze(
        self,
        zones: Iterable[ZoneInput],
        screen_point: Tuple[float, float],
        viewport: Optional[ViewportTransform] = None,
        mode: Optional[str] = None,
    ) -> VoidAnalysis:
        """Same as detect() but keeps the intermediate artifacts."""
        grid = self.grid_for(mode)
        mapper = CoordinateMapper(grid)
        viewport = viewport or ViewportTransform.identity(grid.view)
        view_point = mapper.screen_to_view(screen_point, viewport)
        return self._run(zones, view_point, grid, mapper)

    def analyze_view_point(
        self,
        zones: Iterable[ZoneInput],
        view_point: Tuple[float, float],
        mode: Optional[str] = None,
    ) -> VoidAnalysis:
        """Run one query from a point already in view space."""
        grid = self.grid_for(mode)
        return self._run(zones, view_point, grid, CoordinateMapper(grid))

    def _snapshot(self, zones: Iterable[ZoneInput], grid: RasterGrid) -> _ZoneSnapshot:
        snapshot = _ZoneSnapshot()
        for zone in zones:
            if isinstance(zone, ZoneRecord):
                record = zone
            else:
                try:
                    record = ZoneRecord.from_dict(dict(zone), grid.view)
                except (TypeError, ValueError) as e:
                    zone_id = str(zone.get("id", "?")) if isinstance(zone, Mapping) else "?"
                    snapshot.skipped.append(MalformedPolygon(zone_id=zone_id, reason=str(e)))
                    snapshot.ids.add(zone_id)
                    logger.warning(
                        event=LogEvent.RASTER_POLYGON_SKIPPED,
                        message="Skipped unreadable zone record",
                        metadata={'zone_id': zone_id},
                        exc_info=e,
                    )
                    continue
            snapshot.records.append(record)
            snapshot.ids.add(record.zone_id)
        return snapshot

    def _run(
        self,
        zones: Iterable[ZoneInput],
        view_point: Tuple[float, float],
        grid: RasterGrid,
        mapper: CoordinateMapper,
    ) -> VoidAnalysis:
        config = self.config
        view_point = (float(view_point[0]), float(view_point[1]))
        logger.info(
            event=LogEvent.VOID_QUERY_STARTED,
            message="Void detection requested",
            metadata={'view_point': list(view_point)},
        )

        cell = mapper.raster_cell(view_point)
        if cell is None:
            result = SeedOutOfBounds(point=view_point, space="view")
            self._log_failure(result)
            return VoidAnalysis(result=result, grid=grid, view_point=view_point)

        snapshot = self._snapshot(zones, grid)
        surface = rasterize(snapshot.records, grid, curve_steps=config.curve_steps)
        skipped = tuple(snapshot.skipped) + surface.skipped

        # Seed at the exact raster position; grow() floors it to `cell`
        raster_seed = (view_point[0] * grid.scale_x, view_point[1] * grid.scale_y)
        region = grow(surface, raster_seed)
        if isinstance(region, (SeedOccupied, SeedOutOfBounds)):
            self._log_failure(region)
            return VoidAnalysis(result=region, grid=grid, view_point=view_point, surface=surface)

        if config.max_region_fraction is not None:
            limit = int(math.floor(config.max_region_fraction * surface.size))
            if region.cell_count > limit:
                result = RegionTooLarge(cell_count=region.cell_count, limit=limit)
                self._log_failure(result)
                return VoidAnalysis(
                    result=result, grid=grid, view_point=view_point,
                    surface=surface, region=region,
                )

        traced = trace(region, min_vertices=config.min_vertices)
        if isinstance(traced, NoContour):
            self._log_failure(traced)
            return VoidAnalysis(
                result=traced, grid=grid, view_point=view_point,
                surface=surface, region=region,
            )

        polyline = simplify(traced, config.min_spacing)
        if len(polyline) < config.min_vertices:
            result = NoContour(reason="too few vertices after simplification", vertex_count=len(polyline))
            self._log_failure(result)
            return VoidAnalysis(
                result=result, grid=grid, view_point=view_point,
                surface=surface, region=region,
            )

        view_points = mapper.raster_to_view(polyline.points)
        candidate = self._mint_candidate(view_points, snapshot.ids)
        result = ZoneVoidCreated(
            candidate=candidate,
            vertex_count=len(polyline),
            region_cells=region.cell_count,
            skipped=skipped,
        )
        logger.info(
            event=LogEvent.VOID_ZONE_CREATED,
            message="Created zone from void",
            metadata={
                'zone_id': candidate.zone_id,
                'vertices': len(polyline),
                'region_cells': region.cell_count,
                'skipped_zones': len(skipped),
            },
        )
        return VoidAnalysis(
            result=result,
            grid=grid,
            view_point=view_point,
            surface=surface,
            region=region,
            polyline=polyline,
        )

    def _mint_candidate(self, view_points: np.ndarray, existing_ids: Iterable[str]) -> ZoneCandidate:
        zone_id = next_void_id(
            existing_ids, prefix=self.config.id_prefix, width=self.config.id_width
        )
        return ZoneCandidate(
            zone_id=zone_id,
            name=self.config.name_template.format(id=zone_id),
            path_data=format_path_data(view_points.tolist(), precision=self.config.path_precision),
        )

    def _log_failure(self, failure: QueryFailure) -> None:
        events = {
            SeedOccupied: LogEvent.VOID_SEED_OCCUPIED,
            SeedOutOfBounds: LogEvent.VOID_SEED_OUT_OF_BOUNDS,
            NoContour: LogEvent.VOID_NO_CONTOUR,
            RegionTooLarge: LogEvent.VOID_REGION_TOO_LARGE,
        }
        logger.info(
            event=events[type(failure)],
            message=failure.message,
            metadata=failure.to_dict(),
        )
