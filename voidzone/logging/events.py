"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for the void-detection engine.

Event Naming Convention:
    <component>.<category>.<action>

    component: void, raster, region, contour, config
    category: query, polygon, seed, zone
    action: started, skipped, created, ...

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, message, metadata.zone_id
    | filter event = "raster.polygon.skipped"
    | stats count() by metadata.zone_id
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - void.*: One void-detection query, start to finish
    - raster.*: Occupancy surface construction
    - region.*: Flood fill
    - contour.*: Marching squares and stitching
    - config.*: Configuration loading
    """

    # ========== Query Events ==========
    VOID_QUERY_STARTED = "void.query.started"
    """Operator click received, query begins."""

    VOID_ZONE_CREATED = "void.zone.created"
    """Candidate zone produced for the clicked void."""

    VOID_SEED_OCCUPIED = "void.seed.occupied"
    """Click landed inside an existing zone."""

    VOID_SEED_OUT_OF_BOUNDS = "void.seed.out_of_bounds"
    """Click landed outside the rasterized view."""

    VOID_NO_CONTOUR = "void.contour.missing"
    """Region produced no usable boundary."""

    VOID_REGION_TOO_LARGE = "void.region.too_large"
    """Region exceeded the configured area cap."""

    # ========== Raster Events ==========
    RASTER_BUILT = "raster.built"
    """Occupancy surface filled."""

    RASTER_POLYGON_SKIPPED = "raster.polygon.skipped"
    """Zone path could not be parsed and was left out of the surface."""

    # ========== Region / Contour Events ==========
    REGION_GROWN = "region.grown"
    """Flood fill finished."""

    CONTOUR_TRACED = "contour.traced"
    """Boundary stitched into a closed polyline."""

    CONTOUR_OPEN = "contour.open"
    """Stitching ran out of segments before closing."""

    # ========== Config Events ==========
    CONFIG_LOADED = "config.loaded"
    """Detector configuration loaded from YAML."""


# Event categories for filtering
QUERY_EVENTS = {
    LogEvent.VOID_QUERY_STARTED,
    LogEvent.VOID_ZONE_CREATED,
    LogEvent.VOID_SEED_OCCUPIED,
    LogEvent.VOID_SEED_OUT_OF_BOUNDS,
    LogEvent.VOID_NO_CONTOUR,
    LogEvent.VOID_REGION_TOO_LARGE,
}

RASTER_EVENTS = {
    LogEvent.RASTER_BUILT,
    LogEvent.RASTER_POLYGON_SKIPPED,
    LogEvent.REGION_GROWN,
    LogEvent.CONTOUR_TRACED,
    LogEvent.CONTOUR_OPEN,
}
