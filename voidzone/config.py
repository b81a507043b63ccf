"""
Configuration schema for the void detector.

Defines the raster resolution, contour acceptance thresholds, id minting
and the fixed view sizes of every map mode.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple
import yaml

from voidzone.geometry.mapping import ViewSpace
from voidzone.logging import LogEvent, create_logger

logger = create_logger("config")


@dataclass(frozen=True)
class MapModeConfig:
    """Fixed view size of one map mode."""

    name: str
    view_width: float
    view_height: float

    def __post_init__(self):
        """Validate map mode."""
        if not self.name:
            raise ValueError("map mode name cannot be empty")
        if self.view_width <= 0 or self.view_height <= 0:
            raise ValueError(
                f"Map mode '{self.name}' must have positive view size, "
                f"got {self.view_width}x{self.view_height}"
            )

    @property
    def view_space(self) -> ViewSpace:
        return ViewSpace(width=self.view_width, height=self.view_height)


DEFAULT_MAP_MODES: Tuple[MapModeConfig, ...] = (
    MapModeConfig(name="base", view_width=1280, view_height=844),
    MapModeConfig(name="project", view_width=1280, view_height=844),
    MapModeConfig(name="eng", view_width=1151, view_height=766),
)


@dataclass(frozen=True)
class DetectorConfig:
    """
    Main configuration for VoidDetector.

    Loaded from YAML (or defaulted) and validated at construction.
    Immutable after construction (frozen dataclass).
    """

    # Raster resolution (height derived from the view aspect ratio)
    raster_width: int = 420

    # Contour acceptance
    min_spacing: float = 0.3
    min_vertices: int = 10

    # Optional area cap as a fraction of the raster; None disables it
    max_region_fraction: Optional[float] = None

    # Path codec
    curve_steps: int = 16
    path_precision: int = 2

    # Candidate minting
    id_prefix: str = "ZVOID"
    id_width: int = 2
    name_template: str = "Void {id}"

    map_modes: Tuple[MapModeConfig, ...] = field(default_factory=lambda: DEFAULT_MAP_MODES)
    default_mode: str = "base"

    def __post_init__(self):
        """Validate detector configuration."""
        if not 16 <= self.raster_width <= 4096:
            raise ValueError(
                f"raster_width must be in [16, 4096], got {self.raster_width}"
            )

        if self.min_spacing < 0:
            raise ValueError(f"min_spacing must be >= 0, got {self.min_spacing}")

        if self.min_vertices < 3:
            raise ValueError(f"min_vertices must be >= 3, got {self.min_vertices}")

        if self.max_region_fraction is not None and not 0.0 < self.max_region_fraction <= 1.0:
            raise ValueError(
                f"max_region_fraction must be in (0.0, 1.0], got {self.max_region_fraction}"
            )

        if self.curve_steps < 1:
            raise ValueError(f"curve_steps must be >= 1, got {self.curve_steps}")

        if not 0 <= self.path_precision <= 6:
            raise ValueError(
                f"path_precision must be in [0, 6], got {self.path_precision}"
            )

        if not self.id_prefix:
            raise ValueError("id_prefix cannot be empty")

        if "{id}" not in self.name_template:
            raise ValueError(
                f"name_template must contain '{{id}}', got {self.name_template!r}"
            )

        names = [mode.name for mode in self.map_modes]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate map mode names: {names}")
        if self.default_mode not in names:
            raise ValueError(
                f"default_mode '{self.default_mode}' not in map modes {names}"
            )

    def map_mode(self, name: Optional[str] = None) -> MapModeConfig:
        """
        Look up a map mode by name (default mode when None).

        Raises:
            KeyError: If the mode is not configured
        """
        name = name or self.default_mode
        for mode in self.map_modes:
            if mode.name == name:
                return mode
        raise KeyError(
            f"Unknown map mode: {name}. Available: {[m.name for m in self.map_modes]}"
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "DetectorConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            raster_width: 420
            min_spacing: 0.3
            min_vertices: 10
            max_region_fraction: null   # e.g. 0.45 to reject the outer background

            id_prefix: "ZVOID"
            name_template: "Void {id}"

            default_mode: "base"
            map_modes:
              - name: "base"
                view_width: 1280
                view_height: 844
              - name: "eng"
                view_width: 1151
                view_height: 766
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        modes_data = data.pop("map_modes", None)
        if modes_data is not None:
            data["map_modes"] = tuple(
                MapModeConfig(
                    name=m["name"],
                    view_width=m["view_width"],
                    view_height=m["view_height"],
                )
                for m in modes_data
            )

        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        config = cls(**data)
        logger.info(
            event=LogEvent.CONFIG_LOADED,
            message="Detector configuration loaded",
            metadata={'path': str(yaml_path), 'raster_width': config.raster_width},
        )
        return config
