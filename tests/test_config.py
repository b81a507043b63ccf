"""Tests for detector configuration."""

from pathlib import Path

import pytest

from voidzone.config import DEFAULT_MAP_MODES, DetectorConfig, MapModeConfig

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config" / "detector.yaml"


def test_defaults():
    config = DetectorConfig()
    assert config.raster_width == 420
    assert config.min_spacing == 0.3
    assert config.min_vertices == 10
    assert config.max_region_fraction is None
    assert config.map_modes == DEFAULT_MAP_MODES
    assert config.map_mode().name == "base"


def test_map_mode_lookup():
    config = DetectorConfig()
    eng = config.map_mode("eng")
    assert (eng.view_width, eng.view_height) == (1151, 766)
    assert eng.view_space.width == 1151
    with pytest.raises(KeyError):
        config.map_mode("satellite")


@pytest.mark.parametrize("overrides", [
    {"raster_width": 8},
    {"raster_width": 5000},
    {"min_spacing": -0.1},
    {"min_vertices": 2},
    {"max_region_fraction": 0.0},
    {"max_region_fraction": 1.5},
    {"curve_steps": 0},
    {"path_precision": 7},
    {"id_prefix": ""},
    {"name_template": "Void"},
    {"default_mode": "missing"},
    {"map_modes": (MapModeConfig("a", 10, 10), MapModeConfig("a", 20, 20)), "default_mode": "a"},
])
def test_invalid_config(overrides):
    with pytest.raises(ValueError):
        DetectorConfig(**overrides)


def test_invalid_map_mode():
    with pytest.raises(ValueError):
        MapModeConfig(name="flat", view_width=100, view_height=0)


def test_from_yaml(tmp_path):
    path = tmp_path / "detector.yaml"
    path.write_text(
        "raster_width: 200\n"
        "max_region_fraction: 0.45\n"
        "default_mode: square\n"
        "map_modes:\n"
        "  - name: square\n"
        "    view_width: 500\n"
        "    view_height: 500\n"
    )
    config = DetectorConfig.from_yaml(path)

    assert config.raster_width == 200
    assert config.max_region_fraction == 0.45
    assert config.map_modes == (MapModeConfig("square", 500, 500),)
    assert config.min_vertices == 10


def test_from_yaml_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert DetectorConfig.from_yaml(path) == DetectorConfig()


def test_from_yaml_rejects_unknown_keys(tmp_path):
    path = tmp_path / "typo.yaml"
    path.write_text("raster_widht: 300\n")
    with pytest.raises(ValueError, match="raster_widht"):
        DetectorConfig.from_yaml(path)


def test_from_yaml_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        DetectorConfig.from_yaml(path)


def test_from_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DetectorConfig.from_yaml(tmp_path / "nope.yaml")


def test_shipped_config_matches_defaults():
    assert DetectorConfig.from_yaml(REPO_CONFIG) == DetectorConfig()
