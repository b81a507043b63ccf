"""Tests for the voidzone-detect command line."""

import json

import cv2
import pytest
import yaml

from voidzone_cli import load_zones, main
from voidzone_cli.cli import EXIT_INPUT_ERROR, EXIT_NO_ZONE, EXIT_OK


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "detector.yaml"
    path.write_text(yaml.safe_dump({
        "raster_width": 100,
        "default_mode": "square",
        "map_modes": [{"name": "square", "view_width": 100, "view_height": 100}],
    }))
    return path


@pytest.fixture
def zones_file(tmp_path, l_gap_zones):
    path = tmp_path / "zones.yaml"
    path.write_text(yaml.safe_dump({"zones": l_gap_zones}))
    return path


def test_creates_zone(zones_file, config_file, capsys):
    code = main([str(zones_file), "--x", "40", "--y", "50", "--config", str(config_file)])

    assert code == EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    assert payload["kind"] == "ZoneVoidCreated"
    assert payload["candidate"]["id"] == "ZVOID01"
    assert payload["candidate"]["d"].startswith("M")


def test_viewport_arguments(zones_file, config_file, capsys):
    code = main([
        str(zones_file), "--x", "80", "--y", "100",
        "--viewport", "0", "0", "200", "200",
        "--config", str(config_file),
    ])
    assert code == EXIT_OK


def test_occupied_click(zones_file, config_file, capsys):
    code = main([str(zones_file), "--x", "10", "--y", "10", "--config", str(config_file)])

    assert code == EXIT_NO_ZONE
    assert "SeedOccupied" in capsys.readouterr().err


def test_missing_zones_file(tmp_path, config_file, capsys):
    code = main([str(tmp_path / "none.yaml"), "--x", "1", "--y", "1", "--config", str(config_file)])
    assert code == EXIT_INPUT_ERROR
    assert "not found" in capsys.readouterr().err


def test_unknown_mode(zones_file, config_file, capsys):
    code = main([
        str(zones_file), "--x", "1", "--y", "1", "--mode", "eng", "--config", str(config_file)
    ])
    assert code == EXIT_INPUT_ERROR


def test_bad_zoom(zones_file, config_file, capsys):
    code = main([
        str(zones_file), "--x", "1", "--y", "1", "--zoom", "0", "--config", str(config_file)
    ])
    assert code == EXIT_INPUT_ERROR


def test_writes_preview(zones_file, config_file, tmp_path, capsys):
    preview = tmp_path / "void.png"
    code = main([
        str(zones_file), "--x", "40", "--y", "50",
        "--config", str(config_file),
        "--preview", str(preview), "--preview-cell-size", "2",
    ])

    assert code == EXIT_OK
    image = cv2.imread(str(preview))
    assert image.shape == (200, 200, 3)


def test_load_zones_accepts_json_list(tmp_path):
    path = tmp_path / "zones.json"
    path.write_text(json.dumps([{"id": "Z01", "d": "M0 0 L1 0 L1 1 Z"}]))
    assert load_zones(str(path)) == [{"id": "Z01", "d": "M0 0 L1 0 L1 1 Z"}]


@pytest.mark.parametrize("content", ["zones: 3\n", "- 1\n- 2\n", "just text\n"])
def test_load_zones_rejects_non_lists(tmp_path, content):
    path = tmp_path / "zones.yaml"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_zones(str(path))
