"""Tests for SVG path data parsing and formatting."""

import numpy as np
import pytest

from voidzone.geometry.path import MalformedPathError, format_path_data, parse_path_data


def test_absolute_rectangle():
    subpaths = parse_path_data("M0 0 H10 V10 H0 Z")
    assert len(subpaths) == 1
    assert subpaths[0].tolist() == [[0, 0], [10, 0], [10, 10], [0, 10]]


def test_relative_commands():
    subpaths = parse_path_data("m10 10 l5 0 l0 5 h-5 z")
    assert subpaths[0].tolist() == [[10, 10], [15, 10], [15, 15], [10, 15]]


def test_implicit_lineto_after_moveto():
    assert parse_path_data("M0 0 10 0 10 10")[0].tolist() == [[0, 0], [10, 0], [10, 10]]
    assert parse_path_data("m1 1 2 0 0 2")[0].tolist() == [[1, 1], [3, 1], [3, 3]]


def test_compact_number_syntax():
    assert parse_path_data("M0-1L.5.5")[0].tolist() == [[0, -1], [0.5, 0.5]]
    assert parse_path_data("M1e1,0 L0,2E1")[0].tolist() == [[10, 0], [0, 20]]


def test_multiple_subpaths():
    subpaths = parse_path_data("M0 0 L1 0 L1 1 Z M5 5 L6 5 L6 6 Z")
    assert len(subpaths) == 2
    assert subpaths[1][0].tolist() == [5, 5]


def test_drawing_after_close_restarts_at_subpath_start():
    subpaths = parse_path_data("M0 0 L4 0 L4 4 Z L0 4 L-4 4")
    assert len(subpaths) == 2
    assert subpaths[1].tolist() == [[0, 0], [0, 4], [-4, 4]]


def test_lone_moveto_yields_nothing():
    assert parse_path_data("M5 5") == []
    assert parse_path_data("") == []
    assert parse_path_data("   ") == []


def test_cubic_curve_is_flattened():
    points = parse_path_data("M0 0 C0 10 10 10 10 0", curve_steps=4)[0]
    assert len(points) == 5
    assert points[2].tolist() == pytest.approx([5.0, 7.5])
    assert points[-1].tolist() == pytest.approx([10.0, 0.0])


def test_smooth_cubic_reflects_previous_control():
    points = parse_path_data("M0 0 C0 10 10 10 10 0 S20 -10 20 0", curve_steps=4)[0]
    assert len(points) == 9
    assert points[6].tolist() == pytest.approx([15.0, -7.5])


def test_quadratic_and_smooth_quadratic():
    points = parse_path_data("M0 0 Q5 10 10 0 T20 0", curve_steps=2)[0]
    np.testing.assert_allclose(points, [[0, 0], [5, 5], [10, 0], [15, -5], [20, 0]], atol=1e-12)


def test_arc_sweep_direction():
    upper = parse_path_data("M0 0 A5 5 0 0 1 10 0", curve_steps=8)[0]
    lower = parse_path_data("M0 0 A5 5 0 0 0 10 0", curve_steps=8)[0]

    assert upper[4].tolist() == pytest.approx([5.0, -5.0])
    assert lower[4].tolist() == pytest.approx([5.0, 5.0])
    assert (upper[:, 1] <= 1e-9).all()
    assert upper[-1].tolist() == [10.0, 0.0]


def test_arc_radius_too_small_is_scaled_up():
    scaled = parse_path_data("M0 0 A1 1 0 0 1 10 0", curve_steps=8)[0]
    assert scaled[4].tolist() == pytest.approx([5.0, -5.0])


def test_arc_too_large_to_solve_is_malformed():
    with pytest.raises(MalformedPathError, match="arc parameters out of range"):
        parse_path_data("M0 0 A1e200 1e200 0 0 1 10 10 Z")


def test_arc_zero_radius_is_a_line():
    assert parse_path_data("M0 0 A0 5 0 0 1 10 0")[0].tolist() == [[0, 0], [10, 0]]


def test_arc_packed_flags():
    packed = parse_path_data("M0 0 a5 5 0 0110 0", curve_steps=8)[0]
    spaced = parse_path_data("M0 0 A5 5 0 0 1 10 0", curve_steps=8)[0]
    np.testing.assert_allclose(packed, spaced)


@pytest.mark.parametrize("data", [
    "L0 0 L1 1",            # no initial moveto
    "M0 0 L1",              # missing coordinate
    "M0 0 X5 5",            # unknown command
    "M0 0 Z 5 5",           # numbers after close
    "M0 0 A5 5 0 2 1 10 0", # bad arc flag
    "M0 0 L1 1 #",          # junk
])
def test_malformed_path_raises(data):
    with pytest.raises(MalformedPathError):
        parse_path_data(data)


def test_malformed_path_error_is_value_error_with_position():
    with pytest.raises(ValueError) as excinfo:
        parse_path_data("M0 0 L1 x")
    assert excinfo.value.position == 8
    assert "position 8" in str(excinfo.value)


def test_format_path_data():
    d = format_path_data([(0, 0), (1.5, 0), (1.5, 2.25)])
    assert d == "M0.00 0.00 L1.50 0.00 L1.50 2.25 Z"


def test_format_path_data_parses_back():
    points = [(30.0, 30.5), (31.0, 30.0), (49.5, 31.0), (40.25, 80.75)]
    assert parse_path_data(format_path_data(points))[0].tolist() == [list(p) for p in points]


def test_format_path_data_needs_three_vertices():
    with pytest.raises(ValueError):
        format_path_data([(0, 0), (1, 1)])
