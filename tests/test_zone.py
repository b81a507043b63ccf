"""Tests for zone records and query result types."""

import pytest

from voidzone.geometry.mapping import ViewSpace
from voidzone.results import (
    MalformedPolygon,
    NoContour,
    SeedOccupied,
    SeedOutOfBounds,
    ZoneCandidate,
    ZoneVoidCreated,
    next_void_id,
)
from voidzone.zone import ShapeKind, VectorPolygon, ZoneRecord, rect_to_path

VIEW = ViewSpace(1280, 844)


@pytest.mark.parametrize("shape,kind", [
    ("polygon", ShapeKind.POLYGON),
    ("path", ShapeKind.POLYGON),
    ("PATH", ShapeKind.POLYGON),
    ("line", ShapeKind.LINE),
    (None, ShapeKind.POLYGON),
])
def test_record_shape_aliases(shape, kind):
    record = ZoneRecord.from_dict({"id": "Z01", "shape": shape, "d": "M0 0 L1 1"}, VIEW)
    assert record.shape_kind is kind


def test_record_requires_id():
    with pytest.raises(ValueError, match="id"):
        ZoneRecord.from_dict({"shape": "path", "d": "M0 0 L1 1"}, VIEW)


def test_record_rejects_unknown_shape():
    with pytest.raises(ValueError, match="circle"):
        ZoneRecord.from_dict({"id": "Z01", "shape": "circle"}, VIEW)


def test_record_missing_path_is_empty():
    assert ZoneRecord.from_dict({"id": 7}, VIEW) == ZoneRecord("7", ShapeKind.POLYGON, "")


def test_rect_record_is_converted_to_path():
    record = ZoneRecord.from_dict(
        {"id": "R1", "shape": "rect", "rect": {"x": 25, "y": 50, "w": 50, "h": 25}}, VIEW
    )
    assert record.path_data == "M320.00 422.00 L960.00 422.00 L960.00 633.00 L320.00 633.00 Z"


def test_rect_with_missing_field():
    with pytest.raises(ValueError, match="rect"):
        rect_to_path({"x": 1, "y": 2, "w": 3}, VIEW)


def test_record_validation():
    with pytest.raises(ValueError):
        ZoneRecord("", ShapeKind.POLYGON, "")
    with pytest.raises(TypeError):
        ZoneRecord("Z01", "polygon", "")


def test_vector_polygon_from_record():
    record = ZoneRecord("Z01", ShapeKind.POLYGON, "M0 0 H10 V10 Z M20 20 H30 V30 Z")
    polygon = VectorPolygon.from_record(record)

    assert len(polygon.subpaths) == 2
    assert polygon.occupies_area
    assert not polygon.subpaths[0].flags.writeable


def test_line_polygon_occupies_nothing():
    record = ZoneRecord("L01", ShapeKind.LINE, "M0 0 L10 10")
    assert not VectorPolygon.from_record(record).occupies_area


@pytest.mark.parametrize("existing,expected", [
    ([], "ZVOID01"),
    (["ZVOID01", "ZVOID02"], "ZVOID03"),
    (["ZVOID02", "Z01"], "ZVOID01"),
    ([f"ZVOID{n:02d}" for n in range(1, 100)], "ZVOID100"),
])
def test_next_void_id(existing, expected):
    assert next_void_id(existing) == expected


def test_next_void_id_custom_format():
    assert next_void_id({"GAP001"}, prefix="GAP", width=3) == "GAP002"


def test_candidate_to_dict():
    candidate = ZoneCandidate(zone_id="ZVOID01", name="Void ZVOID01", path_data="M0 0 L1 0 L1 1 Z")
    assert candidate.to_dict() == {
        "id": "ZVOID01",
        "name": "Void ZVOID01",
        "shape": "polygon",
        "d": "M0 0 L1 0 L1 1 Z",
    }


def test_failure_to_dict():
    assert SeedOccupied(cell=(3, 4)).to_dict() == {
        "cell": (3, 4),
        "kind": "SeedOccupied",
        "message": "Not a void here (or the gap is too small).",
    }
    payload = NoContour(reason="open contour").to_dict()
    assert payload["kind"] == "NoContour"
    assert payload["vertex_count"] == 0


def test_failures_carry_user_messages():
    assert SeedOutOfBounds(point=(-1.0, 2.0)).message == "Click is outside the map."
    assert SeedOutOfBounds(point=(-1.0, 2.0)).space == "view"


def test_success_to_dict():
    candidate = ZoneCandidate(zone_id="ZVOID01", name="Void ZVOID01", path_data="M0 0 L1 0 L1 1 Z")
    created = ZoneVoidCreated(
        candidate=candidate,
        vertex_count=3,
        region_cells=12,
        skipped=(MalformedPolygon(zone_id="bad", reason="expected number"),),
    )
    payload = created.to_dict()
    assert payload["kind"] == "ZoneVoidCreated"
    assert payload["candidate"]["id"] == "ZVOID01"
    assert payload["skipped"] == [{"zone_id": "bad", "reason": "expected number"}]
