import pytest

from makeinsertions.api.spec import (
    format_insert_spec,
    parse_geometry,
    parse_insert_spec,
)
from makeinsertions.core.defs import Geometry, InsertSpec


def test_parse_geometry_and_rotation():
    """Test if a full descriptor parses into geometry and rotation."""
    result = parse_insert_spec("200x150+50+60/15")
    assert result.ok
    assert result.spec == InsertSpec(Geometry(200, 150, 50, 60), 15.0)


def test_parse_without_rotation_defaults_to_zero():
    result = parse_insert_spec("200x150+50+60")
    assert result.spec.rotation == 0
    assert result.spec == parse_insert_spec("200x150+50+60/0").spec


def test_parse_signed_offsets():
    assert parse_geometry("10x20-5-7") == Geometry(10, 20, -5, -7)
    assert parse_geometry("10x20+-5+7") == Geometry(10, 20, -5, 7)
    assert parse_geometry("10x20") == Geometry(10, 20, 0, 0)


@pytest.mark.parametrize("text", ["garbage", "", "0x0+0+0", "x10+1+1", "10x10+1", "/45"])
def test_parse_rejects_bad_geometry(text):
    """Test if malformed or zero-size geometry is reported, not raised."""
    result = parse_insert_spec(text)
    assert not result.ok
    assert result.spec is None
    assert result.error


def test_zero_size_is_distinct_from_malformed():
    assert "zero size" in parse_insert_spec("0x0+0+0").error
    assert "malformed" in parse_insert_spec("garbage").error


def test_bad_rotation_is_lenient_by_default():
    result = parse_insert_spec("100x100+0+0/abc")
    assert result.ok
    assert result.spec.rotation == 0


def test_bad_rotation_fails_when_strict():
    result = parse_insert_spec("100x100+0+0/abc", strict_rotation=True)
    assert not result.ok
    assert "rotation" in result.error
    assert not parse_insert_spec("100x100+0+0/", strict_rotation=True).ok


def test_format_is_canonical():
    assert format_insert_spec(InsertSpec(Geometry(100, 100, 100, 100))) == "100x100+100+100"
    assert format_insert_spec(InsertSpec(Geometry(20, 10, -3, 4), 90.0)) == "20x10-3+4/90"
    assert format_insert_spec(InsertSpec(Geometry(20, 10, 0, 0), 12.5)) == "20x10+0+0/12.5"


@pytest.mark.parametrize(
    "spec",
    [
        InsertSpec(Geometry(200, 150, 50, 60), 15.0),
        InsertSpec(Geometry(1, 1, -10, -20)),
        InsertSpec(Geometry(640, 480, 0, 0), -33.25),
    ],
)
def test_parse_inverts_format(spec):
    assert parse_insert_spec(format_insert_spec(spec)).spec == spec


def test_ordering_uses_geometry_then_rotation():
    small = InsertSpec(Geometry(50, 50, 10, 10), 90.0)
    large = InsertSpec(Geometry(100, 100, 0, 0))
    large_rotated = InsertSpec(Geometry(100, 100, 0, 0), 10.0)
    assert sorted([large_rotated, large, small]) == [small, large, large_rotated]
    assert InsertSpec(Geometry(1, 1), 0) == InsertSpec(Geometry(1, 1), 0.0)
