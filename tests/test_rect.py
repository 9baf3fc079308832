#!/usr/bin/env python3
"""
Tests for Rect2.

Run with: python -m pytest tests/test_rect.py -v
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from stellare_types.errors import IncompatibleUnitsError
from stellare_types.point import Point2
from stellare_types.rect import Rect2
from stellare_types.units import Feet, Meters, ScreenSpace, WorldSpace
from stellare_types.vector import Vector2


def rect(x0, y0, x1, y1, unit=Meters):
    return Rect2[unit](Point2[unit](x0, y0), Point2[unit](x1, y1))


class TestConstruction:
    """Tests for building rectangles."""

    def test_corners_are_sorted(self):
        r = rect(4.0, 1.0, 0.0, 3.0)
        assert r.min == Point2[Meters](0.0, 1.0)
        assert r.max == Point2[Meters](4.0, 3.0)

    def test_from_corners_infers_tag(self):
        r = Rect2.from_corners(Point2[Feet](0.0, 0.0), Point2[Feet](2.0, 1.0))
        assert type(r) is Rect2[Feet]

    def test_corner_tags_must_match(self):
        with pytest.raises(IncompatibleUnitsError):
            Rect2[Meters](Point2[Meters](0.0, 0.0), Point2[Feet](1.0, 1.0))

    def test_corners_must_be_points(self):
        with pytest.raises(TypeError, match="must be a Point2"):
            Rect2[Meters](Point2[Meters](0.0, 0.0), Vector2[Meters](1.0, 1.0))

    def test_from_size(self):
        r = Rect2.from_size(Point2[ScreenSpace](10, 20), Vector2[ScreenSpace](30, 40))
        assert type(r) is Rect2[ScreenSpace]
        assert r.max == Point2[ScreenSpace](40, 60)

    def test_from_size_clamps_negative(self):
        r = Rect2.from_size(Point2[Meters](1.0, 1.0), Vector2[Meters](-2.0, 3.0))
        assert r.width == 0.0
        assert r.height == 3.0

    def test_frozen(self):
        from dataclasses import FrozenInstanceError

        with pytest.raises(FrozenInstanceError):
            rect(0.0, 0.0, 1.0, 1.0).min = Point2[Meters](5.0, 5.0)


class TestMeasurements:
    """Tests for size, area and center."""

    def test_size_area_center(self):
        r = rect(1.0, 2.0, 5.0, 8.0)
        assert r.size == Vector2[Meters](4.0, 6.0)
        assert r.width == 4.0
        assert r.height == 6.0
        assert r.area == 24.0
        assert r.center == Point2[Meters](3.0, 5.0)

    def test_degenerate_rect_has_zero_area(self):
        assert rect(1.0, 1.0, 1.0, 5.0).area == 0.0


class TestContainment:
    """Tests for point containment with inclusive edges."""

    def test_inside_and_outside(self):
        r = rect(0.0, 0.0, 10.0, 10.0)
        assert r.contains_point(Point2[Meters](5.0, 5.0))
        assert not r.contains_point(Point2[Meters](11.0, 5.0))

    def test_edges_are_inclusive(self):
        r = rect(0.0, 0.0, 10.0, 10.0)
        assert Point2[Meters](0.0, 10.0) in r
        assert Point2[Meters](10.0, 10.0) in r

    def test_mixed_tags_rejected(self):
        with pytest.raises(IncompatibleUnitsError):
            Point2[Feet](1.0, 1.0) in rect(0.0, 0.0, 10.0, 10.0)

    def test_non_point_rejected(self):
        with pytest.raises(TypeError):
            (1.0, 1.0) in rect(0.0, 0.0, 10.0, 10.0)


class TestSetOperations:
    """Tests for intersection and union."""

    def test_overlapping(self):
        a = rect(0.0, 0.0, 4.0, 4.0)
        b = rect(2.0, 1.0, 6.0, 3.0)
        assert a.intersects(b)
        assert a.intersection(b) == rect(2.0, 1.0, 4.0, 3.0)
        assert a.union(b) == rect(0.0, 0.0, 6.0, 4.0)

    def test_disjoint(self):
        a = rect(0.0, 0.0, 1.0, 1.0)
        b = rect(2.0, 2.0, 3.0, 3.0)
        assert not a.intersects(b)
        assert a.intersection(b) is None

    def test_touching_edges_give_zero_area(self):
        a = rect(0.0, 0.0, 1.0, 1.0)
        b = rect(1.0, 0.0, 2.0, 1.0)
        overlap = a.intersection(b)
        assert overlap is not None
        assert overlap.area == 0.0

    def test_mixed_tags_rejected(self):
        with pytest.raises(IncompatibleUnitsError):
            rect(0.0, 0.0, 1.0, 1.0).intersects(rect(0.0, 0.0, 1.0, 1.0, unit=WorldSpace))

    def test_expand_to_include(self):
        r = rect(0.0, 0.0, 1.0, 1.0).expand_to_include(Point2[Meters](-1.0, 3.0))
        assert r == rect(-1.0, 0.0, 1.0, 3.0)


class TestConvertTo:
    """Tests for rectangle conversion."""

    def test_convert(self):
        r = rect(0.0, 0.0, 1.0, 2.0).convert_to(Feet)
        assert type(r) is Rect2[Feet]
        assert r.max.approx_eq(Point2[Feet](3.280839895013123, 6.561679790026246))

    def test_is_finite(self):
        assert rect(0.0, 0.0, 1.0, 1.0).is_finite()
        assert not rect(0.0, 0.0, float("inf"), 1.0).is_finite()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
