#!/usr/bin/env python3
"""
Tests for the numpy interop capability.

Skipped when numpy is not installed.

Run with: python -m pytest tests/test_interop_numpy.py -v
"""

import os
import sys

import pytest

np = pytest.importorskip("numpy")

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from stellare_types.affine import Affine2
from stellare_types.angle import Angle
from stellare_types.bezier import CubicBezier
from stellare_types.errors import ComponentCountError, ConversionNotAvailableError
from stellare_types.interop import Capability, disable, enable, is_enabled
from stellare_types.point import Point2, Point3
from stellare_types.quantity import Quantity
from stellare_types.rect import Rect2
from stellare_types.segment import Segment2
from stellare_types.units import Degrees, LocalSpace, Meters, WorldSpace
from stellare_types.vector import Direction3, Vector2, Vector3, Vector4


@pytest.fixture
def numpy_enabled():
    """Enable the numpy capability for one test."""
    enable(Capability.NUMPY)
    yield
    disable(Capability.NUMPY)


class TestEnable:
    """Tests for switching the capability."""

    def test_not_available_until_enabled(self):
        with pytest.raises(ConversionNotAvailableError):
            Vector3[Meters](1.0, 2.0, 3.0).to_external(np.ndarray)

    def test_enable_and_disable(self):
        enable(Capability.NUMPY)
        assert is_enabled(Capability.NUMPY)
        disable(Capability.NUMPY)
        with pytest.raises(ConversionNotAvailableError):
            Vector3[Meters](1.0, 2.0, 3.0).to_external(np.ndarray)


@pytest.mark.usefixtures("numpy_enabled")
class TestVectors:
    """Tests for 1-d array conversions."""

    def test_vector_round_trip(self):
        v = Vector3[Meters](1.0, 2.0, 3.0)
        array = v.to_external(np.ndarray)
        np.testing.assert_array_equal(array, [1.0, 2.0, 3.0])
        assert Vector3[Meters].from_external(array) == v

    def test_dtype_follows_components(self):
        assert Vector2(1, 2).to_external(np.ndarray).dtype.kind == "i"
        assert Vector4(1.0, 2.0, 3.0, 4.0).to_external(np.ndarray).dtype == np.float64

    def test_from_external_gives_plain_floats(self):
        v = Vector2[Meters].from_external(np.array([1.5, 2.5], dtype=np.float32))
        assert type(v.x) is float

    def test_points_and_directions(self):
        p = Point3[WorldSpace].from_external(np.array([1.0, 2.0, 3.0]))
        assert p == Point3[WorldSpace](1.0, 2.0, 3.0)
        d = Direction3[Meters].unit_z().to_external(np.ndarray)
        np.testing.assert_array_equal(d, [0.0, 0.0, 1.0])

    def test_wrong_length_rejected(self):
        with pytest.raises(ComponentCountError, match="Vector3"):
            Vector3[Meters].from_external(np.zeros(4))

    def test_wrong_shape_rejected(self):
        with pytest.raises(ComponentCountError):
            Vector2[Meters].from_external(np.zeros((2, 1)))


@pytest.mark.usefixtures("numpy_enabled")
class TestQuantities:
    """Tests for scalar conversions."""

    def test_zero_d_array(self):
        array = Quantity[Meters](2.5).to_external(np.ndarray)
        assert array.shape == ()
        assert Quantity[Meters].from_external(array) == Quantity[Meters](2.5)

    def test_numpy_scalar(self):
        scalar = Quantity[Meters](2.5).to_external(np.generic)
        assert isinstance(scalar, np.floating)
        assert Quantity[Meters].from_external(np.float64(4.0)) == Quantity[Meters](4.0)

    def test_angle_uses_quantity_converter(self):
        a = Angle[Degrees].from_external(np.float32(90.0))
        assert type(a) is Angle[Degrees]
        assert a.value == 90.0

    def test_array_rejected_for_quantity(self):
        with pytest.raises(ComponentCountError):
            Quantity[Meters].from_external(np.zeros(2))


@pytest.mark.usefixtures("numpy_enabled")
class TestComposites:
    """Tests for row-per-point composites."""

    def test_rect(self):
        r = Rect2.from_corners(Point2[Meters](0.0, 1.0), Point2[Meters](2.0, 3.0))
        array = r.to_external(np.ndarray)
        np.testing.assert_array_equal(array, [[0.0, 1.0], [2.0, 3.0]])
        assert Rect2[Meters].from_external(array) == r

    def test_segment(self):
        array = np.array([[0.0, 0.0], [3.0, 4.0]])
        s = Segment2[Meters].from_external(array)
        assert s.length() == Quantity[Meters](5.0)

    def test_bezier(self):
        array = np.array([[0.0, 0.0], [1.0, 0.0], [2.0, 0.0], [3.0, 0.0]])
        c = CubicBezier[Meters].from_external(array)
        assert c.p3 == Point2[Meters](3.0, 0.0)
        np.testing.assert_array_equal(c.to_external(np.ndarray), array)

    def test_bezier_wrong_shape(self):
        with pytest.raises(ComponentCountError):
            CubicBezier[Meters].from_external(np.zeros((3, 2)))


@pytest.mark.usefixtures("numpy_enabled")
class TestAffine:
    """Tests for the 3x3 homogeneous matrix layout."""

    def test_column_vector_layout(self):
        m = Affine2[LocalSpace, WorldSpace](0.0, 1.0, -1.0, 0.0, 5.0, 6.0)
        matrix = m.to_external(np.ndarray)
        assert matrix.shape == (3, 3)
        p = m.transform_point(Point2[LocalSpace](2.0, 3.0))
        np.testing.assert_allclose(matrix @ np.array([2.0, 3.0, 1.0]), [p.x, p.y, 1.0])

    def test_round_trip(self):
        m = Affine2[LocalSpace, WorldSpace](0.5, 0.25, -0.25, 0.5, 1.0, -2.0)
        back = Affine2[LocalSpace, WorldSpace].from_external(m.to_external(np.ndarray))
        assert back == m

    def test_non_affine_rejected(self):
        matrix = np.eye(3)
        matrix[2, 0] = 0.5
        with pytest.raises(ValueError, match="last row"):
            Affine2.from_external(matrix)

    def test_wrong_shape_rejected(self):
        with pytest.raises(ComponentCountError):
            Affine2.from_external(np.eye(4))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
