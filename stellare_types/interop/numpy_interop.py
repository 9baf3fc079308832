"""
numpy conversions.

Layouts:
    Vector2/3/4, Point2/3, Direction2/3  1-d array of the components
    Quantity (and Angle)                 0-d array, or a numpy scalar
    Rect2, Segment2                      (2, 2) array, one row per corner
    CubicBezier                          (4, 2) array, one row per point
    Affine2                              (3, 3) homogeneous matrix in
                                         column-vector convention

Arrays are built with numpy's dtype inference, so float32 components stay
float32 and int components stay integer. Values coming back are plain
Python numbers.
"""

from __future__ import annotations

from typing import Any, Callable, Tuple

import numpy as np

from stellare_types.affine import Affine2
from stellare_types.bezier import CubicBezier
from stellare_types.errors import ComponentCountError
from stellare_types.interop.registry import Capability, register_conversion
from stellare_types.point import Point2, Point3
from stellare_types.quantity import Quantity
from stellare_types.rect import Rect2
from stellare_types.segment import Segment2
from stellare_types.vector import Direction2, Direction3, Vector2, Vector3, Vector4

AFFINE_ATOL = 1e-12

_FLAT_KINDS = (Vector2, Vector3, Vector4, Point2, Point3, Direction2, Direction3)


def _shaped(cls: Any, value: Any, shape: Tuple[int, ...]) -> np.ndarray:
    array = np.asarray(value)
    if array.shape != shape:
        raise ComponentCountError(cls.__name__, shape, array.shape)
    return array


def _flat_to_array(value: Any) -> np.ndarray:
    return np.array(value.to_tuple())


def _flat_from_array(cls: Any, value: Any) -> Any:
    array = _shaped(cls, value, (len(cls._fields),))
    return cls(*array.tolist())


def _quantity_to_array(value: Quantity[Any]) -> np.ndarray:
    return np.array(value.value)


def _quantity_to_scalar(value: Quantity[Any]) -> np.generic:
    return np.asarray(value.value)[()]


def _quantity_from_array(cls: Any, value: Any) -> Any:
    array = _shaped(cls, value, ())
    return cls(array.item())


def _rows_converters(point_count: int) -> Tuple[Callable[[Any], Any], Callable[[Any, Any], Any]]:
    """Converters for composites made of Point2 rows."""

    def to_array(value: Any) -> np.ndarray:
        return np.array([p.to_tuple() for p in value.to_tuple()])

    def from_array(cls: Any, value: Any) -> Any:
        array = _shaped(cls, value, (point_count, 2))
        point = Point2._specialize(cls._tags())
        return cls(*(point(*row) for row in array.tolist()))

    return to_array, from_array


def _affine_to_array(value: Affine2[Any, Any]) -> np.ndarray:
    return np.array(
        [
            [value.m00, value.m10, value.m20],
            [value.m01, value.m11, value.m21],
            [0.0, 0.0, 1.0],
        ]
    )


def _affine_from_array(cls: Any, value: Any) -> Any:
    array = _shaped(cls, value, (3, 3))
    if not np.allclose(array[2], (0.0, 0.0, 1.0), rtol=0.0, atol=AFFINE_ATOL):
        raise ValueError(
            f"{cls.__name__} needs an affine matrix with last row [0, 0, 1], got {array[2].tolist()}"
        )
    (m00, m10, m20), (m01, m11, m21) = array[:2].tolist()
    return cls(m00, m01, m10, m11, m20, m21)


def register() -> None:
    """Register every numpy converter under Capability.NUMPY."""
    for kind in _FLAT_KINDS:
        register_conversion(
            kind, np.ndarray, _flat_to_array, _flat_from_array, capability=Capability.NUMPY
        )
    register_conversion(
        Quantity, np.ndarray, _quantity_to_array, _quantity_from_array, capability=Capability.NUMPY
    )
    register_conversion(
        Quantity, np.generic, _quantity_to_scalar, _quantity_from_array, capability=Capability.NUMPY
    )
    for kind, count in ((Rect2, 2), (Segment2, 2), (CubicBezier, 4)):
        to_array, from_array = _rows_converters(count)
        register_conversion(kind, np.ndarray, to_array, from_array, capability=Capability.NUMPY)
    register_conversion(
        Affine2, np.ndarray, _affine_to_array, _affine_from_array, capability=Capability.NUMPY
    )
