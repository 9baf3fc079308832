"""
mathutils conversions (the math module of Blender, also published as a
standalone package).

mathutils stores single-precision floats, so round trips through it are
exact only up to float32 rounding.
"""

from __future__ import annotations

from typing import Any

import mathutils

from stellare_types.affine import Affine2
from stellare_types.errors import ComponentCountError
from stellare_types.interop.registry import Capability, register_conversion
from stellare_types.point import Point2, Point3
from stellare_types.vector import Direction2, Direction3, Vector2, Vector3, Vector4

_VECTOR_KINDS = (Vector2, Vector3, Vector4, Point2, Point3, Direction2, Direction3)


def _to_vector(value: Any) -> mathutils.Vector:
    return mathutils.Vector(value.to_tuple())


def _from_vector(cls: Any, value: mathutils.Vector) -> Any:
    expected = len(cls._fields)
    if len(value) != expected:
        raise ComponentCountError(cls.__name__, expected, len(value))
    return cls(*(float(c) for c in value))


def _to_matrix(value: Affine2[Any, Any]) -> mathutils.Matrix:
    return mathutils.Matrix(
        (
            (value.m00, value.m10, value.m20),
            (value.m01, value.m11, value.m21),
            (0.0, 0.0, 1.0),
        )
    )


def _from_matrix(cls: Any, value: mathutils.Matrix) -> Any:
    shape = (len(value.row), len(value.col))
    if shape != (3, 3):
        raise ComponentCountError(cls.__name__, (3, 3), shape)
    last = tuple(value.row[2])
    if last != (0.0, 0.0, 1.0):
        raise ValueError(f"{cls.__name__} needs an affine matrix with last row [0, 0, 1], got {list(last)}")
    (m00, m10, m20), (m01, m11, m21) = (tuple(value.row[0]), tuple(value.row[1]))
    return cls(m00, m01, m10, m11, m20, m21)


def register() -> None:
    """Register every mathutils converter under Capability.MATHUTILS."""
    for kind in _VECTOR_KINDS:
        register_conversion(
            kind, mathutils.Vector, _to_vector, _from_vector, capability=Capability.MATHUTILS
        )
    register_conversion(
        Affine2, mathutils.Matrix, _to_matrix, _from_matrix, capability=Capability.MATHUTILS
    )
