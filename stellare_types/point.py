"""
Positions in a tagged space.

A point is a location, a vector is a displacement. The arithmetic between
them follows the affine rules:

    Point - Point  -> Vector   (displacement between positions)
    Point + Vector -> Point    (translate a position)
    Point - Vector -> Point
    Point + Point  -> TypeError (no geometric meaning)

Converting a point applies the tag offsets (a position of 0 degC is 273.15
K), unlike a vector where offsets cancel.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Any, ClassVar, Tuple, Type, TypeVar, overload

from stellare_types.conversions import convert
from stellare_types.quantity import Quantity
from stellare_types.tagged import TaggedValue, U
from stellare_types.tolerance import DEFAULT_ABS_TOL, DEFAULT_REL_TOL
from stellare_types.units import Unit
from stellare_types.vector import Vector2, Vector3

P = TypeVar("P", bound="_PointBase[Any]")
W = TypeVar("W", bound=Unit)


class _PointBase(TaggedValue[U]):
    __slots__ = ()

    _vector_kind: ClassVar[Any]

    @classmethod
    def origin(cls: Type[P]) -> P:
        return cls(*(0.0 for _ in cls._fields))

    @classmethod
    def from_vector(cls, vector: Any) -> Any:
        """Point reached by translating the origin by vector.

        On an unparameterized class the point takes the vector's tag.
        """
        if not isinstance(vector, cls._vector_kind):
            raise TypeError(
                f"{cls.__name__}.from_vector expects a {cls._vector_kind.__name__}, "
                f"got {type(vector).__name__}"
            )
        kind = cls._specialize(vector._tags()) if cls._units is None else cls
        point = kind(*vector.to_tuple())
        point._same_tags(vector, "build")
        return point

    def to_vector(self) -> Any:
        """Displacement from the origin to this point."""
        return self._vector_kind._specialize(self._tags())(*self.to_tuple())

    def _translate(self: P, other: Any, fn: Any, operation: str) -> P:
        self._same_tags(other, operation)
        return self._zip(other, fn)

    def __add__(self, other: Any) -> Any:
        if isinstance(other, _PointBase):
            raise TypeError(
                f"Cannot add {type(self).__qualname__} and {type(other).__qualname__}: "
                f"adding two points has no geometric meaning. Subtract them for a "
                f"displacement or add a vector to translate."
            )
        if isinstance(other, self._vector_kind):
            return self._translate(other, operator.add, "translate")
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, self._vector_kind):
            return self._translate(other, operator.sub, "translate")
        if self._same_kind(other, "subtract"):
            return self.to_vector() - other.to_vector()
        return NotImplemented

    def distance_to(self: P, other: P) -> Quantity[Any]:
        self._require_same(other, "measure distance between")
        return (other - self).magnitude()  # type: ignore[no-any-return]

    def distance_to_squared(self: P, other: P) -> float:
        self._require_same(other, "measure distance between")
        return (other - self).magnitude_squared()  # type: ignore[no-any-return]

    def lerp(self: P, other: P, t: float) -> P:
        """Point a fraction t of the way from self to other."""
        self._require_same(other, "interpolate")
        return self._zip(other, lambda a, b: a + (b - a) * t)

    def midpoint(self: P, other: P) -> P:
        return self.lerp(other, 0.5)

    def min(self: P, other: P) -> P:
        self._require_same(other, "compare")
        return self._zip(other, min)

    def max(self: P, other: P) -> P:
        self._require_same(other, "compare")
        return self._zip(other, max)

    def clamp(self: P, low: P, high: P) -> P:
        return self.max(low).min(high)

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in self.to_tuple())

    def approx_eq(
        self: P,
        other: P,
        rel_tol: float = DEFAULT_REL_TOL,
        abs_tol: float = DEFAULT_ABS_TOL,
    ) -> bool:
        self._require_same(other, "compare")
        return all(
            math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
            for a, b in zip(self.to_tuple(), other.to_tuple())
        )

    def convert_to(self, target: Type[W]) -> Any:
        """Express the position in another tag of the same family (offsets apply).

        Raises:
            IncompatibleUnitsError: If target belongs to a different family.
        """
        unit = self.unit
        return self._generic()._specialize((target,))(
            *(convert(c, unit, target) for c in self.to_tuple())
        )


@dataclass(frozen=True)
class Point2(_PointBase[U]):
    """Position in a 2-d space."""

    __slots__ = ("x", "y")
    _fields: ClassVar[Tuple[str, ...]] = ("x", "y")

    x: float
    y: float

    def __post_init__(self) -> None:
        self._require_real_components()

    def __add__(self, other: Vector2[U]) -> Point2[U]:
        return super().__add__(other)  # type: ignore[no-any-return]

    __radd__ = __add__

    @overload
    def __sub__(self, other: Point2[U]) -> Vector2[U]: ...

    @overload
    def __sub__(self, other: Vector2[U]) -> Point2[U]: ...

    def __sub__(self, other: Any) -> Any:
        return super().__sub__(other)

    def to_vector(self) -> Vector2[U]:
        return super().to_vector()  # type: ignore[no-any-return]

    def convert_to(self, target: Type[W]) -> Point2[W]:
        return super().convert_to(target)  # type: ignore[no-any-return]


@dataclass(frozen=True)
class Point3(_PointBase[U]):
    """Position in a 3-d space."""

    __slots__ = ("x", "y", "z")
    _fields: ClassVar[Tuple[str, ...]] = ("x", "y", "z")

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        self._require_real_components()

    def __add__(self, other: Vector3[U]) -> Point3[U]:
        return super().__add__(other)  # type: ignore[no-any-return]

    __radd__ = __add__

    @overload
    def __sub__(self, other: Point3[U]) -> Vector3[U]: ...

    @overload
    def __sub__(self, other: Vector3[U]) -> Point3[U]: ...

    def __sub__(self, other: Any) -> Any:
        return super().__sub__(other)

    def to_vector(self) -> Vector3[U]:
        return super().to_vector()  # type: ignore[no-any-return]

    def convert_to(self, target: Type[W]) -> Point3[W]:
        return super().convert_to(target)  # type: ignore[no-any-return]


Point2._vector_kind = Vector2
Point3._vector_kind = Vector3


__all__ = ["Point2", "Point3"]
