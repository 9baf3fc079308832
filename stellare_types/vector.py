"""
Displacement vectors and unit directions.

Vectors are fixed-arity aggregates whose components all share one dimension
tag. Component-wise arithmetic is only defined between vectors of the same
class and tag; anything else is a static type error and, at runtime, an
:class:`~stellare_types.errors.IncompatibleUnitsError`.

Normalizing a vector strips its magnitude and returns a distinct direction
type (``Direction2``/``Direction3``). A direction keeps the source tag only
as the identity of the space it points in; scaling it back up needs an
explicit ``Quantity`` with that same tag.

Usage Example:
    >>> from stellare_types import Quantity, Vector3
    >>> from stellare_types.units import Feet, Meters
    >>>
    >>> a = Vector3[Meters](1.0, 2.0, 2.0)
    >>> a.magnitude()
    Quantity[Meters](value=3.0)
    >>> a.normalize() * Quantity[Meters](6.0)
    Vector3[Meters](x=2.0, y=4.0, z=4.0)
    >>> a + Vector3[Feet](1.0, 0.0, 0.0)
    Traceback (most recent call last):
    ...
    IncompatibleUnitsError: Cannot add values tagged Meters and Feet. ...
"""

from __future__ import annotations

import math
import numbers
import operator
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional, Tuple, Type, TypeVar, Union

from stellare_types.angle import Angle
from stellare_types.conversions import convert_difference
from stellare_types.errors import DegenerateInputError, IncompatibleUnitsError
from stellare_types.quantity import Quantity
from stellare_types.tagged import TaggedValue, U, is_real_scalar
from stellare_types.tolerance import DEFAULT_ABS_TOL, DEFAULT_REL_TOL, ZERO_MAGNITUDE
from stellare_types.units import Radians, Unit, is_convertible

V = TypeVar("V", bound="_VectorBase[Any]")
D = TypeVar("D", bound="_DirectionBase[Any]")
W = TypeVar("W", bound=Unit)


def _quantity(unit: Type[Unit], value: float) -> Any:
    return Quantity._specialize((unit,))(value)


# ============================================================================
# Shared vector behaviour
# ============================================================================


class _VectorBase(TaggedValue[U]):
    """Component-wise behaviour shared by Vector2, Vector3 and Vector4."""

    __slots__ = ()

    @classmethod
    def zero(cls: Type[V]) -> V:
        return cls(*(0.0 for _ in cls._fields))

    @classmethod
    def one(cls: Type[V]) -> V:
        return cls(*(1.0 for _ in cls._fields))

    @classmethod
    def splat(cls: Type[V], value: float) -> V:
        """Vector with every component set to value."""
        return cls(*(value for _ in cls._fields))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self: V, other: V) -> V:
        if not self._same_kind(other, "add"):
            return NotImplemented
        return self._zip(other, operator.add)

    def __sub__(self: V, other: V) -> V:
        if not self._same_kind(other, "subtract"):
            return NotImplemented
        return self._zip(other, operator.sub)

    def __mul__(self: V, other: Union[V, float]) -> V:
        if is_real_scalar(other):
            return self._broadcast(other, operator.mul)
        if self._same_kind(other, "multiply"):
            return self._zip(other, operator.mul)  # type: ignore[arg-type]
        return NotImplemented

    def __rmul__(self: V, scalar: float) -> V:
        if not is_real_scalar(scalar):
            return NotImplemented
        return self._rbroadcast(scalar, operator.mul)

    def __truediv__(self: V, other: Union[V, float]) -> V:
        if is_real_scalar(other):
            return self._broadcast(other, operator.truediv)
        if self._same_kind(other, "divide"):
            return self._zip(other, operator.truediv)  # type: ignore[arg-type]
        return NotImplemented

    def __neg__(self: V) -> V:
        return self._map(operator.neg)

    def __pos__(self: V) -> V:
        return self

    def __abs__(self: V) -> V:
        return self._map(abs)

    def __and__(self: V, other: V) -> V:
        return self._bitwise(other, operator.and_, "and")

    def __or__(self: V, other: V) -> V:
        return self._bitwise(other, operator.or_, "or")

    def __xor__(self: V, other: V) -> V:
        return self._bitwise(other, operator.xor, "xor")

    def _bitwise(self: V, other: V, fn: Callable[[Any, Any], Any], name: str) -> V:
        if not self._same_kind(other, name):
            return NotImplemented
        for value in self.to_tuple() + other.to_tuple():
            if not isinstance(value, numbers.Integral):
                raise TypeError(
                    f"Bitwise {name} needs integer components, "
                    f"got {type(value).__name__} in {type(self).__qualname__}"
                )
        return self._zip(other, fn)

    # ------------------------------------------------------------------
    # Products and lengths
    # ------------------------------------------------------------------

    def dot(self: V, other: V) -> float:
        """Dot product as a plain number (the squared unit is not tracked)."""
        self._require_same(other, "dot")
        return sum(a * b for a, b in zip(self.to_tuple(), other.to_tuple()))

    def magnitude_squared(self) -> float:
        return sum(c * c for c in self.to_tuple())

    def magnitude(self) -> Quantity[U]:
        """Euclidean length, tagged like the vector."""
        return _quantity(self.unit, math.hypot(*self.to_tuple()))

    def distance_to(self: V, other: V) -> Quantity[Any]:
        self._require_same(other, "measure distance between")
        return (other - self).magnitude()

    def distance_to_squared(self: V, other: V) -> float:
        self._require_same(other, "measure distance between")
        return (other - self).magnitude_squared()

    def _unit_components(self) -> Tuple[float, ...]:
        components = self.to_tuple()
        largest = max(abs(c) for c in components)
        if not all(math.isfinite(c) for c in components) or largest <= ZERO_MAGNITUDE:
            raise DegenerateInputError(
                f"Cannot normalize {type(self).__qualname__} with magnitude "
                f"{math.hypot(*components)}; use try_normalize() to get None instead"
            )
        # rescale first so subnormal and huge components keep a unit result
        scaled = tuple(c / largest for c in components)
        length = math.hypot(*scaled)
        return tuple(c / length for c in scaled)

    def _unit_components_unchecked(self) -> Tuple[float, ...]:
        length = math.hypot(*self.to_tuple())
        return tuple(c / length for c in self.to_tuple())

    # ------------------------------------------------------------------
    # Component-wise helpers
    # ------------------------------------------------------------------

    def lerp(self: V, other: V, t: float) -> V:
        """Linear interpolation; t=0 gives self, t=1 gives other."""
        self._require_same(other, "interpolate")
        return self._zip(other, lambda a, b: a + (b - a) * t)

    def min(self: V, other: V) -> V:
        self._require_same(other, "compare")
        return self._zip(other, min)

    def max(self: V, other: V) -> V:
        self._require_same(other, "compare")
        return self._zip(other, max)

    def clamp(self: V, low: V, high: V) -> V:
        """Clamp each component into [low, high]."""
        return self.max(low).min(high)

    def min_component(self) -> Tuple[int, float]:
        """Return (index, value) of the smallest component."""
        return min(enumerate(self.to_tuple()), key=operator.itemgetter(1))

    def max_component(self) -> Tuple[int, float]:
        """Return (index, value) of the largest component."""
        return max(enumerate(self.to_tuple()), key=operator.itemgetter(1))

    def abs(self: V) -> V:
        return self._map(abs)

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in self.to_tuple())

    def approx_eq(
        self: V,
        other: V,
        rel_tol: float = DEFAULT_REL_TOL,
        abs_tol: float = DEFAULT_ABS_TOL,
    ) -> bool:
        """Component-wise comparison with explicit tolerances."""
        self._require_same(other, "compare")
        return all(
            math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
            for a, b in zip(self.to_tuple(), other.to_tuple())
        )

    def convert_to(self, target: Type[W]) -> Any:
        """Express the vector in another tag of the same family.

        Vectors are displacements, so only the scale applies; offsets cancel.
        Components come back as floats, even for integer vectors.

        Raises:
            IncompatibleUnitsError: If target belongs to a different family.
        """
        unit = self.unit
        return self._generic()._specialize((target,))(
            *(convert_difference(c, unit, target) for c in self.to_tuple())
        )

    def _as(self, kind: Any, *values: Any) -> Any:
        """Build a value of another kind carrying this vector's tag."""
        return kind._specialize(self._tags())(*values)


# ============================================================================
# Vectors
# ============================================================================


@dataclass(frozen=True)
class Vector2(_VectorBase[U]):
    """Two-component vector."""

    __slots__ = ("x", "y")
    _fields: ClassVar[Tuple[str, ...]] = ("x", "y")

    x: float
    y: float

    def __post_init__(self) -> None:
        self._require_real_components()

    @classmethod
    def from_angle(cls, angle: Angle[Any], length: float = 1.0) -> Vector2[U]:
        """Vector of the given length pointing at angle (counter-clockwise from +x)."""
        sin, cos = angle.sin_cos()
        return cls(cos * length, sin * length)

    def cross(self, other: Vector2[U]) -> float:
        """Perp-dot product: z of the 3-d cross product of the extended vectors."""
        self._require_same(other, "cross")
        return self.x * other.y - self.y * other.x

    def perp(self) -> Vector2[U]:
        """Rotate 90 degrees counter-clockwise."""
        return type(self)(-self.y, self.x)

    def angle(self) -> Angle[Radians]:
        """Angle from the positive x axis, in (-pi, pi]."""
        return Angle[Radians](math.atan2(self.y, self.x))

    def rotate(self, angle: Angle[Any]) -> Vector2[U]:
        """Rotate counter-clockwise by angle."""
        sin, cos = angle.sin_cos()
        return type(self)(self.x * cos - self.y * sin, self.x * sin + self.y * cos)

    def extend(self, z: float) -> Vector3[U]:
        return self._as(Vector3, self.x, self.y, z)

    def normalize(self) -> Direction2[U]:
        """Unit direction of this vector.

        Raises:
            DegenerateInputError: If the vector has zero or non-finite magnitude.
        """
        return self._as(Direction2, *self._unit_components())

    def try_normalize(self) -> Optional[Direction2[U]]:
        """Like normalize(), but None for a degenerate vector."""
        try:
            return self.normalize()
        except DegenerateInputError:
            return None

    def normalize_unchecked(self) -> Direction2[U]:
        """Normalize without the degenerate check.

        A zero vector divides by zero as its component type does (a
        ZeroDivisionError for Python floats, NaN for numpy floats).
        """
        return self._as(Direction2, *self._unit_components_unchecked())


@dataclass(frozen=True)
class Vector3(_VectorBase[U]):
    """Three-component vector."""

    __slots__ = ("x", "y", "z")
    _fields: ClassVar[Tuple[str, ...]] = ("x", "y", "z")

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        self._require_real_components()

    def cross(self, other: Vector3[U]) -> Vector3[U]:
        """Right-handed cross product."""
        self._require_same(other, "cross")
        return type(self)(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def extend(self, w: float) -> Vector4[U]:
        return self._as(Vector4, self.x, self.y, self.z, w)

    def truncate(self) -> Vector2[U]:
        """Drop z."""
        return self._as(Vector2, self.x, self.y)

    def normalize(self) -> Direction3[U]:
        """Unit direction of this vector.

        Raises:
            DegenerateInputError: If the vector has zero or non-finite magnitude.
        """
        return self._as(Direction3, *self._unit_components())

    def try_normalize(self) -> Optional[Direction3[U]]:
        try:
            return self.normalize()
        except DegenerateInputError:
            return None

    def normalize_unchecked(self) -> Direction3[U]:
        return self._as(Direction3, *self._unit_components_unchecked())


@dataclass(frozen=True)
class Vector4(_VectorBase[U]):
    """Four-component vector (homogeneous or clip-space coordinates)."""

    __slots__ = ("x", "y", "z", "w")
    _fields: ClassVar[Tuple[str, ...]] = ("x", "y", "z", "w")

    x: float
    y: float
    z: float
    w: float

    def __post_init__(self) -> None:
        self._require_real_components()

    def truncate(self) -> Vector3[U]:
        """Drop w."""
        return self._as(Vector3, self.x, self.y, self.z)


# ============================================================================
# Directions
# ============================================================================


class _DirectionBase(TaggedValue[U]):
    """Unit-length direction in the space named by its tag.

    Directions are built by normalizing a vector. Constructing one from
    components directly trusts the caller that they have unit length.
    """

    __slots__ = ()

    _vector_kind: ClassVar[Any]

    def __neg__(self: D) -> D:
        return self._map(operator.neg)

    def dot(self: D, other: D) -> float:
        """Cosine of the angle between the two directions."""
        self._require_same(other, "dot")
        return sum(a * b for a, b in zip(self.to_tuple(), other.to_tuple()))

    def angle_between(self: D, other: D) -> Angle[Radians]:
        """Unsigned angle in [0, pi]."""
        cosine = max(-1.0, min(1.0, self.dot(other)))
        return Angle[Radians](math.acos(cosine))

    def to_vector(self) -> Any:
        """The same components as a unit-magnitude vector."""
        return self._vector_kind._specialize(self._tags())(*self.to_tuple())

    def __mul__(self, length: Quantity[U]) -> Any:
        """Scale by a tagged length to get a vector of that magnitude."""
        if not isinstance(length, Quantity):
            return NotImplemented
        if length.unit is not self.unit:
            raise IncompatibleUnitsError(self.unit, length.unit, "scale")
        return self.to_vector() * length.value

    __rmul__ = __mul__

    def approx_eq(
        self: D,
        other: D,
        rel_tol: float = DEFAULT_REL_TOL,
        abs_tol: float = DEFAULT_ABS_TOL,
    ) -> bool:
        self._require_same(other, "compare")
        return all(
            math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
            for a, b in zip(self.to_tuple(), other.to_tuple())
        )

    def convert_to(self, target: Type[W]) -> Any:
        """Relabel the direction with another tag of the same family.

        Components are unchanged: a direction has no magnitude to rescale.

        Raises:
            IncompatibleUnitsError: If target belongs to a different family.
        """
        if not is_convertible(self.unit, target):
            raise IncompatibleUnitsError(self.unit, target, "convert between")
        return self._generic()._specialize((target,))(*self.to_tuple())


@dataclass(frozen=True)
class Direction2(_DirectionBase[U]):
    """Unit direction in 2-d."""

    __slots__ = ("x", "y")
    _fields: ClassVar[Tuple[str, ...]] = ("x", "y")

    x: float
    y: float

    def __post_init__(self) -> None:
        self._require_real_components()

    @classmethod
    def unit_x(cls) -> Direction2[U]:
        return cls(1.0, 0.0)

    @classmethod
    def unit_y(cls) -> Direction2[U]:
        return cls(0.0, 1.0)

    def to_vector(self) -> Vector2[U]:
        return super().to_vector()  # type: ignore[no-any-return]

    def __mul__(self, length: Quantity[U]) -> Vector2[U]:
        return super().__mul__(length)  # type: ignore[no-any-return]

    __rmul__ = __mul__


@dataclass(frozen=True)
class Direction3(_DirectionBase[U]):
    """Unit direction in 3-d."""

    __slots__ = ("x", "y", "z")
    _fields: ClassVar[Tuple[str, ...]] = ("x", "y", "z")

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        self._require_real_components()

    @classmethod
    def unit_x(cls) -> Direction3[U]:
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def unit_y(cls) -> Direction3[U]:
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def unit_z(cls) -> Direction3[U]:
        return cls(0.0, 0.0, 1.0)

    def cross(self, other: Direction3[U]) -> Vector3[U]:
        """Cross product; a vector, since its length is the sine of the angle."""
        self._require_same(other, "cross")
        return self.to_vector().cross(other.to_vector())

    def to_vector(self) -> Vector3[U]:
        return super().to_vector()  # type: ignore[no-any-return]

    def __mul__(self, length: Quantity[U]) -> Vector3[U]:
        return super().__mul__(length)  # type: ignore[no-any-return]

    __rmul__ = __mul__


Direction2._vector_kind = Vector2
Direction3._vector_kind = Vector3


__all__ = [
    "Direction2",
    "Direction3",
    "Vector2",
    "Vector3",
    "Vector4",
]
