"""
Tagged scalar quantities.

A :class:`Quantity` pairs one number with one dimension tag. Quantities with
different tags never add, subtract, order or assign to each other; the only
bridge between tags is an explicit :meth:`Quantity.convert_to`.

Usage Example:
    >>> from stellare_types import Quantity
    >>> from stellare_types.units import Feet, Meters
    >>>
    >>> height = Quantity[Meters](1.8)
    >>> height + Quantity[Meters](0.2)
    Quantity[Meters](value=2.0)
    >>> height.convert_to(Feet).value  # doctest: +ELLIPSIS
    5.905...
    >>> height + Quantity[Feet](1.0)
    Traceback (most recent call last):
    ...
    IncompatibleUnitsError: Cannot add values tagged Meters and Feet. ...
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Any, ClassVar, Tuple, Type, TypeVar

from stellare_types.conversions import convert
from stellare_types.tagged import TaggedValue, U, is_real_scalar
from stellare_types.tolerance import DEFAULT_ABS_TOL, DEFAULT_REL_TOL
from stellare_types.units import Unit

Q = TypeVar("Q", bound="Quantity[Any]")
V = TypeVar("V", bound=Unit)


@dataclass(frozen=True)
class Quantity(TaggedValue[U]):
    """A number tagged with a unit or coordinate space.

    The value is stored exactly as given: ints stay ints, numpy scalars keep
    their precision. NaN and overflow behave as the underlying type does.

    Attributes:
        value: The raw numeric value, meaningful only together with the tag.
    """

    __slots__ = ("value",)
    _fields: ClassVar[Tuple[str, ...]] = ("value",)

    value: float

    def __post_init__(self) -> None:
        self._require_real_components()

    def __str__(self) -> str:
        return f"{self.value} {self.unit.symbol}"

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self: Q, other: Q) -> Q:
        if not self._same_kind(other, "add"):
            return NotImplemented
        return self._zip(other, operator.add)

    def __sub__(self: Q, other: Q) -> Q:
        if not self._same_kind(other, "subtract"):
            return NotImplemented
        return self._zip(other, operator.sub)

    def __neg__(self: Q) -> Q:
        return self._map(operator.neg)

    def __pos__(self: Q) -> Q:
        return self

    def __abs__(self: Q) -> Q:
        return self._map(abs)

    def __mul__(self: Q, scalar: float) -> Q:
        if not is_real_scalar(scalar):
            return NotImplemented
        return self._broadcast(scalar, operator.mul)

    def __rmul__(self: Q, scalar: float) -> Q:
        if not is_real_scalar(scalar):
            return NotImplemented
        return self._rbroadcast(scalar, operator.mul)

    def __truediv__(self, other: Any) -> Any:
        """Divide by a plain number (keeps the tag) or by a same-tag quantity (plain ratio)."""
        if is_real_scalar(other):
            return self._broadcast(other, operator.truediv)
        if self._same_kind(other, "divide"):
            return self.value / other.value
        return NotImplemented

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __lt__(self: Q, other: Q) -> bool:
        if not self._same_kind(other, "compare"):
            return NotImplemented
        return self.value < other.value

    def __le__(self: Q, other: Q) -> bool:
        if not self._same_kind(other, "compare"):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self: Q, other: Q) -> bool:
        if not self._same_kind(other, "compare"):
            return NotImplemented
        return self.value > other.value

    def __ge__(self: Q, other: Q) -> bool:
        if not self._same_kind(other, "compare"):
            return NotImplemented
        return self.value >= other.value

    def approx_eq(
        self: Q,
        other: Q,
        rel_tol: float = DEFAULT_REL_TOL,
        abs_tol: float = DEFAULT_ABS_TOL,
    ) -> bool:
        """Compare with explicit floating-point tolerances.

        Args:
            other: Quantity with the same tag.
            rel_tol: Relative tolerance.
            abs_tol: Absolute tolerance, used near zero.

        Raises:
            IncompatibleUnitsError: If other has a different tag.
        """
        self._require_same(other, "compare")
        return math.isclose(self.value, other.value, rel_tol=rel_tol, abs_tol=abs_tol)

    def min(self: Q, other: Q) -> Q:
        self._require_same(other, "compare")
        return other if other.value < self.value else self

    def max(self: Q, other: Q) -> Q:
        self._require_same(other, "compare")
        return other if other.value > self.value else self

    def clamp(self: Q, low: Q, high: Q) -> Q:
        """Clamp into [low, high]; all three must share the tag."""
        self._require_same(low, "clamp")
        self._require_same(high, "clamp")
        if self.value < low.value:
            return low
        if self.value > high.value:
            return high
        return self

    def is_finite(self) -> bool:
        return math.isfinite(self.value)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def convert_to(self, target: Type[V]) -> Quantity[V]:
        """Express this quantity in another tag of the same family.

        Offsets apply (100 degC becomes 373.15 K), since a quantity is an
        absolute value.

        Raises:
            IncompatibleUnitsError: If target belongs to a different family.
        """
        return self._generic()[target](convert(self.value, self.unit, target))  # type: ignore[index]


__all__ = ["Quantity"]
