"""
Angles tagged with an angular unit.

:class:`Angle` is a :class:`~stellare_types.quantity.Quantity` restricted to
the ``Angular`` family. Trigonometry always evaluates in radians and returns
plain floats; wrapping is exact in every tag because each angular tag knows
the size of a full turn in its own unit.

Usage Example:
    >>> from stellare_types import Angle
    >>> from stellare_types.units import Degrees
    >>>
    >>> heading = Angle[Degrees](350.0)
    >>> (heading + Angle[Degrees](20.0)).wrapped()
    Angle[Degrees](value=10.0)
    >>> round(heading.cos(), 6)
    0.984808
"""

from __future__ import annotations

import math
from typing import Any, Tuple, Type, TypeVar

from stellare_types.errors import IncompatibleUnitsError
from stellare_types.quantity import Quantity
from stellare_types.units import Angular, Degrees, Radians, Unit

A = TypeVar("A", bound=Angular)
G = TypeVar("G", bound="Angle[Any]")


class Angle(Quantity[A]):
    """An angle in one angular tag; bare ``Angle(x)`` is radians."""

    __slots__ = ()
    _default_units = (Radians,)

    @classmethod
    def _check_units(cls, units: Tuple[Type[Unit], ...]) -> None:
        unit = units[0]
        if unit.family is not Angular:
            raise IncompatibleUnitsError(
                unit,
                Radians,
                "use",
                message=f"Angle requires an Angular tag such as Radians or Degrees, got {unit.__name__}",
            )

    @classmethod
    def from_atan2(cls: Type[G], y: float, x: float) -> G:
        """Angle of the point (x, y) from the positive x axis, in (-pi, pi] radians.

        On a parameterized class the result is converted to that tag, e.g.
        ``Angle[Degrees].from_atan2(1, 1)`` is 45 degrees.
        """
        radians = Angle[Radians](math.atan2(y, x))
        return radians.convert_to(cls._tags()[0])  # type: ignore[return-value]

    def radians(self) -> float:
        return self.convert_to(Radians).value

    def degrees(self) -> float:
        return self.convert_to(Degrees).value

    def sin(self) -> float:
        return math.sin(self.radians())

    def cos(self) -> float:
        return math.cos(self.radians())

    def tan(self) -> float:
        return math.tan(self.radians())

    def sin_cos(self) -> Tuple[float, float]:
        rad = self.radians()
        return math.sin(rad), math.cos(rad)

    def full_turn(self) -> float:
        """Size of one revolution expressed in this angle's tag."""
        unit = self.unit
        turn = getattr(unit, "full_turn", None)
        if turn is None:
            turn = math.tau / unit.scale
        return turn

    def wrapped(self: G) -> G:
        """Equivalent angle in [0, full turn)."""
        turn = self.full_turn()
        result = self.value % turn
        # a tiny negative input rounds up to exactly one turn
        if result >= turn:
            result -= turn
        return type(self)(result)

    def wrapped_signed(self: G) -> G:
        """Equivalent angle in [-half turn, half turn)."""
        turn = self.full_turn()
        half = turn / 2.0
        result = (self.value + half) % turn - half
        if result >= half:
            result -= turn
        return type(self)(result)

    def shortest_difference(self: G, other: G) -> G:
        """Signed rotation that takes self onto other, in [-half turn, half turn).

        Raises:
            IncompatibleUnitsError: If other has a different tag.
        """
        self._require_same(other, "subtract")
        return type(self)(other.value - self.value).wrapped_signed()


__all__ = ["Angle"]
