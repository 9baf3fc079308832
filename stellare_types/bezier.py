"""
Cubic Bézier curves with arc-length parameterization.

Arc length has no closed form for a cubic, so it is integrated numerically
with the composite Simpson rule over the speed ``|B'(t)|``. Finding the
parameter for a given length bisects on that integral, then polishes the
estimate with a few Newton steps (the derivative of arc length is the
speed).

Usage Example:
    >>> from stellare_types import CubicBezier, Point2
    >>>
    >>> curve = CubicBezier(Point2(0.0, 0.0), Point2(1.0, 0.0), Point2(2.0, 0.0), Point2(3.0, 0.0))
    >>> round(curve.arc_length(), 9)
    3.0
    >>> round(curve.find_t_for_length(1.5), 6)
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Tuple, Type, TypeVar

from stellare_types.point import Point2
from stellare_types.tagged import TaggedValue, U
from stellare_types.units import Unit
from stellare_types.vector import Vector2

B = TypeVar("B", bound="CubicBezier[Any]")
W = TypeVar("W", bound=Unit)

DEFAULT_STEPS = 64
DEFAULT_TOLERANCE = 1e-9
NEWTON_ITERATIONS = 5


@dataclass(frozen=True)
class CubicBezier(TaggedValue[U]):
    """Cubic Bézier curve through p0 and p3, shaped by p1 and p2.

    Attributes:
        p0: Start point (t = 0).
        p1: First control point.
        p2: Second control point.
        p3: End point (t = 1).
    """

    __slots__ = ("p0", "p1", "p2", "p3")
    _fields: ClassVar[Tuple[str, ...]] = ("p0", "p1", "p2", "p3")

    p0: Point2[U]
    p1: Point2[U]
    p2: Point2[U]
    p3: Point2[U]

    def __post_init__(self) -> None:
        self._require_tagged_components(Point2)

    @classmethod
    def from_points(cls: Type[B], p0: Point2[Any], p1: Point2[Any], p2: Point2[Any], p3: Point2[Any]) -> B:
        """Curve taking its tag from the control points."""
        kind = cls._specialize(p0._tags()) if cls._units is None else cls
        return kind(p0, p1, p2, p3)

    def point_at(self, t: float) -> Point2[U]:
        """Evaluate the curve; t is not clamped to [0, 1]."""
        u = 1.0 - t
        w0 = u * u * u
        w1 = 3.0 * u * u * t
        w2 = 3.0 * u * t * t
        w3 = t * t * t
        p0, p1, p2, p3 = self.p0, self.p1, self.p2, self.p3
        return type(p0)(
            w0 * p0.x + w1 * p1.x + w2 * p2.x + w3 * p3.x,
            w0 * p0.y + w1 * p1.y + w2 * p2.y + w3 * p3.y,
        )

    def derivative(self, t: float) -> Vector2[U]:
        """Tangent B'(t); its magnitude is the speed along the curve."""
        u = 1.0 - t
        return (
            (self.p1 - self.p0) * (3.0 * u * u)
            + (self.p2 - self.p1) * (6.0 * u * t)
            + (self.p3 - self.p2) * (3.0 * t * t)
        )

    def _speed(self, t: float) -> float:
        d = self.derivative(t)
        return math.hypot(d.x, d.y)

    def arc_length(self, t: float = 1.0, steps: int = DEFAULT_STEPS) -> float:
        """Length of the curve from 0 to t by the composite Simpson rule.

        Args:
            t: Upper parameter bound.
            steps: Number of sub-intervals; odd counts are rounded up to the
                next even number.

        Returns:
            Arc length in the curve's tag, as a plain number.

        Raises:
            ValueError: If steps is less than 1.
        """
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")
        if steps % 2:
            steps += 1
        h = t / steps
        total = self._speed(0.0) + self._speed(t)
        for i in range(1, steps):
            weight = 4.0 if i % 2 else 2.0
            total += weight * self._speed(i * h)
        return total * h / 3.0

    def length(self, steps: int = DEFAULT_STEPS) -> float:
        return self.arc_length(1.0, steps)

    def find_t_for_length(
        self,
        length: float,
        steps: int = DEFAULT_STEPS,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> float:
        """Parameter t at which the arc length from the start equals length.

        Lengths outside [0, total length] are clamped, so the result is
        always in [0, 1].

        Args:
            length: Target arc length.
            steps: Simpson sub-intervals, also the bisection iteration cap.
            tolerance: Stop once the length error is within this bound.

        Raises:
            ValueError: If steps is less than 1.
        """
        total = self.arc_length(1.0, steps)
        target = min(max(length, 0.0), total)
        if total == 0.0 or target <= 0.0:
            return 0.0
        if target >= total:
            return 1.0

        low, high = 0.0, 1.0
        for _ in range(steps):
            mid = (low + high) / 2.0
            if self.arc_length(mid, steps) < target:
                low = mid
            else:
                high = mid
            if high - low <= tolerance:
                break

        t = (low + high) / 2.0
        for _ in range(NEWTON_ITERATIONS):
            error = self.arc_length(t, steps) - target
            if abs(error) <= tolerance:
                break
            speed = self._speed(t)
            if speed == 0.0:
                break
            t = min(1.0, max(0.0, t - error / speed))
        return t

    def split(self: B, t: float) -> Tuple[B, B]:
        """Split at t into two curves (de Casteljau)."""
        a = self.p0.lerp(self.p1, t)
        b = self.p1.lerp(self.p2, t)
        c = self.p2.lerp(self.p3, t)
        ab = a.lerp(b, t)
        bc = b.lerp(c, t)
        mid = ab.lerp(bc, t)
        kind = type(self)
        return kind(self.p0, a, ab, mid), kind(mid, bc, c, self.p3)

    def convert_to(self, target: Type[W]) -> CubicBezier[W]:
        return CubicBezier._specialize((target,))(*(p.convert_to(target) for p in self.to_tuple()))


__all__ = ["CubicBezier"]
