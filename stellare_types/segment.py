"""
Line segments between two points.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Tuple, Type, TypeVar

from stellare_types.point import Point2
from stellare_types.quantity import Quantity
from stellare_types.tagged import TaggedValue, U
from stellare_types.units import Unit
from stellare_types.vector import Direction2, Vector2

S = TypeVar("S", bound="Segment2[Any]")
W = TypeVar("W", bound=Unit)


@dataclass(frozen=True)
class Segment2(TaggedValue[U]):
    """Straight segment from start to end in a 2-d space.

    Attributes:
        start: First endpoint.
        end: Second endpoint.
    """

    __slots__ = ("start", "end")
    _fields: ClassVar[Tuple[str, ...]] = ("start", "end")

    start: Point2[U]
    end: Point2[U]

    def __post_init__(self) -> None:
        self._require_tagged_components(Point2)

    @classmethod
    def between(cls: Type[S], start: Point2[Any], end: Point2[Any]) -> S:
        """Segment taking its tag from the endpoints."""
        kind = cls._specialize(start._tags()) if cls._units is None else cls
        return kind(start, end)

    def vector(self) -> Vector2[U]:
        """Displacement from start to end."""
        return self.end - self.start

    def length(self) -> Quantity[U]:
        return self.start.distance_to(self.end)

    def direction(self) -> Direction2[U]:
        """Unit direction from start to end.

        Raises:
            DegenerateInputError: If start and end coincide.
        """
        return self.vector().normalize()

    def point_at(self, t: float) -> Point2[U]:
        """Point at parameter t; 0 is start and 1 is end (not clamped)."""
        return self.start.lerp(self.end, t)

    def midpoint(self) -> Point2[U]:
        return self.start.midpoint(self.end)

    def closest_point(self, point: Point2[U]) -> Point2[U]:
        """Point on the segment nearest to point.

        A zero-length segment has start as its only point.
        """
        self._same_tags(point, "project")
        span = self.vector()
        length_sq = span.magnitude_squared()
        if length_sq == 0:
            return self.start
        t = (point - self.start).dot(span) / length_sq
        return self.point_at(min(1.0, max(0.0, t)))

    def distance_to_point(self, point: Point2[U]) -> Quantity[U]:
        return self.closest_point(point).distance_to(point)

    def reversed(self: S) -> S:
        return type(self)(self.end, self.start)

    def convert_to(self, target: Type[W]) -> Segment2[W]:
        return Segment2._specialize((target,))(
            self.start.convert_to(target), self.end.convert_to(target)
        )


__all__ = ["Segment2"]
