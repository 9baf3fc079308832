"""
Axis-aligned rectangles.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Tuple, Type, TypeVar

from stellare_types.point import Point2
from stellare_types.tagged import TaggedValue, U
from stellare_types.units import Unit
from stellare_types.vector import Vector2

R = TypeVar("R", bound="Rect2[Any]")
W = TypeVar("W", bound=Unit)


@dataclass(frozen=True)
class Rect2(TaggedValue[U]):
    """Closed axis-aligned rectangle between two corners.

    Corners given in any order are sorted per axis on construction, so
    ``min`` is always the lower-left and ``max`` the upper-right corner.
    Edges are inclusive: a point on the boundary is contained, and two
    rectangles sharing an edge intersect in a zero-area rectangle.

    Attributes:
        min: Corner with the smallest coordinates.
        max: Corner with the largest coordinates.
    """

    __slots__ = ("min", "max")
    _fields: ClassVar[Tuple[str, ...]] = ("min", "max")

    min: Point2[U]
    max: Point2[U]

    def __post_init__(self) -> None:
        self._require_tagged_components(Point2)
        low, high = self.min, self.max
        if low.x > high.x or low.y > high.y:
            object.__setattr__(self, "min", low.min(high))
            object.__setattr__(self, "max", low.max(high))

    @classmethod
    def _kind_for(cls: Type[R], tags: Tuple[Type[Unit], ...]) -> Type[R]:
        return cls._specialize(tags) if cls._units is None else cls

    @classmethod
    def from_corners(cls: Type[R], a: Point2[Any], b: Point2[Any]) -> R:
        """Rectangle spanned by two corners; the tag is taken from the corners."""
        return cls._kind_for(a._tags())(a, b)

    @classmethod
    def from_size(cls: Type[R], origin: Point2[Any], size: Vector2[Any]) -> R:
        """Rectangle with its min corner at origin; negative sizes clamp to zero."""
        extent = size.max(type(size).zero())
        return cls._kind_for(origin._tags())(origin, origin + extent)

    @property
    def size(self) -> Vector2[U]:
        return self.max - self.min

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Point2[U]:
        return self.min.midpoint(self.max)

    def contains_point(self, point: Point2[U]) -> bool:
        if not isinstance(point, Point2):
            raise TypeError(f"Expected a Point2, got {type(point).__name__}")
        self._same_tags(point, "test containment of")
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
        )

    __contains__ = contains_point

    def intersects(self: R, other: R) -> bool:
        self._require_same(other, "intersect")
        return (
            self.min.x <= other.max.x
            and other.min.x <= self.max.x
            and self.min.y <= other.max.y
            and other.min.y <= self.max.y
        )

    def intersection(self: R, other: R) -> Optional[R]:
        """Overlapping region, or None when the rectangles are disjoint."""
        if not self.intersects(other):
            return None
        return type(self)(self.min.max(other.min), self.max.min(other.max))

    def union(self: R, other: R) -> R:
        """Smallest rectangle containing both."""
        self._require_same(other, "union")
        return type(self)(self.min.min(other.min), self.max.max(other.max))

    def expand_to_include(self: R, point: Point2[Any]) -> R:
        self._same_tags(point, "expand")
        return type(self)(self.min.min(point), self.max.max(point))

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for corner in (self.min, self.max) for c in corner)

    def convert_to(self, target: Type[W]) -> Rect2[W]:
        """Convert both corners (offsets apply, as for points)."""
        return Rect2._specialize((target,))(
            self.min.convert_to(target), self.max.convert_to(target)
        )


__all__ = ["Rect2"]
