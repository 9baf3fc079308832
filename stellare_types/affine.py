"""
2-d affine transforms between coordinate spaces.

``Affine2[F, T]`` maps positions and displacements tagged ``F`` to values
tagged ``T``. It is the explicit bridge between coordinate spaces: a
``Point2[WorldSpace]`` only becomes a ``Point2[ViewSpace]`` by passing
through an ``Affine2[WorldSpace, ViewSpace]``.

Matrix Layout:
    Row-vector convention, stored as a 3x2 matrix::

        [x' y'] = [x y 1] . | m00 m01 |
                            | m10 m11 |
                            | m20 m21 |

    ``(m00, m01, m10, m11)`` is the linear part, ``(m20, m21)`` the
    translation.

Composition:
    ``b @ a`` (or ``b * a``) applies ``a`` first, then ``b``. The tags must
    chain: ``Affine2[V, T] @ Affine2[F, V]`` is an ``Affine2[F, T]``.

Usage Example:
    >>> from stellare_types import Affine2, Angle, Point2
    >>> from stellare_types.units import Degrees, ViewSpace, WorldSpace
    >>>
    >>> camera = Affine2.from_camera(Point2[WorldSpace](10.0, 0.0), Angle[Degrees](0.0), 2.0)
    >>> camera.transform_point(Point2[WorldSpace](14.0, 2.0))
    Point2[ViewSpace](x=2.0, y=1.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, List, Tuple, Type, TypeVar

from stellare_types.angle import Angle
from stellare_types.errors import DegenerateInputError, IncompatibleUnitsError
from stellare_types.point import Point2
from stellare_types.tagged import Tagged
from stellare_types.tolerance import DEFAULT_ABS_TOL, DEFAULT_REL_TOL, SINGULAR_DETERMINANT
from stellare_types.units import Unit, Unitless, ViewSpace, WorldSpace
from stellare_types.vector import Vector2

F = TypeVar("F", bound=Unit)
T = TypeVar("T", bound=Unit)
N = TypeVar("N", bound=Unit)
M = TypeVar("M", bound="Affine2[Any, Any]")


@dataclass(frozen=True)
class Affine2(Tagged, Generic[F, T]):
    """Affine map from space F to space T.

    Attributes:
        m00, m01, m10, m11: Linear part (rows of the 2x2 matrix).
        m20, m21: Translation, in T.
    """

    __slots__ = ("m00", "m01", "m10", "m11", "m20", "m21")
    _fields: ClassVar[Tuple[str, ...]] = ("m00", "m01", "m10", "m11", "m20", "m21")
    _default_units = (Unitless, Unitless)

    m00: float
    m01: float
    m10: float
    m11: float
    m20: float
    m21: float

    def __post_init__(self) -> None:
        self._require_real_components()

    @property
    def source_space(self) -> Type[F]:
        return self._tags()[0]  # type: ignore[return-value]

    @property
    def target_space(self) -> Type[T]:
        return self._tags()[1]  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def identity(cls: Type[M]) -> M:
        return cls(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

    @classmethod
    def from_translation(cls: Type[M], translation: Vector2[Any]) -> M:
        """Pure translation by a displacement in the target space.

        On an unparameterized class both spaces take the translation's tag.

        Raises:
            IncompatibleUnitsError: If the translation is not tagged with
                the target space.
        """
        kind = cls._specialize(translation._tags() * 2) if cls._units is None else cls
        target = kind._tags()[1]
        if translation.unit is not target:
            raise IncompatibleUnitsError(translation.unit, target, "translate by")
        return kind(1.0, 0.0, 0.0, 1.0, translation.x, translation.y)

    @classmethod
    def from_rotation(cls: Type[M], rotation: Angle[Any]) -> M:
        """Counter-clockwise rotation about the origin."""
        sin, cos = rotation.sin_cos()
        return cls(cos, sin, -sin, cos, 0.0, 0.0)

    @classmethod
    def from_scale(cls: Type[M], scale: float) -> M:
        return cls(scale, 0.0, 0.0, scale, 0.0, 0.0)

    @classmethod
    def from_nonuniform_scale(cls: Type[M], scale: Vector2[Any]) -> M:
        """Independent x and y scale factors.

        The factors are ratios, so only the components of scale are used.
        """
        return cls(scale.x, 0.0, 0.0, scale.y, 0.0, 0.0)

    @classmethod
    def from_camera(
        cls,
        position: Point2[WorldSpace],
        rotation: Angle[Any],
        zoom: float,
    ) -> Affine2[WorldSpace, ViewSpace]:
        """World-to-view transform of a 2-d camera.

        The camera sits at position, is rotated counter-clockwise by
        rotation, and shows zoom world units per view unit. The camera
        position maps to the view origin.

        Raises:
            IncompatibleUnitsError: If position is not in WorldSpace.
            DegenerateInputError: If zoom is zero or not finite.
        """
        if position.unit is not WorldSpace:
            raise IncompatibleUnitsError(position.unit, WorldSpace, "place a camera with")
        if zoom == 0 or not math.isfinite(zoom):
            raise DegenerateInputError(f"Camera zoom must be finite and non-zero, got {zoom}")
        sin, cos = rotation.sin_cos()
        m00 = cos / zoom
        m01 = -sin / zoom
        m10 = sin / zoom
        m11 = cos / zoom
        m20 = -(position.x * m00 + position.y * m10)
        m21 = -(position.x * m01 + position.y * m11)
        return Affine2[WorldSpace, ViewSpace](m00, m01, m10, m11, m20, m21)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def __matmul__(self, other: Affine2[N, F]) -> Affine2[N, T]:
        if not isinstance(other, Affine2):
            return NotImplemented
        source, middle = other._tags()
        if middle is not self.source_space:
            raise IncompatibleUnitsError(
                middle,
                self.source_space,
                "compose",
                message=(
                    f"Cannot compose {type(self).__qualname__} after {type(other).__qualname__}: "
                    f"{middle.__name__} output does not feed {self.source_space.__name__} input"
                ),
            )
        a, b = other, self
        return Affine2._specialize((source, self.target_space))(
            b.m00 * a.m00 + b.m10 * a.m01,
            b.m01 * a.m00 + b.m11 * a.m01,
            b.m00 * a.m10 + b.m10 * a.m11,
            b.m01 * a.m10 + b.m11 * a.m11,
            b.m00 * a.m20 + b.m10 * a.m21 + b.m20,
            b.m01 * a.m20 + b.m11 * a.m21 + b.m21,
        )

    __mul__ = __matmul__

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def transform_point(self, point: Point2[F]) -> Point2[T]:
        """Map a position from F to T (translation applies)."""
        self._require_source(point)
        x, y = point.x, point.y
        return Point2._specialize((self.target_space,))(
            x * self.m00 + y * self.m10 + self.m20,
            x * self.m01 + y * self.m11 + self.m21,
        )

    def transform_vector(self, vector: Vector2[F]) -> Vector2[T]:
        """Map a displacement from F to T (translation does not apply)."""
        self._require_source(vector)
        x, y = vector.x, vector.y
        return Vector2._specialize((self.target_space,))(
            x * self.m00 + y * self.m10,
            x * self.m01 + y * self.m11,
        )

    def _require_source(self, value: Any) -> None:
        if value.unit is not self.source_space:
            raise IncompatibleUnitsError(value.unit, self.source_space, "transform")

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def determinant(self) -> float:
        return self.m00 * self.m11 - self.m01 * self.m10

    def inverse(self) -> Affine2[T, F]:
        """Map from T back to F.

        Raises:
            DegenerateInputError: If the linear part is singular.
        """
        det = self.determinant()
        if not math.isfinite(det) or abs(det) <= SINGULAR_DETERMINANT:
            raise DegenerateInputError(
                f"Cannot invert {type(self).__qualname__} with determinant {det}"
            )
        n00 = self.m11 / det
        n01 = -self.m01 / det
        n10 = -self.m10 / det
        n11 = self.m00 / det
        n20 = -(self.m20 * n00 + self.m21 * n10)
        n21 = -(self.m20 * n01 + self.m21 * n11)
        return Affine2._specialize((self.target_space, self.source_space))(
            n00, n01, n10, n11, n20, n21
        )

    def approx_eq(
        self: M,
        other: M,
        rel_tol: float = DEFAULT_REL_TOL,
        abs_tol: float = DEFAULT_ABS_TOL,
    ) -> bool:
        self._require_same(other, "compare")
        return all(
            math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
            for a, b in zip(self.to_tuple(), other.to_tuple())
        )

    def to_rows(self) -> List[List[float]]:
        """Nested 3x2 list in row-vector layout."""
        return [
            [self.m00, self.m01],
            [self.m10, self.m11],
            [self.m20, self.m21],
        ]


__all__ = ["Affine2"]
