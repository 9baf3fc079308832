"""
Dimension-tagged value types.

This package provides the vector, point, angle and quantity types shared by
otherwise independent components, so that they all speak the same geometric
vocabulary without exposing any third-party math library in their public
signatures.

Every geometric type is parameterized by a dimension tag: a unit such as
``Meters`` or ``Degrees``, or a coordinate space such as ``WorldSpace``.
Values with different tags never mix implicitly. Static type checkers reject
the mix before the program runs, and at runtime it raises
:class:`IncompatibleUnitsError`. Crossing tags always takes an explicit
``convert_to()`` (same family) or an ``Affine2`` (between coordinate spaces).

Example Usage:
    >>> from stellare_types import Angle, Point3, Quantity, Vector3
    >>> from stellare_types.units import Degrees, Feet, Meters, Radians
    >>>
    >>> # Units are part of the type
    >>> step = Vector3[Meters](1.0, 0.0, 0.0)
    >>> start = Point3[Meters](0.0, 0.0, 0.0)
    >>> end = start + step * 3
    >>> end - start
    Vector3[Meters](x=3.0, y=0.0, z=0.0)
    >>>
    >>> # Conversions are explicit
    >>> round(Quantity[Meters](1.0).convert_to(Feet).value, 5)
    3.28084
    >>> Angle[Degrees](180.0).convert_to(Radians).value
    3.141592653589793
    >>>
    >>> # Degenerate input is an error, not NaN
    >>> Vector3[Meters].zero().normalize()
    Traceback (most recent call last):
    ...
    DegenerateInputError: Cannot normalize Vector3[Meters] with magnitude 0.0; ...

Available Classes:
    Scalars:
        - Quantity: A number with a dimension tag
        - Angle: A quantity restricted to angular tags, with trigonometry

    Geometry:
        - Vector2, Vector3, Vector4: Displacements
        - Direction2, Direction3: Unit directions produced by normalize()
        - Point2, Point3: Positions
        - Rect2: Axis-aligned rectangles
        - Segment2: Line segments
        - CubicBezier: Cubic Bézier curves with arc-length parameterization
        - Affine2: 2-d affine transforms between coordinate spaces

    Optional interop (see stellare_types.interop):
        - numpy arrays and mathutils vectors/matrices, enabled per capability
"""

from stellare_types.affine import Affine2
from stellare_types.angle import Angle
from stellare_types.bezier import CubicBezier
from stellare_types.config import StellareConfig, get_default_config
from stellare_types.conversions import (
    conversion_factor,
    convert,
    convert_difference,
    parse_unit,
)
from stellare_types.errors import (
    CapabilityUnavailableError,
    ComponentCountError,
    ConversionNotAvailableError,
    DegenerateInputError,
    IncompatibleUnitsError,
    StellareTypesError,
    UnknownUnitError,
)
from stellare_types.point import Point2, Point3
from stellare_types.quantity import Quantity
from stellare_types.rect import Rect2
from stellare_types.segment import Segment2
from stellare_types.units import CoordinateSpace, Unit
from stellare_types.vector import Direction2, Direction3, Vector2, Vector3, Vector4

__all__ = [
    # Scalars
    "Angle",
    "Quantity",
    # Geometry
    "Affine2",
    "CubicBezier",
    "Direction2",
    "Direction3",
    "Point2",
    "Point3",
    "Rect2",
    "Segment2",
    "Vector2",
    "Vector3",
    "Vector4",
    # Tags and conversion
    "CoordinateSpace",
    "Unit",
    "conversion_factor",
    "convert",
    "convert_difference",
    "parse_unit",
    # Configuration
    "StellareConfig",
    "get_default_config",
    # Errors
    "CapabilityUnavailableError",
    "ComponentCountError",
    "ConversionNotAvailableError",
    "DegenerateInputError",
    "IncompatibleUnitsError",
    "StellareTypesError",
    "UnknownUnitError",
]

__version__ = "0.1.0"
