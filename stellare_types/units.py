"""
Dimension tags for type-safe numeric values.

This module defines the marker classes that parameterize every geometric
type in stellare_types. A tag identifies one unit (``Meters``, ``Degrees``)
or one coordinate space (``WorldSpace``). Tags are never instantiated and
carry no per-value data; ``Vector3[Meters]`` and ``Vector3[Feet]`` are
different classes, so mixing them is caught by static type checkers (mypy)
and refused at runtime.

Dimension Families:
    Tags belong to exactly one family. Tags in the same family convert into
    each other through the family's base tag:

        base_value = value * scale + offset

    Adding a tag to a family only needs its relationship to the base; every
    other conversion is derived from that.

    - Dimensionless: Unitless (base), Percent
    - Length: Meters (base), Kilometers, Centimeters, Millimeters, Feet,
      Inches, Yards, Miles
    - Angular: Radians (base), Degrees, Turns, Gradians
    - Time: Seconds (base), Milliseconds, Minutes, Hours
    - Mass: Kilograms (base), Grams, Pounds
    - Temperature: Kelvin (base), Celsius, Fahrenheit
    - CoordinateSpace: every subclass is a family of its own, so spaces are
      never convertible into each other

Usage Example:
    >>> from stellare_types.units import Length, Meters
    >>>
    >>> class Furlongs(Length, symbol="fur", scale=201.168):
    ...     '''An eighth of a mile.'''
    >>>
    >>> Furlongs.family is Meters.family
    True
"""

from __future__ import annotations

import math
from typing import ClassVar, Dict, List, Optional, Type

# Registered concrete tags keyed by symbol
_UNITS_BY_SYMBOL: Dict[str, Type["Unit"]] = {}

# Declared families in declaration order
_FAMILIES: List[Type["Unit"]] = []


class Unit:
    """Root of every dimension tag.

    Subclass keywords:
        family: Declare a new dimension family.
        base: Declare the base tag of the enclosing family.
        abstract: Declare a grouping class that is not itself a tag.
        symbol: Short symbol used for lookup and display (defaults to the
            class name).
        scale: Multiplier from this tag to the family base.
        offset: Offset added after scaling (e.g. Celsius to Kelvin).
    """

    __slots__ = ()

    family: ClassVar[Type[Unit]]
    base_unit: ClassVar[Type[Unit]]
    symbol: ClassVar[str] = ""
    scale: ClassVar[float] = 1.0
    offset: ClassVar[float] = 0.0
    _concrete: ClassVar[bool] = False

    def __new__(cls, *args: object, **kwargs: object) -> Unit:
        raise TypeError(
            f"{cls.__name__} is a dimension tag and cannot be instantiated. "
            f"Use it as a type parameter, e.g. Quantity[{cls.__name__}](1.0)"
        )

    def __init_subclass__(
        cls,
        *,
        family: bool = False,
        base: bool = False,
        abstract: bool = False,
        symbol: Optional[str] = None,
        scale: Optional[float] = None,
        offset: Optional[float] = None,
        **kwargs: object,
    ) -> None:
        super().__init_subclass__(**kwargs)

        if family:
            cls.family = cls
            _FAMILIES.append(cls)

        cls._concrete = not abstract and (base or not family)
        if not cls._concrete:
            if scale is not None or offset is not None:
                raise TypeError(f"{cls.__name__} is not a concrete tag and cannot declare scale/offset")
            return

        parent_family = getattr(cls, "family", None)
        if parent_family is None:
            raise TypeError(
                f"{cls.__name__} does not belong to a dimension family. "
                f"Subclass a family such as Length, or declare one with family=True"
            )

        if base:
            if "base_unit" in parent_family.__dict__:
                raise TypeError(
                    f"Family {parent_family.__name__} already has base "
                    f"{parent_family.base_unit.__name__}; cannot add base {cls.__name__}"
                )
            if scale not in (None, 1.0) or offset not in (None, 0.0):
                raise TypeError(f"Base tag {cls.__name__} must have scale 1 and offset 0")
            cls.scale = 1.0
            cls.offset = 0.0
            parent_family.base_unit = cls
        else:
            if "base_unit" not in parent_family.__dict__:
                raise TypeError(
                    f"Family {parent_family.__name__} has no base tag yet; "
                    f"declare it before {cls.__name__}"
                )
            if scale is None:
                raise TypeError(
                    f"{cls.__name__} must declare scale= relative to {parent_family.base_unit.__name__}"
                )
            if not math.isfinite(scale) or scale <= 0:
                raise TypeError(f"Scale of {cls.__name__} must be positive and finite, got {scale}")
            offset = 0.0 if offset is None else offset
            if not math.isfinite(offset):
                raise TypeError(f"Offset of {cls.__name__} must be finite, got {offset}")
            cls.scale = float(scale)
            cls.offset = float(offset)

        cls.symbol = symbol if symbol is not None else cls.__name__
        existing = _UNITS_BY_SYMBOL.get(cls.symbol)
        if existing is not None:
            raise TypeError(
                f"Symbol '{cls.symbol}' of {cls.__name__} is already used by {existing.__name__}"
            )
        _UNITS_BY_SYMBOL[cls.symbol] = cls


def is_concrete(unit: object) -> bool:
    """Check whether unit is a concrete tag usable as a type parameter."""
    return isinstance(unit, type) and issubclass(unit, Unit) and unit._concrete


def require_concrete(unit: object) -> Type[Unit]:
    """Return unit if it is a concrete tag.

    Raises:
        TypeError: If unit is not a concrete dimension tag (e.g. a family
            class such as Length, or not a Unit subclass at all).
    """
    if not is_concrete(unit):
        name = getattr(unit, "__name__", repr(unit))
        raise TypeError(f"{name} is not a concrete dimension tag")
    return unit  # type: ignore[return-value]


def is_compatible(a: Type[Unit], b: Type[Unit]) -> bool:
    """Tags are compatible only when they are the same tag."""
    return a is b


def is_convertible(a: Type[Unit], b: Type[Unit]) -> bool:
    """Tags are convertible when both are concrete and share a family."""
    return is_concrete(a) and is_concrete(b) and a.family is b.family


def registered_units() -> Dict[str, Type[Unit]]:
    """Return a copy of the symbol to tag registry."""
    return dict(_UNITS_BY_SYMBOL)


def registered_families() -> List[Type[Unit]]:
    """Return every declared family in declaration order."""
    return list(_FAMILIES)


# ============================================================================
# Dimensionless
# ============================================================================


class Dimensionless(Unit, family=True):
    """Pure numbers (ratios, factors, counts)."""


class Unitless(Dimensionless, base=True, symbol="1"):
    """Plain dimensionless scalar; the default tag of every geometric type."""


class Percent(Dimensionless, symbol="%", scale=0.01):
    """Hundredths of a unit ratio."""


# ============================================================================
# Length
# ============================================================================


class Length(Unit, family=True):
    """Distances and positions."""


class Meters(Length, base=True, symbol="m"):
    """SI base unit of length."""


class Kilometers(Length, symbol="km", scale=1000.0):
    pass


class Centimeters(Length, symbol="cm", scale=0.01):
    pass


class Millimeters(Length, symbol="mm", scale=0.001):
    pass


class Feet(Length, symbol="ft", scale=0.3048):
    """International foot (exactly 0.3048 m)."""


class Inches(Length, symbol="in", scale=0.0254):
    pass


class Yards(Length, symbol="yd", scale=0.9144):
    pass


class Miles(Length, symbol="mi", scale=1609.344):
    """International statute mile."""


# ============================================================================
# Angular
# ============================================================================


class Angular(Unit, family=True):
    """Plane angles.

    Angular tags may declare ``full_turn``, the exact size of one revolution
    in that tag; otherwise it is derived from the scale.
    """

    full_turn: ClassVar[float]


class Radians(Angular, base=True, symbol="rad"):
    """SI unit of angle; used by all trigonometric evaluation."""

    full_turn = math.tau


class Degrees(Angular, symbol="deg", scale=math.pi / 180.0):
    full_turn = 360.0


class Turns(Angular, symbol="turn", scale=math.tau):
    """Full revolutions."""

    full_turn = 1.0


class Gradians(Angular, symbol="grad", scale=math.pi / 200.0):
    full_turn = 400.0


# ============================================================================
# Time
# ============================================================================


class Time(Unit, family=True):
    """Durations."""


class Seconds(Time, base=True, symbol="s"):
    pass


class Milliseconds(Time, symbol="ms", scale=0.001):
    pass


class Minutes(Time, symbol="min", scale=60.0):
    pass


class Hours(Time, symbol="h", scale=3600.0):
    pass


# ============================================================================
# Mass
# ============================================================================


class Mass(Unit, family=True):
    pass


class Kilograms(Mass, base=True, symbol="kg"):
    pass


class Grams(Mass, symbol="g", scale=0.001):
    pass


class Pounds(Mass, symbol="lb", scale=0.45359237):
    """International avoirdupois pound."""


# ============================================================================
# Temperature
# ============================================================================


class Temperature(Unit, family=True):
    """Absolute temperatures; the only built-in family that uses offsets."""


class Kelvin(Temperature, base=True, symbol="K"):
    pass


class Celsius(Temperature, symbol="degC", scale=1.0, offset=273.15):
    pass


class Fahrenheit(Temperature, symbol="degF", scale=5.0 / 9.0, offset=459.67 * 5.0 / 9.0):
    pass


# ============================================================================
# Coordinate spaces
# ============================================================================


class CoordinateSpace(Unit, abstract=True):
    """Grouping class for coordinate-space tags.

    Every subclass is its own single-tag family: a point in ``WorldSpace``
    can only reach ``ViewSpace`` through an explicit transform (see
    :class:`stellare_types.affine.Affine2`), never through unit conversion.
    """

    def __init_subclass__(cls, **kwargs: object) -> None:
        kwargs.setdefault("family", True)
        kwargs.setdefault("base", True)
        super().__init_subclass__(**kwargs)  # type: ignore[arg-type]


class WorldSpace(CoordinateSpace, symbol="world"):
    pass


class LocalSpace(CoordinateSpace, symbol="local"):
    pass


class ViewSpace(CoordinateSpace, symbol="view"):
    pass


class ClipSpace(CoordinateSpace, symbol="clip"):
    pass


class TexelSpace(CoordinateSpace, symbol="texel"):
    pass


class ScreenSpace(CoordinateSpace, symbol="screen"):
    pass


__all__ = [
    "Angular",
    "Celsius",
    "Centimeters",
    "ClipSpace",
    "CoordinateSpace",
    "Degrees",
    "Dimensionless",
    "Fahrenheit",
    "Feet",
    "Gradians",
    "Grams",
    "Hours",
    "Inches",
    "Kelvin",
    "Kilograms",
    "Kilometers",
    "Length",
    "LocalSpace",
    "Mass",
    "Meters",
    "Miles",
    "Milliseconds",
    "Millimeters",
    "Minutes",
    "Percent",
    "Pounds",
    "Radians",
    "ScreenSpace",
    "Seconds",
    "Temperature",
    "TexelSpace",
    "Time",
    "Turns",
    "Unit",
    "Unitless",
    "ViewSpace",
    "WorldSpace",
    "Yards",
    "is_compatible",
    "is_concrete",
    "is_convertible",
    "registered_families",
    "registered_units",
    "require_concrete",
]
