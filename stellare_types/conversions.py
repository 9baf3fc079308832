"""
Unit conversion table.

Conversions between tags of the same family go through the family's base
tag, so the table is implicit in the ``scale``/``offset`` each tag declares.
Composed factors are memoised; nothing is looked up by walking a table at
call time.

Two flavours exist because offsets only apply to absolute values:

    convert():             absolute values (temperatures, positions)
    convert_difference():  differences (vectors, deltas); offsets cancel

Accuracy Notes:
    Pure-scale families are invertible up to floating-point rounding:
    convert(convert(v, A, B), B, A) == v within ~1 ulp per step.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Tuple, Type

from stellare_types.errors import IncompatibleUnitsError, UnknownUnitError
from stellare_types.units import (
    Unit,
    is_convertible,
    registered_families,
    registered_units,
    require_concrete,
)

def _require_same_family(source: Type[Unit], target: Type[Unit]) -> None:
    require_concrete(source)
    require_concrete(target)
    if not is_convertible(source, target):
        raise IncompatibleUnitsError(source, target, "convert between")


@lru_cache(maxsize=None)
def conversion_factor(source: Type[Unit], target: Type[Unit]) -> Tuple[float, float]:
    """Compose the (scale, offset) pair that maps source values to target values.

    ``target_value = source_value * scale + offset``

    Args:
        source: Tag the value is expressed in.
        target: Tag to express the value in.

    Returns:
        Tuple of (scale, offset).

    Raises:
        IncompatibleUnitsError: If the tags belong to different families.
    """
    _require_same_family(source, target)
    scale = source.scale / target.scale
    offset = (source.offset - target.offset) / target.scale
    return scale, offset


def convert(value: float, source: Type[Unit], target: Type[Unit]) -> float:
    """Convert an absolute value between tags of the same family.

    The value passes through the family base tag, so the result of any
    chain of conversions only depends on the two endpoint tags.

    Args:
        value: Numeric value expressed in source.
        source: Tag the value is expressed in.
        target: Tag to express the value in.

    Returns:
        The converted value. When source is target the value is returned
        unchanged (same object, same numeric type).

    Raises:
        IncompatibleUnitsError: If the tags belong to different families.

    Example:
        >>> round(convert(1.0, Meters, Feet), 5)
        3.28084
        >>> round(convert(100.0, Celsius, Fahrenheit), 9)
        212.0
    """
    if source is target:
        require_concrete(source)
        return value
    _require_same_family(source, target)
    base_value = value * source.scale + source.offset
    return (base_value - target.offset) / target.scale


def convert_difference(value: float, source: Type[Unit], target: Type[Unit]) -> float:
    """Convert a difference (displacement, delta) between tags of the same family.

    Offsets cancel for differences, so only the scale ratio applies:
    a 10 degC rise is a 10 K rise, not 283.15 K.

    Integer input comes back as a float unless source is target.

    Raises:
        IncompatibleUnitsError: If the tags belong to different families.
    """
    if source is target:
        require_concrete(source)
        return value
    _require_same_family(source, target)
    return value * source.scale / target.scale


def parse_unit(text: str) -> Type[Unit]:
    """Resolve a dimension tag from its symbol or class name.

    Symbols are matched exactly ("m", "ft", "degC"); class names are
    matched case-insensitively ("meters", "Degrees").

    Raises:
        UnknownUnitError: If no registered tag matches.
    """
    units = registered_units()
    key = text.strip()
    if key in units:
        return units[key]
    lowered = key.lower()
    for unit in units.values():
        if unit.__name__.lower() == lowered:
            return unit
    raise UnknownUnitError(
        f"Unknown unit '{text}'. Known symbols: {', '.join(sorted(units))}"
    )


def parse_family(text: str) -> Type[Unit]:
    """Resolve a dimension family from its class name (case-insensitive).

    Raises:
        UnknownUnitError: If no family matches.
    """
    lowered = text.strip().lower()
    for family in registered_families():
        if family.__name__.lower() == lowered:
            return family
    known = ", ".join(f.__name__ for f in registered_families())
    raise UnknownUnitError(f"Unknown family '{text}'. Known families: {known}")


def units_in_family(family: Type[Unit]) -> List[Type[Unit]]:
    """List registered tags of a family, base tag first."""
    members = [u for u in registered_units().values() if u.family is family]
    members.sort(key=lambda u: (u is not family.base_unit, u.scale))
    return members


def families() -> List[Type[Unit]]:
    """List every family that has a base tag, in declaration order."""
    return [f for f in registered_families() if "base_unit" in f.__dict__]


__all__ = [
    "conversion_factor",
    "convert",
    "convert_difference",
    "families",
    "parse_family",
    "parse_unit",
    "units_in_family",
]
