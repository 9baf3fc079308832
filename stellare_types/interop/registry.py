"""
Registry of conversions between geometric types and external library types.

Converters are registered per (geometric kind, external type) pair, usually
by an adapter module when its capability is enabled. The core never imports
an external library: until a capability is enabled, its converters simply
do not exist and asking for them raises
:class:`~stellare_types.errors.ConversionNotAvailableError`.

Lookups walk both MROs, so a converter registered for ``Quantity`` also
serves ``Angle[Degrees]``, and one registered for ``numpy.ndarray`` also
serves its subclasses.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set, Tuple, Type

from stellare_types.errors import CapabilityUnavailableError, ConversionNotAvailableError

logger = logging.getLogger(__name__)


class Capability(str, Enum):
    """Optional external libraries with conversion support."""

    NUMPY = "numpy"
    MATHUTILS = "mathutils"

    @property
    def library(self) -> str:
        """Import name of the external library."""
        return self.value

    @property
    def adapter(self) -> str:
        """Module that registers this capability's converters."""
        return f"stellare_types.interop.{self.value}_interop"


@dataclass(frozen=True)
class Converter:
    """A pair of conversions between one geometric kind and one external type.

    Attributes:
        kind: Unparameterized geometric class (e.g. Vector3).
        external_type: External class (e.g. numpy.ndarray).
        to_external: ``fn(value) -> external``.
        from_external: ``fn(cls, external) -> value``; cls is the possibly
            parameterized class the caller asked for.
        capability: Capability that registered the converter, if any.
    """

    kind: type
    external_type: type
    to_external: Callable[[Any], Any]
    from_external: Callable[[Any, Any], Any]
    capability: Optional[Capability] = None


_CONVERTERS: Dict[Tuple[type, type], Converter] = {}
_ENABLED: Set[Capability] = set()
_LOCK = threading.RLock()


def _generic(kind: type) -> type:
    return kind.__dict__.get("_origin", kind)


def register_conversion(
    kind: type,
    external_type: type,
    to_external: Callable[[Any], Any],
    from_external: Callable[[Any, Any], Any],
    capability: Optional[Capability] = None,
) -> Converter:
    """Register a converter pair, replacing any existing one for the same pair.

    Args:
        kind: Geometric class; a parameterized class registers for its
            unparameterized origin.
        external_type: External class the converter produces and accepts.
        to_external: Conversion from the geometric value.
        from_external: Conversion back, called with the requested class.
        capability: Owning capability; disabling it removes the converter.

    Returns:
        The registered Converter.
    """
    converter = Converter(_generic(kind), external_type, to_external, from_external, capability)
    key = (converter.kind, external_type)
    with _LOCK:
        if key in _CONVERTERS:
            logger.debug(f"Replacing converter {kind.__name__} <-> {external_type.__name__}")
        _CONVERTERS[key] = converter
    return converter


def unregister_conversion(kind: type, external_type: type) -> bool:
    """Remove a converter pair. Returns True if one was registered."""
    with _LOCK:
        return _CONVERTERS.pop((_generic(kind), external_type), None) is not None


def find_converter(kind: type, external_type: type) -> Optional[Converter]:
    """Most specific converter for kind and external_type, or None."""
    with _LOCK:
        for k in kind.__mro__:
            for ext in external_type.__mro__:
                converter = _CONVERTERS.get((k, ext))
                if converter is not None:
                    return converter
    return None


def registered_conversions() -> List[Converter]:
    with _LOCK:
        return list(_CONVERTERS.values())


def _not_available(kind: type, external_type: type) -> ConversionNotAvailableError:
    hint = ", ".join(c.value for c in Capability)
    return ConversionNotAvailableError(
        f"No conversion registered between {kind.__qualname__} and "
        f"{external_type.__module__}.{external_type.__qualname__}. "
        f"Enable a capability providing it ({hint}) with stellare_types.interop.enable()"
    )


def to_external(value: Any, external_type: Type[Any]) -> Any:
    """Convert a geometric value to external_type.

    Raises:
        ConversionNotAvailableError: If no converter is registered.
    """
    converter = find_converter(type(value), external_type)
    if converter is None:
        raise _not_available(type(value), external_type)
    return converter.to_external(value)


def from_external(kind: type, value: Any) -> Any:
    """Build a kind value from an external value.

    Raises:
        ConversionNotAvailableError: If no converter is registered.
        ComponentCountError: If the external value has the wrong shape.
    """
    converter = find_converter(kind, type(value))
    if converter is None:
        raise _not_available(kind, type(value))
    return converter.from_external(kind, value)


# ============================================================================
# Capabilities
# ============================================================================


def is_available(capability: Capability) -> bool:
    """Check whether the capability's library is installed (without importing it)."""
    return importlib.util.find_spec(Capability(capability).library) is not None


def available_capabilities() -> List[Capability]:
    return [c for c in Capability if is_available(c)]


def is_enabled(capability: Capability) -> bool:
    with _LOCK:
        return Capability(capability) in _ENABLED


def enabled_capabilities() -> List[Capability]:
    with _LOCK:
        return [c for c in Capability if c in _ENABLED]


def enable(capability: Capability) -> None:
    """Import the capability's adapter and register its converters.

    Enabling an already enabled capability does nothing.

    Raises:
        CapabilityUnavailableError: If the library is not installed.
    """
    capability = Capability(capability)
    with _LOCK:
        if capability in _ENABLED:
            return
        if not is_available(capability):
            raise CapabilityUnavailableError(
                f"Capability '{capability.value}' needs the {capability.library} package. "
                f"Install it with: pip install stellare-types[{capability.value}]"
            )
        adapter = importlib.import_module(capability.adapter)
        adapter.register()
        _ENABLED.add(capability)
    logger.info(f"Enabled interop capability: {capability.value}")


def disable(capability: Capability) -> None:
    """Remove every converter the capability registered."""
    capability = Capability(capability)
    with _LOCK:
        if capability not in _ENABLED:
            return
        for key in [k for k, c in _CONVERTERS.items() if c.capability is capability]:
            del _CONVERTERS[key]
        _ENABLED.discard(capability)
    logger.info(f"Disabled interop capability: {capability.value}")


__all__ = [
    "Capability",
    "Converter",
    "available_capabilities",
    "disable",
    "enable",
    "enabled_capabilities",
    "find_converter",
    "from_external",
    "is_available",
    "is_enabled",
    "register_conversion",
    "registered_conversions",
    "to_external",
    "unregister_conversion",
]
