"""
Optional conversions to and from external math libraries.

Nothing here imports numpy or mathutils until the matching capability is
enabled:

    >>> from stellare_types import Vector3
    >>> from stellare_types.interop import Capability, enable
    >>>
    >>> enable(Capability.NUMPY)
    >>> import numpy as np
    >>> Vector3(1.0, 2.0, 3.0).to_external(np.ndarray)
    array([1., 2., 3.])

Capabilities can also be enabled from configuration, see
:mod:`stellare_types.config`.
"""

from stellare_types.interop.registry import (
    Capability,
    Converter,
    available_capabilities,
    disable,
    enable,
    enabled_capabilities,
    find_converter,
    is_available,
    is_enabled,
    register_conversion,
    registered_conversions,
    unregister_conversion,
)

__all__ = [
    "Capability",
    "Converter",
    "available_capabilities",
    "disable",
    "enable",
    "enabled_capabilities",
    "find_converter",
    "is_available",
    "is_enabled",
    "register_conversion",
    "registered_conversions",
    "unregister_conversion",
]
