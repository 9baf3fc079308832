"""Exception types raised by stellare_types.

Every exception derives from a built-in exception so callers that already
catch ``TypeError``/``ValueError`` keep working, and from
:class:`StellareTypesError` so callers can catch everything this package
raises in one clause.
"""

from __future__ import annotations

from typing import Optional


class StellareTypesError(Exception):
    """Base class for all stellare_types errors."""


class IncompatibleUnitsError(StellareTypesError, TypeError):
    """Two values carry dimension tags that cannot be combined.

    Raised for arithmetic or ordering between different tags, and for
    conversions between tags of different dimension families.
    """

    def __init__(
        self,
        left: type,
        right: type,
        operation: str,
        message: Optional[str] = None,
    ) -> None:
        self.left = left
        self.right = right
        self.operation = operation
        if message is None:
            message = (
                f"Cannot {operation} values tagged {left.__name__} and {right.__name__}. "
                f"Convert explicitly with convert_to() first."
            )
        super().__init__(message)


class DegenerateInputError(StellareTypesError, ValueError):
    """The result is mathematically undefined for the given input.

    Examples are normalizing a zero-length vector or inverting a singular
    affine transform.
    """


class ComponentCountError(StellareTypesError, ValueError):
    """An external value has the wrong number of components or shape."""

    def __init__(self, kind: str, expected: object, got: object) -> None:
        self.kind = kind
        self.expected = expected
        self.got = got
        super().__init__(f"{kind} expects {expected} components, got {got}")


class UnknownUnitError(StellareTypesError, LookupError):
    """No dimension tag matches the requested name or symbol."""


class ConversionNotAvailableError(StellareTypesError, TypeError):
    """No converter is registered between a geometric type and an external type."""


class CapabilityUnavailableError(StellareTypesError, ImportError):
    """An interop capability was requested but its library is not installed."""
