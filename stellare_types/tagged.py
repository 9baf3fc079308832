"""
Parameterization machinery shared by every geometric type.

Subscripting a geometric class with dimension tags returns a cached,
specialised subclass:

    >>> Vector3[Meters] is Vector3[Meters]
    True
    >>> Vector3[Meters] is Vector3[Feet]
    False

The tags live on the specialised class (``_units``), never on the
instance, so a ``Vector3[Meters]`` instance holds nothing but its three
components in ``__slots__``. Unparameterized construction (``Vector3(1, 2,
3)``) resolves to the class's default tags (``Unitless`` for most types).

Static type checkers see the same classes as ordinary ``typing.Generic``
classes, which is what lets mypy reject mixed-tag arithmetic before the
program runs.
"""

from __future__ import annotations

import numbers
import threading
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Generic,
    Iterable,
    Iterator,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from stellare_types.errors import ComponentCountError, IncompatibleUnitsError
from stellare_types.units import Unit, Unitless, require_concrete

U = TypeVar("U", bound=Unit)
T = TypeVar("T", bound="Tagged")
X = TypeVar("X")

_SPECIALIZATIONS: Dict[Tuple[type, Tuple[Type[Unit], ...]], type] = {}
_SPECIALIZATIONS_LOCK = threading.Lock()


def _rebuild(origin: Any, units: Tuple[Type[Unit], ...], values: Tuple[Any, ...]) -> Any:
    """Reconstruct a tagged value; target of Tagged.__reduce__."""
    return origin[units](*values)


class Tagged:
    """Base for values whose class is parameterized by dimension tags.

    Subclasses are dataclasses that declare:
        _fields: Names of the components, in order.
        _default_units: Tags used when the class is not subscripted.
    """

    __slots__ = ()

    # numpy defers binary operators to us instead of broadcasting over
    # our sequence protocol
    __array_ufunc__ = None

    _fields: ClassVar[Tuple[str, ...]] = ()
    _default_units: ClassVar[Tuple[Type[Unit], ...]] = (Unitless,)
    _units: ClassVar[Optional[Tuple[Type[Unit], ...]]] = None

    def __class_getitem__(cls, params: Any) -> Any:
        if not isinstance(params, tuple):
            params = (params,)
        if not all(isinstance(p, type) and issubclass(p, Unit) for p in params):
            # TypeVars and other typing forms go through typing.Generic
            return super().__class_getitem__(params)  # type: ignore[misc]
        return cls._specialize(params)

    def __new__(cls: Type[T], *args: Any, **kwargs: Any) -> T:
        if cls._units is None:
            cls = cls._specialize(cls._default_units)
        return object.__new__(cls)

    @classmethod
    def _specialize(cls, units: Tuple[Type[Unit], ...]) -> Any:
        """Return the cached subclass of cls for the given tags."""
        if cls._units is not None:
            raise TypeError(f"{cls.__qualname__} is already parameterized")
        if len(units) != len(cls._default_units):
            raise TypeError(
                f"{cls.__name__} takes {len(cls._default_units)} dimension tag(s), got {len(units)}"
            )
        for unit in units:
            require_concrete(unit)
        cls._check_units(units)

        key = (cls, units)
        with _SPECIALIZATIONS_LOCK:
            specialized = _SPECIALIZATIONS.get(key)
            if specialized is None:
                name = f"{cls.__name__}[{', '.join(u.__name__ for u in units)}]"
                namespace = {
                    "__slots__": (),
                    "__module__": cls.__module__,
                    "__qualname__": name,
                    "__doc__": cls.__doc__,
                    "_units": units,
                    "_origin": cls,
                }
                specialized = type(cls)(name, (cls,), namespace)
                _SPECIALIZATIONS[key] = specialized
        return specialized

    @classmethod
    def _check_units(cls, units: Tuple[Type[Unit], ...]) -> None:
        """Hook for subclasses that only accept some tags."""

    @classmethod
    def _generic(cls) -> type:
        """The unparameterized class this class was specialised from."""
        return cls.__dict__.get("_origin", cls)

    @classmethod
    def _tags(cls) -> Tuple[Type[Unit], ...]:
        return cls._units if cls._units is not None else cls._default_units

    # ------------------------------------------------------------------
    # Component protocol
    # ------------------------------------------------------------------

    def to_tuple(self) -> Tuple[Any, ...]:
        """Return the components in declaration order."""
        return tuple(getattr(self, name) for name in self._fields)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_tuple())

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, index: Any) -> Any:
        return self.to_tuple()[index]

    def __reduce__(self) -> Tuple[Any, ...]:
        return (_rebuild, (self._generic(), self._tags(), self.to_tuple()))

    @classmethod
    def from_iterable(cls: Type[T], values: Iterable[Any]) -> T:
        """Build a value from an iterable of components.

        Raises:
            ComponentCountError: If the iterable has the wrong length.
        """
        items = tuple(values)
        if len(items) != len(cls._fields):
            raise ComponentCountError(cls.__name__, len(cls._fields), len(items))
        return cls(*items)

    def _require_real_components(self) -> None:
        """Validate that every component is a real number.

        Raises:
            TypeError: If a component is not a ``numbers.Real``.
        """
        for name in self._fields:
            value = getattr(self, name)
            if not isinstance(value, numbers.Real):
                raise TypeError(
                    f"{type(self).__qualname__}.{name} must be a real number, "
                    f"got {type(value).__name__}"
                )

    def _require_tagged_components(self, kind: type) -> None:
        """Validate composite values built from other tagged values.

        Raises:
            TypeError: If a component is not an instance of kind.
            IncompatibleUnitsError: If a component carries different tags.
        """
        for name in self._fields:
            value = getattr(self, name)
            if not isinstance(value, kind):
                raise TypeError(
                    f"{type(self).__qualname__}.{name} must be a {kind.__name__}, "
                    f"got {type(value).__name__}"
                )
            self._same_tags(value, "build")

    def _same_kind(self, other: object, operation: str) -> bool:
        """Check other is the same specialised class as self.

        Returns:
            True for the same class; False when other is an unrelated type
            (the caller then returns NotImplemented).

        Raises:
            IncompatibleUnitsError: If other is the same kind of value with
                different tags.
        """
        if type(other) is type(self):
            return True
        if isinstance(other, Tagged) and other._generic() is self._generic():
            left, right = self._first_mismatch(other)
            raise IncompatibleUnitsError(left, right, operation)
        return False

    def _require_same(self, other: object, operation: str) -> None:
        """Like _same_kind, but unrelated types raise TypeError."""
        if not self._same_kind(other, operation):
            raise TypeError(
                f"Cannot {operation} {type(self).__qualname__} with {type(other).__name__}"
            )

    def _same_tags(self, other: Tagged, operation: str) -> None:
        """Raise unless other carries exactly the same tags as self."""
        if other._tags() != self._tags():
            left, right = self._first_mismatch(other)
            raise IncompatibleUnitsError(left, right, operation)

    def _first_mismatch(self, other: Tagged) -> Tuple[Type[Unit], Type[Unit]]:
        for left, right in zip(self._tags(), other._tags()):
            if left is not right:
                return left, right
        return self._tags()[0], other._tags()[0]

    # ------------------------------------------------------------------
    # Component-wise helpers
    # ------------------------------------------------------------------

    def _map(self: T, fn: Callable[[Any], Any]) -> T:
        return type(self)(*(fn(v) for v in self.to_tuple()))

    def _zip(self: T, other: Tagged, fn: Callable[[Any, Any], Any]) -> T:
        return type(self)(*(fn(a, b) for a, b in zip(self.to_tuple(), other.to_tuple())))

    def _broadcast(self: T, scalar: Any, fn: Callable[[Any, Any], Any]) -> T:
        return type(self)(*(fn(v, scalar) for v in self.to_tuple()))

    def _rbroadcast(self: T, scalar: Any, fn: Callable[[Any, Any], Any]) -> T:
        return type(self)(*(fn(scalar, v) for v in self.to_tuple()))

    # ------------------------------------------------------------------
    # External conversions
    # ------------------------------------------------------------------

    def to_external(self, external_type: Type[X]) -> X:
        """Convert to an equivalent value of an external library.

        The converter must have been registered by enabling the matching
        capability (see :mod:`stellare_types.interop`).

        Raises:
            ConversionNotAvailableError: If no converter is registered.
        """
        from stellare_types.interop import registry

        return registry.to_external(self, external_type)

    @classmethod
    def from_external(cls: Type[T], value: Any) -> T:
        """Build a value from an equivalent external-library value.

        Raises:
            ConversionNotAvailableError: If no converter is registered.
            ComponentCountError: If the external value has the wrong shape.
        """
        from stellare_types.interop import registry

        return registry.from_external(cls, value)


class TaggedValue(Tagged, Generic[U]):
    """A tagged value with a single dimension tag."""

    __slots__ = ()

    @property
    def unit(self) -> Type[U]:
        """The dimension tag of this value."""
        return self._tags()[0]  # type: ignore[return-value]


def is_real_scalar(value: object) -> bool:
    """Plain numbers multiply/divide tagged values; tagged values never do."""
    return isinstance(value, numbers.Real) and not isinstance(value, Tagged)


__all__ = [
    "Tagged",
    "TaggedValue",
    "U",
    "is_real_scalar",
]
