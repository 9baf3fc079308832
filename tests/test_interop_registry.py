#!/usr/bin/env python3
"""
Tests for the interop conversion registry and capability switches.

These tests use a small in-test external type, so they need neither numpy
nor mathutils.

Run with: python -m pytest tests/test_interop_registry.py -v
"""

import os
import sys
import types

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from stellare_types.angle import Angle
from stellare_types.errors import (
    CapabilityUnavailableError,
    ConversionNotAvailableError,
    StellareTypesError,
)
from stellare_types.interop import (
    Capability,
    disable,
    enable,
    enabled_capabilities,
    find_converter,
    is_enabled,
    register_conversion,
    registered_conversions,
    unregister_conversion,
)
from stellare_types.interop import registry
from stellare_types.quantity import Quantity
from stellare_types.units import Degrees, Feet, Meters
from stellare_types.vector import Vector2, Vector3


class ExternalVec:
    """Stand-in for an external library's vector class."""

    def __init__(self, *values):
        self.values = tuple(values)


class ExternalVecSubclass(ExternalVec):
    pass


class ExternalScalar:
    def __init__(self, value):
        self.value = value


@pytest.fixture
def external_vec():
    """Register Vector2 <-> ExternalVec for the duration of a test."""
    converter = register_conversion(
        Vector2,
        ExternalVec,
        lambda v: ExternalVec(*v.to_tuple()),
        lambda cls, e: cls(*e.values),
    )
    yield converter
    unregister_conversion(Vector2, ExternalVec)


@pytest.fixture
def external_scalar():
    """Register Quantity <-> ExternalScalar for the duration of a test."""
    register_conversion(
        Quantity,
        ExternalScalar,
        lambda q: ExternalScalar(q.value),
        lambda cls, e: cls(e.value),
    )
    yield
    unregister_conversion(Quantity, ExternalScalar)


class TestRegistry:
    """Tests for registering and finding converters."""

    def test_round_trip_keeps_requested_tag(self, external_vec):
        ext = Vector2[Meters](1.0, 2.0).to_external(ExternalVec)
        assert isinstance(ext, ExternalVec)
        assert ext.values == (1.0, 2.0)
        back = Vector2[Feet].from_external(ext)
        assert back == Vector2[Feet](1.0, 2.0)

    def test_registered_under_generic_class(self, external_vec):
        assert external_vec.kind is Vector2
        assert find_converter(Vector2[Meters], ExternalVec) is external_vec
        assert external_vec in registered_conversions()

    def test_parameterized_registration_uses_origin(self):
        converter = register_conversion(
            Vector3[Meters], ExternalVec, lambda v: ExternalVec(*v), lambda cls, e: cls(*e.values)
        )
        try:
            assert converter.kind is Vector3
        finally:
            assert unregister_conversion(Vector3, ExternalVec)

    def test_external_subclass_is_served(self, external_vec):
        back = Vector2[Meters].from_external(ExternalVecSubclass(3.0, 4.0))
        assert back == Vector2[Meters](3.0, 4.0)

    def test_quantity_converter_serves_angle(self, external_scalar):
        ext = Angle[Degrees](90.0).to_external(ExternalScalar)
        assert ext.value == 90.0
        back = Angle[Degrees].from_external(ext)
        assert type(back) is Angle[Degrees]

    def test_missing_converter(self):
        with pytest.raises(ConversionNotAvailableError, match="No conversion registered"):
            Vector3[Meters](1.0, 2.0, 3.0).to_external(ExternalVec)
        with pytest.raises(ConversionNotAvailableError):
            Vector3[Meters].from_external(ExternalVec(1.0, 2.0, 3.0))

    def test_missing_converter_is_type_error(self):
        with pytest.raises(TypeError):
            Vector3[Meters](1.0, 2.0, 3.0).to_external(ExternalVec)

    def test_unregister(self, external_vec):
        assert unregister_conversion(Vector2, ExternalVec)
        assert not unregister_conversion(Vector2, ExternalVec)
        assert find_converter(Vector2, ExternalVec) is None

    def test_replace_existing(self, external_vec):
        replacement = register_conversion(
            Vector2, ExternalVec, lambda v: ExternalVec(0.0, 0.0), lambda cls, e: cls(0.0, 0.0)
        )
        assert find_converter(Vector2, ExternalVec) is replacement
        assert Vector2(5.0, 5.0).to_external(ExternalVec).values == (0.0, 0.0)


class TestCapabilities:
    """Tests for enabling and disabling capabilities."""

    def test_capability_names(self):
        assert Capability("numpy") is Capability.NUMPY
        assert Capability.MATHUTILS.adapter == "stellare_types.interop.mathutils_interop"
        assert Capability.NUMPY.library == "numpy"

    def test_nothing_enabled_by_default(self):
        assert enabled_capabilities() == []
        assert not is_enabled(Capability.NUMPY)

    def test_unavailable_library(self, monkeypatch):
        monkeypatch.setattr(registry, "is_available", lambda capability: False)
        with pytest.raises(CapabilityUnavailableError, match="pip install"):
            enable(Capability.MATHUTILS)
        assert not is_enabled(Capability.MATHUTILS)

    def test_unavailable_is_import_error(self, monkeypatch):
        monkeypatch.setattr(registry, "is_available", lambda capability: False)
        with pytest.raises(ImportError):
            enable("numpy")
        with pytest.raises(StellareTypesError):
            enable("numpy")

    def test_unknown_capability(self):
        with pytest.raises(ValueError):
            enable("scipy")

    def test_disable_when_not_enabled_is_noop(self):
        disable(Capability.NUMPY)
        assert not is_enabled(Capability.NUMPY)

    def test_enable_with_fake_adapter(self, monkeypatch):
        registered = []

        def fake_register():
            registered.append(True)
            register_conversion(
                Vector2,
                ExternalVec,
                lambda v: ExternalVec(*v),
                lambda cls, e: cls(*e.values),
                capability=Capability.NUMPY,
            )

        adapter = types.ModuleType(Capability.NUMPY.adapter)
        adapter.register = fake_register

        monkeypatch.setattr(registry, "is_available", lambda capability: True)
        monkeypatch.setitem(sys.modules, Capability.NUMPY.adapter, adapter)

        enable(Capability.NUMPY)
        enable(Capability.NUMPY)
        assert registered == [True]
        assert is_enabled(Capability.NUMPY)
        assert find_converter(Vector2, ExternalVec) is not None

        disable(Capability.NUMPY)
        assert not is_enabled(Capability.NUMPY)
        assert find_converter(Vector2, ExternalVec) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
