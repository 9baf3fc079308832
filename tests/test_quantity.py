#!/usr/bin/env python3
"""
Tests for the Quantity wrapper and the tag specialisation machinery.

Run with: python -m pytest tests/test_quantity.py -v
"""

import copy
import dataclasses
import math
import os
import pickle
import sys
from dataclasses import FrozenInstanceError

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from stellare_types.errors import IncompatibleUnitsError
from stellare_types.quantity import Quantity
from stellare_types.units import (
    Celsius,
    Fahrenheit,
    Feet,
    Kelvin,
    Length,
    Meters,
    Seconds,
    Unitless,
)


class TestSpecialisation:
    """Tests for subscripting Quantity with a tag."""

    def test_specialisation_is_cached(self):
        assert Quantity[Meters] is Quantity[Meters]
        assert Quantity[Meters] is not Quantity[Feet]

    def test_specialised_class_is_a_subclass(self):
        assert issubclass(Quantity[Meters], Quantity)
        assert isinstance(Quantity[Meters](1.0), Quantity)

    def test_bare_construction_is_unitless(self):
        q = Quantity(2.0)
        assert q.unit is Unitless
        assert type(q) is Quantity[Unitless]

    def test_tag_lives_on_the_class(self):
        q = Quantity[Meters](2.0)
        assert q.unit is Meters
        assert not hasattr(q, "__dict__")

    def test_family_is_not_a_valid_tag(self):
        with pytest.raises(TypeError, match="not a concrete dimension tag"):
            Quantity[Length]

    def test_wrong_number_of_tags(self):
        with pytest.raises(TypeError, match="takes 1 dimension tag"):
            Quantity[Meters, Feet]

    def test_cannot_parameterize_twice(self):
        with pytest.raises(TypeError, match="already parameterized"):
            Quantity[Meters][Feet]

    def test_repr_and_str(self):
        q = Quantity[Meters](2.5)
        assert repr(q) == "Quantity[Meters](value=2.5)"
        assert str(q) == "2.5 m"


class TestConstruction:
    """Tests for value validation and precision."""

    def test_ints_are_preserved(self):
        q = Quantity[Meters](3) + Quantity[Meters](4)
        assert q.value == 7
        assert type(q.value) is int

    @pytest.mark.parametrize("bad", ["1.0", None, 1j, [1.0]])
    def test_non_real_rejected(self, bad):
        with pytest.raises(TypeError, match="must be a real number"):
            Quantity[Meters](bad)

    def test_nan_propagates(self):
        q = Quantity[Meters](float("nan")) + Quantity[Meters](1.0)
        assert math.isnan(q.value)
        assert not q.is_finite()

    def test_frozen(self):
        q = Quantity[Meters](1.0)
        with pytest.raises(FrozenInstanceError):
            q.value = 2.0

    def test_replace_keeps_tag(self):
        q = dataclasses.replace(Quantity[Meters](1.0), value=5.0)
        assert q == Quantity[Meters](5.0)

    def test_pickle_round_trip(self):
        q = Quantity[Feet](12.5)
        restored = pickle.loads(pickle.dumps(q))
        assert restored == q
        assert type(restored) is Quantity[Feet]

    def test_copy(self):
        q = Quantity[Seconds](3.0)
        assert copy.copy(q) == q
        assert copy.deepcopy(q) == q

    def test_hashable(self):
        assert len({Quantity[Meters](1.0), Quantity[Meters](1.0), Quantity[Feet](1.0)}) == 2


class TestArithmetic:
    """Tests for same-tag arithmetic."""

    def test_add_and_subtract(self):
        a = Quantity[Meters](1.5)
        b = Quantity[Meters](2.5)
        assert a + b == Quantity[Meters](4.0)
        assert b - a == Quantity[Meters](1.0)

    def test_mixed_tags_rejected(self):
        with pytest.raises(IncompatibleUnitsError, match="Meters and Feet"):
            Quantity[Meters](1.0) + Quantity[Feet](1.0)
        with pytest.raises(TypeError):
            Quantity[Meters](1.0) - Quantity[Feet](1.0)

    def test_plain_numbers_do_not_add(self):
        with pytest.raises(TypeError):
            Quantity[Meters](1.0) + 1.0
        with pytest.raises(TypeError):
            1.0 + Quantity[Meters](1.0)

    def test_scalar_multiply_and_divide(self):
        q = Quantity[Meters](1.5)
        assert q * 2 == Quantity[Meters](3.0)
        assert 2 * q == Quantity[Meters](3.0)
        assert q / 3 == Quantity[Meters](0.5)

    def test_ratio_of_same_tag_is_plain(self):
        ratio = Quantity[Meters](3.0) / Quantity[Meters](1.5)
        assert ratio == 2.0
        assert not isinstance(ratio, Quantity)

    def test_ratio_of_mixed_tags_rejected(self):
        with pytest.raises(IncompatibleUnitsError):
            Quantity[Meters](3.0) / Quantity[Feet](1.5)

    def test_quantities_do_not_multiply(self):
        with pytest.raises(TypeError):
            Quantity[Meters](3.0) * Quantity[Meters](1.5)

    def test_unary(self):
        q = Quantity[Meters](-2.0)
        assert -q == Quantity[Meters](2.0)
        assert +q is q
        assert abs(q) == Quantity[Meters](2.0)


class TestComparison:
    """Tests for equality, ordering and tolerances."""

    def test_equality_across_tags_is_false(self):
        assert Quantity[Meters](1.0) != Quantity[Feet](1.0)
        assert Quantity[Meters](1.0) != 1.0

    def test_ordering(self):
        a = Quantity[Meters](1.0)
        b = Quantity[Meters](2.0)
        assert a < b
        assert a <= b
        assert b > a
        assert b >= a
        assert sorted([b, a]) == [a, b]

    def test_ordering_across_tags_rejected(self):
        with pytest.raises(IncompatibleUnitsError):
            Quantity[Meters](1.0) < Quantity[Feet](1.0)

    def test_ordering_against_number_rejected(self):
        with pytest.raises(TypeError):
            Quantity[Meters](1.0) < 2.0

    def test_approx_eq(self):
        a = Quantity[Meters](0.1 + 0.2)
        b = Quantity[Meters](0.3)
        assert a != b
        assert a.approx_eq(b)
        assert not a.approx_eq(Quantity[Meters](0.31))
        assert a.approx_eq(Quantity[Meters](0.31), abs_tol=0.02)

    def test_approx_eq_across_tags_rejected(self):
        with pytest.raises(IncompatibleUnitsError):
            Quantity[Meters](1.0).approx_eq(Quantity[Feet](1.0))

    def test_min_max_clamp(self):
        low = Quantity[Meters](0.0)
        high = Quantity[Meters](10.0)
        q = Quantity[Meters](12.0)
        assert q.min(high) == high
        assert q.max(high) == q
        assert q.clamp(low, high) == high
        assert Quantity[Meters](-1.0).clamp(low, high) == low
        assert Quantity[Meters](5.0).clamp(low, high) == Quantity[Meters](5.0)

    def test_is_finite(self):
        assert Quantity[Meters](1.0).is_finite()
        assert not Quantity[Meters](float("inf")).is_finite()


class TestConvertTo:
    """Tests for explicit conversion."""

    def test_convert_length(self):
        feet = Quantity[Meters](1.0).convert_to(Feet)
        assert type(feet) is Quantity[Feet]
        assert feet.value == pytest.approx(3.28084, abs=1e-5)
        assert feet.convert_to(Meters).approx_eq(Quantity[Meters](1.0))

    def test_convert_temperature_applies_offset(self):
        assert Quantity[Celsius](100.0).convert_to(Fahrenheit).value == pytest.approx(212.0)
        assert Quantity[Celsius](0.0).convert_to(Kelvin).value == pytest.approx(273.15)

    def test_convert_to_same_tag(self):
        q = Quantity[Meters](2.0)
        assert q.convert_to(Meters) == q

    def test_cross_family_rejected(self):
        with pytest.raises(IncompatibleUnitsError):
            Quantity[Meters](1.0).convert_to(Seconds)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
