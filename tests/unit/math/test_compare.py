"""Tests for numeric and total ordering."""

import sys
from fractions import Fraction

import pytest

from fixdec.errors import InvalidOperationTrap
from fixdec.math.compare import (
    clamp,
    compare,
    compare_numeric,
    compare_total,
    maximum,
    minimum,
    numeric_hash,
)
from fixdec.signals import NO_SIGNALS, Signal
from fixdec.types import D64, D128, UD64


class TestCompareNumeric:
    """Tests for compare_numeric."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("1", "2", -1),
            ("2", "1", 1),
            ("1.0", "1.00", 0),
            ("-0", "0", 0),
            ("-1", "-2", 1),
            ("0.999", "1", -1),
            ("1e5", "99999", 1),
            ("-Inf", "-1e30000", -1),
            ("Inf", "Inf", 0),
            ("-Inf", "-Inf", 0),
        ],
    )
    def test_ordering(self, a, b, expected):
        """Values compare by number, ignoring scale and the sign of zero."""
        assert compare_numeric(D64(a), D64(b)) == expected

    def test_nan_is_unordered(self):
        """Any NaN operand gives None."""
        assert compare_numeric(D64("NaN"), D64(1)) is None
        assert compare_numeric(D64(1), D64("sNaN")) is None

    def test_across_widths_and_signedness(self):
        """Operands of different types compare by value."""
        assert compare_numeric(D64("1.5"), D128("1.50")) == 0
        assert compare_numeric(UD64(3), D64(-3)) == 1


class TestCompare:
    """Tests for compare()."""

    def test_result_values(self):
        """The result is a decimal -1, 0 or 1 at scale 0."""
        assert compare(D64(1), D64(2)).value == -1
        assert compare(D64("2.0"), D64(2)).value == 0
        assert compare(D64(3), D64(2)).value.scale == 0

    def test_unsigned_result_is_signed(self):
        """Unsigned operands produce a signed result of the same width."""
        result = compare(UD64(1), UD64(2)).value
        assert type(result) is D64
        assert result == -1

    def test_nan_is_invalid(self):
        """Comparing NaN is InvalidOperation."""
        result, flags = compare(D64("NaN"), D64(1))
        assert result.is_nan()
        assert flags == Signal.INVALID_OPERATION

    def test_nan_traps(self, strict):
        """Under a strict context a NaN comparison raises."""
        with pytest.raises(InvalidOperationTrap):
            compare(D64(1), D64("NaN"), strict)


class TestCompareTotal:
    """Tests for compare_total."""

    def test_full_order(self):
        """Every kind of value has a place in the total order."""
        ordered = ["-NaN", "-sNaN", "-Inf", "-1", "-1.0", "-0", "0", "1.0", "1", "Inf", "sNaN", "NaN"]
        values = [D64(text) for text in ordered]
        for lower, higher in zip(values, values[1:]):
            assert compare_total(lower, higher) == -1
            assert compare_total(higher, lower) == 1

    def test_nan_payloads(self):
        """NaN payloads are ordered numerically."""
        assert compare_total(D64("NaN1"), D64("NaN2")) == -1
        assert compare_total(D64("-NaN1"), D64("-NaN2")) == 1

    def test_identical(self):
        """Identical representations compare equal."""
        assert compare_total(D64("1.50"), D64("1.50")) == 0
        assert compare_total(D64("Inf"), D64("Inf")) == 0


class TestExtremes:
    """Tests for maximum, minimum and clamp."""

    def test_quiet_nan_ignored(self):
        """A quiet NaN loses to a number."""
        assert maximum(D64("NaN"), D64(3)).value == 3
        assert minimum(D64(3), D64("NaN")).value == 3
        assert maximum(D64("NaN"), D64("NaN")).value.is_nan()

    def test_signaling_nan_propagates(self):
        """A signaling NaN gives a quiet NaN with InvalidOperation."""
        result, flags = maximum(D64("sNaN"), D64(3))
        assert result.is_nan() and not result.is_snan()
        assert flags == Signal.INVALID_OPERATION

    def test_ties_use_total_order(self):
        """Numerically equal operands are separated by sign and scale."""
        assert str(maximum(D64("1.0"), D64("1")).value) == "1"
        assert str(minimum(D64("1.0"), D64("1")).value) == "1.0"
        assert minimum(D64("0"), D64("-0")).value.negative

    def test_no_flags_for_numbers(self):
        """Ordinary comparisons raise no flags."""
        assert maximum(D64(1), D64(2)).flags == NO_SIGNALS

    def test_clamp(self):
        """clamp restricts to [low, high] and passes NaN through."""
        low, high = D64(0), D64(10)
        assert clamp(D64(-1), low, high) == 0
        assert clamp(D64(11), low, high) == 10
        assert clamp(D64("5.5"), low, high) == D64("5.5")
        assert clamp(D64("NaN"), low, high).is_nan()

    def test_clamp_invalid_bounds(self):
        """NaN or inverted bounds raise ValueError."""
        with pytest.raises(ValueError):
            clamp(D64(1), D64("NaN"), D64(2))
        with pytest.raises(ValueError):
            clamp(D64(1), D64(2), D64(1))


class TestNumericHash:
    """Tests for numeric_hash."""

    @pytest.mark.parametrize("text", ["1", "-1", "0.5", "-2.25", "1e10", "123.456", "0.001"])
    def test_matches_fraction(self, text):
        """Hashes agree with the equal Fraction."""
        assert numeric_hash(D64(text)) == hash(Fraction(text))

    def test_zero_and_specials(self):
        """Zeros hash to 0; infinities use the interpreter's inf hash."""
        assert numeric_hash(D64("-0.000")) == 0
        assert numeric_hash(D64("-Inf")) == -sys.hash_info.inf

    def test_signaling_nan(self):
        """sNaN is not hashable."""
        with pytest.raises(TypeError):
            numeric_hash(D64("sNaN"))
