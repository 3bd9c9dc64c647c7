"""End-to-end properties of the decimal types.

These exercise the public value API (operators, named methods, contexts and
accumulators) across widths rather than the individual modules.
"""

import random

import pytest

from fixdec import (
    D64,
    D128,
    D256,
    UD128,
    Context,
    DivisionByZeroTrap,
    OverflowTrap,
    RoundingMode,
    Signal,
    SignalAccumulator,
)
from fixdec.value import decimal_type
from tests.helpers import D64_LIMIT, make_context, make_decimal

SAMPLES = ["0", "-0", "1", "-1", "0.5", "123.456", "-98765.4321", "1e10", "1e-10", "3.14159"]
TYPES = [D64, D128, D256, decimal_type(192)]


def _random_values(cls, count, seed):
    rng = random.Random(seed)
    values = []
    for _ in range(count):
        bits = min(cls.BITS, 48)
        coefficient = rng.getrandbits(bits)
        scale = rng.randint(-12, 4)
        negative = rng.random() < 0.5
        values.append(cls.from_random_coefficient(coefficient, bits=bits, negative=negative, scale=scale))
    return values


class TestAlgebraicIdentities:
    """Identities that hold for exact results."""

    @pytest.mark.parametrize("cls", TYPES, ids=lambda cls: cls.__name__)
    def test_commutativity(self, cls):
        """a + b == b + a and a × b == b × a."""
        values = _random_values(cls, 20, seed=cls.BITS)
        for a, b in zip(values, reversed(values)):
            assert a + b == b + a
            assert a * b == b * a

    @pytest.mark.parametrize("cls", TYPES, ids=lambda cls: cls.__name__)
    def test_identities(self, cls):
        """x + 0 == x, x × 1 == x, x - x == 0."""
        for text in SAMPLES:
            x = cls(text)
            assert x + cls.ZERO == x
            assert x * cls.ONE == x
            assert (x - x).is_zero()

    def test_additive_inverse_sign(self):
        """x + (-x) is +0 by default and -0 under FLOOR."""
        x = D64("12.5")
        assert not x.add(-x).negative
        assert x.add(-x, make_context(rounding="floor")).negative

    def test_exact_division_round_trip(self):
        """(a × b) / b == a when the product is exact."""
        for a in _random_values(D128, 20, seed=7):
            b = D128("0.25")
            assert (a * b) / b == a


class TestTextRoundTrip:
    """Parse and format round trips."""

    @pytest.mark.parametrize("cls", TYPES, ids=lambda cls: cls.__name__)
    def test_canonical_round_trip(self, cls):
        """parse(format(x)) has the same sign, coefficient and scale."""
        for value in _random_values(cls, 30, seed=cls.BITS + 1):
            reparsed = cls(str(value))
            assert reparsed.to_raw() == value.to_raw()

    def test_special_round_trip(self):
        """Specials survive formatting."""
        for text in ("Inf", "-Inf", "NaN", "NaN7", "sNaN"):
            value = D64(text)
            assert str(D64(str(value))) == str(value)


class TestWorkedExamples:
    """Behaviour on specific documented inputs."""

    def test_trailing_zeros_preserved(self):
        """123.456 + 0.544 is 124.000 with three fractional digits."""
        result = D64("123.456") + D64("0.544")
        assert str(result) == "124.000"
        assert result.fractional_digits == 3

    def test_scale_independent_equality(self):
        """1.0 == 1.00 across widths."""
        assert D64("1.0") == D64("1.00")
        assert D64("1.0") == D256("1.00000")

    @pytest.mark.parametrize(
        "text,mode,expected",
        [
            ("25e-1", RoundingMode.HALF_EVEN, 2),
            ("25e-1", RoundingMode.HALF_UP, 3),
            ("25e-1", RoundingMode.HALF_DOWN, 2),
            ("25e-1", RoundingMode.DOWN, 2),
            ("25e-1", RoundingMode.UP, 3),
            ("25e-1", RoundingMode.CEILING, 3),
            ("25e-1", RoundingMode.FLOOR, 2),
            ("-25e-1", RoundingMode.HALF_EVEN, -2),
            ("-25e-1", RoundingMode.HALF_UP, -3),
            ("-25e-1", RoundingMode.CEILING, -2),
            ("-25e-1", RoundingMode.FLOOR, -3),
            ("35e-1", RoundingMode.HALF_EVEN, 4),
        ],
    )
    def test_rounding_table(self, text, mode, expected):
        """2.5 and -2.5 rounded to an integer under each mode."""
        assert D64(text).quantize(0, Context(rounding=mode)) == expected

    def test_ten_thirds(self, precise):
        """10 / 3 at precision 5 is 3.3333 and sets Inexact."""
        flags = SignalAccumulator()
        result = D64(10).div(D64(3), precise, flags)
        assert str(result) == "3.3333"
        assert Signal.INEXACT in flags

    def test_division_by_zero(self):
        """x / 0 is signed Infinity; 0 / 0 is NaN."""
        flags = SignalAccumulator()
        assert (D64(-1).div(D64(0), flags=flags)).is_infinite()
        assert flags.flags == Signal.DIVISION_BY_ZERO
        flags.clear()
        assert D64(0).div(D64(0), flags=flags).is_nan()
        assert flags.flags == Signal.INVALID_OPERATION

    def test_division_by_zero_trapped(self, strict):
        """A strict context turns the signal into an exception."""
        with pytest.raises(DivisionByZeroTrap):
            D64(1).div(D64(0), strict)

    def test_overflow_at_integer_scale(self):
        """The largest integer plus one overflows at scale 0."""
        flags = SignalAccumulator()
        result = D64(D64_LIMIT).add(D64(1), flags=flags)
        assert result.is_infinite()
        assert flags.flags == Signal.OVERFLOW | Signal.INEXACT | Signal.ROUNDED

    def test_overflow_trapped(self, strict):
        """Trapping Overflow raises OverflowTrap, an OverflowError."""
        with pytest.raises(OverflowTrap):
            D64(D64_LIMIT).add(D64(1), strict)
        with pytest.raises(OverflowError):
            D64(D64_LIMIT).add(D64(1), strict)

    def test_wider_type_holds_the_sum(self):
        """The same sum fits one width up."""
        assert D128(D64_LIMIT) + 1 == D64_LIMIT + 1


class TestAccumulator:
    """Flags accumulate across a sequence of operations."""

    def test_running_total(self):
        """A running total collects every flag raised along the way."""
        ctx = Context(precision=4)
        flags = SignalAccumulator()
        total = D64(0)
        for text in ("1.2345", "2", "3.5"):
            total = total.add(D64(text), ctx, flags)
        assert total == D64("6.734")
        assert Signal.INEXACT in flags
        assert Signal.ROUNDED in flags

    def test_unsigned_invalid(self):
        """Unsigned underflow below zero is reported, not wrapped."""
        flags = SignalAccumulator()
        result = UD128(1).sub(UD128(2), flags=flags)
        assert result.is_nan()
        assert Signal.INVALID_OPERATION in flags


class TestCrossWidth:
    """Conversions between widths."""

    def test_widen_is_exact(self):
        """Widening never changes the value or scale."""
        for value in _random_values(D64, 10, seed=3):
            wide = D256.from_decimal(value)
            assert wide.to_raw().coefficient_value == value.coefficient
            assert wide.scale == value.scale

    def test_factory_matches_predefined(self):
        """make_decimal builds the predefined classes."""
        assert type(make_decimal("1", bits=128)) is D128
        assert type(make_decimal("1", bits=128, signed=False)) is UD128
