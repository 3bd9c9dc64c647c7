"""Tests for the UInt fixed-width coefficient primitive."""

import pytest

from fixdec.uint import (
    DivisionByZero,
    UInt,
    UIntError,
    Underflow,
    WidthOverflow,
    bits_for_pow10,
    decimal_digits,
    pow10,
)


class TestUIntConstruction:
    """Tests for UInt construction."""

    def test_from_int(self):
        """UInt can be constructed from int."""
        u = UInt(42, 64)
        assert u.value == 42
        assert u.bits == 64

    def test_from_uint(self):
        """UInt can be constructed from another UInt."""
        u = UInt(UInt(42, 64), 128)
        assert u.value == 42
        assert u.bits == 128

    def test_max_fits(self):
        """The largest value of the width is accepted."""
        assert UInt(2**64 - 1, 64).value == 2**64 - 1

    def test_too_large_raises(self):
        """A value wider than the declared width raises WidthOverflow."""
        with pytest.raises(WidthOverflow):
            UInt(2**64, 64)

    def test_negative_raises(self):
        """Negative values are rejected."""
        with pytest.raises(WidthOverflow):
            UInt(-1, 64)

    def test_invalid_type_raises(self):
        """UInt rejects non-integer types."""
        with pytest.raises(TypeError):
            UInt("42", 64)  # type: ignore
        with pytest.raises(TypeError):
            UInt(3.14, 64)  # type: ignore

    def test_invalid_width_raises(self):
        """Width must be positive."""
        with pytest.raises(ValueError):
            UInt(1, 0)

    def test_zero_and_max_constructors(self):
        """zero() and max_value() build the extremes of the width."""
        assert UInt.zero(64).value == 0
        assert UInt.max_value(128).value == 2**128 - 1

    def test_bytes_round_trip(self):
        """to_bytes/from_bytes use exactly bits // 8 little-endian bytes."""
        u = UInt(0x0102, 64)
        data = u.to_bytes()
        assert data == b"\x02\x01" + b"\x00" * 6
        assert UInt.from_bytes(data, 64) == u

    def test_from_bytes_wrong_length_raises(self):
        """from_bytes refuses a byte string of the wrong length."""
        with pytest.raises(WidthOverflow):
            UInt.from_bytes(b"\x00" * 4, 64)


class TestUIntArithmetic:
    """Tests for UInt arithmetic operations."""

    def test_add(self):
        """Addition works with UInt and int operands."""
        assert (UInt(10, 64) + UInt(5, 64)).value == 15
        assert (UInt(10, 64) + 5).value == 15
        assert (5 + UInt(10, 64)).value == 15

    def test_add_overflow_raises(self):
        """Addition past the width raises instead of wrapping."""
        with pytest.raises(WidthOverflow) as exc_info:
            UInt.max_value(64) + 1
        assert "u64" in str(exc_info.value)

    def test_mixed_width_runs_at_wider(self):
        """Mixing widths computes at the wider width."""
        result = UInt(2**64 - 1, 64) + UInt(1, 128)
        assert result.bits == 128
        assert result.value == 2**64

    def test_sub(self):
        """Subtraction with non-negative result works."""
        assert (UInt(10, 64) - UInt(3, 64)).value == 7
        assert (UInt(5, 64) - 5).value == 0

    def test_sub_underflow_raises(self):
        """Subtraction below zero raises Underflow."""
        with pytest.raises(Underflow) as exc_info:
            UInt(5, 64) - UInt(10, 64)
        assert "5 - 10" in str(exc_info.value)

    def test_mul_overflow_raises(self):
        """Checked multiplication raises when the product does not fit."""
        with pytest.raises(WidthOverflow):
            UInt(2**40, 64) * UInt(2**40, 64)

    def test_widening_mul(self):
        """widening_mul sums the widths and never overflows."""
        a = UInt.max_value(64)
        product = a.widening_mul(a)
        assert product.bits == 128
        assert product.value == (2**64 - 1) ** 2

    def test_mul_pow10(self):
        """mul_pow10 scales by a power of ten at the current width."""
        assert UInt(123, 64).mul_pow10(3).value == 123000
        with pytest.raises(WidthOverflow):
            UInt(2**60, 64).mul_pow10(2)

    def test_floordiv_and_mod(self):
        """Integer division and modulo work."""
        assert (UInt(17, 64) // 5).value == 3
        assert (UInt(17, 64) % 5).value == 2

    def test_divmod(self):
        """divmod returns quotient and remainder."""
        q, r = divmod(UInt(17, 64), UInt(5, 64))
        assert (q.value, r.value) == (3, 2)

    def test_division_by_zero_raises(self):
        """Division or modulo by zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            UInt(1, 64) // 0
        with pytest.raises(DivisionByZero):
            UInt(1, 64) % UInt(0, 64)
        with pytest.raises(DivisionByZero):
            divmod(UInt(1, 64), 0)

    def test_truediv_not_supported(self):
        """True division is refused."""
        with pytest.raises(TypeError):
            UInt(1, 64) / 2

    def test_negative_int_operand_raises(self):
        """A negative plain int operand is rejected."""
        with pytest.raises(WidthOverflow):
            UInt(1, 64) + (-1)

    def test_errors_share_base(self):
        """All UInt errors derive from UIntError and ArithmeticError."""
        for error in (DivisionByZero, Underflow, WidthOverflow):
            assert issubclass(error, UIntError)
            assert issubclass(error, ArithmeticError)


class TestUIntWidth:
    """Tests for widening and narrowing."""

    def test_widen(self):
        """widen keeps the value in a wider temporary."""
        assert UInt(7, 64).widen(256).bits == 256

    def test_widen_to_narrower_raises(self):
        """widen refuses to shrink."""
        with pytest.raises(ValueError):
            UInt(7, 128).widen(64)

    def test_narrow(self):
        """narrow succeeds when the value fits."""
        assert UInt(7, 256).narrow(64).bits == 64

    def test_narrow_overflow_raises(self):
        """narrow raises when the value does not fit."""
        with pytest.raises(WidthOverflow):
            UInt(2**64, 128).narrow(64)

    def test_fits(self):
        """fits reports without raising."""
        assert UInt(2**64 - 1, 128).fits(64)
        assert not UInt(2**64, 128).fits(64)


class TestUIntDigits:
    """Tests for decimal digit helpers."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0, 1), (1, 1), (9, 1), (10, 2), (99, 2), (100, 3), (2**64 - 1, 20), (10**38, 39)],
    )
    def test_digits_count(self, value, expected):
        """digits_count counts decimal digits; zero has one."""
        assert UInt(value, 256).digits_count() == expected

    def test_decimal_digits_at_powers_of_ten(self):
        """decimal_digits is exact on both sides of every power of ten."""
        for n in range(1, 80):
            assert decimal_digits(10**n) == n + 1
            assert decimal_digits(10**n - 1) == n

    def test_trailing_zeros(self):
        """trailing_zeros counts decimal zeros; zero reports 0."""
        assert UInt(1200, 64).trailing_zeros() == 2
        assert UInt(7, 64).trailing_zeros() == 0
        assert UInt(0, 64).trailing_zeros() == 0

    def test_divmod_pow10(self):
        """divmod_pow10 splits off the lowest digits."""
        kept, dropped = UInt(123456, 64).divmod_pow10(2)
        assert (kept.value, dropped.value) == (1234, 56)

    def test_ilog10(self):
        """ilog10 is floor(log10)."""
        assert UInt(999, 64).ilog10() == 2
        assert UInt(1000, 64).ilog10() == 3
        with pytest.raises(ValueError):
            UInt(0, 64).ilog10()

    def test_pow10_helpers(self):
        """pow10 and bits_for_pow10 agree with plain integer math."""
        assert pow10(5) == 100000
        assert bits_for_pow10(19) == (10**19).bit_length()
        with pytest.raises(ValueError):
            pow10(-1)


class TestUIntComparison:
    """Tests for comparisons and conversions."""

    def test_compare_with_int_and_uint(self):
        """Comparisons accept UInt and int."""
        assert UInt(5, 64) == 5
        assert UInt(5, 64) == UInt(5, 128)
        assert UInt(5, 64) < UInt(6, 64)
        assert UInt(5, 64) >= 5
        assert UInt(5, 64) != 6

    def test_int_and_index(self):
        """UInt converts to int and works as an index."""
        assert int(UInt(3, 64)) == 3
        assert [10, 20, 30, 40][UInt(3, 64)] == 40

    def test_bool(self):
        """bool is False only for zero."""
        assert not UInt(0, 64)
        assert UInt(1, 64)

    def test_hash_matches_value(self):
        """Equal UInts hash like their int values."""
        assert hash(UInt(5, 64)) == hash(5)
