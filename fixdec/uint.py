"""Fixed-width unsigned integer primitive for decimal coefficients.

This module provides UInt, a lightweight wrapper that makes unsigned
arithmetic at a declared bit width safe by default:
- Results that do not fit the width raise WidthOverflow (no wraparound)
- Subtraction below zero raises Underflow
- Division by zero raises DivisionByZero

The decimal engine never does coefficient arithmetic on bare ints. It asks
for a temporary of sufficient width instead (widen / widening_mul), so any
sizing mistake surfaces as an exception rather than a silently wrong digit.

Usage pattern:
    from fixdec.uint import UInt

    a = UInt(10**19, 64)
    product = a.widening_mul(a)       # 128-bit temporary, never wraps
    q, r = divmod(product, UInt(7, 128))
"""

from __future__ import annotations

from functools import lru_cache

__all__ = [
    "UInt",
    "UIntError",
    "DivisionByZero",
    "Underflow",
    "WidthOverflow",
    "pow10",
    "bits_for_pow10",
    "decimal_digits",
]


class UIntError(ArithmeticError):
    """Base class for UInt arithmetic errors."""

    pass


class DivisionByZero(UIntError):
    """Division or modulo by zero."""

    pass


class Underflow(UIntError):
    """Subtraction would produce negative result."""

    pass


class WidthOverflow(UIntError):
    """Value does not fit the declared bit width."""

    pass


@lru_cache(maxsize=512)
def pow10(n: int) -> int:
    """Return 10**n, cached for the exponents the engine reuses."""
    if n < 0:
        raise ValueError(f"pow10 requires non-negative exponent, got {n}")
    return 10**n


def bits_for_pow10(n: int) -> int:
    """Number of bits needed to hold 10**n."""
    return pow10(n).bit_length()


class UInt:
    """Unsigned integer with a fixed bit width.

    Wraps a non-negative integer together with the width it must fit in.
    Arithmetic between two UInt values runs at the wider of the two widths
    and raises instead of wrapping. Plain ints are accepted as the other
    operand and are checked against the same width.

    Attributes:
        value: The underlying integer value (read-only)
        bits: The declared width (read-only)
    """

    __slots__ = ("_value", "_bits")
    _value: int
    _bits: int

    def __init__(self, value: int | UInt, bits: int) -> None:
        """Create a UInt of the given width.

        Args:
            value: Integer value to wrap, or UInt to copy
            bits: Width in bits, must be positive

        Raises:
            TypeError: If value is not an int or UInt
            WidthOverflow: If value is negative or does not fit
        """
        if bits <= 0:
            raise ValueError(f"UInt width must be positive, got {bits}")
        if isinstance(value, UInt):
            value = value._value
        elif not isinstance(value, int):
            raise TypeError(f"UInt requires int, got {type(value).__name__}")
        if value < 0:
            raise WidthOverflow(f"Negative value cannot be u{bits}: {value}")
        if value.bit_length() > bits:
            raise WidthOverflow(f"Value exceeds u{bits} max: {value}")
        self._value = value
        self._bits = bits

    @classmethod
    def _trusted(cls, value: int, bits: int) -> UInt:
        # Skips validation; callers have already bounded the value.
        obj = object.__new__(cls)
        obj._value = value
        obj._bits = bits
        return obj

    @classmethod
    def zero(cls, bits: int) -> UInt:
        """Create a UInt with value 0."""
        return cls._trusted(0, bits)

    @classmethod
    def max_value(cls, bits: int) -> UInt:
        """Largest value representable in the width."""
        return cls._trusted((1 << bits) - 1, bits)

    @classmethod
    def from_bytes(cls, data: bytes, bits: int) -> UInt:
        """Decode a little-endian byte string of exactly bits // 8 bytes."""
        if len(data) * 8 != bits:
            raise WidthOverflow(f"Expected {bits // 8} bytes for u{bits}, got {len(data)}")
        return cls._trusted(int.from_bytes(data, "little"), bits)

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    @property
    def bits(self) -> int:
        """The declared bit width."""
        return self._bits

    def __repr__(self) -> str:
        return f"UInt({self._value}, {self._bits})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Width management ---

    def widen(self, bits: int) -> UInt:
        """Return the same value in a wider (or equal) temporary."""
        if bits < self._bits:
            raise ValueError(f"Cannot widen u{self._bits} to u{bits}")
        return UInt._trusted(self._value, bits)

    def narrow(self, bits: int) -> UInt:
        """Return the same value in a narrower width.

        Raises:
            WidthOverflow: If the value does not fit
        """
        if self._value.bit_length() > bits:
            raise WidthOverflow(f"Value {self._value} does not fit u{bits}")
        return UInt._trusted(self._value, bits)

    def fits(self, bits: int) -> bool:
        """Check if value fits in the given width without raising."""
        return self._value.bit_length() <= bits

    # --- Arithmetic operations ---

    def _checked(self, result: int, bits: int, op: str) -> UInt:
        if result.bit_length() > bits:
            raise WidthOverflow(f"Overflow: u{bits} {op} produced {result}")
        return UInt._trusted(result, bits)

    def __add__(self, other: UInt | int) -> UInt:
        """Add two values.

        Raises:
            WidthOverflow: If the sum does not fit
        """
        other_val, bits = _operand(self, other)
        return self._checked(self._value + other_val, bits, "add")

    def __radd__(self, other: int) -> UInt:
        return self.__add__(other)

    def __sub__(self, other: UInt | int) -> UInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val, bits = _operand(self, other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return UInt._trusted(result, bits)

    def __mul__(self, other: UInt | int) -> UInt:
        """Multiply two values.

        Raises:
            WidthOverflow: If the product does not fit
        """
        other_val, bits = _operand(self, other)
        return self._checked(self._value * other_val, bits, "mul")

    def __rmul__(self, other: int) -> UInt:
        return self.__mul__(other)

    def widening_mul(self, other: UInt) -> UInt:
        """Multiply into a temporary wide enough to never overflow."""
        bits = self._bits + other._bits
        return UInt._trusted(self._value * other._value, bits)

    def mul_pow10(self, n: int) -> UInt:
        """Multiply by 10**n at the current width.

        Raises:
            WidthOverflow: If the scaled value does not fit
        """
        if n == 0:
            return self
        return self._checked(self._value * pow10(n), self._bits, "mul_pow10")

    def __floordiv__(self, other: UInt | int) -> UInt:
        """Integer division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val, bits = _operand(self, other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return UInt._trusted(self._value // other_val, bits)

    def __mod__(self, other: UInt | int) -> UInt:
        """Modulo operation.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val, bits = _operand(self, other)
        if other_val == 0:
            raise DivisionByZero(f"Modulo by zero: {self._value} % 0")
        return UInt._trusted(self._value % other_val, bits)

    def __divmod__(self, other: UInt | int) -> tuple[UInt, UInt]:
        """Quotient and remainder in one step.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val, bits = _operand(self, other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: divmod({self._value}, 0)")
        q, r = divmod(self._value, other_val)
        return UInt._trusted(q, bits), UInt._trusted(r, bits)

    def divmod_pow10(self, n: int) -> tuple[UInt, UInt]:
        """Split off the lowest n decimal digits."""
        if n == 0:
            return self, UInt._trusted(0, self._bits)
        q, r = divmod(self._value, pow10(n))
        return UInt._trusted(q, self._bits), UInt._trusted(r, self._bits)

    def __truediv__(self, other: object) -> UInt:
        raise TypeError("UInt does not support true division, use // or divmod")

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: UInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: UInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: UInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: UInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    def to_bytes(self) -> bytes:
        """Encode as little-endian bytes, exactly bits // 8 long."""
        return self._value.to_bytes((self._bits + 7) // 8, "little")

    # --- Decimal digit helpers ---

    def is_zero(self) -> bool:
        return self._value == 0

    def is_odd(self) -> bool:
        return self._value & 1 == 1

    def digits_count(self) -> int:
        """Number of decimal digits; zero has one digit."""
        if self._value == 0:
            return 1
        return decimal_digits(self._value)

    def ilog10(self) -> int:
        """Floor of log10(value).

        Raises:
            ValueError: If the value is zero
        """
        if self._value == 0:
            raise ValueError("ilog10 of zero")
        return decimal_digits(self._value) - 1

    def trailing_zeros(self) -> int:
        """Count of trailing decimal zeros; zero reports 0."""
        if self._value == 0:
            return 0
        value = self._value
        count = 0
        while value % 10 == 0:
            value //= 10
            count += 1
        return count


def decimal_digits(value: int) -> int:
    """Number of decimal digits in a positive integer."""
    # 1233 / 4096 slightly underestimates log10(2), so this never overshoots
    estimate = (value.bit_length() * 1233) >> 12
    while value >= pow10(estimate):
        estimate += 1
    return max(estimate, 1)


def _extract_value(x: UInt | int) -> int:
    """Extract integer value from UInt or int."""
    if isinstance(x, UInt):
        return x._value
    return x


def _operand(self: UInt, other: UInt | int) -> tuple[int, int]:
    """Extract the other operand and the width the result runs at."""
    if isinstance(other, UInt):
        return other._value, max(self._bits, other._bits)
    if isinstance(other, int):
        if other < 0:
            raise WidthOverflow(f"Negative operand cannot be u{self._bits}: {other}")
        return other, self._bits
    raise TypeError(f"UInt operand must be int or UInt, got {type(other).__name__}")
