"""Decimal value types.

A value is (sign, coefficient, scale, special):

    value = (-1)**sign * coefficient * 10**scale

The coefficient is a UInt of the type's width. One implementation serves
every width: decimal_type(bits, signed) builds (and caches) a subclass with
its BITS fixed, and fixdec.types exposes the predefined ones.

Values are immutable. Operators use the type's default context
(cls.CONTEXT); the named methods accept an explicit Context and a
caller-owned SignalAccumulator:

    from fixdec import D128, Context, SignalAccumulator

    flags = SignalAccumulator()
    third = D128(1).div(D128(3), Context(precision=10), flags=flags)
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from fixdec.config import DEFAULT_CONTEXT
from fixdec.constants import EXP_MAX, EXP_MIN, max_coefficient, validate_width
from fixdec.context import Context, RoundingMode
from fixdec.conversion import format as formatting
from fixdec.conversion import native
from fixdec.conversion.parse import parse_decimal
from fixdec.errors import RepresentationError
from fixdec.math import arithmetic
from fixdec.math import scale as rescale
from fixdec.math.compare import clamp, compare, compare_numeric, compare_total, maximum, minimum, numeric_hash
from fixdec.math.rounding import RawResult, round_coefficient
from fixdec.models.layout import RawLayout
from fixdec.signals import NO_SIGNALS, Outcome, Signal
from fixdec.special import Category, Special
from fixdec.uint import UInt

if TYPE_CHECKING:
    from fixdec.signals import SignalAccumulator

__all__ = ["Decimal", "UnsignedDecimal", "decimal_type"]

D = TypeVar("D", bound="Decimal")


class Decimal:
    """Signed fixed-width decimal.

    Use a concrete width (D64, D128, ... or decimal_type(bits)); the base
    class itself cannot be instantiated.

    Construction:
        D64("1.25"), D64(-3), D64(other_d64)
        D64.from_str("1e-40000", allow_rounding=True)
        D64.from_float(0.1)
        D64.from_parts(negative=False, coefficient=125, scale=-2)

    Floats are never accepted implicitly; use from_float().
    """

    BITS: ClassVar[int] = 0
    SIGNED: ClassVar[bool] = True
    CONTEXT: ClassVar[Context] = DEFAULT_CONTEXT

    ZERO: ClassVar[Decimal]
    ONE: ClassVar[Decimal]
    TWO: ClassVar[Decimal]
    TEN: ClassVar[Decimal]
    MAX: ClassVar[Decimal]
    MIN: ClassVar[Decimal]
    MIN_POSITIVE: ClassVar[Decimal]
    INFINITY: ClassVar[Decimal]
    NEG_INFINITY: ClassVar[Decimal]
    NAN: ClassVar[Decimal]

    __slots__ = ("_negative", "_coefficient", "_scale", "_special")
    _negative: bool
    _coefficient: UInt
    _scale: int
    _special: Special

    def __new__(cls, value: str | int | Decimal = 0) -> Decimal:
        if cls.BITS == 0:
            raise TypeError(f"{cls.__name__} has no width; use decimal_type(bits) or D64, D128, ...")
        if isinstance(value, Decimal):
            if type(value) is cls:
                return value
            raise TypeError(
                f"Cannot convert {type(value).__name__} to {cls.__name__} implicitly; use from_decimal()"
            )
        if isinstance(value, str):
            return cls.from_str(value)
        if isinstance(value, int):
            return cls.from_int(value)
        if isinstance(value, float):
            raise TypeError("Floats are converted explicitly with from_float()")
        raise TypeError(f"Cannot build {cls.__name__} from {type(value).__name__}")

    # --- Trusted constructors (no validation) ---

    @classmethod
    def _make(cls: type[D], negative: bool, coefficient: UInt, scale: int, special: Special) -> D:
        obj = object.__new__(cls)
        object.__setattr__(obj, "_negative", negative)
        object.__setattr__(obj, "_coefficient", coefficient)
        object.__setattr__(obj, "_scale", scale)
        object.__setattr__(obj, "_special", special)
        return obj

    @classmethod
    def _finite(cls: type[D], negative: bool, coefficient: int, scale: int) -> D:
        return cls._make(negative, UInt(coefficient, cls.BITS), scale, Special.FINITE)

    @classmethod
    def _nan(cls: type[D], payload: int = 0, negative: bool = False, signaling: bool = False) -> D:
        if payload > max_coefficient(cls.BITS):
            payload = 0
        special = Special.SNAN if signaling else Special.NAN
        return cls._make(negative, UInt(payload, cls.BITS), 0, special)

    @classmethod
    def _infinity(cls: type[D], negative: bool) -> D:
        return cls._make(negative, UInt.zero(cls.BITS), 0, Special.INFINITY)

    @classmethod
    def _result(cls: type[D], raw: RawResult) -> Outcome[D]:
        """Bind rounded components to this type."""
        if raw.special is Special.INFINITY:
            return Outcome(cls._infinity(raw.negative), raw.flags)
        return Outcome(cls._make(raw.negative, raw.coefficient, raw.scale, raw.special), raw.flags)

    @classmethod
    def _signed_sibling(cls) -> type[Decimal]:
        return decimal_type(cls.BITS, True)

    def _with_sign(self: D, negative: bool) -> D:
        return type(self)._make(negative, self._coefficient, self._scale, self._special)

    # --- Public constructors ---

    @classmethod
    def from_str(
        cls: type[D],
        text: str,
        ctx: Context | None = None,
        *,
        allow_rounding: bool = False,
        flags: SignalAccumulator | None = None,
    ) -> D:
        """Parse a decimal literal.

        Raises:
            ParseError: If the text is not a valid literal for this type
        """
        ctx = cls.CONTEXT if ctx is None else ctx
        outcome = arithmetic.unsigned_guard(parse_decimal(cls, text, ctx, allow_rounding=allow_rounding))
        return ctx.enforce("parse", outcome.value, outcome.flags, flags)

    @classmethod
    def from_int(cls: type[D], value: int) -> D:
        """Exact conversion from int.

        Raises:
            ConversionError: If the value does not fit the type
        """
        return native.from_int(cls, value)

    @classmethod
    def from_float(
        cls: type[D], value: float, ctx: Context | None = None, flags: SignalAccumulator | None = None
    ) -> D:
        """Convert from the exact binary value of a float, rounded to the context."""
        ctx = cls.CONTEXT if ctx is None else ctx
        outcome = native.from_float(cls, value, ctx)
        return ctx.enforce("from_float", outcome.value, outcome.flags, flags)

    @classmethod
    def from_decimal(
        cls: type[D], value: Decimal, ctx: Context | None = None, flags: SignalAccumulator | None = None
    ) -> D:
        """Convert a value of another width or signedness to this type."""
        if type(value) is cls:
            return value  # type: ignore[return-value]
        ctx = cls.CONTEXT if ctx is None else ctx
        if value.is_nan():
            nan = cls._nan(value.coefficient, value.negative, value.special is Special.SNAN)
            outcome: Outcome[D] = Outcome(nan, NO_SIGNALS)
        elif value.is_infinite():
            outcome = Outcome(cls._infinity(value.negative), NO_SIGNALS)
        else:
            raw = round_coefficient(
                value.negative, value.digits, value.scale, ctx, cls.BITS, ideal_scale=value.scale
            )
            outcome = cls._result(raw)
        outcome = arithmetic.unsigned_guard(outcome)
        return ctx.enforce("convert", outcome.value, outcome.flags, flags)

    @classmethod
    def from_parts(cls: type[D], negative: bool, coefficient: int, scale: int = 0) -> D:
        """Build a finite value from its components.

        Raises:
            RepresentationError: If the coefficient or scale is out of range,
                or a non-zero unsigned value is negative
        """
        if not isinstance(coefficient, int) or coefficient < 0 or coefficient > max_coefficient(cls.BITS):
            raise RepresentationError(f"Coefficient {coefficient!r} does not fit {cls.__name__}")
        if not EXP_MIN <= scale <= EXP_MAX:
            raise RepresentationError(f"Scale {scale} outside [{EXP_MIN}, {EXP_MAX}]")
        if negative and not cls.SIGNED:
            if coefficient:
                raise RepresentationError(f"{cls.__name__} cannot be negative")
            negative = False
        return cls._finite(bool(negative), coefficient, scale)

    @classmethod
    def from_scale(cls: type[D], scale: int) -> D:
        """The value 1 × 10**scale."""
        return cls.from_parts(False, 1, scale)

    @classmethod
    def from_random_coefficient(
        cls: type[D],
        coefficient: int,
        *,
        bits: int | None = None,
        negative: bool = False,
        scale: int = 0,
    ) -> D:
        """Build a value from a caller-drawn random coefficient.

        The caller owns the randomness source, e.g.
        D128.from_random_coefficient(secrets.randbits(96), bits=96, scale=-6)

        Raises:
            ValueError: If bits exceeds the type's width or the coefficient
                is outside [0, 2**bits)
        """
        bits = cls.BITS if bits is None else bits
        if not 0 < bits <= cls.BITS:
            raise ValueError(f"bits must be in (0, {cls.BITS}], got {bits}")
        if not 0 <= coefficient < (1 << bits):
            raise ValueError(f"coefficient must be in [0, 2**{bits}), got {coefficient}")
        return cls.from_parts(negative, coefficient, scale)

    @classmethod
    def from_raw(cls: type[D], layout: RawLayout) -> D:
        """Rebuild a value from its raw layout, bit for bit.

        Raises:
            ValueError: If the layout was taken from another type
            RepresentationError: If an unsigned layout carries a negative number
        """
        if layout.bits != cls.BITS or layout.signed != cls.SIGNED:
            kind = "signed" if layout.signed else "unsigned"
            raise ValueError(f"Layout of a {kind} {layout.bits}-bit value cannot load into {cls.__name__}")
        if not cls.SIGNED and layout.negative and layout.special in (Special.FINITE, Special.INFINITY):
            raise RepresentationError(f"{cls.__name__} cannot be negative")
        coefficient = UInt.from_bytes(layout.coefficient, cls.BITS)
        return cls._make(layout.negative, coefficient, layout.scale, layout.special)

    # --- Components ---

    @property
    def negative(self) -> bool:
        """Sign bit (True for -0 as well)."""
        return self._negative

    @property
    def coefficient(self) -> int:
        """Coefficient as an int; the payload for NaN."""
        return self._coefficient.value

    @property
    def digits(self) -> UInt:
        """Coefficient as a UInt of the type's width."""
        return self._coefficient

    @property
    def scale(self) -> int:
        """Power-of-ten exponent."""
        return self._scale

    @property
    def fractional_digits(self) -> int:
        """Digits after the decimal point (-scale)."""
        return -self._scale

    @property
    def special(self) -> Special:
        return self._special

    def to_raw(self) -> RawLayout:
        """Field-by-field layout for storage; see from_raw()."""
        cls = type(self)
        return RawLayout(
            bits=cls.BITS,
            signed=cls.SIGNED,
            negative=self._negative,
            coefficient=self._coefficient.to_bytes(),
            scale=self._scale,
            special=self._special,
        )

    # --- Predicates ---

    def is_zero(self) -> bool:
        return self._special is Special.FINITE and self._coefficient.is_zero()

    def is_negative(self) -> bool:
        """True if the sign bit is set, including -0 and -Inf."""
        return self._negative

    def is_positive(self) -> bool:
        """True if the sign bit is clear, including +0."""
        return not self._negative

    def is_special(self) -> bool:
        return self._special is not Special.FINITE

    def is_finite(self) -> bool:
        return self._special is Special.FINITE

    def is_infinite(self) -> bool:
        return self._special is Special.INFINITY

    def is_nan(self) -> bool:
        """True for both quiet and signaling NaN."""
        return self._special in (Special.NAN, Special.SNAN)

    def is_snan(self) -> bool:
        return self._special is Special.SNAN

    def is_one(self) -> bool:
        if not self.is_finite() or self._negative or self._scale > 0:
            return False
        return self.digits_count() == 1 - self._scale and self.coefficient == 10**-self._scale

    def is_integral(self) -> bool:
        """True for finite values without a non-zero fractional part."""
        if not self.is_finite():
            return False
        if self._scale >= 0 or self.is_zero():
            return True
        return self._coefficient.trailing_zeros() >= -self._scale

    def classify(self) -> Category:
        if self.is_nan():
            return Category.NAN
        if self.is_infinite():
            return Category.INFINITE
        if self.is_zero():
            return Category.ZERO
        return Category.NORMAL

    def digits_count(self) -> int:
        """Decimal digits in the coefficient (zero has one)."""
        return self._coefficient.digits_count()

    def adjusted(self) -> int:
        """Exponent of the most significant digit: scale + digits - 1."""
        if not self.is_finite():
            return 0
        return self._scale + self.digits_count() - 1

    # --- Arithmetic ---

    def _coerce(self: D, other: D | int) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            raise TypeError(f"Unsupported operand for {type(self).__name__}: {type(other).__name__}")
        return operand

    def _operand(self: D, other: Any) -> Any:
        if type(other) is type(self):
            return other
        if isinstance(other, int):
            return type(self).from_int(other)
        return NotImplemented

    def add(self: D, other: D | int, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        return arithmetic.add(self, self._coerce(other), ctx, flags).value

    def sub(self: D, other: D | int, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        return arithmetic.sub(self, self._coerce(other), ctx, flags).value

    def mul(self: D, other: D | int, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        return arithmetic.mul(self, self._coerce(other), ctx, flags).value

    def div(self: D, other: D | int, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        return arithmetic.div(self, self._coerce(other), ctx, flags).value

    def divide_integer(
        self: D, other: D | int, ctx: Context | None = None, flags: SignalAccumulator | None = None
    ) -> D:
        return arithmetic.divide_integer(self, self._coerce(other), ctx, flags).value

    def rem(self: D, other: D | int, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        return arithmetic.rem(self, self._coerce(other), ctx, flags).value

    def divmod(
        self: D, other: D | int, ctx: Context | None = None, flags: SignalAccumulator | None = None
    ) -> tuple[D, D]:
        """(divide_integer, rem) in one call.

        Each half is enforced against ctx on its own; flags from both are
        merged into the same accumulator.
        """
        other = self._coerce(other)
        return self.divide_integer(other, ctx, flags), self.rem(other, ctx, flags)

    def power(
        self: D, exponent: int | Decimal, ctx: Context | None = None, flags: SignalAccumulator | None = None
    ) -> D:
        return arithmetic.power(self, exponent, ctx, flags).value

    def neg(self: D, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        return arithmetic.neg(self, ctx, flags).value

    def abs(self: D, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        return arithmetic.absolute(self, ctx, flags).value

    def plus(self: D, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        """Apply the context (precision, width, scale range) to this value."""
        return arithmetic.plus(self, ctx, flags).value

    def signum(self: D) -> D:
        return arithmetic.signum(self)

    # --- Comparison ---

    def compare(self, other: Decimal | int, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> Decimal:
        return compare(self, _comparable(other, strict=True), ctx, flags).value

    def compare_total(self, other: Decimal) -> int:
        """-1, 0 or 1 under the total order; see fixdec.math.compare."""
        return compare_total(self, other)

    def max(self: D, other: D | int, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        return maximum(self, self._coerce(other), ctx, flags).value

    def min(self: D, other: D | int, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        return minimum(self, self._coerce(other), ctx, flags).value

    def clamp(self: D, low: D | int, high: D | int) -> D:
        return clamp(self, self._coerce(low), self._coerce(high))

    # --- Scale ---

    def quantize(self: D, scale: int, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        return rescale.quantize(self, scale, ctx, flags).value

    def round(
        self: D,
        digits: int = 0,
        rounding: RoundingMode | None = None,
        ctx: Context | None = None,
        flags: SignalAccumulator | None = None,
    ) -> D:
        """Round to `digits` fractional digits."""
        return rescale.round_places(self, digits, rounding, ctx, flags).value

    def normalize(self: D, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> D:
        return rescale.normalize(self, ctx, flags).value

    # --- Conversion ---

    def to_int(self, bits: int | None = None, signed: bool = True) -> int:
        """Exact integer value; see fixdec.conversion.native.to_int()."""
        return native.to_int(self, bits, signed)

    def to_float(self, ctx: Context | None = None, flags: SignalAccumulator | None = None) -> float:
        ctx = type(self).CONTEXT if ctx is None else ctx
        outcome = native.to_float(self, ctx)
        return ctx.enforce("to_float", outcome.value, outcome.flags, flags)

    def to_scientific_notation(self) -> str:
        return formatting.to_scientific_notation(self)

    def to_engineering_notation(self) -> str:
        return formatting.to_engineering_notation(self)

    def zeroize(self) -> None:
        """Erase this value in place: coefficient 0, scale 0, finite, positive.

        The only mutation a value supports. Its hash changes, so erase values
        only after removing them from sets and dict keys.
        """
        object.__setattr__(self, "_negative", False)
        object.__setattr__(self, "_coefficient", UInt.zero(type(self).BITS))
        object.__setattr__(self, "_scale", 0)
        object.__setattr__(self, "_special", Special.FINITE)

    def _to_integral(self, rounding: RoundingMode) -> int:
        if self._scale >= 0 or not self.is_finite():
            return self.to_int()
        return rescale.quantize(self, 0, Context(rounding=rounding)).value.to_int()

    # --- Python protocols ---

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        cls = type(self)
        return (_rebuild, (cls.BITS, cls.SIGNED, self._negative, self.coefficient, self._scale, self._special.value))

    def __copy__(self: D) -> D:
        return self

    def __deepcopy__(self: D, memo: dict[int, Any]) -> D:
        return self

    def __str__(self) -> str:
        return formatting.to_canonical_string(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self}')"

    def __hash__(self) -> int:
        return numeric_hash(self)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __int__(self) -> int:
        """Truncate toward zero, like int() on float."""
        return self._to_integral(RoundingMode.DOWN)

    def __float__(self) -> float:
        return self.to_float()

    def __trunc__(self) -> int:
        return self._to_integral(RoundingMode.DOWN)

    def __floor__(self) -> int:
        return self._to_integral(RoundingMode.FLOOR)

    def __ceil__(self) -> int:
        return self._to_integral(RoundingMode.CEILING)

    def __round__(self, ndigits: int | None = None) -> Any:
        if ndigits is None:
            return self._to_integral(RoundingMode.HALF_EVEN)
        return self.round(ndigits, RoundingMode.HALF_EVEN)

    def __eq__(self, other: object) -> bool:
        operand = _comparable(other)
        if operand is NotImplemented:
            return NotImplemented
        return compare_numeric(self, operand) == 0

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def _order(self, other: object, operation: str) -> Any:
        operand = _comparable(other)
        if operand is NotImplemented:
            return NotImplemented
        order = compare_numeric(self, operand)
        if order is None:
            type(self).CONTEXT.enforce(operation, None, Signal.INVALID_OPERATION)
        return order

    def __lt__(self, other: object) -> bool:
        order = self._order(other, "lt")
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order < 0

    def __le__(self, other: object) -> bool:
        order = self._order(other, "le")
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order <= 0

    def __gt__(self, other: object) -> bool:
        order = self._order(other, "gt")
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order > 0

    def __ge__(self, other: object) -> bool:
        order = self._order(other, "ge")
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order >= 0

    def __neg__(self: D) -> D:
        return self.neg()

    def __pos__(self: D) -> D:
        return self.plus()

    def __abs__(self: D) -> D:
        return self.abs()

    def __add__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return self.add(operand)

    def __radd__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return operand.add(self)

    def __sub__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return self.sub(operand)

    def __rsub__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return operand.sub(self)

    def __mul__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return self.mul(operand)

    def __rmul__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return operand.mul(self)

    def __truediv__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return self.div(operand)

    def __rtruediv__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return operand.div(self)

    def __floordiv__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return self.divide_integer(operand)

    def __rfloordiv__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return operand.divide_integer(self)

    def __mod__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return self.rem(operand)

    def __rmod__(self: D, other: Any) -> D:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return operand.rem(self)

    def __divmod__(self: D, other: Any) -> tuple[D, D]:
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        return self.divmod(operand)

    def __pow__(self: D, exponent: Any, modulo: None = None) -> D:
        if modulo is not None:
            return NotImplemented
        if isinstance(exponent, int) or type(exponent) is type(self):
            return self.power(exponent)
        return NotImplemented

    def __rpow__(self: D, base: Any) -> D:
        operand = self._operand(base)
        if operand is NotImplemented:
            return NotImplemented
        return operand.power(self)


class UnsignedDecimal(Decimal):
    """Unsigned fixed-width decimal.

    Results that would be negative become NaN with InvalidOperation;
    negative zero becomes positive zero.
    """

    SIGNED: ClassVar[bool] = False
    __slots__ = ()


def _comparable(other: object, strict: bool = False) -> Any:
    if isinstance(other, Decimal):
        return other
    if isinstance(other, int):
        return _exact_int(other)
    if strict:
        raise TypeError(f"Cannot compare decimal with {type(other).__name__}")
    return NotImplemented


def _exact_int(value: int) -> Decimal:
    # Smallest signed type that holds the integer exactly
    words = max(1, -(-abs(value).bit_length() // 64))
    return decimal_type(words * 64).from_int(value)


def _rebuild(bits: int, signed: bool, negative: bool, coefficient: int, scale: int, special: str) -> Decimal:
    cls = decimal_type(bits, signed)
    return cls._make(negative, UInt(coefficient, bits), scale, Special(special))


def _install_constants(cls: type[Decimal]) -> None:
    bits = cls.BITS
    cls.ZERO = cls._finite(False, 0, 0)
    cls.ONE = cls._finite(False, 1, 0)
    cls.TWO = cls._finite(False, 2, 0)
    cls.TEN = cls._finite(False, 10, 0)
    cls.MAX = cls._finite(False, max_coefficient(bits), EXP_MAX)
    cls.MIN_POSITIVE = cls._finite(False, 1, EXP_MIN)
    cls.INFINITY = cls._infinity(False)
    cls.NAN = cls._nan()
    if cls.SIGNED:
        cls.MIN = cls._finite(True, max_coefficient(bits), EXP_MAX)
        cls.NEG_INFINITY = cls._infinity(True)


def decimal_type(bits: int, signed: bool = True) -> type[Decimal]:
    """Decimal type with a `bits`-wide coefficient.

    Calls with the same arguments return the same class, so values built
    in different places interoperate.

    Raises:
        ValueError: If bits is not a positive multiple of 64
    """
    return _build_type(validate_width(bits), bool(signed))


@functools.lru_cache(maxsize=None)
def _build_type(bits: int, signed: bool) -> type[Decimal]:
    base = Decimal if signed else UnsignedDecimal
    name = f"{'D' if signed else 'UD'}{bits}"
    namespace = {
        "BITS": bits,
        "__slots__": (),
        "__module__": "fixdec.types",
        "__doc__": f"{'Signed' if signed else 'Unsigned'} decimal with a {bits}-bit coefficient.",
    }
    cls = type(name, (base,), namespace)
    _install_constants(cls)
    return cls
