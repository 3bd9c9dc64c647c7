"""Arithmetic core: add, sub, mul, div, divide_integer, rem, power.

Every public function has the same shape:

    op(a, b, ctx=None, accumulator=None) -> Outcome(value, flags)

`ctx` defaults to the operand type's CONTEXT. Special values are resolved
first (fixdec.special), then the exact intermediate is computed on UInt
temporaries wide enough that nothing wraps, and finally the rounding engine
fits it to the type. Trapped signals raise from Context.enforce().
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, TypeVar

from fixdec.context import Context, RoundingMode
from fixdec.math.rounding import RawResult, round_coefficient
from fixdec.signals import NO_SIGNALS, Outcome, Signal
from fixdec.special import Operation, Special, invalid, propagate_nan, resolve_special
from fixdec.uint import UInt, bits_for_pow10, decimal_digits

if TYPE_CHECKING:
    from fixdec.signals import SignalAccumulator
    from fixdec.value import Decimal

__all__ = [
    "add",
    "sub",
    "mul",
    "div",
    "divide_integer",
    "rem",
    "power",
    "neg",
    "absolute",
    "plus",
    "signum",
    "sum_of",
    "product_of",
]

D = TypeVar("D", bound="Decimal")

# Integer exponents accepted by power(); anything larger is InvalidOperation
MAX_POWER_EXPONENT = 2**63 - 1


def _context(a: Decimal, ctx: Context | None) -> Context:
    return type(a).CONTEXT if ctx is None else ctx


def _require_same_type(a: Decimal, b: Decimal) -> None:
    if type(a) is not type(b):
        raise TypeError(
            f"Operands must share a decimal type, got {type(a).__name__} and {type(b).__name__}"
        )


def _finish(
    operation: str,
    outcome: Outcome[D],
    ctx: Context,
    accumulator: SignalAccumulator | None,
) -> Outcome[D]:
    outcome = unsigned_guard(outcome)
    ctx.enforce(operation, outcome.value, outcome.flags, accumulator)
    return outcome


def unsigned_guard(outcome: Outcome[D]) -> Outcome[D]:
    """Map a negative result of an unsigned type to NaN + InvalidOperation.

    Negative zero becomes positive zero without a signal.
    """
    value, flags = outcome
    cls = type(value)
    if cls.SIGNED or not value.negative or value.is_nan():
        return outcome
    if value.is_zero():
        return Outcome(cls._finite(False, 0, value.scale), flags)
    return Outcome(cls._nan(), flags | Signal.INVALID_OPERATION)


def _bind(cls: type[D], raw: RawResult) -> Outcome[D]:
    return cls._result(raw)


# =============================================================================
# Exact kernels (no trap handling)
# =============================================================================


def _add(a: D, b: D, ctx: Context, *, subtract: bool = False) -> Outcome[D]:
    if subtract and not b.is_nan():
        b = b._with_sign(not b.negative)

    special = resolve_special(Operation.ADD, a, b)
    if special is not None:
        return special

    cls = type(a)
    bits = cls.BITS
    ideal = min(a.scale, b.scale)

    hi, lo = (a, b) if a.scale >= b.scale else (b, a)
    lo_digits, lo_scale = lo.digits, lo.scale

    if not hi.is_zero() and not lo.is_zero():
        # Collapse an operand lying entirely below the rounding position of
        # the other into a single sticky digit
        precision = decimal_digits(ctx.coefficient_limit(bits))
        sticky_scale = hi.scale + min(-1, hi.digits_count() - precision - 2)
        if lo.digits_count() + lo.scale - 1 < sticky_scale:
            lo_digits, lo_scale = UInt(1, bits), sticky_scale

    shift = hi.scale - lo_scale
    wide = bits + bits_for_pow10(shift) + 1
    hi_wide = hi.digits.widen(wide).mul_pow10(shift)
    lo_wide = lo_digits.widen(wide)

    if hi.negative == lo.negative:
        total = hi_wide + lo_wide
        negative = hi.negative
    elif hi_wide >= lo_wide:
        total = hi_wide - lo_wide
        negative = hi.negative
    else:
        total = lo_wide - hi_wide
        negative = lo.negative

    if total.is_zero() and hi.negative != lo.negative:
        negative = ctx.rounding is RoundingMode.FLOOR

    return _bind(cls, round_coefficient(negative, total, lo_scale, ctx, bits, ideal_scale=ideal))


def _mul(a: D, b: D, ctx: Context) -> Outcome[D]:
    special = resolve_special(Operation.MUL, a, b)
    if special is not None:
        return special

    cls = type(a)
    negative = a.negative != b.negative
    product = a.digits.widening_mul(b.digits)
    scale = a.scale + b.scale
    return _bind(cls, round_coefficient(negative, product, scale, ctx, cls.BITS, ideal_scale=scale))


def _div(a: D, b: D, ctx: Context) -> Outcome[D]:
    special = resolve_special(Operation.DIV, a, b)
    if special is not None:
        return special

    cls = type(a)
    bits = cls.BITS
    negative = a.negative != b.negative
    ideal = a.scale - b.scale

    if b.is_zero():
        if a.is_zero():
            return invalid(a)
        return Outcome(cls._infinity(negative), Signal.DIVISION_BY_ZERO)
    if a.is_zero():
        return _bind(cls, round_coefficient(negative, UInt.zero(bits), ideal, ctx, bits, ideal_scale=ideal))

    # Scale the dividend so the quotient carries at least one digit more
    # than the result can keep
    target = decimal_digits(ctx.coefficient_limit(bits)) + 1
    shift = max(0, target + b.digits_count() - a.digits_count())
    wide = bits + bits_for_pow10(shift)
    quotient, remainder = divmod(a.digits.widen(wide).mul_pow10(shift), b.digits.widen(wide))
    scale = ideal - shift

    if remainder.is_zero():
        strip = min(quotient.trailing_zeros(), shift)
        if strip:
            quotient = quotient.divmod_pow10(strip)[0]
            scale += strip
    elif quotient.value % 5 == 0:
        # Make the discarded digits non-zero and never an exact half
        quotient = quotient + 1

    return _bind(cls, round_coefficient(negative, quotient, scale, ctx, bits, ideal_scale=ideal))


def _aligned(a: Decimal, b: Decimal) -> tuple[int, int, int]:
    """Coefficients of a and b brought to their common (smaller) scale."""
    scale = min(a.scale, b.scale)
    return (
        a.coefficient * 10 ** (a.scale - scale),
        b.coefficient * 10 ** (b.scale - scale),
        scale,
    )


def _divide_integer(a: D, b: D, ctx: Context) -> Outcome[D]:
    special = resolve_special(Operation.DIVIDE_INTEGER, a, b)
    if special is not None:
        return special

    cls = type(a)
    bits = cls.BITS
    negative = a.negative != b.negative

    if b.is_zero():
        if a.is_zero():
            return invalid(a)
        return Outcome(cls._infinity(negative), Signal.DIVISION_BY_ZERO)
    if a.is_zero() or a.adjusted() < b.adjusted():
        return Outcome(cls._finite(negative, 0, 0), NO_SIGNALS)

    limit = ctx.coefficient_limit(bits)
    if a.adjusted() - b.adjusted() > decimal_digits(limit):
        return invalid(a)

    dividend, divisor, _ = _aligned(a, b)
    quotient = dividend // divisor
    if quotient > limit:
        return invalid(a)
    return _bind(cls, RawResult(negative, UInt(quotient, bits), 0, Special.FINITE, NO_SIGNALS))


def _rem(a: D, b: D, ctx: Context) -> Outcome[D]:
    special = resolve_special(Operation.REM, a, b)
    if special is not None:
        return special

    cls = type(a)
    bits = cls.BITS

    if b.is_zero():
        return invalid(a)

    scale = min(a.scale, b.scale)
    if a.scale >= b.scale:
        # Reduce 10**shift modulo the divisor instead of materialising it
        divisor = b.coefficient
        remainder = (a.coefficient * pow(10, a.scale - scale, divisor)) % divisor
    elif a.adjusted() < b.adjusted():
        remainder = a.coefficient
    else:
        _, divisor, _ = _aligned(a, b)
        remainder = a.coefficient % divisor

    wide = UInt(remainder, max(bits, remainder.bit_length()))
    return _bind(cls, round_coefficient(a.negative, wide, scale, ctx, bits, ideal_scale=scale))


def _power(a: D, exponent: int, ctx: Context) -> Outcome[D]:
    cls = type(a)
    bits = cls.BITS

    nan = propagate_nan(a)
    if nan is not None:
        return nan
    if abs(exponent) > MAX_POWER_EXPONENT:
        return invalid(a)

    odd = exponent % 2 == 1
    negative = a.negative and odd

    if exponent == 0:
        if a.is_zero():
            return invalid(a)
        return Outcome(cls.ONE, NO_SIGNALS)
    if a.is_infinite():
        if exponent > 0:
            return Outcome(cls._infinity(negative), NO_SIGNALS)
        return Outcome(cls._finite(negative, 0, 0), NO_SIGNALS)
    if a.is_zero():
        if exponent < 0:
            return Outcome(cls._infinity(negative), Signal.DIVISION_BY_ZERO)
        zero = UInt.zero(bits)
        return _bind(cls, round_coefficient(negative, zero, a.scale * exponent, ctx, bits, ideal_scale=0))

    # Exponentiation by squaring, each product rounded to the context
    flags = NO_SIGNALS
    result: D = cls.ONE
    base = a
    remaining = abs(exponent)
    while remaining:
        if remaining & 1:
            result, raised = _mul(result, base, ctx)
            flags |= raised
        remaining >>= 1
        if remaining:
            base, raised = _mul(base, base, ctx)
            flags |= raised

    if exponent < 0:
        result, raised = _div(cls.ONE, result, ctx)
        flags |= raised
    return Outcome(result, flags)


def _plus(a: D, ctx: Context) -> Outcome[D]:
    nan = propagate_nan(a)
    if nan is not None:
        return nan
    if a.is_infinite():
        return Outcome(a, NO_SIGNALS)
    cls = type(a)
    raw = round_coefficient(a.negative, a.digits, a.scale, ctx, cls.BITS, ideal_scale=a.scale)
    return _bind(cls, raw)


def _sign_op(a: D, negative: bool) -> Outcome[D]:
    if a.special is Special.SNAN:
        return propagate_nan(a)  # type: ignore[return-value]
    if a.is_nan():
        return Outcome(a._with_sign(negative), NO_SIGNALS)
    return _bind(type(a), RawResult(negative, a.digits, a.scale, a.special, NO_SIGNALS))


# =============================================================================
# Public operations
# =============================================================================


def _binary(
    operation: str,
    kernel: Callable[[D, D, Context], Outcome[D]],
    a: D,
    b: D,
    ctx: Context | None,
    accumulator: SignalAccumulator | None,
) -> Outcome[D]:
    _require_same_type(a, b)
    ctx = _context(a, ctx)
    return _finish(operation, kernel(a, b, ctx), ctx, accumulator)


def add(a: D, b: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None) -> Outcome[D]:
    """Calculate a + b.

    Operands are aligned to the smaller scale in a temporary wide enough for
    the shift; the ideal result scale is min(a.scale, b.scale).
    """
    return _binary("add", _add, a, b, ctx, accumulator)


def sub(a: D, b: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None) -> Outcome[D]:
    """Calculate a - b."""

    def kernel(x: D, y: D, c: Context) -> Outcome[D]:
        return _add(x, y, c, subtract=True)

    return _binary("sub", kernel, a, b, ctx, accumulator)


def mul(a: D, b: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None) -> Outcome[D]:
    """Calculate a × b in a double-width temporary; ideal scale is a.scale + b.scale."""
    return _binary("mul", _mul, a, b, ctx, accumulator)


def div(a: D, b: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None) -> Outcome[D]:
    """Calculate a ÷ b.

    The quotient is computed by integer long division to one digit more than
    the context keeps, with the remainder folded into a sticky digit.

    Division by zero gives signed Infinity with DivisionByZero, or NaN with
    InvalidOperation when the dividend is also zero.

    Examples:
        >>> div(D64("10"), D64("3"), Context(precision=5)).value
        D64('3.3333')
    """
    return _binary("div", _div, a, b, ctx, accumulator)


def divide_integer(
    a: D, b: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None
) -> Outcome[D]:
    """Integer part of a ÷ b, truncated toward zero, at scale 0.

    A quotient too large for the context is InvalidOperation.
    """
    return _binary("divide_integer", _divide_integer, a, b, ctx, accumulator)


def rem(a: D, b: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None) -> Outcome[D]:
    """Remainder of the truncating division: a - trunc(a / b) × b.

    The result takes the sign of the dividend. A zero divisor is
    InvalidOperation.
    """
    return _binary("rem", _rem, a, b, ctx, accumulator)


def power(
    a: D,
    exponent: int | Decimal,
    ctx: Context | None = None,
    accumulator: SignalAccumulator | None = None,
) -> Outcome[D]:
    """Raise a to an integral power.

    Uses exponentiation by squaring with every intermediate product rounded
    to the context. Negative exponents take the reciprocal at the end.
    A non-integral, infinite or out-of-range exponent is InvalidOperation.
    """
    ctx = _context(a, ctx)
    if not isinstance(exponent, int):
        nan = propagate_nan(a, exponent)
        if nan is not None:
            return _finish("power", nan, ctx, accumulator)
        if not exponent.is_finite() or not exponent.is_integral():
            return _finish("power", invalid(a), ctx, accumulator)
        if exponent.adjusted() > 19:
            return _finish("power", invalid(a), ctx, accumulator)
        exponent = exponent.to_int()
    return _finish("power", _power(a, exponent, ctx), ctx, accumulator)


def neg(a: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None) -> Outcome[D]:
    """Flip the sign. No rounding is applied."""
    ctx = _context(a, ctx)
    return _finish("neg", _sign_op(a, not a.negative), ctx, accumulator)


def absolute(a: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None) -> Outcome[D]:
    """Clear the sign. No rounding is applied."""
    ctx = _context(a, ctx)
    return _finish("abs", _sign_op(a, False), ctx, accumulator)


def plus(a: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None) -> Outcome[D]:
    """Round a value to the context (precision, width and scale range)."""
    ctx = _context(a, ctx)
    return _finish("plus", _plus(a, ctx), ctx, accumulator)


def signum(a: D) -> D:
    """-1 for negative values (including -0), 1 otherwise, NaN for NaN."""
    cls = type(a)
    if a.is_nan():
        return cls._nan()
    return cls._finite(True, 1, 0) if a.negative else cls.ONE


def _fold(
    operation: str,
    kernel: Callable[[D, D, Context], Outcome[D]],
    values: Iterable[D],
    ctx: Context | None,
    accumulator: SignalAccumulator | None,
) -> Outcome[D]:
    iterator = iter(values)
    try:
        total = next(iterator)
    except StopIteration:
        raise ValueError(f"{operation} of an empty iterable") from None
    ctx = _context(total, ctx)
    flags = NO_SIGNALS
    for value in iterator:
        _require_same_type(total, value)
        total, raised = kernel(total, value, ctx)
        flags |= raised
    return _finish(operation, Outcome(total, flags), ctx, accumulator)


def sum_of(
    values: Iterable[D], ctx: Context | None = None, accumulator: SignalAccumulator | None = None
) -> Outcome[D]:
    """Sum a non-empty iterable, rounding after each addition.

    Raises:
        ValueError: If values is empty
    """
    return _fold("sum", _add, values, ctx, accumulator)


def product_of(
    values: Iterable[D], ctx: Context | None = None, accumulator: SignalAccumulator | None = None
) -> Outcome[D]:
    """Multiply a non-empty iterable, rounding after each product.

    Raises:
        ValueError: If values is empty
    """
    return _fold("product", _mul, values, ctx, accumulator)
