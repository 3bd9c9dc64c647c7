"""Rounding engine.

Turns an exact intermediate (sign, coefficient, scale) produced by the
arithmetic core into a representable result for a given width and Context,
and reports what was lost as Signal flags.

Rules applied, in order:

1. Zero coefficients only have their scale clamped into range.
2. Digits are dropped (rounded per ctx.rounding) until the coefficient fits
   ctx.coefficient_limit(bits) and the scale is at least EXP_MIN. Both
   constraints are satisfied in a single rounding step, never two.
3. Without an explicit precision, rounding that changes digits at or above
   10**max(ideal_scale, 0) is an overflow: integral digits never vanish.
   Trailing zeros there may be dropped into the scale.
4. A scale above EXP_MAX is folded back into the coefficient when it fits,
   otherwise the result overflows.
"""

from __future__ import annotations

from typing import NamedTuple

from fixdec.constants import EXP_MAX, EXP_MIN
from fixdec.context import Context, RoundingMode
from fixdec.signals import NO_SIGNALS, Signal
from fixdec.special import Special
from fixdec.uint import UInt, decimal_digits, pow10

__all__ = [
    "RawResult",
    "should_round_up",
    "divide_and_round",
    "round_coefficient",
    "overflow_result",
]

_OVERFLOW_FLAGS = Signal.OVERFLOW | Signal.INEXACT | Signal.ROUNDED


class RawResult(NamedTuple):
    """Rounded components, not yet bound to a decimal type."""

    negative: bool
    coefficient: UInt
    scale: int
    special: Special
    flags: Signal


def should_round_up(mode: RoundingMode, negative: bool, odd: bool, remainder: int, divisor: int) -> bool:
    """Decide whether the kept digits get incremented.

    Args:
        mode: Rounding mode
        negative: Sign of the value being rounded
        odd: Whether the last kept digit is odd
        remainder: Value of the discarded digits
        divisor: 10**(number of discarded digits)

    Examples:
        25 at scale -1 rounded to 0 places: remainder 5, divisor 10.
        HALF_EVEN keeps 2 (2 is even), HALF_UP gives 3, DOWN keeps 2.
    """
    if remainder == 0:
        return False
    if mode is RoundingMode.DOWN:
        return False
    if mode is RoundingMode.UP:
        return True
    if mode is RoundingMode.CEILING:
        return not negative
    if mode is RoundingMode.FLOOR:
        return negative

    twice = remainder * 2
    if twice != divisor:
        return twice > divisor
    # Exact tie
    if mode is RoundingMode.HALF_UP:
        return True
    if mode is RoundingMode.HALF_DOWN:
        return False
    return odd


def divide_and_round(coefficient: UInt, digits: int, mode: RoundingMode, negative: bool) -> tuple[UInt, bool]:
    """Drop the lowest `digits` decimal digits, rounding per mode.

    Returns:
        Tuple of (rounded coefficient, inexact) where inexact is True if the
        dropped digits were non-zero.
    """
    if digits == 0:
        return coefficient, False
    kept, dropped = coefficient.divmod_pow10(digits)
    if should_round_up(mode, negative, kept.is_odd(), dropped.value, pow10(digits)):
        kept = kept + 1
    return kept, not dropped.is_zero()


def overflow_result(negative: bool, ctx: Context, bits: int, scale: int, flags: Signal = NO_SIGNALS) -> RawResult:
    """Signed Infinity, or the largest finite value when rounding toward zero."""
    flags |= _OVERFLOW_FLAGS
    if ctx.rounding.rounds_toward_zero(negative):
        limit = UInt(ctx.coefficient_limit(bits), bits)
        return RawResult(negative, limit, min(scale, EXP_MAX), Special.FINITE, flags)
    return RawResult(negative, UInt.zero(bits), 0, Special.INFINITY, flags)


def _changes_integral_digits(
    coefficient: UInt,
    scale: int,
    ceiling: int,
    rounded: UInt,
    new_scale: int,
    mode: RoundingMode,
    negative: bool,
) -> bool:
    """True when rounding to new_scale gives a different value than rounding to ceiling.

    Dropping trailing zeros above the ceiling keeps every integral digit.
    """
    shift = ceiling - scale
    if shift > 0:
        at_ceiling = divide_and_round(coefficient, shift, mode, negative)[0].value
    else:
        at_ceiling = coefficient.value * pow10(-shift)
    return at_ceiling != rounded.value * pow10(new_scale - ceiling)


def round_coefficient(
    negative: bool,
    coefficient: UInt,
    scale: int,
    ctx: Context,
    bits: int,
    *,
    ideal_scale: int | None = None,
) -> RawResult:
    """Round an exact intermediate to a representable value.

    Args:
        negative: Sign of the exact value
        coefficient: Exact coefficient, in a temporary of any width
        scale: Exact scale
        ctx: Precision, rounding mode (traps are not applied here)
        bits: Coefficient width of the target type
        ideal_scale: Scale the operation would ideally produce; when ctx has
            no precision, digits above 10**max(ideal_scale, 0) must survive
            rounding or the result overflows.
            None lets the scale rise freely (conversions).

    Returns:
        RawResult with a coefficient of exactly `bits` width.
    """
    if coefficient.is_zero():
        clamped = min(max(scale, EXP_MIN), EXP_MAX)
        flags = Signal.CLAMPED if clamped != scale else NO_SIGNALS
        return RawResult(negative, UInt.zero(bits), clamped, Special.FINITE, flags)

    flags = NO_SIGNALS
    limit = ctx.coefficient_limit(bits)
    floor_drop = max(0, EXP_MIN - scale)

    drop = max(floor_drop, coefficient.digits_count() - decimal_digits(limit))
    rounded, inexact = divide_and_round(coefficient, drop, ctx.rounding, negative)
    while rounded > limit:
        drop += 1
        rounded, inexact = divide_and_round(coefficient, drop, ctx.rounding, negative)

    if drop > 0:
        flags |= Signal.ROUNDED
        if inexact:
            flags |= Signal.INEXACT
    if floor_drop > 0 and drop == floor_drop:
        flags |= Signal.SUBNORMAL | Signal.CLAMPED
        if inexact:
            flags |= Signal.UNDERFLOW

    new_scale = scale + drop
    if drop > 0 and ideal_scale is not None and not ctx.rescales_freely:
        ceiling = max(ideal_scale, 0)
        if new_scale > ceiling and _changes_integral_digits(
            coefficient, scale, ceiling, rounded, new_scale, ctx.rounding, negative
        ):
            return overflow_result(negative, ctx, bits, ceiling, flags)

    if new_scale > EXP_MAX:
        fold = new_scale - EXP_MAX
        if drop == 0 and rounded.value * pow10(fold) <= limit:
            rounded = rounded.widen(rounded.bits + bits).mul_pow10(fold)
            return RawResult(negative, rounded.narrow(bits), EXP_MAX, Special.FINITE, flags | Signal.CLAMPED)
        return overflow_result(negative, ctx, bits, EXP_MAX, flags)

    return RawResult(negative, rounded.narrow(bits), new_scale, Special.FINITE, flags)
