"""Scale manipulation: quantize, round to places, normalize."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from fixdec.constants import EXP_MAX, EXP_MIN
from fixdec.context import Context, RoundingMode
from fixdec.math.arithmetic import unsigned_guard
from fixdec.math.rounding import divide_and_round, round_coefficient
from fixdec.signals import NO_SIGNALS, Outcome, Signal
from fixdec.special import Special, invalid, propagate_nan
from fixdec.uint import UInt, decimal_digits

if TYPE_CHECKING:
    from fixdec.signals import SignalAccumulator
    from fixdec.value import Decimal

__all__ = ["quantize", "round_places", "normalize"]

D = TypeVar("D", bound="Decimal")


def _quantize(a: D, scale: int, ctx: Context) -> Outcome[D]:
    nan = propagate_nan(a)
    if nan is not None:
        return nan  # type: ignore[return-value]
    if a.is_infinite() or not EXP_MIN <= scale <= EXP_MAX:
        return invalid(a)  # type: ignore[return-value]

    cls = type(a)
    bits = cls.BITS
    limit = ctx.coefficient_limit(bits)

    if scale <= a.scale:
        shift = a.scale - scale
        if a.is_zero():
            return Outcome(cls._finite(a.negative, 0, scale), NO_SIGNALS)
        if a.digits_count() + shift > decimal_digits(limit):
            return invalid(a)  # type: ignore[return-value]
        coefficient = a.coefficient * 10**shift
        if coefficient > limit:
            return invalid(a)  # type: ignore[return-value]
        return Outcome(cls._finite(a.negative, coefficient, scale), NO_SIGNALS)

    kept, inexact = divide_and_round(a.digits, scale - a.scale, ctx.rounding, a.negative)
    if kept > limit:
        return invalid(a)  # type: ignore[return-value]
    flags = Signal.ROUNDED | (Signal.INEXACT if inexact else NO_SIGNALS)
    return Outcome(cls._finite(a.negative, kept.value, scale), flags)


def quantize(
    a: D, scale: int, ctx: Context | None = None, accumulator: SignalAccumulator | None = None
) -> Outcome[D]:
    """Rescale a to exactly `scale`, rounding per ctx.rounding.

    Lowering the scale appends zeros; raising it drops digits and sets
    Rounded (and Inexact if any dropped digit was non-zero). The result is
    InvalidOperation when the scale is out of range, the operand is
    infinite, or the rescaled coefficient does not fit.

    Examples:
        >>> quantize(D64("1.2345"), -2).value
        D64('1.23')
        >>> quantize(D64("7"), -3).value
        D64('7.000')
    """
    ctx = type(a).CONTEXT if ctx is None else ctx
    outcome = unsigned_guard(_quantize(a, scale, ctx))
    ctx.enforce("quantize", outcome.value, outcome.flags, accumulator)
    return outcome


def round_places(
    a: D,
    digits: int,
    rounding: RoundingMode | None = None,
    ctx: Context | None = None,
    accumulator: SignalAccumulator | None = None,
) -> Outcome[D]:
    """Round to `digits` fractional digits (negative digits round left of the point).

    Same as quantize(a, -digits) with the given rounding mode.
    """
    ctx = type(a).CONTEXT if ctx is None else ctx
    if rounding is not None:
        ctx = ctx.with_rounding(rounding)
    return quantize(a, -digits, ctx, accumulator)


def normalize(a: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None) -> Outcome[D]:
    """Round to the context, then strip trailing zeros from the coefficient.

    Zero normalizes to scale 0 keeping its sign. The scale never exceeds
    EXP_MAX; zeros that cannot be stripped stay in the coefficient.
    """
    cls = type(a)
    ctx = cls.CONTEXT if ctx is None else ctx

    nan = propagate_nan(a)
    if nan is not None:
        outcome: Outcome[D] = nan  # type: ignore[assignment]
    elif a.is_infinite():
        outcome = Outcome(a, NO_SIGNALS)
    else:
        raw = round_coefficient(a.negative, a.digits, a.scale, ctx, cls.BITS, ideal_scale=a.scale)
        if raw.special is not Special.FINITE:
            outcome = cls._result(raw)
        elif raw.coefficient.is_zero():
            outcome = Outcome(cls._finite(raw.negative, 0, 0), raw.flags)
        else:
            strip = min(raw.coefficient.trailing_zeros(), EXP_MAX - raw.scale)
            coefficient: UInt = raw.coefficient.divmod_pow10(strip)[0]
            outcome = Outcome(cls._finite(raw.negative, coefficient.value, raw.scale + strip), raw.flags)

    outcome = unsigned_guard(outcome)
    ctx.enforce("normalize", outcome.value, outcome.flags, accumulator)
    return outcome
