"""Numeric and total ordering of decimal values."""

from __future__ import annotations

import functools
import sys
from typing import TYPE_CHECKING, TypeVar

from fixdec.context import Context
from fixdec.signals import NO_SIGNALS, Outcome, Signal
from fixdec.special import Special, propagate_nan

if TYPE_CHECKING:
    from fixdec.signals import SignalAccumulator
    from fixdec.value import Decimal

__all__ = [
    "compare_numeric",
    "compare",
    "compare_total",
    "total_order_key",
    "maximum",
    "minimum",
    "clamp",
    "numeric_hash",
]

D = TypeVar("D", bound="Decimal")

# Rank within one sign for the total order
_TOTAL_RANK = {
    Special.FINITE: 0,
    Special.INFINITY: 1,
    Special.SNAN: 2,
    Special.NAN: 3,
}


def _cmp(x: int, y: int) -> int:
    return (x > y) - (x < y)


def _compare_magnitude(a: Decimal, b: Decimal) -> int:
    # Finite operands only
    if a.is_zero():
        return 0 if b.is_zero() else -1
    if b.is_zero():
        return 1
    adjusted = _cmp(a.adjusted(), b.adjusted())
    if adjusted:
        return adjusted
    # Same leading position, so the alignment shift is at most the digit count
    if a.scale >= b.scale:
        return _cmp(a.coefficient * 10 ** (a.scale - b.scale), b.coefficient)
    return _cmp(a.coefficient, b.coefficient * 10 ** (b.scale - a.scale))


def _signum(a: Decimal) -> int:
    if a.is_zero():
        return 0
    return -1 if a.negative else 1


def compare_numeric(a: Decimal, b: Decimal) -> int | None:
    """Compare by numeric value: -1, 0 or 1, or None if either is NaN.

    Works across widths and signedness; -0 equals +0 and trailing zeros do
    not matter (1.0 == 1.00).
    """
    if a.is_nan() or b.is_nan():
        return None
    if a.is_infinite() or b.is_infinite():
        rank_a = (-1 if a.negative else 1) if a.is_infinite() else 0
        rank_b = (-1 if b.negative else 1) if b.is_infinite() else 0
        if rank_a != rank_b:
            return _cmp(rank_a, rank_b)
        if rank_a:
            return 0
    sign_a, sign_b = _signum(a), _signum(b)
    if sign_a != sign_b:
        return _cmp(sign_a, sign_b)
    if sign_a == 0:
        return 0
    magnitude = _compare_magnitude(a, b)
    return -magnitude if sign_a < 0 else magnitude


def compare(
    a: Decimal, b: Decimal, ctx: Context | None = None, accumulator: SignalAccumulator | None = None
) -> Outcome[Decimal]:
    """Compare as a decimal result: -1, 0 or 1.

    The result has the signed type of a's width, so unsigned operands can
    still report -1. Any NaN operand makes the comparison unordered: the
    result is NaN with InvalidOperation.
    """
    cls = type(a)._signed_sibling()
    ctx = type(a).CONTEXT if ctx is None else ctx
    order = compare_numeric(a, b)
    if order is None:
        outcome = Outcome(cls._nan(), Signal.INVALID_OPERATION)
    else:
        outcome = Outcome(cls._finite(order < 0, abs(order), 0), NO_SIGNALS)
    ctx.enforce("compare", outcome.value, outcome.flags, accumulator)
    return outcome


def compare_total(a: Decimal, b: Decimal) -> int:
    """Total order over every value, including NaNs and equal-value scales.

    -NaN < -sNaN < -Inf < negative finite < -0 < +0 < positive finite
    < Inf < sNaN < NaN. NaN payloads are ordered numerically. Numerically
    equal values order by scale: 1.00 < 1.0 < 1, and the reverse for
    negatives.
    """
    if a.negative != b.negative:
        return -1 if a.negative else 1
    direction = -1 if a.negative else 1

    rank = _cmp(_TOTAL_RANK[a.special], _TOTAL_RANK[b.special])
    if rank:
        return direction * rank
    if a.is_nan():
        return direction * _cmp(a.coefficient, b.coefficient)
    if a.is_infinite():
        return 0

    magnitude = _compare_magnitude(a, b)
    if magnitude:
        return direction * magnitude
    return direction * _cmp(a.scale, b.scale)


total_order_key = functools.cmp_to_key(compare_total)


def _extreme(
    operation: str,
    a: D,
    b: D,
    prefer_a: bool,
    ctx: Context | None,
    accumulator: SignalAccumulator | None,
) -> Outcome[D]:
    ctx = type(a).CONTEXT if ctx is None else ctx
    if a.is_snan() or b.is_snan():
        outcome: Outcome[D] = propagate_nan(a, b)  # type: ignore[assignment]
    elif a.is_nan() and b.is_nan():
        outcome = Outcome(a, NO_SIGNALS)
    elif a.is_nan():
        outcome = Outcome(b, NO_SIGNALS)
    elif b.is_nan():
        outcome = Outcome(a, NO_SIGNALS)
    else:
        order = compare_numeric(a, b)
        if order == 0:
            order = compare_total(a, b)
        keep_a = order > 0 if prefer_a else order < 0
        outcome = Outcome(a if keep_a else b, NO_SIGNALS)
    ctx.enforce(operation, outcome.value, outcome.flags, accumulator)
    return outcome


def maximum(
    a: D, b: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None
) -> Outcome[D]:
    """Larger of two values; a quiet NaN operand is ignored.

    Numerically equal operands are separated by the total order, so
    max(-0, 0) is 0 and max(1.0, 1) is 1.
    """
    return _extreme("max", a, b, True, ctx, accumulator)


def minimum(
    a: D, b: D, ctx: Context | None = None, accumulator: SignalAccumulator | None = None
) -> Outcome[D]:
    """Smaller of two values; a quiet NaN operand is ignored."""
    return _extreme("min", a, b, False, ctx, accumulator)


def clamp(value: D, low: D, high: D) -> D:
    """Restrict value to [low, high]. NaN passes through unchanged.

    Raises:
        ValueError: If a bound is NaN or low > high
    """
    if low.is_nan() or high.is_nan():
        raise ValueError("clamp bounds must not be NaN")
    if compare_numeric(low, high) > 0:  # type: ignore[operator]
        raise ValueError(f"clamp requires low <= high, got {low} > {high}")
    if value.is_nan():
        return value
    if compare_numeric(value, low) < 0:  # type: ignore[operator]
        return low
    if compare_numeric(value, high) > 0:  # type: ignore[operator]
        return high
    return value


_HASH_MODULUS = sys.hash_info.modulus
_HASH_INV10 = pow(10, _HASH_MODULUS - 2, _HASH_MODULUS)


def numeric_hash(a: Decimal) -> int:
    """Hash consistent with int, Fraction and the standard library Decimal.

    Equal values hash equal across widths and scales (hash(D64("1.0")) ==
    hash(1)). Quiet NaN hashes by identity.

    Raises:
        TypeError: For signaling NaN, which is not hashable
    """
    if a.special is Special.SNAN:
        raise TypeError("Cannot hash a signaling NaN value")
    if a.special is Special.NAN:
        return object.__hash__(a)
    if a.special is Special.INFINITY:
        return -sys.hash_info.inf if a.negative else sys.hash_info.inf
    if a.is_zero():
        return 0
    if a.scale >= 0:
        exponent_hash = pow(10, a.scale, _HASH_MODULUS)
    else:
        exponent_hash = pow(_HASH_INV10, -a.scale, _HASH_MODULUS)
    result = a.coefficient * exponent_hash % _HASH_MODULUS
    if a.negative:
        result = -result
    return -2 if result == -1 else result
