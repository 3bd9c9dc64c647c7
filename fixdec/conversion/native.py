"""Conversions between decimals and Python int / float.

Integer conversions are exact or fail with ConversionError. Float
conversions round per the context and report Inexact instead of failing.
"""

from __future__ import annotations

import math
import sys
from fractions import Fraction
from typing import TYPE_CHECKING, TypeVar

from fixdec.context import Context, RoundingMode
from fixdec.errors import ConversionError, ConversionErrorKind
from fixdec.math.rounding import round_coefficient
from fixdec.signals import NO_SIGNALS, Outcome, Signal
from fixdec.special import Special
from fixdec.uint import UInt

if TYPE_CHECKING:
    from fixdec.value import Decimal

__all__ = ["from_int", "to_int", "from_float", "to_float"]

D = TypeVar("D", bound="Decimal")

# Adjusted exponents beyond these are outside the float range
# regardless of the coefficient
_FLOAT_ADJUSTED_MAX = sys.float_info.max_10_exp + 1
_FLOAT_ADJUSTED_MIN = -400

_NEAREST_MODES = (RoundingMode.HALF_EVEN, RoundingMode.HALF_UP, RoundingMode.HALF_DOWN)


def _out_of_range(message: str) -> ConversionError:
    return ConversionError(ConversionErrorKind.OUT_OF_RANGE, message)


def from_int(cls: type[D], value: int) -> D:
    """Exact conversion of an integer at scale 0.

    Raises:
        ConversionError: OUT_OF_RANGE if the magnitude exceeds the width, or
            the value is negative and the type unsigned
    """
    if not isinstance(value, int):
        raise TypeError(f"from_int requires int, got {type(value).__name__}")
    value = int(value)
    if value < 0 and not cls.SIGNED:
        raise _out_of_range(f"{cls.__name__} cannot hold negative value {value}")
    if abs(value).bit_length() > cls.BITS:
        raise _out_of_range(f"{value} does not fit the {cls.BITS}-bit coefficient of {cls.__name__}")
    return cls._finite(value < 0, abs(value), 0)


def to_int(value: Decimal, bits: int | None = None, signed: bool = True) -> int:
    """Exact conversion to int, optionally range-checked against a native width.

    Args:
        value: Decimal to convert
        bits: Width of the target integer type, or None for unbounded
        signed: Whether the target integer type is signed

    Raises:
        ConversionError: LOSS_OF_PRECISION if there is a non-zero fractional
            part, OUT_OF_RANGE if the value is special or does not fit
    """
    if not value.is_finite():
        raise _out_of_range(f"cannot convert {value} to int")

    if value.scale >= 0:
        if bits is not None and not value.is_zero() and value.adjusted() >= bits:
            raise _out_of_range(f"{value} does not fit a {bits}-bit integer")
        result = value.coefficient * 10**value.scale
    else:
        result, fraction = divmod(value.coefficient, 10**-value.scale)
        if fraction:
            raise ConversionError(
                ConversionErrorKind.LOSS_OF_PRECISION, f"{value} has a non-zero fractional part"
            )
    if value.negative:
        result = -result

    if bits is not None:
        low, high = (-(1 << (bits - 1)), (1 << (bits - 1)) - 1) if signed else (0, (1 << bits) - 1)
        if not low <= result <= high:
            kind = "i" if signed else "u"
            raise _out_of_range(f"{value} does not fit {kind}{bits}")
    return result


def from_float(cls: type[D], value: float, ctx: Context) -> Outcome[D]:
    """Convert a binary float through its exact decimal expansion.

    Every finite float is a dyadic rational n / 2**k, which equals
    n * 5**k at scale -k. That exact value is then rounded to the type.

    Raises:
        ConversionError: OUT_OF_RANGE for a negative value of an unsigned type
    """
    if not isinstance(value, float):
        raise TypeError(f"from_float requires float, got {type(value).__name__}")
    if math.isnan(value):
        return Outcome(cls._nan(), NO_SIGNALS)

    negative = math.copysign(1.0, value) < 0
    if negative and not cls.SIGNED:
        if value != 0.0:
            raise _out_of_range(f"{cls.__name__} cannot hold negative value {value!r}")
        negative = False
    if math.isinf(value):
        return Outcome(cls._infinity(negative), NO_SIGNALS)

    numerator, denominator = abs(value).as_integer_ratio()
    k = denominator.bit_length() - 1
    coefficient = numerator * 5**k
    wide = UInt(coefficient, max(cls.BITS, coefficient.bit_length()))
    return cls._result(round_coefficient(negative, wide, -k, ctx, cls.BITS))


def _directed_away(mode: RoundingMode, negative: bool) -> bool:
    if mode is RoundingMode.UP:
        return True
    if mode is RoundingMode.CEILING:
        return not negative
    if mode is RoundingMode.FLOOR:
        return negative
    return False


def to_float(value: Decimal, ctx: Context) -> Outcome[float]:
    """Convert to the float nearest under ctx.rounding.

    Results that are not exactly representable carry Inexact and Rounded;
    values beyond the float range add Overflow (infinite result) and
    non-zero values that vanish add Underflow.
    """
    if value.is_nan():
        flags = Signal.INVALID_OPERATION if value.special is Special.SNAN else NO_SIGNALS
        return Outcome(math.nan, flags)
    negative = value.negative
    if value.is_infinite():
        return Outcome(-math.inf if negative else math.inf, NO_SIGNALS)
    if value.is_zero():
        return Outcome(-0.0 if negative else 0.0, NO_SIGNALS)

    adjusted = value.adjusted()
    exact: Fraction | None = None
    if adjusted > _FLOAT_ADJUSTED_MAX:
        nearest, lower, upper = math.inf, sys.float_info.max, math.inf
    elif adjusted < _FLOAT_ADJUSTED_MIN:
        nearest, lower, upper = 0.0, 0.0, math.nextafter(0.0, 1.0)
    else:
        if value.scale >= 0:
            exact = Fraction(value.coefficient * 10**value.scale)
        else:
            exact = Fraction(value.coefficient, 10**-value.scale)
        try:
            nearest = float(exact)
        except OverflowError:
            nearest = math.inf
        if math.isinf(nearest):
            lower, upper = sys.float_info.max, math.inf
        else:
            candidate = Fraction(nearest)
            if candidate == exact:
                return Outcome(-nearest if negative else nearest, NO_SIGNALS)
            if candidate < exact:
                lower, upper = nearest, math.nextafter(nearest, math.inf)
            else:
                lower, upper = math.nextafter(nearest, 0.0), nearest

    mode = ctx.rounding
    if mode not in _NEAREST_MODES:
        result = upper if _directed_away(mode, negative) else lower
    elif exact is None or math.isinf(upper):
        result = nearest
    elif exact * 2 == Fraction(lower) + Fraction(upper):
        if mode is RoundingMode.HALF_UP:
            result = upper
        elif mode is RoundingMode.HALF_DOWN:
            result = lower
        else:
            result = nearest
    else:
        result = nearest

    flags = Signal.INEXACT | Signal.ROUNDED
    if math.isinf(result):
        flags |= Signal.OVERFLOW
    elif result == 0.0:
        flags |= Signal.UNDERFLOW
    return Outcome(-result if negative else result, flags)
