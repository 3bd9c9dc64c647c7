"""Text rendering of decimal values.

Canonical form round-trips through the parser exactly (same coefficient,
scale, sign and special kind):

- scale <= 0 and adjusted exponent >= -6: plain notation ("123.450", "-0.000001")
- otherwise scientific ("1.2345e-7", "1.00e5", "0e3")

where adjusted = scale + digits(coefficient) - 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fixdec.constants import SCIENTIFIC_THRESHOLD
from fixdec.special import Special

if TYPE_CHECKING:
    from fixdec.value import Decimal

__all__ = [
    "to_canonical_string",
    "to_scientific_notation",
    "to_engineering_notation",
]


def _special_token(value: Decimal) -> str | None:
    if value.special is Special.NAN:
        return "NaN" + (str(value.coefficient) if value.coefficient else "")
    if value.special is Special.SNAN:
        return "sNaN" + (str(value.coefficient) if value.coefficient else "")
    if value.special is Special.INFINITY:
        return "-Inf" if value.negative else "Inf"
    return None


def _sign(value: Decimal) -> str:
    return "-" if value.negative else ""


def _mantissa(digits: str, integer_length: int) -> str:
    if len(digits) <= integer_length:
        return digits + "0" * (integer_length - len(digits))
    return digits[:integer_length] + "." + digits[integer_length:]


def to_canonical_string(value: Decimal) -> str:
    """Shortest round-tripping text form; see module docstring."""
    token = _special_token(value)
    if token is not None:
        return token

    digits = str(value.coefficient)
    scale = value.scale
    adjusted = scale + len(digits) - 1

    if scale <= 0 and adjusted >= -SCIENTIFIC_THRESHOLD:
        if scale == 0:
            return _sign(value) + digits
        point = len(digits) + scale
        if point > 0:
            return _sign(value) + digits[:point] + "." + digits[point:]
        return _sign(value) + "0." + "0" * -point + digits

    return f"{_sign(value)}{_mantissa(digits, 1)}e{adjusted}"


def to_scientific_notation(value: Decimal) -> str:
    """One digit before the point, e.g. "-1.2345678e7"; zero renders as "0e{scale}"."""
    token = _special_token(value)
    if token is not None:
        return token
    if value.is_zero():
        return f"{_sign(value)}0e{value.scale}"
    digits = str(value.coefficient)
    adjusted = value.scale + len(digits) - 1
    return f"{_sign(value)}{_mantissa(digits, 1)}e{adjusted}"


def to_engineering_notation(value: Decimal) -> str:
    """Exponent a multiple of three, e.g. "-12.345678e6".

    When the coefficient has fewer digits than the integer part needs, zeros
    are appended ("1e4" renders as "10e3").
    """
    token = _special_token(value)
    if token is not None:
        return token
    if value.is_zero():
        exponent = value.scale - value.scale % 3
        return f"{_sign(value)}0e{exponent}"
    digits = str(value.coefficient)
    adjusted = value.scale + len(digits) - 1
    exponent = adjusted - adjusted % 3
    return f"{_sign(value)}{_mantissa(digits, adjusted - exponent + 1)}e{exponent}"
