"""Decimal literal parser.

Grammar (case-insensitive for letters):

    literal  := [sign] (number | "inf" | "infinity" | "nan" [digits] | "snan" [digits])
    number   := digits ["." [digits]] [exponent] | "." digits [exponent]
    exponent := ("e" | "E") [sign] digits

The scanner is a single left-to-right pass over the text; nothing is
delegated to int() or float() until the pieces have been validated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import structlog

from fixdec.constants import EXP_MAX, EXP_MIN, MAX_EXPONENT_LITERAL_DIGITS, max_coefficient
from fixdec.errors import ParseError, ParseErrorKind
from fixdec.math.rounding import round_coefficient
from fixdec.signals import NO_SIGNALS, Outcome, Signal
from fixdec.special import Special
from fixdec.uint import UInt, decimal_digits

if TYPE_CHECKING:
    from fixdec.context import Context
    from fixdec.value import Decimal

__all__ = ["parse_decimal"]

logger = structlog.get_logger()

D = TypeVar("D", bound="Decimal")

_DIGITS = frozenset("0123456789")
_INFINITY_WORDS = ("inf", "infinity")


def _fail(kind: ParseErrorKind, text: str, position: int | None = None) -> ParseError:
    logger.debug("parse_failed", kind=kind.value, text=text[:64], position=position)
    return ParseError(kind, text, position)


def _scan_digits(text: str, pos: int) -> int:
    end = len(text)
    while pos < end and text[pos] in _DIGITS:
        pos += 1
    return pos


def _parse_nan(cls: type[D], text: str, body: str, offset: int, negative: bool) -> D:
    signaling = body[0] in "sS"
    start = 4 if signaling else 3
    payload_text = body[start:]
    for index, char in enumerate(payload_text):
        if char not in _DIGITS:
            raise _fail(ParseErrorKind.INVALID_DIGIT, text, offset + start + index)
    payload = 0
    if payload_text:
        if len(payload_text.lstrip("0")) > decimal_digits(max_coefficient(cls.BITS)):
            raise _fail(ParseErrorKind.COEFFICIENT_OVERFLOW, text)
        payload = int(payload_text)
        if payload > max_coefficient(cls.BITS):
            raise _fail(ParseErrorKind.COEFFICIENT_OVERFLOW, text)
    return cls._nan(payload=payload, negative=negative, signaling=signaling)


def parse_decimal(cls: type[D], text: str, ctx: Context, *, allow_rounding: bool = False) -> Outcome[D]:
    """Parse a decimal literal into a value of `cls`.

    Args:
        cls: Target decimal type
        text: Literal such as "-1.25e3", ".5", "Inf" or "NaN12"
        ctx: Context used when rounding is allowed
        allow_rounding: Round coefficients longer than the width to the
            context (setting Rounded/Inexact) instead of rejecting them

    Returns:
        Outcome with the parsed value and the flags rounding raised (none
        when allow_rounding is False).

    Raises:
        ParseError: With kind EMPTY, INVALID_DIGIT, MALFORMED_EXPONENT,
            EXPONENT_OVERFLOW, COEFFICIENT_OVERFLOW or SIGNED

    Examples:
        >>> parse_decimal(D64, "124.000", D64.CONTEXT).value.scale
        -3
    """
    if not isinstance(text, str):
        raise TypeError(f"Decimal literal must be str, got {type(text).__name__}")
    if not text:
        raise _fail(ParseErrorKind.EMPTY, text)

    pos = 0
    negative = False
    if text[0] in "+-":
        negative = text[0] == "-"
        pos = 1
    if pos == len(text):
        raise _fail(ParseErrorKind.EMPTY, text)
    if negative and not cls.SIGNED:
        raise _fail(ParseErrorKind.SIGNED, text, 0)

    body = text[pos:]
    lowered = body.lower()
    if lowered in _INFINITY_WORDS:
        return Outcome(cls._infinity(negative), NO_SIGNALS)
    if lowered.startswith(("nan", "snan")):
        return Outcome(_parse_nan(cls, text, body, pos, negative), NO_SIGNALS)

    int_end = _scan_digits(text, pos)
    integer_digits = text[pos:int_end]
    pos = int_end
    fraction_digits = ""
    if pos < len(text) and text[pos] == ".":
        frac_end = _scan_digits(text, pos + 1)
        fraction_digits = text[pos + 1 : frac_end]
        pos = frac_end
    if not integer_digits and not fraction_digits:
        raise _fail(ParseErrorKind.INVALID_DIGIT, text, pos)

    exponent = 0
    if pos < len(text) and text[pos] in "eE":
        pos += 1
        exponent_negative = False
        if pos < len(text) and text[pos] in "+-":
            exponent_negative = text[pos] == "-"
            pos += 1
        exp_end = _scan_digits(text, pos)
        exponent_digits = text[pos:exp_end]
        if not exponent_digits:
            raise _fail(ParseErrorKind.MALFORMED_EXPONENT, text, pos)
        if len(exponent_digits.lstrip("0")) > MAX_EXPONENT_LITERAL_DIGITS:
            raise _fail(ParseErrorKind.EXPONENT_OVERFLOW, text, pos)
        exponent = -int(exponent_digits) if exponent_negative else int(exponent_digits)
        pos = exp_end

    if pos != len(text):
        raise _fail(ParseErrorKind.INVALID_DIGIT, text, pos)

    bits = cls.BITS
    significant = (integer_digits + fraction_digits).lstrip("0") or "0"
    scale = exponent - len(fraction_digits)
    width_digits = decimal_digits(max_coefficient(bits))

    if len(significant) > width_digits + 1:
        if not allow_rounding:
            raise _fail(ParseErrorKind.COEFFICIENT_OVERFLOW, text)
        # Keep one guard digit beyond the width plus a sticky digit for the rest
        kept, rest = significant[: width_digits + 1], significant[width_digits + 1 :]
        coefficient = int(kept) * 10 + (1 if rest.strip("0") else 0)
        scale += len(rest) - 1
    else:
        coefficient = int(significant)

    if not allow_rounding:
        if coefficient > max_coefficient(bits):
            raise _fail(ParseErrorKind.COEFFICIENT_OVERFLOW, text)
        if not EXP_MIN <= scale <= EXP_MAX:
            raise _fail(ParseErrorKind.EXPONENT_OVERFLOW, text)
        return Outcome(cls._finite(negative, coefficient, scale), NO_SIGNALS)

    wide = UInt(coefficient, max(bits, coefficient.bit_length()))
    raw = round_coefficient(negative, wide, scale, ctx, bits)
    if Signal.OVERFLOW in raw.flags:
        raise _fail(ParseErrorKind.EXPONENT_OVERFLOW, text)
    return cls._result(raw)
