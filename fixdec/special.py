"""Special values and their propagation rules.

Every binary operation consults resolve_special() before touching
coefficients. Precedence is fixed:

1. signaling NaN (first operand first) -> quiet NaN + InvalidOperation
2. quiet NaN (first operand first) -> that NaN, no flags
3. Infinity involved -> looked up in _RULES for the operation
4. otherwise None: the caller takes the numeric path
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from fixdec.signals import NO_SIGNALS, Outcome, Signal

if TYPE_CHECKING:
    from fixdec.value import Decimal

__all__ = [
    "Special",
    "Category",
    "Operation",
    "propagate_nan",
    "resolve_special",
    "invalid",
]


class Special(str, Enum):
    """Tag distinguishing finite values from the special ones."""

    FINITE = "finite"
    INFINITY = "infinity"
    NAN = "nan"
    SNAN = "snan"


class Category(str, Enum):
    """Coarse classification returned by Decimal.classify()."""

    NAN = "nan"
    INFINITE = "infinite"
    ZERO = "zero"
    NORMAL = "normal"


class Operation(str, Enum):
    """Operations with an entry in the infinity rule table."""

    ADD = "add"
    MUL = "mul"
    DIV = "div"
    DIVIDE_INTEGER = "divide_integer"
    REM = "rem"


class _Rule(Enum):
    INVALID = "invalid"
    INFINITY_A = "infinity_a"
    INFINITY_B = "infinity_b"
    INFINITY_SAME_SIGN = "infinity_same_sign"
    INFINITY_XOR = "infinity_xor"
    INFINITY_XOR_NONZERO = "infinity_xor_nonzero"
    ZERO_XOR = "zero_xor"
    KEEP_A = "keep_a"


_INF = Special.INFINITY
_FIN = Special.FINITE

_RULES: dict[tuple[Operation, Special, Special], _Rule] = {
    (Operation.ADD, _INF, _INF): _Rule.INFINITY_SAME_SIGN,
    (Operation.ADD, _INF, _FIN): _Rule.INFINITY_A,
    (Operation.ADD, _FIN, _INF): _Rule.INFINITY_B,
    (Operation.MUL, _INF, _INF): _Rule.INFINITY_XOR,
    (Operation.MUL, _INF, _FIN): _Rule.INFINITY_XOR_NONZERO,
    (Operation.MUL, _FIN, _INF): _Rule.INFINITY_XOR_NONZERO,
    (Operation.DIV, _INF, _INF): _Rule.INVALID,
    (Operation.DIV, _INF, _FIN): _Rule.INFINITY_XOR,
    (Operation.DIV, _FIN, _INF): _Rule.ZERO_XOR,
    (Operation.DIVIDE_INTEGER, _INF, _INF): _Rule.INVALID,
    (Operation.DIVIDE_INTEGER, _INF, _FIN): _Rule.INFINITY_XOR,
    (Operation.DIVIDE_INTEGER, _FIN, _INF): _Rule.ZERO_XOR,
    (Operation.REM, _INF, _INF): _Rule.INVALID,
    (Operation.REM, _INF, _FIN): _Rule.INVALID,
    (Operation.REM, _FIN, _INF): _Rule.KEEP_A,
}


def invalid(like: Decimal) -> Outcome[Decimal]:
    """Quiet NaN of the operand's type with InvalidOperation."""
    return Outcome(type(like)._nan(), Signal.INVALID_OPERATION)


def propagate_nan(a: Decimal, b: Decimal | None = None) -> Outcome[Decimal] | None:
    """Return the NaN result if any operand is NaN, else None."""
    operands = (a,) if b is None else (a, b)
    for op in operands:
        if op.special is Special.SNAN:
            quiet = type(a)._nan(payload=op.coefficient, negative=op.negative)
            return Outcome(quiet, Signal.INVALID_OPERATION)
    for op in operands:
        if op.special is Special.NAN:
            result = op if type(op) is type(a) else type(a)._nan(op.coefficient, op.negative)
            return Outcome(result, NO_SIGNALS)
    return None


def resolve_special(operation: Operation, a: Decimal, b: Decimal) -> Outcome[Decimal] | None:
    """Result of a binary operation involving NaN or Infinity, else None."""
    nan = propagate_nan(a, b)
    if nan is not None:
        return nan
    if a.special is Special.FINITE and b.special is Special.FINITE:
        return None

    cls = type(a)
    rule = _RULES[(operation, a.special, b.special)]
    xor = a.negative != b.negative

    if rule is _Rule.INVALID:
        return invalid(a)
    if rule is _Rule.INFINITY_A:
        return Outcome(cls._infinity(a.negative), NO_SIGNALS)
    if rule is _Rule.INFINITY_B:
        return Outcome(cls._infinity(b.negative), NO_SIGNALS)
    if rule is _Rule.INFINITY_SAME_SIGN:
        if a.negative != b.negative:
            return invalid(a)
        return Outcome(cls._infinity(a.negative), NO_SIGNALS)
    if rule is _Rule.INFINITY_XOR:
        return Outcome(cls._infinity(xor), NO_SIGNALS)
    if rule is _Rule.INFINITY_XOR_NONZERO:
        finite = b if a.special is _INF else a
        if finite.is_zero():
            return invalid(a)
        return Outcome(cls._infinity(xor), NO_SIGNALS)
    if rule is _Rule.ZERO_XOR:
        return Outcome(cls._finite(xor, 0, 0), NO_SIGNALS)
    return Outcome(a, NO_SIGNALS)
