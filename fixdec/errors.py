"""fixdec error classes.

Arithmetic conditions are reported as Signal flags and only become
exceptions when a Context traps them (the *Trap classes below). Parse and
native-conversion failures always raise.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from fixdec.signals import Signal

if TYPE_CHECKING:
    from fixdec.value import Decimal

__all__ = [
    "DecimalError",
    "RepresentationError",
    "ParseErrorKind",
    "ParseError",
    "ConversionErrorKind",
    "ConversionError",
    "SignalTrap",
    "InvalidOperationTrap",
    "DivisionByZeroTrap",
    "OverflowTrap",
    "UnderflowTrap",
    "SubnormalTrap",
    "InexactTrap",
    "RoundedTrap",
    "ClampedTrap",
    "trap_for",
]


class DecimalError(ArithmeticError):
    """Base error for fixdec operations."""

    pass


class RepresentationError(DecimalError, ValueError):
    """A value was constructed directly with parts its type cannot hold.

    This is a programming error: validated constructors (parse, from_int,
    arithmetic) never produce it.
    """

    pass


class ParseErrorKind(str, Enum):
    """Why a decimal literal was rejected."""

    EMPTY = "empty"
    INVALID_DIGIT = "invalid_digit"
    MALFORMED_EXPONENT = "malformed_exponent"
    EXPONENT_OVERFLOW = "exponent_overflow"
    COEFFICIENT_OVERFLOW = "coefficient_overflow"
    SIGNED = "signed"


_PARSE_MESSAGES = {
    ParseErrorKind.EMPTY: "cannot parse decimal from empty string",
    ParseErrorKind.INVALID_DIGIT: "invalid digit found in string",
    ParseErrorKind.MALFORMED_EXPONENT: "malformed exponent in string",
    ParseErrorKind.EXPONENT_OVERFLOW: "exponent is out of range",
    ParseErrorKind.COEFFICIENT_OVERFLOW: "number too large to fit in target type",
    ParseErrorKind.SIGNED: "unsigned decimal cannot be negative",
}


class ParseError(DecimalError, ValueError):
    """Text could not be parsed as a decimal of the requested type."""

    def __init__(self, kind: ParseErrorKind, text: str, position: int | None = None) -> None:
        self.kind = kind
        self.text = text
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"{_PARSE_MESSAGES[kind]}{where}: {text!r}")


class ConversionErrorKind(str, Enum):
    """Why a native conversion was refused."""

    LOSS_OF_PRECISION = "loss_of_precision"
    OUT_OF_RANGE = "out_of_range"


class ConversionError(DecimalError, ValueError):
    """A value cannot be converted to or from a native type without loss."""

    def __init__(self, kind: ConversionErrorKind, message: str) -> None:
        self.kind = kind
        super().__init__(message)


class SignalTrap(DecimalError):
    """A signal listed in Context.traps was raised.

    Attributes:
        signal: The trapped signal that was reported
        flags: Every flag the operation raised
        operation: Name of the operation
        result: The value the operation would have returned untrapped
    """

    signal: Signal = Signal(0)

    def __init__(self, operation: str, flags: Signal, result: Decimal | Any) -> None:
        self.operation = operation
        self.flags = flags
        self.result = result
        names = "|".join(flags.names())
        super().__init__(f"{operation}: {self.signal.name} trapped (flags: {names})")


class InvalidOperationTrap(SignalTrap):
    """Trapped: operation has no meaningful result (NaN produced)."""

    signal = Signal.INVALID_OPERATION


class DivisionByZeroTrap(SignalTrap, ZeroDivisionError):
    """Trapped: finite non-zero dividend divided by zero."""

    signal = Signal.DIVISION_BY_ZERO


class OverflowTrap(SignalTrap, OverflowError):
    """Trapped: result too large for the type."""

    signal = Signal.OVERFLOW


class UnderflowTrap(SignalTrap):
    """Trapped: result too small and inexact."""

    signal = Signal.UNDERFLOW


class SubnormalTrap(SignalTrap):
    """Trapped: scale had to be raised to the type's minimum."""

    signal = Signal.SUBNORMAL


class InexactTrap(SignalTrap):
    """Trapped: non-zero digits were discarded."""

    signal = Signal.INEXACT


class RoundedTrap(SignalTrap):
    """Trapped: digits were discarded (possibly zeros)."""

    signal = Signal.ROUNDED


class ClampedTrap(SignalTrap):
    """Trapped: the scale was altered to fit the representable range."""

    signal = Signal.CLAMPED


_TRAPS: dict[Signal, type[SignalTrap]] = {
    cls.signal: cls
    for cls in (
        InvalidOperationTrap,
        DivisionByZeroTrap,
        OverflowTrap,
        UnderflowTrap,
        SubnormalTrap,
        InexactTrap,
        RoundedTrap,
        ClampedTrap,
    )
}


def trap_for(signal: Signal) -> type[SignalTrap]:
    """Exception class raised when the given single signal is trapped."""
    return _TRAPS[signal]
