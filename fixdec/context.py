"""Arithmetic context: precision, rounding mode and traps.

A Context is a frozen value. It is passed explicitly to every operation (or
taken from the operand type's default) and is never mutated; the with_*
helpers return modified copies.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog

from fixdec.constants import max_coefficient
from fixdec.errors import trap_for
from fixdec.signals import NO_SIGNALS, TRAP_PRECEDENCE, Signal
from fixdec.uint import pow10

if TYPE_CHECKING:
    from fixdec.signals import SignalAccumulator

__all__ = ["RoundingMode", "Context"]

logger = structlog.get_logger()


class RoundingMode(str, Enum):
    """Strategies for discarding digits.

    - HALF_EVEN: round to nearest, ties to even last digit (banker's rounding)
    - HALF_UP: round to nearest, ties away from zero
    - HALF_DOWN: round to nearest, ties toward zero
    - UP: away from zero
    - DOWN: toward zero (truncation)
    - CEILING: toward +Infinity
    - FLOOR: toward -Infinity
    """

    HALF_EVEN = "half_even"
    HALF_UP = "half_up"
    HALF_DOWN = "half_down"
    UP = "up"
    DOWN = "down"
    CEILING = "ceiling"
    FLOOR = "floor"

    @classmethod
    def from_name(cls, name: str) -> RoundingMode:
        """Look up a mode by value or member name, case-insensitively.

        Raises:
            ValueError: If the name is unknown
        """
        key = name.strip().lower().replace("-", "_")
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(f"Unknown rounding mode: '{name}'")

    def rounds_toward_zero(self, negative: bool) -> bool:
        """True if this mode never increases the magnitude for the given sign."""
        if self is RoundingMode.DOWN:
            return True
        if self is RoundingMode.FLOOR:
            return not negative
        if self is RoundingMode.CEILING:
            return negative
        return False


@dataclass(frozen=True)
class Context:
    """Precision, rounding and trap policy for decimal operations.

    Attributes:
        precision: Maximum significant digits kept, or None to let the
            coefficient width be the only limit. Without an explicit
            precision, integral digits are never discarded: a result whose
            integer part does not fit the width overflows.
        rounding: How discarded digits are rounded.
        traps: Signals that abort the operation with a SignalTrap instead of
            returning the special-value result.
    """

    precision: int | None = None
    rounding: RoundingMode = RoundingMode.HALF_EVEN
    traps: Signal = NO_SIGNALS

    def __post_init__(self) -> None:
        if self.precision is not None and self.precision < 1:
            raise ValueError(f"Context precision must be positive, got {self.precision}")
        if not isinstance(self.rounding, RoundingMode):
            raise TypeError(f"Context rounding must be a RoundingMode, got {self.rounding!r}")

    @classmethod
    def strict(cls, precision: int | None = None, rounding: RoundingMode = RoundingMode.HALF_EVEN) -> Context:
        """Context trapping InvalidOperation, DivisionByZero and Overflow."""
        traps = Signal.INVALID_OPERATION | Signal.DIVISION_BY_ZERO | Signal.OVERFLOW
        return cls(precision=precision, rounding=rounding, traps=traps)

    def with_precision(self, precision: int | None) -> Context:
        return replace(self, precision=precision)

    def with_rounding(self, rounding: RoundingMode) -> Context:
        return replace(self, rounding=rounding)

    def with_traps(self, traps: Signal) -> Context:
        """Copy of this context that also traps the given signals."""
        return replace(self, traps=self.traps | traps)

    def without_traps(self, traps: Signal | None = None) -> Context:
        """Copy of this context with the given traps (default: all) removed."""
        if traps is None:
            return replace(self, traps=NO_SIGNALS)
        return replace(self, traps=self.traps & ~traps)

    @property
    def rescales_freely(self) -> bool:
        """True if rounding may push the scale above the ideal scale."""
        return self.precision is not None

    def coefficient_limit(self, bits: int) -> int:
        """Largest coefficient a result may carry at the given width."""
        width_max = max_coefficient(bits)
        if self.precision is None:
            return width_max
        return min(pow10(self.precision) - 1, width_max)

    def enforce(
        self,
        operation: str,
        value: Any,
        flags: Signal,
        accumulator: SignalAccumulator | None = None,
    ) -> Any:
        """Apply the trap policy to one operation's result.

        Records the flags into the accumulator (if given) and returns the
        value, or raises the SignalTrap subclass of the highest-precedence
        trapped signal.
        """
        if accumulator is not None:
            accumulator.record(flags)
        trapped = flags & self.traps
        if trapped:
            signal = next(s for s in TRAP_PRECEDENCE if s in trapped)
            logger.debug(
                "signal_trapped",
                operation=operation,
                signal=signal.name,
                flags=flags.names(),
            )
            raise trap_for(signal)(operation, flags, value)
        return value
