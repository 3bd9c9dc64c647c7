"""Status flags produced by every decimal operation.

Flags are plain values. Each operation returns the flags it raised next to
its result (Outcome), and callers who want a running total across several
operations pass their own SignalAccumulator explicitly. Nothing here is
global or thread-local.
"""

from __future__ import annotations

from enum import Flag, auto
from typing import TYPE_CHECKING, Generic, NamedTuple, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = [
    "Signal",
    "Outcome",
    "SignalAccumulator",
    "NO_SIGNALS",
    "TRAP_PRECEDENCE",
    "parse_signal_names",
]

T = TypeVar("T")


class Signal(Flag):
    """Exceptional conditions an operation may report."""

    INEXACT = auto()
    ROUNDED = auto()
    OVERFLOW = auto()
    UNDERFLOW = auto()
    CLAMPED = auto()
    DIVISION_BY_ZERO = auto()
    INVALID_OPERATION = auto()
    SUBNORMAL = auto()

    def members(self) -> list[Signal]:
        """Individual signals contained in this set, in declaration order."""
        return [signal for signal in Signal if signal in self]

    def names(self) -> list[str]:
        return [signal.name for signal in self.members() if signal.name is not None]


NO_SIGNALS = Signal(0)

# Order in which trapped signals are reported when several fire at once
TRAP_PRECEDENCE = (
    Signal.INVALID_OPERATION,
    Signal.DIVISION_BY_ZERO,
    Signal.OVERFLOW,
    Signal.UNDERFLOW,
    Signal.SUBNORMAL,
    Signal.INEXACT,
    Signal.ROUNDED,
    Signal.CLAMPED,
)


def parse_signal_names(text: str) -> Signal:
    """Parse a comma-separated list of signal names.

    Names are case-insensitive and may use dashes or underscores,
    e.g. "overflow, division-by-zero".

    Raises:
        ValueError: If a name is not a known signal
    """
    flags = NO_SIGNALS
    for raw in text.split(","):
        name = raw.strip().upper().replace("-", "_")
        if not name:
            continue
        try:
            flags |= Signal[name]
        except KeyError as err:
            raise ValueError(f"Unknown signal name: '{raw.strip()}'") from err
    return flags


class Outcome(NamedTuple, Generic[T]):
    """Result of an operation together with the flags it raised."""

    value: T
    flags: Signal


class SignalAccumulator:
    """Caller-owned collector of flags across several operations.

    Pass an instance as ``flags=`` to any Decimal method; the method merges
    the flags of that single operation into it. The accumulator is an
    ordinary object: share it between threads only with your own locking.
    """

    __slots__ = ("_flags",)

    def __init__(self, initial: Signal = NO_SIGNALS) -> None:
        self._flags = initial

    @property
    def flags(self) -> Signal:
        """All flags recorded so far."""
        return self._flags

    def record(self, flags: Signal) -> None:
        """Merge the flags of one operation."""
        self._flags |= flags

    def clear(self) -> None:
        self._flags = NO_SIGNALS

    def __contains__(self, signal: Signal) -> bool:
        return signal in self._flags

    def __iter__(self) -> Iterator[Signal]:
        return iter(self._flags.members())

    def __bool__(self) -> bool:
        return bool(self._flags)

    def __repr__(self) -> str:
        return f"SignalAccumulator({'|'.join(self._flags.names()) or 'none'})"
