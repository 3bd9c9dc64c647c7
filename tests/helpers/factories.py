"""Factory functions for creating test values.

Usage:
    from tests.helpers import make_decimal, parts

    value = make_decimal("1.25", bits=128)
    assert parts(value) == (False, 125, -2)
"""

from fixdec.context import Context, RoundingMode
from fixdec.signals import Signal
from fixdec.value import Decimal, decimal_type


def make_decimal(text: str | int = "0", bits: int = 64, signed: bool = True) -> Decimal:
    """Create a decimal of the given width from a literal or int.

    Args:
        text: Decimal literal or integer (default: 0)
        bits: Coefficient width (default: 64)
        signed: Signed or unsigned type (default: signed)
    """
    return decimal_type(bits, signed)(text)


def parts(value: Decimal) -> tuple[bool, int, int]:
    """(negative, coefficient, scale) of a finite value."""
    return value.negative, value.coefficient, value.scale


def make_context(
    precision: int | None = None,
    rounding: RoundingMode | str = RoundingMode.HALF_EVEN,
    traps: Signal = Signal(0),
) -> Context:
    """Create a context, accepting rounding mode names as strings."""
    if isinstance(rounding, str):
        rounding = RoundingMode.from_name(rounding)
    return Context(precision=precision, rounding=rounding, traps=traps)
