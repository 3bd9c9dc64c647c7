"""fixdec - fixed-width decimal arithmetic."""

from fixdec.config import DEFAULT_CONTEXT, EngineSettings
from fixdec.context import Context, RoundingMode
from fixdec.errors import (
    ConversionError,
    ConversionErrorKind,
    DecimalError,
    DivisionByZeroTrap,
    InexactTrap,
    InvalidOperationTrap,
    OverflowTrap,
    ParseError,
    ParseErrorKind,
    RepresentationError,
    SignalTrap,
)
from fixdec.models import ColumnCoercionError, ColumnSpec, RawLayout
from fixdec.signals import Outcome, Signal, SignalAccumulator
from fixdec.special import Category, Special
from fixdec.types import D64, D128, D256, D512, D1024, UD64, UD128, UD256, UD512, UD1024
from fixdec.value import Decimal, UnsignedDecimal, decimal_type

__version__ = "0.1.0"
__all__ = [
    # Value types
    "Decimal",
    "UnsignedDecimal",
    "decimal_type",
    "D64",
    "D128",
    "D256",
    "D512",
    "D1024",
    "UD64",
    "UD128",
    "UD256",
    "UD512",
    "UD1024",
    # Context and signals
    "Context",
    "RoundingMode",
    "DEFAULT_CONTEXT",
    "EngineSettings",
    "Signal",
    "SignalAccumulator",
    "Outcome",
    "Special",
    "Category",
    # Errors
    "DecimalError",
    "ParseError",
    "ParseErrorKind",
    "ConversionError",
    "ConversionErrorKind",
    "RepresentationError",
    "SignalTrap",
    "InvalidOperationTrap",
    "DivisionByZeroTrap",
    "OverflowTrap",
    "InexactTrap",
    "ColumnCoercionError",
    # Boundary models
    "RawLayout",
    "ColumnSpec",
    "__version__",
]
