"""Text and native-number conversions for decimal values."""

from fixdec.conversion.format import to_canonical_string, to_engineering_notation, to_scientific_notation
from fixdec.conversion.native import from_float, from_int, to_float, to_int
from fixdec.conversion.parse import parse_decimal

__all__ = [
    "from_float",
    "from_int",
    "parse_decimal",
    "to_canonical_string",
    "to_engineering_notation",
    "to_float",
    "to_int",
    "to_scientific_notation",
]
