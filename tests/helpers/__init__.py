"""Test helpers module for shared test utilities.

- constants: coefficient limits and scale bounds
- factories: value and context factory functions
"""

from tests.helpers.constants import (
    D64_LIMIT,
    D64_LIMIT_DIGITS,
    D128_LIMIT,
    D128_LIMIT_DIGITS,
    EXP_MAX,
    EXP_MIN,
)
from tests.helpers.factories import make_context, make_decimal, parts

__all__ = [
    # Constants
    "D64_LIMIT",
    "D64_LIMIT_DIGITS",
    "D128_LIMIT",
    "D128_LIMIT_DIGITS",
    "EXP_MIN",
    "EXP_MAX",
    # Factories
    "make_decimal",
    "make_context",
    "parts",
]
