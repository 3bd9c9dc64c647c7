"""Decimal arithmetic kernels.

Functions here operate on Decimal values and return Outcome(value, flags).
The Decimal methods and operators are thin wrappers around them.
"""

from fixdec.math.arithmetic import (
    absolute,
    add,
    div,
    divide_integer,
    mul,
    neg,
    plus,
    power,
    product_of,
    rem,
    signum,
    sub,
    sum_of,
)
from fixdec.math.compare import (
    clamp,
    compare,
    compare_numeric,
    compare_total,
    maximum,
    minimum,
    numeric_hash,
    total_order_key,
)
from fixdec.math.rounding import round_coefficient
from fixdec.math.scale import normalize, quantize, round_places

__all__ = [
    "absolute",
    "add",
    "clamp",
    "compare",
    "compare_numeric",
    "compare_total",
    "div",
    "divide_integer",
    "maximum",
    "minimum",
    "mul",
    "neg",
    "normalize",
    "numeric_hash",
    "plus",
    "power",
    "product_of",
    "quantize",
    "rem",
    "round_coefficient",
    "round_places",
    "signum",
    "sub",
    "sum_of",
    "total_order_key",
]
