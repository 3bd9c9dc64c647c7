"""Predefined decimal widths.

    D64 .. D1024    signed, 64- to 1024-bit coefficient
    UD64 .. UD1024  unsigned

Other multiples of 64 are available through decimal_type(bits, signed).
"""

from fixdec.value import decimal_type

__all__ = ["D64", "D128", "D256", "D512", "D1024", "UD64", "UD128", "UD256", "UD512", "UD1024"]

D64 = decimal_type(64)
D128 = decimal_type(128)
D256 = decimal_type(256)
D512 = decimal_type(512)
D1024 = decimal_type(1024)

UD64 = decimal_type(64, signed=False)
UD128 = decimal_type(128, signed=False)
UD256 = decimal_type(256, signed=False)
UD512 = decimal_type(512, signed=False)
UD1024 = decimal_type(1024, signed=False)
