"""Engine-wide constants for fixdec.

Centralizes the scale bounds, supported widths and formatting parameters.
"""

# Scale is a signed 16-bit power-of-ten exponent:
# value = (-1)^sign * coefficient * 10^scale
EXP_MIN = -32768
EXP_MAX = 32767

# Coefficient widths are whole 64-bit words
WORD_BITS = 64
PREDEFINED_WIDTHS = (64, 128, 256, 512, 1024)

# Plain notation is used while the adjusted exponent stays at or above
# -SCIENTIFIC_THRESHOLD and the scale is not positive
SCIENTIFIC_THRESHOLD = 6

# Longest exponent literal the parser converts before reporting overflow
MAX_EXPONENT_LITERAL_DIGITS = 6


def max_coefficient(bits: int) -> int:
    """Largest coefficient a width can hold."""
    return (1 << bits) - 1


def validate_width(bits: int) -> int:
    """Validate and return a coefficient width.

    Raises:
        ValueError: If the width is not a positive multiple of 64
    """
    if not isinstance(bits, int) or bits <= 0 or bits % WORD_BITS != 0:
        raise ValueError(f"Decimal width must be a positive multiple of {WORD_BITS}, got {bits}")
    return bits
