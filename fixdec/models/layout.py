"""Raw storage layout of a decimal value.

RawLayout exposes every field of a value (sign, coefficient, scale and
special kind) so it can be stored or exchanged and later rebuilt
bit-for-bit. The coefficient travels as exactly bits // 8 little-endian
bytes; in JSON it is hex encoded.
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, Field, model_validator

from fixdec.constants import EXP_MAX, EXP_MIN, validate_width
from fixdec.special import Special

# Coefficient width in bits (positive multiple of 64)
Width = Annotated[int, AfterValidator(validate_width), Field(description="Coefficient width in bits")]

# Power-of-ten exponent
Scale = Annotated[int, Field(ge=EXP_MIN, le=EXP_MAX, description="Power-of-ten exponent")]


class RawLayout(BaseModel):
    """Field-by-field image of a decimal value."""

    bits: Width
    signed: bool = True
    negative: bool = False
    coefficient: bytes = Field(description="Little-endian coefficient, or NaN payload, bits // 8 bytes long")
    scale: Scale = 0
    special: Special = Special.FINITE

    model_config = {"frozen": True, "ser_json_bytes": "hex", "val_json_bytes": "hex"}

    @model_validator(mode="after")
    def _check_coefficient_length(self) -> "RawLayout":
        if len(self.coefficient) * 8 != self.bits:
            raise ValueError(
                f"coefficient must be {self.bits // 8} bytes for a {self.bits}-bit layout, "
                f"got {len(self.coefficient)}"
            )
        return self

    @property
    def coefficient_value(self) -> int:
        """Coefficient decoded as an integer."""
        return int.from_bytes(self.coefficient, "little")

    @classmethod
    def from_parts(cls, **fields: Any) -> "RawLayout":
        """Build a layout from an integer coefficient instead of bytes.

        Example:
            RawLayout.from_parts(bits=64, coefficient=125, scale=-2)
        """
        coefficient = fields.pop("coefficient", 0)
        bits = fields["bits"]
        if isinstance(coefficient, int):
            if coefficient < 0 or coefficient.bit_length() > bits:
                raise ValueError(f"coefficient {coefficient} does not fit {bits} bits")
            coefficient = coefficient.to_bytes(bits // 8, "little")
        return cls(coefficient=coefficient, **fields)
