"""SQL-style NUMERIC(precision, scale) column descriptor.

Note the SQL meaning of scale: digits after the decimal point. A value
stored in NUMERIC(p, s) is quantized to exponent -s and may have at most
p significant digits in total.
"""

from enum import Enum
from typing import TYPE_CHECKING, TypeVar

import structlog
from pydantic import BaseModel, Field, model_validator

from fixdec.context import Context, RoundingMode
from fixdec.errors import DecimalError
from fixdec.math.scale import quantize
from fixdec.signals import Signal

if TYPE_CHECKING:
    from fixdec.value import Decimal

logger = structlog.get_logger()

D = TypeVar("D", bound="Decimal")


class ColumnErrorKind(str, Enum):
    """Why a value was refused by a column."""

    NOT_FINITE = "not_finite"
    OVERFLOW = "overflow"
    INEXACT = "inexact"


class ColumnCoercionError(DecimalError, ValueError):
    """A value does not fit a NUMERIC(precision, scale) column."""

    def __init__(self, kind: ColumnErrorKind, column: "ColumnSpec", value: object) -> None:
        self.kind = kind
        self.column = column
        self.value = value
        super().__init__(f"{value} does not fit {column} ({kind.value})")


class ColumnSpec(BaseModel):
    """Declared shape of a fixed-point column."""

    precision: int = Field(ge=1, le=1000, description="Total significant digits the column stores")
    scale: int = Field(default=0, ge=0, description="Digits after the decimal point")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_scale(self) -> "ColumnSpec":
        if self.scale > self.precision:
            raise ValueError(f"column scale {self.scale} exceeds precision {self.precision}")
        return self

    def __str__(self) -> str:
        return f"NUMERIC({self.precision}, {self.scale})"

    @property
    def integral_digits(self) -> int:
        """Digits available left of the decimal point."""
        return self.precision - self.scale

    def coerce(self, value: D, rounding: RoundingMode | None = None) -> D:
        """Fit a value to the column.

        Args:
            value: Decimal to store
            rounding: Mode used to drop excess fractional digits. None
                refuses any value that would lose non-zero digits.

        Returns:
            The value quantized to exactly `scale` fractional digits.

        Raises:
            ColumnCoercionError: NOT_FINITE for NaN or Infinity, OVERFLOW if
                the integral part needs more than precision - scale digits,
                INEXACT if rounding is None and digits would be lost
        """
        if not value.is_finite():
            raise self._refuse(ColumnErrorKind.NOT_FINITE, value)

        ctx = Context(rounding=rounding or RoundingMode.HALF_EVEN)
        result, flags = quantize(value, -self.scale, ctx)
        if Signal.INVALID_OPERATION in flags:
            raise self._refuse(ColumnErrorKind.OVERFLOW, value)
        if Signal.INEXACT in flags and rounding is None:
            raise self._refuse(ColumnErrorKind.INEXACT, value)
        if not result.is_zero() and result.digits_count() > self.precision:
            raise self._refuse(ColumnErrorKind.OVERFLOW, value)
        return result

    def accepts(self, value: "Decimal") -> bool:
        """True if coerce() would store the value without rounding."""
        try:
            self.coerce(value)
        except ColumnCoercionError:
            return False
        return True

    def _refuse(self, kind: ColumnErrorKind, value: object) -> ColumnCoercionError:
        logger.debug("column_coercion_refused", column=str(self), kind=kind.value, value=str(value))
        return ColumnCoercionError(kind, self, value)
