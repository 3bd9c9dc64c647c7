"""Pydantic models for storing and describing decimal values."""

from fixdec.models.column import ColumnCoercionError, ColumnErrorKind, ColumnSpec
from fixdec.models.layout import RawLayout, Scale, Width

__all__ = [
    # Storage
    "RawLayout",
    "Scale",
    "Width",
    # Columns
    "ColumnSpec",
    "ColumnErrorKind",
    "ColumnCoercionError",
]
