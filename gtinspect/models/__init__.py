"""
Pydantic models for reporting parse results.
"""

from gtinspect.models.report import ROW_FIELDS, BarcodeReport

__all__ = [
    "BarcodeReport",
    "ROW_FIELDS",
]
