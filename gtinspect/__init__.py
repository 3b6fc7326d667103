"""
gtinspect: classify, parse and validate numeric GTIN barcodes.
"""

from gtinspect.barcode import (
    Barcode,
    BarcodeError,
    FormatDescriptor,
    FormatRegistry,
    parse,
    parse_number,
    try_parse,
)

__version__ = "0.1.0"

__all__ = [
    "Barcode",
    "BarcodeError",
    "FormatDescriptor",
    "FormatRegistry",
    "parse",
    "parse_number",
    "try_parse",
]
