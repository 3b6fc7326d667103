"""
Barcode format resolution, field extraction and checksum utilities.
"""

from gtinspect.barcode.checksum import MODULO10, ChecksumAlgorithm, Modulo10
from gtinspect.barcode.errors import (
    BarcodeError,
    CorruptEmbeddedValueError,
    ErrorKind,
    MalformedInputError,
    NegativeBarcodeError,
    NonDigitCharacterError,
    RegistryError,
    UnrecognizedFormatError,
)
from gtinspect.barcode.formats import (
    BUILTIN_FORMATS,
    EAN8,
    UPC12,
    EmbeddedValuePackingOrder,
    EmbeddedValueType,
    FormatDescriptor,
)
from gtinspect.barcode.parser import (
    Barcode,
    ParseResult,
    parse,
    parse_number,
    try_parse,
)
from gtinspect.barcode.registry import FormatRegistry, build_registry, get_default_registry

__all__ = [
    # Checksum
    "ChecksumAlgorithm",
    "Modulo10",
    "MODULO10",
    # Formats
    "FormatDescriptor",
    "EmbeddedValuePackingOrder",
    "EmbeddedValueType",
    "EAN8",
    "UPC12",
    "BUILTIN_FORMATS",
    # Registry
    "FormatRegistry",
    "build_registry",
    "get_default_registry",
    # Parsing
    "Barcode",
    "ParseResult",
    "parse",
    "parse_number",
    "try_parse",
    # Errors
    "BarcodeError",
    "ErrorKind",
    "NonDigitCharacterError",
    "UnrecognizedFormatError",
    "MalformedInputError",
    "CorruptEmbeddedValueError",
    "NegativeBarcodeError",
    "RegistryError",
]
