"""
Exceptions raised while parsing and validating barcodes.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Stable error codes reported alongside failed parses."""

    NON_DIGIT_CHARACTER = "non_digit_character"
    UNRECOGNIZED_FORMAT = "unrecognized_format"
    MALFORMED_INPUT = "malformed_input"
    CORRUPT_EMBEDDED_VALUE = "corrupt_embedded_value"
    NEGATIVE_BARCODE = "negative_barcode"


class BarcodeError(ValueError):
    """Base class for all barcode parsing errors."""

    kind: ErrorKind

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class NonDigitCharacterError(BarcodeError):
    """Raised when a barcode contains a character outside 0-9."""

    kind = ErrorKind.NON_DIGIT_CHARACTER


class UnrecognizedFormatError(BarcodeError):
    """Raised when no registered format matches a barcode."""

    kind = ErrorKind.UNRECOGNIZED_FORMAT


class MalformedInputError(BarcodeError):
    """Raised when a checksum algorithm is handed input it cannot scan."""

    kind = ErrorKind.MALFORMED_INPUT


class CorruptEmbeddedValueError(BarcodeError):
    """
    Raised when a flagged embedded price/weight does not parse as an integer.

    A resolved barcode should never hit this; it signals that resolution and
    field extraction disagree about the barcode's layout.
    """

    kind = ErrorKind.CORRUPT_EMBEDDED_VALUE


class NegativeBarcodeError(BarcodeError):
    """Raised when a numeric barcode is below zero."""

    kind = ErrorKind.NEGATIVE_BARCODE


class RegistryError(RuntimeError):
    """Raised on invalid format registration (duplicates, late registration)."""
