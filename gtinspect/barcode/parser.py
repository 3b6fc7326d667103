"""
Parsed, validated barcodes and the parsing entry points.
"""

from dataclasses import dataclass
from decimal import Decimal

import structlog

from gtinspect.barcode.errors import (
    BarcodeError,
    CorruptEmbeddedValueError,
    ErrorKind,
    NegativeBarcodeError,
    NonDigitCharacterError,
    UnrecognizedFormatError,
)
from gtinspect.barcode.formats import (
    EmbeddedValuePackingOrder,
    EmbeddedValueType,
    FormatDescriptor,
)
from gtinspect.barcode.registry import FormatRegistry, get_default_registry

logger = structlog.get_logger(__name__)

DIGITS = frozenset("0123456789")

# Returned by embedded_price()/embedded_weight() when the value is absent
ABSENT = -1


class Barcode:
    """
    A GTIN barcode resolved against a format registry.

    A Barcode only exists for codes that resolved to a format, so every
    accessor can slice the raw string by the format's offsets. Accessors are
    computed on each read; nothing is cached.
    """

    __slots__ = ("_raw", "_format")

    def __init__(self, raw: str, registry: FormatRegistry | None = None):
        """
        Parse and validate a digit string.

        Args:
            raw: Barcode digits
            registry: Formats to resolve against (default: process-wide registry)

        Raises:
            NonDigitCharacterError: If raw contains anything but 0-9
            UnrecognizedFormatError: If no registered format accepts raw
        """
        bad = next((char for char in raw if char not in DIGITS), None)
        if bad is not None:
            raise NonDigitCharacterError(
                f"Barcode may only contain digits, found {bad!r}", code=raw
            )

        if registry is None:
            registry = get_default_registry()

        descriptor = registry.resolve(raw)
        if descriptor is None:
            raise UnrecognizedFormatError(
                f"Failed to determine the format of barcode {raw!r}", code=raw
            )

        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_format", descriptor)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self) -> "Barcode":
        return self

    def __deepcopy__(self, memo: dict) -> "Barcode":
        return self

    def __reduce__(self):
        # Unpickling restores the resolved format without resolving again
        return (_restore_barcode, (self._raw, self._format))

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def format(self) -> FormatDescriptor:
        return self._format

    def _slice(self, index: int, length: int) -> str:
        return self._raw[index : index + length]

    @property
    def area_id(self) -> str:
        """
        Geographic/organisation prefix.

        Area IDs in the 20 range are store specific and usually indicate an
        embedded value.
        """
        return self._slice(self._format.area_id_index, self._format.area_id_length)

    @property
    def checksum(self) -> int:
        return int(self._slice(self._format.checksum_index, self._format.checksum_length))

    @property
    def has_embedded_price(self) -> bool:
        return (
            self._format.supports_embedded_value
            and self.area_id in self._format.embedded_price_identifiers
        )

    @property
    def has_embedded_weight(self) -> bool:
        return (
            self._format.supports_embedded_value
            and self.area_id in self._format.embedded_weight_identifiers
        )

    @property
    def product_id(self) -> str:
        """
        Product identifier.

        When the barcode carries no embedded value, the digits reserved for one
        are read as part of the product ID, so the result is between
        product_id_length and product_id_length + embedded_value_length long.
        """
        fmt = self._format
        if self.has_embedded_price or self.has_embedded_weight:
            return self._slice(fmt.product_id_index, fmt.product_id_length)

        length = fmt.product_id_length + fmt.embedded_value_length
        if fmt.embedded_value_packing_order == EmbeddedValuePackingOrder.END:
            return self._slice(fmt.product_id_index, length)
        return self._slice(fmt.embedded_value_index, length)

    def _embedded_value(self, label: str) -> int:
        field = self._slice(self._format.embedded_value_index, self._format.embedded_value_length)
        try:
            return int(field)
        except ValueError as exc:
            raise CorruptEmbeddedValueError(
                f"Failed to parse the embedded {label} {field!r}; the barcode may be corrupt",
                code=self._raw,
            ) from exc

    def embedded_price(self) -> int:
        """Embedded price as a raw integer, or -1 if the barcode has none."""
        if not self.has_embedded_price:
            return ABSENT
        return self._embedded_value("price")

    def embedded_weight(self) -> int:
        """Embedded weight as a raw integer, or -1 if the barcode has none."""
        if not self.has_embedded_weight:
            return ABSENT
        return self._embedded_value("weight")

    @property
    def embedded_value_type(self) -> EmbeddedValueType:
        if self.has_embedded_price:
            return self._format.embedded_price_type
        if self.has_embedded_weight:
            return self._format.embedded_weight_type
        return EmbeddedValueType.NONE

    def embedded_amount(self) -> Decimal | None:
        """
        Embedded price or weight scaled by its implied decimals.

        For example a two-decimal price field of 1999 gives Decimal('19.99').
        """
        value_type = self.embedded_value_type
        if value_type == EmbeddedValueType.NONE:
            return None
        raw_value = self.embedded_price() if self.has_embedded_price else self.embedded_weight()
        return value_type.scale(raw_value)

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"Barcode({self._raw!r}, format={self._format.name})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Barcode):
            return NotImplemented
        return self._raw == other._raw and self._format.name == other._format.name

    def __hash__(self) -> int:
        return hash((self._raw, self._format.name))


def _restore_barcode(raw: str, descriptor: FormatDescriptor) -> Barcode:
    barcode = object.__new__(Barcode)
    object.__setattr__(barcode, "_raw", raw)
    object.__setattr__(barcode, "_format", descriptor)
    return barcode


def parse(raw: str, registry: FormatRegistry | None = None) -> Barcode:
    """Parse a digit string into a Barcode."""
    return Barcode(raw, registry)


def parse_number(value: int, registry: FormatRegistry | None = None) -> Barcode:
    """
    Parse a barcode given as an integer.

    The integer is rendered without zero padding, so codes with leading zeros
    have to be passed as strings.

    Raises:
        NegativeBarcodeError: If value is below zero
    """
    if value < 0:
        raise NegativeBarcodeError("The barcode must be a positive integer", code=str(value))
    return Barcode(str(value), registry)


@dataclass
class ParseResult:
    """Outcome of try_parse(): either a barcode or the reason it failed."""

    code: str
    barcode: Barcode | None = None
    error_kind: ErrorKind | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.barcode is not None


def try_parse(raw: str, registry: FormatRegistry | None = None) -> ParseResult:
    """
    Parse a digit string without raising on invalid input.

    Returns:
        ParseResult carrying the barcode, or the error kind and message
    """
    try:
        barcode = Barcode(raw, registry)
    except BarcodeError as e:
        logger.debug("Barcode rejected", code=raw, kind=e.kind.value, error=str(e))
        return ParseResult(code=raw, error_kind=e.kind, error=str(e))

    return ParseResult(code=raw, barcode=barcode)
