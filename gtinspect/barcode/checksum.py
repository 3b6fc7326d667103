"""
Checksum algorithms for GTIN barcodes.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from gtinspect.barcode.errors import MalformedInputError

if TYPE_CHECKING:
    from gtinspect.barcode.parser import Barcode


def _digits(value: str) -> list[int]:
    """Convert a digit string to ints, rejecting anything outside 0-9."""
    digits = []
    for char in value:
        # str.isdigit() accepts superscripts and other unicode digits
        if char not in "0123456789":
            raise MalformedInputError(f"Invalid character in code: {char!r}", code=value)
        digits.append(ord(char) - ord("0"))
    return digits


class ChecksumAlgorithm(ABC):
    """
    An algorithm that computes and verifies checksum digits.

    Implementations are stateless; a single shared instance per algorithm is
    referenced by every format that uses it.
    """

    name: str = ""
    checksum_length: int = 1

    @abstractmethod
    def compute(self, payload: str) -> int:
        """Compute the checksum for a payload that excludes the checksum digit(s)."""

    def verify(self, full: str) -> tuple[bool, int]:
        """
        Verify a full code including its trailing checksum.

        Args:
            full: Digit string ending with the checksum digit(s)

        Returns:
            Tuple of (is_valid, computed_checksum)
        """
        if len(full) < self.checksum_length:
            raise MalformedInputError(
                f"Code must have at least {self.checksum_length} digit(s)",
                code=full,
            )

        split = len(full) - self.checksum_length
        payload, claimed = full[:split], full[split:]

        computed = self.compute(payload)
        actual = int("".join(str(d) for d in _digits(claimed)))

        return computed == actual, computed

    def verify_barcode(self, barcode: "Barcode") -> tuple[bool, int]:
        """
        Verify an already parsed barcode.

        The payload is rebuilt from the barcode's fields rather than sliced
        from its raw string, so embedded values only contribute when the
        barcode is flagged as carrying them.

        Returns:
            Tuple of (is_valid, computed_checksum)
        """
        payload = barcode.area_id + barcode.product_id
        if barcode.has_embedded_price:
            payload += str(barcode.embedded_price())
        if barcode.has_embedded_weight:
            payload += str(barcode.embedded_weight())

        computed = self.compute(payload)
        return computed == barcode.checksum, computed

    def is_valid(self, full: str) -> bool:
        """Check whether a full code carries a correct checksum."""
        return self.verify(full)[0]

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Modulo10(ChecksumAlgorithm):
    """
    GS1 Modulo-10 checksum, used by EAN and UPC codes.

    Algorithm:
    1. Weight payload digits 3, 1, 3, 1, ... starting from the rightmost
    2. Sum the weighted digits
    3. Checksum = (10 - (sum mod 10)) mod 10
    """

    name = "modulo10"

    def compute(self, payload: str) -> int:
        length = len(payload)
        total = 0
        for i, digit in enumerate(_digits(payload)):
            weight = 1 if (length - i) % 2 == 0 else 3
            total += digit * weight

        return (10 - (total % 10)) % 10


MODULO10 = Modulo10()
