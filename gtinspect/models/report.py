"""
Report model describing the outcome of parsing one barcode.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from gtinspect.barcode.errors import ErrorKind
from gtinspect.barcode.formats import EmbeddedValueType
from gtinspect.barcode.parser import ParseResult


class BarcodeReport(BaseModel):
    """
    Serialisable view of a parsed (or rejected) barcode.

    Used by the CLI for every output format.
    """

    model_config = ConfigDict(frozen=True)

    # Input
    code: str = Field(..., description="The code as supplied")
    valid: bool = Field(False, description="Whether the code resolved to a format")

    # Resolved fields
    format: str | None = Field(None, description="Resolved format name")
    area_id: str | None = None
    product_id: str | None = None
    checksum: int | None = None

    # Embedded value
    has_embedded_price: bool = False
    has_embedded_weight: bool = False
    embedded_value: int | None = Field(None, description="Raw embedded price/weight")
    embedded_value_type: EmbeddedValueType = EmbeddedValueType.NONE
    embedded_amount: Decimal | None = Field(None, description="Embedded value with decimals")

    # Failure
    error_kind: ErrorKind | None = None
    error: str | None = None

    @classmethod
    def from_result(cls, result: ParseResult) -> "BarcodeReport":
        """Build a report from a try_parse() result."""
        barcode = result.barcode
        if barcode is None:
            return cls(code=result.code, error_kind=result.error_kind, error=result.error)

        embedded_value: int | None = None
        if barcode.has_embedded_price:
            embedded_value = barcode.embedded_price()
        elif barcode.has_embedded_weight:
            embedded_value = barcode.embedded_weight()

        return cls(
            code=result.code,
            valid=True,
            format=barcode.format.name,
            area_id=barcode.area_id,
            product_id=barcode.product_id,
            checksum=barcode.checksum,
            has_embedded_price=barcode.has_embedded_price,
            has_embedded_weight=barcode.has_embedded_weight,
            embedded_value=embedded_value,
            embedded_value_type=barcode.embedded_value_type,
            embedded_amount=barcode.embedded_amount(),
        )

    def to_row(self) -> dict[str, Any]:
        """Flatten into display values for table/CSV/markdown output."""
        return {
            "code": self.code,
            "format": self.format or "",
            "area_id": self.area_id or "",
            "product_id": self.product_id or "",
            "checksum": "" if self.checksum is None else str(self.checksum),
            "embedded": self._embedded_label(),
            "status": "ok" if self.valid else (self.error_kind.value if self.error_kind else "error"),
        }

    def _embedded_label(self) -> str:
        if self.embedded_amount is None:
            return ""
        kind = "price" if self.has_embedded_price else "weight"
        return f"{kind}={self.embedded_amount}"


ROW_FIELDS = ["code", "format", "area_id", "product_id", "checksum", "embedded", "status"]
