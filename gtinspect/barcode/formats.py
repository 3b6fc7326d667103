"""
Barcode format descriptors.

A format descriptor is static, read-only metadata describing where each field
sits inside a fixed-length GTIN digit string and how its checksum is computed.
"""

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gtinspect.barcode.checksum import MODULO10, ChecksumAlgorithm


class EmbeddedValuePackingOrder(str, Enum):
    """Order in which the product ID and the embedded value are stored."""

    END = "end"  # embedded value follows the product ID
    BEGINNING = "beginning"  # embedded value precedes the product ID


class EmbeddedValueType(int, Enum):
    """How an embedded integer should be read as a price or weight."""

    NONE = -1
    PRICE_TWO_DECIMALS = 0
    PRICE_ONE_DECIMAL = 1
    PRICE_NO_DECIMALS = 2
    WEIGHT_THREE_DECIMALS = 3
    WEIGHT_TWO_DECIMALS = 4
    WEIGHT_ONE_DECIMAL = 5

    @property
    def decimals(self) -> int | None:
        """Number of implied decimal places, or None for NONE."""
        return _DECIMALS.get(self)

    @property
    def is_price(self) -> bool:
        return self in (
            EmbeddedValueType.PRICE_TWO_DECIMALS,
            EmbeddedValueType.PRICE_ONE_DECIMAL,
            EmbeddedValueType.PRICE_NO_DECIMALS,
        )

    @property
    def is_weight(self) -> bool:
        return self in (
            EmbeddedValueType.WEIGHT_THREE_DECIMALS,
            EmbeddedValueType.WEIGHT_TWO_DECIMALS,
            EmbeddedValueType.WEIGHT_ONE_DECIMAL,
        )

    def scale(self, value: int) -> Decimal | None:
        """Scale a raw embedded integer into an amount."""
        decimals = self.decimals
        if decimals is None:
            return None
        return Decimal(value).scaleb(-decimals)


_DECIMALS = {
    EmbeddedValueType.PRICE_TWO_DECIMALS: 2,
    EmbeddedValueType.PRICE_ONE_DECIMAL: 1,
    EmbeddedValueType.PRICE_NO_DECIMALS: 0,
    EmbeddedValueType.WEIGHT_THREE_DECIMALS: 3,
    EmbeddedValueType.WEIGHT_TWO_DECIMALS: 2,
    EmbeddedValueType.WEIGHT_ONE_DECIMAL: 1,
}


class FormatDescriptor(BaseModel):
    """
    Field layout and validation rules for one barcode format.

    Descriptors are frozen; they are built once at import time (or by callers
    before registering them) and shared by every barcode of that format.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    name: str = Field(..., min_length=1, description="Format identifier, e.g. 'EAN8'")
    total_length: int = Field(..., gt=0, description="Exact number of digits")

    # Area ID
    area_id_index: int = Field(0, ge=0)
    area_id_length: int = Field(3, ge=0)

    # Product ID
    product_id_index: int = Field(..., ge=0)
    product_id_length: int = Field(..., ge=0)

    # Embedded price/weight
    supports_embedded_value: bool = False
    embedded_value_index: int = Field(0, ge=0)
    embedded_value_length: int = Field(0, ge=0)
    embedded_value_packing_order: EmbeddedValuePackingOrder = EmbeddedValuePackingOrder.END
    embedded_price_identifiers: frozenset[str] = frozenset()
    embedded_weight_identifiers: frozenset[str] = frozenset()
    max_embedded_value: int = Field(0, ge=0, description="Inclusive upper bound")
    embedded_price_type: EmbeddedValueType = EmbeddedValueType.PRICE_TWO_DECIMALS
    embedded_weight_type: EmbeddedValueType = EmbeddedValueType.WEIGHT_THREE_DECIMALS

    # Checksum
    checksum_index: int = Field(..., ge=0, description="Defaults to the trailing digit(s)")
    checksum_length: int = Field(1, ge=1)
    algorithm: ChecksumAlgorithm = MODULO10

    @model_validator(mode="before")
    @classmethod
    def default_checksum_index(cls, data: Any) -> Any:
        """Place the checksum at the end unless a format says otherwise."""
        if isinstance(data, dict) and data.get("checksum_index") is None:
            total_length = data.get("total_length")
            if isinstance(total_length, int):
                data = dict(data)
                data["checksum_index"] = total_length - data.get("checksum_length", 1)
        return data

    @model_validator(mode="after")
    def check_layout(self) -> "FormatDescriptor":
        """Ensure every field span fits inside the code."""
        spans = {
            "area_id": (self.area_id_index, self.area_id_length),
            "product_id": (self.product_id_index, self.product_id_length),
            "checksum": (self.checksum_index, self.checksum_length),
        }
        if self.supports_embedded_value:
            if self.embedded_value_length < 1:
                raise ValueError(f"{self.name}: embedded value length must be positive")
            # Resolution matches identifiers against the area ID minus its last digit
            if self.area_id_length < 1:
                raise ValueError(
                    f"{self.name}: area ID length must be positive when embedded values are supported"
                )
            spans["embedded_value"] = (self.embedded_value_index, self.embedded_value_length)
        elif (
            self.embedded_value_index
            or self.embedded_value_length
            or self.embedded_price_identifiers
            or self.embedded_weight_identifiers
        ):
            raise ValueError(
                f"{self.name}: embedded value fields must be empty when not supported"
            )

        for field_name, (index, length) in spans.items():
            if index + length > self.total_length:
                raise ValueError(
                    f"{self.name}: {field_name} span [{index}, {index + length}) "
                    f"exceeds length {self.total_length}"
                )

        if self.algorithm.checksum_length != self.checksum_length:
            raise ValueError(
                f"{self.name}: checksum length {self.checksum_length} does not match "
                f"algorithm {self.algorithm.name} ({self.algorithm.checksum_length})"
            )

        return self

    @property
    def embedded_identifiers(self) -> frozenset[str]:
        """All area IDs that flag an embedded price or weight."""
        return self.embedded_price_identifiers | self.embedded_weight_identifiers

    def __str__(self) -> str:
        return self.name


EAN8 = FormatDescriptor(
    name="EAN8",
    total_length=8,
    product_id_index=3,
    product_id_length=5,
    algorithm=MODULO10,
)

UPC12 = FormatDescriptor(
    name="UPC12",
    total_length=12,
    product_id_index=3,
    product_id_length=5,
    supports_embedded_value=True,
    embedded_value_index=8,
    embedded_value_length=4,
    embedded_value_packing_order=EmbeddedValuePackingOrder.END,
    embedded_price_identifiers=frozenset({"208"}),
    embedded_weight_identifiers=frozenset({"234"}),
    max_embedded_value=9999,
    algorithm=MODULO10,
)

# Built-in formats in registration order
BUILTIN_FORMATS: tuple[FormatDescriptor, ...] = (EAN8, UPC12)
