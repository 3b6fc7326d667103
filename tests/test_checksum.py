"""
Tests for checksum algorithms.
"""

import pytest

from gtinspect.barcode import EAN8, UPC12, FormatDescriptor, FormatRegistry, parse
from gtinspect.barcode.checksum import MODULO10, Modulo10
from gtinspect.barcode.errors import MalformedInputError


class TestModulo10Compute:
    """Tests for Modulo-10 checksum calculation."""

    def test_compute_ean8(self):
        """Test checksum calculation for known EAN-8 payloads."""
        # 96385074 - known valid EAN-8
        assert MODULO10.compute("9638507") == 4

        # 55123457 - known valid EAN-8
        assert MODULO10.compute("5512345") == 7

    def test_compute_upc12(self):
        """Test checksum calculation for known UPC-A payloads."""
        assert MODULO10.compute("01234567890") == 5
        assert MODULO10.compute("03600029145") == 2

    def test_compute_ean13(self):
        """Test that weighting from the right also covers EAN-13 payloads."""
        assert MODULO10.compute("400638133393") == 1
        assert MODULO10.compute("590123412345") == 7

    def test_sum_multiple_of_ten_gives_zero(self):
        """Test that a weighted sum divisible by 10 yields 0, not 10."""
        # 5*1 + 5*3 = 20
        assert MODULO10.compute("55") == 0
        assert MODULO10.compute("0000000") == 0

    def test_empty_payload(self):
        """Test that an empty payload computes to 0."""
        assert MODULO10.compute("") == 0

    def test_non_digit_rejected(self):
        """Test that non-digit characters raise MalformedInputError."""
        with pytest.raises(MalformedInputError):
            MODULO10.compute("96385A7")

    def test_unicode_digit_rejected(self):
        """Test that non-ASCII digits are not accepted."""
        with pytest.raises(MalformedInputError):
            MODULO10.compute("٩٦٣")


class TestModulo10Verify:
    """Tests for verification of full codes."""

    def test_verify_valid(self):
        """Test validation of valid codes."""
        valid_codes = [
            "96385074",
            "55123457",
            "50123452",
            "012345678905",
            "036000291452",
            "4006381333931",
        ]
        for code in valid_codes:
            is_valid, computed = MODULO10.verify(code)
            assert is_valid, f"Expected {code} to be valid"
            assert computed == int(code[-1])

    def test_verify_invalid_returns_computed(self):
        """Test that a wrong checksum reports the expected digit."""
        is_valid, computed = MODULO10.verify("96385075")
        assert not is_valid
        assert computed == 4

    def test_verify_zero_checksum(self):
        """Test verification when the checksum digit is 0."""
        assert MODULO10.verify("550") == (True, 0)

    def test_verify_too_short(self):
        """Test that input shorter than the checksum is malformed."""
        with pytest.raises(MalformedInputError):
            MODULO10.verify("")

    def test_verify_checksum_only(self):
        """Test that a lone checksum digit verifies against an empty payload."""
        assert MODULO10.verify("0") == (True, 0)
        assert MODULO10.verify("3") == (False, 0)

    def test_verify_non_digit_checksum(self):
        """Test that a non-digit checksum position is malformed."""
        with pytest.raises(MalformedInputError):
            MODULO10.verify("9638507X")

    def test_is_valid(self):
        """Test the boolean convenience wrapper."""
        assert MODULO10.is_valid("96385074")
        assert not MODULO10.is_valid("96385070")

    def test_shared_instance(self):
        """Test the shared instance is a stateless Modulo10."""
        assert isinstance(MODULO10, Modulo10)
        assert MODULO10.checksum_length == 1
        assert EAN8.algorithm is MODULO10
        assert UPC12.algorithm is MODULO10


class TestVerifyBarcode:
    """Tests for verification of parsed barcodes."""

    @pytest.fixture
    def registry(self):
        return FormatRegistry([EAN8, UPC12])

    def test_payload_from_fields_without_embedded_value(self, registry):
        """Test that the payload is area ID + product ID when nothing is embedded."""
        barcode = parse("96385074", registry)
        payload = barcode.area_id + barcode.product_id

        is_valid, computed = MODULO10.verify_barcode(barcode)

        assert computed == MODULO10.compute(payload)
        assert is_valid == (computed == barcode.checksum)

    def test_payload_includes_embedded_price(self, registry):
        """Test that a flagged embedded price is appended as its integer rendering."""
        barcode = parse("208123401999", registry)
        payload = barcode.area_id + barcode.product_id + str(barcode.embedded_price())
        assert payload == "208123401999"

        _, computed = MODULO10.verify_barcode(barcode)

        assert computed == MODULO10.compute(payload)

    def test_payload_includes_embedded_weight(self, registry):
        """Test that a flagged embedded weight is appended as its integer rendering."""
        # Embedded field "0507" renders as "507"
        barcode = parse("234123450507", registry)
        payload = barcode.area_id + barcode.product_id + "507"

        _, computed = MODULO10.verify_barcode(barcode)

        assert computed == MODULO10.compute(payload)

    def test_agrees_with_checksum_when_fields_cover_payload(self):
        """Test that verification matches the checksum digit when no span overlaps it."""
        gtin13 = FormatDescriptor(
            name="GTIN13", total_length=13, product_id_index=3, product_id_length=9
        )
        barcode = parse("4006381333931", FormatRegistry([gtin13]))

        assert barcode.area_id + barcode.product_id == "400638133393"
        assert MODULO10.verify_barcode(barcode) == (True, barcode.checksum)
        assert barcode.checksum == 1

