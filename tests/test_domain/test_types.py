"""Tests for ledger value types."""

from __future__ import annotations

import pytest

from escrow_ledger.domain.exceptions import InvalidAmountError, InvalidAssetIdError
from escrow_ledger.domain.types import MAX_AMOUNT, AssetId, validate_amount


class TestAssetId:
    def test_zero(self) -> None:
        assert AssetId.zero().value == bytes(32)

    def test_hex_form(self) -> None:
        asset = AssetId(bytes([0xAB]) * 32)
        assert asset.hex() == "0x" + "ab" * 32
        assert str(asset) == asset.hex()

    def test_from_hex_with_and_without_prefix(self) -> None:
        digits = "01" * 32
        assert AssetId.from_hex(digits) == AssetId.from_hex("0x" + digits)

    def test_wrong_length_rejected(self) -> None:
        with pytest.raises(InvalidAssetIdError):
            AssetId(b"\x01" * 31)

    def test_bad_hex_rejected(self) -> None:
        with pytest.raises(InvalidAssetIdError):
            AssetId.from_hex("0x" + "zz" * 32)

    def test_non_bytes_rejected(self) -> None:
        with pytest.raises(InvalidAssetIdError):
            AssetId("00" * 32)  # type: ignore[arg-type]


class TestValidateAmount:
    @pytest.mark.parametrize("value", [0, 1, MAX_AMOUNT])
    def test_in_range(self, value: int) -> None:
        assert validate_amount(value) == value

    @pytest.mark.parametrize("value", [-1, MAX_AMOUNT + 1, 1.5, "10", True, None])
    def test_out_of_range_or_wrong_type(self, value: object) -> None:
        with pytest.raises(InvalidAmountError):
            validate_amount(value)

    def test_custom_bound(self) -> None:
        with pytest.raises(InvalidAmountError):
            validate_amount(101, bound=100)
