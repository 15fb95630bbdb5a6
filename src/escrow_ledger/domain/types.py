"""Value types for the escrow ledger.

PartyId and AssetId are opaque identifiers handed in by the host; the
ledger never generates them. Amount is a plain ``int`` bounded to the
unsigned 128-bit range unless the host configures a tighter bound.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

from escrow_ledger.domain.exceptions import InvalidAmountError, InvalidAssetIdError

PartyId = NewType("PartyId", str)
Amount = int

ASSET_ID_SIZE = 32
MAX_AMOUNT: Amount = 2**128 - 1

# Value of an unset seller/buyer slot. The host never accepts it as a caller.
DEFAULT_PARTY = PartyId("")


def validate_amount(value: object, bound: Amount = MAX_AMOUNT) -> Amount:
    """Return ``value`` if it is an unsigned integer not above ``bound``."""
    # bool is an int subclass; True is not a price.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmountError(value, bound)
    if value < 0 or value > bound:
        raise InvalidAmountError(value, bound)
    return value


def validate_asset(value: object) -> AssetId:
    if not isinstance(value, AssetId):
        raise InvalidAssetIdError(value)
    return value


@dataclass(frozen=True)
class AssetId:
    """Fixed-size opaque content identifier (32 bytes)."""

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, bytes) or len(self.value) != ASSET_ID_SIZE:
            raise InvalidAssetIdError(self.value)

    @classmethod
    def zero(cls) -> AssetId:
        return cls(bytes(ASSET_ID_SIZE))

    @classmethod
    def from_hex(cls, text: str) -> AssetId:
        """Parse a 64-digit hex string, with or without the ``0x`` prefix."""
        digits = text[2:] if text.startswith(("0x", "0X")) else text
        try:
            raw = bytes.fromhex(digits)
        except ValueError as err:
            raise InvalidAssetIdError(text) from err
        return cls(raw)

    def hex(self) -> str:
        return "0x" + self.value.hex()

    def __str__(self) -> str:
        return self.hex()


@dataclass(frozen=True)
class Listing:
    """An asset a seller offers at a fixed price."""

    asset: AssetId
    price: Amount


@dataclass(frozen=True)
class Holding:
    """An asset a buyer received at settlement, with the price paid."""

    asset: AssetId
    price: Amount
