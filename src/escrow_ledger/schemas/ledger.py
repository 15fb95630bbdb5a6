"""Pydantic schemas for the ledger host.

LedgerSnapshot is the persistence encoding of a ledger's full table set:
the host loads one before every call and saves one after every committed
call. The response and event schemas are what the host hands back to its
own callers. All of them are separate from the domain types so the domain
layer stays framework-free.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

from escrow_ledger.domain.enums import LedgerStatus
from escrow_ledger.domain.ledger import EscrowLedger
from escrow_ledger.domain.types import MAX_AMOUNT, AssetId, Holding, Listing, PartyId

# ---------------------------------------------------------------------------
# Snapshot Schemas
# ---------------------------------------------------------------------------


class AssetPriceModel(BaseModel):
    """Encoded ``{asset, price}`` pair (a Listing or a Holding)."""

    model_config = ConfigDict(frozen=True)

    asset: str = Field(
        ...,
        pattern=r"^0x[0-9a-f]{64}$",
        description="32-byte asset identifier, 0x-prefixed lowercase hex",
    )
    price: NonNegativeInt

    @classmethod
    def encode(cls, pair: Listing | Holding) -> AssetPriceModel:
        return cls(asset=pair.asset.hex(), price=pair.price)

    def to_listing(self) -> Listing:
        return Listing(asset=AssetId.from_hex(self.asset), price=self.price)

    def to_holding(self) -> Holding:
        return Holding(asset=AssetId.from_hex(self.asset), price=self.price)


class LedgerSnapshot(BaseModel):
    """Full state of one ledger: roles, status and the four tables."""

    seller: str
    buyer: str
    status: LedgerStatus
    terms: AssetPriceModel
    seller_balances: dict[str, NonNegativeInt] = Field(default_factory=dict)
    seller_listings: dict[str, AssetPriceModel] = Field(default_factory=dict)
    buyer_balances: dict[str, NonNegativeInt] = Field(default_factory=dict)
    buyer_holdings: dict[str, AssetPriceModel] = Field(default_factory=dict)

    @classmethod
    def from_ledger(cls, ledger: EscrowLedger) -> LedgerSnapshot:
        return cls(
            seller=ledger.seller,
            buyer=ledger.buyer,
            status=ledger.status,
            terms=AssetPriceModel.encode(ledger.terms),
            seller_balances=dict(ledger.seller_balances),
            seller_listings={
                party: AssetPriceModel.encode(listing)
                for party, listing in ledger.seller_listings.items()
            },
            buyer_balances=dict(ledger.buyer_balances),
            buyer_holdings={
                party: AssetPriceModel.encode(holding)
                for party, holding in ledger.buyer_holdings.items()
            },
        )

    def to_ledger(self, max_amount: int = MAX_AMOUNT) -> EscrowLedger:
        """Rebuild a live ledger from this snapshot."""
        return EscrowLedger(
            seller=PartyId(self.seller),
            buyer=PartyId(self.buyer),
            terms=self.terms.to_listing(),
            status=self.status,
            seller_balances={PartyId(p): v for p, v in self.seller_balances.items()},
            seller_listings={
                PartyId(p): m.to_listing() for p, m in self.seller_listings.items()
            },
            buyer_balances={PartyId(p): v for p, v in self.buyer_balances.items()},
            buyer_holdings={
                PartyId(p): m.to_holding() for p, m in self.buyer_holdings.items()
            },
            max_amount=max_amount,
        )


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------


class LedgerStatusResponse(BaseModel):
    """Lightweight status check response."""

    contract_id: uuid.UUID
    status: str
    seller: str
    buyer: str
    allowed_events: list[str] = Field(
        description="State machine events that can fire from the current status"
    )


class LedgerEventRecord(BaseModel):
    """One entry of the append-only audit trail."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    contract_id: uuid.UUID
    event_type: str
    old_status: str | None
    new_status: str
    actor: str
    metadata: dict | None = None
    created_at: datetime
