"""Pydantic host schemas."""

from escrow_ledger.schemas.ledger import (
    AssetPriceModel,
    LedgerEventRecord,
    LedgerSnapshot,
    LedgerStatusResponse,
)

__all__ = [
    "AssetPriceModel",
    "LedgerEventRecord",
    "LedgerSnapshot",
    "LedgerStatusResponse",
]
