"""Shared test fixtures for the escrow ledger test suite.

Provides:
    - Party identities and asset ids
    - Ledgers already in the LISTED and FUNDED states
    - A LedgerHost backed by a fresh in-memory store
"""

from __future__ import annotations

import pytest

from escrow_ledger.config import Settings
from escrow_ledger.domain.ledger import EscrowLedger
from escrow_ledger.domain.types import AssetId, PartyId
from escrow_ledger.host.runtime import LedgerHost
from escrow_ledger.host.store import InMemoryLedgerStore

# ---------------------------------------------------------------------------
# Identity Fixtures
# ---------------------------------------------------------------------------

SELLER = PartyId("alice")
BUYER = PartyId("bob")
OTHER = PartyId("charlie")


def item(fill: int) -> AssetId:
    """Return a 32-byte asset id made of one repeated byte."""
    return AssetId(bytes([fill]) * 32)


@pytest.fixture
def seller() -> PartyId:
    return SELLER


@pytest.fixture
def buyer() -> PartyId:
    return BUYER


@pytest.fixture
def other() -> PartyId:
    return OTHER


@pytest.fixture
def asset_a() -> AssetId:
    return item(1)


@pytest.fixture
def asset_b() -> AssetId:
    return item(2)


# ---------------------------------------------------------------------------
# Ledger Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def listed_ledger(seller: PartyId, asset_a: AssetId) -> EscrowLedger:
    """Ledger deployed by the seller with asset A at 450."""
    return EscrowLedger.create_with_listing(seller, asset_a, 450)


@pytest.fixture
def funded_ledger(listed_ledger: EscrowLedger, seller: PartyId, buyer: PartyId) -> EscrowLedger:
    """Listed ledger after the buyer deposited 600 against the seller."""
    listed_ledger.deposit_funds(buyer, seller, 600)
    return listed_ledger


# ---------------------------------------------------------------------------
# Host Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> InMemoryLedgerStore:
    return InMemoryLedgerStore()


@pytest.fixture
def host(store: InMemoryLedgerStore) -> LedgerHost:
    return LedgerHost(store=store, settings=Settings())
