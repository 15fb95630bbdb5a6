"""Tests for the in-memory ledger store."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

import pytest

from escrow_ledger.domain.exceptions import ContractNotFoundError, ContractTerminatedError
from escrow_ledger.domain.ledger import EscrowLedger
from escrow_ledger.host.store import InMemoryLedgerStore, LedgerStore
from escrow_ledger.schemas.ledger import LedgerEventRecord, LedgerSnapshot


@pytest.fixture
def snapshot(listed_ledger: EscrowLedger) -> LedgerSnapshot:
    return LedgerSnapshot.from_ledger(listed_ledger)


def _event(contract_id: uuid.UUID, event_type: str) -> LedgerEventRecord:
    return LedgerEventRecord(
        contract_id=contract_id,
        event_type=event_type,
        old_status=None,
        new_status="LISTED",
        actor="alice",
        created_at=datetime.now(UTC),
    )


class TestInMemoryLedgerStore:
    def test_satisfies_protocol(self, store) -> None:
        assert isinstance(store, LedgerStore)

    def test_create_and_load(self, store, snapshot) -> None:
        cid = uuid.uuid4()
        store.create(cid, snapshot)
        assert store.load(cid) == snapshot

    def test_duplicate_create_rejected(self, store, snapshot) -> None:
        cid = uuid.uuid4()
        store.create(cid, snapshot)
        with pytest.raises(ValueError, match="already exists"):
            store.create(cid, snapshot)

    def test_load_unknown(self, store) -> None:
        with pytest.raises(ContractNotFoundError):
            store.load(uuid.uuid4())

    def test_save_unknown(self, store, snapshot) -> None:
        with pytest.raises(ContractNotFoundError):
            store.save(uuid.uuid4(), snapshot)

    def test_save_replaces_snapshot(self, store, snapshot, funded_ledger) -> None:
        cid = uuid.uuid4()
        store.create(cid, snapshot)
        funded = LedgerSnapshot.from_ledger(funded_ledger)
        store.save(cid, funded)
        assert store.load(cid) == funded

    def test_loaded_snapshot_is_independent(self, store, snapshot) -> None:
        cid = uuid.uuid4()
        store.create(cid, snapshot)
        store.load(cid).seller_balances["alice"] = 99
        assert store.load(cid).seller_balances == {}

    def test_save_appends_events(self, store, snapshot) -> None:
        cid = uuid.uuid4()
        store.create(cid, snapshot)
        store.save(cid, snapshot, [_event(cid, "ASSET_LISTED"), _event(cid, "FUNDS_DEPOSITED")])

        assert [e.event_type for e in store.get_events(cid)] == [
            "ASSET_LISTED",
            "FUNDS_DEPOSITED",
        ]

    def test_save_rejects_foreign_events(self, store, snapshot) -> None:
        cid = uuid.uuid4()
        store.create(cid, snapshot)
        before = store.load(cid)

        with pytest.raises(ValueError, match="do not belong"):
            store.save(cid, snapshot, [_event(uuid.uuid4(), "ASSET_LISTED")])

        assert store.load(cid) == before
        assert store.get_events(cid) == []

    def test_terminating_save(self, store, snapshot) -> None:
        cid = uuid.uuid4()
        store.create(cid, snapshot)
        store.save(cid, snapshot, terminate=True)

        assert store.is_terminated(cid)
        with pytest.raises(ContractTerminatedError):
            store.load(cid)
        with pytest.raises(ContractTerminatedError):
            store.save(cid, snapshot)
        with pytest.raises(ValueError):
            store.create(cid, snapshot)

    def test_events_in_order_and_kept_after_termination(self, store, snapshot) -> None:
        cid = uuid.uuid4()
        store.create(cid, snapshot)
        store.record_event(_event(cid, "LEDGER_DEPLOYED"))
        store.save(
            cid,
            snapshot,
            [_event(cid, "LEDGER_SETTLED"), _event(cid, "LEDGER_TERMINATED")],
            terminate=True,
        )

        assert [e.event_type for e in store.get_events(cid)] == [
            "LEDGER_DEPLOYED",
            "LEDGER_SETTLED",
            "LEDGER_TERMINATED",
        ]

    def test_events_unknown(self, store) -> None:
        with pytest.raises(ContractNotFoundError):
            store.get_events(uuid.uuid4())
