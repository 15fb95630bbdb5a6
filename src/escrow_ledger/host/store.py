"""Host storage for ledger state.

The store persists each ledger's LedgerSnapshot between calls, keeps the
append-only audit trail, and remembers which instances were destroyed by
settlement. It never interprets the tables; that is the ledger's job.
Stores do not run ledger logic and never partially apply a commit:
``save`` writes the snapshot and the call's events, and for a settlement
destroys the instance in the same step, or it writes nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from escrow_ledger.domain.exceptions import (
    ContractNotFoundError,
    ContractTerminatedError,
)
from escrow_ledger.schemas.ledger import LedgerEventRecord, LedgerSnapshot

if TYPE_CHECKING:
    import uuid
    from collections.abc import Sequence


@runtime_checkable
class LedgerStore(Protocol):
    """Protocol that every host storage backend must satisfy."""

    def create(self, contract_id: uuid.UUID, snapshot: LedgerSnapshot) -> None: ...

    def load(self, contract_id: uuid.UUID) -> LedgerSnapshot:
        """Return the committed snapshot.

        Raises:
            ContractNotFoundError: If the id was never deployed.
            ContractTerminatedError: If the instance was destroyed.
        """
        ...

    def save(
        self,
        contract_id: uuid.UUID,
        snapshot: LedgerSnapshot,
        events: Sequence[LedgerEventRecord] = (),
        *,
        terminate: bool = False,
    ) -> None:
        """Commit one call: the new snapshot plus its audit events.

        With ``terminate`` the instance is destroyed by the same write; its
        tables are dropped and later loads raise ContractTerminatedError.
        """
        ...

    def is_terminated(self, contract_id: uuid.UUID) -> bool: ...

    def record_event(self, event: LedgerEventRecord) -> None: ...

    def get_events(self, contract_id: uuid.UUID) -> list[LedgerEventRecord]: ...


class InMemoryLedgerStore:
    """Process-local store keeping snapshots as encoded JSON documents."""

    def __init__(self) -> None:
        self._snapshots: dict[uuid.UUID, str] = {}
        self._terminated: set[uuid.UUID] = set()
        self._events: dict[uuid.UUID, list[LedgerEventRecord]] = {}

    def create(self, contract_id: uuid.UUID, snapshot: LedgerSnapshot) -> None:
        """Insert the initial snapshot of a freshly deployed ledger."""
        if contract_id in self._snapshots or contract_id in self._terminated:
            raise ValueError(f"Contract already exists: {contract_id}")
        self._snapshots[contract_id] = snapshot.model_dump_json()
        self._events.setdefault(contract_id, [])

    def load(self, contract_id: uuid.UUID) -> LedgerSnapshot:
        if contract_id in self._terminated:
            raise ContractTerminatedError(str(contract_id))
        document = self._snapshots.get(contract_id)
        if document is None:
            raise ContractNotFoundError(str(contract_id))
        return LedgerSnapshot.model_validate_json(document)

    def save(
        self,
        contract_id: uuid.UUID,
        snapshot: LedgerSnapshot,
        events: Sequence[LedgerEventRecord] = (),
        *,
        terminate: bool = False,
    ) -> None:
        """Commit a call (call AFTER the operation succeeded)."""
        if contract_id in self._terminated:
            raise ContractTerminatedError(str(contract_id))
        if contract_id not in self._snapshots:
            raise ContractNotFoundError(str(contract_id))
        if any(event.contract_id != contract_id for event in events):
            raise ValueError(f"Events do not belong to contract {contract_id}")
        document = snapshot.model_dump_json()

        # Nothing below can fail, so the commit lands whole.
        if terminate:
            del self._snapshots[contract_id]
            self._terminated.add(contract_id)
        else:
            self._snapshots[contract_id] = document
        self._events[contract_id].extend(events)

    def is_terminated(self, contract_id: uuid.UUID) -> bool:
        return contract_id in self._terminated

    def record_event(self, event: LedgerEventRecord) -> None:
        """Append one audit event outside of a commit (deployment)."""
        self._events.setdefault(event.contract_id, []).append(event)

    def get_events(self, contract_id: uuid.UUID) -> list[LedgerEventRecord]:
        """Fetch all events for a contract in chronological order."""
        if contract_id not in self._events:
            raise ContractNotFoundError(str(contract_id))
        return list(self._events[contract_id])
