"""Host runtime — identity, per-call load/commit, termination, audit trail."""

from escrow_ledger.host.runtime import LedgerHost
from escrow_ledger.host.store import InMemoryLedgerStore, LedgerStore

__all__ = ["InMemoryLedgerStore", "LedgerHost", "LedgerStore"]
