"""Ledger Host — the runtime collaborator that drives EscrowLedger instances.

This is the application layer that coordinates between:
    - Domain ledger (state machine over the four tables)
    - Store (snapshot persistence, termination flag, audit trail)
    - Structured logging

Per call the host supplies the caller identity, loads the committed
snapshot into a fresh ledger, runs the operation, and saves the result
only if the operation returned normally. Anything raised on the way
(a LedgerError or an unexpected fault) commits nothing. A settlement
is committed in the same store write that destroys the instance;
every later call is rejected with ContractTerminatedError.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TypeVar

import structlog

from escrow_ledger.config import Settings, get_settings
from escrow_ledger.domain.enums import EventType
from escrow_ledger.domain.exceptions import InvalidPartyError, LedgerError
from escrow_ledger.domain.ledger import EscrowLedger
from escrow_ledger.domain.state_machine import LedgerStateMachine
from escrow_ledger.domain.types import DEFAULT_PARTY, PartyId
from escrow_ledger.host.store import InMemoryLedgerStore, LedgerStore
from escrow_ledger.logging_config import get_logger
from escrow_ledger.schemas.ledger import (
    LedgerEventRecord,
    LedgerSnapshot,
    LedgerStatusResponse,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from escrow_ledger.domain.types import Amount, AssetId, Holding, Listing

logger = get_logger(__name__)

T = TypeVar("T")


class LedgerHost:
    """Hosts escrow ledgers and serializes every call against them."""

    def __init__(
        self,
        store: LedgerStore | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._store = store if store is not None else InMemoryLedgerStore()
        self._settings = settings or get_settings()

    @property
    def max_amount(self) -> int:
        return self._settings.ledger_max_amount

    # ------------------------------------------------------------------
    # Deployment
    # ------------------------------------------------------------------

    def deploy_with_listing(
        self,
        caller: PartyId,
        initial_asset: AssetId,
        initial_price: Amount,
    ) -> uuid.UUID:
        """Deploy a ledger with ``caller`` as seller and an initial listing."""
        caller = self._require_caller(caller)
        with self._bound(None, caller, "deploy_with_listing"):
            ledger = self._guarded(
                lambda: EscrowLedger.create_with_listing(
                    caller, initial_asset, initial_price, max_amount=self.max_amount
                )
            )
            contract_id = self._deploy(ledger, caller)
            logger.info(
                "ledger.deployed",
                contract_id=str(contract_id),
                asset=str(initial_asset),
                price=initial_price,
            )
            return contract_id

    def deploy_empty(self, caller: PartyId) -> uuid.UUID:
        """Deploy an empty ledger; the seller is fixed by the first insert_asset."""
        caller = self._require_caller(caller)
        with self._bound(None, caller, "deploy_empty"):
            ledger = EscrowLedger.create_empty(max_amount=self.max_amount)
            contract_id = self._deploy(ledger, caller)
            logger.info("ledger.deployed", contract_id=str(contract_id), empty=True)
            return contract_id

    # ------------------------------------------------------------------
    # Mutating calls
    # ------------------------------------------------------------------

    def insert_asset(
        self,
        contract_id: uuid.UUID,
        caller: PartyId,
        item: AssetId,
        price: Amount,
    ) -> None:
        """Install the caller's sole listing."""
        self._execute(
            contract_id,
            caller,
            "insert_asset",
            lambda ledger: ledger.insert_asset(caller, item, price),
            event_type=EventType.ASSET_LISTED,
            metadata={"asset": str(item), "price": price},
        )
        logger.info(
            "ledger.asset_listed",
            contract_id=str(contract_id),
            seller=caller,
            asset=str(item),
            price=price,
        )

    def deposit_funds(
        self,
        contract_id: uuid.UUID,
        caller: PartyId,
        target: PartyId,
        amount: Amount,
    ) -> None:
        """Credit ``amount`` to the caller's buyer balance against ``target``."""
        self._execute(
            contract_id,
            caller,
            "deposit_funds",
            lambda ledger: ledger.deposit_funds(caller, target, amount),
            event_type=EventType.FUNDS_DEPOSITED,
            metadata={"target": target, "amount": amount},
        )
        logger.info(
            "ledger.funds_deposited",
            contract_id=str(contract_id),
            buyer=caller,
            target=target,
            amount=amount,
        )

    def settle(
        self,
        contract_id: uuid.UUID,
        caller: PartyId,
        target: PartyId,
    ) -> LedgerSnapshot:
        """Settle the caller's listing against ``target`` and destroy the instance.

        Returns:
            The final committed snapshot, the last view of the tables before
            the instance is dropped.
        """
        holding, final = self._execute(
            contract_id,
            caller,
            "settle",
            lambda ledger: ledger.settle(caller, target),
            event_type=EventType.LEDGER_SETTLED,
            metadata={"buyer": target},
            terminate=True,
        )

        logger.info(
            "ledger.settled",
            contract_id=str(contract_id),
            seller=caller,
            buyer=target,
            asset=str(holding.asset),
            price=holding.price,
            change=final.buyer_balances.get(target, 0),
        )
        return final

    # ------------------------------------------------------------------
    # Read calls
    # ------------------------------------------------------------------

    def get_listing(self, contract_id: uuid.UUID, party: PartyId) -> Listing | None:
        return self._load(contract_id).get_listing(party)

    def check_buyer_balance(self, contract_id: uuid.UUID, party: PartyId) -> Amount | None:
        return self._load(contract_id).check_buyer_balance(party)

    def check_seller_balance(self, contract_id: uuid.UUID, party: PartyId) -> Amount | None:
        return self._load(contract_id).check_seller_balance(party)

    def get_holding(self, contract_id: uuid.UUID, party: PartyId) -> Holding | None:
        return self._load(contract_id).get_holding(party)

    def describe_status(self, contract_id: uuid.UUID, party: PartyId) -> str:
        return self._load(contract_id).describe_status(party)

    def get_status(self, contract_id: uuid.UUID) -> LedgerStatusResponse:
        """Get ledger status with allowed events."""
        snapshot = self._store.load(contract_id)
        sm = LedgerStateMachine(current_status=snapshot.status.value)
        return LedgerStatusResponse(
            contract_id=contract_id,
            status=snapshot.status.value,
            seller=snapshot.seller,
            buyer=snapshot.buyer,
            allowed_events=sm.get_allowed_events(),
        )

    def get_events(self, contract_id: uuid.UUID) -> list[LedgerEventRecord]:
        """Get audit trail. Still available after termination."""
        return self._store.get_events(contract_id)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _deploy(self, ledger: EscrowLedger, caller: PartyId) -> uuid.UUID:
        contract_id = uuid.uuid4()
        self._store.create(contract_id, LedgerSnapshot.from_ledger(ledger))
        self._store.record_event(
            self._event(
                contract_id,
                EventType.LEDGER_DEPLOYED,
                old_status=None,
                new_status=ledger.status.value,
                actor=caller,
                metadata={"asset": str(ledger.terms.asset), "price": ledger.terms.price},
            )
        )
        return contract_id

    def _execute(
        self,
        contract_id: uuid.UUID,
        caller: PartyId,
        operation: str,
        call: Callable[[EscrowLedger], T],
        event_type: EventType,
        metadata: dict | None = None,
        terminate: bool = False,
    ) -> tuple[T, LedgerSnapshot]:
        """Run one mutating call as a load / run / commit unit.

        With ``terminate`` the commit also destroys the instance, so a
        settlement is either stored together with its termination or not
        stored at all.

        Returns:
            The operation's result and the committed snapshot.
        """
        caller = self._require_caller(caller)
        with self._bound(contract_id, caller, operation):
            before = self._guarded(lambda: self._store.load(contract_id))
            ledger = before.to_ledger(self.max_amount)
            result = self._guarded(lambda: call(ledger))

            after = LedgerSnapshot.from_ledger(ledger)
            events = [
                self._event(
                    contract_id,
                    event_type,
                    old_status=before.status.value,
                    new_status=after.status.value,
                    actor=caller,
                    metadata=metadata,
                )
            ]
            if terminate:
                events.append(
                    self._event(
                        contract_id,
                        EventType.LEDGER_TERMINATED,
                        old_status=after.status.value,
                        new_status=after.status.value,
                        actor="SYSTEM",
                        metadata={"beneficiary": caller},
                    )
                )
            self._guarded(
                lambda: self._store.save(contract_id, after, events, terminate=terminate)
            )
            return result, after

    def _guarded(self, call: Callable[[], T]) -> T:
        """Run ``call``, logging a rejection or fault before re-raising it."""
        try:
            return call()
        except LedgerError as exc:
            logger.warning("ledger.call_rejected", error=exc.code.value, message=exc.message)
            raise
        except Exception as exc:
            logger.exception("ledger.call_failed", error=str(exc))
            raise

    def _load(self, contract_id: uuid.UUID) -> EscrowLedger:
        return self._store.load(contract_id).to_ledger(self.max_amount)

    @staticmethod
    def _event(
        contract_id: uuid.UUID,
        event_type: EventType,
        old_status: str | None,
        new_status: str,
        actor: str,
        metadata: dict | None = None,
    ) -> LedgerEventRecord:
        return LedgerEventRecord(
            contract_id=contract_id,
            event_type=event_type.value,
            old_status=old_status,
            new_status=new_status,
            actor=actor,
            metadata=metadata,
            created_at=datetime.now(UTC),
        )

    @staticmethod
    def _require_caller(caller: PartyId) -> PartyId:
        # The unset-slot identity must never reach the ledger as a caller.
        if not isinstance(caller, str) or caller == DEFAULT_PARTY:
            raise InvalidPartyError(caller)
        return caller

    @staticmethod
    @contextmanager
    def _bound(
        contract_id: uuid.UUID | None,
        caller: PartyId,
        operation: str,
    ) -> Iterator[None]:
        """Bind call context to every log entry emitted inside the call."""
        context = {"caller": caller, "operation": operation}
        if contract_id is not None:
            context["contract_id"] = str(contract_id)
        with structlog.contextvars.bound_contextvars(**context):
            yield
