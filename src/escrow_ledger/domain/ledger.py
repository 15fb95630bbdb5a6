"""EscrowLedger — single-item escrow between one seller and one buyer.

The ledger keeps four tables:
    - seller_balances   PartyId -> Amount
    - seller_listings   PartyId -> Listing (at most one per seller)
    - buyer_balances    PartyId -> Amount
    - buyer_holdings    PartyId -> Holding (written only by settlement)

and two role slots: the designated ``seller`` and the current ``buyer``
(the most recent successful depositor; one slot, not a set).

Every mutating operation takes the caller identity as its first argument,
resolves its target status through the state machine guard, checks every
precondition, and only then writes. A raised LedgerError therefore leaves
tables, roles and status exactly as they were.

The ledger performs no I/O and no logging; that belongs to the host.
"""

from __future__ import annotations

from statemachine.exceptions import TransitionNotAllowed

from escrow_ledger.domain.enums import LedgerStatus
from escrow_ledger.domain.exceptions import (
    AmountOverflowError,
    AssetAlreadyListedError,
    InsufficientFundsError,
    InvalidStateTransitionError,
    NoAssetOrFundError,
    NoListingAvailableError,
    NotSellerError,
    SelfTradeDisallowedError,
    SellerCannotDepositError,
)
from escrow_ledger.domain.state_machine import validate_transition
from escrow_ledger.domain.types import (
    DEFAULT_PARTY,
    MAX_AMOUNT,
    Amount,
    AssetId,
    Holding,
    Listing,
    PartyId,
    validate_amount,
    validate_asset,
)


class EscrowLedger:
    """State machine over the four escrow tables."""

    def __init__(
        self,
        *,
        seller: PartyId = DEFAULT_PARTY,
        buyer: PartyId = DEFAULT_PARTY,
        terms: Listing | None = None,
        status: LedgerStatus = LedgerStatus.LISTED,
        seller_balances: dict[PartyId, Amount] | None = None,
        seller_listings: dict[PartyId, Listing] | None = None,
        buyer_balances: dict[PartyId, Amount] | None = None,
        buyer_holdings: dict[PartyId, Holding] | None = None,
        max_amount: Amount = MAX_AMOUNT,
    ) -> None:
        self.seller = seller
        self.buyer = buyer
        self.terms = terms or Listing(asset=AssetId.zero(), price=0)
        self.status = LedgerStatus(status)
        self.max_amount = max_amount
        self._seller_balances: dict[PartyId, Amount] = dict(seller_balances or {})
        self._seller_listings: dict[PartyId, Listing] = dict(seller_listings or {})
        self._buyer_balances: dict[PartyId, Amount] = dict(buyer_balances or {})
        self._buyer_holdings: dict[PartyId, Holding] = dict(buyer_holdings or {})

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def create_with_listing(
        cls,
        caller: PartyId,
        initial_asset: AssetId,
        initial_price: Amount,
        max_amount: Amount = MAX_AMOUNT,
    ) -> EscrowLedger:
        """Deploy with the caller as seller and one listing already in place."""
        price = validate_amount(initial_price, max_amount)
        listing = Listing(asset=validate_asset(initial_asset), price=price)
        return cls(
            seller=caller,
            terms=listing,
            seller_listings={caller: listing},
            max_amount=max_amount,
        )

    @classmethod
    def create_empty(cls, max_amount: Amount = MAX_AMOUNT) -> EscrowLedger:
        """Deploy with zero-valued terms; the listing arrives via insert_asset."""
        return cls(max_amount=max_amount)

    # ------------------------------------------------------------------
    # Table views (copies; the tables are only written by operations)
    # ------------------------------------------------------------------

    @property
    def seller_balances(self) -> dict[PartyId, Amount]:
        return dict(self._seller_balances)

    @property
    def seller_listings(self) -> dict[PartyId, Listing]:
        return dict(self._seller_listings)

    @property
    def buyer_balances(self) -> dict[PartyId, Amount]:
        return dict(self._buyer_balances)

    @property
    def buyer_holdings(self) -> dict[PartyId, Holding]:
        return dict(self._buyer_holdings)

    @property
    def is_settled(self) -> bool:
        return self.status is LedgerStatus.SETTLED

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def insert_asset(self, caller: PartyId, item: AssetId, price: Amount) -> None:
        """Install ``{item, price}`` as the caller's sole listing.

        On an empty ledger the first lister becomes the seller.
        """
        new_status = self._resolve_transition("list_asset")
        item = validate_asset(item)
        price = validate_amount(price, self.max_amount)

        if self.seller != DEFAULT_PARTY and caller != self.seller:
            raise NotSellerError(caller, self.seller)
        if caller in self._seller_listings:
            raise AssetAlreadyListedError(caller)

        self.seller = caller
        self._seller_listings[caller] = Listing(asset=item, price=price)
        self.status = new_status

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_listing(self, party: PartyId) -> Listing | None:
        return self._seller_listings.get(party)

    def check_buyer_balance(self, party: PartyId) -> Amount | None:
        return self._buyer_balances.get(party)

    def check_seller_balance(self, party: PartyId) -> Amount | None:
        return self._seller_balances.get(party)

    def get_holding(self, party: PartyId) -> Holding | None:
        return self._buyer_holdings.get(party)

    def describe_status(self, party: PartyId) -> str:
        """Human-readable summary for the seller or the current buyer."""
        if party == self.seller:
            item = self._seller_listings.get(party)
            fund = self._seller_balances.get(party, 0)
        elif party == self.buyer:
            item = self._buyer_holdings.get(party)
            fund = self._buyer_balances.get(party, 0)
        else:
            return "No data"

        if item is None:
            return f"No item data. Fund: {fund}"
        return f"Current item: {item.asset}. Current price: {item.price}. Fund: {fund}"

    # ------------------------------------------------------------------
    # Deposit
    # ------------------------------------------------------------------

    def deposit_funds(self, caller: PartyId, target: PartyId, amount: Amount) -> None:
        """Add ``amount`` to the caller's buyer balance against ``target``'s listing."""
        new_status = self._resolve_transition("deposit")
        amount = validate_amount(amount, self.max_amount)

        if caller == target:
            raise SelfTradeDisallowedError(caller)
        if caller == self.seller:
            raise SellerCannotDepositError(caller)
        if target not in self._seller_listings:
            raise NoListingAvailableError(target)

        previous = self._buyer_balances.get(caller, 0)
        balance = previous + amount
        if balance > self.max_amount:
            raise AmountOverflowError(previous, amount, self.max_amount)

        self._buyer_balances[caller] = balance
        self.buyer = caller
        self.status = new_status

    # ------------------------------------------------------------------
    # Settlement
    # ------------------------------------------------------------------

    def settle(self, caller: PartyId, target: PartyId) -> Holding:
        """Exchange the caller's listing for ``target``'s funds.

        The ledger ends in SETTLED; the host is responsible for destroying
        the instance afterwards.

        Returns:
            The Holding credited to ``target``.
        """
        if self.is_settled:
            raise InvalidStateTransitionError(self.status.value, "settle")

        listing = self._seller_listings.get(caller)
        fund = self._buyer_balances.get(target)
        if listing is None or fund is None:
            raise NoAssetOrFundError(caller, target)
        if fund < listing.price:
            raise InsufficientFundsError(required=listing.price, available=fund)

        # A buyer balance only exists after a deposit, so this is FUNDED -> SETTLED.
        new_status = self._resolve_transition("settle")

        change = fund - listing.price
        holding = Holding(asset=listing.asset, price=listing.price)

        self._buyer_holdings[target] = holding
        if change > 0:
            self._buyer_balances[target] = change
        else:
            del self._buyer_balances[target]
        del self._seller_listings[caller]
        self._seller_balances[caller] = listing.price
        self.status = new_status
        return holding

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _resolve_transition(self, event_name: str) -> LedgerStatus:
        """Return the status ``event_name`` leads to, without changing state."""
        try:
            return LedgerStatus(validate_transition(self.status.value, event_name))
        except TransitionNotAllowed as err:
            raise InvalidStateTransitionError(self.status.value, event_name) from err
