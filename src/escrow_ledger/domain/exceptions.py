"""Domain exceptions for the escrow ledger.

Every precondition violation is fatal to the call that raised it. The host
translates these into its own failure reporting; the ``code`` attribute is
the distinguishable signal it keys on.
"""

from __future__ import annotations

from escrow_ledger.domain.enums import ErrorCode


class LedgerError(Exception):
    """Base exception for all ledger errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.LEDGER_ERROR) -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


# --- Listing Errors ---


class AssetAlreadyListedError(LedgerError):
    """Raised when a seller lists while already holding a listing."""

    def __init__(self, party: str) -> None:
        super().__init__(
            message=f"Asset already listed by {party}",
            code=ErrorCode.ASSET_ALREADY_LISTED,
        )
        self.party = party


class NotSellerError(LedgerError):
    """Raised when a party other than the designated seller tries to list."""

    def __init__(self, party: str, seller: str) -> None:
        super().__init__(
            message=f"{party} is not the seller of this ledger ({seller})",
            code=ErrorCode.NOT_SELLER,
        )
        self.party = party
        self.seller = seller


# --- Deposit Errors ---


class SelfTradeDisallowedError(LedgerError):
    """Raised when a depositor targets its own listing."""

    def __init__(self, party: str) -> None:
        super().__init__(
            message=f"You own your asset: {party} cannot deposit against itself",
            code=ErrorCode.SELF_TRADE_DISALLOWED,
        )
        self.party = party


class SellerCannotDepositError(LedgerError):
    """Raised when the seller tries to act as a depositing buyer."""

    def __init__(self, party: str) -> None:
        super().__init__(
            message=f"Seller can't deposit: {party}",
            code=ErrorCode.SELLER_CANNOT_DEPOSIT,
        )
        self.party = party


class NoListingAvailableError(LedgerError):
    """Raised when a deposit targets a party with no listing."""

    def __init__(self, target: str) -> None:
        super().__init__(
            message=f"Not available yet: {target} has no listing",
            code=ErrorCode.NO_LISTING_AVAILABLE,
        )
        self.target = target


# --- Settlement Errors ---


class NoAssetOrFundError(LedgerError):
    """Raised when settlement lacks either the seller listing or the buyer balance."""

    def __init__(self, seller: str, buyer: str) -> None:
        super().__init__(
            message=f"No asset or fund: listing of {seller} / balance of {buyer}",
            code=ErrorCode.NO_ASSET_OR_FUND,
        )
        self.seller = seller
        self.buyer = buyer


class InsufficientFundsError(LedgerError):
    """Raised when the buyer balance is below the listed price."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            message=f"Not enough fund: required {required}, available {available}",
            code=ErrorCode.INSUFFICIENT_FUNDS,
        )
        self.required = required
        self.available = available


# --- Amount / Argument Errors ---


class AmountOverflowError(LedgerError):
    """Raised when a balance would exceed the Amount bound."""

    def __init__(self, balance: int, amount: int, bound: int) -> None:
        super().__init__(
            message=f"Balance overflow: {balance} + {amount} exceeds {bound}",
            code=ErrorCode.AMOUNT_OVERFLOW,
        )
        self.balance = balance
        self.amount = amount
        self.bound = bound


class InvalidAmountError(LedgerError):
    """Raised when an amount is not an unsigned integer within bounds."""

    def __init__(self, value: object, bound: int) -> None:
        super().__init__(
            message=f"Invalid amount {value!r}: expected integer in [0, {bound}]",
            code=ErrorCode.INVALID_AMOUNT,
        )
        self.value = value


class InvalidAssetIdError(LedgerError):
    """Raised when an asset identifier is not a 32-byte value."""

    def __init__(self, value: object) -> None:
        super().__init__(
            message=f"Invalid asset id: {value!r}",
            code=ErrorCode.INVALID_ASSET_ID,
        )
        self.value = value


class InvalidPartyError(LedgerError):
    """Raised when the host is handed an empty caller identity."""

    def __init__(self, value: object) -> None:
        super().__init__(
            message=f"Invalid party id: {value!r}",
            code=ErrorCode.INVALID_PARTY,
        )
        self.value = value


# --- Lifecycle Errors ---


class InvalidStateTransitionError(LedgerError):
    """Raised when an operation is not allowed from the current status.

    Example: deposit on a SETTLED ledger.
    """

    def __init__(self, current_state: str, attempted_event: str) -> None:
        super().__init__(
            message=f"Invalid state transition: {attempted_event} from {current_state}",
            code=ErrorCode.INVALID_STATE_TRANSITION,
        )
        self.current_state = current_state
        self.attempted_event = attempted_event


class ContractNotFoundError(LedgerError):
    """Raised when a contract ID does not exist in the store."""

    def __init__(self, contract_id: str) -> None:
        super().__init__(
            message=f"Contract not found: {contract_id}",
            code=ErrorCode.CONTRACT_NOT_FOUND,
        )
        self.contract_id = contract_id


class ContractTerminatedError(LedgerError):
    """Raised when a call reaches a ledger that was destroyed by settlement."""

    def __init__(self, contract_id: str) -> None:
        super().__init__(
            message=f"Contract terminated: {contract_id}",
            code=ErrorCode.CONTRACT_TERMINATED,
        )
        self.contract_id = contract_id
