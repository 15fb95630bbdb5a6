"""Domain layer — pure ledger logic with zero framework dependencies."""

from escrow_ledger.domain.enums import (
    ErrorCode,
    EventType,
    LedgerStatus,
)
from escrow_ledger.domain.exceptions import (
    AmountOverflowError,
    AssetAlreadyListedError,
    ContractNotFoundError,
    ContractTerminatedError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidAssetIdError,
    InvalidPartyError,
    InvalidStateTransitionError,
    LedgerError,
    NoAssetOrFundError,
    NoListingAvailableError,
    NotSellerError,
    SelfTradeDisallowedError,
    SellerCannotDepositError,
)
from escrow_ledger.domain.ledger import EscrowLedger
from escrow_ledger.domain.state_machine import (
    LedgerStateMachine,
    validate_transition,
)
from escrow_ledger.domain.types import (
    DEFAULT_PARTY,
    MAX_AMOUNT,
    AssetId,
    Holding,
    Listing,
    PartyId,
)

__all__ = [
    "ErrorCode",
    "EventType",
    "LedgerStatus",
    "AmountOverflowError",
    "AssetAlreadyListedError",
    "ContractNotFoundError",
    "ContractTerminatedError",
    "InsufficientFundsError",
    "InvalidAmountError",
    "InvalidAssetIdError",
    "InvalidPartyError",
    "InvalidStateTransitionError",
    "LedgerError",
    "NoAssetOrFundError",
    "NoListingAvailableError",
    "NotSellerError",
    "SelfTradeDisallowedError",
    "SellerCannotDepositError",
    "EscrowLedger",
    "LedgerStateMachine",
    "validate_transition",
    "DEFAULT_PARTY",
    "MAX_AMOUNT",
    "AssetId",
    "Holding",
    "Listing",
    "PartyId",
]
