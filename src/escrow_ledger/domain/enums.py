"""Domain enumerations for the escrow ledger.

These enums define the canonical states, audit event types and failure
codes used throughout the system. They are framework-agnostic.
"""

import enum


class LedgerStatus(enum.StrEnum):
    """Lifecycle states of an escrow ledger.

    State transitions are enforced by the LedgerStateMachine guard.
    See domain/state_machine.py for the transition table.
    """

    LISTED = "LISTED"
    FUNDED = "FUNDED"
    SETTLED = "SETTLED"


class EventType(enum.StrEnum):
    """Types of audit events recorded by the host.

    Every committed mutation produces exactly one event.
    """

    LEDGER_DEPLOYED = "LEDGER_DEPLOYED"
    ASSET_LISTED = "ASSET_LISTED"
    FUNDS_DEPOSITED = "FUNDS_DEPOSITED"
    LEDGER_SETTLED = "LEDGER_SETTLED"
    LEDGER_TERMINATED = "LEDGER_TERMINATED"


class ErrorCode(enum.StrEnum):
    """Distinguishable failure signal carried by every LedgerError."""

    LEDGER_ERROR = "LEDGER_ERROR"

    # Listing
    ASSET_ALREADY_LISTED = "ASSET_ALREADY_LISTED"
    NOT_SELLER = "NOT_SELLER"

    # Deposit
    SELF_TRADE_DISALLOWED = "SELF_TRADE_DISALLOWED"
    SELLER_CANNOT_DEPOSIT = "SELLER_CANNOT_DEPOSIT"
    NO_LISTING_AVAILABLE = "NO_LISTING_AVAILABLE"

    # Settlement
    NO_ASSET_OR_FUND = "NO_ASSET_OR_FUND"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"

    # Arithmetic / arguments
    AMOUNT_OVERFLOW = "AMOUNT_OVERFLOW"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_ASSET_ID = "INVALID_ASSET_ID"
    INVALID_PARTY = "INVALID_PARTY"

    # Lifecycle
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    CONTRACT_NOT_FOUND = "CONTRACT_NOT_FOUND"
    CONTRACT_TERMINATED = "CONTRACT_TERMINATED"
