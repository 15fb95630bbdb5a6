"""Tests for the LedgerStateMachine domain guard.

These tests verify that:
    1. All valid transitions are allowed.
    2. SETTLED is final.
    3. The convenience function validate_transition works.
"""

from __future__ import annotations

import pytest
from statemachine.exceptions import TransitionNotAllowed

from escrow_ledger.domain.state_machine import (
    LedgerStateMachine,
    validate_transition,
)


class TestHappyPath:
    """Test the full lifecycle: LISTED -> FUNDED -> SETTLED."""

    def test_full_lifecycle(self) -> None:
        sm = LedgerStateMachine("LISTED")
        assert sm.status == "LISTED"

        sm.deposit()
        assert sm.status == "FUNDED"

        sm.deposit()
        assert sm.status == "FUNDED"

        sm.settle()
        assert sm.status == "SETTLED"

    def test_default_is_listed(self) -> None:
        assert LedgerStateMachine().status == "LISTED"


class TestListAsset:
    def test_listing_keeps_listed(self) -> None:
        assert validate_transition("LISTED", "list_asset") == "LISTED"

    def test_listing_keeps_funded(self) -> None:
        assert validate_transition("FUNDED", "list_asset") == "FUNDED"


class TestIllegalTransitions:
    def test_settle_from_listed(self) -> None:
        sm = LedgerStateMachine("LISTED")
        with pytest.raises(TransitionNotAllowed):
            sm.settle()

    @pytest.mark.parametrize("event", ["list_asset", "deposit", "settle"])
    def test_settled_is_final(self, event: str) -> None:
        with pytest.raises(TransitionNotAllowed):
            validate_transition("SETTLED", event)


class TestAllowedEvents:
    def test_listed_allowed(self) -> None:
        allowed = LedgerStateMachine("LISTED").get_allowed_events()
        assert set(allowed) == {"list_asset", "deposit"}

    def test_funded_allowed(self) -> None:
        allowed = LedgerStateMachine("FUNDED").get_allowed_events()
        assert set(allowed) == {"list_asset", "deposit", "settle"}

    def test_settled_allowed(self) -> None:
        assert LedgerStateMachine("SETTLED").get_allowed_events() == []


class TestValidateTransitionFunction:
    def test_valid_transition(self) -> None:
        assert validate_transition("FUNDED", "settle") == "SETTLED"

    def test_invalid_event_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown event"):
            validate_transition("FUNDED", "refund")

    def test_invalid_status(self) -> None:
        with pytest.raises(ValueError, match="Unknown status"):
            LedgerStateMachine("CANCELLED")
