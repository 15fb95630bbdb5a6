"""Tests for domain enumerations."""

from __future__ import annotations

from escrow_ledger.domain.enums import ErrorCode, EventType, LedgerStatus


class TestLedgerStatus:
    def test_all_statuses_exist(self) -> None:
        assert {s.value for s in LedgerStatus} == {"LISTED", "FUNDED", "SETTLED"}

    def test_status_is_str_enum(self) -> None:
        assert isinstance(LedgerStatus.LISTED, str)
        assert LedgerStatus.SETTLED == "SETTLED"


class TestEventType:
    def test_all_event_types_exist(self) -> None:
        assert len(EventType) == 5


class TestErrorCode:
    def test_every_failure_condition_has_a_code(self) -> None:
        expected = {
            "ASSET_ALREADY_LISTED",
            "SELF_TRADE_DISALLOWED",
            "SELLER_CANNOT_DEPOSIT",
            "NO_LISTING_AVAILABLE",
            "NO_ASSET_OR_FUND",
            "INSUFFICIENT_FUNDS",
            "AMOUNT_OVERFLOW",
        }
        assert expected <= {c.value for c in ErrorCode}

    def test_codes_are_distinct(self) -> None:
        assert len({c.value for c in ErrorCode}) == len(ErrorCode)
