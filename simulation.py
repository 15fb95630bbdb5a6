#!/usr/bin/env python3
"""Escrow Ledger — End-to-End Simulation.

Drives a LedgerHost through the reference scenarios with a seller and a
buyer party:

    Scenario 1: Deploy with listing
        - Seller deploys with asset A at 20 -> listing visible

    Scenario 2: Duplicate listing
        - Empty deploy, seller lists A at 20, then B at 30 -> rejected,
          listing still {A, 20}

    Scenario 3: Forbidden deposits
        - Seller deposits against itself -> SELF_TRADE_DISALLOWED
        - Seller deposits against another party -> SELLER_CANNOT_DEPOSIT

    Scenario 4: Happy settlement
        - Buyer deposits 600 against a 450 listing, seller settles
        - Buyer holds the asset with 150 change, seller balance 450,
          the instance is terminated

    Scenario 5: Insufficient funds
        - Buyer deposits 400 against a 450 listing -> settle rejected,
          tables unchanged

Usage:
    python simulation.py
    python simulation.py --scenario 4
    python simulation.py --json-logs
"""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING, Any

from escrow_ledger.config import get_settings
from escrow_ledger.domain.enums import ErrorCode
from escrow_ledger.domain.exceptions import LedgerError
from escrow_ledger.domain.types import AssetId, PartyId
from escrow_ledger.host.runtime import LedgerHost
from escrow_ledger.logging_config import get_logger, setup_logging_from_settings

if TYPE_CHECKING:
    import uuid
    from collections.abc import Callable

logger = get_logger("simulation")

SELLER = PartyId("5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY")
BUYER = PartyId("5FHneW46xGXgs5mUiveU4sbTyGBzmstUspZC92UhjJM694ty")
ASSET_A = AssetId(bytes([1]) * 32)
ASSET_B = AssetId(bytes([2]) * 32)


class SimulationError(Exception):
    """Raised when a scenario observes an outcome it did not expect."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def section(text: str) -> None:
    """Print a section header."""
    print(f"\n--- {text} ---\n")


def check(label: str, actual: Any, expected: Any) -> None:
    """Print and assert one observed value."""
    icon = "✅" if actual == expected else "❌"
    print(f"  {icon} {label}: {actual!r}")
    if actual != expected:
        raise SimulationError(f"{label}: expected {expected!r}, got {actual!r}")


def expect_rejection(label: str, code: ErrorCode, call: Callable[[], Any]) -> None:
    """Run ``call`` and require it to fail with ``code``."""
    try:
        call()
    except LedgerError as exc:
        check(label, exc.code, code)
        return
    raise SimulationError(f"{label}: expected {code}, call succeeded")


def print_audit_trail(host: LedgerHost, contract_id: uuid.UUID) -> None:
    """Print the full audit trail for a ledger."""
    print("\n  📜 Audit Trail:")
    for i, evt in enumerate(host.get_events(contract_id), 1):
        old = evt.old_status or "—"
        print(f"    {i}. [{evt.event_type}] {old} → {evt.new_status} (by {evt.actor})")
    print()


# ===========================================================================
# Scenarios
# ===========================================================================
def scenario_1_deploy_with_listing(host: LedgerHost) -> None:
    section("Scenario 1: Deploy with listing")
    cid = host.deploy_with_listing(SELLER, ASSET_A, 20)
    listing = host.get_listing(cid, SELLER)
    check("listing asset", listing.asset if listing else None, ASSET_A)
    check("listing price", listing.price if listing else None, 20)
    print(f"  {host.describe_status(cid, SELLER)}")


def scenario_2_duplicate_listing(host: LedgerHost) -> None:
    section("Scenario 2: Duplicate listing")
    cid = host.deploy_empty(SELLER)
    check("empty listing", host.get_listing(cid, SELLER), None)
    host.insert_asset(cid, SELLER, ASSET_A, 20)
    expect_rejection(
        "second insert",
        ErrorCode.ASSET_ALREADY_LISTED,
        lambda: host.insert_asset(cid, SELLER, ASSET_B, 30),
    )
    listing = host.get_listing(cid, SELLER)
    check("listing kept", (listing.asset, listing.price) if listing else None, (ASSET_A, 20))


def scenario_3_forbidden_deposits(host: LedgerHost) -> None:
    section("Scenario 3: Forbidden deposits")
    cid = host.deploy_with_listing(SELLER, ASSET_A, 450)
    expect_rejection(
        "seller against itself",
        ErrorCode.SELF_TRADE_DISALLOWED,
        lambda: host.deposit_funds(cid, SELLER, SELLER, 600),
    )
    expect_rejection(
        "seller against buyer",
        ErrorCode.SELLER_CANNOT_DEPOSIT,
        lambda: host.deposit_funds(cid, SELLER, BUYER, 600),
    )
    check("seller buyer-balance", host.check_buyer_balance(cid, SELLER), None)


def scenario_4_happy_settlement(host: LedgerHost) -> None:
    section("Scenario 4: Happy settlement")
    cid = host.deploy_with_listing(SELLER, ASSET_A, 450)
    host.deposit_funds(cid, BUYER, SELLER, 600)
    check("buyer balance", host.check_buyer_balance(cid, BUYER), 600)
    print(f"  {host.describe_status(cid, BUYER)}")

    final = host.settle(cid, SELLER, BUYER)
    check("buyer holding", final.buyer_holdings[BUYER].to_holding().asset, ASSET_A)
    check("buyer change", final.buyer_balances.get(BUYER), 150)
    check("seller balance", final.seller_balances.get(SELLER), 450)
    check("seller listing", final.seller_listings.get(SELLER), None)
    expect_rejection(
        "call after settle",
        ErrorCode.CONTRACT_TERMINATED,
        lambda: host.get_listing(cid, SELLER),
    )
    print_audit_trail(host, cid)


def scenario_5_insufficient_funds(host: LedgerHost) -> None:
    section("Scenario 5: Insufficient funds")
    cid = host.deploy_with_listing(SELLER, ASSET_A, 450)
    host.deposit_funds(cid, BUYER, SELLER, 400)
    expect_rejection(
        "settle",
        ErrorCode.INSUFFICIENT_FUNDS,
        lambda: host.settle(cid, SELLER, BUYER),
    )
    check("buyer balance", host.check_buyer_balance(cid, BUYER), 400)
    check("buyer holding", host.get_holding(cid, BUYER), None)
    check("status", host.get_status(cid).status, "FUNDED")


SCENARIOS: dict[int, Callable[[LedgerHost], None]] = {
    1: scenario_1_deploy_with_listing,
    2: scenario_2_duplicate_listing,
    3: scenario_3_forbidden_deposits,
    4: scenario_4_happy_settlement,
    5: scenario_5_insufficient_funds,
}


# ===========================================================================
# Main
# ===========================================================================
def run(scenario: int = 0) -> None:
    """Run one scenario, or all of them when ``scenario`` is 0."""
    host = LedgerHost()
    if scenario == 0:
        selected = list(SCENARIOS.values())
    elif scenario in SCENARIOS:
        selected = [SCENARIOS[scenario]]
    else:
        print(f"Unknown scenario {scenario}. Available: {', '.join(map(str, SCENARIOS))}")
        return

    logger.info("simulation.started", scenarios=[fn.__name__ for fn in selected])
    for fn in selected:
        fn(host)

    print("\n" + "=" * 70)
    print("  ✅ SCENARIOS COMPLETED SUCCESSFULLY")
    print("=" * 70 + "\n")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Escrow Ledger Simulation")
    parser.add_argument(
        "--scenario",
        type=int,
        default=0,
        help="Run a specific scenario (1-5). Default: run all.",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines instead of colored console output.",
    )
    args = parser.parse_args()

    setup_logging_from_settings(get_settings(), force_json=args.json_logs)
    run(args.scenario)
