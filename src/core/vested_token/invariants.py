"""Invariant checkers for the vested token ledger.

Each function returns True when the invariant holds, and `check_all()`
returns the list of violated invariant IDs (empty = all pass).

These are whole-ledger checks: they walk every holder record. The per-holder
bound is the full-vest one (`claimed <= balance`); see `redeemable_amount()`
for how the mid-vest rounding slack is absorbed.
"""

from __future__ import annotations

from typing import Callable

from ..full_math import U256_MAX
from .types import LedgerState


def _in_u256(x: int) -> bool:
    return 0 <= x <= U256_MAX


def inv_totals_in_range(s: LedgerState) -> bool:
    return _in_u256(s.total_supply) and _in_u256(s.total_claimed) and _in_u256(s.reserve)


def inv_supply_matches_balances(s: LedgerState) -> bool:
    return s.total_supply == sum(rec.balance for rec in s.holders.values())


def inv_claimed_matches_records(s: LedgerState) -> bool:
    return s.total_claimed == sum(rec.claimed for rec in s.holders.values())


def inv_claimed_within_full_vest(s: LedgerState) -> bool:
    return all(rec.claimed <= rec.balance for rec in s.holders.values())


def inv_reserve_covers_owed(s: LedgerState) -> bool:
    return s.reserve == s.total_supply - s.total_claimed


def inv_no_empty_records(s: LedgerState) -> bool:
    return all(not rec.is_empty for rec in s.holders.values())


def inv_allowances_in_range(s: LedgerState) -> bool:
    return all(0 < v <= U256_MAX for v in s.allowances.values())


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[LedgerState], bool]] = {
    "inv_totals_in_range": inv_totals_in_range,
    "inv_supply_matches_balances": inv_supply_matches_balances,
    "inv_claimed_matches_records": inv_claimed_matches_records,
    "inv_claimed_within_full_vest": inv_claimed_within_full_vest,
    "inv_reserve_covers_owed": inv_reserve_covers_owed,
    "inv_no_empty_records": inv_no_empty_records,
    "inv_allowances_in_range": inv_allowances_in_range,
}


def check_all(state: LedgerState) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(state)
    ]
