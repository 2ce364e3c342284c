"""Tests for src/core/vested_token/invariants.py: whole-ledger checkers."""

from dataclasses import replace

from src.core.vested_token.invariants import INVARIANT_REGISTRY, check_all
from src.core.vested_token.state import initial_state
from src.core.vested_token.types import HolderRecord, LedgerState


def _consistent(**holders: tuple[int, int]) -> LedgerState:
    recs = {h: HolderRecord(balance=b, claimed=c) for h, (b, c) in holders.items()}
    supply = sum(r.balance for r in recs.values())
    claimed = sum(r.claimed for r in recs.values())
    return LedgerState(holders=recs, total_supply=supply, total_claimed=claimed, reserve=supply - claimed)


class TestAllInvariantsOnInitialState:
    def test_initial_state_passes_all(self):
        assert check_all(initial_state()) == []

    def test_registry_has_7_invariants(self):
        assert len(INVARIANT_REGISTRY) == 7

    def test_consistent_state_passes(self):
        assert check_all(_consistent(alice=(300, 90), bob=(5, 5))) == []


class TestSupplyMatchesBalances:
    def test_fail(self):
        s = replace(_consistent(alice=(300, 90)), total_supply=301, reserve=211)
        assert "inv_supply_matches_balances" in check_all(s)


class TestClaimedMatchesRecords:
    def test_fail(self):
        s = replace(_consistent(alice=(300, 90)), total_claimed=89, reserve=211)
        assert "inv_claimed_matches_records" in check_all(s)


class TestClaimedWithinFullVest:
    def test_fail(self):
        s = _consistent(alice=(10, 11))
        assert "inv_claimed_within_full_vest" in check_all(s)


class TestReserveCoversOwed:
    def test_fail_short(self):
        s = replace(_consistent(alice=(300, 90)), reserve=209)
        assert "inv_reserve_covers_owed" in check_all(s)

    def test_fail_excess(self):
        s = replace(_consistent(alice=(300, 90)), reserve=211)
        assert "inv_reserve_covers_owed" in check_all(s)


class TestNoEmptyRecords:
    def test_fail(self):
        s = LedgerState(holders={"ghost": HolderRecord()})
        assert "inv_no_empty_records" in check_all(s)


class TestAllowancesInRange:
    def test_zero_allowance_stored_fails(self):
        s = LedgerState(allowances={("alice", "bob"): 0})
        assert "inv_allowances_in_range" in check_all(s)

    def test_positive_allowance_passes(self):
        s = LedgerState(allowances={("alice", "bob"): 5})
        assert check_all(s) == []
