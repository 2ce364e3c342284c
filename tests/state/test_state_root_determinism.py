from __future__ import annotations

from src.core.vested_token import HolderRecord, LedgerState, VestingConfig
from src.state.state_root import compute_state_root, config_digest

CONFIG = VestingConfig(underlying_asset_id="UND", start_time=100, end_time=200, name="Vested UND", symbol="vUND")


def _state(holders: dict[str, HolderRecord], allowances: dict[tuple[str, str], int] | None = None) -> LedgerState:
    supply = sum(r.balance for r in holders.values())
    claimed = sum(r.claimed for r in holders.values())
    return LedgerState(
        holders=holders,
        allowances=allowances or {},
        total_supply=supply,
        total_claimed=claimed,
        reserve=supply - claimed,
    )


def test_state_root_is_insertion_order_independent() -> None:
    s1 = _state(
        {"alice": HolderRecord(10, 1), "bob": HolderRecord(20, 2)},
        {("alice", "x"): 5, ("bob", "y"): 6},
    )
    s2 = _state(
        {"bob": HolderRecord(20, 2), "alice": HolderRecord(10, 1)},
        {("bob", "y"): 6, ("alice", "x"): 5},
    )
    assert compute_state_root(CONFIG, s1) == compute_state_root(CONFIG, s2)


def test_state_root_changes_with_balance() -> None:
    s1 = _state({"alice": HolderRecord(10, 1)})
    s2 = _state({"alice": HolderRecord(11, 1)})
    assert compute_state_root(CONFIG, s1) != compute_state_root(CONFIG, s2)


def test_state_root_changes_with_claim() -> None:
    s1 = _state({"alice": HolderRecord(10, 1)})
    s2 = _state({"alice": HolderRecord(10, 2)})
    assert compute_state_root(CONFIG, s1) != compute_state_root(CONFIG, s2)


def test_state_root_binds_config() -> None:
    other = VestingConfig(underlying_asset_id="UND", start_time=100, end_time=201)
    s = _state({"alice": HolderRecord(10, 1)})
    assert compute_state_root(CONFIG, s) != compute_state_root(other, s)


def test_holder_ids_are_length_prefixed() -> None:
    # "ab" + "c" must not collide with "a" + "bc"
    s1 = _state({}, {("ab", "c"): 1})
    s2 = _state({}, {("a", "bc"): 1})
    assert compute_state_root(CONFIG, s1) != compute_state_root(CONFIG, s2)


def test_config_digest_is_stable_hex() -> None:
    d1 = config_digest(CONFIG)
    d2 = config_digest(
        VestingConfig(underlying_asset_id="UND", start_time=100, end_time=200, name="Vested UND", symbol="vUND")
    )
    assert d1 == d2
    assert d1.startswith("0x")
    assert len(d1) == 66
