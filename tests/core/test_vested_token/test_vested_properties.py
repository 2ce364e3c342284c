"""Property tests for the vested token ledger.

Uses Hypothesis to drive random sequences of wrap / redeem / transfer /
approve / transfer_from at non-decreasing times and checks, after every
accepted step:
- supply and claimed totals are conserved by transfers,
- claimed amounts only decrease on the sending side of a transfer,
- redeemable + claimed never exceeds the full-vest entitlement,
- custody reserve always equals what is still owed at full vest.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from src.core.full_math import U256_MAX
from src.core.vested_token import (
    Action,
    ActionParams,
    HolderRecord,
    LedgerState,
    VestingConfig,
    initial_state,
    step,
)
from src.core.vested_token.invariants import check_all
from src.core.vested_token.math import redeemable_amount

START = 1_000_000
END = START + 10_000
CONFIG = VestingConfig(underlying_asset_id="UND", start_time=START, end_time=END)
HOLDERS = ("alice", "bob", "carol")

holder_st = st.sampled_from(HOLDERS)
amount_st = st.one_of(
    st.integers(min_value=0, max_value=1_000),
    st.integers(min_value=0, max_value=10 ** 30),
)

op_st = st.one_of(
    st.tuples(st.just(Action.WRAP), holder_st, holder_st, amount_st),
    st.tuples(st.just(Action.REDEEM), holder_st, holder_st, st.just(0)),
    st.tuples(st.just(Action.TRANSFER), holder_st, holder_st, amount_st),
    st.tuples(st.just(Action.APPROVE), holder_st, holder_st, amount_st),
    st.tuples(st.just(Action.TRANSFER_FROM), holder_st, holder_st, amount_st),
)

# (time advance, op)
script_st = st.lists(
    st.tuples(st.integers(min_value=0, max_value=2_500), op_st),
    min_size=1,
    max_size=40,
)


def _params(op, now: int) -> ActionParams:
    action, a, b, amount = op
    if action == Action.WRAP:
        return ActionParams(action=action, caller=a, now=now, amount=amount, recipient=b)
    if action == Action.REDEEM:
        return ActionParams(action=action, caller=a, now=now, recipient=b)
    if action == Action.TRANSFER:
        return ActionParams(action=action, caller=a, now=now, amount=amount, dst=b)
    if action == Action.APPROVE:
        return ActionParams(action=action, caller=a, now=now, amount=amount, spender=b)
    # transfer_from: `b` spends on behalf of `a`, sending to the next holder
    dst = HOLDERS[(HOLDERS.index(a) + 1) % len(HOLDERS)]
    return ActionParams(action=action, caller=b, now=now, amount=amount, src=a, dst=dst)


def _redeemable(state: LedgerState, holder: str, now: int) -> int:
    rec = state.holder(holder)
    return redeemable_amount(rec.balance, rec.claimed, START, END, now)


@settings(max_examples=200, deadline=None)
@given(start_offset=st.integers(min_value=-3_000, max_value=3_000), script=script_st)
def test_ledger_properties_hold_over_random_sequences(start_offset: int, script) -> None:
    state = initial_state()
    now = START + start_offset

    for advance, op in script:
        now += advance
        params = _params(op, now)
        result = step(CONFIG, state, params)
        if not result.accepted:
            continue
        new = result.state
        assert check_all(new) == []

        if params.action in (Action.TRANSFER, Action.TRANSFER_FROM):
            src = params.caller if params.action == Action.TRANSFER else params.src
            dst = params.dst
            assert new.total_supply == state.total_supply
            assert new.total_claimed == state.total_claimed
            pair_before = state.holder(src).claimed + (state.holder(dst).claimed if dst != src else 0)
            pair_after = new.holder(src).claimed + (new.holder(dst).claimed if dst != src else 0)
            assert pair_before == pair_after
            for h in HOLDERS:
                if h not in (src, dst):
                    assert new.holder(h) == state.holder(h)
        else:
            for h in HOLDERS:
                assert new.claimed_of(h) >= state.claimed_of(h)

        if params.action == Action.REDEEM:
            assert result.effect.amount == new.claimed_of(params.caller) - state.claimed_of(params.caller)
            assert _redeemable(new, params.caller, now) == 0

        for h in HOLDERS:
            rec = new.holder(h)
            assert _redeemable(new, h, now) >= 0
            assert rec.claimed + _redeemable(new, h, now) <= rec.balance

        assert new.reserve == new.total_supply - new.total_claimed
        state = new


@settings(max_examples=200, deadline=None)
@given(
    balance=st.integers(min_value=1, max_value=U256_MAX),
    data=st.data(),
)
def test_transfer_split_bounds(balance: int, data) -> None:
    claimed = data.draw(st.integers(min_value=0, max_value=balance))
    amount = data.draw(st.integers(min_value=0, max_value=balance))
    state = LedgerState(
        holders={"alice": HolderRecord(balance=balance, claimed=claimed)},
        total_supply=balance,
        total_claimed=claimed,
        reserve=balance - claimed,
    )
    r = step(CONFIG, state, ActionParams(action=Action.TRANSFER, caller="alice", now=START, amount=amount, dst="bob"))
    assert r.accepted
    moved = r.state.claimed_of("bob")
    # truncating share: exact lower bound, less than one unit short
    assert moved * balance <= claimed * amount < (moved + 1) * balance
    assert r.state.claimed_of("alice") + moved == claimed
