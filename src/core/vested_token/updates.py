"""State transition functions for the vested token ledger.

One pure function per action. Each returns a new `LedgerState` with the
action's updates applied.

Semantics:
- updates evaluate against the PRE-state,
- holder writes are applied in order to one copy of the holder map, so a
  self-transfer debits and credits the same record,
- records that return to (0, 0) are dropped from the map.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict

from ..full_math import U256_MAX
from .math import (
    checked_add,
    checked_sub,
    claimed_share,
    redeemable_amount,
    wrap_pre_credit,
    wrapped_amount_for,
)
from .types import ActionParams, AllowanceKey, HolderId, HolderRecord, LedgerState, VestingConfig


class _HolderWrites:
    """Ordered read/modify/write view over a copy of the holder map."""

    def __init__(self, state: LedgerState) -> None:
        self._holders: Dict[HolderId, HolderRecord] = dict(state.holders)

    def get(self, holder: HolderId) -> HolderRecord:
        return self._holders.get(holder, HolderRecord())

    def put(self, holder: HolderId, record: HolderRecord) -> None:
        if record.is_empty:
            self._holders.pop(holder, None)
        else:
            self._holders[holder] = record

    def adjust(self, holder: HolderId, *, balance: int = 0, claimed: int = 0) -> None:
        """Apply signed deltas with checked u256 arithmetic."""
        rec = self.get(holder)
        new_balance = checked_add(rec.balance, balance) if balance >= 0 else checked_sub(rec.balance, -balance)
        new_claimed = checked_add(rec.claimed, claimed) if claimed >= 0 else checked_sub(rec.claimed, -claimed)
        self.put(holder, HolderRecord(balance=new_balance, claimed=new_claimed))

    def freeze(self) -> Dict[HolderId, HolderRecord]:
        return self._holders


def apply_wrap(config: VestingConfig, state: LedgerState, params: ActionParams) -> LedgerState:
    wrapped = wrapped_amount_for(params.amount, config.start_time, config.end_time, params.now)
    pre_credit = wrap_pre_credit(wrapped, params.amount)

    holders = _HolderWrites(state)
    holders.adjust(params.recipient, balance=wrapped, claimed=pre_credit)

    return replace(
        state,
        holders=holders.freeze(),
        total_supply=checked_add(state.total_supply, wrapped),
        total_claimed=checked_add(state.total_claimed, pre_credit),
        reserve=checked_add(state.reserve, params.amount),
    )


def apply_redeem(config: VestingConfig, state: LedgerState, params: ActionParams) -> LedgerState:
    rec = state.holder(params.caller)
    redeemed = redeemable_amount(rec.balance, rec.claimed, config.start_time, config.end_time, params.now)
    if redeemed == 0:
        return state

    holders = _HolderWrites(state)
    holders.adjust(params.caller, claimed=redeemed)

    return replace(
        state,
        holders=holders.freeze(),
        total_claimed=checked_add(state.total_claimed, redeemed),
        reserve=checked_sub(state.reserve, redeemed),
    )


def _move(state: LedgerState, src: HolderId, dst: HolderId, amount: int) -> Dict[HolderId, HolderRecord]:
    sender = state.holder(src)
    moved_claim = claimed_share(sender.claimed, amount, sender.balance)

    holders = _HolderWrites(state)
    holders.adjust(src, balance=-amount, claimed=-moved_claim)
    holders.adjust(dst, balance=amount, claimed=moved_claim)
    return holders.freeze()


def apply_transfer(config: VestingConfig, state: LedgerState, params: ActionParams) -> LedgerState:
    return replace(state, holders=_move(state, params.caller, params.dst, params.amount))


def apply_transfer_from(config: VestingConfig, state: LedgerState, params: ActionParams) -> LedgerState:
    key: AllowanceKey = (params.src, params.caller)
    allowances = dict(state.allowances)
    allowed = state.allowance(params.src, params.caller)
    if allowed != U256_MAX:
        remaining = checked_sub(allowed, params.amount)
        if remaining == 0:
            allowances.pop(key, None)
        else:
            allowances[key] = remaining

    return replace(
        state,
        holders=_move(state, params.src, params.dst, params.amount),
        allowances=allowances,
    )


def apply_approve(config: VestingConfig, state: LedgerState, params: ActionParams) -> LedgerState:
    key: AllowanceKey = (params.caller, params.spender)
    allowances = dict(state.allowances)
    if params.amount == 0:
        allowances.pop(key, None)
    else:
        allowances[key] = params.amount
    return replace(state, allowances=allowances)
