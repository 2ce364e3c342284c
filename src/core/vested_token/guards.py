"""Guard functions for the vested token ledger.

One pure function per action. Each returns None when the action is allowed in
the given PRE-state, or the rejection code naming the failed precondition.
"""

from __future__ import annotations

from ..full_math import U256_MAX
from .math import max_wrap_amount_exclusive
from .types import ActionParams, LedgerState, VestingConfig

VEST_OVER = "vest_over"
AMOUNT_TOO_LARGE = "amount_too_large"
INSUFFICIENT_BALANCE = "insufficient_balance"
INSUFFICIENT_ALLOWANCE = "insufficient_allowance"


def guard_wrap(config: VestingConfig, state: LedgerState, params: ActionParams) -> str | None:
    if params.now >= config.end_time:
        return VEST_OVER
    if params.amount >= max_wrap_amount_exclusive(config.start_time, config.end_time):
        return AMOUNT_TOO_LARGE
    return None


def guard_redeem(config: VestingConfig, state: LedgerState, params: ActionParams) -> str | None:
    return None


def guard_transfer(config: VestingConfig, state: LedgerState, params: ActionParams) -> str | None:
    if params.amount > state.balance_of(params.caller):
        return INSUFFICIENT_BALANCE
    return None


def guard_transfer_from(config: VestingConfig, state: LedgerState, params: ActionParams) -> str | None:
    allowed = state.allowance(params.src, params.caller)
    if allowed != U256_MAX and params.amount > allowed:
        return INSUFFICIENT_ALLOWANCE
    if params.amount > state.balance_of(params.src):
        return INSUFFICIENT_BALANCE
    return None


def guard_approve(config: VestingConfig, state: LedgerState, params: ActionParams) -> str | None:
    return None
