"""Effect functions for the vested token ledger.

One pure function per action. Each computes the ``Effect`` of an accepted
step from the PRE-state, the POST-state and the parameters. Asset movements
listed in the effect are what the shell must perform for the step to commit.
"""

from __future__ import annotations

from .math import claimed_share, wrap_pre_credit, wrapped_amount_for
from .types import (
    ActionParams,
    AssetDirection,
    AssetTransfer,
    Effect,
    Event,
    LedgerState,
    VestingConfig,
)


def effect_wrap(config: VestingConfig, pre: LedgerState, post: LedgerState, params: ActionParams) -> Effect:
    wrapped = wrapped_amount_for(params.amount, config.start_time, config.end_time, params.now)
    return Effect(
        event=Event.WRAP,
        src=params.caller,
        dst=params.recipient,
        amount=wrapped,
        underlying_amount=params.amount,
        claimed_moved=wrap_pre_credit(wrapped, params.amount),
        asset_transfers=(AssetTransfer(AssetDirection.PULL, params.caller, params.amount),),
    )


def effect_redeem(config: VestingConfig, pre: LedgerState, post: LedgerState, params: ActionParams) -> Effect:
    redeemed = post.claimed_of(params.caller) - pre.claimed_of(params.caller)
    transfers: tuple[AssetTransfer, ...] = ()
    if redeemed > 0:
        transfers = (AssetTransfer(AssetDirection.PUSH, params.recipient, redeemed),)
    return Effect(
        event=Event.REDEEM,
        src=params.caller,
        dst=params.recipient,
        amount=redeemed,
        asset_transfers=transfers,
    )


def _transfer_effect(pre: LedgerState, src: str, dst: str, amount: int) -> Effect:
    sender = pre.holder(src)
    return Effect(
        event=Event.TRANSFER,
        src=src,
        dst=dst,
        amount=amount,
        claimed_moved=claimed_share(sender.claimed, amount, sender.balance),
    )


def effect_transfer(config: VestingConfig, pre: LedgerState, post: LedgerState, params: ActionParams) -> Effect:
    return _transfer_effect(pre, params.caller, params.dst, params.amount)


def effect_transfer_from(config: VestingConfig, pre: LedgerState, post: LedgerState, params: ActionParams) -> Effect:
    return _transfer_effect(pre, params.src, params.dst, params.amount)


def effect_approve(config: VestingConfig, pre: LedgerState, post: LedgerState, params: ActionParams) -> Effect:
    return Effect(
        event=Event.APPROVAL,
        src=params.caller,
        dst=params.spender,
        amount=params.amount,
    )
