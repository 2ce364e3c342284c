"""
Vested token instance (imperative shell around the functional core).

`VestedToken` binds one immutable `VestingConfig` to:
- the current `LedgerState` (replaced wholesale after each accepted step),
- a clock, read exactly once at the start of every operation,
- the underlying asset capability for this instance's custody account.

Every mutating call is all-or-nothing: the core computes the next state
without touching the current one, the asset movement listed in the step's
effect is performed, and only then is the next state committed. Any
rejection or capability failure leaves the instance unchanged. Listeners run
after the commit; a listener failure is logged and never raised.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from ..core.vested_token import (
    Action,
    ActionParams,
    AssetDirection,
    Effect,
    InvariantViolationError,
    LedgerState,
    VestedTokenError,
    VestingConfig,
    initial_state,
    redeemable_amount,
    step_or_raise,
)
from ..core.vested_token.invariants import check_all
from ..state.state_root import compute_state_root
from .asset import UnderlyingAsset

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
Listener = Callable[[Effect], None]


def system_clock() -> int:
    return int(time.time())


class VestedToken:
    """One wrapped, transferable claim on a linearly vesting pool of an underlying asset."""

    def __init__(
        self,
        config: VestingConfig,
        asset: UnderlyingAsset,
        *,
        address: str,
        clock: Optional[Clock] = None,
        state: Optional[LedgerState] = None,
    ) -> None:
        if not isinstance(config, VestingConfig):
            raise TypeError("config must be a VestingConfig")
        if not isinstance(asset, UnderlyingAsset):
            raise TypeError("asset must be an UnderlyingAsset")
        if not isinstance(address, str) or not address:
            raise TypeError("address must be a non-empty str")
        self._config = config
        self._asset = asset
        self._address = address
        self._clock: Clock = clock or system_clock
        if state is None:
            state = initial_state()
        else:
            violations = check_all(state)
            if violations:
                raise InvariantViolationError(violations)
        self._state = state
        self._listeners: List[Listener] = []
        self.events: List[Effect] = []

    # -- read surface ----------------------------------------------------------

    @property
    def config(self) -> VestingConfig:
        return self._config

    @property
    def address(self) -> str:
        return self._address

    @property
    def state(self) -> LedgerState:
        return self._state

    @property
    def underlying_asset_id(self) -> str:
        return self._config.underlying_asset_id

    @property
    def start_time(self) -> int:
        return self._config.start_time

    @property
    def end_time(self) -> int:
        return self._config.end_time

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def symbol(self) -> str:
        return self._config.symbol

    @property
    def decimals(self) -> int:
        return self._config.decimals

    @property
    def total_supply(self) -> int:
        return self._state.total_supply

    def balance_of(self, holder: str) -> int:
        return self._state.balance_of(holder)

    def claimed_amount(self, holder: str) -> int:
        return self._state.claimed_of(holder)

    def allowance(self, owner: str, spender: str) -> int:
        return self._state.allowance(owner, spender)

    def get_redeemable_amount(self, holder: str) -> int:
        """Underlying units `holder` could redeem right now.

        Raises:
            ArithmeticOverflowError: If `balance * (now - start_time)` leaves
                the u256 range mid-vest, exactly as `redeem` would.
        """
        rec = self._state.holder(holder)
        return redeemable_amount(
            rec.balance, rec.claimed, self._config.start_time, self._config.end_time, self._clock()
        )

    def state_root(self) -> str:
        return compute_state_root(self._config, self._state)

    def add_listener(self, listener: Listener) -> None:
        """Register a callback invoked with every committed `Effect`."""
        self._listeners.append(listener)

    # -- mutating surface ------------------------------------------------------

    def wrap(self, caller: str, underlying_amount: int, recipient: str) -> int:
        """Deposit `underlying_amount` from `caller`, minting wrapped tokens to `recipient`."""
        effect = self._execute(
            ActionParams(
                action=Action.WRAP,
                caller=caller,
                now=self._clock(),
                amount=underlying_amount,
                recipient=recipient,
            )
        )
        return effect.amount

    def redeem(self, caller: str, recipient: str) -> int:
        """Realize everything `caller` has vested but not yet claimed, paying `recipient`."""
        effect = self._execute(
            ActionParams(action=Action.REDEEM, caller=caller, now=self._clock(), recipient=recipient)
        )
        return effect.amount

    def transfer(self, caller: str, to: str, amount: int) -> bool:
        self._execute(
            ActionParams(action=Action.TRANSFER, caller=caller, now=self._clock(), amount=amount, dst=to)
        )
        return True

    def transfer_from(self, caller: str, src: str, to: str, amount: int) -> bool:
        self._execute(
            ActionParams(
                action=Action.TRANSFER_FROM,
                caller=caller,
                now=self._clock(),
                amount=amount,
                src=src,
                dst=to,
            )
        )
        return True

    def approve(self, caller: str, spender: str, amount: int) -> bool:
        self._execute(
            ActionParams(action=Action.APPROVE, caller=caller, now=self._clock(), amount=amount, spender=spender)
        )
        return True

    # -- internals -------------------------------------------------------------

    def _execute(self, params: ActionParams) -> Effect:
        try:
            result = step_or_raise(self._config, self._state, params)
        except VestedTokenError as exc:
            logger.info(
                "%s %s rejected for %s: %s",
                self._address, params.action.value, params.caller, exc,
            )
            raise

        effect = result.effect
        if effect is None or result.state is None:
            raise AssertionError("internal error: accepted step without state/effect")

        # Effects carry at most one asset movement, so a failure here leaves
        # nothing to undo.
        for move in effect.asset_transfers:
            try:
                if move.direction is AssetDirection.PULL:
                    self._asset.pull(move.account, move.amount)
                else:
                    self._asset.push(move.account, move.amount)
            except Exception:
                logger.warning(
                    "%s %s aborted: asset %s of %s for %s failed",
                    self._address, params.action.value, move.direction.value, move.amount, move.account,
                )
                raise

        self._state = result.state
        self.events.append(effect)
        logger.debug(
            "%s %s by %s at t=%s: amount=%s",
            self._address, params.action.value, params.caller, params.now, effect.amount,
        )
        # The operation is final once committed; a failing listener cannot undo it.
        for listener in self._listeners:
            try:
                listener(effect)
            except Exception:
                logger.exception("%s listener %r failed on %s", self._address, listener, effect.event.value)
        return effect

    def __repr__(self) -> str:
        return (
            f"VestedToken(address={self._address!r}, asset={self._config.underlying_asset_id!r}, "
            f"window=[{self._config.start_time}, {self._config.end_time}], supply={self._state.total_supply})"
        )
