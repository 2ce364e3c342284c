"""Dispatch-table engine for the vested token ledger.

``step(config, state, params)`` is the single entry point. It:

1. Validates parameter domains (u256 amounts, non-empty holder ids).
2. Dispatches to the correct guard / update / effect functions.
3. Checks all invariants on the post-state.
4. Returns a ``StepResult`` (accepted or rejected with reason).

A rejected step never produces a state, so callers that keep the previous
state get all-or-nothing semantics for free.
"""

from __future__ import annotations

from typing import Callable

from ..full_math import U256_MAX
from .effects import (
    effect_approve,
    effect_redeem,
    effect_transfer,
    effect_transfer_from,
    effect_wrap,
)
from .errors import (
    AmountTooLargeError,
    ArithmeticOverflowError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InvariantViolationError,
    ParamDomainError,
    VestedTokenError,
    VestOverError,
)
from .guards import (
    AMOUNT_TOO_LARGE,
    INSUFFICIENT_ALLOWANCE,
    INSUFFICIENT_BALANCE,
    VEST_OVER,
    guard_approve,
    guard_redeem,
    guard_transfer,
    guard_transfer_from,
    guard_wrap,
)
from .invariants import check_all
from .types import Action, ActionParams, Effect, LedgerState, StepResult, VestingConfig
from .updates import (
    apply_approve,
    apply_redeem,
    apply_transfer,
    apply_transfer_from,
    apply_wrap,
)

GuardFn = Callable[[VestingConfig, LedgerState, ActionParams], "str | None"]
UpdateFn = Callable[[VestingConfig, LedgerState, ActionParams], LedgerState]
EffectFn = Callable[[VestingConfig, LedgerState, LedgerState, ActionParams], Effect]

_DISPATCH: dict[Action, tuple[GuardFn, UpdateFn, EffectFn]] = {
    Action.WRAP: (guard_wrap, apply_wrap, effect_wrap),
    Action.REDEEM: (guard_redeem, apply_redeem, effect_redeem),
    Action.TRANSFER: (guard_transfer, apply_transfer, effect_transfer),
    Action.TRANSFER_FROM: (guard_transfer_from, apply_transfer_from, effect_transfer_from),
    Action.APPROVE: (guard_approve, apply_approve, effect_approve),
}

# -- Parameter domains --------------------------------------------------------

# Holder-id fields each action reads (besides `caller`, which every action reads).
_HOLDER_FIELDS: dict[Action, tuple[str, ...]] = {
    Action.WRAP: ("recipient",),
    Action.REDEEM: ("recipient",),
    Action.TRANSFER: ("dst",),
    Action.TRANSFER_FROM: ("src", "dst"),
    Action.APPROVE: ("spender",),
}

_REJECTION_ERRORS: dict[str, type[VestedTokenError]] = {
    VEST_OVER: VestOverError,
    AMOUNT_TOO_LARGE: AmountTooLargeError,
    INSUFFICIENT_BALANCE: InsufficientBalanceError,
    INSUFFICIENT_ALLOWANCE: InsufficientAllowanceError,
}


def _is_u256(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U256_MAX


def _validate_params(params: ActionParams) -> str | None:
    """Check parameter domains. Returns rejection reason or None."""
    for name in ("amount", "now"):
        if not _is_u256(getattr(params, name)):
            return f"param_domain:{name}"
    for name in ("caller",) + _HOLDER_FIELDS.get(params.action, ()):
        value = getattr(params, name)
        if not isinstance(value, str) or not value:
            return f"param_domain:{name}"
    return None


def step(config: VestingConfig, state: LedgerState, params: ActionParams) -> StepResult:
    """Execute one action against the given state.

    Returns ``StepResult`` with ``accepted=True`` on success,
    or ``accepted=False`` with a ``rejection`` reason string.
    """
    entry = _DISPATCH.get(params.action)
    if entry is None:
        return StepResult(accepted=False, rejection=f"unknown_action:{params.action}")

    domain_err = _validate_params(params)
    if domain_err is not None:
        return StepResult(accepted=False, rejection=domain_err)

    guard_fn, update_fn, effect_fn = entry

    reason = guard_fn(config, state, params)
    if reason is not None:
        return StepResult(accepted=False, rejection=reason)

    try:
        new_state = update_fn(config, state, params)
    except ArithmeticOverflowError as exc:
        return StepResult(accepted=False, rejection=f"overflow:{exc}")

    violations = check_all(new_state)
    if violations:
        return StepResult(
            accepted=False,
            rejection=f"invariant:{','.join(violations)}",
        )

    effect = effect_fn(config, state, new_state, params)
    return StepResult(accepted=True, state=new_state, effect=effect)


def step_or_raise(config: VestingConfig, state: LedgerState, params: ActionParams) -> StepResult:
    """Like ``step()`` but raises on rejection instead of returning a result.

    Raises:
        VestOverError, AmountTooLargeError: wrap preconditions.
        InsufficientBalanceError, InsufficientAllowanceError: transfer preconditions.
        ParamDomainError: Parameter outside its domain.
        ArithmeticOverflowError: Checked u256 arithmetic overflowed.
        InvariantViolationError: Post-state violates one or more invariants.
    """
    result = step(config, state, params)
    if result.accepted:
        return result

    reason = result.rejection or ""
    if reason in _REJECTION_ERRORS:
        raise _REJECTION_ERRORS[reason](reason)
    if reason.startswith("param_domain:"):
        raise ParamDomainError(reason)
    if reason.startswith("overflow:"):
        raise ArithmeticOverflowError(reason.removeprefix("overflow:"))
    if reason.startswith("invariant:"):
        violations = reason.removeprefix("invariant:").split(",")
        raise InvariantViolationError(violations)
    raise VestedTokenError(reason)
