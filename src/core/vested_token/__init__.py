"""`vested_token`: linear-vesting wrapped token ledger.

A holder wraps an underlying asset into transferable tokens that vest
linearly over a fixed [start_time, end_time] window:
- deterministic, integer-only transitions with checked u256 arithmetic,
- immutable state (frozen dataclasses),
- fail-closed guards and invariant checks.

Public API:
- `initial_state() -> LedgerState`
- `step(config, state, params) -> StepResult`
- `step_or_raise(config, state, params) -> StepResult` (raises on rejection)
"""

from .engine import step, step_or_raise
from .errors import (
    AmountTooLargeError,
    ArithmeticOverflowError,
    AssetTransferError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InvalidTimeRangeError,
    InvariantViolationError,
    ParamDomainError,
    VestedTokenError,
    VestOverError,
)
from .math import redeemable_amount, vested_amount, wrapped_amount_for
from .state import initial_state, state_from_dict, state_to_dict
from .types import (
    Action,
    ActionParams,
    AssetDirection,
    AssetTransfer,
    Effect,
    Event,
    HolderRecord,
    LedgerState,
    StepResult,
    VestingConfig,
)

__all__ = [
    "step",
    "step_or_raise",
    "initial_state",
    "state_from_dict",
    "state_to_dict",
    "redeemable_amount",
    "vested_amount",
    "wrapped_amount_for",
    "Action",
    "ActionParams",
    "AssetDirection",
    "AssetTransfer",
    "Effect",
    "Event",
    "HolderRecord",
    "LedgerState",
    "StepResult",
    "VestingConfig",
    "VestedTokenError",
    "VestOverError",
    "AmountTooLargeError",
    "InvalidTimeRangeError",
    "InsufficientBalanceError",
    "InsufficientAllowanceError",
    "ParamDomainError",
    "ArithmeticOverflowError",
    "InvariantViolationError",
    "AssetTransferError",
]
