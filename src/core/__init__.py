"""
Core vesting ledger algorithms
"""

from .full_math import U256_MAX, div_wide, mul_div, mul_wide
from .vested_token import (
    Action,
    ActionParams,
    Effect,
    Event,
    LedgerState,
    StepResult,
    VestingConfig,
    initial_state,
    step,
    step_or_raise,
)

__all__ = [
    "U256_MAX",
    "div_wide",
    "mul_div",
    "mul_wide",
    "Action",
    "ActionParams",
    "Effect",
    "Event",
    "LedgerState",
    "StepResult",
    "VestingConfig",
    "initial_state",
    "step",
    "step_or_raise",
]
