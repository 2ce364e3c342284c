"""Exception types for the vested token ledger.

Used by ``step_or_raise()`` in ``engine.py`` for callers that prefer
exceptions over ``StepResult`` inspection, and by the imperative shell in
``src/integration``.
"""

from __future__ import annotations


class VestedTokenError(Exception):
    """Base class for every ledger rejection."""


class VestOverError(VestedTokenError):
    """Raised when ``wrap`` is attempted at or after the end of the vest window."""


class AmountTooLargeError(VestedTokenError):
    """Raised when a wrap amount would overflow the mint-amount multiplication."""


class InvalidTimeRangeError(VestedTokenError):
    """Raised when a configuration has ``end_time <= start_time``."""


class InsufficientBalanceError(VestedTokenError):
    """Raised when a transfer amount exceeds the sender's balance."""


class InsufficientAllowanceError(VestedTokenError):
    """Raised when ``transfer_from`` exceeds the caller's allowance."""


class ParamDomainError(VestedTokenError):
    """Raised when a parameter is outside its u256 / identifier domain."""


class ArithmeticOverflowError(VestedTokenError):
    """Raised when checked u256 arithmetic would leave [0, 2**256)."""


class InvariantViolationError(VestedTokenError):
    """Raised when a post-state violates one or more ledger invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


class AssetTransferError(VestedTokenError):
    """Raised by the reference underlying-asset ledger when a pull/push is rejected."""
