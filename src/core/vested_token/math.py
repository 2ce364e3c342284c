"""Pure arithmetic for the vested token ledger.

Every function is stateless and operates on plain Python ints, emulating
checked u256 arithmetic: results outside [0, 2**256) raise
`ArithmeticOverflowError` instead of wrapping. Division truncates toward zero
(all operands are non-negative, so `//` is exact floor).
"""

from __future__ import annotations

from ..full_math import U256_MAX, mul_div
from .errors import ArithmeticOverflowError


# -- Checked u256 helpers ----------------------------------------------------

def checked_add(a: int, b: int) -> int:
    c = a + b
    if c > U256_MAX:
        raise ArithmeticOverflowError(f"u256 add overflow: {a} + {b}")
    return c


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise ArithmeticOverflowError(f"u256 sub underflow: {a} - {b}")
    return a - b


def checked_mul(a: int, b: int) -> int:
    c = a * b
    if c > U256_MAX:
        raise ArithmeticOverflowError(f"u256 mul overflow: {a} * {b}")
    return c


# -- Vesting schedule --------------------------------------------------------

def vested_amount(balance: int, start_time: int, end_time: int, now: int) -> int:
    """Entitlement of `balance` at `now` under linear vesting over [start, end].

    Mid-vest, `balance * (now - start)` is checked u256 arithmetic and raises
    `ArithmeticOverflowError` when it leaves the range.
    """
    if now <= start_time:
        return 0
    if now >= end_time:
        return balance
    return checked_mul(balance, now - start_time) // (end_time - start_time)


def redeemable_amount(balance: int, claimed: int, start_time: int, end_time: int, now: int) -> int:
    """Entitlement minus what is already claimed, saturating at zero.

    Transfer rounding dust can leave a sender's claim one unit above its
    mid-vest entitlement; that holder simply has nothing redeemable yet.
    """
    vested = vested_amount(balance, start_time, end_time, now)
    if vested <= claimed:
        return 0
    return vested - claimed


# -- Wrap --------------------------------------------------------------------

def max_wrap_amount_exclusive(start_time: int, end_time: int) -> int:
    """Wrap amounts must be strictly below this bound (mint multiplication guard)."""
    return U256_MAX // (end_time - start_time)


def wrapped_amount_for(underlying_amount: int, start_time: int, end_time: int, now: int) -> int:
    """Wrapped units minted for `underlying_amount` deposited at `now`.

    Before the vest starts the mint is 1:1. Once it is running, the deposit is
    scaled up by `duration / remaining` so the minted tokens' full-vest value
    minus the elapsed share equals the deposit.
    """
    if now < start_time:
        return underlying_amount
    return checked_mul(underlying_amount, end_time - start_time) // (end_time - now)


def wrap_pre_credit(wrapped_amount: int, underlying_amount: int) -> int:
    """Claimed amount credited at mint time for vest time that already elapsed."""
    return checked_sub(wrapped_amount, underlying_amount)


# -- Transfer ----------------------------------------------------------------

def claimed_share(claimed: int, amount: int, balance: int) -> int:
    """Share of `claimed` that moves with `amount` out of `balance` (truncating).

    A zero amount moves nothing; this also covers the empty-sender case where
    `balance` is zero.
    """
    if amount == 0 or claimed == 0:
        return 0
    return mul_div(claimed, amount, balance)
