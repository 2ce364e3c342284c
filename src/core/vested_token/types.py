"""Data types for the vested token ledger.

All types are frozen dataclasses (immutable). Transitions never mutate a
`LedgerState`; they build a new one.

Units/conventions:
- wrapped token units and underlying units are both plain u256 ints,
- times are integer seconds since the epoch,
- holders are identified by non-empty strings (addresses / pubkeys).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique
from types import MappingProxyType
from typing import Mapping

from ..full_math import U256_MAX
from .errors import InvalidTimeRangeError

HolderId = str
AllowanceKey = tuple[HolderId, HolderId]  # (owner, spender)


def _require_int(value: object, name: str, *, lo: int = 0, hi: int = U256_MAX) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if not (lo <= value <= hi):
        raise ValueError(f"{name} must be in [{lo}, {hi}]: {value}")


@dataclass(frozen=True)
class VestingConfig:
    """Immutable per-instance configuration, fixed for the instance's lifetime."""

    underlying_asset_id: str
    start_time: int
    end_time: int
    name: str = ""
    symbol: str = ""
    decimals: int = 18

    def __post_init__(self) -> None:
        if not isinstance(self.underlying_asset_id, str) or not self.underlying_asset_id:
            raise TypeError("underlying_asset_id must be a non-empty str")
        _require_int(self.start_time, "start_time")
        _require_int(self.end_time, "end_time")
        if self.end_time <= self.start_time:
            raise InvalidTimeRangeError(
                f"end_time must be after start_time: start={self.start_time} end={self.end_time}"
            )
        if not isinstance(self.name, str):
            raise TypeError("name must be a str")
        if not isinstance(self.symbol, str):
            raise TypeError("symbol must be a str")
        _require_int(self.decimals, "decimals", hi=255)

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class HolderRecord:
    """Per-holder balance and already-claimed underlying amount."""

    balance: int = 0
    claimed: int = 0

    def __post_init__(self) -> None:
        _require_int(self.balance, "balance")
        _require_int(self.claimed, "claimed")

    @property
    def is_empty(self) -> bool:
        return self.balance == 0 and self.claimed == 0


EMPTY_HOLDER = HolderRecord()


@dataclass(frozen=True)
class LedgerState:
    """Complete ledger state of one vested token instance.

    `holders` and `allowances` are sparse: absent keys read as zero. `reserve`
    is the ledger's own accounting of underlying units held in custody.
    """

    holders: Mapping[HolderId, HolderRecord] = field(default_factory=lambda: MappingProxyType({}))
    allowances: Mapping[AllowanceKey, int] = field(default_factory=lambda: MappingProxyType({}))
    total_supply: int = 0
    total_claimed: int = 0
    reserve: int = 0

    def __post_init__(self) -> None:
        # Freeze the mappings so a state can be shared safely between snapshots.
        if not isinstance(self.holders, MappingProxyType):
            object.__setattr__(self, "holders", MappingProxyType(dict(self.holders)))
        if not isinstance(self.allowances, MappingProxyType):
            object.__setattr__(self, "allowances", MappingProxyType(dict(self.allowances)))

    def holder(self, holder: HolderId) -> HolderRecord:
        return self.holders.get(holder, EMPTY_HOLDER)

    def balance_of(self, holder: HolderId) -> int:
        return self.holder(holder).balance

    def claimed_of(self, holder: HolderId) -> int:
        return self.holder(holder).claimed

    def allowance(self, owner: HolderId, spender: HolderId) -> int:
        return self.allowances.get((owner, spender), 0)


@unique
class Action(Enum):
    WRAP = "wrap"
    REDEEM = "redeem"
    TRANSFER = "transfer"
    TRANSFER_FROM = "transfer_from"
    APPROVE = "approve"


@unique
class Event(Enum):
    WRAP = "Wrap"
    REDEEM = "Redeem"
    TRANSFER = "Transfer"
    APPROVAL = "Approval"


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. Unused fields default to empty / 0.

    `now` is read once by the caller and never re-read during the step.
    """

    action: Action
    caller: HolderId
    now: int
    amount: int = 0        # wrap (underlying) / transfer / transfer_from / approve
    recipient: HolderId = ""  # wrap / redeem
    src: HolderId = ""     # transfer_from
    dst: HolderId = ""     # transfer / transfer_from
    spender: HolderId = ""  # approve


@unique
class AssetDirection(Enum):
    PULL = "pull"  # payer -> custody
    PUSH = "push"  # custody -> recipient


@dataclass(frozen=True)
class AssetTransfer:
    """An underlying-asset movement the shell must perform for the step to commit."""

    direction: AssetDirection
    account: HolderId
    amount: int


@dataclass(frozen=True)
class Effect:
    """Observable outcome of an accepted step."""

    event: Event
    src: HolderId = ""
    dst: HolderId = ""
    amount: int = 0              # wrapped minted / redeemed / transferred / approved
    underlying_amount: int = 0   # wrap only
    claimed_moved: int = 0       # wrap pre-credit / transfer claimed share
    asset_transfers: tuple[AssetTransfer, ...] = ()


@dataclass(frozen=True)
class StepResult:
    """Result of a single ledger step."""

    accepted: bool
    state: LedgerState | None = None
    effect: Effect | None = None
    rejection: str | None = None
