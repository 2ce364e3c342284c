"""State construction and serialization for the vested token ledger.

`initial_state()` returns the empty ledger (no holders, nothing in custody).

Round-trip property (tested): `state_from_dict(state_to_dict(s)) == s` for all valid states.
Holder and allowance entries are emitted sorted so the dict form is stable.
"""

from __future__ import annotations

from typing import Any, Mapping

from .types import HolderRecord, LedgerState

_TOTAL_FIELDS: tuple[str, ...] = ("total_supply", "total_claimed", "reserve")


def initial_state() -> LedgerState:
    """Return the canonical empty ledger state."""
    return LedgerState()


def state_to_dict(state: LedgerState) -> dict[str, Any]:
    """Serialize a LedgerState to plain JSON-compatible data."""
    out: dict[str, Any] = {name: getattr(state, name) for name in _TOTAL_FIELDS}
    out["holders"] = {
        holder: {"balance": rec.balance, "claimed": rec.claimed}
        for holder, rec in sorted(state.holders.items())
    }
    out["allowances"] = [
        [owner, spender, amount]
        for (owner, spender), amount in sorted(state.allowances.items())
    ]
    return out


def _as_int(value: Any, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    return int(value)  # normalize int subclasses (e.g. numpy)


def state_from_dict(d: Mapping[str, Any]) -> LedgerState:
    """Deserialize a dict to a LedgerState. Raises KeyError on missing fields."""
    totals = {name: _as_int(d[name], name) for name in _TOTAL_FIELDS}

    holders: dict[str, HolderRecord] = {}
    for holder, rec in d["holders"].items():
        if not isinstance(holder, str) or not holder:
            raise TypeError("holder ids must be non-empty str")
        holders[holder] = HolderRecord(
            balance=_as_int(rec["balance"], f"holders[{holder}].balance"),
            claimed=_as_int(rec["claimed"], f"holders[{holder}].claimed"),
        )

    allowances: dict[tuple[str, str], int] = {}
    for entry in d["allowances"]:
        owner, spender, amount = entry
        if not isinstance(owner, str) or not isinstance(spender, str):
            raise TypeError("allowance owner/spender must be str")
        allowances[(owner, spender)] = _as_int(amount, f"allowances[{owner},{spender}]")

    return LedgerState(holders=holders, allowances=allowances, **totals)
