"""
Deterministic state root hashing (v1) for vested token instances.

This is intended for:
- debugging / audit (stable hashes for the same logical state),
- snapshot comparison between instances or across save/restore,
- deriving stable instance addresses from configuration.
"""

from __future__ import annotations

from ..core.vested_token.types import LedgerState, VestingConfig
from .canonical import canonical_json_bytes, encode_blob, encode_text, encode_uint, tagged_hash


STATE_ROOT_VERSION = 1
CONFIG_DIGEST_VERSION = 1


def config_to_dict(config: VestingConfig) -> dict[str, int | str]:
    return {
        "underlying_asset_id": config.underlying_asset_id,
        "start_time": config.start_time,
        "end_time": config.end_time,
        "name": config.name,
        "symbol": config.symbol,
        "decimals": config.decimals,
    }


def config_digest(config: VestingConfig) -> str:
    """Tagged sha256 of the canonical JSON form of `config`."""
    return tagged_hash("config", canonical_json_bytes(config_to_dict(config)), version=CONFIG_DIGEST_VERSION)


def _encode_holders_section(state: LedgerState) -> bytes:
    entries = sorted(state.holders.items())
    out = bytearray(encode_uint(len(entries)))
    for holder, rec in entries:
        out += encode_text(holder) + encode_uint(rec.balance) + encode_uint(rec.claimed)
    return bytes(out)


def _encode_allowances_section(state: LedgerState) -> bytes:
    entries = sorted(state.allowances.items())
    out = bytearray(encode_uint(len(entries)))
    for (owner, spender), amount in entries:
        out += encode_text(owner) + encode_text(spender) + encode_uint(amount)
    return bytes(out)


def _encode_totals_section(state: LedgerState) -> bytes:
    return encode_uint(state.total_supply) + encode_uint(state.total_claimed) + encode_uint(state.reserve)


def compute_state_root(config: VestingConfig, state: LedgerState) -> str:
    """
    Compute a deterministic state root hash for one instance's ledger.

    Returns a 0x-prefixed sha256 digest. Independent of holder insertion order.
    """
    if not isinstance(config, VestingConfig):
        raise TypeError("config must be a VestingConfig")
    if not isinstance(state, LedgerState):
        raise TypeError("state must be a LedgerState")

    payload = (
        b"CFG"
        + encode_text(config_digest(config))
        + b"TOT"
        + encode_blob(_encode_totals_section(state))
        + b"HLD"
        + encode_blob(_encode_holders_section(state))
        + b"ALW"
        + encode_blob(_encode_allowances_section(state))
    )
    return tagged_hash("state_root", payload, version=STATE_ROOT_VERSION)
