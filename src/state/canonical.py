"""
Byte encodings hashed into config digests, instance addresses and ledger
state roots.

Every digest is `tagged_hash(tag, payload)`: sha256 over a fixed
`vested:<tag>:v<version>\\0` prefix followed by the payload, so digests of
different kinds can never collide.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def _check_json_value(value: Any) -> None:
    """Accept only values with exactly one JSON spelling (no floats)."""
    if value is None or isinstance(value, (bool, int, str)):
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _check_json_value(item)
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"canonical JSON keys must be str, got {type(key).__name__}")
            _check_json_value(item)
        return
    raise TypeError(f"{type(value).__name__} has no canonical JSON form")


def canonical_json_bytes(value: Any) -> bytes:
    """Sorted-key, whitespace-free UTF-8 JSON."""
    _check_json_value(value)
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def tagged_hash(tag: str, payload: bytes, *, version: int = 1) -> str:
    """0x-prefixed sha256 of `payload` under the `tag`/`version` prefix."""
    if not tag or not tag.isascii() or "\x00" in tag or ":" in tag:
        raise ValueError(f"invalid hash tag: {tag!r}")
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        raise ValueError(f"hash version must be a positive int: {version!r}")
    prefix = f"vested:{tag}:v{version}".encode("ascii") + b"\x00"
    return "0x" + hashlib.sha256(prefix + payload).hexdigest()


def encode_uint(value: int) -> bytes:
    """Unsigned LEB128, the only integer encoding used in state roots."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"expected a non-negative int, got {value!r}")
    out = bytearray()
    while value > 0x7F:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def encode_blob(data: bytes) -> bytes:
    return encode_uint(len(data)) + data


def encode_text(text: str) -> bytes:
    """Length-prefixed UTF-8, so adjacent ids cannot run into each other."""
    return encode_blob(text.encode("utf-8"))
