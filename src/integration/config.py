"""
Vested token configuration loading.

A YAML document describes one instance or a list of them:

    tokens:
      - name: Vested FOO
        symbol: vFOO
        decimals: 18
        underlying_asset_id: FOO
        start_time: 1700000000
        end_time: 1708640000

A document that is itself a single token mapping is accepted too. Fail-closed:
unknown keys, missing required keys and non-integer times are rejected.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from ..core.vested_token import VestingConfig


_REQUIRED_KEYS = frozenset({"underlying_asset_id", "start_time", "end_time"})
_OPTIONAL_KEYS = frozenset({"name", "symbol", "decimals"})


class ConfigError(ValueError):
    """Raised when a configuration document is malformed."""


def _require_mapping(obj: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(obj, Mapping):
        raise ConfigError(f"{name} must be a mapping")
    return obj


def vesting_config_from_mapping(obj: Any, *, name: str = "token") -> VestingConfig:
    """Build a `VestingConfig` from a plain mapping (e.g. parsed YAML/JSON).

    Raises `InvalidTimeRangeError` when the window is empty or reversed.
    """
    data = _require_mapping(obj, name=name)
    keys = set(data)
    unknown = keys - _REQUIRED_KEYS - _OPTIONAL_KEYS
    if unknown:
        raise ConfigError(f"{name}: unknown keys {sorted(unknown)}")
    missing = _REQUIRED_KEYS - keys
    if missing:
        raise ConfigError(f"{name}: missing keys {sorted(missing)}")

    for key in ("start_time", "end_time", "decimals"):
        if key in data and (not isinstance(data[key], int) or isinstance(data[key], bool)):
            raise ConfigError(f"{name}.{key} must be an integer")
    for key in ("underlying_asset_id", "name", "symbol"):
        if key in data and not isinstance(data[key], str):
            raise ConfigError(f"{name}.{key} must be a string")

    try:
        return VestingConfig(**dict(data))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name}: {exc}") from exc


def parse_vesting_configs(text: str) -> list[VestingConfig]:
    root = yaml.safe_load(text)
    if root is None:
        return []
    root = _require_mapping(root, name="document")
    if "tokens" not in root:
        return [vesting_config_from_mapping(root)]
    if set(root) != {"tokens"}:
        raise ConfigError(f"document: unknown keys {sorted(set(root) - {'tokens'})}")
    tokens = root["tokens"]
    if not isinstance(tokens, list):
        raise ConfigError("tokens must be a list")
    return [vesting_config_from_mapping(t, name=f"tokens[{i}]") for i, t in enumerate(tokens)]


def load_vesting_configs(path: str | Path) -> list[VestingConfig]:
    """Load every token configuration from a YAML file."""
    return parse_vesting_configs(Path(path).read_text(encoding="utf-8"))
