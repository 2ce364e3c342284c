"""
Vested token integration layer (instances, factory, asset capability, config)
"""

from .asset import TableAsset, TableAssetProvider, UnderlyingAsset
from .config import ConfigError, load_vesting_configs, parse_vesting_configs, vesting_config_from_mapping
from .factory import VestedTokenFactory, derive_instance_address
from .vested_token import VestedToken, system_clock

__all__ = [
    "TableAsset",
    "TableAssetProvider",
    "UnderlyingAsset",
    "ConfigError",
    "load_vesting_configs",
    "parse_vesting_configs",
    "vesting_config_from_mapping",
    "VestedTokenFactory",
    "derive_instance_address",
    "VestedToken",
    "system_clock",
]
