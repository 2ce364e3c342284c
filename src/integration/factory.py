"""
Vested token instance factory.

Every instance shares the `VestedToken` code and carries only its own frozen
`VestingConfig`, ledger state and address. Addresses are derived
deterministically from the factory id, the canonical config digest and a
per-factory creation nonce, so two factories replaying the same creations
assign the same addresses.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from ..core.vested_token import VestingConfig
from ..state.canonical import canonical_json_bytes, tagged_hash
from ..state.state_root import config_digest
from .asset import UnderlyingAsset
from .vested_token import Clock, VestedToken

logger = logging.getLogger(__name__)

INSTANCE_ADDRESS_VERSION = 1

# (underlying_asset_id, custodian_address) -> capability for that custody account
AssetProvider = Callable[[str, str], UnderlyingAsset]


def derive_instance_address(factory_id: str, config: VestingConfig, nonce: int) -> str:
    payload = canonical_json_bytes({"factory": factory_id, "config": config_digest(config), "nonce": nonce})
    return tagged_hash("instance", payload, version=INSTANCE_ADDRESS_VERSION)


class VestedTokenFactory:
    def __init__(
        self,
        asset_provider: AssetProvider,
        *,
        factory_id: str = "vested-token-factory",
        clock: Optional[Clock] = None,
    ) -> None:
        if not isinstance(factory_id, str) or not factory_id:
            raise TypeError("factory_id must be a non-empty str")
        self._asset_provider = asset_provider
        self._clock = clock
        self.factory_id = factory_id
        self._nonce = 0
        self.instances: Dict[str, VestedToken] = {}

    def create(
        self,
        name: str,
        symbol: str,
        decimals: int,
        underlying_asset_id: str,
        start_time: int,
        end_time: int,
    ) -> VestedToken:
        """
        Create a new instance bound to an immutable configuration.

        Raises:
            InvalidTimeRangeError: If end_time <= start_time
        """
        config = VestingConfig(
            underlying_asset_id=underlying_asset_id,
            start_time=start_time,
            end_time=end_time,
            name=name,
            symbol=symbol,
            decimals=decimals,
        )
        return self.create_from_config(config)

    def create_from_config(self, config: VestingConfig) -> VestedToken:
        if not isinstance(config, VestingConfig):
            raise TypeError("config must be a VestingConfig")
        address = derive_instance_address(self.factory_id, config, self._nonce)
        asset = self._asset_provider(config.underlying_asset_id, address)
        token = VestedToken(config, asset, address=address, clock=self._clock)

        self._nonce += 1
        self.instances[address] = token
        logger.info(
            "created vested token %s (%s) over %s, window [%s, %s]",
            address, config.symbol or "-", config.underlying_asset_id, config.start_time, config.end_time,
        )
        return token
