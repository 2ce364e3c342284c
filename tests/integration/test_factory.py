from __future__ import annotations

import pytest

from src.core.vested_token import InvalidTimeRangeError, VestingConfig
from src.integration.asset import TableAsset, TableAssetProvider
from src.integration.factory import VestedTokenFactory, derive_instance_address
from src.state.balances import BalanceTable

DAY = 86_400
T = 19_500 * DAY


def _factory(now: int = T - DAY) -> tuple[VestedTokenFactory, BalanceTable]:
    table = BalanceTable()
    return VestedTokenFactory(TableAssetProvider(table), clock=lambda: now), table


class TestCreate:
    def test_create_binds_config(self):
        factory, _ = _factory()
        token = factory.create("Vested FOO", "vFOO", 18, "FOO", T, T + 365 * DAY)
        assert token.name == "Vested FOO"
        assert token.symbol == "vFOO"
        assert token.underlying_asset_id == "FOO"
        assert (token.start_time, token.end_time) == (T, T + 365 * DAY)
        assert factory.instances[token.address] is token

    def test_invalid_time_range(self):
        factory, _ = _factory()
        with pytest.raises(InvalidTimeRangeError):
            factory.create("x", "x", 18, "FOO", T, T)
        with pytest.raises(InvalidTimeRangeError):
            factory.create("x", "x", 18, "FOO", T, T - 1)
        assert factory.instances == {}

    def test_config_is_immutable(self):
        factory, _ = _factory()
        token = factory.create("x", "x", 18, "FOO", T, T + DAY)
        with pytest.raises(AttributeError):
            token.config.end_time = T + 2 * DAY  # type: ignore[misc]

    def test_addresses_unique_and_deterministic(self):
        f1, _ = _factory()
        f2, _ = _factory()
        a1 = f1.create("x", "x", 18, "FOO", T, T + DAY).address
        a2 = f1.create("x", "x", 18, "FOO", T, T + DAY).address
        b1 = f2.create("x", "x", 18, "FOO", T, T + DAY).address
        assert a1 != a2
        assert a1 == b1

    def test_address_derivation(self):
        config = VestingConfig(underlying_asset_id="FOO", start_time=T, end_time=T + DAY, name="x", symbol="x")
        assert derive_instance_address("f", config, 0) != derive_instance_address("f", config, 1)
        assert derive_instance_address("f", config, 0) != derive_instance_address("g", config, 0)


class TestInstancesShareUnderlyingLedger:
    def test_custody_is_per_instance(self):
        factory, table = _factory()
        table.set("alice", "FOO", 1_000)
        t1 = factory.create("a", "a", 18, "FOO", T, T + 10 * DAY)
        t2 = factory.create("b", "b", 18, "FOO", T, T + 20 * DAY)

        t1.wrap("alice", 300, "alice")
        t2.wrap("alice", 200, "alice")

        assert isinstance(t1._asset, TableAsset)
        assert t1._asset.custody_balance() == 300
        assert table.get(t1.address, "FOO") == 300
        assert table.get(t2.address, "FOO") == 200
        assert table.get("alice", "FOO") == 500
        assert t1.balance_of("alice") == 300
        assert t2.balance_of("alice") == 200

    def test_create_from_config(self):
        factory, _ = _factory()
        config = VestingConfig(underlying_asset_id="FOO", start_time=T, end_time=T + DAY)
        token = factory.create_from_config(config)
        assert token.config is config
