"""
Underlying asset capability (imperative shell).

A vested token instance never touches the reference asset's ledger directly.
It is handed a capability bound to one asset and to its own custody account:
- `pull(payer, amount)` moves `amount` from `payer` into custody,
- `push(recipient, amount)` moves `amount` from custody to `recipient`.

Both are all-or-nothing: they either complete or raise, and the raised error
is propagated to the caller of the ledger operation unchanged.
"""

from __future__ import annotations

import logging

from ..core.vested_token.errors import AssetTransferError
from ..state.balances import Account, AssetId, BalanceTable

logger = logging.getLogger(__name__)


class UnderlyingAsset:
    """Interface for moving the underlying asset in and out of custody."""

    def pull(self, payer: Account, amount: int) -> None:
        raise NotImplementedError

    def push(self, recipient: Account, amount: int) -> None:
        raise NotImplementedError


class TableAsset(UnderlyingAsset):
    """Capability backed by an in-memory `BalanceTable`."""

    def __init__(self, table: BalanceTable, asset_id: AssetId, custodian: Account) -> None:
        if not isinstance(table, BalanceTable):
            raise TypeError("table must be a BalanceTable")
        if not isinstance(asset_id, str) or not asset_id:
            raise TypeError("asset_id must be a non-empty str")
        if not isinstance(custodian, str) or not custodian:
            raise TypeError("custodian must be a non-empty str")
        self._table = table
        self.asset_id = asset_id
        self.custodian = custodian

    def custody_balance(self) -> int:
        return self._table.get(self.custodian, self.asset_id)

    def _move(self, src: Account, dst: Account, amount: int) -> None:
        try:
            self._table.move(src, dst, self.asset_id, amount)
        except ValueError as exc:
            logger.warning(
                "asset %s transfer rejected: %s -> %s amount=%s (%s)",
                self.asset_id, src, dst, amount, exc,
            )
            raise AssetTransferError(str(exc)) from exc

    def pull(self, payer: Account, amount: int) -> None:
        self._move(payer, self.custodian, amount)

    def push(self, recipient: Account, amount: int) -> None:
        self._move(self.custodian, recipient, amount)


class TableAssetProvider:
    """Hands out `TableAsset` capabilities over one shared `BalanceTable`.

    Used by `VestedTokenFactory` to bind each new instance to its custody account.
    """

    def __init__(self, table: BalanceTable) -> None:
        self.table = table

    def __call__(self, asset_id: AssetId, custodian: Account) -> TableAsset:
        return TableAsset(self.table, asset_id, custodian)
