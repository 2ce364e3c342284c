"""
Underlying asset balance tracking with deterministic ordering.

Implements BalanceTable[Account, AssetId] -> Amount. This is the in-memory
stand-in for the external ledger of the reference asset that vested token
instances pull deposits from and push redemptions to.
"""

from typing import Dict, Tuple


# Type aliases
Account = str  # holder or instance address
AssetId = str  # underlying asset identifier
Amount = int  # Non-negative integer (arbitrary precision)


class BalanceTable:
    """
    Deterministic balance table mapping (account, asset) -> amount.

    Note: this class stores balances in a plain dict. Do not rely on dict
    iteration order; callers should sort keys explicitly at serialization /
    hashing boundaries.
    """

    def __init__(self):
        """Initialize empty balance table."""
        self._balances: Dict[Tuple[Account, AssetId], Amount] = {}

    def get(self, account: Account, asset: AssetId) -> Amount:
        """Get balance for (account, asset). Returns 0 if not found."""
        return self._balances.get((account, asset), 0)

    def set(self, account: Account, asset: AssetId, amount: Amount) -> None:
        """
        Set balance for (account, asset).

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            # Remove zero balances to keep table sparse
            self._balances.pop((account, asset), None)
        else:
            self._balances[(account, asset)] = amount

    def add(self, account: Account, asset: AssetId, delta: Amount) -> None:
        """
        Add delta to balance (delta may be negative for subtraction).

        Raises:
            ValueError: If resulting balance would be negative
        """
        current = self.get(account, asset)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(account, asset, new_balance)

    def subtract(self, account: Account, asset: AssetId, delta: Amount) -> None:
        """
        Subtract a non-negative delta from a balance.

        Raises:
            ValueError: If delta is negative or insufficient balance
        """
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(account, asset, -delta)

    def move(self, src: Account, dst: Account, asset: AssetId, amount: Amount) -> None:
        """
        Move `amount` of `asset` from `src` to `dst` as one step.

        The source is debited first; if that fails nothing has changed.

        Raises:
            ValueError: If amount is negative or `src` holds too little
        """
        self.subtract(src, asset, amount)
        self.add(dst, asset, amount)

    def get_balances_for_asset(self, asset: AssetId) -> Dict[Account, Amount]:
        """Get all balances for a specific asset, keyed by account."""
        result = {}
        for (account, a), amount in self._balances.items():
            if a == asset:
                result[account] = amount
        return result

    def total_for_asset(self, asset: AssetId) -> Amount:
        """Sum of all balances of `asset` (conserved by `move`)."""
        return sum(self.get_balances_for_asset(asset).values())

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
