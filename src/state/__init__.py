"""
State management for vested token instances
"""

from .balances import BalanceTable
from .state_root import compute_state_root, config_digest

__all__ = [
    "BalanceTable",
    "compute_state_root",
    "config_digest",
]
