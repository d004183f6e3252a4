"""Read-only simulations that value pool positions in the unit of account."""

from src.vault.valuation.position import PositionValuer, share_of_reserve
from src.vault.valuation.swap import SwapValuer

__all__ = [
    "PositionValuer",
    "SwapValuer",
    "share_of_reserve",
]
