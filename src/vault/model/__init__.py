"""Vault valuation models."""

from src.vault.model.pool import (
    AssetInfo,
    LiquidationQuote,
    PoolAsset,
    PoolState,
    SimulationResponse,
    SwapQuote,
)
from src.vault.model.snapshot import (
    AssetBreakdown,
    FeeQuote,
    ValuationSnapshot,
    VaultUpdate,
)
from src.vault.model.vault import VaultConfig, VaultFees

__all__ = [
    "AssetBreakdown",
    "AssetInfo",
    "FeeQuote",
    "LiquidationQuote",
    "PoolAsset",
    "PoolState",
    "SimulationResponse",
    "SwapQuote",
    "ValuationSnapshot",
    "VaultConfig",
    "VaultFees",
    "VaultUpdate",
]
