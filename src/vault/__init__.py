"""Cross-domain vault valuation package."""

from src.vault.model import ValuationSnapshot, VaultUpdate
from src.vault.service import ValuationEngine, VaultValuationService

__all__ = [
    "ValuationEngine",
    "ValuationSnapshot",
    "VaultUpdate",
    "VaultValuationService",
]
