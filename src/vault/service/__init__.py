"""Vault valuation services."""

from src.vault.service.engine import ValuationEngine
from src.vault.service.fees import (
    FeePolicy,
    FlatWithdrawFee,
    WithdrawFeeCandidate,
    clamp_withdraw_fee,
)
from src.vault.service.strategist import VaultValuationService

__all__ = [
    "FeePolicy",
    "FlatWithdrawFee",
    "ValuationEngine",
    "VaultValuationService",
    "WithdrawFeeCandidate",
    "clamp_withdraw_fee",
]
