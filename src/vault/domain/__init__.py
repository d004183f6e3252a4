"""
Vault Domain Layer.

This package contains the primitives that give meaning to raw query values
(amounts, precisions, rates) and the identity models for domains and
accounts.

Key principles:
- Amounts are unsigned base-unit integers bounded by Uint128
- Rates are truncated 18-place decimals
- Account variants are a closed tagged union
"""

from src.vault.domain.account import (
    AccountInfo,
    AccountType,
    BaseAccount,
    Domain,
    InstantiateAccountData,
    InstantiatedAccount,
)
from src.vault.domain.primitives import (
    BOOTSTRAP_RATE,
    UINT128_MAX,
    TokenAmount,
    Uint128,
    normalize_decimals,
    parse_amount,
    redemption_ratio,
)

__all__ = [
    "BOOTSTRAP_RATE",
    "UINT128_MAX",
    "AccountInfo",
    "AccountType",
    "BaseAccount",
    "Domain",
    "InstantiateAccountData",
    "InstantiatedAccount",
    "TokenAmount",
    "Uint128",
    "normalize_decimals",
    "parse_amount",
    "redemption_ratio",
]
