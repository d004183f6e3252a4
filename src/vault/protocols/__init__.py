"""Domain query protocols."""

from src.vault.protocols.clients import (
    BalanceQueryClient,
    ContractQueryClient,
    IntermediaryDomainClient,
    IssuanceDomainClient,
    SettlementDomainClient,
    TokenBalanceQueryClient,
)

__all__ = [
    "BalanceQueryClient",
    "ContractQueryClient",
    "IntermediaryDomainClient",
    "IssuanceDomainClient",
    "SettlementDomainClient",
    "TokenBalanceQueryClient",
]
