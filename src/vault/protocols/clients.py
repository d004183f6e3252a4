"""
Domain query capability protocols.

This module defines the read-only capabilities the valuation core needs from
each domain. Concrete RPC clients live outside this package and satisfy these
protocols structurally; nothing here imports a network library.

Key design principles:
- Capability interfaces instead of inheritance: one protocol per query kind
- Explicit injection: clients are passed to the engine, never held globally
- Raw answers: clients return values as the domain serializes them, and the
  core owns parsing so malformed values surface as parse failures
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ContractQueryClient(Protocol):
    """
    Protocol for read-only contract view calls.

    Semantic Role: Generic smart-query access
    Relationships:
    - Used for: vault supply, published rate, vault config, pool reserves
    - Guarantee: never mutates chain state
    """

    async def query_contract_state(
        self, address: str, query: dict[str, Any]
    ) -> Any:
        """
        Run a view query against a contract.

        Args:
            address: Contract address on this domain
            query: Query message, e.g. {"pool": {}}

        Returns:
            Decoded response (mapping for structured answers, scalar otherwise)

        """
        ...


@runtime_checkable
class BalanceQueryClient(Protocol):
    """
    Protocol for native/ICS-style bank balances.

    Semantic Role: Account holdings on Cosmos-style domains
    """

    async def query_balance(self, address: str, denom: str) -> int | str:
        """
        Get the balance of `denom` held by `address`.

        Returns:
            Base-unit amount as an int or a decimal-digit string

        """
        ...


@runtime_checkable
class TokenBalanceQueryClient(Protocol):
    """
    Protocol for EVM-style fungible-token balances.

    Semantic Role: Account holdings on EVM-style domains
    """

    async def query_token_balance(self, token: str, holder: str) -> int | str:
        """
        Get the balance of token contract `token` held by `holder`.

        Returns:
            Base-unit amount as an int or a decimal-digit string

        """
        ...


@runtime_checkable
class IssuanceDomainClient(ContractQueryClient, TokenBalanceQueryClient, Protocol):
    """Capabilities required on the issuance domain."""


@runtime_checkable
class SettlementDomainClient(ContractQueryClient, BalanceQueryClient, Protocol):
    """Capabilities required on the settlement domain."""


@runtime_checkable
class IntermediaryDomainClient(BalanceQueryClient, Protocol):
    """Capabilities required on the intermediary domain."""
