"""
Enums for cross-domain vault structure.

This module defines the standardized vocabulary used throughout the valuation
system: which ledger a value lives on, how that ledger executes, and what role
an account plays in the vault's asset flow.

"""

from __future__ import annotations

import enum

# =============================================================================
# DOMAIN ENUMS
# =============================================================================


class DomainRole(str, enum.Enum):
    """
    Role a ledger plays for the vault.

    Each role is served by a single independent domain with its own
    address format and query semantics.
    """

    ISSUANCE = "issuance"  # Vault contract issues shares here
    SETTLEMENT = "settlement"  # Holds the liquidity-pool position
    INTERMEDIARY = "intermediary"  # Custodial relay for in-flight transfers


class ExecutionEnvironment(str, enum.Enum):
    """Execution environment of a domain, deciding which queries it accepts."""

    EVM = "evm"
    COSMWASM = "cosmwasm"
    COSMOS = "cosmos"


# =============================================================================
# ACCOUNT ENUMS
# =============================================================================


class AccountRole(str, enum.Enum):
    """
    Role of an account in the vault's asset flow.

    Roles determine which balance an account contributes to the
    valuation and on which domain it is queried.
    """

    VAULT = "vault"  # Issues shares
    POSITION = "position"  # Holds LP shares
    ISSUANCE_DEPOSIT = "issuance_deposit"  # Pending deposits on issuance domain
    SETTLEMENT_DEPOSIT = "settlement_deposit"  # Pending deposits on settlement domain
    INBOUND_RELAY = "inbound_relay"  # In-flight transfers on intermediary domain

    @property
    def domain_role(self) -> DomainRole:
        """Get the domain this account role lives on."""
        match self:
            case AccountRole.VAULT | AccountRole.ISSUANCE_DEPOSIT:
                return DomainRole.ISSUANCE
            case AccountRole.POSITION | AccountRole.SETTLEMENT_DEPOSIT:
                return DomainRole.SETTLEMENT
            case AccountRole.INBOUND_RELAY:
                return DomainRole.INTERMEDIARY


class AccountKind(str, enum.Enum):
    """Discriminator tag for account type variants."""

    ADDR = "addr"  # Already instantiated
    BASE = "base"  # Base account still to be instantiated
