"""
Vault strategist configuration using Pydantic Settings.

This module provides configuration management for the valuation core,
allowing environment-based configuration with type validation and defaults.
Addresses and denominations are static: they are read once and never change
between valuation cycles.
"""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.vault.domain.account import AccountInfo, Domain
from src.vault.enums import AccountRole, DomainRole, ExecutionEnvironment


class IssuanceDomainConfig(BaseSettings):
    """Issuance (EVM) domain: the vault contract and its deposit account."""

    model_config = SettingsConfigDict(env_prefix="VAULT_ISSUANCE_")

    chain_name: str = "ethereum"
    vault_address: str = Field(default="", description="Vault contract address")
    unit_token_address: str = Field(
        default="", description="Unit-of-account token contract address"
    )
    unit_token_decimals: int = Field(
        default=6,
        ge=0,
        le=36,
        description="Decimals of the unit-of-account token on this domain",
    )
    deposit_account: str = Field(default="", description="Deposit account address")


class SettlementDomainConfig(BaseSettings):
    """Settlement (CosmWasm) domain: the pool position and its deposit account."""

    model_config = SettingsConfigDict(env_prefix="VAULT_SETTLEMENT_")

    chain_name: str = "neutron"
    pool_address: str = Field(default="", description="Liquidity pool contract")
    lp_token_denom: str = Field(default="", description="LP share denomination")
    unit_denom: str = Field(
        default="", description="Unit-of-account denomination on this domain"
    )
    other_denom: str = Field(
        default="untrn", description="Second asset of the pool"
    )
    unit_decimals: int = Field(
        default=6,
        ge=0,
        le=36,
        description="Base-unit precision all balances are normalized to",
    )
    position_account: str = Field(default="", description="LP position account")
    deposit_account: str = Field(default="", description="Deposit account address")


class IntermediaryDomainConfig(BaseSettings):
    """Intermediary (relay) domain: the inbound relay account."""

    model_config = SettingsConfigDict(env_prefix="VAULT_INTERMEDIARY_")

    chain_name: str = "noble"
    inbound_relay_account: str = Field(
        default="", description="Remote address of the inbound relay account"
    )
    unit_denom: str = Field(
        default="uusdc", description="Unit-of-account denomination on this domain"
    )


class FeeConfig(BaseSettings):
    """Withdrawal fee configuration."""

    model_config = SettingsConfigDict(env_prefix="VAULT_FEES_")

    flat_withdraw_fee_bps: int = Field(
        default=100,
        ge=0,
        le=10_000,
        description="Provisional flat withdrawal fee candidate in basis points",
    )


class StrategistConfig(BaseSettings):
    """Root configuration combining all sub-configs."""

    model_config = SettingsConfigDict(env_prefix="VAULT_")

    # Sub-configurations
    issuance: IssuanceDomainConfig = Field(default_factory=IssuanceDomainConfig)
    settlement: SettlementDomainConfig = Field(default_factory=SettlementDomainConfig)
    intermediary: IntermediaryDomainConfig = Field(
        default_factory=IntermediaryDomainConfig
    )
    fees: FeeConfig = Field(default_factory=FeeConfig)

    # Global settings
    cycle_timeout_seconds: float | None = Field(
        default=30.0,
        gt=0,
        description="Deadline for one valuation cycle (None = no deadline)",
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )

    @classmethod
    def from_env(cls) -> "StrategistConfig":
        """
        Load configuration from environment variables.

        Returns:
            Configured StrategistConfig instance

        """
        return cls(
            issuance=IssuanceDomainConfig(),
            settlement=SettlementDomainConfig(),
            intermediary=IntermediaryDomainConfig(),
            fees=FeeConfig(),
        )

    def domains(self) -> dict[DomainRole, Domain]:
        """Get the identity of each configured domain."""
        return {
            DomainRole.ISSUANCE: Domain(
                name=self.issuance.chain_name,
                role=DomainRole.ISSUANCE,
                environment=ExecutionEnvironment.EVM,
            ),
            DomainRole.SETTLEMENT: Domain(
                name=self.settlement.chain_name,
                role=DomainRole.SETTLEMENT,
                environment=ExecutionEnvironment.COSMWASM,
            ),
            DomainRole.INTERMEDIARY: Domain(
                name=self.intermediary.chain_name,
                role=DomainRole.INTERMEDIARY,
                environment=ExecutionEnvironment.COSMOS,
            ),
        }

    def accounts(self) -> dict[AccountRole, AccountInfo]:
        """
        Describe every account the valuation reads.

        Accounts with a configured address are instantiated accounts; an empty
        address describes a base account that has not been created yet, and
        resolving its address fails.
        """
        addresses = {
            AccountRole.VAULT: self.issuance.vault_address,
            AccountRole.ISSUANCE_DEPOSIT: self.issuance.deposit_account,
            AccountRole.POSITION: self.settlement.position_account,
            AccountRole.SETTLEMENT_DEPOSIT: self.settlement.deposit_account,
            AccountRole.INBOUND_RELAY: self.intermediary.inbound_relay_account,
        }
        domains = self.domains()

        accounts = {}
        for role, addr in addresses.items():
            domain = domains[role.domain_role]
            if addr:
                accounts[role] = AccountInfo.new_addr(role.value, domain, addr)
            else:
                accounts[role] = AccountInfo.new_base(role.value, domain)
        return accounts

    def configure_logging(self) -> None:
        """Apply the configured log level to the root logger."""
        logging.basicConfig(
            level=self.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
