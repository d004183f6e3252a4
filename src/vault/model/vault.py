"""
Vault contract query messages and response models.

The vault lives on the issuance domain. Its view calls are expressed as
query messages; the issuance client maps them onto contract calls and
returns decoded values with the contract's camelCase field names.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.vault.domain.primitives import Uint128

UINT32_MAX = 2**32 - 1


class VaultFees(BaseModel):
    """Fee block of the vault configuration."""

    deposit_fee_bps: int = Field(default=0, ge=0, le=UINT32_MAX, alias="depositFeeBps")
    platform_fee_bps: int = Field(
        default=0, ge=0, le=UINT32_MAX, alias="platformFeeBps"
    )
    performance_fee_bps: int = Field(
        default=0, ge=0, le=UINT32_MAX, alias="performanceFeeBps"
    )
    solver_completion_fee: Uint128 = Field(default=0, alias="solverCompletionFee")

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class VaultConfig(BaseModel):
    """
    Vault configuration as returned by the `config` view.

    Only `max_withdraw_fee_bps` feeds the fee computation; the remaining
    fields are carried for diagnostics.
    """

    fees: VaultFees = Field(default_factory=VaultFees)
    max_withdraw_fee_bps: int = Field(ge=0, le=UINT32_MAX, alias="maxWithdrawFeeBps")
    deposit_cap: Uint128 = Field(default=0, alias="depositCap")
    withdraw_lockup_period: int = Field(default=0, ge=0, alias="withdrawLockupPeriod")
    strategist: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


def total_supply_query() -> dict[str, Any]:
    """Build the query for total issued shares."""
    return {"total_supply": {}}


def redemption_rate_query() -> dict[str, Any]:
    """Build the query for the currently published redemption rate."""
    return {"redemption_rate": {}}


def config_query() -> dict[str, Any]:
    """Build the query for the vault configuration."""
    return {"config": {}}
