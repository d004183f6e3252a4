"""
Valuation snapshot models - simple Pydantic implementation.

These models represent the result of one valuation cycle. They are immutable
(frozen) and never persisted: every invocation builds them from scratch out
of freshly queried state.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from src.vault.model.pool import LiquidationQuote, SwapQuote


class AssetBreakdown(BaseModel):
    """
    Unit-of-account amounts making up the vault's total assets.

    All components are in the unit-of-account's base units.
    """

    issuance_deposit: int = Field(ge=0, description="Issuance deposit account")
    intermediary_relay: int = Field(ge=0, description="Inbound relay account")
    settlement_deposit: int = Field(ge=0, description="Settlement deposit account")
    liquidated_unit: int = Field(ge=0, description="Unit asset from LP liquidation")
    swapped_other: int = Field(ge=0, description="Unit estimate for the other asset")

    model_config = ConfigDict(frozen=True)

    @property
    def pending_deposits(self) -> int:
        """Get unit-of-account balances not yet deployed into the position."""
        return self.issuance_deposit + self.intermediary_relay + self.settlement_deposit

    @property
    def position_value(self) -> int:
        """Get the simulated unit-of-account value of the LP position."""
        return self.liquidated_unit + self.swapped_other

    @property
    def total(self) -> int:
        """Get total assets."""
        return self.pending_deposits + self.position_value


class ValuationSnapshot(BaseModel):
    """
    Point-in-time valuation of the vault.

    `published_rate` is what the vault currently reports on-chain. It is kept
    for comparison only and has no influence on `redemption_rate`.
    """

    total_shares: int = Field(ge=0)
    breakdown: AssetBreakdown
    redemption_rate: Decimal
    published_rate: int = Field(ge=0, description="Rate currently on the vault")
    bootstrapped: bool = Field(
        default=False, description="True when total assets were zero"
    )
    liquidation: LiquidationQuote
    swap: SwapQuote

    model_config = ConfigDict(frozen=True)

    @property
    def total_assets(self) -> int:
        """Get total assets in unit-of-account base units."""
        return self.breakdown.total

    def to_summary(self) -> str:
        """Generate a human-readable summary."""
        parts = [
            f"shares={self.total_shares}",
            f"assets={self.total_assets}",
            f"rate={self.redemption_rate}",
        ]
        if self.bootstrapped:
            parts.append("(bootstrap)")
        return " ".join(parts)


class FeeQuote(BaseModel):
    """Withdrawal fee candidate and the fee after clamping to the vault's cap."""

    candidate_bps: int = Field(ge=0)
    max_withdraw_fee_bps: int = Field(ge=0)
    fee_bps: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def clamped(self) -> bool:
        """Check whether the candidate exceeded the cap."""
        return self.fee_bps < self.candidate_bps


class VaultUpdate(BaseModel):
    """Redemption rate and withdrawal fee handed to the on-chain publisher."""

    snapshot: ValuationSnapshot
    fee: FeeQuote

    model_config = ConfigDict(frozen=True)

    @property
    def redemption_rate(self) -> Decimal:
        """Get the computed redemption rate."""
        return self.snapshot.redemption_rate

    @property
    def withdraw_fee_bps(self) -> int:
        """Get the final withdrawal fee."""
        return self.fee.fee_bps
