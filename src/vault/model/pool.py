"""
Liquidity pool query messages and response models.

The settlement pool speaks the Astroport-style query interface: `pool`
returns current reserves and total LP supply, `simulation` runs the pool's
own pricing curve for a hypothetical swap. Amounts arrive as Uint128 strings.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.vault.domain.primitives import TokenAmount, Uint128


class NativeToken(BaseModel):
    """Bank-module denomination."""

    denom: str

    model_config = ConfigDict(frozen=True)


class CW20Token(BaseModel):
    """Token contract denomination."""

    contract_addr: str

    model_config = ConfigDict(frozen=True)


class AssetInfo(BaseModel):
    """
    Identifies a pool asset.

    Exactly one of `native_token` or `token` is set, mirroring the
    externally tagged enum the pool serializes.
    """

    native_token: NativeToken | None = None
    token: CW20Token | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def validate_single_variant(self) -> AssetInfo:
        """Ensure exactly one asset variant is present."""
        if (self.native_token is None) == (self.token is None):
            raise ValueError("Asset info must be either native_token or token")
        return self

    @classmethod
    def from_denom(cls, denom: str) -> AssetInfo:
        """Build native asset info for a bank denom."""
        return cls(native_token=NativeToken(denom=denom))

    @property
    def denom(self) -> str:
        """Get the denom or token contract this info refers to."""
        if self.token is not None:
            return self.token.contract_addr
        if self.native_token is None:
            raise ValueError("Asset info has no variant")
        return self.native_token.denom

    def to_query(self) -> dict[str, Any]:
        """Serialize in the pool's wire format."""
        return self.model_dump(exclude_none=True)


class PoolAsset(BaseModel):
    """One reserve entry of a pool."""

    info: AssetInfo
    amount: Uint128

    model_config = ConfigDict(frozen=True)


class PoolState(BaseModel):
    """
    Current reserves and LP supply of a pool.

    Response model for the `pool` query.
    """

    assets: list[PoolAsset] = Field(min_length=2, max_length=2)
    total_share: Uint128

    model_config = ConfigDict(frozen=True, extra="ignore")

    @property
    def denoms(self) -> list[str]:
        """Get the denoms of both pool assets."""
        return [asset.info.denom for asset in self.assets]

    def reserve_of(self, denom: str) -> int | None:
        """Get the reserve of `denom`, or None if the pool does not hold it."""
        for asset in self.assets:
            if asset.info.denom == denom:
                return asset.amount
        return None

    def info_of(self, denom: str) -> AssetInfo | None:
        """Get the asset info the pool lists for `denom`, or None."""
        for asset in self.assets:
            if asset.info.denom == denom:
                return asset.info
        return None


class SimulationResponse(BaseModel):
    """Response model for the `simulation` query."""

    return_amount: Uint128
    spread_amount: Uint128
    commission_amount: Uint128

    model_config = ConfigDict(frozen=True, extra="ignore")


class LiquidationQuote(BaseModel):
    """Assets that withdrawing an LP position would return right now."""

    pool: str
    lp_amount: int = Field(ge=0)
    unit: TokenAmount = Field(description="Unit-of-account asset returned")
    other: TokenAmount = Field(description="Second pool asset returned")
    unit_info: AssetInfo = Field(description="Pool listing of the unit asset")
    other_info: AssetInfo = Field(description="Pool listing of the other asset")

    model_config = ConfigDict(frozen=True)


class SwapQuote(BaseModel):
    """Estimated result of swapping through a pool, without trading."""

    pool: str
    offer: TokenAmount
    ask_denom: str
    return_amount: int = Field(ge=0)
    spread_amount: int = Field(default=0, ge=0)
    commission_amount: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def output(self) -> TokenAmount:
        """Get the estimated output as a token amount."""
        return TokenAmount(denom=self.ask_denom, amount=self.return_amount)


def pool_query() -> dict[str, Any]:
    """Build the query for current pool reserves."""
    return {"pool": {}}


def simulation_query(
    offer: TokenAmount,
    ask_denom: str,
    offer_info: AssetInfo | None = None,
    ask_info: AssetInfo | None = None,
) -> dict[str, Any]:
    """
    Build the query simulating a swap of `offer` into `ask_denom`.

    Assets are sent as the pool lists them when their info is given, and as
    native denoms otherwise.
    """
    offer_info = offer_info or AssetInfo.from_denom(offer.denom)
    ask_info = ask_info or AssetInfo.from_denom(ask_denom)
    if offer_info.denom != offer.denom or ask_info.denom != ask_denom:
        raise ValueError(
            f"Asset info {offer_info.denom}/{ask_info.denom} does not match "
            f"{offer.denom}/{ask_denom}"
        )

    return {
        "simulation": {
            "offer_asset": {
                "info": offer_info.to_query(),
                "amount": str(offer.amount),
            },
            "ask_asset_info": ask_info.to_query(),
        }
    }
