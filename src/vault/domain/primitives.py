"""
Domain primitives for vault valuation.

These primitives give semantic meaning to the raw numbers returned by domain
queries. On-chain amounts are unsigned base-unit integers bounded by Uint128;
rates are fixed-point decimals with 18 fractional digits, truncated toward
zero so that the same inputs always reproduce the same rate.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Final

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from src.vault.errors import ParseFailure

# Largest amount representable by a Uint128
UINT128_MAX: Final[int] = 2**128 - 1

# Fractional digits carried by a redemption rate
RATE_DECIMAL_PLACES: Final[int] = 18
RATE_SCALE: Final[int] = 10**RATE_DECIMAL_PLACES

# Ratio returned for a vault that holds no assets yet
BOOTSTRAP_RATE: Final[Decimal] = Decimal("1")


def parse_amount(value: object, field: str = "amount") -> int:
    """
    Parse a raw query value into an unsigned base-unit amount.

    Domain clients answer with either integers or decimal-digit strings
    (CosmWasm serializes Uint128 as a string). Anything else, including
    negative numbers, fractional values and booleans, is rejected.

    Args:
        value: Raw value returned by a query
        field: Name used in the failure message

    Returns:
        Amount as a non-negative int no larger than UINT128_MAX

    Raises:
        ParseFailure: If the value is not a valid Uint128

    """
    if isinstance(value, bool):
        raise ParseFailure(field, value, "boolean is not an amount")

    if isinstance(value, int):
        amount = value
    elif isinstance(value, str):
        text = value.strip()
        if not text.isdigit() or not text.isascii():
            raise ParseFailure(field, value, "expected decimal digits")
        amount = int(text)
    else:
        raise ParseFailure(field, value, f"unsupported type {type(value).__name__}")

    if amount < 0:
        raise ParseFailure(field, value, "amount must be non-negative")
    if amount > UINT128_MAX:
        raise ParseFailure(field, value, "amount exceeds Uint128")
    return amount


def normalize_decimals(amount: int, from_decimals: int, to_decimals: int) -> int:
    """
    Rescale a base-unit amount between token precisions.

    Scaling down truncates toward zero.

    Examples:
        >>> normalize_decimals(1_500_000, 6, 6)
        1500000
        >>> normalize_decimals(1_999_999_999_999, 18, 6)
        1
        >>> normalize_decimals(7, 2, 6)
        70000

    """
    if from_decimals < 0 or to_decimals < 0:
        raise ValueError("Token decimals must be non-negative")

    if from_decimals == to_decimals:
        return amount
    if from_decimals > to_decimals:
        return amount // 10 ** (from_decimals - to_decimals)
    return amount * 10 ** (to_decimals - from_decimals)


def redemption_ratio(total_shares: int, total_assets: int) -> Decimal:
    """
    Compute shares per unit of assets with truncating fixed-point division.

    The division is carried out on integers so no intermediate rounding can
    push the result up. A vault with no assets is priced at BOOTSTRAP_RATE.

    Examples:
        >>> redemption_ratio(900_000, 1_000_000)
        Decimal('0.900000000000000000')
        >>> redemption_ratio(0, 0)
        Decimal('1')
        >>> redemption_ratio(2, 3)
        Decimal('0.666666666666666666')

    """
    if total_shares < 0 or total_assets < 0:
        raise ValueError("Shares and assets must be non-negative")

    if total_assets == 0:
        return BOOTSTRAP_RATE

    scaled = total_shares * RATE_SCALE // total_assets
    return Decimal(f"{scaled}E-{RATE_DECIMAL_PLACES}")


def _validate_uint128(value: object) -> int:
    """Adapt parse_amount to pydantic's validation error channel."""
    try:
        return parse_amount(value)
    except ParseFailure as exc:
        raise ValueError(exc.reason) from exc


# Amount field type for response models
Uint128 = Annotated[int, BeforeValidator(_validate_uint128)]


class TokenAmount(BaseModel):
    """
    An amount of a single asset in its base units.

    Denoms are native denominations on Cosmos-style domains and token
    contract addresses on EVM-style domains.
    """

    denom: str = Field(description="Asset denomination")
    amount: Uint128 = Field(description="Base-unit amount")

    model_config = ConfigDict(frozen=True)

    def is_zero(self) -> bool:
        """Check if the amount is zero."""
        return self.amount == 0

    def __str__(self) -> str:
        """String representation."""
        return f"{self.amount}{self.denom}"
