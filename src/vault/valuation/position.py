"""
LP position valuation by simulated liquidation.

An LP share is valued as the reserves it would withdraw from the pool right
now: each reserve is split pro rata to the share of total LP supply, rounding
down as the pool itself does. Nothing is submitted to the ledger.
"""

import logging

from src.vault.domain.primitives import TokenAmount
from src.vault.errors import ParseFailure
from src.vault.model.pool import LiquidationQuote, PoolState, pool_query
from src.vault.protocols.clients import ContractQueryClient
from src.vault.valuation.queries import parse_response, run_query

logger = logging.getLogger(__name__)


def share_of_reserve(reserve: int, lp_amount: int, total_share: int) -> int:
    """
    Get the part of `reserve` owned by `lp_amount` out of `total_share`.

    Examples:
        >>> share_of_reserve(1_000, 250, 1_000)
        250
        >>> share_of_reserve(10, 1, 3)
        3
        >>> share_of_reserve(500, 0, 0)
        0

    """
    if total_share == 0:
        return 0
    return reserve * lp_amount // total_share


class PositionValuer:
    """
    Simulates withdrawing LP shares from a pool.

    Deterministic given the same reserve state: two calls against an
    unchanged pool return identical quotes.
    """

    def __init__(self, client: ContractQueryClient, domain: str = "settlement") -> None:
        """
        Initialize the position valuer.

        Args:
            client: Contract query capability of the pool's domain
            domain: Domain name used in diagnostics

        """
        self.client = client
        self.domain = domain

    async def fetch_pool_state(self, pool: str) -> PoolState:
        """Query current reserves and total LP supply of `pool`."""
        raw = await run_query(
            self.domain,
            f"pool reserves of {pool}",
            self.client.query_contract_state(pool, pool_query()),
        )
        return parse_response(PoolState, raw, "pool")

    async def simulate_liquidation(
        self,
        pool: str,
        lp_amount: int,
        unit_denom: str,
        other_denom: str,
    ) -> LiquidationQuote:
        """
        Value `lp_amount` LP shares as the two assets they would withdraw.

        Args:
            pool: Pool contract address
            lp_amount: LP shares to liquidate
            unit_denom: Unit-of-account denom held by the pool
            other_denom: The pool's other denom

        Returns:
            LiquidationQuote with both constituent amounts

        Raises:
            ValueError: If the denoms are equal or lp_amount is negative
            QueryFailure: If the pool query fails
            ParseFailure: If the pool state is malformed or inconsistent

        """
        if unit_denom == other_denom:
            raise ValueError(f"Pool assets must differ, got {unit_denom} twice")
        if lp_amount < 0:
            raise ValueError("LP amount must be non-negative")

        state = await self.fetch_pool_state(pool)

        unit_reserve = state.reserve_of(unit_denom)
        other_reserve = state.reserve_of(other_denom)
        unit_info = state.info_of(unit_denom)
        other_info = state.info_of(other_denom)
        if (
            unit_reserve is None
            or other_reserve is None
            or unit_info is None
            or other_info is None
        ):
            raise ParseFailure(
                "pool.assets",
                state.denoms,
                f"expected {unit_denom} and {other_denom}",
            )
        if lp_amount > state.total_share:
            raise ParseFailure(
                "lp_amount",
                lp_amount,
                f"exceeds pool total share {state.total_share}",
            )

        unit_amount = share_of_reserve(unit_reserve, lp_amount, state.total_share)
        other_amount = share_of_reserve(other_reserve, lp_amount, state.total_share)

        logger.debug(
            f"Liquidating {lp_amount} of {state.total_share} LP shares in {pool}: "
            f"{unit_amount}{unit_denom} + {other_amount}{other_denom}"
        )

        return LiquidationQuote(
            pool=pool,
            lp_amount=lp_amount,
            unit=TokenAmount(denom=unit_denom, amount=unit_amount),
            other=TokenAmount(denom=other_denom, amount=other_amount),
            unit_info=unit_info,
            other_info=other_info,
        )
