"""
Asset conversion by simulated swap.

The pool's own simulation view prices the swap along its current curve,
including spread and commission, so the estimate matches what a trade
would return without one being executed.
"""

import logging

from src.vault.domain.primitives import TokenAmount
from src.vault.model.pool import (
    AssetInfo,
    SimulationResponse,
    SwapQuote,
    simulation_query,
)
from src.vault.protocols.clients import ContractQueryClient
from src.vault.valuation.queries import parse_response, run_query

logger = logging.getLogger(__name__)


class SwapValuer:
    """Estimates swap output through a pool without trading."""

    def __init__(self, client: ContractQueryClient, domain: str = "settlement") -> None:
        self.client = client
        self.domain = domain

    async def simulate_swap(
        self,
        pool: str,
        offer_denom: str,
        offer_amount: int,
        ask_denom: str,
        offer_info: AssetInfo | None = None,
        ask_info: AssetInfo | None = None,
    ) -> SwapQuote:
        """
        Estimate how much `ask_denom` the pool returns for the offer.

        A zero offer is answered locally with a zero quote. Pass the asset
        infos the pool lists when an asset is a token contract rather than a
        native denom.

        Args:
            pool: Pool contract address
            offer_denom: Denom being sold
            offer_amount: Base-unit amount being sold
            ask_denom: Denom being bought
            offer_info: Pool listing of the offered asset (native if omitted)
            ask_info: Pool listing of the asked asset (native if omitted)

        Returns:
            SwapQuote with the estimated return amount

        Raises:
            ValueError: If offer and ask denoms are equal, or an info does not
                match its denom
            QueryFailure: If the simulation query fails
            ParseFailure: If the simulation answer is malformed

        """
        if offer_denom == ask_denom:
            raise ValueError(f"Cannot swap {offer_denom} into itself")

        offer = TokenAmount(denom=offer_denom, amount=offer_amount)
        if offer.is_zero():
            return SwapQuote(
                pool=pool, offer=offer, ask_denom=ask_denom, return_amount=0
            )

        query = simulation_query(offer, ask_denom, offer_info, ask_info)
        raw = await run_query(
            self.domain,
            f"swap simulation {offer} -> {ask_denom} in {pool}",
            self.client.query_contract_state(pool, query),
        )
        simulation = parse_response(SimulationResponse, raw, "simulation")

        logger.debug(
            f"Simulated {offer} -> {simulation.return_amount}{ask_denom} "
            f"(spread {simulation.spread_amount}, "
            f"commission {simulation.commission_amount})"
        )

        return SwapQuote(
            pool=pool,
            offer=offer,
            ask_denom=ask_denom,
            return_amount=simulation.return_amount,
            spread_amount=simulation.spread_amount,
            commission_amount=simulation.commission_amount,
        )
