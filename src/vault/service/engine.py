"""
Cross-domain valuation engine.

This engine computes the vault's redemption rate from live state on three
domains. Independent queries run concurrently in one task group; the only
ordering constraint is that the swap simulation consumes the liquidation
result. Any failure cancels the remaining queries and aborts the valuation,
so a snapshot is either built from a complete set of answers or not at all.
"""

import asyncio
import logging
from decimal import Decimal

from src.vault.config import StrategistConfig
from src.vault.domain.primitives import normalize_decimals, redemption_ratio
from src.vault.enums import AccountRole
from src.vault.model.pool import LiquidationQuote, SwapQuote
from src.vault.model.snapshot import AssetBreakdown, ValuationSnapshot
from src.vault.model.vault import redemption_rate_query, total_supply_query
from src.vault.protocols.clients import (
    IntermediaryDomainClient,
    IssuanceDomainClient,
    SettlementDomainClient,
)
from src.vault.valuation.position import PositionValuer
from src.vault.valuation.queries import first_failure, query_amount
from src.vault.valuation.swap import SwapValuer

logger = logging.getLogger(__name__)


class ValuationEngine:
    """
    Computes the vault redemption rate from live cross-domain state.

    Features:
    - Concurrent dispatch of all independent queries
    - Dependent liquidation then swap simulation of the LP position
    - Truncating fixed-point ratio with a 1.0 bootstrap for empty vaults
    - No caching: every call recomputes from scratch
    """

    def __init__(
        self,
        issuance: IssuanceDomainClient,
        settlement: SettlementDomainClient,
        intermediary: IntermediaryDomainClient,
        config: StrategistConfig,
        position_valuer: PositionValuer | None = None,
        swap_valuer: SwapValuer | None = None,
    ) -> None:
        """
        Initialize the valuation engine.

        Args:
            issuance: Client for the issuance domain
            settlement: Client for the settlement domain
            intermediary: Client for the intermediary domain
            config: Static addresses, denoms and precisions
            position_valuer: LP liquidation simulator (defaults to settlement pool)
            swap_valuer: Swap simulator (defaults to settlement pool)

        """
        self.issuance = issuance
        self.settlement = settlement
        self.intermediary = intermediary
        self.config = config
        self.accounts = config.accounts()

        settlement_name = config.settlement.chain_name
        self.position_valuer = position_valuer or PositionValuer(
            settlement, domain=settlement_name
        )
        self.swap_valuer = swap_valuer or SwapValuer(settlement, domain=settlement_name)

    async def calculate_redemption_rate(self) -> Decimal:
        """
        Compute shares per unit of assets.

        Returns:
            Redemption rate with 18 fractional digits

        Raises:
            QueryFailure: If any domain query fails
            ParseFailure: If any answer is malformed

        """
        snapshot = await self.value()
        return snapshot.redemption_rate

    async def value(self) -> ValuationSnapshot:
        """
        Build a full valuation snapshot.

        Returns:
            ValuationSnapshot with shares, asset breakdown and rate

        """
        # Resolve every address before the first query goes out
        addresses = {role: info.address for role, info in self.accounts.items()}

        try:
            async with asyncio.TaskGroup() as tg:
                shares_task = tg.create_task(
                    self._query_total_shares(addresses[AccountRole.VAULT])
                )
                published_task = tg.create_task(
                    self._query_published_rate(addresses[AccountRole.VAULT])
                )
                position_task = tg.create_task(
                    self._value_position(addresses[AccountRole.POSITION])
                )
                issuance_deposit_task = tg.create_task(
                    self._query_issuance_deposit(
                        addresses[AccountRole.ISSUANCE_DEPOSIT]
                    )
                )
                relay_task = tg.create_task(
                    self._query_relay_balance(addresses[AccountRole.INBOUND_RELAY])
                )
                settlement_deposit_task = tg.create_task(
                    self._query_settlement_deposit(
                        addresses[AccountRole.SETTLEMENT_DEPOSIT]
                    )
                )
        except ExceptionGroup as eg:
            raise first_failure(eg)

        total_shares = shares_task.result()
        published_rate = published_task.result()
        liquidation, swap = position_task.result()

        logger.info(f"current vault redemption rate: {published_rate}")

        breakdown = AssetBreakdown(
            issuance_deposit=issuance_deposit_task.result(),
            intermediary_relay=relay_task.result(),
            settlement_deposit=settlement_deposit_task.result(),
            liquidated_unit=liquidation.unit.amount,
            swapped_other=swap.return_amount,
        )
        total_assets = breakdown.total
        unit = self.config.settlement.unit_denom

        logger.info(f"total assets: {total_assets}{unit}")
        logger.info(f"total shares: {total_shares}SHARES")

        ratio = redemption_ratio(total_shares, total_assets)
        bootstrapped = total_assets == 0
        if bootstrapped:
            logger.info("zero total assets; defaulting to ratio of 1.0")
        else:
            logger.info(f"redemption rate: {ratio}")

        return ValuationSnapshot(
            total_shares=total_shares,
            breakdown=breakdown,
            redemption_rate=ratio,
            published_rate=published_rate,
            bootstrapped=bootstrapped,
            liquidation=liquidation,
            swap=swap,
        )

    async def _query_total_shares(self, vault: str) -> int:
        return await query_amount(
            self.config.issuance.chain_name,
            "vault total supply",
            self.issuance.query_contract_state(vault, total_supply_query()),
        )

    async def _query_published_rate(self, vault: str) -> int:
        return await query_amount(
            self.config.issuance.chain_name,
            "vault redemption rate",
            self.issuance.query_contract_state(vault, redemption_rate_query()),
        )

    async def _value_position(
        self, position: str
    ) -> tuple[LiquidationQuote, SwapQuote]:
        """Liquidate the position's LP shares, then price the non-unit asset."""
        settlement = self.config.settlement
        lp_amount = await query_amount(
            settlement.chain_name,
            "position LP balance",
            self.settlement.query_balance(position, settlement.lp_token_denom),
        )

        liquidation = await self.position_valuer.simulate_liquidation(
            settlement.pool_address,
            lp_amount,
            settlement.unit_denom,
            settlement.other_denom,
        )
        swap = await self.swap_valuer.simulate_swap(
            settlement.pool_address,
            liquidation.other.denom,
            liquidation.other.amount,
            settlement.unit_denom,
            offer_info=liquidation.other_info,
            ask_info=liquidation.unit_info,
        )
        return liquidation, swap

    async def _query_issuance_deposit(self, deposit: str) -> int:
        issuance = self.config.issuance
        amount = await query_amount(
            issuance.chain_name,
            "issuance deposit balance",
            self.issuance.query_token_balance(issuance.unit_token_address, deposit),
        )
        return normalize_decimals(
            amount,
            issuance.unit_token_decimals,
            self.config.settlement.unit_decimals,
        )

    async def _query_relay_balance(self, relay: str) -> int:
        intermediary = self.config.intermediary
        return await query_amount(
            intermediary.chain_name,
            "inbound relay balance",
            self.intermediary.query_balance(relay, intermediary.unit_denom),
        )

    async def _query_settlement_deposit(self, deposit: str) -> int:
        settlement = self.config.settlement
        return await query_amount(
            settlement.chain_name,
            "settlement deposit balance",
            self.settlement.query_balance(deposit, settlement.unit_denom),
        )
