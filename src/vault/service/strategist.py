"""
Strategist-facing valuation service.

This service wires the valuation engine and fee policy to injected domain
clients and runs one valuation cycle: redemption rate and withdrawal fee are
computed concurrently under a deadline and returned together for the
publisher. A cycle that times out or fails yields nothing.
"""

import asyncio
import logging
from decimal import Decimal

from src.vault.config import StrategistConfig
from src.vault.enums import AccountRole
from src.vault.model.snapshot import VaultUpdate
from src.vault.protocols.clients import (
    IntermediaryDomainClient,
    IssuanceDomainClient,
    SettlementDomainClient,
)
from src.vault.service.engine import ValuationEngine
from src.vault.service.fees import FeePolicy, FlatWithdrawFee, WithdrawFeeCandidate
from src.vault.valuation.queries import first_failure

logger = logging.getLogger(__name__)


class VaultValuationService:
    """
    Computes the values the strategist publishes to the vault.

    Clients are passed in explicitly so tests can run the service against
    deterministic fakes.
    """

    def __init__(
        self,
        config: StrategistConfig,
        issuance: IssuanceDomainClient,
        settlement: SettlementDomainClient,
        intermediary: IntermediaryDomainClient,
        fee_candidate: WithdrawFeeCandidate | None = None,
    ) -> None:
        """
        Initialize the valuation service.

        Args:
            config: Strategist configuration
            issuance: Client for the issuance domain
            settlement: Client for the settlement domain
            intermediary: Client for the intermediary domain
            fee_candidate: Fee candidate source (defaults to configured flat fee)

        """
        self.config = config
        self.engine = ValuationEngine(
            issuance=issuance,
            settlement=settlement,
            intermediary=intermediary,
            config=config,
        )
        self.fee_policy = FeePolicy(
            client=issuance,
            vault=self.engine.accounts[AccountRole.VAULT],
            candidate=fee_candidate
            or FlatWithdrawFee(config.fees.flat_withdraw_fee_bps),
        )

    async def calculate_redemption_rate(self) -> Decimal:
        """Compute the redemption rate."""
        return await self.engine.calculate_redemption_rate()

    async def calculate_total_fee(self) -> int:
        """Compute the withdrawal fee in basis points."""
        return await self.fee_policy.calculate_total_fee()

    async def compute_update(self, timeout: float | None = None) -> VaultUpdate:
        """
        Run one valuation cycle.

        Args:
            timeout: Deadline in seconds (defaults to cycle_timeout_seconds)

        Returns:
            VaultUpdate with snapshot and fee quote

        Raises:
            TimeoutError: If the deadline passes; all queries are cancelled
            ValuationError: If any query or parse fails

        """
        deadline = timeout if timeout is not None else self.config.cycle_timeout_seconds

        async with asyncio.timeout(deadline):
            try:
                async with asyncio.TaskGroup() as tg:
                    snapshot_task = tg.create_task(self.engine.value())
                    fee_task = tg.create_task(self.fee_policy.quote_fee())
            except ExceptionGroup as eg:
                raise first_failure(eg)

        update = VaultUpdate(snapshot=snapshot_task.result(), fee=fee_task.result())
        logger.info(
            f"Vault update ready: {update.snapshot.to_summary()} "
            f"fee={update.withdraw_fee_bps}bps"
        )
        return update
