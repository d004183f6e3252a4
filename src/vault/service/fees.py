"""
Withdrawal fee policy.

The fee is a candidate value clamped to the vault's configured maximum. The
candidate comes from a pluggable WithdrawFeeCandidate; the only shipped
candidate is a flat provisional value. Composing a vault-level fee with the
position's pool fee is not implemented yet and belongs behind that protocol.
"""

import logging
from typing import Protocol

from src.vault.domain.account import AccountInfo
from src.vault.model.snapshot import FeeQuote
from src.vault.model.vault import VaultConfig, config_query
from src.vault.protocols.clients import ContractQueryClient
from src.vault.valuation.queries import parse_response, run_query

logger = logging.getLogger(__name__)

DEFAULT_FLAT_WITHDRAW_FEE_BPS = 100


class WithdrawFeeCandidate(Protocol):
    """Source of the withdrawal fee before it is clamped."""

    async def candidate_fee_bps(self, vault_config: VaultConfig) -> int:
        """Get the candidate fee in basis points for this vault."""
        ...


class FlatWithdrawFee:
    """Provisional candidate: the same fee regardless of vault or pool state."""

    def __init__(self, bps: int = DEFAULT_FLAT_WITHDRAW_FEE_BPS) -> None:
        if bps < 0:
            raise ValueError("Fee must be non-negative")
        self.bps = bps

    async def candidate_fee_bps(self, vault_config: VaultConfig) -> int:
        return self.bps


def clamp_withdraw_fee(candidate_bps: int, max_withdraw_fee_bps: int) -> int:
    """
    Clamp a fee candidate to the vault's maximum withdrawal fee.

    Clamping is not an error; it is reported with a warning.

    Examples:
        >>> clamp_withdraw_fee(100, 200)
        100
        >>> clamp_withdraw_fee(100, 50)
        50

    """
    if candidate_bps < 0 or max_withdraw_fee_bps < 0:
        raise ValueError("Fees must be non-negative")

    if candidate_bps > max_withdraw_fee_bps:
        logger.warning(
            f"Calculated withdraw fee {candidate_bps} exceeds max allowed "
            f"{max_withdraw_fee_bps}, using max"
        )
        return max_withdraw_fee_bps
    return candidate_bps


class FeePolicy:
    """
    Computes the withdrawal fee for the vault.

    Every call re-reads the vault configuration; nothing is cached.
    """

    def __init__(
        self,
        client: ContractQueryClient,
        vault: AccountInfo,
        candidate: WithdrawFeeCandidate | None = None,
    ) -> None:
        """
        Initialize the fee policy.

        Args:
            client: Contract query capability of the issuance domain
            vault: Vault contract account
            candidate: Fee candidate source (defaults to the flat fee)

        """
        self.client = client
        self.vault = vault
        self.candidate = candidate or FlatWithdrawFee()

    async def fetch_vault_config(self) -> VaultConfig:
        """Query the vault configuration."""
        raw = await run_query(
            self.vault.domain.name,
            "vault config",
            self.client.query_contract_state(self.vault.address, config_query()),
        )
        return parse_response(VaultConfig, raw, "vault config")

    async def quote_fee(self) -> FeeQuote:
        """
        Compute the candidate fee and clamp it to the vault maximum.

        Returns:
            FeeQuote with candidate, cap and final fee

        """
        vault_config = await self.fetch_vault_config()
        logger.info(f"vault fees: {vault_config.fees}")

        candidate_bps = await self.candidate.candidate_fee_bps(vault_config)
        fee_bps = clamp_withdraw_fee(candidate_bps, vault_config.max_withdraw_fee_bps)

        return FeeQuote(
            candidate_bps=candidate_bps,
            max_withdraw_fee_bps=vault_config.max_withdraw_fee_bps,
            fee_bps=fee_bps,
        )

    async def calculate_total_fee(self) -> int:
        """Get the final withdrawal fee in basis points."""
        quote = await self.quote_fee()
        return quote.fee_bps
