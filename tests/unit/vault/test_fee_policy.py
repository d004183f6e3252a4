"""
Tests for the withdrawal fee policy.

Covers the clamp against the vault maximum, the flat provisional candidate
and the extension point for other candidates.
"""

import logging

import pytest

from src.vault.domain.account import AccountInfo
from src.vault.enums import AccountRole
from src.vault.errors import AccountNotInstantiated, ParseFailure, QueryFailure
from src.vault.model.vault import VaultConfig
from src.vault.service.fees import FeePolicy, FlatWithdrawFee, clamp_withdraw_fee
from tests.unit.vault.helpers import VAULT, VaultStateBuilder, build_config


def vault_account() -> AccountInfo:
    """Get the configured vault account."""
    return build_config().accounts()[AccountRole.VAULT]


class TestClampWithdrawFee:
    """Test clamping a candidate to the cap."""

    def test_clamped_to_max(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test candidate 100 over cap 50 yields 50 with a warning."""
        with caplog.at_level(logging.WARNING, logger="src.vault.service.fees"):
            assert clamp_withdraw_fee(100, 50) == 50

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert "100" in record.getMessage()
        assert "50" in record.getMessage()

    def test_under_max_unchanged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test candidate 100 under cap 200 is kept silently."""
        with caplog.at_level(logging.WARNING, logger="src.vault.service.fees"):
            assert clamp_withdraw_fee(100, 200) == 100

        assert caplog.records == []

    @pytest.mark.parametrize(
        ("candidate", "cap"),
        [(0, 0), (0, 10), (10, 0), (50, 50), (10_000, 9_999), (1, 2**32 - 1)],
    )
    def test_is_min_of_candidate_and_cap(self, candidate: int, cap: int) -> None:
        """Test the final fee is min(candidate, cap)."""
        assert clamp_withdraw_fee(candidate, cap) == min(candidate, cap)

    def test_negative_rejected(self) -> None:
        """Test fees must be non-negative."""
        with pytest.raises(ValueError):
            clamp_withdraw_fee(-1, 10)


class TestFlatWithdrawFee:
    """Test the provisional flat candidate."""

    @pytest.mark.asyncio
    async def test_default_candidate(self) -> None:
        """Test the default flat candidate is 100 bps."""
        config = VaultConfig(max_withdraw_fee_bps=1_000)
        assert await FlatWithdrawFee().candidate_fee_bps(config) == 100

    def test_negative_rejected(self) -> None:
        """Test a negative flat fee is invalid."""
        with pytest.raises(ValueError):
            FlatWithdrawFee(-5)


class TestFeePolicy:
    """Test FeePolicy against a fake issuance domain."""

    @pytest.mark.asyncio
    async def test_clamps_to_vault_max(self) -> None:
        """Test candidate 100 with vault max 50."""
        issuance, _, _ = VaultStateBuilder().with_max_withdraw_fee(50).build()
        policy = FeePolicy(issuance, vault_account(), FlatWithdrawFee(100))

        quote = await policy.quote_fee()

        assert quote.fee_bps == 50
        assert quote.candidate_bps == 100
        assert quote.max_withdraw_fee_bps == 50
        assert quote.clamped
        assert await policy.calculate_total_fee() == 50

    @pytest.mark.asyncio
    async def test_unclamped(self) -> None:
        """Test candidate 100 with vault max 200."""
        issuance, _, _ = VaultStateBuilder().with_max_withdraw_fee(200).build()
        policy = FeePolicy(issuance, vault_account(), FlatWithdrawFee(100))

        quote = await policy.quote_fee()

        assert quote.fee_bps == 100
        assert not quote.clamped

    @pytest.mark.asyncio
    async def test_queries_vault_config(self) -> None:
        """Test the config view is read from the vault contract."""
        issuance, _, _ = VaultStateBuilder().build()
        policy = FeePolicy(issuance, vault_account())

        await policy.calculate_total_fee()

        assert issuance.queried("contract") == [("contract", VAULT, {"config": {}})]

    @pytest.mark.asyncio
    async def test_rereads_config_every_call(self) -> None:
        """Test nothing is cached between calls."""
        issuance, _, _ = VaultStateBuilder().with_max_withdraw_fee(200).build()
        policy = FeePolicy(issuance, vault_account(), FlatWithdrawFee(100))

        assert await policy.calculate_total_fee() == 100
        issuance.contract_state["config"]["maxWithdrawFeeBps"] = 30
        assert await policy.calculate_total_fee() == 30
        assert len(issuance.queried("contract")) == 2

    @pytest.mark.asyncio
    async def test_custom_candidate(self) -> None:
        """Test another candidate source plugs in through the protocol."""

        class PerformanceLinkedFee:
            async def candidate_fee_bps(self, vault_config: VaultConfig) -> int:
                return vault_config.fees.platform_fee_bps * 2

        issuance, _, _ = VaultStateBuilder().with_max_withdraw_fee(500).build()
        policy = FeePolicy(issuance, vault_account(), PerformanceLinkedFee())

        assert await policy.calculate_total_fee() == 100

    @pytest.mark.asyncio
    async def test_query_failure(self) -> None:
        """Test a failing config query propagates."""
        issuance, _, _ = VaultStateBuilder().build()
        issuance.fail("config")
        policy = FeePolicy(issuance, vault_account())

        with pytest.raises(QueryFailure):
            await policy.calculate_total_fee()

    @pytest.mark.asyncio
    async def test_malformed_config(self) -> None:
        """Test a config without a max fee is a parse failure."""
        issuance, _, _ = VaultStateBuilder().build()
        del issuance.contract_state["config"]["maxWithdrawFeeBps"]
        policy = FeePolicy(issuance, vault_account())

        with pytest.raises(ParseFailure):
            await policy.calculate_total_fee()

    @pytest.mark.asyncio
    async def test_vault_not_instantiated(self) -> None:
        """Test the vault address must be known."""
        issuance, _, _ = VaultStateBuilder().build()
        vault = build_config(issuance={"vault_address": ""}).accounts()[
            AccountRole.VAULT
        ]
        policy = FeePolicy(issuance, vault)

        with pytest.raises(AccountNotInstantiated):
            await policy.calculate_total_fee()

        assert issuance.calls == []
