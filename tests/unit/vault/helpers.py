"""Test helpers for vault valuation tests."""

import asyncio
from collections.abc import Callable
from typing import Any

from src.vault.config import (
    FeeConfig,
    IntermediaryDomainConfig,
    IssuanceDomainConfig,
    SettlementDomainConfig,
    StrategistConfig,
)

VAULT = "0xvault"
UNIT_TOKEN = "0xusdc"
ISSUANCE_DEPOSIT = "0xdeposit"
POOL = "neutron1pool"
LP_DENOM = "factory/neutron1pool/astroport/share"
UNIT_DENOM = "ibc/usdc"
OTHER_DENOM = "untrn"
POSITION = "neutron1position"
SETTLEMENT_DEPOSIT = "neutron1deposit"
RELAY = "noble1relay"
RELAY_DENOM = "uusdc"
CW20_TOKEN = "neutron1cw20token"


class FakeDomainClient:
    """
    Deterministic in-memory domain client.

    Serves canned answers for contract queries (keyed by query name) and
    balances (keyed by address and denom). Records every call so tests can
    verify what was asked and in which order.
    """

    def __init__(self, name: str) -> None:
        """Initialize an empty client for domain `name`."""
        self.name = name
        self.contract_state: dict[str, Any] = {}
        self.contract_handlers: dict[str, Callable[[dict[str, Any]], Any]] = {}
        self.balances: dict[tuple[str, str], Any] = {}
        self.failures: dict[str, Exception] = {}
        self.delays: dict[str, float] = {}
        self.calls: list[tuple[str, str, Any]] = []
        self.cancelled: list[str] = []

    async def _answer(self, key: str, value: Callable[[], Any]) -> Any:
        try:
            if key in self.delays:
                await asyncio.sleep(self.delays[key])
            if key in self.failures:
                raise self.failures[key]
            return value()
        except asyncio.CancelledError:
            self.cancelled.append(key)
            raise

    async def query_contract_state(self, address: str, query: dict[str, Any]) -> Any:
        """Answer a contract query by its top-level name."""
        name = next(iter(query))
        self.calls.append(("contract", address, query))

        def value() -> Any:
            if name in self.contract_handlers:
                return self.contract_handlers[name](query[name])
            if name not in self.contract_state:
                raise RuntimeError(f"unknown query {name}")
            return self.contract_state[name]

        return await self._answer(name, value)

    async def query_balance(self, address: str, denom: str) -> int | str:
        """Answer a bank balance query."""
        self.calls.append(("balance", address, denom))
        return await self._answer(
            address, lambda: self.balances.get((address, denom), 0)
        )

    async def query_token_balance(self, token: str, holder: str) -> int | str:
        """Answer a token balance query."""
        self.calls.append(("token", holder, token))
        return await self._answer(
            holder, lambda: self.balances.get((holder, token), 0)
        )

    def fail(self, key: str, error: Exception | None = None) -> "FakeDomainClient":
        """Make the query named `key` (or balances of address `key`) raise."""
        self.failures[key] = error or ConnectionError(f"{self.name} unreachable")
        return self

    def delay(self, key: str, seconds: float) -> "FakeDomainClient":
        """Make the query named `key` (or balances of address `key`) slow."""
        self.delays[key] = seconds
        return self

    def queried(self, kind: str) -> list[tuple[str, str, Any]]:
        """Get recorded calls of one kind ('contract', 'balance', 'token')."""
        return [call for call in self.calls if call[0] == kind]


def pool_response(
    unit: int | str,
    other: int | str,
    total_share: int | str,
    other_info: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a `pool` query answer in the wire format."""
    other_info = other_info or {"native_token": {"denom": OTHER_DENOM}}
    return {
        "assets": [
            {"info": {"native_token": {"denom": UNIT_DENOM}}, "amount": str(unit)},
            {"info": other_info, "amount": str(other)},
        ],
        "total_share": str(total_share),
    }


def vault_config_response(max_withdraw_fee_bps: int) -> dict[str, Any]:
    """Build a `config` query answer as the issuance client decodes it."""
    return {
        "depositAccount": ISSUANCE_DEPOSIT,
        "withdrawAccount": "0xwithdraw",
        "strategist": "0xstrategist",
        "fees": {
            "depositFeeBps": 10,
            "platformFeeBps": 50,
            "performanceFeeBps": 1000,
            "solverCompletionFee": 0,
        },
        "depositCap": 0,
        "withdrawLockupPeriod": 86400,
        "maxWithdrawFeeBps": max_withdraw_fee_bps,
    }


def build_config(**overrides: Any) -> StrategistConfig:
    """Build a complete strategist configuration for the fake domains."""
    issuance = {
        "vault_address": VAULT,
        "unit_token_address": UNIT_TOKEN,
        "deposit_account": ISSUANCE_DEPOSIT,
        **overrides.pop("issuance", {}),
    }
    settlement = {
        "pool_address": POOL,
        "lp_token_denom": LP_DENOM,
        "unit_denom": UNIT_DENOM,
        "other_denom": OTHER_DENOM,
        "position_account": POSITION,
        "deposit_account": SETTLEMENT_DEPOSIT,
        **overrides.pop("settlement", {}),
    }
    return StrategistConfig(
        issuance=IssuanceDomainConfig(**issuance),
        settlement=SettlementDomainConfig(**settlement),
        intermediary=IntermediaryDomainConfig(
            inbound_relay_account=RELAY,
            unit_denom=RELAY_DENOM,
        ),
        fees=FeeConfig(**overrides.pop("fees", {})),
        **overrides,
    )


class VaultStateBuilder:
    """
    Builder for the state of all three domains.

    Defaults describe a vault worth exactly 1,000,000 base units:
    deposits of 300,000 + 100,000 + 210,000, and an LP stake of 10% of a
    2,000,000 / 4,000,000 pool which liquidates into 200,000 unit and
    400,000 other, the latter swapping into 190,000 unit.
    """

    def __init__(self) -> None:
        """Initialize with sensible defaults."""
        self.total_shares: int | str = 1_000_000
        self.published_rate: int | str = 10**18
        self.max_withdraw_fee_bps = 500
        self.lp_balance: int | str = 100_000
        self.pool = pool_response(2_000_000, 4_000_000, 1_000_000)
        self.swap_price = (19, 40)
        self.issuance_deposit: int | str = 300_000
        self.relay_balance: int | str = 100_000
        self.settlement_deposit: int | str = 210_000

    def with_shares(self, shares: int | str) -> "VaultStateBuilder":
        """Set the vault's total issued shares."""
        self.total_shares = shares
        return self

    def with_published_rate(self, rate: int | str) -> "VaultStateBuilder":
        """Set the rate currently published on the vault."""
        self.published_rate = rate
        return self

    def with_max_withdraw_fee(self, bps: int) -> "VaultStateBuilder":
        """Set the vault's maximum withdrawal fee."""
        self.max_withdraw_fee_bps = bps
        return self

    def with_lp_balance(self, amount: int | str) -> "VaultStateBuilder":
        """Set the LP shares held by the position account."""
        self.lp_balance = amount
        return self

    def with_pool(
        self, unit: int | str, other: int | str, total_share: int | str
    ) -> "VaultStateBuilder":
        """Set the pool's reserves and LP supply."""
        self.pool = pool_response(unit, other, total_share)
        return self

    def with_swap_price(self, numerator: int, denominator: int) -> "VaultStateBuilder":
        """Set the unit returned per other asset offered in a swap simulation."""
        self.swap_price = (numerator, denominator)
        return self

    def with_deposits(
        self,
        issuance: int | str = 0,
        relay: int | str = 0,
        settlement: int | str = 0,
    ) -> "VaultStateBuilder":
        """Set the pending deposit balances on all three domains."""
        self.issuance_deposit = issuance
        self.relay_balance = relay
        self.settlement_deposit = settlement
        return self

    def empty(self) -> "VaultStateBuilder":
        """Describe a freshly deployed vault with no shares and no assets."""
        return self.with_shares(0).with_lp_balance(0).with_deposits()

    def _simulate(self, query: dict[str, Any]) -> dict[str, str]:
        offered = int(query["offer_asset"]["amount"])
        numerator, denominator = self.swap_price
        returned = offered * numerator // denominator
        return {
            "return_amount": str(returned),
            "spread_amount": "0",
            "commission_amount": str(returned // 100),
        }

    def build(self) -> tuple[FakeDomainClient, FakeDomainClient, FakeDomainClient]:
        """Build (issuance, settlement, intermediary) fake clients."""
        issuance = FakeDomainClient("ethereum")
        issuance.contract_state["total_supply"] = self.total_shares
        issuance.contract_state["redemption_rate"] = self.published_rate
        issuance.contract_state["config"] = vault_config_response(
            self.max_withdraw_fee_bps
        )
        issuance.balances[(ISSUANCE_DEPOSIT, UNIT_TOKEN)] = self.issuance_deposit

        settlement = FakeDomainClient("neutron")
        settlement.contract_state["pool"] = self.pool
        settlement.contract_handlers["simulation"] = self._simulate
        settlement.balances[(POSITION, LP_DENOM)] = self.lp_balance
        settlement.balances[(SETTLEMENT_DEPOSIT, UNIT_DENOM)] = self.settlement_deposit

        intermediary = FakeDomainClient("noble")
        intermediary.balances[(RELAY, RELAY_DENOM)] = self.relay_balance

        return issuance, settlement, intermediary
