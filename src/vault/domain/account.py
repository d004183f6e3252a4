"""
Account and domain identity models.

Domains and accounts are long-lived configuration. An account is either an
address that already exists on its domain, or a base account that still has
to be instantiated. The variant is a closed tagged union; behavior that
depends on it matches on the tag.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.vault.enums import AccountKind, DomainRole, ExecutionEnvironment
from src.vault.errors import AccountNotInstantiated


class Domain(BaseModel):
    """An independent ledger with its own address space and query semantics."""

    name: str = Field(description="Chain name, e.g. 'neutron'")
    role: DomainRole
    environment: ExecutionEnvironment

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation."""
        return f"{self.name} ({self.role.value})"


class InstantiatedAccount(BaseModel):
    """An account whose address already exists on its domain."""

    kind: Literal[AccountKind.ADDR] = AccountKind.ADDR
    addr: str

    model_config = ConfigDict(frozen=True)


class BaseAccount(BaseModel):
    """A base account that is instantiated later, optionally with an admin."""

    kind: Literal[AccountKind.BASE] = AccountKind.BASE
    admin: str | None = None

    model_config = ConfigDict(frozen=True)


AccountType = Annotated[
    InstantiatedAccount | BaseAccount,
    Field(discriminator="kind"),
]


class AccountInfo(BaseModel):
    """
    Account metadata: its name, variant, domain and resolved address.

    Common fields live here; variant-specific payload lives in `ty`.
    """

    name: str
    ty: AccountType = Field(default_factory=BaseAccount)
    domain: Domain
    addr: str | None = Field(
        default=None, description="Address recorded after instantiation"
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def new_addr(cls, name: str, domain: Domain, addr: str) -> AccountInfo:
        """Describe an account that already exists at `addr`."""
        return cls(name=name, ty=InstantiatedAccount(addr=addr), domain=domain)

    @classmethod
    def new_base(
        cls, name: str, domain: Domain, admin: str | None = None
    ) -> AccountInfo:
        """Describe a base account that still has to be instantiated."""
        return cls(name=name, ty=BaseAccount(admin=admin), domain=domain)

    @property
    def needs_instantiation(self) -> bool:
        """Check whether the account must be created before use."""
        match self.ty:
            case InstantiatedAccount():
                return False
            case BaseAccount():
                return self.addr is None

    @property
    def address(self) -> str:
        """
        Get the on-chain address of this account.

        Raises:
            AccountNotInstantiated: If a base account has no address yet

        """
        match self.ty:
            case InstantiatedAccount(addr=addr):
                return addr
            case BaseAccount():
                if self.addr is None:
                    raise AccountNotInstantiated(self.name)
                return self.addr

    def with_address(self, addr: str) -> AccountInfo:
        """Return a copy recording the address a base account received."""
        return self.model_copy(update={"addr": addr})


class InstantiateAccountData(BaseModel):
    """Data describing one pending account instantiation."""

    id: int = Field(ge=0)
    info: AccountInfo
    addr: str = Field(description="Predicted address derived from the salt")
    salt: bytes
    approved_libraries: list[str] = Field(default_factory=list)

    def add_library(self, library_addr: str) -> None:
        """Approve a library to act on this account."""
        self.approved_libraries.append(library_addr)
