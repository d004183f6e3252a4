"""
Valuation error taxonomy.

Every failure that aborts a valuation derives from ValuationError so callers
can decide in one place whether a failed invocation is retried or skipped.
A zero-asset vault and an over-cap fee are not errors and never raise.
"""


class ValuationError(Exception):
    """Base class for failures that abort a valuation."""


class QueryFailure(ValuationError):
    """A domain client failed to answer a read-only query."""

    def __init__(self, domain: str, query: str, reason: str) -> None:
        self.domain = domain
        self.query = query
        self.reason = reason
        super().__init__(f"{domain} query '{query}' failed: {reason}")


class ParseFailure(ValuationError):
    """A query answered with a value that is not a valid amount or shape."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot parse {field}={value!r}: {reason}")


class AccountNotInstantiated(ValuationError):
    """A base account was used before it received an on-chain address."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Account '{name}' has not been instantiated")
