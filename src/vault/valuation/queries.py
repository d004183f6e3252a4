"""
Query execution helpers shared by the valuers, the engine and the fee policy.

Client exceptions are translated into the valuation error taxonomy here so
that every caller sees QueryFailure for transport or view-call errors and
ParseFailure for malformed answers. Cancellation is never translated.
"""

import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.vault.domain.primitives import parse_amount
from src.vault.errors import ParseFailure, QueryFailure, ValuationError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


async def run_query(domain: str, label: str, call: Awaitable[T]) -> T:
    """
    Await a client call, wrapping its failures as QueryFailure.

    Args:
        domain: Name of the domain being queried
        label: Short description of the query for diagnostics
        call: Awaitable returned by the client method

    Returns:
        The client's raw answer

    Raises:
        QueryFailure: If the client raised

    """
    logger.debug(f"Querying {domain}: {label}")
    try:
        return await call
    except ValuationError:
        raise
    except Exception as e:
        raise QueryFailure(domain, label, str(e) or type(e).__name__) from e


async def query_amount(domain: str, label: str, call: Awaitable[Any]) -> int:
    """Await a balance-style client call and parse its answer as an amount."""
    raw = await run_query(domain, label, call)
    return parse_amount(raw, field=label)


def parse_response(model: type[M], raw: Any, label: str) -> M:
    """
    Validate a raw query answer against a response model.

    Raises:
        ParseFailure: If the answer does not match the model

    """
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise ParseFailure(label, raw, f"{e.error_count()} validation error(s)") from e


def first_failure(group: BaseExceptionGroup[BaseException]) -> BaseException:
    """
    Get the first leaf exception of a task group failure.

    A task group cancels the remaining tasks once one fails, so the group
    normally holds a single failure; when several fail at once the first
    one reported wins.
    """
    leaf = group.exceptions[0]
    while isinstance(leaf, BaseExceptionGroup):
        leaf = leaf.exceptions[0]
    return leaf
