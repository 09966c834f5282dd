"""Pydantic models for the replicating market maker API."""

from rmm.models.pool import (
    InvariantRequest,
    InvariantResponse,
    PoolState,
    QuoteKind,
    QuoteRequest,
    QuoteResponse,
    TokenInfo,
)

__all__ = [
    "InvariantRequest",
    "InvariantResponse",
    "PoolState",
    "QuoteKind",
    "QuoteRequest",
    "QuoteResponse",
    "TokenInfo",
]
