"""Pydantic models for pool state and swap requests."""

from quoter.models.pool import (
    LegacyRequest,
    PoolQuoteState,
    QuoterType,
    StableSwapRequest,
    SwapDirection,
    SwapRequest,
)
from quoter.models.types import (
    BTokenRatio,
    Confidence,
    FeeBps,
    Price,
    TokenDecimals,
    Uint64,
    validate_uint64,
)

__all__ = [
    # Pool
    "PoolQuoteState",
    "QuoterType",
    "SwapDirection",
    # Requests
    "LegacyRequest",
    "StableSwapRequest",
    "SwapRequest",
    # Types
    "Uint64",
    "TokenDecimals",
    "FeeBps",
    "Price",
    "BTokenRatio",
    "Confidence",
    "validate_uint64",
]
