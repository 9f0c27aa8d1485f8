"""Shared type definitions for the quoter models.

These types validate the scalar inputs of pool states and swap requests
against the ranges the on-chain engine accepts.
"""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, Field

from quoter.constants import BPS_SCALE, MAX_TOKEN_DECIMALS, U64_MAX
from quoter.omm.scaling import truncate_ratio


def validate_uint64(value: Any) -> int:
    """Validate that a value is a valid u64 amount.

    Args:
        value: Value to validate (int or decimal integer string)

    Returns:
        Valid u64 as int

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint64 must be an integer, got bool")

    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint64 must be a decimal integer string: '{value}'") from err

    if not isinstance(value, int):
        raise ValueError(f"Uint64 must be string or int, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"Uint64 cannot be negative: {value}")
    if value > U64_MAX:
        raise ValueError(f"Uint64 overflow: {value} > 2^64-1")

    return value


def _require_positive(value: Decimal) -> Decimal:
    if value <= 0:
        raise ValueError(f"Value must be positive after truncation to 18 decimals: {value}")
    return value


# 64-bit unsigned integer (token amounts and reserves)
Uint64 = Annotated[
    int,
    BeforeValidator(validate_uint64),
    Field(description="64-bit unsigned integer"),
]

# Token decimals exponent
TokenDecimals = Annotated[int, Field(ge=0, le=MAX_TOKEN_DECIMALS)]

# Fee rate in basis points
FeeBps = Annotated[int, Field(ge=0, le=BPS_SCALE)]

# Oracle price, truncated to 18 fractional digits
Price = Annotated[
    Decimal,
    Field(gt=0),
    AfterValidator(truncate_ratio),
    AfterValidator(_require_positive),
]

# Underlying units per b-token unit, truncated to 18 fractional digits
BTokenRatio = Annotated[
    Decimal,
    Field(gt=0),
    AfterValidator(truncate_ratio),
    AfterValidator(_require_positive),
]

# Oracle confidence interval, in price units
Confidence = Annotated[Decimal, Field(ge=0)]
