"""OMM scaling helpers.

Functions for moving amounts between b-token units, underlying units and
scaled-USD units. The conversions run in integer or exact-decimal arithmetic
only, so results are identical to the on-chain engine.

The two regimes round differently and the difference is part of the quote:
the stable-swap path floors, the legacy path truncates toward zero. Both
modes are kept as explicit RoundingMode values.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_DOWN, ROUND_FLOOR, Context, Decimal, localcontext
from enum import Enum

from quoter.constants import RATIO_DECIMALS, USD_SCALE
from quoter.errors import DivisionByZero, DomainError
from quoter.safe_int import S

# Enough significant digits for u64 amounts times 18-decimal ratios to be exact
_DECIMAL_PRECISION = 100

_RATIO_QUANTUM = Decimal(1).scaleb(-RATIO_DECIMALS)


class RoundingMode(Enum):
    """Rounding applied when converting between b-token and underlying units."""

    # Stable-swap regime
    FLOOR = ROUND_FLOOR
    # Legacy regime
    TRUNCATE = ROUND_DOWN


def _context(rounding: RoundingMode) -> Context:
    return Context(prec=_DECIMAL_PRECISION, rounding=rounding.value)


def truncate_ratio(ratio: Decimal) -> Decimal:
    """Truncate a b-token ratio (or price) toward zero to 18 fractional digits."""
    with localcontext(_context(RoundingMode.TRUNCATE)):
        return Decimal(ratio).quantize(_RATIO_QUANTUM)


# =============================================================================
# b-token <-> underlying
# =============================================================================


def to_underlying(b_token_amount: int, b_token_ratio: Decimal, rounding: RoundingMode) -> int:
    """Convert a b-token amount to underlying units: amount * ratio.

    Args:
        b_token_amount: Amount in b-token units
        b_token_ratio: Underlying units per b-token unit (already truncated)
        rounding: FLOOR (stable-swap) or TRUNCATE (legacy)

    Returns:
        Underlying amount
    """
    with localcontext(_context(rounding)):
        return int((Decimal(b_token_amount) * b_token_ratio).to_integral_value())


def to_b_token(amount: int, b_token_ratio: Decimal, rounding: RoundingMode) -> int:
    """Convert an underlying amount to b-token units: amount / ratio.

    Raises:
        DivisionByZero: If b_token_ratio is zero
    """
    if b_token_ratio == 0:
        raise DivisionByZero("b-token ratio is zero")
    with localcontext(_context(rounding)):
        return int((Decimal(amount) / b_token_ratio).to_integral_value())


# =============================================================================
# underlying <-> USD
# =============================================================================


@dataclass(frozen=True)
class SplitPrice:
    """Oracle price split for division-free USD conversion.

    A price p is represented as floor(p) plus the floored inverse of its
    fractional part, so that amount * p ~= amount * integer_part
    + amount / inverted_fractional_part with integer operations only.

    Attributes:
        integer_part: floor(p)
        inverted_fractional_part: floor(1 / (p - floor(p))), or None when
            p is an integer. Always >= 1 when present.
    """

    integer_part: int
    inverted_fractional_part: int | None = None


def split_price(price: Decimal) -> SplitPrice:
    """Split an oracle price into integer part and inverted fractional part.

    Raises:
        DomainError: If price is negative
    """
    price = Decimal(price)
    if price < 0:
        raise DomainError(f"Price must be non-negative, got {price}")

    with localcontext(_context(RoundingMode.FLOOR)):
        integer_part = price.to_integral_value()
        fractional_part = price - integer_part
        if fractional_part == 0:
            return SplitPrice(int(integer_part))
        inverted = (Decimal(1) / fractional_part).to_integral_value()
    return SplitPrice(int(integer_part), int(inverted))


def to_usd(amount: int, price: SplitPrice) -> int:
    """Convert a unit amount into a USD amount using a split price."""
    usd = S(amount) * price.integer_part
    if price.inverted_fractional_part is not None:
        usd = usd + S(amount) // price.inverted_fractional_part
    return usd.value


def from_usd(usd_amount: int, price: SplitPrice) -> int:
    """Convert a USD amount into a unit amount using a split price.

    The +1 in the denominator biases the result down, so
    from_usd(to_usd(a, p), p) <= a.

    Raises:
        DivisionByZero: If the price is zero
    """
    inverted = price.inverted_fractional_part
    if inverted is None:
        return (S(usd_amount) // price.integer_part).value
    return (S(usd_amount) * inverted // (S(price.integer_part) * inverted + 1)).value


def to_scaled_usd(amount: int, price: SplitPrice, decimals: int) -> int:
    """Convert an underlying amount to USD scaled by USD_SCALE, decimals removed."""
    return to_usd(amount * USD_SCALE, price) // 10**decimals


def from_scaled_usd(usd_amount: int, price: SplitPrice, decimals: int) -> int:
    """Inverse of to_scaled_usd, rounding down."""
    return from_usd(usd_amount, price) * 10**decimals // USD_SCALE
