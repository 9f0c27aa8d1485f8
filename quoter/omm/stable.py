"""Stable-swap regime quote pipeline.

Amounts move b-token -> underlying -> scaled USD before the invariant
solvers run, then back the same way. Every conversion floors. The fee is
widened to the oracle uncertainty when that exceeds the pool's fee rate.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from quoter.constants import A_PRECISION
from quoter.fees.calculator import DEFAULT_FEE_CALCULATOR, FeeCalculator, price_uncertainty_ratio
from quoter.fees.result import SwapQuote
from quoter.omm.scaling import (
    RoundingMode,
    from_scaled_usd,
    split_price,
    to_b_token,
    to_scaled_usd,
    to_underlying,
    truncate_ratio,
)
from quoter.omm.stable_math import compute_d, compute_y
from quoter.safe_int import S

logger = structlog.get_logger()

_ROUNDING = RoundingMode.FLOOR

# Two coins
_N_COINS = 2


def scale_amplifier(amplifier: int) -> int:
    """Amplifier in the form the invariant solvers take: A * n * A_PRECISION."""
    return amplifier * _N_COINS * A_PRECISION


def quote_swap_no_fees(
    amount_in: int,
    reserve_x: int,
    reserve_y: int,
    price_x: Decimal,
    price_y: Decimal,
    decimals_x: int,
    decimals_y: int,
    amplifier: int,
    x2y: bool,
    b_token_ratio_x: Decimal,
    b_token_ratio_y: Decimal,
) -> int:
    """Gross output of a stable-swap trade, in b-token units.

    Returns:
        Output amount before fees, or 0 if it would exceed the output reserve

    Raises:
        InvariantDidNotConverge: If D cannot be solved
        GetYDidNotConverge: If the output reserve cannot be solved
        DivisionByZero: If a reserve normalizes to zero
    """
    ratio_x = truncate_ratio(b_token_ratio_x)
    ratio_y = truncate_ratio(b_token_ratio_y)

    underlying_x = to_underlying(reserve_x, ratio_x, _ROUNDING)
    underlying_y = to_underlying(reserve_y, ratio_y, _ROUNDING)

    split_x = split_price(price_x)
    split_y = split_price(price_y)

    usd_x = to_scaled_usd(underlying_x, split_x, decimals_x)
    usd_y = to_scaled_usd(underlying_y, split_y, decimals_y)

    scaled_amp = scale_amplifier(amplifier)
    d = compute_d(usd_x, usd_y, scaled_amp)

    if x2y:
        ratio_in, ratio_out = ratio_x, ratio_y
        split_in, split_out = split_x, split_y
        decimals_in, decimals_out = decimals_x, decimals_y
        usd_reserve_in = usd_x
        underlying_out = underlying_y
        reserve_out = reserve_y
    else:
        ratio_in, ratio_out = ratio_y, ratio_x
        split_in, split_out = split_y, split_x
        decimals_in, decimals_out = decimals_y, decimals_x
        usd_reserve_in = usd_y
        underlying_out = underlying_x
        reserve_out = reserve_x

    usd_in = to_scaled_usd(to_underlying(amount_in, ratio_in, _ROUNDING), split_in, decimals_in)

    usd_reserve_out_after = compute_y(usd_reserve_in + usd_in, scaled_amp, d)
    underlying_out_after = from_scaled_usd(usd_reserve_out_after, split_out, decimals_out)

    if underlying_out_after > underlying_out:
        logger.debug(
            "stable_quote_output_saturated",
            reserve_out=underlying_out,
            reserve_out_after=underlying_out_after,
        )
    amount_out_underlying = S(underlying_out).saturating_sub(underlying_out_after).value

    amount_out = to_b_token(amount_out_underlying, ratio_out, _ROUNDING)

    # Floor conversions keep amount_out <= reserve_out; the guard is kept for
    # parity with the on-chain engine.
    if amount_out > reserve_out:
        logger.debug(
            "stable_quote_reserve_depleted",
            amount_out=amount_out,
            reserve_out=reserve_out,
            x2y=x2y,
        )
        return 0

    return amount_out


def fee_override(
    price_x: Decimal,
    price_y: Decimal,
    price_confidence_x: Decimal,
    price_confidence_y: Decimal,
) -> int:
    """Fee rate implied by the wider of the two oracle confidence intervals, in bps."""
    return max(
        price_uncertainty_ratio(price_x, price_confidence_x),
        price_uncertainty_ratio(price_y, price_confidence_y),
    )


def quote_swap(
    amount_in: int,
    reserve_x: int,
    reserve_y: int,
    price_x: Decimal,
    price_y: Decimal,
    decimals_x: int,
    decimals_y: int,
    amplifier: int,
    x2y: bool,
    b_token_ratio_x: Decimal,
    b_token_ratio_y: Decimal,
    swap_fee_bps: int,
    price_confidence_x: Decimal,
    price_confidence_y: Decimal,
    fee_calculator: FeeCalculator | None = None,
) -> SwapQuote:
    """Quote a stable-swap trade, fees included.

    The fee rate is the larger of swap_fee_bps and the oracle uncertainty
    of either token.
    """
    amount_out = quote_swap_no_fees(
        amount_in,
        reserve_x,
        reserve_y,
        price_x,
        price_y,
        decimals_x,
        decimals_y,
        amplifier,
        x2y,
        b_token_ratio_x,
        b_token_ratio_y,
    )
    override = fee_override(price_x, price_y, price_confidence_x, price_confidence_y)
    calculator = fee_calculator or DEFAULT_FEE_CALCULATOR
    return calculator.get_quote(amount_in, amount_out, x2y, swap_fee_bps, override)
