"""Legacy regime quote pipeline.

b-token amounts are converted to underlying units (truncating), priced by
the legacy curve, and converted back to b-token units (truncating).
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from quoter.fees.calculator import DEFAULT_FEE_CALCULATOR, FeeCalculator
from quoter.fees.result import SwapQuote
from quoter.omm.legacy_math import quote_swap_inner
from quoter.omm.scaling import RoundingMode, to_b_token, to_underlying, truncate_ratio

logger = structlog.get_logger()

_ROUNDING = RoundingMode.TRUNCATE


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
    """Gross output of a legacy swap, in b-token units.

    Args:
        amount_in: Input amount (b-token units)
        reserve_x: Reserve of X (b-token units)
        reserve_y: Reserve of Y (b-token units)
        price_x: Oracle price of X
        price_y: Oracle price of Y
        decimals_x: Decimals of X
        decimals_y: Decimals of Y
        amplifier: Legacy amplifier A
        x2y: True to sell X for Y
        b_token_ratio_x: Underlying units per b-token unit of X
        b_token_ratio_y: Underlying units per b-token unit of Y

    Returns:
        Output amount before fees, or 0 if the output reserve would be depleted
    """
    ratio_x = truncate_ratio(b_token_ratio_x)
    ratio_y = truncate_ratio(b_token_ratio_y)
    ratio_in, ratio_out = (ratio_x, ratio_y) if x2y else (ratio_y, ratio_x)

    underlying_out = quote_swap_inner(
        amount_in=to_underlying(amount_in, ratio_in, _ROUNDING),
        reserve_x=to_underlying(reserve_x, ratio_x, _ROUNDING),
        reserve_y=to_underlying(reserve_y, ratio_y, _ROUNDING),
        price_x=price_x,
        price_y=price_y,
        decimals_x=decimals_x,
        decimals_y=decimals_y,
        amplifier=amplifier,
        x2y=x2y,
    )

    amount_out = to_b_token(underlying_out, ratio_out, _ROUNDING)
    reserve_out = reserve_y if x2y else reserve_x

    if amount_out >= reserve_out:
        logger.debug(
            "legacy_quote_reserve_depleted",
            amount_out=amount_out,
            reserve_out=reserve_out,
            x2y=x2y,
        )
        return 0

    return amount_out


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
    fee_calculator: FeeCalculator | None = None,
) -> SwapQuote:
    """Quote a legacy swap, fees included."""
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
    calculator = fee_calculator or DEFAULT_FEE_CALCULATOR
    return calculator.get_quote(amount_in, amount_out, x2y, swap_fee_bps)
