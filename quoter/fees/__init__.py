"""Fee calculation module for the OMM quoter.

This module provides centralized fee handling including:
- Swap fee calculation with a protocol/pool split
- Oracle-uncertainty fee overrides
- Quote assembly from a gross output

Usage:
    from quoter.fees import FeeCalculator, FeeConfig

    calculator = FeeCalculator(FeeConfig(protocol_fee_numerator=200))
    quote = calculator.get_quote(amount_in, gross_out, direction, swap_fee_bps)
"""

from quoter.fees.calculator import (
    DEFAULT_FEE_CALCULATOR,
    FeeCalculator,
    compute_swap_fees,
    get_quote,
    price_uncertainty_ratio,
)
from quoter.fees.config import DEFAULT_FEE_CONFIG, FeeConfig
from quoter.fees.result import SwapFees, SwapQuote

__all__ = [
    # Calculator
    "FeeCalculator",
    "DEFAULT_FEE_CALCULATOR",
    "compute_swap_fees",
    "get_quote",
    "price_uncertainty_ratio",
    # Config
    "FeeConfig",
    "DEFAULT_FEE_CONFIG",
    # Result
    "SwapFees",
    "SwapQuote",
]
