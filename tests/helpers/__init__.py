"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Reference pool parameters
- factories: Pool state and request factory functions
"""

from tests.helpers.constants import (
    AMPLIFIER,
    DECIMALS_X,
    DECIMALS_Y,
    PRICE_X,
    PRICE_Y,
    RATIO_HALF,
    RATIO_ONE,
    RATIO_TWO,
    RESERVE_X,
    RESERVE_Y,
    SWAP_FEE_BPS,
)
from tests.helpers.factories import make_request, make_state

__all__ = [
    # Constants
    "RESERVE_X",
    "RESERVE_Y",
    "DECIMALS_X",
    "DECIMALS_Y",
    "PRICE_X",
    "PRICE_Y",
    "AMPLIFIER",
    "SWAP_FEE_BPS",
    "RATIO_ONE",
    "RATIO_HALF",
    "RATIO_TWO",
    # Factories
    "make_state",
    "make_request",
]
