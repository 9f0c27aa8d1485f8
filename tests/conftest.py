"""Pytest configuration and fixtures."""

import pytest

from quoter.fees import FeeCalculator, FeeConfig
from quoter.models import PoolQuoteState
from quoter.quoter import Quoter
from tests.helpers import (
    AMPLIFIER,
    DECIMALS_X,
    DECIMALS_Y,
    PRICE_X,
    PRICE_Y,
    RATIO_ONE,
    RESERVE_X,
    RESERVE_Y,
    make_state,
)


@pytest.fixture
def pool_state() -> PoolQuoteState:
    """Reference pool: 1,000 X at $3 against 1,000 Y at $1."""
    return make_state()


@pytest.fixture
def pool_args() -> dict:
    """Keyword arguments of the reference pool for the regime functions."""
    return {
        "reserve_x": RESERVE_X,
        "reserve_y": RESERVE_Y,
        "price_x": PRICE_X,
        "price_y": PRICE_Y,
        "decimals_x": DECIMALS_X,
        "decimals_y": DECIMALS_Y,
        "amplifier": AMPLIFIER,
        "b_token_ratio_x": RATIO_ONE,
        "b_token_ratio_y": RATIO_ONE,
    }


@pytest.fixture
def quoter() -> Quoter:
    """Quoter with the default fee configuration."""
    return Quoter()


@pytest.fixture
def zero_protocol_fee_calculator() -> FeeCalculator:
    """Calculator that leaves the whole fee to the pool."""
    return FeeCalculator(FeeConfig(protocol_fee_numerator=0))
