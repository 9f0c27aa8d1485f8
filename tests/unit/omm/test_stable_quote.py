"""Tests for the stable-swap regime quote pipeline.

Expected values come from the on-chain reference engine.
"""

from decimal import Decimal

import pytest

from quoter.constants import A_PRECISION
from quoter.errors import DomainError
from quoter.models.pool import SwapDirection
from quoter.omm.stable import fee_override, quote_swap, quote_swap_no_fees, scale_amplifier
from tests.helpers import RATIO_HALF, RATIO_ONE, RATIO_TWO, RESERVE_X, SWAP_FEE_BPS

RESERVE_Y_BALANCED = 3_000_000_000

# (amount_in, x2y, reserve_y, b_token_ratio_x, b_token_ratio_y, expected_out)
REFERENCE_CASES = [
    (10_000_000, False, 1_000_000_000, RATIO_ONE, RATIO_ONE, 5_156_539_130),
    (100_000_000, False, 1_000_000_000, RATIO_ONE, RATIO_ONE, 49_852_725_213),
    (5_156_539_131, True, 1_000_000_000, RATIO_ONE, RATIO_ONE, 9_920_471),
    (11_000_000, False, RESERVE_Y_BALANCED, RATIO_ONE, Decimal(1) / Decimal("1.1"), 3_437_018_128),
    (10_000_000, False, RESERVE_Y_BALANCED, RATIO_HALF, RATIO_ONE, 5_181_584_614),
    (10_000_000, False, RESERVE_Y_BALANCED, RATIO_TWO, RATIO_ONE, 2_138_121_895),
]


class TestStableQuoteNoFees:
    """Tests for stable-swap quote_swap_no_fees."""

    @pytest.mark.parametrize("amount_in,x2y,reserve_y,ratio_x,ratio_y,expected", REFERENCE_CASES)
    def test_matches_reference(self, pool_args, amount_in, x2y, reserve_y, ratio_x, ratio_y, expected):
        args = {
            **pool_args,
            "reserve_y": reserve_y,
            "b_token_ratio_x": ratio_x,
            "b_token_ratio_y": ratio_y,
        }
        assert quote_swap_no_fees(amount_in=amount_in, x2y=x2y, **args) == expected

    def test_output_never_exceeds_reserve(self, pool_args):
        for amount_in in (1, 10**6, 10**9, 10**11):
            out = quote_swap_no_fees(amount_in=amount_in, x2y=False, **pool_args)
            assert 0 <= out <= RESERVE_X

    def test_output_grows_with_input(self, pool_args):
        small = quote_swap_no_fees(amount_in=10_000_000, x2y=False, **pool_args)
        large = quote_swap_no_fees(amount_in=100_000_000, x2y=False, **pool_args)
        assert small < large

    def test_scale_amplifier(self):
        assert scale_amplifier(1) == 2 * A_PRECISION
        assert scale_amplifier(100) == 20_000


class TestFeeOverride:
    """Tests for the oracle-uncertainty fee override."""

    def test_takes_wider_interval(self):
        """0.03 on $3 is 100 bps, 0.005 on $1 is 50 bps."""
        assert fee_override(Decimal(3), Decimal(1), Decimal("0.03"), Decimal("0.005")) == 100

    def test_zero_confidence(self):
        assert fee_override(Decimal(3), Decimal(1), Decimal(0), Decimal(0)) == 0

    def test_zero_price_raises(self):
        with pytest.raises(DomainError):
            fee_override(Decimal(0), Decimal(1), Decimal(0), Decimal(0))


class TestStableQuoteWithFees:
    """Tests for stable-swap quote_swap."""

    def test_pool_fee_when_oracle_is_tight(self, pool_args):
        quote = quote_swap(
            amount_in=10_000_000,
            x2y=False,
            swap_fee_bps=SWAP_FEE_BPS,
            price_confidence_x=Decimal(0),
            price_confidence_y=Decimal(0),
            **pool_args,
        )
        assert quote.protocol_fees == 515_654
        assert quote.pool_fees == 25_267_042
        assert quote.amount_out == 5_130_756_434
        assert quote.direction == SwapDirection.Y_TO_X

    def test_override_when_oracle_is_wide(self, pool_args):
        """A 100 bps uncertainty on X replaces the 50 bps pool fee."""
        quote = quote_swap(
            amount_in=10_000_000,
            x2y=False,
            swap_fee_bps=SWAP_FEE_BPS,
            price_confidence_x=Decimal("0.03"),
            price_confidence_y=Decimal(0),
            **pool_args,
        )
        assert quote.fees.total == 51_565_392
        assert quote.protocol_fees == 1_031_308
        assert quote.pool_fees == 50_534_084
        assert quote.amount_out == 5_104_973_738

    def test_narrower_override_keeps_pool_fee(self, pool_args):
        """An uncertainty of 30 bps does not lower the 50 bps pool fee."""
        quote = quote_swap(
            amount_in=10_000_000,
            x2y=False,
            swap_fee_bps=SWAP_FEE_BPS,
            price_confidence_x=Decimal("0.009"),
            price_confidence_y=Decimal(0),
            **pool_args,
        )
        assert quote.fees.total == 25_782_696
