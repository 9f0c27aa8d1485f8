"""Tests for the StableSwap invariant solvers.

Expected values come from the on-chain reference engine.
"""

from decimal import Decimal

import pytest

from quoter.errors import DivisionByZero, GetYDidNotConverge, InvariantDidNotConverge
from quoter.omm import stable_math
from quoter.omm.scaling import split_price, to_scaled_usd
from quoter.omm.stable_math import compute_d, compute_y

# (reserve_a, reserve_b, amp, expected_d)
COMPUTE_D_CASES = [
    (1_000_000, 1_000_000, 20_000, 2_000_000),
    (646_604_101_554_903, 430_825_829_860_939, 10_000, 1_077_207_198_258_876),
    (208_391_493_399_283, 381_737_267_304_454, 6_000, 589_673_027_554_751),
    (357_533_698_368_810, 292_279_113_116_023, 200_000, 649_811_157_409_887),
    (640_219_149_077_469, 749_346_581_809_482, 6_000, 1_389_495_058_454_884),
    (796_587_650_933_232, 263_696_548_289_376, 20_000, 1_059_395_029_204_629),
    (645_814_702_742_123, 941_346_843_035_970, 6_000, 1_586_694_700_461_120),
    (36_731_011_531_180, 112_244_514_819_796, 6_000, 148_556_820_223_757),
    (638_355_455_638_005, 144_419_816_425_350, 20_000, 781_493_318_669_443),
    (747_070_395_683_716, 583_370_126_767_355, 200_000, 1_330_435_412_150_341),
    (222_152_880_197_132, 503_754_962_483_370, 10_000, 725_272_897_710_721),
    (30_000_000_000_000, 10_000_000_000_000, 200, 38_041_326_932_308),
]

# (reserve_in, amp, d, expected_y)
COMPUTE_Y_CASES = [
    (1_010_000, 20_000, 2_000_000, 990_000),
    (1_045_311_940_606_135, 10_000, 1_077_207_198_258_876, 54_125_279_774_978),
    (628_789_391_533_719, 6_000, 589_673_027_554_751, 12_102_396_904_252),
    (664_497_701_537_459, 200_000, 649_811_157_409_887, 1_571_656_363_072),
    (1_241_196_069_415_337, 6_000, 1_389_495_058_454_884, 164_151_111_358_319),
    (1_207_464_631_415_294, 20_000, 1_059_395_029_204_629, 3_978_315_032_067),
    (1_326_030_781_815_325, 6_000, 1_586_694_700_461_120, 270_631_769_558_978),
    (596_549_235_149_733, 6_000, 148_556_820_223_757, 25_485_695_510),
    (1_412_549_409_240_877, 20_000, 781_493_318_669_443, 333_436_412_241),
    (966_973_926_501_573, 200_000, 1_330_435_412_150_341, 363_547_559_872_801),
    (468_614_952_287_735, 10_000, 725_272_897_710_721, 256_991_438_480_111),
    (10_100_000_000_000, 200, 38_041_326_932_308, 29_845_303_826_098),
    (30_051_565_391_310, 200, 38_041_326_932_308, 9_966_843_369_867),
]

SCALE = 10**10


class TestComputeD:
    """Tests for compute_d."""

    @pytest.mark.parametrize("reserve_a,reserve_b,amp,expected", COMPUTE_D_CASES)
    def test_matches_reference(self, reserve_a, reserve_b, amp, expected):
        assert compute_d(reserve_a, reserve_b, amp) == expected

    @pytest.mark.parametrize("reserve_a,reserve_b,amp,expected", COMPUTE_D_CASES)
    def test_scales_linearly(self, reserve_a, reserve_b, amp, expected):
        """Scaling both reserves scales D by the same factor."""
        assert compute_d(reserve_a * SCALE, reserve_b * SCALE, amp) // SCALE == expected

    def test_balanced_pool_exact(self):
        assert compute_d(1_000_000 * SCALE, 1_000_000 * SCALE, 20_000) == 2_000_000 * SCALE

    def test_zero_reserve_raises(self):
        with pytest.raises(DivisionByZero):
            compute_d(0, 1_000_000, 20_000)

    def test_imbalanced_pool_does_not_converge(self):
        """USD reserves about ten orders of magnitude apart do not settle within the cap."""
        usd_x = to_scaled_usd(331_594_168_911_360, split_price(Decimal(779_106)), 0)
        usd_y = to_scaled_usd(923_687_061_767_886, split_price(Decimal(548_858)), 10)
        with pytest.raises(InvariantDidNotConverge):
            compute_d(usd_x, usd_y, 8_000)

    def test_iteration_cap_raises(self, monkeypatch):
        monkeypatch.setattr(stable_math, "STABLE_MAX_ITERATIONS", 1)
        with pytest.raises(InvariantDidNotConverge):
            compute_d(646_604_101_554_903, 430_825_829_860_939, 10_000)


class TestComputeY:
    """Tests for compute_y."""

    @pytest.mark.parametrize("reserve_in,amp,d,expected", COMPUTE_Y_CASES)
    def test_matches_reference(self, reserve_in, amp, d, expected):
        assert compute_y(reserve_in, amp, d) == expected

    @pytest.mark.parametrize("reserve_in,amp,d,expected", COMPUTE_Y_CASES)
    def test_scales_linearly(self, reserve_in, amp, d, expected):
        """Scaling reserve and D scales Y within one unit."""
        result = compute_y(reserve_in * SCALE, amp, d * SCALE) // SCALE
        assert abs(result - expected) <= 1

    def test_inverts_compute_d(self):
        """Y for the unchanged input reserve is the other reserve."""
        d = compute_d(1_000_000, 1_000_000, 20_000)
        assert abs(compute_y(1_000_000, 20_000, d) - 1_000_000) <= 1

    def test_more_input_less_output(self):
        d = compute_d(1_000_000, 1_000_000, 20_000)
        assert compute_y(1_100_000, 20_000, d) < compute_y(1_010_000, 20_000, d)

    def test_zero_reserve_raises(self):
        with pytest.raises(DivisionByZero):
            compute_y(0, 20_000, 2_000_000)

    def test_iteration_cap_raises(self, monkeypatch):
        monkeypatch.setattr(stable_math, "STABLE_MAX_ITERATIONS", 1)
        with pytest.raises(GetYDidNotConverge):
            compute_y(1_045_311_940_606_135, 10_000, 1_077_207_198_258_876)
