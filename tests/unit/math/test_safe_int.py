"""Tests for SafeInt safe arithmetic wrapper."""

import pytest

from quoter.constants import U64_MAX, U128_MAX
from quoter.errors import DivisionByZero, Overflow, QuoterError, Underflow
from quoter.safe_int import S, SafeInt, mul_div_up


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_from_invalid_type_raises(self):
        """SafeInt rejects invalid types."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore

    def test_from_bool_raises(self):
        """bool is not accepted as an amount."""
        with pytest.raises(TypeError):
            SafeInt(True)  # type: ignore

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for SafeInt arithmetic operations."""

    def test_add(self):
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15

    def test_sub(self):
        assert (S(10) - S(5)).value == 5

    def test_sub_underflow_raises(self):
        """Subtraction below zero raises Underflow."""
        with pytest.raises(Underflow):
            S(5) - S(10)

    def test_mul(self):
        assert (S(10) * S(5)).value == 50

    def test_floordiv(self):
        assert (S(10) // S(3)).value == 3

    def test_floordiv_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(10) // S(0)

    @pytest.mark.parametrize(
        "op",
        [
            lambda: 10 + S(5),
            lambda: 10 - S(5),
            lambda: 10 * S(5),
            lambda: 10 // S(3),
        ],
    )
    def test_plain_int_on_left_raises(self, op):
        """Arithmetic must start from a SafeInt so every step is checked."""
        with pytest.raises(TypeError):
            op()

    def test_division_by_zero_is_zero_division_error(self):
        """DivisionByZero can be caught as the builtin error."""
        with pytest.raises(ZeroDivisionError):
            S(1) // 0

    def test_errors_share_base(self):
        with pytest.raises(QuoterError):
            S(0) - 1


class TestSafeIntNamedOperations:
    """Tests for ceiling_div, abs_diff, saturating_sub and bound checks."""

    def test_ceiling_div(self):
        assert S(10).ceiling_div(3).value == 4
        assert S(9).ceiling_div(3).value == 3
        assert S(0).ceiling_div(3).value == 0

    def test_ceiling_div_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(10).ceiling_div(0)

    def test_abs_diff(self):
        assert S(3).abs_diff(10).value == 7
        assert S(10).abs_diff(3).value == 7

    def test_saturating_sub(self):
        assert S(10).saturating_sub(3).value == 7
        assert S(3).saturating_sub(10).value == 0

    def test_to_u64(self):
        assert S(U64_MAX).to_u64() == U64_MAX
        with pytest.raises(Overflow):
            S(U64_MAX + 1).to_u64()

    def test_to_u128(self):
        assert S(U128_MAX).to_u128() == U128_MAX
        with pytest.raises(Overflow):
            S(U128_MAX + 1).to_u128()

    def test_comparisons(self):
        assert S(1) < S(2)
        assert S(2) >= 2
        assert S(3) == 3
        assert not S(0)


class TestMulDivUp:
    """Tests for the u64-bounded mul_div_up."""

    def test_exact(self):
        assert mul_div_up(1_000_000, 50, 10_000) == 5_000

    def test_rounds_up(self):
        assert mul_div_up(1, 50, 10_000) == 1
        assert mul_div_up(10_001, 1, 10_000) == 2

    def test_zero(self):
        assert mul_div_up(0, 50, 10_000) == 0

    def test_overflow_raises(self):
        """Result above u64 raises even when the operands fit."""
        with pytest.raises(Overflow):
            mul_div_up(U64_MAX, 10_001, 10_000)

    def test_division_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            mul_div_up(1, 1, 0)
