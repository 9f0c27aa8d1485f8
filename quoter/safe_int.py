"""Safe integer wrapper for quote arithmetic.

This module provides SafeInt, a lightweight wrapper that makes the integer
arithmetic of the StableSwap solvers and the fee maths fail loudly instead of
producing values the on-chain engine would abort on:
- Division by zero raises DivisionByZero
- Subtraction below zero raises Underflow
- Values exceeding u64/u128 raise Overflow on conversion

Usage pattern:
    from quoter.safe_int import S

    def invariant_step(d: int, reserve_a: int, reserve_b: int) -> int:
        sd, sa, sb = S(d), S(reserve_a), S(reserve_b)
        d_p = (sd * sd // sa) * sd // sb  # Raises if a reserve is zero
        return d_p.value
"""

from __future__ import annotations

from quoter.constants import U64_MAX, U128_MAX
from quoter.errors import DivisionByZero, Overflow, Underflow


class SafeInt:
    """Non-negative integer with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt
        """
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Negative result: {self._value} - {other_val}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division rounding down.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Ceiling division: (self + other - 1) // other.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return SafeInt((self._value + other_val - 1) // other_val)

    def abs_diff(self, other: SafeInt | int) -> SafeInt:
        """Absolute difference |self - other|. Never raises."""
        return SafeInt(abs(self._value - _extract_value(other)))

    def saturating_sub(self, other: SafeInt | int) -> SafeInt:
        """Subtract, clamping the result to zero instead of raising."""
        return SafeInt(max(0, self._value - _extract_value(other)))

    def to_u64(self) -> int:
        """Convert to int, validating u64 bounds.

        Raises:
            Overflow: If value is negative or exceeds 2^64-1
        """
        return _check_bound(self._value, U64_MAX, "u64")

    def to_u128(self) -> int:
        """Convert to int, validating u128 bounds.

        Raises:
            Overflow: If value is negative or exceeds 2^128-1
        """
        return _check_bound(self._value, U128_MAX, "u128")


def mul_div_up(x: int, y: int, z: int) -> int:
    """Compute ceil(x * y / z) as a u64.

    Raises:
        DivisionByZero: If z is zero
        Overflow: If the result does not fit in a u64
    """
    return (S(x) * S(y)).ceiling_div(S(z)).to_u64()


def _check_bound(value: int, bound: int, name: str) -> int:
    if value < 0:
        raise Overflow(f"Negative value cannot be {name}: {value}")
    if value > bound:
        raise Overflow(f"Value exceeds {name} max: {value}")
    return value


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
