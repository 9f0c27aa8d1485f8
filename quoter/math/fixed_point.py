"""64.64 unsigned fixed-point (FixedPoint64) math library.

This module implements the fixed-point arithmetic used by the on-chain OMM
pricing engine. Values are stored as unsigned integers scaled by 2^64 and
bounded by the u128 range, so every operation is reproducible bit for bit.

All operations are checked: results outside [0, 2^128 - 1] raise instead of
wrapping.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, localcontext
from typing import ClassVar

from quoter.constants import U128_MAX
from quoter.errors import DivisionByZero, DomainError, OutOfRange, Overflow, Underflow

__all__ = [
    # Classes
    "FixedPoint64",
    # Functions
    "pow_raw",
    "floor_log2",
    "log2_64",
    # Constants
    "SCALE_64",
    "LN2_RAW",
]

# =============================================================================
# Constants (matching the on-chain library exactly)
# =============================================================================

SCALE_64 = 1 << 64

# ln(2) in 64.64 representation
LN2_RAW = 12_786_308_645_202_655_660

# Enough significant digits to scale any u128-bounded Decimal exactly
_DECIMAL_PRECISION = 100


# =============================================================================
# Core math functions (operate on raw integers)
# =============================================================================


def pow_raw(x: int, n: int) -> int:
    """Compute x^n where x is a raw 64.64 value and n a non-negative integer.

    Binary exponentiation with a 64-bit right shift after every product,
    matching the on-chain rounding of each intermediate step.

    Args:
        x: Base as raw 64.64 value
        n: Integer exponent

    Returns:
        Raw 64.64 result (not range-checked)
    """
    res = SCALE_64
    while n != 0:
        if n & 1:
            res = (res * x) >> 64
        n >>= 1
        x = (x * x) >> 64
    return res


def floor_log2(x: int) -> int:
    """Return floor(log2(x)) for a positive integer via a binary bit scan.

    Raises:
        DomainError: If x is zero
    """
    if x == 0:
        raise DomainError("Log of zero")
    res = 0
    n = 64
    while n > 0:
        if x >= 1 << n:
            x >>= n
            res += n
        n >>= 1
    return res


def log2_64(x: int) -> FixedPoint64:
    """Binary logarithm of a raw 64.64 value, shifted to stay non-negative.

    Returns log2(x) where x is read as a plain integer, which equals
    log2(x / 2^64) + 64 for the fixed-point value. The integer part comes
    from a bit scan; the 64 fractional bits are extracted one at a time by
    squaring the normalized mantissa and comparing it against 2.

    Args:
        x: Raw 64.64 value (must be non-zero)

    Returns:
        log2(x) as FixedPoint64

    Raises:
        DomainError: If x is zero
    """
    integer_part = floor_log2(x)

    # Normalize to a 1.63 mantissa in [2^63, 2^64)
    if x >= 1 << 63:
        x >>= integer_part - 63
    else:
        x <<= 63 - integer_part

    frac = 0
    delta = 1 << 63
    while delta != 0:
        x = (x * x) >> 63
        if x >= 2 << 63:
            frac += delta
            x >>= 1
        delta >>= 1

    return FixedPoint64.from_raw((integer_part << 64) + frac)


# =============================================================================
# FixedPoint64 class
# =============================================================================


class FixedPoint64:
    """Unsigned 64.64 fixed-point number stored as int.

    All values are stored as integers scaled by 2^64.
    Example: 1.5 is stored as 3 << 63

    Instances are immutable; every operation returns a new value.
    """

    ONE: ClassVar[int] = SCALE_64
    MAX: ClassVar[int] = U128_MAX

    __slots__ = ("value",)
    value: int

    def __init__(self, value: int) -> None:
        """Create FixedPoint64 from a raw scaled value.

        Raises:
            OutOfRange: If value is outside [0, 2^128 - 1]
        """
        if value < 0 or value > U128_MAX:
            raise OutOfRange(f"Value out of range: {value}")
        object.__setattr__(self, "value", value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("FixedPoint64 is immutable")

    # --- Construction ---

    @classmethod
    def from_raw(cls, raw: int) -> FixedPoint64:
        """Create from a raw value (already scaled by 2^64)."""
        return cls(raw)

    @classmethod
    def from_int(cls, i: int) -> FixedPoint64:
        """Create from integer (will be scaled by 2^64).

        Raises:
            OutOfRange: If i is negative or i * 2^64 exceeds u128
        """
        if i < 0:
            raise OutOfRange(f"FixedPoint64 requires non-negative input, got {i}")
        return cls(i << 64)

    @classmethod
    def from_rational(cls, numerator: int, denominator: int) -> FixedPoint64:
        """Create floor(numerator * 2^64 / denominator).

        Raises:
            DivisionByZero: If denominator is zero
            OutOfRange: If the quotient rounds to zero from a non-zero
                numerator, or exceeds u128
        """
        if denominator == 0:
            raise DivisionByZero("Zero division")
        quotient = (numerator << 64) // denominator
        if quotient == 0 and numerator != 0:
            raise OutOfRange("Out of range: result too small")
        if quotient > U128_MAX:
            raise OutOfRange("Out of range: result too large")
        return cls(quotient)

    @classmethod
    def from_decimal(cls, d: Decimal) -> FixedPoint64:
        """Create from Decimal, flooring d * 2^64.

        Raises:
            OutOfRange: If d is negative or too large
        """
        if d < 0:
            raise OutOfRange(f"FixedPoint64 requires non-negative input, got {d}")
        with localcontext() as ctx:
            ctx.prec = _DECIMAL_PRECISION
            scaled = (d * SCALE_64).to_integral_value(rounding=ROUND_FLOOR)
        return cls(int(scaled))

    @classmethod
    def one(cls) -> FixedPoint64:
        return cls(SCALE_64)

    @classmethod
    def zero(cls) -> FixedPoint64:
        return cls(0)

    # --- Conversion ---

    def to_int_down(self) -> int:
        """Integer part, rounding down."""
        return self.value >> 64

    def to_int_up(self) -> int:
        """Integer part, rounding up."""
        floored = self.to_int_down()
        if self.value == floored << 64:
            return floored
        return floored + 1

    def to_int(self) -> int:
        """Integer part, rounding to nearest (halves round up)."""
        boundary = (self.to_int_down() << 64) + (1 << 63)
        return self.to_int_down() if self.value < boundary else self.to_int_up()

    def to_decimal(self) -> Decimal:
        """Convert to Decimal for display."""
        with localcontext() as ctx:
            ctx.prec = _DECIMAL_PRECISION
            return Decimal(self.value) / Decimal(SCALE_64)

    def is_zero(self) -> bool:
        return self.value == 0

    # --- Arithmetic ---

    def add(self, other: FixedPoint64) -> FixedPoint64:
        """Add two values.

        Raises:
            Overflow: If the sum exceeds u128
        """
        result = self.value + other.value
        if result > U128_MAX:
            raise Overflow("Addition overflow")
        return FixedPoint64(result)

    def sub(self, other: FixedPoint64) -> FixedPoint64:
        """Subtract other from self.

        Raises:
            Underflow: If other > self
        """
        if self.value < other.value:
            raise Underflow("Negative result")
        return FixedPoint64(self.value - other.value)

    def mul(self, other: FixedPoint64) -> FixedPoint64:
        """Multiply with floor rounding: (a * b) >> 64.

        Raises:
            Overflow: If the product exceeds u128
        """
        product = (self.value * other.value) >> 64
        if product > U128_MAX:
            raise Overflow("Multiplication overflow")
        return FixedPoint64(product)

    def div(self, other: FixedPoint64) -> FixedPoint64:
        """Divide with floor rounding: (a << 64) // b.

        Raises:
            DivisionByZero: If other is zero
            Overflow: If the quotient exceeds u128
        """
        if other.value == 0:
            raise DivisionByZero("Zero division")
        result = (self.value << 64) // other.value
        if result > U128_MAX:
            raise Overflow("Division overflow")
        return FixedPoint64(result)

    def pow(self, exponent: int) -> FixedPoint64:
        """Raise to a non-negative integer power.

        Raises:
            Overflow: If the result exceeds u128
        """
        result = pow_raw(self.value, exponent)
        if result > U128_MAX:
            raise Overflow("Overflow in pow")
        return FixedPoint64(result)

    def log2_plus_64(self) -> FixedPoint64:
        """Return log2(self) + 64."""
        return log2_64(self.value)

    def ln_plus_64ln2(self) -> FixedPoint64:
        """Return ln(self) + 64 * ln(2).

        The shift keeps the natural logarithm of any value >= 2^-64
        non-negative in the unsigned format.
        """
        x = log2_64(self.value).value
        return FixedPoint64.from_raw((x * LN2_RAW) >> 64)

    @staticmethod
    def multiply_divide(
        numerators: list[FixedPoint64], denominators: list[FixedPoint64]
    ) -> FixedPoint64:
        """Compute (n1 * n2 * ...) / (d1 * d2 * ...) without avoidable overflow.

        Both lists are processed smallest first. Numerators are multiplied in
        one at a time; when a product would overflow, the running result is
        divided by the next denominator instead and the multiply is retried.
        Remaining denominators are divided out at the end.

        Args:
            numerators: Factors of the numerator (at least one)
            denominators: Factors of the denominator

        Returns:
            The quotient as FixedPoint64

        Raises:
            DomainError: If numerators is empty
            Overflow: If a product overflows with no denominator left
            DivisionByZero: If a denominator is zero
        """
        if not numerators:
            raise DomainError("No numerators")

        # Descending order; the smallest factor sits at the end
        nums = sorted(numerators, reverse=True)
        dens = sorted(denominators, reverse=True)

        result = FixedPoint64.one()
        while nums:
            try:
                result = result.mul(nums[-1])
            except Overflow:
                if not dens:
                    raise
                result = result.div(dens.pop())
                continue
            nums.pop()

        while dens:
            result = result.div(dens.pop())

        return result

    @staticmethod
    def max(x: FixedPoint64, y: FixedPoint64) -> FixedPoint64:
        return x if x.value > y.value else y

    @staticmethod
    def min(x: FixedPoint64, y: FixedPoint64) -> FixedPoint64:
        return x if x.value < y.value else y

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedPoint64):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FixedPoint64):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, FixedPoint64):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, FixedPoint64):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, FixedPoint64):
            return NotImplemented
        return self.value >= other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"FixedPoint64({self.value})"

    def __str__(self) -> str:
        return str(self.to_decimal())
