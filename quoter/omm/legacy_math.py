"""Legacy OMM curve math.

The legacy regime prices a trade by solving the implicit curve

    f(z) = (1 - 1/A) * z - (1/A) * ln(1 - z) - k = 0

for z in (0, 1), where k is the trade utilization (input value relative to
the output reserve value) and A the amplifier. The output amount is then
z * reserve_out. Everything runs in FixedPoint64 so results match the
on-chain engine bit for bit.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from quoter.constants import NEWTON_MAX_ITERATIONS
from quoter.errors import DomainError, NewtonRaphsonDidNotConverge
from quoter.math.fixed_point import LN2_RAW, FixedPoint64

logger = structlog.get_logger()

# =============================================================================
# Solver constants
# =============================================================================

ONE = FixedPoint64.one()
ZERO = FixedPoint64.zero()
HALF = FixedPoint64.from_rational(1, 2)

# Domain clamp for z
MIN_Z = FixedPoint64.from_rational(1, 100_000)  # 1e-5
MAX_Z = FixedPoint64.from_rational(
    999_999_999_999_999_999, 1_000_000_000_000_000_000
)  # 0.999999999999999999

# Upper bound for the initial guess
MAX_INITIAL_Z = FixedPoint64.from_rational(9_999_999_999, 10_000_000_000)  # 0.9999999999

# Convergence tolerance on |f(z)| and on the step size
TOLERANCE = FixedPoint64.from_rational(1, 100_000_000_000_000)  # 1e-14

# Derivatives below this are treated as flat
MIN_DERIVATIVE = FixedPoint64.from_rational(1, 10_000_000_000)  # 1e-10

# 64 * ln(2): upper bound of ln_plus_64ln2 on (0, 1]
LN2_TIMES_64 = FixedPoint64.from_raw(LN2_RAW).mul(FixedPoint64.from_int(64))


# =============================================================================
# Curve functions
# =============================================================================


def compute_f(z: FixedPoint64, a: FixedPoint64, k: FixedPoint64) -> tuple[FixedPoint64, bool]:
    """Evaluate f(z) = (1 - 1/A) * z - (1/A) * ln(1 - z) - k.

    The unsigned format cannot hold negative values, so the result is
    returned as a magnitude plus a sign flag. Both curve terms are
    non-negative on (0, 1): ln(1 - z) <= 0, so -(1/A) * ln(1 - z) is added.

    Args:
        z: Point of evaluation in (0, 1)
        a: Amplifier
        k: Trade utilization

    Returns:
        Tuple of (|f(z)|, f(z) >= 0)

    Raises:
        DomainError: If ln(1 - z) + 64*ln(2) exceeds 64*ln(2), i.e. 1 - z > 1
    """
    one_div_a = ONE.div(a)
    term1 = z.mul(ONE.sub(one_div_a))

    ln_plus_64ln2 = ONE.sub(z).ln_plus_64ln2()
    if ln_plus_64ln2 > LN2_TIMES_64:
        raise DomainError("Logarithm argument out of bound: ln(1 - z) > 0")

    # |ln(1 - z)|
    ln_magnitude = LN2_TIMES_64.sub(ln_plus_64ln2)
    term2 = one_div_a.mul(ln_magnitude)

    curve = term1.add(term2)
    if curve >= k:
        return curve.sub(k), True
    return k.sub(curve), False


def compute_f_prime(z: FixedPoint64, a: FixedPoint64) -> FixedPoint64:
    """Evaluate f'(z) = 1 - 1/A + 1/(A * (1 - z))."""
    one_div_a = ONE.div(a)
    term3 = ONE.div(a.mul(ONE.sub(z)))
    return ONE.sub(one_div_a).add(term3)


def _take_step(z: FixedPoint64, step: FixedPoint64, decrease: bool) -> FixedPoint64 | None:
    """Move z by step; None when the move would reach or cross zero."""
    if decrease:
        return z.sub(step) if step < z else None
    return z.add(step)


def newton_raphson(k: FixedPoint64, a: FixedPoint64, initial_z: FixedPoint64) -> FixedPoint64:
    """Find the root of f(z) on (0, 1) with damped Newton-Raphson.

    Algorithm:
        1. Start at initial_z, or MAX_Z when initial_z >= 1
        2. Stop when |f(z)| < TOLERANCE
        3. Step z -/+ f(z)/f'(z); if that leaves (0, 1), retake it with a
           0.5 damping factor and clamp into [MIN_Z, MAX_Z]
        4. Stop when the step size falls below TOLERANCE
        5. Max iterations: 20

    Args:
        k: Trade utilization
        a: Amplifier
        initial_z: Initial guess

    Returns:
        The root z

    Raises:
        DomainError: If the derivative is near zero
        NewtonRaphsonDidNotConverge: If iteration doesn't converge
    """
    z = MAX_Z if initial_z >= ONE else initial_z

    for _ in range(NEWTON_MAX_ITERATIONS):
        fx, fx_positive = compute_f(z, a, k)
        if fx < TOLERANCE:
            return z

        fp = compute_f_prime(z, a)
        if fp < MIN_DERIVATIVE:
            raise DomainError("Derivative near zero")

        fx_div_fp = fx.div(fp)
        new_z = _take_step(z, fx_div_fp, decrease=fx_positive)

        if new_z is None or new_z <= ZERO or new_z >= ONE:
            damped = _take_step(z, fx_div_fp.mul(HALF), decrease=fx_positive)
            new_z = MIN_Z if damped is None else FixedPoint64.max(MIN_Z, FixedPoint64.min(damped, MAX_Z))
            logger.debug("newton_raphson_damped_step", z=str(z), new_z=str(new_z))

        step_size = new_z.sub(z) if new_z >= z else z.sub(new_z)
        if step_size < TOLERANCE:
            return z

        z = new_z

    raise NewtonRaphsonDidNotConverge(
        f"Newton-Raphson did not converge after {NEWTON_MAX_ITERATIONS} iterations"
    )


# =============================================================================
# Trade solver
# =============================================================================


def compute_utilization(
    amount_in: FixedPoint64,
    reserve_x: FixedPoint64,
    reserve_y: FixedPoint64,
    price_x: FixedPoint64,
    price_y: FixedPoint64,
    decimals_x: int,
    decimals_y: int,
    x2y: bool,
) -> FixedPoint64:
    """Compute the dimensionless trade utilization k.

    k is the value of the input relative to the value of the output
    reserve, with the price ratio adjusted for the decimals difference:

        x2y: k = amount_in * p_x / (reserve_y * p_y * 10^(dx - dy))
        y2x: k = amount_in * 10^(dx - dy) * p_y / (reserve_x * p_x)

    The factors go through multiply_divide so large amounts combined with
    a wide decimals gap do not overflow.
    """
    ten = FixedPoint64.from_int(10)
    if decimals_x >= decimals_y:
        dec_pow = ten.pow(decimals_x - decimals_y)
    else:
        dec_pow = ONE.div(ten.pow(decimals_y - decimals_x))

    if x2y:
        return FixedPoint64.multiply_divide([amount_in, price_x], [reserve_y, price_y, dec_pow])
    return FixedPoint64.multiply_divide([amount_in, dec_pow, price_y], [reserve_x, price_x])


def quote_swap_inner(
    amount_in: int,
    reserve_x: int,
    reserve_y: int,
    price_x: Decimal,
    price_y: Decimal,
    decimals_x: int,
    decimals_y: int,
    amplifier: int,
    x2y: bool,
) -> int:
    """Calculate the legacy output for a given input, in underlying units.

    Args:
        amount_in: Input amount (underlying)
        reserve_x: Reserve of X (underlying)
        reserve_y: Reserve of Y (underlying)
        price_x: Oracle price of X
        price_y: Oracle price of Y
        decimals_x: Decimals of X
        decimals_y: Decimals of Y
        amplifier: Legacy amplifier A
        x2y: True to sell X for Y

    Returns:
        Output amount (underlying), or 0 if it would deplete the reserve
    """
    r_x = FixedPoint64.from_int(reserve_x)
    r_y = FixedPoint64.from_int(reserve_y)

    k = compute_utilization(
        FixedPoint64.from_int(amount_in),
        r_x,
        r_y,
        FixedPoint64.from_decimal(price_x),
        FixedPoint64.from_decimal(price_y),
        decimals_x,
        decimals_y,
        x2y,
    )

    initial_z = FixedPoint64.min(k, MAX_INITIAL_Z)
    z = newton_raphson(k, FixedPoint64.from_int(amplifier), initial_z)

    reserve_out = reserve_y if x2y else reserve_x
    delta_out = z.mul(r_y if x2y else r_x).to_int_down()

    if delta_out >= reserve_out:
        logger.debug(
            "legacy_curve_reserve_depleted",
            delta_out=delta_out,
            reserve_out=reserve_out,
            x2y=x2y,
        )
        return 0

    return delta_out
