"""StableSwap invariant math for two-coin OMM pools.

Core math functions for the stable-swap regime (Curve-style invariant).
Uses fixed-point iteration for D and Newton iteration for Y.

IMPORTANT: All calculations use SafeInt so that zero reserves and negative
intermediates raise instead of producing garbage.
"""

from quoter.constants import A_PRECISION, STABLE_MAX_ITERATIONS
from quoter.errors import GetYDidNotConverge, InvariantDidNotConverge
from quoter.safe_int import S

# Two-coin pools only
_N_COINS = 2


def compute_d(reserve_a: int, reserve_b: int, amp: int) -> int:
    """Calculate the StableSwap invariant D for two reserves.

    Solves
        A * sum(x_i) * n^n + D = A * D * n^n + D^(n+1) / (n^n * prod(x_i))
    with the converging recurrence
        D_P = D^3 / (4 * a * b)
        D' = (Ann * S / A_PRECISION + D_P * n) * D
             / ((Ann - A_PRECISION) * D / A_PRECISION + (n + 1) * D_P)

    Algorithm:
        1. Initial guess: D = a + b
        2. Iterate until |D' - D| <= 1
        3. Max iterations: 255

    Scaling both reserves by c scales D by c (within one unit of rounding).

    Args:
        reserve_a: First normalized reserve
        reserve_b: Second normalized reserve
        amp: Amplifier, already multiplied by A_PRECISION

    Returns:
        The invariant D

    Raises:
        InvariantDidNotConverge: If iteration doesn't converge
        DivisionByZero: If a reserve is zero
    """
    sum_reserves = S(reserve_a) + S(reserve_b)
    ann = S(amp) * _N_COINS

    d = sum_reserves

    for _ in range(STABLE_MAX_ITERATIONS):
        # D_P = D^3 / (n^n * a * b), divided step by step to keep it small
        d_p = d * d // S(reserve_a)
        d_p = d_p * d // S(reserve_b)
        d_p = d_p // (_N_COINS * _N_COINS)

        d_prev = d

        numerator = (ann * sum_reserves // A_PRECISION + d_p * _N_COINS) * d
        denominator = (ann - A_PRECISION) * d // A_PRECISION + d_p * (_N_COINS + 1)

        d = numerator // denominator

        if d.abs_diff(d_prev) <= 1:
            return d.value

    raise InvariantDidNotConverge(
        f"compute_d did not converge after {STABLE_MAX_ITERATIONS} iterations"
    )


def compute_y(reserve_in: int, amp: int, d: int) -> int:
    """Solve for the counterpart reserve given D and the updated input reserve.

    Newton iteration on y^2 + (b - D) * y - c = 0 where
        c = D^2 / (2 * x) * D * A_PRECISION / (2 * Ann)
        b = x + D * A_PRECISION / Ann

    Args:
        reserve_in: Input-side reserve after the trade
        amp: Amplifier, already multiplied by A_PRECISION
        d: The invariant D to preserve

    Returns:
        The output-side reserve that keeps D unchanged

    Raises:
        GetYDidNotConverge: If iteration doesn't converge
        DivisionByZero: If reserve_in or amp is zero
        Underflow: If the Newton denominator turns negative
    """
    sd = S(d)
    ann = S(amp) * _N_COINS

    c = sd * sd // (S(reserve_in) * _N_COINS)
    c = c * sd * A_PRECISION // (ann * _N_COINS)

    b = S(reserve_in) + sd * A_PRECISION // ann

    y = sd

    for _ in range(STABLE_MAX_ITERATIONS):
        y_prev = y
        y = (y * y + c) // (y * 2 + b - sd)

        if y.abs_diff(y_prev) <= 1:
            return y.value

    raise GetYDidNotConverge(
        f"compute_y did not converge after {STABLE_MAX_ITERATIONS} iterations"
    )
