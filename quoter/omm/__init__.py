"""OMM pricing math.

Modules:
- scaling: b-token, underlying and USD unit conversions
- stable_math: StableSwap invariant solvers (D and Y)
- legacy_math: legacy curve Newton-Raphson solver
- legacy / stable: full quote pipelines for each regime

The pipelines are imported from their modules directly, they depend on
the fee and model packages.
"""

from quoter.omm.legacy_math import compute_f, compute_f_prime, newton_raphson, quote_swap_inner
from quoter.omm.scaling import (
    RoundingMode,
    SplitPrice,
    from_usd,
    split_price,
    to_b_token,
    to_underlying,
    to_usd,
    truncate_ratio,
)
from quoter.omm.stable_math import compute_d, compute_y

__all__ = [
    # Scaling
    "RoundingMode",
    "SplitPrice",
    "split_price",
    "to_usd",
    "from_usd",
    "to_underlying",
    "to_b_token",
    "truncate_ratio",
    # Solvers
    "compute_d",
    "compute_y",
    "compute_f",
    "compute_f_prime",
    "newton_raphson",
    "quote_swap_inner",
]
