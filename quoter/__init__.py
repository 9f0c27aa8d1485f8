"""OMM swap quoter.

Prices swaps against oracle-anchored OMM pools in two regimes: the legacy
curve (FixedPoint64 Newton-Raphson) and the stable-swap invariant.
"""

from quoter.errors import (
    ConvergenceError,
    DivisionByZero,
    DomainError,
    GetYDidNotConverge,
    InvalidInputError,
    InvariantDidNotConverge,
    NewtonRaphsonDidNotConverge,
    OutOfRange,
    Overflow,
    QuoterError,
    RangeError,
    Underflow,
)
from quoter.fees import FeeCalculator, FeeConfig, SwapFees, SwapQuote
from quoter.math import FixedPoint64
from quoter.models import (
    LegacyRequest,
    PoolQuoteState,
    QuoterType,
    StableSwapRequest,
    SwapDirection,
)
from quoter.omm import SplitPrice, compute_d, compute_y, from_usd, split_price, to_usd
from quoter.quoter import Quoter, get_default_quoter

__version__ = "0.1.0"

__all__ = [
    # Entry point
    "Quoter",
    "get_default_quoter",
    # Models
    "PoolQuoteState",
    "LegacyRequest",
    "StableSwapRequest",
    "SwapDirection",
    "QuoterType",
    # Results and fees
    "SwapQuote",
    "SwapFees",
    "FeeCalculator",
    "FeeConfig",
    # Primitives
    "FixedPoint64",
    "SplitPrice",
    "split_price",
    "to_usd",
    "from_usd",
    "compute_d",
    "compute_y",
    # Errors
    "QuoterError",
    "RangeError",
    "OutOfRange",
    "Overflow",
    "Underflow",
    "DivisionByZero",
    "ConvergenceError",
    "InvariantDidNotConverge",
    "GetYDidNotConverge",
    "NewtonRaphsonDidNotConverge",
    "DomainError",
    "InvalidInputError",
]
