"""Quoter error classes.

Every failure is fatal to the quote being computed. Errors are grouped so
callers can tell range problems, division by zero, solver non-convergence,
domain violations and bad input apart.
"""


class QuoterError(Exception):
    """Base error for quote computations."""

    pass


# =============================================================================
# Arithmetic range errors
# =============================================================================


class RangeError(QuoterError, ArithmeticError):
    """Result falls outside the representable range."""

    pass


class OutOfRange(RangeError):
    """Value cannot be constructed in the target representation."""

    pass


class Overflow(RangeError):
    """Result exceeds the maximum representable value."""

    pass


class Underflow(RangeError):
    """Subtraction would produce a negative result."""

    pass


class DivisionByZero(QuoterError, ZeroDivisionError):
    """Division or ratio with a zero denominator."""

    pass


# =============================================================================
# Solver errors
# =============================================================================


class ConvergenceError(QuoterError):
    """Iterative solver exceeded its iteration cap."""

    pass


class InvariantDidNotConverge(ConvergenceError):
    """Fixed-point iteration for the StableSwap invariant D did not converge."""

    pass


class GetYDidNotConverge(ConvergenceError):
    """Newton iteration for the counterpart reserve Y did not converge."""

    pass


class NewtonRaphsonDidNotConverge(ConvergenceError):
    """Legacy curve root-finder did not converge within its iteration cap."""

    pass


class DomainError(QuoterError, ValueError):
    """Argument outside the domain of a function (log bound, flat derivative)."""

    pass


class InvalidInputError(QuoterError, ValueError):
    """Request is missing parameters required by the selected regime."""

    pass
