"""Swap fee and quote result types."""

from __future__ import annotations

from dataclasses import dataclass

from quoter.models.pool import SwapDirection


@dataclass(frozen=True)
class SwapFees:
    """Split of a swap fee between protocol and pool.

    Attributes:
        protocol_fees: Part of the fee routed to the protocol
        pool_fees: Part of the fee left in the pool
    """

    protocol_fees: int
    pool_fees: int

    @property
    def total(self) -> int:
        return self.protocol_fees + self.pool_fees


@dataclass(frozen=True)
class SwapQuote:
    """Result of a swap quote, in b-token units.

    Attributes:
        amount_in: Input amount as requested
        amount_out: Output amount after fees, never negative
        protocol_fees: Fee share routed to the protocol
        pool_fees: Fee share left in the pool
        direction: Swap direction

    Examples:
        quote = SwapQuote(
            amount_in=10_000_000,
            amount_out=3_311_145_025,
            protocol_fees=332_779,
            pool_fees=16_306_141,
            direction=SwapDirection.Y_TO_X,
        )
        assert not quote.x2y
    """

    amount_in: int
    amount_out: int
    protocol_fees: int
    pool_fees: int
    direction: SwapDirection

    @property
    def x2y(self) -> bool:
        return self.direction.x2y

    @property
    def fees(self) -> SwapFees:
        return SwapFees(protocol_fees=self.protocol_fees, pool_fees=self.pool_fees)

    @property
    def is_zero(self) -> bool:
        """True if the swap yields nothing (depleted reserve or fees eat the output)."""
        return self.amount_out == 0
