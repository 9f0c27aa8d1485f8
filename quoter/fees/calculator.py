"""Swap fee calculator.

Uses SafeInt for arithmetic operations to prevent:
- Division by zero in the bps fractions
- u64 overflow (the on-chain engine aborts above u64)
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, localcontext

import structlog

from quoter.errors import DomainError
from quoter.fees.config import DEFAULT_FEE_CONFIG, FeeConfig
from quoter.fees.result import SwapFees, SwapQuote
from quoter.models.pool import SwapDirection
from quoter.safe_int import S, mul_div_up

logger = structlog.get_logger()


class FeeCalculator:
    """Computes swap fees and assembles quotes.

    The total fee is charged on the gross output at the pool's fee rate,
    rounded up. The protocol takes protocol_fee_numerator / bps_scale of
    that total, also rounded up, and the pool keeps the rest.

    Attributes:
        config: Fee configuration settings
    """

    def __init__(self, config: FeeConfig | None = None):
        """Initialize with optional configuration.

        Args:
            config: Fee configuration. Uses DEFAULT_FEE_CONFIG if not provided.
        """
        self.config = config or DEFAULT_FEE_CONFIG

    def effective_fee_numerator(self, swap_fee_bps: int, fee_override: int | None = None) -> int:
        """Return the fee rate in bps: the override if it is strictly larger."""
        if fee_override is None:
            return swap_fee_bps
        scale = self.config.bps_scale
        if S(fee_override) * scale > S(swap_fee_bps) * scale:
            return fee_override
        return swap_fee_bps

    def compute_swap_fees(
        self,
        amount: int,
        swap_fee_bps: int,
        fee_override: int | None = None,
    ) -> SwapFees:
        """Split the fee on amount into protocol and pool shares.

        Args:
            amount: Gross output amount the fee is charged on
            swap_fee_bps: Pool fee rate in bps
            fee_override: Optional uncertainty-driven rate in bps

        Returns:
            SwapFees with protocol_fees + pool_fees equal to the total fee

        Raises:
            Overflow: If an intermediate result exceeds u64
            DivisionByZero: If bps_scale is zero
        """
        numerator = self.effective_fee_numerator(swap_fee_bps, fee_override)
        total_fees = mul_div_up(amount, numerator, self.config.bps_scale)
        protocol_fees = mul_div_up(
            total_fees, self.config.protocol_fee_numerator, self.config.bps_scale
        )
        pool_fees = (S(total_fees) - protocol_fees).value
        return SwapFees(protocol_fees=protocol_fees, pool_fees=pool_fees)

    def get_quote(
        self,
        amount_in: int,
        amount_out: int,
        direction: SwapDirection | bool,
        swap_fee_bps: int,
        fee_override: int | None = None,
    ) -> SwapQuote:
        """Assemble a quote from the gross output.

        The net output is floored at zero when the fees exceed the gross
        output.
        """
        if isinstance(direction, bool):
            direction = SwapDirection.from_x2y(direction)

        fees = self.compute_swap_fees(amount_out, swap_fee_bps, fee_override)
        net_out = S(amount_out).saturating_sub(fees.total).value

        if net_out == 0 and amount_out > 0:
            logger.debug(
                "swap_fees_exceed_output",
                amount_out=amount_out,
                total_fees=fees.total,
            )

        return SwapQuote(
            amount_in=amount_in,
            amount_out=net_out,
            protocol_fees=fees.protocol_fees,
            pool_fees=fees.pool_fees,
            direction=direction,
        )


def price_uncertainty_ratio(price: Decimal, confidence: Decimal) -> int:
    """Return the oracle confidence interval relative to the price, in bps.

    floor(confidence * 10_000 / price)

    Raises:
        DomainError: If price is not positive
    """
    price = Decimal(price)
    if price <= 0:
        raise DomainError(f"Price must be positive, got {price}")
    with localcontext() as ctx:
        ctx.prec = 100
        ctx.rounding = ROUND_FLOOR
        ratio = (Decimal(confidence) * DEFAULT_FEE_CONFIG.bps_scale / price).to_integral_value()
    return int(ratio)


# Default calculator instance
DEFAULT_FEE_CALCULATOR = FeeCalculator()


def compute_swap_fees(amount: int, swap_fee_bps: int, fee_override: int | None = None) -> SwapFees:
    """Compute swap fees with the default configuration."""
    return DEFAULT_FEE_CALCULATOR.compute_swap_fees(amount, swap_fee_bps, fee_override)


def get_quote(
    amount_in: int,
    amount_out: int,
    direction: SwapDirection | bool,
    swap_fee_bps: int,
    fee_override: int | None = None,
) -> SwapQuote:
    """Assemble a quote with the default configuration."""
    return DEFAULT_FEE_CALCULATOR.get_quote(
        amount_in, amount_out, direction, swap_fee_bps, fee_override
    )
