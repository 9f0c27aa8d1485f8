"""Quoter entry point.

The Quoter resolves a request variant to its pricing regime and returns a
SwapQuote. Regime selection belongs to the pool-state provider: it is
expressed either by the request type or by an explicit QuoterType.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from quoter.errors import InvalidInputError, QuoterError
from quoter.fees.calculator import DEFAULT_FEE_CALCULATOR, FeeCalculator
from quoter.fees.result import SwapQuote
from quoter.models.pool import (
    LegacyRequest,
    PoolQuoteState,
    QuoterType,
    StableSwapRequest,
    SwapDirection,
    SwapRequest,
)
from quoter.omm import legacy, stable

logger = structlog.get_logger()


class Quoter:
    """Prices swaps against OMM pool snapshots.

    The quoter holds no state besides its fee calculator, so one instance
    can serve concurrent callers.

    Args:
        fee_calculator: Fee calculator to assemble quotes with. Uses
            DEFAULT_FEE_CALCULATOR if not provided.
    """

    def __init__(self, fee_calculator: FeeCalculator | None = None) -> None:
        self.fee_calculator = fee_calculator or DEFAULT_FEE_CALCULATOR

    def quote(self, state: PoolQuoteState, request: SwapRequest) -> SwapQuote:
        """Quote a swap.

        Args:
            state: Pool snapshot
            request: LegacyRequest or StableSwapRequest

        Returns:
            SwapQuote with the net output and fee split

        Raises:
            QuoterError: If any stage of the computation fails
        """
        try:
            if isinstance(request, StableSwapRequest):
                result = self._quote_stable_swap(state, request)
            elif isinstance(request, LegacyRequest):
                result = self._quote_legacy(state, request)
            else:
                raise InvalidInputError(f"Unsupported request type: {type(request).__name__}")
        except QuoterError as e:
            logger.warning(
                "quote_failed",
                kind=getattr(request, "kind", None),
                amount_in=getattr(request, "amount_in", None),
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        logger.debug(
            "quote_computed",
            kind=request.kind,
            direction=request.direction.value,
            amount_in=result.amount_in,
            amount_out=result.amount_out,
            protocol_fees=result.protocol_fees,
            pool_fees=result.pool_fees,
        )
        return result

    def quote_swap(
        self,
        state: PoolQuoteState,
        quoter_type: QuoterType,
        *,
        amount_in: int,
        price_x: Decimal,
        price_y: Decimal,
        direction: SwapDirection | bool,
        price_confidence_x: Decimal | None = None,
        price_confidence_y: Decimal | None = None,
    ) -> SwapQuote:
        """Quote a swap from flat arguments and an explicit regime.

        Raises:
            InvalidInputError: If a stable-swap quote lacks a confidence interval
            pydantic.ValidationError: If an argument is out of range
        """
        if isinstance(direction, bool):
            direction = SwapDirection.from_x2y(direction)

        request: LegacyRequest | StableSwapRequest
        if quoter_type is QuoterType.STABLE_SWAP:
            if price_confidence_x is None or price_confidence_y is None:
                raise InvalidInputError("Stable-swap quotes require both price confidence intervals")
            request = StableSwapRequest(
                amount_in=amount_in,
                direction=direction,
                price_x=price_x,
                price_y=price_y,
                price_confidence_x=price_confidence_x,
                price_confidence_y=price_confidence_y,
            )
        else:
            request = LegacyRequest(
                amount_in=amount_in,
                direction=direction,
                price_x=price_x,
                price_y=price_y,
            )

        return self.quote(state, request)

    def _quote_legacy(self, state: PoolQuoteState, request: LegacyRequest) -> SwapQuote:
        return legacy.quote_swap(
            amount_in=request.amount_in,
            reserve_x=state.reserve_x,
            reserve_y=state.reserve_y,
            price_x=request.price_x,
            price_y=request.price_y,
            decimals_x=state.decimals_x,
            decimals_y=state.decimals_y,
            amplifier=state.amplifier,
            x2y=request.direction.x2y,
            b_token_ratio_x=state.b_token_ratio_x,
            b_token_ratio_y=state.b_token_ratio_y,
            swap_fee_bps=state.swap_fee_bps,
            fee_calculator=self.fee_calculator,
        )

    def _quote_stable_swap(self, state: PoolQuoteState, request: StableSwapRequest) -> SwapQuote:
        return stable.quote_swap(
            amount_in=request.amount_in,
            reserve_x=state.reserve_x,
            reserve_y=state.reserve_y,
            price_x=request.price_x,
            price_y=request.price_y,
            decimals_x=state.decimals_x,
            decimals_y=state.decimals_y,
            amplifier=state.amplifier,
            x2y=request.direction.x2y,
            b_token_ratio_x=state.b_token_ratio_x,
            b_token_ratio_y=state.b_token_ratio_y,
            swap_fee_bps=state.swap_fee_bps,
            price_confidence_x=request.price_confidence_x,
            price_confidence_y=request.price_confidence_y,
            fee_calculator=self.fee_calculator,
        )


# Singleton quoter with the default fee configuration
_default_quoter = Quoter()


def get_default_quoter() -> Quoter:
    """Return the shared default Quoter."""
    return _default_quoter
