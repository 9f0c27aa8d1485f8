"""Pool state and swap request models.

A quote needs the pool state (reserves, decimals, amplifier, fee rate and
b-token ratios) plus a request. Requests are a tagged union on ``kind`` so
the stable-swap regime's required confidence intervals are enforced by
validation rather than by optional arguments.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from quoter.models.types import BTokenRatio, Confidence, FeeBps, Price, TokenDecimals, Uint64


class SwapDirection(str, Enum):
    """Direction of a swap."""

    X_TO_Y = "x2y"
    Y_TO_X = "y2x"

    @classmethod
    def from_x2y(cls, x2y: bool) -> SwapDirection:
        return cls.X_TO_Y if x2y else cls.Y_TO_X

    @property
    def x2y(self) -> bool:
        return self is SwapDirection.X_TO_Y


class QuoterType(str, Enum):
    """Pricing regime of a pool, chosen by the pool-state provider."""

    LEGACY = "legacy"
    STABLE_SWAP = "stable_swap"


class PoolQuoteState(BaseModel):
    """Snapshot of an OMM pool, as needed for quoting.

    Reserves are in b-token units. The ratios convert b-token units to
    underlying units and are truncated to 18 fractional digits on input.

    The amplifier scale is regime-specific: the legacy curve uses A
    directly, the stable-swap regime multiplies it by 2 * A_PRECISION.
    """

    model_config = {"frozen": True}

    reserve_x: Uint64
    reserve_y: Uint64
    decimals_x: TokenDecimals
    decimals_y: TokenDecimals
    amplifier: Annotated[int, Field(gt=0)]
    swap_fee_bps: FeeBps
    b_token_ratio_x: BTokenRatio
    b_token_ratio_y: BTokenRatio

    def reserve_out(self, direction: SwapDirection) -> int:
        """b-token reserve on the output side."""
        return self.reserve_y if direction.x2y else self.reserve_x


class LegacyRequest(BaseModel):
    """Swap request priced by the legacy curve."""

    model_config = {"frozen": True}

    kind: Literal["legacy"] = "legacy"
    amount_in: Uint64
    direction: SwapDirection
    price_x: Price
    price_y: Price


class StableSwapRequest(BaseModel):
    """Swap request priced by the stable-swap invariant.

    The confidence intervals widen the fee when the oracle is uncertain.
    """

    model_config = {"frozen": True}

    kind: Literal["stable_swap"] = "stable_swap"
    amount_in: Uint64
    direction: SwapDirection
    price_x: Price
    price_y: Price
    price_confidence_x: Confidence
    price_confidence_y: Confidence


SwapRequest = Annotated[LegacyRequest | StableSwapRequest, Field(discriminator="kind")]
