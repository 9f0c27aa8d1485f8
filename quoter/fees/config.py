"""Fee configuration for the quoter."""

from dataclasses import dataclass

from quoter.constants import BPS_SCALE, PROTOCOL_FEE_NUMERATOR


@dataclass(frozen=True)
class FeeConfig:
    """Centralized configuration for swap fee calculation.

    Attributes:
        protocol_fee_numerator: Protocol share of the total fee, in units of
            bps_scale (default: 200, i.e. 2% of the fee)
        bps_scale: Denominator of basis-point fractions (default: 10,000)
    """

    protocol_fee_numerator: int = PROTOCOL_FEE_NUMERATOR
    bps_scale: int = BPS_SCALE


# Default configuration instance
DEFAULT_FEE_CONFIG = FeeConfig()
