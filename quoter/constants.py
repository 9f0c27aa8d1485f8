"""Protocol constants for the OMM quoter.

Centralizes the numeric parameters shared with the on-chain pricing engine.
Changing any of these breaks parity with on-chain quotes.
"""

# Integer bounds of the on-chain representations
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# Basis points scale factor (1 bps = 1 / 10_000)
BPS_SCALE = 10_000

# Share of the total swap fee routed to the protocol, in bps of the fee
# (200 / 10_000 = 2% of the fee, not of the traded amount)
PROTOCOL_FEE_NUMERATOR = 200

# StableSwap amplifier precision. The amplifier handed to the invariant
# solvers follows the Curve convention A * n^(n-1) * A_PRECISION.
A_PRECISION = 100

# Iteration cap for the StableSwap D and Y solvers
STABLE_MAX_ITERATIONS = 255

# Iteration cap for the legacy Newton-Raphson solver
NEWTON_MAX_ITERATIONS = 20

# Scale applied to underlying amounts before USD conversion (10^10)
USD_SCALE = 10**10

# b-token ratios and oracle prices carry at most 18 fractional digits (WAD)
RATIO_DECIMALS = 18

# Token decimals are bounded so that 10^decimals fits in a u64
MAX_TOKEN_DECIMALS = 19
