"""Mathematical utilities for the OMM quoter.

This package provides the fixed-point primitive used by the legacy curve:
- FixedPoint64: unsigned 64.64 fixed-point arithmetic with checked bounds
"""

from quoter.math.fixed_point import FixedPoint64

__all__ = ["FixedPoint64"]
