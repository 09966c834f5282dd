"""Mathematical utilities for the replicating market maker.

This package provides the numerical primitives under the trading curve:
- Fp: signed 64.64 fixed-point arithmetic
- normal: standard normal CDF, PDF and inverse CDF on Fp
- units: raw token amount and time conversions
"""

from rmm.math.fixed_point import Fp
from rmm.math.normal import cdf, inverse_cdf, pdf

__all__ = ["Fp", "cdf", "inverse_cdf", "pdf"]
