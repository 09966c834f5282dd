"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token addresses and pool timing
- factories: Pool and pool-state factory functions
"""

from tests.helpers.constants import (
    DAI,
    MATURITY,
    ONE_YEAR_BEFORE_MATURITY,
    TOKEN_DECIMALS,
    USDC,
    WBTC,
    WETH,
)
from tests.helpers.factories import fp, make_pool, make_pool_state

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "WBTC",
    "TOKEN_DECIMALS",
    "MATURITY",
    "ONE_YEAR_BEFORE_MATURITY",
    # Factories
    "fp",
    "make_pool",
    "make_pool_state",
]
