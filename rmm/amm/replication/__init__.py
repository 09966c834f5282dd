"""Covered-call replicating pool implementation.

This package provides the trading-function math, swap quoting, and the
raw-integer AMM adapter for replicating market maker pools.
"""

# AMM class
from .amm import ReplicationAMM

# Configuration
from .config import DEFAULT_QUOTE_CONFIG, QuoteConfig

# Pool parsing
from .parsing import parse_replication_pool

# Pool dataclass
from .pools import ReplicationPool

# Quoting
from .quoter import SwapQuote, quote_swap, quote_swap_exact_out

# Curve math
from .replication_math import (
    calc_invariant,
    get_proportional_volatility,
    get_risky_given_stable,
    get_stable_given_risky,
)

__all__ = [
    # AMM
    "ReplicationAMM",
    # Configuration
    "DEFAULT_QUOTE_CONFIG",
    "QuoteConfig",
    # Pools
    "ReplicationPool",
    "parse_replication_pool",
    # Quoting
    "SwapQuote",
    "quote_swap",
    "quote_swap_exact_out",
    # Curve math
    "calc_invariant",
    "get_proportional_volatility",
    "get_risky_given_stable",
    "get_stable_given_risky",
]
