"""Replicating market maker pricing core - Python Implementation."""

from rmm.amm.replication import ReplicationAMM, ReplicationPool, quote_swap
from rmm.math.fixed_point import Fp

__version__ = "0.1.0"
__all__ = ["Fp", "ReplicationAMM", "ReplicationPool", "quote_swap", "__version__"]
