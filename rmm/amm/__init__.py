"""AMM implementations."""

from rmm.amm.base import AMM, SwapResult
from rmm.amm.replication import ReplicationAMM, ReplicationPool

__all__ = ["AMM", "ReplicationAMM", "ReplicationPool", "SwapResult"]
