"""Replicating pool parsing.

Converts the orchestrator's pool snapshot (PoolState) into the frozen
ReplicationPool used by the AMM.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from rmm.math.units import scale_factor_for_decimals

from .pools import ReplicationPool

if TYPE_CHECKING:
    from rmm.models.pool import PoolState

logger = structlog.get_logger()


def parse_replication_pool(state: PoolState) -> ReplicationPool:
    """Parse a PoolState snapshot into a ReplicationPool.

    Token decimals become scale factors onto the wad basis.

    Raises:
        InvalidScalingFactorError: If a token declares more than 18 decimals
    """
    pool = ReplicationPool(
        id=state.id,
        risky_token=state.risky.address.lower(),
        stable_token=state.stable.address.lower(),
        reserve_risky=int(state.reserve_risky),
        reserve_stable=int(state.reserve_stable),
        liquidity=int(state.liquidity),
        strike=int(state.strike),
        sigma=state.sigma,
        maturity=state.maturity,
        fee=state.fee,
        invariant_last=int(state.invariant_last),
        scale_factor_risky=scale_factor_for_decimals(state.risky.decimals),
        scale_factor_stable=scale_factor_for_decimals(state.stable.decimals),
    )
    logger.debug(
        "replication_pool_parsed",
        pool_id=pool.id,
        risky=pool.risky_token,
        stable=pool.stable_token,
        maturity=pool.maturity,
    )
    return pool
