"""Replicating pool dataclass."""

from __future__ import annotations

from dataclasses import dataclass

from rmm.models.types import normalize_address


@dataclass(frozen=True)
class ReplicationPool:
    """Covered-call replicating pool with raw on-chain values.

    Attributes:
        id: Pool identifier
        risky_token: Risky asset address
        stable_token: Stable asset address
        reserve_risky: Risky reserve in risky token decimals
        reserve_stable: Stable reserve in stable token decimals
        liquidity: Outstanding liquidity shares (18 decimals)
        strike: Strike price in stable token decimals per risky unit
        sigma: Implied volatility in basis points (10_000 == 100%)
        maturity: Maturity as unix timestamp (seconds)
        fee: Swap fee in basis points
        invariant_last: Last recorded invariant as raw 64.64 fixed-point
        scale_factor_risky: 10^(18 - risky decimals)
        scale_factor_stable: 10^(18 - stable decimals)
    """

    id: str
    risky_token: str
    stable_token: str
    reserve_risky: int
    reserve_stable: int
    liquidity: int
    strike: int
    sigma: int
    maturity: int
    fee: int = 0
    invariant_last: int = 0
    scale_factor_risky: int = 1
    scale_factor_stable: int = 1

    def is_risky(self, token: str) -> bool:
        return normalize_address(token) == normalize_address(self.risky_token)

    def is_stable(self, token: str) -> bool:
        return normalize_address(token) == normalize_address(self.stable_token)

    def tau_seconds(self, timestamp: int) -> int:
        """Seconds until maturity, zero once expired."""
        return max(self.maturity - timestamp, 0)
