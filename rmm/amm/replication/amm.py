"""Replicating AMM class.

High-level swap simulation through a replicating pool snapshot. Converts
raw token amounts into per-liquidity reals, calls the Fp quoter, and scales
the result back: outputs round down and required inputs round up, so
rounding always favours the pool.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from rmm.amm.base import AMM, SwapResult
from rmm.constants import WAD
from rmm.errors import ExcessiveInput, InsufficientOutput, InvalidDomain, PoolExpired, UnknownTokenError
from rmm.math.fixed_point import Fp
from rmm.math.units import (
    percentage_to_x64,
    scale_from_x64,
    scale_from_x64_up,
    scale_to_x64,
    seconds_to_years,
)

from .config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from .pools import ReplicationPool
from .quoter import quote_swap, quote_swap_exact_out
from .replication_math import calc_invariant

logger = structlog.get_logger()


@dataclass(frozen=True)
class _CurveState:
    """Pool snapshot expressed as per-liquidity reals."""

    risky: Fp
    stable: Fp
    liquidity: Fp
    strike: Fp
    sigma: Fp
    tau: Fp
    fee: Fp
    invariant_last: Fp


class ReplicationAMM(AMM):
    """AMM for covered-call replicating pools."""

    def __init__(self, config: QuoteConfig = DEFAULT_QUOTE_CONFIG) -> None:
        self.config = config

    def _curve_state(self, pool: ReplicationPool, timestamp: int) -> _CurveState:
        tau_seconds = pool.tau_seconds(timestamp)
        if tau_seconds == 0 and self.config.reject_expired:
            raise PoolExpired(f"Pool {pool.id} expired at {pool.maturity}")
        if pool.liquidity <= 0:
            raise InvalidDomain(f"Pool {pool.id} has no liquidity")

        liquidity = Fp.from_fraction(pool.liquidity, WAD)
        return _CurveState(
            risky=scale_to_x64(pool.reserve_risky, pool.scale_factor_risky) / liquidity,
            stable=scale_to_x64(pool.reserve_stable, pool.scale_factor_stable) / liquidity,
            liquidity=liquidity,
            strike=scale_to_x64(pool.strike, pool.scale_factor_stable),
            sigma=percentage_to_x64(pool.sigma),
            tau=seconds_to_years(tau_seconds),
            fee=percentage_to_x64(pool.fee),
            invariant_last=Fp(pool.invariant_last),
        )

    def _direction(self, pool: ReplicationPool, token: str, *, is_input: bool) -> bool:
        """Return True when the swap sells risky for stable."""
        if pool.is_risky(token):
            return is_input
        if pool.is_stable(token):
            return not is_input
        raise UnknownTokenError(f"Token {token} is not in pool {pool.id}")

    def invariant(self, pool: ReplicationPool, timestamp: int) -> Fp:
        """Evaluate the trading function on the pool's current reserves."""
        state = self._curve_state(pool, timestamp)
        return calc_invariant(state.risky, state.stable, state.strike, state.sigma, state.tau)

    def simulate_swap(
        self,
        pool: ReplicationPool,
        token_in: str,
        amount_in: int,
        timestamp: int,
        min_amount_out: int = 0,
    ) -> SwapResult:
        """Simulate selling an exact input amount.

        Raises:
            UnknownTokenError: If token_in is not one of the pool's tokens
            InvalidDomain: If the trade leaves the curve's domain
            InvariantViolation: If the invariant would decrease
            InsufficientOutput: If the output is below min_amount_out
            PoolExpired: If the pool is expired and reject_expired is set
        """
        risky_for_stable = self._direction(pool, token_in, is_input=True)
        state = self._curve_state(pool, timestamp)

        if risky_for_stable:
            reserve_in, reserve_out = state.risky, state.stable
            scale_in, scale_out = pool.scale_factor_risky, pool.scale_factor_stable
            token_out = pool.stable_token
        else:
            reserve_in, reserve_out = state.stable, state.risky
            scale_in, scale_out = pool.scale_factor_stable, pool.scale_factor_risky
            token_out = pool.risky_token

        quote = quote_swap(
            scale_to_x64(amount_in, scale_in) / state.liquidity,
            reserve_in,
            reserve_out,
            state.fee,
            state.strike,
            state.sigma,
            state.tau,
            state.invariant_last,
            risky_for_stable=risky_for_stable,
            config=self.config,
        )
        amount_out = scale_from_x64(quote.amount_out * state.liquidity, scale_out)
        if amount_out < min_amount_out:
            raise InsufficientOutput(f"Output {amount_out} below minimum {min_amount_out}")

        logger.debug(
            "replication_swap_quoted",
            pool_id=pool.id,
            token_in=token_in,
            amount_in=amount_in,
            amount_out=amount_out,
            fee_growth=str(quote.fee_growth),
        )
        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            pool_id=pool.id,
            token_in=token_in,
            token_out=token_out,
            invariant_before=quote.invariant_before,
            invariant_after=quote.invariant_after,
        )

    def simulate_swap_exact_output(
        self,
        pool: ReplicationPool,
        token_out: str,
        amount_out: int,
        timestamp: int,
        max_amount_in: int | None = None,
    ) -> SwapResult:
        """Simulate buying an exact output amount.

        Raises:
            UnknownTokenError: If token_out is not one of the pool's tokens
            InvalidDomain: If the trade leaves the curve's domain
            InvariantViolation: If the invariant would decrease
            ExcessiveInput: If the required input exceeds max_amount_in
            PoolExpired: If the pool is expired and reject_expired is set
        """
        risky_for_stable = self._direction(pool, token_out, is_input=False)
        state = self._curve_state(pool, timestamp)

        if risky_for_stable:
            reserve_in, reserve_out = state.risky, state.stable
            scale_in, scale_out = pool.scale_factor_risky, pool.scale_factor_stable
            token_in = pool.risky_token
        else:
            reserve_in, reserve_out = state.stable, state.risky
            scale_in, scale_out = pool.scale_factor_stable, pool.scale_factor_risky
            token_in = pool.stable_token

        quote = quote_swap_exact_out(
            scale_to_x64(amount_out, scale_out) / state.liquidity,
            reserve_in,
            reserve_out,
            state.fee,
            state.strike,
            state.sigma,
            state.tau,
            state.invariant_last,
            risky_for_stable=risky_for_stable,
            config=self.config,
        )
        amount_in = scale_from_x64_up(quote.amount_in * state.liquidity, scale_in)
        if max_amount_in is not None and amount_in > max_amount_in:
            raise ExcessiveInput(f"Input {amount_in} above maximum {max_amount_in}")

        logger.debug(
            "replication_swap_exact_output_quoted",
            pool_id=pool.id,
            token_out=token_out,
            amount_in=amount_in,
            amount_out=amount_out,
            fee_growth=str(quote.fee_growth),
        )
        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            pool_id=pool.id,
            token_in=token_in,
            token_out=token_out,
            invariant_before=quote.invariant_before,
            invariant_after=quote.invariant_after,
        )
