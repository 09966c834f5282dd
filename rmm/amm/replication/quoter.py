"""Swap quoting on the replicating curve.

The curve cannot be inverted in closed form once a fee is taken from the
input, so quotes are built in two steps:
1. Apply only gamma = 1 - fee of the input to the curve and solve the
   output reserve in closed form, holding invariant_last.
2. Re-evaluate the invariant with the full input credited to the pool.

The fee portion of the input is left in the pool, so the post-trade
invariant rises by roughly fee * amount_in and never falls (up to the
configured rounding tolerance).
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from rmm.errors import (
    ExcessiveInput,
    InsufficientOutput,
    InvalidDomain,
    InvalidFeeError,
    InvariantViolation,
)
from rmm.math.fixed_point import ONE, ZERO, Fp

from .config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from .replication_math import calc_invariant, get_risky_given_stable, get_stable_given_risky

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapQuote:
    """Result of quoting a swap against per-liquidity reserves.

    Attributes:
        amount_in: Gross input credited to the pool (fee included)
        amount_out: Output paid by the pool
        invariant_before: Invariant the curve was held at (invariant_last)
        invariant_after: Invariant of the post-trade reserves
    """

    amount_in: Fp
    amount_out: Fp
    invariant_before: Fp
    invariant_after: Fp

    @property
    def fee_growth(self) -> Fp:
        """Invariant increase contributed by the fee."""
        return self.invariant_after - self.invariant_before


def _gamma(fee: Fp) -> Fp:
    """Return 1 - fee, validating fee is in [0, 1)."""
    if fee < ZERO or fee >= ONE:
        raise InvalidFeeError(f"Swap fee must be in range [0, 1), got {fee}")
    return ONE - fee


def _post_trade_invariant(
    reserve_in: Fp,
    reserve_out: Fp,
    strike: Fp,
    sigma: Fp,
    tau: Fp,
    *,
    risky_for_stable: bool,
) -> Fp:
    if risky_for_stable:
        return calc_invariant(reserve_in, reserve_out, strike, sigma, tau)
    return calc_invariant(reserve_out, reserve_in, strike, sigma, tau)


def _check_invariant(invariant_last: Fp, invariant_after: Fp, config: QuoteConfig) -> None:
    if invariant_after < invariant_last - config.invariant_tolerance:
        logger.warning(
            "replication_invariant_violation",
            invariant_before=str(invariant_last),
            invariant_after=str(invariant_after),
            tolerance=str(config.invariant_tolerance),
        )
        raise InvariantViolation(
            f"Invariant decreased from {invariant_last} to {invariant_after}"
        )


def quote_swap(
    amount_in: Fp,
    reserve_in: Fp,
    reserve_out: Fp,
    fee: Fp,
    strike: Fp,
    sigma: Fp,
    tau: Fp,
    invariant_last: Fp,
    *,
    risky_for_stable: bool,
    min_amount_out: Fp = ZERO,
    config: QuoteConfig = DEFAULT_QUOTE_CONFIG,
) -> SwapQuote:
    """Quote the output for an exact input amount (sell order).

    Args:
        amount_in: Input per liquidity, before fee
        reserve_in: Input-asset reserve per liquidity
        reserve_out: Output-asset reserve per liquidity
        fee: Proportional fee in [0, 1)
        strike: Strike price
        sigma: Annualized volatility
        tau: Years until maturity
        invariant_last: Last recorded invariant of the pool
        risky_for_stable: True when selling risky for stable
        min_amount_out: Smallest acceptable output
        config: Quote configuration

    Returns:
        SwapQuote with the output and both invariants

    Raises:
        InvalidFeeError: If fee is outside [0, 1)
        InvalidDomain: If amount_in is negative or the adjusted reserve
            leaves the curve's domain (trade not executable at this size)
        InvariantViolation: If the post-trade invariant fell below
            invariant_last by more than the tolerance
        InsufficientOutput: If the output is negative or below min_amount_out
    """
    gamma = _gamma(fee)
    if amount_in < ZERO:
        raise InvalidDomain(f"Swap input must be non-negative, got {amount_in}")

    adjusted_in = reserve_in + amount_in * gamma
    if risky_for_stable:
        new_reserve_out = get_stable_given_risky(invariant_last, adjusted_in, strike, sigma, tau)
    else:
        new_reserve_out = get_risky_given_stable(invariant_last, adjusted_in, strike, sigma, tau)
    amount_out = reserve_out - new_reserve_out

    invariant_after = _post_trade_invariant(
        reserve_in + amount_in,
        new_reserve_out,
        strike,
        sigma,
        tau,
        risky_for_stable=risky_for_stable,
    )
    _check_invariant(invariant_last, invariant_after, config)

    if amount_out < ZERO or amount_out < min_amount_out:
        raise InsufficientOutput(f"Output {amount_out} below minimum {min_amount_out}")

    return SwapQuote(
        amount_in=amount_in,
        amount_out=amount_out,
        invariant_before=invariant_last,
        invariant_after=invariant_after,
    )


def quote_swap_exact_out(
    amount_out: Fp,
    reserve_in: Fp,
    reserve_out: Fp,
    fee: Fp,
    strike: Fp,
    sigma: Fp,
    tau: Fp,
    invariant_last: Fp,
    *,
    risky_for_stable: bool,
    max_amount_in: Fp | None = None,
    config: QuoteConfig = DEFAULT_QUOTE_CONFIG,
) -> SwapQuote:
    """Quote the input required for an exact output amount (buy order).

    The curve gives the fee-adjusted input reserve that pays amount_out;
    the gross input is the net input divided by gamma, bumped by one unit
    of resolution so rounding always favours the pool.

    Raises:
        InvalidFeeError: If fee is outside [0, 1)
        InvalidDomain: If amount_out is negative or the remaining output
            reserve leaves the curve's domain
        InvariantViolation: If the post-trade invariant fell below
            invariant_last by more than the tolerance
        ExcessiveInput: If the required input exceeds max_amount_in
    """
    gamma = _gamma(fee)
    if amount_out < ZERO:
        raise InvalidDomain(f"Swap output must be non-negative, got {amount_out}")

    new_reserve_out = reserve_out - amount_out
    if risky_for_stable:
        adjusted_in = get_risky_given_stable(invariant_last, new_reserve_out, strike, sigma, tau)
    else:
        adjusted_in = get_stable_given_risky(invariant_last, new_reserve_out, strike, sigma, tau)

    # Rounding noise around a zero-size trade can leave net_in a few ulp negative
    net_in = adjusted_in - reserve_in
    if net_in < ZERO:
        net_in = ZERO
    amount_in = net_in / gamma + Fp(1)

    invariant_after = _post_trade_invariant(
        reserve_in + amount_in,
        new_reserve_out,
        strike,
        sigma,
        tau,
        risky_for_stable=risky_for_stable,
    )
    _check_invariant(invariant_last, invariant_after, config)

    if max_amount_in is not None and amount_in > max_amount_in:
        raise ExcessiveInput(f"Input {amount_in} above maximum {max_amount_in}")

    return SwapQuote(
        amount_in=amount_in,
        amount_out=amount_out,
        invariant_before=invariant_last,
        invariant_after=invariant_after,
    )
