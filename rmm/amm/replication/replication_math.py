"""Replicating market maker trading-function math.

Core curve functions for the covered-call replicating pool. With
x = risky per liquidity, y = stable per liquidity, K = strike and
v = sigma * sqrt(tau), the trading function is

    k(x, y) = y - K * cdf(inverse_cdf(1 - x) - v)

A healthy pool keeps k close to zero; fees make it drift upward.

All arguments are reals in Fp. Raw token amounts must be normalized (see
rmm.math.units) before calling into this module. Nothing here clamps: a
reserve outside the curve's domain surfaces InvalidDomain from inverse_cdf.
"""

from rmm.errors import InvalidDomain
from rmm.math.fixed_point import ONE, ZERO, Fp
from rmm.math.normal import cdf, inverse_cdf


def get_proportional_volatility(sigma: Fp, tau: Fp) -> Fp:
    """Time-scaled volatility v = sigma * sqrt(tau).

    Args:
        sigma: Annualized volatility (1.0 == 100%)
        tau: Years until maturity

    Raises:
        InvalidDomain: If sigma or tau is negative
    """
    if tau < ZERO:
        raise InvalidDomain(f"Time to maturity must be non-negative, got {tau}")
    if sigma < ZERO:
        raise InvalidDomain(f"Volatility must be non-negative, got {sigma}")
    return sigma * tau.sqrt()


def _check_strike(strike: Fp) -> None:
    if strike <= ZERO:
        raise InvalidDomain(f"Strike must be positive, got {strike}")


def _check_unit_interval(value: Fp) -> None:
    # The payoff line is defined on the closed interval at maturity
    if value < ZERO or value > ONE:
        raise InvalidDomain(f"Reserve ratio must be in [0, 1] at maturity, got {value}")


def get_stable_given_risky(
    invariant_last: Fp,
    risky: Fp,
    strike: Fp,
    sigma: Fp,
    tau: Fp,
) -> Fp:
    """Solve the trading function for the stable reserve.

    Formula:
        y = K * cdf(inverse_cdf(1 - x) - sigma * sqrt(tau)) + k

    At maturity (tau == 0) the curve collapses to the covered-call payoff
    line y = K * (1 - x) + k.

    Args:
        invariant_last: Invariant to hold (k)
        risky: Risky reserve per liquidity, in (0, 1)
        strike: Strike price in stable units per risky unit
        sigma: Annualized volatility
        tau: Years until maturity

    Returns:
        Stable reserve per liquidity

    Raises:
        InvalidDomain: If risky is outside (0, 1), strike <= 0, or tau < 0
    """
    _check_strike(strike)
    vol = get_proportional_volatility(sigma, tau)
    one_minus_risky = ONE - risky
    if tau == ZERO:
        _check_unit_interval(one_minus_risky)
        return strike * one_minus_risky + invariant_last
    phi = inverse_cdf(one_minus_risky)
    return strike * cdf(phi - vol) + invariant_last


def get_risky_given_stable(
    invariant_last: Fp,
    stable: Fp,
    strike: Fp,
    sigma: Fp,
    tau: Fp,
) -> Fp:
    """Solve the trading function for the risky reserve.

    Formula:
        x = 1 - cdf(inverse_cdf((y - k) / K) + sigma * sqrt(tau))

    At maturity (tau == 0): x = 1 - (y - k) / K.

    Raises:
        InvalidDomain: If (y - k) / K is outside (0, 1), strike <= 0, or tau < 0
    """
    _check_strike(strike)
    vol = get_proportional_volatility(sigma, tau)
    stable_ratio = (stable - invariant_last) / strike
    if tau == ZERO:
        _check_unit_interval(stable_ratio)
        return ONE - stable_ratio
    phi = inverse_cdf(stable_ratio)
    return ONE - cdf(phi + vol)


def calc_invariant(
    risky: Fp,
    stable: Fp,
    strike: Fp,
    sigma: Fp,
    tau: Fp,
) -> Fp:
    """Evaluate the trading function k(x, y) for the given reserves.

    Returns:
        Signed invariant; near zero for a balanced pool
    """
    return stable - get_stable_given_risky(ZERO, risky, strike, sigma, tau)
