"""Replicating market maker error classes.

Arithmetic failures (Overflow, DivisionByZero) live in rmm.safe_int; the
classes here cover domain and quoting failures.
"""


class RmmError(Exception):
    """Base error for replicating market maker operations."""

    pass


class InvalidDomain(RmmError, ValueError):
    """Argument outside the range where the function is defined or valid.

    Raised for probabilities outside (0, 1), negative sqrt or non-positive
    ln arguments, negative time to maturity, and reserves that fall outside
    the curve's domain.
    """

    pass


class InvalidFeeError(RmmError):
    """Swap fee must be in range [0, 1)."""

    pass


class InvalidScalingFactorError(RmmError):
    """Scaling factor must be positive."""

    pass


class InsufficientOutput(RmmError):
    """Swap output is below the caller's minimum (or negative)."""

    pass


class ExcessiveInput(RmmError):
    """Required swap input is above the caller's maximum."""

    pass


class InvariantViolation(RmmError):
    """Post-trade invariant fell below the pre-trade invariant."""

    pass


class PoolExpired(RmmError):
    """Pool is at or past maturity and expired pools are not quoted."""

    pass


class UnknownTokenError(RmmError):
    """Token is not one of the pool's two assets (or is a self-swap)."""

    pass
