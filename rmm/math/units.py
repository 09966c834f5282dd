"""Unit conversions between raw on-chain integers and 64.64 reals.

Token amounts arrive in their native decimals. A scale factor of
10^(18 - decimals) lifts them onto the 18-decimal wad basis, which is then
divided by 1e18 to obtain the real value as an Fp.
"""

from rmm.constants import MAX_TOKEN_DECIMALS, PERCENTAGE, WAD, YEAR
from rmm.errors import InvalidDomain, InvalidScalingFactorError
from rmm.math.fixed_point import Fp


def scale_factor_for_decimals(decimals: int) -> int:
    """Scale factor mapping a token with `decimals` onto the wad basis.

    Raises:
        InvalidScalingFactorError: If decimals is outside [0, 18]
    """
    if decimals < 0 or decimals > MAX_TOKEN_DECIMALS:
        raise InvalidScalingFactorError(
            f"Token decimals must be in [0, {MAX_TOKEN_DECIMALS}], got {decimals}"
        )
    return 10 ** (MAX_TOKEN_DECIMALS - decimals)


def scale_to_x64(amount: int, scale_factor: int) -> Fp:
    """Convert a raw token amount to a real Fp value.

    Args:
        amount: Amount in token's native decimals
        scale_factor: Factor to the wad basis (e.g., 10^12 for 6-decimal tokens)

    Raises:
        InvalidScalingFactorError: If scale_factor <= 0
    """
    if scale_factor <= 0:
        raise InvalidScalingFactorError(f"Scale factor must be positive, got {scale_factor}")
    return Fp.from_fraction(amount * scale_factor, WAD)


def scale_from_x64(value: Fp, scale_factor: int) -> int:
    """Convert a real Fp value back to a raw token amount, rounding down.

    Raises:
        InvalidScalingFactorError: If scale_factor <= 0
        InvalidDomain: If value is negative
    """
    if scale_factor <= 0:
        raise InvalidScalingFactorError(f"Scale factor must be positive, got {scale_factor}")
    if value.value < 0:
        raise InvalidDomain(f"Cannot scale negative amount {value} to token units")
    return ((value.value * WAD) >> 64) // scale_factor


def scale_from_x64_up(value: Fp, scale_factor: int) -> int:
    """Convert a real Fp value back to a raw token amount, rounding up.

    Raises:
        InvalidScalingFactorError: If scale_factor <= 0
        InvalidDomain: If value is negative
    """
    if scale_factor <= 0:
        raise InvalidScalingFactorError(f"Scale factor must be positive, got {scale_factor}")
    if value.value < 0:
        raise InvalidDomain(f"Cannot scale negative amount {value} to token units")
    wad_amount = -((-value.value * WAD) >> 64)  # ceil
    return -(-wad_amount // scale_factor)


def percentage_to_x64(bps: int) -> Fp:
    """Convert basis points to a real value (10_000 bps -> 1.0)."""
    return Fp.from_fraction(bps, PERCENTAGE)


def seconds_to_years(seconds: int) -> Fp:
    """Convert a duration in seconds to years."""
    return Fp.from_fraction(seconds, YEAR)
