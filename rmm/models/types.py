"""Shared type definitions for pool and quote models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from rmm.constants import INT128_MAX, INT128_MIN

# Maximum uint256 value
UINT256_MAX = 2**256 - 1


def _parse_int(value: Any, type_name: str) -> int:
    """Parse an int or decimal integer string, rejecting everything else."""
    if isinstance(value, bool):
        raise ValueError(f"{type_name} must be string or int, got bool")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError(f"{type_name} must be string or int, got {type(value).__name__}")
    try:
        return int(value)
    except ValueError as err:
        raise ValueError(f"{type_name} must be a decimal integer string: '{value}'") from err


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    int_value = _parse_int(value, "Uint256")
    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return str(int_value)


def validate_int128(value: Any) -> str:
    """Validate that a value is a signed 128-bit decimal string.

    Used for raw 64.64 fixed-point values such as the invariant.

    Raises:
        ValueError: If value is not an integer within int128 range
    """
    int_value = _parse_int(value, "Int128")
    if int_value < INT128_MIN or int_value > INT128_MAX:
        raise ValueError(f"Int128 overflow: {value}")
    return str(int_value)


# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]

# Raw 64.64 fixed-point value as decimal string (validated)
Int128 = Annotated[
    str,
    BeforeValidator(validate_int128),
    Field(description="Signed 64.64 fixed-point value as decimal string"),
]


def normalize_address(address: str) -> str:
    """Normalize an Ethereum address to lowercase with 0x prefix."""
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr
