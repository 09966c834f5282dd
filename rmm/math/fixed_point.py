"""Signed 64.64 fixed-point (Fp) math library.

This module implements signed fixed-point arithmetic with 64 integer bits and
64 fractional bits, the number format of the replicating market maker's
on-chain math. A real value r is stored as the integer floor(r * 2^64) and
must fit in a signed 128-bit integer; every operation validates its result
and raises Overflow instead of wrapping.

Rounding discipline (bit-for-bit with the on-chain library):
- mul: full-precision product, arithmetic shift right by 64 (floors)
- div: dividend shifted left by 64, signed division truncating toward zero
- sqrt: integer Newton iteration with a "stop when not decreasing" rule

exp and ln evaluate their series at 128 fractional bits and round once at
the end.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import ClassVar

from rmm.constants import ONE_X64
from rmm.errors import InvalidDomain
from rmm.safe_int import Overflow, S, check_int128, div_trunc

__all__ = [
    # Classes
    "Fp",
    # Functions
    "exp",
    "ln",
    "sqrt",
    # Constants
    "ZERO",
    "ONE",
    "HALF",
    "TWO",
    "SQRT2",
    "SQRT_2PI",
    "LN2",
    "MAX_NATURAL_EXPONENT",
]

# =============================================================================
# Constants
# =============================================================================

# Extended precision used inside exp/ln series (128 fractional bits)
_EXT_BITS = 128
_ONE_EXT = 1 << _EXT_BITS

# e^43 ~ 4.7e18 is the largest power that stays well inside int128 at 64.64
MAX_NATURAL_EXPONENT = 43 * ONE_X64

_LN2_DECIMAL = Decimal("0.693147180559945309417232121458176568075500134360255254")
_SQRT2_DECIMAL = Decimal("1.414213562373095048801688724209698078569671875376948073")
_SQRT_2PI_DECIMAL = Decimal("2.506628274631000502415765284811045253006986740609938316")


def _decimal_to_raw(d: Decimal, bits: int) -> int:
    """Scale a Decimal by 2^bits and round half up to an integer."""
    with localcontext() as ctx:
        ctx.prec = 100
        scaled = (d * (1 << bits)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(scaled)


_LN2_EXT = _decimal_to_raw(_LN2_DECIMAL, _EXT_BITS)


# =============================================================================
# Core math functions on raw 64.64 integers
# =============================================================================


def sqrt(x: int) -> int:
    """Compute the square root of a raw 64.64 value.

    sqrt(x / 2^64) * 2^64 == sqrt(x * 2^64), so the integer square root of
    z = x << 64 is taken with Newton's method:
        y0 = z, y(n+1) = (z // y(n) + y(n)) // 2
    stopping as soon as y(n+1) >= y(n) and returning y(n). This is the floor
    of the exact root.

    Raises:
        InvalidDomain: If x is negative
    """
    if x < 0:
        raise InvalidDomain(f"sqrt of negative value {x}")
    z = x << 64
    if z == 0:
        return 0
    y = z
    while True:
        y_next = (z // y + y) // 2
        if y_next >= y:
            return y
        y = y_next


def exp(x: int) -> int:
    """Compute e^x where x is a raw 64.64 value.

    For x >= 0 the exponent is reduced as x = k*ln2 + r with r in [0, ln2),
    e^r is summed as a Taylor series at 128 fractional bits until the next
    term vanishes, and the sum is shifted left by k.

    For x < 0 the result is ONE / e^-x, so the approximation is only ever
    evaluated on non-negative arguments. Below -MAX_NATURAL_EXPONENT the
    true value is under two units of resolution and zero is returned.

    Raises:
        Overflow: If x > MAX_NATURAL_EXPONENT
    """
    if x > MAX_NATURAL_EXPONENT:
        raise Overflow(f"Exponent {x} exceeds MAX_NATURAL_EXPONENT")

    if x < 0:
        if x < -MAX_NATURAL_EXPONENT:
            return 0
        return div_trunc(ONE_X64 << 64, exp(-x))

    x_ext = x << (_EXT_BITS - 64)
    k = x_ext // _LN2_EXT
    r = x_ext - k * _LN2_EXT

    # e^r = 1 + r + r^2/2! + r^3/3! + ...
    series_sum = _ONE_EXT
    term = _ONE_EXT
    i = 1
    while True:
        term = ((term * r) >> _EXT_BITS) // i
        if term == 0:
            break
        series_sum += term
        i += 1

    return (series_sum << k) >> (_EXT_BITS - 64)


def ln(x: int) -> int:
    """Compute the natural logarithm of a raw 64.64 value.

    Normalizes x = 2^k * m with m in [1, 2), then uses
        ln(m) = 2 * atanh(z) = 2 * (z + z^3/3 + z^5/5 + ...), z = (m-1)/(m+1)
    at 128 fractional bits. z <= 1/3 so the series converges quickly.

    Raises:
        InvalidDomain: If x <= 0
    """
    if x <= 0:
        raise InvalidDomain(f"ln of non-positive value {x}")

    k = x.bit_length() - 65
    if k >= 0:
        m = (x << (_EXT_BITS - 64)) >> k
    else:
        m = x << (_EXT_BITS - 64 - k)

    z = ((m - _ONE_EXT) << _EXT_BITS) // (m + _ONE_EXT)
    z_squared = (z * z) >> _EXT_BITS

    num = z
    series_sum = z
    i = 3
    while True:
        num = (num * z_squared) >> _EXT_BITS
        if num == 0:
            break
        series_sum += num // i
        i += 2

    return (k * _LN2_EXT + 2 * series_sum) >> (_EXT_BITS - 64)


# =============================================================================
# Fp class (wrapper for convenient usage)
# =============================================================================


class Fp:
    """Signed 64.64 fixed-point number stored as int.

    All values are stored as integers scaled by 2^64.
    Example: 1.5 is stored as 27_670_116_110_564_327_424 (3 * 2^63)

    Instances are immutable; every operation returns a new Fp. Constructing
    an Fp outside the int128 range raises Overflow.
    """

    ONE: ClassVar[int] = ONE_X64

    __slots__ = ("value",)
    value: int

    def __init__(self, value: int) -> None:
        """Create Fp from raw scaled value."""
        object.__setattr__(self, "value", check_int128(value))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Fp is immutable")

    @classmethod
    def from_int(cls, i: int) -> Fp:
        """Create from integer (will be scaled by 2^64)."""
        return cls(i << 64)

    @classmethod
    def from_fraction(cls, numerator: int, denominator: int) -> Fp:
        """Create from an integer ratio, truncating toward zero.

        Raises:
            DivisionByZero: If denominator is zero
        """
        return cls(div_trunc(numerator << 64, denominator))

    @classmethod
    def from_decimal(cls, d: Decimal | str) -> Fp:
        """Create from decimal (will be scaled by 2^64).

        Uses ROUND_HALF_UP for consistent rounding behavior.
        """
        return cls(_decimal_to_raw(Decimal(d), 64))

    def to_decimal(self) -> Decimal:
        """Convert to Decimal for display."""
        with localcontext() as ctx:
            ctx.prec = 60
            return Decimal(self.value) / Decimal(self.ONE)

    # --- Arithmetic ---

    def add(self, other: Fp) -> Fp:
        """Add two Fp values."""
        return Fp(self.value + other.value)

    def sub(self, other: Fp) -> Fp:
        """Subtract other from self (may go negative)."""
        return Fp(self.value - other.value)

    def mul(self, other: Fp) -> Fp:
        """Multiply with floor rounding: (a * b) >> 64"""
        return Fp(((S(self.value) * other.value) >> 64).to_int128())

    def div(self, other: Fp) -> Fp:
        """Divide truncating toward zero: (a << 64) / b

        Raises:
            DivisionByZero: If other is zero
        """
        return Fp(((S(self.value) << 64) // other.value).to_int128())

    def neg(self) -> Fp:
        return Fp(-self.value)

    def abs(self) -> Fp:
        return Fp(abs(self.value))

    def sqrt(self) -> Fp:
        """Square root. Raises InvalidDomain for negative values."""
        return Fp(sqrt(self.value))

    def exp(self) -> Fp:
        """e^self. Raises Overflow above MAX_NATURAL_EXPONENT."""
        return Fp(exp(self.value))

    def ln(self) -> Fp:
        """Natural log. Raises InvalidDomain for non-positive values."""
        return Fp(ln(self.value))

    # --- Operators ---

    def __add__(self, other: object) -> Fp:
        if not isinstance(other, Fp):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Fp:
        if not isinstance(other, Fp):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other: object) -> Fp:
        if not isinstance(other, Fp):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other: object) -> Fp:
        if not isinstance(other, Fp):
            return NotImplemented
        return self.div(other)

    def __neg__(self) -> Fp:
        return self.neg()

    def __abs__(self) -> Fp:
        return self.abs()

    # --- Comparisons ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fp):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Fp):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Fp):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Fp):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Fp):
            return NotImplemented
        return self.value >= other.value

    def __repr__(self) -> str:
        return f"Fp({self.value})"

    def __str__(self) -> str:
        return str(self.to_decimal())


# =============================================================================
# Module-level constants
# =============================================================================

ZERO = Fp(0)
ONE = Fp(ONE_X64)
HALF = Fp(ONE_X64 >> 1)
TWO = Fp(ONE_X64 << 1)
SQRT2 = Fp(_decimal_to_raw(_SQRT2_DECIMAL, 64))
SQRT_2PI = Fp(_decimal_to_raw(_SQRT_2PI_DECIMAL, 64))
LN2 = Fp(_decimal_to_raw(_LN2_DECIMAL, 64))
