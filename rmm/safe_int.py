"""Checked signed 128-bit integer wrapper for fixed-point intermediates.

This module provides SafeInt, a lightweight wrapper that keeps arithmetic on
the raw 64.64 integers honest:
- Division by zero raises DivisionByZero
- Division truncates toward zero (matching on-chain signed division)
- Results that leave the int128 range raise Overflow on to_int128()

Intermediate products may exceed 128 bits (on-chain code computes them in
256 bits); only values that are stored back into a fixed-point number are
range-checked.

Usage pattern:
    from rmm.safe_int import S

    def mul_x64(a: int, b: int) -> int:
        # Wrap at entry
        sa, sb = S(a), S(b)

        # Natural arithmetic, unwrap through the range check
        return ((sa * sb) >> 64).to_int128()
"""

from __future__ import annotations

from rmm.constants import INT128_MAX, INT128_MIN


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division or modulo by zero."""

    pass


class Overflow(SafeIntError):
    """Value does not fit in a signed 128-bit integer."""

    pass


def div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero.

    Python's // operator rounds toward negative infinity, but signed
    division on-chain truncates toward zero. This matters for negative
    numbers.

    Raises:
        DivisionByZero: If b is zero

    Examples:
        Python: -7 // 3 = -3 (rounds toward -inf)
        Truncating: div_trunc(-7, 3) = -2
    """
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} / 0")
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


def check_int128(value: int) -> int:
    """Return value unchanged if it fits in int128.

    Raises:
        Overflow: If value is outside [-2^127, 2^127 - 1]
    """
    if value < INT128_MIN or value > INT128_MAX:
        raise Overflow(f"Value exceeds int128 range: {value}")
    return value


class SafeInt:
    """Signed integer with checked division and int128 validation.

    Wraps an integer and provides arithmetic operators that raise
    descriptive errors instead of producing invalid results:
    - Division by zero raises DivisionByZero
    - Values exceeding int128 raise Overflow on to_int128()

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt
        """
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value - _extract_value(other))

    def __rsub__(self, other: int) -> SafeInt:
        return SafeInt(other - self._value)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Signed division truncating toward zero.

        Raises:
            DivisionByZero: If other is zero
        """
        return SafeInt(div_trunc(self._value, _extract_value(other)))

    def __rfloordiv__(self, other: int) -> SafeInt:
        return SafeInt(div_trunc(other, self._value))

    def __lshift__(self, bits: int) -> SafeInt:
        return SafeInt(self._value << bits)

    def __rshift__(self, bits: int) -> SafeInt:
        """Arithmetic right shift (floors negative values)."""
        return SafeInt(self._value >> bits)

    def __neg__(self) -> SafeInt:
        return SafeInt(-self._value)

    def __pos__(self) -> SafeInt:
        return self

    def __abs__(self) -> SafeInt:
        return SafeInt(abs(self._value))

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    def to_int128(self) -> int:
        """Convert to int, validating int128 bounds.

        Raises:
            Overflow: If value is outside [-2^127, 2^127 - 1]
        """
        return check_int128(self._value)


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
