"""Tests for the signed 64.64 fixed-point library."""

import math
from decimal import Decimal

import pytest

from rmm.constants import INT128_MAX, INT128_MIN, ONE_X64
from rmm.errors import InvalidDomain
from rmm.math.fixed_point import (
    HALF,
    LN2,
    MAX_NATURAL_EXPONENT,
    ONE,
    SQRT2,
    TWO,
    ZERO,
    Fp,
    exp,
    ln,
    sqrt,
)
from rmm.safe_int import DivisionByZero, Overflow
from tests.helpers import fp


def assert_close(actual: Fp, expected: float, tol: float = 1e-15) -> None:
    assert abs(float(actual.to_decimal()) - expected) <= tol, (
        f"{actual.to_decimal()} != {expected}"
    )


class TestFpConstruction:
    """Tests for Fp construction and conversion."""

    def test_from_int(self):
        assert Fp.from_int(3).value == 3 * ONE_X64
        assert Fp.from_int(-2).value == -2 * ONE_X64

    def test_from_fraction_truncates(self):
        assert Fp.from_fraction(1, 2) == HALF
        assert Fp.from_fraction(1, 3).value == ONE_X64 // 3
        assert Fp.from_fraction(-1, 3).value == -(ONE_X64 // 3)

    def test_from_fraction_zero_denominator(self):
        with pytest.raises(DivisionByZero):
            Fp.from_fraction(1, 0)

    def test_from_decimal(self):
        assert Fp.from_decimal("0.5") == HALF
        assert Fp.from_decimal(Decimal("-1.25")).value == -(5 * ONE_X64 // 4)

    def test_to_decimal(self):
        assert HALF.to_decimal() == Decimal("0.5")
        assert str(TWO) == "2"

    def test_out_of_range_raises(self):
        """Values outside int128 cannot be represented."""
        with pytest.raises(Overflow):
            Fp(INT128_MAX + 1)
        with pytest.raises(Overflow):
            Fp.from_int(2**63)

    def test_immutable(self):
        with pytest.raises(AttributeError):
            ONE.value = 5  # type: ignore

    def test_hashable(self):
        assert len({fp("1"), ONE, Fp(ONE_X64)}) == 1


class TestFpArithmetic:
    """Tests for rounding of the basic operations."""

    def test_add_sub(self):
        assert ONE + ONE == TWO
        assert ONE - TWO == -ONE
        assert HALF - ONE == fp("-0.5")

    def test_mul_exact(self):
        assert fp("1.5") * TWO == fp("3")
        assert HALF * HALF == fp("0.25")

    def test_mul_floors(self):
        """(a * b) >> 64 rounds toward negative infinity."""
        tiny = Fp(1)
        assert tiny * HALF == ZERO
        assert -tiny * HALF == Fp(-1)

    def test_mul_overflow(self):
        with pytest.raises(Overflow):
            Fp.from_int(2**62) * Fp.from_int(4)

    def test_add_sub_overflow(self):
        """Sums past either int128 bound raise instead of wrapping."""
        with pytest.raises(Overflow):
            Fp(INT128_MAX) + Fp(1)
        with pytest.raises(Overflow):
            Fp(INT128_MIN) - Fp(1)
        with pytest.raises(Overflow):
            Fp(INT128_MIN).add(Fp(-1))
        assert Fp(INT128_MAX) - Fp(1) == Fp(INT128_MAX - 1)

    def test_neg_int128_min_overflows(self):
        with pytest.raises(Overflow):
            -Fp(INT128_MIN)

    def test_div_exact(self):
        assert ONE / TWO == HALF
        assert fp("3") / fp("1.5") == TWO

    def test_div_truncates_toward_zero(self):
        tiny = Fp(1)
        assert tiny / TWO == ZERO
        assert -tiny / TWO == ZERO
        assert (-ONE / fp("3")).value == -(ONE_X64 // 3)

    def test_div_by_zero(self):
        with pytest.raises(DivisionByZero):
            ONE / ZERO

    def test_neg_abs(self):
        assert -ONE == Fp.from_int(-1)
        assert abs(fp("-2.5")) == fp("2.5")

    def test_ordering(self):
        assert ZERO < HALF < ONE < TWO
        assert -ONE <= -ONE
        assert TWO >= ONE

    def test_mixed_type_operations_unsupported(self):
        with pytest.raises(TypeError):
            ONE + 1  # type: ignore


class TestSqrt:
    """Tests for the Newton integer square root."""

    def test_perfect_squares(self):
        assert Fp.from_int(4).sqrt() == TWO
        assert fp("0.25").sqrt() == HALF
        assert ZERO.sqrt() == ZERO
        assert ONE.sqrt() == ONE

    def test_floors_irrational_roots(self):
        """Result is the floor of the exact root."""
        raw = sqrt(2 * ONE_X64)
        target = 2 * ONE_X64 * ONE_X64
        assert raw * raw <= target < (raw + 1) * (raw + 1)
        assert abs(raw - SQRT2.value) <= 1

    def test_sqrt2_squared(self):
        assert abs((SQRT2 * SQRT2).value - TWO.value) <= 2

    def test_negative_raises(self):
        with pytest.raises(InvalidDomain):
            (-ONE).sqrt()


class TestExp:
    """Tests for exp."""

    def test_exp_zero(self):
        assert exp(0) == ONE_X64

    @pytest.mark.parametrize("x", [0.5, 1.0, 2.0, 10.0, 30.0])
    def test_exp_positive(self, x):
        actual = float(Fp(exp(fp(str(x)).value)).to_decimal())
        assert actual == pytest.approx(math.exp(x), rel=1e-15)

    @pytest.mark.parametrize("x", [-0.5, -1.0, -5.0, -20.0])
    def test_exp_negative(self, x):
        actual = fp(str(x)).exp()
        assert_close(actual, math.exp(x), tol=1e-17 + math.exp(x) * 1e-15)

    def test_exp_ln2_is_two(self):
        assert abs(LN2.exp().value - TWO.value) <= 2

    def test_exp_overflow(self):
        with pytest.raises(Overflow):
            exp(MAX_NATURAL_EXPONENT + 1)

    def test_exp_max_natural_exponent_fits(self):
        assert Fp(exp(MAX_NATURAL_EXPONENT)) > ONE

    def test_exp_very_negative_is_zero(self):
        assert Fp.from_int(-50).exp() == ZERO


class TestLn:
    """Tests for ln."""

    def test_ln_one(self):
        assert ln(ONE_X64) == 0

    def test_ln_two(self):
        assert abs(TWO.ln().value - LN2.value) <= 1

    @pytest.mark.parametrize("x", ["0.001", "0.5", "3", "1000", "123456.789"])
    def test_ln_matches_float(self, x):
        actual = float(fp(x).ln().to_decimal())
        assert actual == pytest.approx(math.log(float(x)), rel=1e-14, abs=1e-15)

    def test_ln_exp_roundtrip(self):
        x = fp("1.2345")
        assert abs(x.exp().ln().value - x.value) <= 4

    def test_ln_non_positive_raises(self):
        with pytest.raises(InvalidDomain):
            ZERO.ln()
        with pytest.raises(InvalidDomain):
            (-ONE).ln()
