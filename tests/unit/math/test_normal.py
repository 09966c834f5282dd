"""Tests for the fixed-point normal distribution.

scipy is used as the reference; the erfc fit is accurate to about 1.2e-7
relative, so comparisons use tolerances around 1e-6.
"""

import pytest
from scipy import special, stats

from rmm.constants import INT128_MAX, INT128_MIN
from rmm.errors import InvalidDomain
from rmm.math.fixed_point import HALF, ONE, TWO, ZERO, Fp
from rmm.math.normal import cdf, erf, erfc, inverse_cdf, pdf
from tests.helpers import fp


def as_float(x: Fp) -> float:
    return float(x.to_decimal())


class TestErfc:
    """Tests for the complementary error function."""

    @pytest.mark.parametrize("x", ["0", "0.1", "0.5", "1", "2", "3.5", "5"])
    def test_matches_scipy(self, x):
        expected = special.erfc(float(x))
        assert as_float(erfc(fp(x))) == pytest.approx(expected, rel=2e-7, abs=1e-12)

    @pytest.mark.parametrize("x", ["-0.3", "-1", "-2.5"])
    def test_reflection(self, x):
        """erfc(-x) == 2 - erfc(x)."""
        value = fp(x)
        assert erfc(value) == TWO - erfc(-value)
        assert as_float(erfc(value)) == pytest.approx(special.erfc(float(x)), rel=2e-7)

    def test_bounded(self):
        for x in ("-20", "-6", "0", "6", "20"):
            value = erfc(fp(x))
            assert ZERO <= value <= TWO

    def test_non_increasing(self):
        values = [erfc(fp(x)) for x in ("0", "0.2", "0.8", "1.5", "3", "5.9", "6", "10")]
        assert values == sorted(values, reverse=True)

    def test_tail_cutoff(self):
        assert erfc(fp("6")) == ZERO
        assert erfc(fp("-100")) == TWO


class TestErf:
    """Tests for erf."""

    def test_odd(self):
        x = fp("0.7")
        assert erf(-x) == -erf(x)

    def test_matches_scipy(self):
        assert as_float(erf(fp("0.7"))) == pytest.approx(special.erf(0.7), abs=1e-7)


class TestCdf:
    """Tests for the standard normal CDF."""

    def test_cdf_zero_is_half(self):
        assert cdf(ZERO) == HALF

    @pytest.mark.parametrize("x", ["-3", "-1.5", "-0.25", "0.25", "1", "2.326", "4"])
    def test_matches_scipy(self, x):
        expected = stats.norm.cdf(float(x))
        assert as_float(cdf(fp(x))) == pytest.approx(expected, abs=1e-7)

    def test_monotone(self):
        points = [fp(x) for x in ("-5", "-2", "-0.5", "0", "0.5", "2", "5")]
        values = [cdf(x) for x in points]
        assert values == sorted(values)

    def test_saturates_in_tails(self):
        assert cdf(fp("9")) == ONE
        assert cdf(fp("-9")) == ZERO
        assert cdf(Fp.from_int(1_000_000)) == ONE

    @pytest.mark.parametrize(
        "x",
        [
            fp("0.3"),
            fp("1.3"),
            fp("4"),
            fp("8.48"),  # just inside the erfc cutoff of 6 * sqrt(2)
            fp("8.4853"),
            fp("8.5"),  # saturated
            fp("12"),
            Fp.from_int(1_000_000),
            Fp(INT128_MAX),
        ],
    )
    def test_symmetry(self, x):
        """cdf(-x) == 1 - cdf(x) across the body, the cutoff and the tails."""
        assert abs((cdf(x) + cdf(-x) - ONE).value) <= 2

    def test_total_at_int128_extremes(self):
        """cdf never raises, even where negating the argument would overflow."""
        assert cdf(Fp(INT128_MAX)) == ONE
        assert cdf(Fp(INT128_MIN)) == ZERO
        assert cdf(Fp(INT128_MIN + 1)) == ZERO

    def test_erf_and_erfc_at_int128_min(self):
        assert erfc(Fp(INT128_MIN)) == TWO
        assert erf(Fp(INT128_MIN)) == -ONE


class TestPdf:
    """Tests for the standard normal density."""

    @pytest.mark.parametrize("x", ["0", "0.5", "-1", "3"])
    def test_matches_scipy(self, x):
        expected = stats.norm.pdf(float(x))
        assert as_float(pdf(fp(x))) == pytest.approx(expected, rel=1e-14, abs=1e-18)

    def test_even(self):
        assert pdf(fp("1.7")) == pdf(fp("-1.7"))

    def test_underflows_to_zero(self):
        assert pdf(fp("20")) == ZERO

    def test_int128_extremes(self):
        assert pdf(Fp(INT128_MAX)) == ZERO
        assert pdf(Fp(INT128_MIN)) == ZERO


class TestInverseCdf:
    """Tests for the Newton-Raphson inverse CDF."""

    def test_half_is_zero(self):
        assert inverse_cdf(HALF) == ZERO

    @pytest.mark.parametrize("p", ["0.001", "0.05", "0.3", "0.7", "0.975", "0.999"])
    def test_matches_scipy(self, p):
        expected = stats.norm.ppf(float(p))
        assert as_float(inverse_cdf(fp(p))) == pytest.approx(expected, rel=1e-5, abs=1e-6)

    @pytest.mark.parametrize("p", ["0.01", "0.2", "0.6", "0.95"])
    def test_roundtrip_through_cdf(self, p):
        """cdf(inverse_cdf(p)) recovers p to well below the erfc error."""
        value = fp(p)
        recovered = cdf(inverse_cdf(value))
        assert abs(as_float(recovered) - as_float(value)) < 1e-10

    def test_antisymmetric(self):
        p = fp("0.2")
        assert inverse_cdf(p) == -inverse_cdf(ONE - p)

    @pytest.mark.parametrize("p", ["0", "1", "-0.1", "1.5"])
    def test_outside_open_interval_raises(self, p):
        with pytest.raises(InvalidDomain):
            inverse_cdf(fp(p))

    def test_extreme_tail_terminates(self):
        """A probability one ulp below 1 still returns a finite quantile."""
        x = inverse_cdf(ONE - Fp(1))
        assert x > fp("8")
