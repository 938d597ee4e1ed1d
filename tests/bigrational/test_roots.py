"""Tests for integer and rational root extraction."""

import logging
import math

import pytest
import sympy

from bigrational.errors import InvalidArgumentError
from bigrational.fraction import ONE, ZERO, Fraction
from bigrational.roots import (
    NATIVE_SQRT_LIMIT,
    ONE_NEWTON_STEP_LIMIT,
    SECOND_NEWTON_STEP_THRESHOLD,
    TWO_NEWTON_STEP_LIMIT,
    integer_nth_root,
    isqrt,
    nth_root,
    sqrt,
)

# Inputs on both sides of every regime boundary
BOUNDARIES = [
    NATIVE_SQRT_LIMIT,
    ONE_NEWTON_STEP_LIMIT,
    SECOND_NEWTON_STEP_THRESHOLD,
    TWO_NEWTON_STEP_LIMIT,
]
REGIME_INPUTS = sorted(
    {b + delta for b in BOUNDARIES for delta in (-2, -1, 0, 1, 2)}
    | {2**k - 1 for k in (53, 54, 106, 200, 424, 425, 1000, 4097)}
    | {2**k for k in (53, 54, 106, 200, 424, 425, 1000, 4097)}
    | {10**k + 7 for k in (20, 50, 130, 300, 1000)}
)


class TestIsqrt:
    """Test the floor integer square root."""

    @pytest.mark.parametrize("n", range(0, 200))
    def test_small(self, n):
        """Test every small input against math.isqrt."""
        assert isqrt(n) == math.isqrt(n)

    @pytest.mark.parametrize("n", REGIME_INPUTS)
    def test_regimes(self, n):
        """Test inputs around each regime boundary against math.isqrt."""
        assert isqrt(n) == math.isqrt(n)

    @pytest.mark.parametrize("k", [3, 10**8 + 7, 10**19 + 1, 2**100 + 3, 3**300, 7**1000])
    def test_perfect_squares(self, k):
        """Test that perfect squares give the exact root."""
        assert isqrt(k * k) == k
        assert isqrt(k * k - 1) == k - 1
        assert isqrt(k * k + 2 * k) == k

    def test_floor_semantics(self):
        """Test that the result is the largest r with r*r <= n."""
        for n in [10**40 + 12345, 5 * 10**127, 123456789 ** 13]:
            r = isqrt(n)
            assert r * r <= n < (r + 1) * (r + 1)

    def test_negative(self):
        """Test that negative input raises."""
        with pytest.raises(InvalidArgumentError):
            isqrt(-1)

    def test_rejects_float(self):
        """Test that float input is rejected."""
        with pytest.raises(TypeError):
            isqrt(4.0)

    def test_logs_regime(self, caplog):
        """Test that the selected regime is logged at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="bigrational"):
            isqrt(10**200)
        assert any("adaptive" in record.getMessage() for record in caplog.records)
        record = caplog.records[-1]
        assert record.extra_data == {"regime": "adaptive", "bits": 665}


class TestIntegerNthRoot:
    """Test the floor integer nth root."""

    @pytest.mark.parametrize(
        "n, root",
        [(0, 3), (1, 5), (26, 3), (27, 3), (28, 3), (10**30, 3), (2**521 - 1, 7), (10**200 + 1, 2), (99, 1)],
    )
    def test_matches_sympy(self, n, root):
        """Test against sympy.integer_nthroot."""
        r, remainder = integer_nth_root(n, root)
        expected, _ = sympy.integer_nthroot(n, root)
        assert r == expected
        assert remainder == n - r**root

    def test_exact(self):
        """Test an exact root has no remainder."""
        assert integer_nth_root(3**40, 8) == (3**5, 0)

    def test_invalid(self):
        """Test invalid roots and negative input."""
        with pytest.raises(InvalidArgumentError):
            integer_nth_root(8, 0)
        with pytest.raises(InvalidArgumentError):
            integer_nth_root(-8, 3)


class TestNthRoot:
    """Test rational nth roots by mediant bisection."""

    def test_trivial_values(self):
        """Test that zero, one and the first root are returned unchanged."""
        assert nth_root(ZERO, 3) is ZERO
        assert nth_root(ONE, 3) is ONE
        value = Fraction(7, 3)
        assert nth_root(value, 1) is value

    def test_exact_roots(self):
        """Test that exact rational roots are found exactly."""
        assert sqrt(Fraction(4)) == 2
        assert sqrt(Fraction(9, 4)) == Fraction(3, 2)
        assert sqrt(Fraction(1, 4)) == Fraction(1, 2)
        assert nth_root(Fraction(27, 8), 3) == Fraction(3, 2)
        assert nth_root(Fraction(64), 3) == 4

    def test_accepts_int(self):
        """Test an int radicand."""
        assert sqrt(49) == 7

    @pytest.mark.parametrize("precision", [5, 10, 30])
    def test_sqrt_two_within_deviation(self, precision):
        """Test that an irrational root is a lower bound within 10^-precision."""
        root = sqrt(Fraction(2), precision)
        bound = Fraction(1, 10**precision)
        assert root.pow(2).compare(2) < 0
        assert root.add(bound).pow(2).compare(2) > 0

    def test_cube_root_below_one(self):
        """Test a root of a value below one."""
        root = nth_root(Fraction(1, 10), 3, precision=12)
        expected = sympy.Rational(1, 10) ** sympy.Rational(1, 3)
        assert abs(sympy.Rational(root.numerator, root.denominator) - expected) < sympy.Rational(1, 10**12)

    def test_default_precision_from_settings(self, settings_env):
        """Test that the default precision comes from settings."""
        settings_env(ROOT_PRECISION=3)
        root = sqrt(Fraction(2))
        assert root.compare(Fraction(1413, 1000)) > 0
        assert root.pow(2).compare(2) < 0
        assert root.denominator < 10**4

    def test_negative_value(self):
        """Test that a negative radicand raises."""
        with pytest.raises(InvalidArgumentError):
            sqrt(Fraction(-1, 4))

    def test_invalid_root(self):
        """Test that a root below one raises."""
        with pytest.raises(InvalidArgumentError):
            nth_root(Fraction(2), 0)

    def test_iteration_cap_returns_lower_bound(self, caplog):
        """Test that hitting the cap logs a warning and returns a lower bound."""
        with caplog.at_level(logging.WARNING, logger="bigrational"):
            root = sqrt(Fraction(2), precision=30, max_iterations=5)
        assert root.pow(2).compare(2) < 0
        assert any(record.levelno == logging.WARNING for record in caplog.records)

    def test_iteration_cap_from_settings(self, settings_env, caplog):
        """Test that the cap defaults to the configured value."""
        settings_env(ROOT_MAX_ITERATIONS=3)
        with caplog.at_level(logging.WARNING, logger="bigrational"):
            sqrt(Fraction(2), precision=30)
        assert any("no convergence after 3 iterations" in record.getMessage() for record in caplog.records)

    def test_fraction_methods_delegate(self):
        """Test Fraction.sqrt and Fraction.nth_root."""
        assert Fraction(9, 16).sqrt() == Fraction(3, 4)
        assert Fraction(1, 8).nth_root(3) == Fraction(1, 2)

    def test_large_radicand_without_small_factors(self):
        """Test that a prime radicand converges well inside the default cap."""
        n = 10**9 + 7
        for precision in (5, 30):
            root = sqrt(Fraction(n), precision)
            bound = Fraction(1, 10**precision)
            assert root.pow(2).compare(n) < 0
            assert root.add(bound).pow(2).compare(n) > 0
        assert abs(float(sqrt(Fraction(n), 5)) - math.sqrt(n)) < 1e-4

    def test_bracket_starts_at_integer_root(self, caplog):
        """Test that bisection starts between consecutive integer roots."""
        with caplog.at_level(logging.DEBUG, logger="bigrational.roots"):
            root = nth_root(Fraction(10**9 + 7), 2, precision=8)
        assert root.compare(31_622) > 0
        record = [r for r in caplog.records if r.getMessage().startswith("nth_root")][-1]
        assert record.extra_data["start"] == 31_622
        assert record.extra_data["root"] == 2
        assert record.extra_data["iterations"] < 1_000

    def test_exact_integer_root_skips_bisection(self, caplog):
        """Test that perfect powers return the integer root directly."""
        with caplog.at_level(logging.DEBUG, logger="bigrational.roots"):
            assert sqrt(Fraction(10**40)) == 10**20
            assert nth_root(Fraction(54, 2), 3) == 3
        assert not any("bisection" in record.getMessage() for record in caplog.records)

    def test_negative_precision(self):
        """Test that a negative precision raises."""
        with pytest.raises(InvalidArgumentError):
            sqrt(Fraction(2), precision=-1)
