from fractions import Fraction
from math import gcd

import pytest
from hypothesis import given, assume, strategies as st

from kappa import numeric
from kappa.config import INT_MAX, INT_MIN
from kappa.errors import (
    KappaDivisionByZero,
    KappaIntegerOverflow,
    KappaNegativeExponent,
    KappaTypeError,
    KappaZeroToZerothPower,
)
from kappa.types.values import Integer, Rational, String, make_rational

small = st.integers(min_value=-10_000, max_value=10_000)
nonzero = small.filter(lambda n: n != 0)


# -------------------------------
# Construction
# -------------------------------
@pytest.mark.parametrize(
    "n,d,expected",
    [
        (4, -8, Rational(-1, 2)),
        (6, 3, Integer(2)),
        (6, 4, Rational(3, 2)),
        (0, 5, Integer(0)),
        (-3, -9, Rational(1, 3)),
        (7, 1, Integer(7)),
    ],
)
def test_make_rational_normalises(n, d, expected):
    assert make_rational(n, d) == expected


def test_make_rational_zero_denominator():
    with pytest.raises(KappaDivisionByZero):
        make_rational(1, 0)


@given(small, nonzero)
def test_make_rational_invariants(n, d):
    result = make_rational(n, d)
    if isinstance(result, Integer):
        assert n % d == 0
        assert result.value == n // d
    else:
        assert result.denominator > 1
        assert gcd(abs(result.numerator), result.denominator) == 1
        assert result.numerator * d == n * result.denominator


# -------------------------------
# Arithmetic
# -------------------------------
@pytest.mark.parametrize(
    "op,a,b,expected",
    [
        (numeric.add, Integer(1), Integer(2), Integer(3)),
        (numeric.add, Rational(1, 2), Rational(1, 2), Integer(1)),
        (numeric.add, Rational(1, 3), Integer(1), Rational(4, 3)),
        (numeric.sub, Rational(1, 3), Rational(1, 3), Integer(0)),
        (numeric.sub, Integer(1), Rational(3, 2), Rational(-1, 2)),
        (numeric.mul, Rational(2, 3), Integer(3), Integer(2)),
        (numeric.mul, Rational(2, 3), Rational(3, 4), Rational(1, 2)),
        (numeric.div, Integer(6), Integer(3), Integer(2)),
        (numeric.div, Integer(6), Integer(4), Rational(3, 2)),
        (numeric.div, Rational(1, 2), Rational(1, 4), Integer(2)),
        (numeric.div, Integer(1), Integer(-2), Rational(-1, 2)),
    ],
)
def test_arithmetic(op, a, b, expected):
    assert op(a, b) == expected


@given(small, nonzero)
def test_div_integer_exactly_when_divisible(a, b):
    result = numeric.div(Integer(a), Integer(b))
    if a % b == 0:
        assert result == Integer(a // b)
    else:
        assert isinstance(result, Rational)
        assert Fraction(result.numerator, result.denominator) == Fraction(a, b)


def test_div_by_zero():
    with pytest.raises(KappaDivisionByZero):
        numeric.div(Integer(1), Integer(0))


def test_arithmetic_rejects_non_numbers():
    with pytest.raises(KappaTypeError):
        numeric.add(Integer(1), String("2"))


def test_integer_overflow_on_add():
    with pytest.raises(KappaIntegerOverflow):
        numeric.add(Integer(INT_MAX), Integer(1))
    with pytest.raises(KappaIntegerOverflow):
        numeric.sub(Integer(INT_MIN), Integer(1))


def test_negate_and_reciprocal():
    assert numeric.negate(Rational(1, 2)) == Rational(-1, 2)
    assert numeric.reciprocal(Integer(4)) == Rational(1, 4)
    assert numeric.reciprocal(Rational(1, 4)) == Integer(4)


# -------------------------------
# Modulo / expt
# -------------------------------
@pytest.mark.parametrize(
    "a,b,expected",
    [(7, 3, 1), (-7, 3, -1), (7, -3, 1), (6, 3, 0)],
)
def test_modulo_sign_follows_dividend(a, b, expected):
    assert numeric.modulo(Integer(a), Integer(b)) == Integer(expected)


def test_modulo_errors():
    with pytest.raises(KappaDivisionByZero):
        numeric.modulo(Integer(1), Integer(0))
    with pytest.raises(KappaTypeError):
        numeric.modulo(Rational(1, 2), Integer(1))


@pytest.mark.parametrize(
    "base,exponent,expected",
    [
        (2, 10, 1024),
        (2, 30, 1 << 30),
        (-2, 31, -(1 << 31)),
        (0, 5, 0),
        (1, 1_000_000, 1),
        (-1, 7, -1),
        (5, 0, 1),
    ],
)
def test_expt(base, exponent, expected):
    assert numeric.expt(Integer(base), Integer(exponent)) == Integer(expected)


@pytest.mark.parametrize(
    "base,exponent,error",
    [
        (0, 0, KappaZeroToZerothPower),
        (2, -1, KappaNegativeExponent),
        (2, 31, KappaIntegerOverflow),
        (10, 10, KappaIntegerOverflow),
    ],
)
def test_expt_errors(base, exponent, error):
    with pytest.raises(error):
        numeric.expt(Integer(base), Integer(exponent))


def test_expt_requires_integers():
    with pytest.raises(KappaTypeError):
        numeric.expt(Rational(1, 2), Integer(2))


# -------------------------------
# Comparison
# -------------------------------
def test_mixed_comparisons():
    half, one, three_halves = Rational(1, 2), Integer(1), Rational(3, 2)
    assert numeric.less(half, one)
    assert numeric.less(one, three_halves)
    assert numeric.less(half, three_halves)
    assert numeric.num_equal(make_rational(2, 4), half)
    assert numeric.greater_equal(one, one)
    assert not numeric.greater(half, one)


@given(small, nonzero, small, nonzero)
def test_compare_agrees_with_exact_fractions(n1, d1, n2, d2):
    a, b = make_rational(n1, d1), make_rational(n2, d2)
    diff = Fraction(n1, d1) - Fraction(n2, d2)
    assert numeric.compare(a, b) == (diff > 0) - (diff < 0)


@given(small, nonzero, small, nonzero, small, nonzero)
def test_less_is_transitive(n1, d1, n2, d2, n3, d3):
    a, b, c = make_rational(n1, d1), make_rational(n2, d2), make_rational(n3, d3)
    assume(numeric.less(a, b) and numeric.less(b, c))
    assert numeric.less(a, c)


def test_chain_stops_at_first_failure():
    assert numeric.chain(numeric.less, [Integer(1), Integer(2), Integer(3)])
    assert not numeric.chain(numeric.less, [Integer(1), Integer(3), Integer(2)])
    # Later operands are never compared once a pair fails.
    assert not numeric.chain(numeric.less, [Integer(2), Integer(1), String("x")])
