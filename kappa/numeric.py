"""Exact numeric tower: Integer and Rational arithmetic and comparison.

Every helper first views its operands as (numerator, denominator) pairs, with
an Integer being n/1. Results are normalised through `make_rational`, so a
denominator that reduces to 1 always comes back as an Integer. No floating
point is used anywhere.

Python ints are unbounded, so intermediate cross products are exact; only the
final reduced result is checked against the configured fixed width.
"""

from __future__ import annotations

from typing import Callable, Iterable

from kappa import Value
from kappa.config import INT_MAX, INT_MIN
from kappa.errors import (
    KappaDivisionByZero,
    KappaIntegerOverflow,
    KappaNegativeExponent,
    KappaTypeError,
    KappaZeroToZerothPower,
)
from kappa.types.values import Integer, Rational, make_rational


def _ratio(value: Value, op: str) -> tuple[int, int]:
    if isinstance(value, Integer):
        return value.value, 1
    if isinstance(value, Rational):
        return value.numerator, value.denominator
    raise KappaTypeError(f"{op} expects numbers, got {value!r}")


def _integer(value: Value, op: str) -> int:
    if isinstance(value, Integer):
        return value.value
    raise KappaTypeError(f"{op} expects integers, got {value!r}")


def _in_range(n: int) -> bool:
    return INT_MIN <= n <= INT_MAX


def checked_integer(n: int) -> Integer:
    if not _in_range(n):
        raise KappaIntegerOverflow(f"Integer overflow: {n}")
    return Integer(n)


def _normalise(numerator: int, denominator: int) -> Integer | Rational:
    result = make_rational(numerator, denominator)
    if isinstance(result, Integer):
        return checked_integer(result.value)
    if not (_in_range(result.numerator) and _in_range(result.denominator)):
        raise KappaIntegerOverflow(f"Integer overflow: {result.numerator}/{result.denominator}")
    return result


# -------------------------------
# Arithmetic
# -------------------------------
def add(a: Value, b: Value) -> Integer | Rational:
    n1, d1 = _ratio(a, "+")
    n2, d2 = _ratio(b, "+")
    return _normalise(n1 * d2 + n2 * d1, d1 * d2)


def sub(a: Value, b: Value) -> Integer | Rational:
    n1, d1 = _ratio(a, "-")
    n2, d2 = _ratio(b, "-")
    return _normalise(n1 * d2 - n2 * d1, d1 * d2)


def mul(a: Value, b: Value) -> Integer | Rational:
    n1, d1 = _ratio(a, "*")
    n2, d2 = _ratio(b, "*")
    return _normalise(n1 * n2, d1 * d2)


def div(a: Value, b: Value) -> Integer | Rational:
    n1, d1 = _ratio(a, "/")
    n2, d2 = _ratio(b, "/")
    if n2 == 0:
        raise KappaDivisionByZero("Division by zero")
    # a / (n2/d2) == a * (d2/n2)
    return _normalise(n1 * d2, d1 * n2)


def negate(a: Value) -> Integer | Rational:
    return sub(Integer(0), a)


def reciprocal(a: Value) -> Integer | Rational:
    return div(Integer(1), a)


def modulo(a: Value, b: Value) -> Integer:
    """Remainder of two integers; the sign follows the dividend."""
    dividend = _integer(a, "modulo")
    divisor = _integer(b, "modulo")
    if divisor == 0:
        raise KappaDivisionByZero("Division by zero in modulo")
    r = abs(dividend) % abs(divisor)
    return checked_integer(-r if dividend < 0 else r)


def expt(a: Value, b: Value) -> Integer:
    """Integer power by repeated squaring, range-checked at every product."""
    base = _integer(a, "expt")
    exponent = _integer(b, "expt")
    if exponent < 0:
        raise KappaNegativeExponent(f"Negative exponent: {exponent}")
    if base == 0 and exponent == 0:
        raise KappaZeroToZerothPower("0^0 is undefined")

    result = 1
    square = base
    while exponent > 0:
        if exponent & 1:
            result *= square
            if not _in_range(result):
                raise KappaIntegerOverflow("Integer overflow in expt")
        exponent >>= 1
        if exponent:
            square *= square
            if not _in_range(square):
                raise KappaIntegerOverflow("Integer overflow in expt")
    return Integer(result)


# -------------------------------
# Comparison
# -------------------------------
def compare(a: Value, b: Value, op: str = "compare") -> int:
    """-1, 0 or 1 as a is less than, equal to or greater than b.

    Denominators are always positive, so cross-multiplying keeps the order.
    """
    n1, d1 = _ratio(a, op)
    n2, d2 = _ratio(b, op)
    left = n1 * d2
    right = n2 * d1
    return (left > right) - (left < right)


def less(a: Value, b: Value) -> bool:
    return compare(a, b, "<") < 0


def less_equal(a: Value, b: Value) -> bool:
    return compare(a, b, "<=") <= 0


def num_equal(a: Value, b: Value) -> bool:
    return compare(a, b, "=") == 0


def greater_equal(a: Value, b: Value) -> bool:
    return compare(a, b, ">=") >= 0


def greater(a: Value, b: Value) -> bool:
    return compare(a, b, ">") > 0


def chain(test: Callable[[Value, Value], bool], values: Iterable[Value]) -> bool:
    """Fold a pairwise comparison over consecutive values, stopping at the first failure."""
    items = list(values)
    for left, right in zip(items, items[1:]):
        if not test(left, right):
            return False
    return True
