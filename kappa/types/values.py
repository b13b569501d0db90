"""Runtime value variants for Kappa.

The closed set of values is:

    Integer | Rational | Boolean | String | Symbol | Null | Pair
    | Procedure | Void | Terminate

Symbol lives in kappa.types.symbol and the three singletons (Null, Void,
Terminate) in kappa.types.singletons. Immutable scalars are frozen
dataclasses and compare by value; Pair and Procedure are mutable/shared and
compare by identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import gcd
from typing import TYPE_CHECKING

from kappa import Value
from kappa.errors import KappaDivisionByZero

if TYPE_CHECKING:
    from kappa.expr import Expr
    from kappa.types.environment import Environment


@dataclass(frozen=True)
class Integer:
    value: int

    def __repr__(self) -> str:
        return f"Integer({self.value})"


@dataclass(frozen=True)
class Rational:
    """An exact fraction in lowest terms with a positive denominator > 1.

    Build through `make_rational`, which normalises and collapses to Integer.
    """

    numerator: int
    denominator: int

    def __post_init__(self):
        if self.denominator <= 1 or gcd(self.numerator, self.denominator) != 1:
            raise ValueError(
                f"Rational({self.numerator}, {self.denominator}) is not normalised; use make_rational"
            )

    def __repr__(self) -> str:
        return f"Rational({self.numerator}, {self.denominator})"


@dataclass(frozen=True)
class Boolean:
    value: bool

    def __repr__(self) -> str:
        return "#t" if self.value else "#f"


@dataclass(frozen=True)
class String:
    value: str

    def __repr__(self) -> str:
        return f"String({self.value!r})"


TRUE = Boolean(True)
FALSE = Boolean(False)


class Pair:
    """A cons cell. Both slots may be repointed, so cycles are possible."""

    __slots__ = ("car", "cdr")

    def __init__(self, car: Value, cdr: Value):
        self.car = car
        self.cdr = cdr

    def __repr__(self) -> str:
        from kappa.printer import render
        return render(self)


class Procedure:
    """A closure: parameters, body expression and the captured environment.

    When `variadic` is set, `params` holds exactly one name, which receives
    every argument as a Null-terminated list.
    """

    __slots__ = ("params", "body", "env", "variadic", "name")

    def __init__(
        self,
        params: tuple[str, ...],
        body: Expr,
        env: Environment,
        variadic: bool = False,
        name: str | None = None,
    ):
        self.params: tuple[str, ...] = tuple(params)
        self.body: Expr = body
        self.env: Environment = env
        self.variadic: bool = variadic
        self.name: str | None = name

    def __repr__(self) -> str:
        if self.name:
            return f"#<procedure {self.name}>"
        return "#<procedure>"


# -------------------------------
# Constructors / predicates
# -------------------------------
def make_rational(numerator: int, denominator: int) -> Integer | Rational:
    """Normalise n/d: reduce by gcd, force d > 0, collapse to Integer when d == 1."""
    if denominator == 0:
        raise KappaDivisionByZero(f"Division by zero in {numerator}/{denominator}")
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    g = gcd(numerator, denominator)
    numerator //= g
    denominator //= g
    if denominator == 1:
        return Integer(numerator)
    return Rational(numerator, denominator)


def boolean(flag: bool) -> Boolean:
    return TRUE if flag else FALSE


def is_truthy(value: Value) -> bool:
    # Only #f is false; 0, () and "" are all true.
    return not (isinstance(value, Boolean) and not value.value)


def is_number(value: Value) -> bool:
    return isinstance(value, (Integer, Rational))
