"""Analysed expression tree.

The analyzer turns syntax into these nodes once; the evaluator walks them
many times. Every node is immutable. Primitive operators are pre-resolved to
a `Primitive` member and an arity class (Unary / Binary / Variadic) so the
evaluator never looks at names to decide what an operator is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from kappa import Value
from kappa.config import Primitive
from kappa.types.syntax import Syntax


# -------------------------------
# Literals
# -------------------------------
@dataclass(frozen=True)
class Const:
    """Integer, Rational, String or Boolean literal."""
    value: Value


@dataclass(frozen=True)
class MakeVoid:
    pass


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class Var:
    name: str
    # Primitive this name falls back to when no binding is found at run time.
    primitive: Primitive | None = None


@dataclass(frozen=True)
class Else:
    """Test position of an `else` cond clause."""
    pass


# -------------------------------
# Primitive operators
# -------------------------------
@dataclass(frozen=True)
class Unary:
    op: Primitive
    operand: Expr


@dataclass(frozen=True)
class Binary:
    op: Primitive
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Variadic:
    op: Primitive
    operands: tuple[Expr, ...]


@dataclass(frozen=True)
class ApplyPrimitive:
    """Apply `op` to the elements of the list `arguments` evaluates to.

    Body of the variadic procedure a primitive becomes when used as a value.
    """
    op: Primitive
    arguments: Expr


@dataclass(frozen=True)
class AndVar:
    operands: tuple[Expr, ...]


@dataclass(frozen=True)
class OrVar:
    operands: tuple[Expr, ...]


# -------------------------------
# Special forms
# -------------------------------
@dataclass(frozen=True)
class If:
    test: Expr
    consequent: Expr
    alternate: Expr


@dataclass(frozen=True)
class Cond:
    # Each clause is (test, body...)
    clauses: tuple[tuple[Expr, ...], ...]


@dataclass(frozen=True)
class Begin:
    body: tuple[Expr, ...]


@dataclass(frozen=True)
class Quote:
    datum: Syntax


@dataclass(frozen=True)
class Lambda:
    params: tuple[str, ...]
    body: Expr
    variadic: bool = False


@dataclass(frozen=True)
class Apply:
    operator: Expr
    operands: tuple[Expr, ...]


@dataclass(frozen=True)
class Define:
    name: str
    value: Expr


@dataclass(frozen=True)
class Let:
    bindings: tuple[tuple[str, Expr], ...]
    body: Expr


@dataclass(frozen=True)
class Letrec:
    bindings: tuple[tuple[str, Expr], ...]
    body: Expr


@dataclass(frozen=True)
class Set:
    name: str
    value: Expr


Expr = Union[
    Const, MakeVoid, Exit, Var, Else,
    Unary, Binary, Variadic, ApplyPrimitive, AndVar, OrVar,
    If, Cond, Begin, Quote, Lambda, Apply, Define, Let, Letrec, Set,
]
