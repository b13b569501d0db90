"""Analyzer: syntax tree -> expression tree.

Resolution order for a list whose head is a symbol `op`:

1. `op` is bound in the environment -> ordinary application of Var(op),
   even if `op` also names a primitive or a reserved word.
2. `op` is a primitive -> a Unary / Binary / Variadic / And / Or node chosen
   by the primitive's arity policy.
3. `op` is a reserved word -> that keyword's shape parser.
4. otherwise -> ordinary application; an unbound `op` is only reported when
   the application is evaluated.
"""

from __future__ import annotations

from kappa.config import DEFAULT_TABLES, Primitive, SyntaxTables
from kappa.errors import KappaArityError, KappaShapeError, KappaUnknownForm
from kappa.expr import (
    AndVar,
    Apply,
    Binary,
    Const,
    Exit,
    Expr,
    MakeVoid,
    OrVar,
    Quote,
    Unary,
    Var,
    Variadic,
)
from kappa.primitives import CHAIN_OPS, FIXED_ARITY, FOLD_OPS, LIST_OPS
from kappa.analysis.keyword_forms import KEYWORD_FORMS
from kappa.types.environment import Environment
from kappa.types.syntax import (
    BooleanLiteral,
    IntegerLiteral,
    ListNode,
    RationalLiteral,
    StringLiteral,
    Syntax,
    SymbolLiteral,
    unparse,
)
from kappa.types.values import Integer, String, boolean, make_rational


def parse(node: Syntax, env: Environment, tables: SyntaxTables = DEFAULT_TABLES) -> Expr:
    """Analyse `node` under `env`, raising a KappaParseError on malformed input."""
    match node:
        case IntegerLiteral(value=n):
            return Const(Integer(n))
        case RationalLiteral(numerator=n, denominator=d):
            if d == 0:
                raise KappaShapeError(f"Zero denominator in literal {unparse(node)}", node)
            return Const(make_rational(n, d))
        case StringLiteral(value=s):
            return Const(String(s))
        case BooleanLiteral(value=flag):
            return Const(boolean(flag))
        case SymbolLiteral(name=name):
            return _var(name, tables)
        case ListNode():
            return _parse_list(node, env, tables)
    raise KappaShapeError(f"Cannot analyse {node!r}", node)


def _var(name: str, tables: SyntaxTables) -> Var:
    return Var(name, tables.primitives.get(name))


def _parse_operands(node: ListNode, env: Environment, tables: SyntaxTables) -> tuple[Expr, ...]:
    return tuple(parse(item, env, tables) for item in node[1:])


def _parse_list(node: ListNode, env: Environment, tables: SyntaxTables) -> Expr:
    if len(node) == 0:
        return Quote(node)

    head = node[0]
    if not isinstance(head, SymbolLiteral):
        return Apply(parse(head, env, tables), _parse_operands(node, env, tables))

    op = head.name
    if op in env:
        return Apply(_var(op, tables), _parse_operands(node, env, tables))

    primitive = tables.primitives.get(op)
    if primitive is not None:
        return _parse_primitive(primitive, node, env, tables)

    keyword = tables.reserved_words.get(op)
    if keyword is not None:
        form = KEYWORD_FORMS.get(keyword)
        if form is None:
            raise KappaUnknownForm(f"No parser for reserved word {op}", node)
        return form(node, env, tables, parse)

    return Apply(Var(op), _parse_operands(node, env, tables))


def _parse_primitive(op: Primitive, node: ListNode, env: Environment, tables: SyntaxTables) -> Expr:
    operands = _parse_operands(node, env, tables)
    count = len(operands)

    if op is Primitive.AND:
        return AndVar(operands)
    if op is Primitive.OR:
        return OrVar(operands)

    if op in FOLD_OPS:
        if count == 2:
            return Binary(op, *operands)
        return Variadic(op, operands)

    if op in CHAIN_OPS:
        if count == 2:
            return Binary(op, *operands)
        if count > 2:
            return Variadic(op, operands)
        raise KappaArityError(f"{op.value} expects at least 2 arguments: {unparse(node)}", node)

    if op in LIST_OPS:
        return Variadic(op, operands)

    expected = FIXED_ARITY[op]
    if count != expected:
        raise KappaArityError(
            f"{op.value} expects exactly {expected} argument(s), got {count}: {unparse(node)}", node
        )
    if expected == 0:
        return Exit() if op is Primitive.EXIT else MakeVoid()
    if expected == 1:
        return Unary(op, operands[0])
    return Binary(op, operands[0], operands[1])
