"""Shape parsers for reserved words.

Each parser receives the whole list node, the analysis environment, the
syntax tables and the analyzer's `parse` function (passed in rather than
imported, so this module does not depend on the analyzer). Parsers that
introduce names extend the analysis environment with placeholders while
parsing the scope those names cover; that chain only steers shadow checks
and never reaches the evaluator.
"""

from __future__ import annotations

from typing import Callable, Sequence

from kappa import Value
from kappa.config import DOT, ELSE, Keyword, SyntaxTables
from kappa.errors import KappaArityError, KappaShapeError
from kappa.expr import Begin, Cond, Define, Else, Expr, If, Lambda, Let, Letrec, Quote, Set
from kappa.types.environment import Environment
from kappa.types.singletons import Void
from kappa.types.syntax import ListNode, Syntax, SymbolLiteral, unparse

ParseFn = Callable[[Syntax, Environment, SyntaxTables], Expr]
KeywordParser = Callable[[ListNode, Environment, SyntaxTables, ParseFn], Expr]

# Bound to every name a scope introduces during analysis.
PLACEHOLDER: Value = Void


def _arity_error(node: ListNode, expected: str) -> KappaArityError:
    return KappaArityError(f"{node[0].name} expects {expected}: {unparse(node)}", node)


def _shape_error(node: Syntax, what: str) -> KappaShapeError:
    return KappaShapeError(f"Malformed {what}: {unparse(node)}", node)


def _with_placeholders(env: Environment, names: Sequence[str]) -> Environment:
    for name in names:
        env = env.extend(name, PLACEHOLDER)
    return env


def parse_sequence(
    forms: Sequence[Syntax], env: Environment, tables: SyntaxTables, parse_fn: ParseFn
) -> list[Expr]:
    """Parse forms in order; a define makes its name visible to the forms after it."""
    exprs: list[Expr] = []
    for form in forms:
        expr = parse_fn(form, env, tables)
        env = _with_placeholders(env, defined_names(expr))
        exprs.append(expr)
    return exprs


def defined_names(expr: Expr) -> list[str]:
    """Names a form adds to the scope of the forms after it.

    A define adds its own name; a begin adds every name its body defines,
    including those of nested begins.
    """
    if isinstance(expr, Define):
        return [expr.name]
    if isinstance(expr, Begin):
        return [name for item in expr.body for name in defined_names(item)]
    return []


def parse_body(
    forms: Sequence[Syntax], env: Environment, tables: SyntaxTables, parse_fn: ParseFn
) -> Expr:
    exprs = parse_sequence(forms, env, tables, parse_fn)
    if len(exprs) == 1:
        return exprs[0]
    return Begin(tuple(exprs))


def _parameters(node: Syntax, owner: ListNode) -> tuple[list[str], bool]:
    """Names from a lambda parameter list; a bare symbol means variadic."""
    if isinstance(node, SymbolLiteral):
        return [node.name], True
    if not isinstance(node, ListNode):
        raise _shape_error(owner, "parameter list")
    names: list[str] = []
    for item in node:
        if not isinstance(item, SymbolLiteral):
            raise _shape_error(owner, "parameter list")
        if item.name == DOT:
            raise KappaShapeError(f"Dotted parameter lists are not supported: {unparse(owner)}", owner)
        if item.name in names:
            raise KappaShapeError(f"Duplicate parameter {item.name}: {unparse(owner)}", owner)
        names.append(item.name)
    return names, False


def _bindings(node: ListNode) -> list[tuple[str, Syntax]]:
    binding_list = node[1]
    if not isinstance(binding_list, ListNode):
        raise _shape_error(node, "binding list")
    bindings: list[tuple[str, Syntax]] = []
    for binding in binding_list:
        if (
            not isinstance(binding, ListNode)
            or len(binding) != 2
            or not isinstance(binding[0], SymbolLiteral)
        ):
            raise _shape_error(node, "binding list")
        bindings.append((binding[0].name, binding[1]))
    return bindings


# -------------------------------
# Keyword parsers
# -------------------------------
def begin_form(node: ListNode, env: Environment, tables: SyntaxTables, parse_fn: ParseFn) -> Expr:
    return Begin(tuple(parse_sequence(node[1:], env, tables, parse_fn)))


def quote_form(node: ListNode, env: Environment, tables: SyntaxTables, parse_fn: ParseFn) -> Expr:
    if len(node) != 2:
        raise _arity_error(node, "exactly 1 argument")
    return Quote(node[1])


def if_form(node: ListNode, env: Environment, tables: SyntaxTables, parse_fn: ParseFn) -> Expr:
    if len(node) != 4:
        raise _arity_error(node, "a test, a consequent and an alternate")
    test, consequent, alternate = (parse_fn(part, env, tables) for part in node[1:])
    return If(test, consequent, alternate)


def cond_form(node: ListNode, env: Environment, tables: SyntaxTables, parse_fn: ParseFn) -> Expr:
    if len(node) < 2:
        raise _arity_error(node, "at least one clause")
    clauses: list[tuple[Expr, ...]] = []
    for clause in node[1:]:
        if not isinstance(clause, ListNode) or len(clause) == 0:
            raise _shape_error(node, "cond clause")
        first = clause[0]
        if isinstance(first, SymbolLiteral) and first.name == ELSE:
            test: Expr = Else()
        else:
            test = parse_fn(first, env, tables)
        rest = (parse_fn(part, env, tables) for part in clause[1:])
        clauses.append((test, *rest))
    return Cond(tuple(clauses))


def lambda_form(node: ListNode, env: Environment, tables: SyntaxTables, parse_fn: ParseFn) -> Expr:
    # (lambda (params...) body...) with one or more body forms.
    if len(node) < 3:
        raise _arity_error(node, "a parameter list and a body")
    params, variadic = _parameters(node[1], node)
    body_env = _with_placeholders(env, params)
    body = parse_body(node[2:], body_env, tables, parse_fn)
    return Lambda(tuple(params), body, variadic)


def define_form(node: ListNode, env: Environment, tables: SyntaxTables, parse_fn: ParseFn) -> Expr:
    """
    (define name expr)
    (define (name params...) body...)  ==  (define name (lambda (params...) body...))
    """
    if len(node) < 3:
        raise _arity_error(node, "a name and a value")
    target = node[1]

    if isinstance(target, SymbolLiteral):
        if len(node) != 3:
            raise _arity_error(node, "exactly one value expression")
        # The name is visible to its own value expression (self-recursive lambdas).
        value_env = env.extend(target.name, PLACEHOLDER)
        return Define(target.name, parse_fn(node[2], value_env, tables))

    if isinstance(target, ListNode) and len(target) > 0 and isinstance(target[0], SymbolLiteral):
        name = target[0].name
        params, _ = _parameters(ListNode(target[1:]), node)
        body_env = _with_placeholders(env.extend(name, PLACEHOLDER), params)
        body = parse_body(node[2:], body_env, tables, parse_fn)
        return Define(name, Lambda(tuple(params), body))

    raise _shape_error(node, "define target")


def let_form(node: ListNode, env: Environment, tables: SyntaxTables, parse_fn: ParseFn) -> Expr:
    if len(node) < 3:
        raise _arity_error(node, "a binding list and a body")
    bindings = _bindings(node)
    # Binding expressions see only the outer scope.
    parsed = tuple((name, parse_fn(expr, env, tables)) for name, expr in bindings)
    body_env = _with_placeholders(env, [name for name, _ in bindings])
    return Let(parsed, parse_body(node[2:], body_env, tables, parse_fn))


def letrec_form(node: ListNode, env: Environment, tables: SyntaxTables, parse_fn: ParseFn) -> Expr:
    if len(node) < 3:
        raise _arity_error(node, "a binding list and a body")
    bindings = _bindings(node)
    inner = _with_placeholders(env, [name for name, _ in bindings])
    parsed = tuple((name, parse_fn(expr, inner, tables)) for name, expr in bindings)
    return Letrec(parsed, parse_body(node[2:], inner, tables, parse_fn))


def set_form(node: ListNode, env: Environment, tables: SyntaxTables, parse_fn: ParseFn) -> Expr:
    if len(node) != 3:
        raise _arity_error(node, "exactly 2 arguments: (set! name value)")
    target = node[1]
    if not isinstance(target, SymbolLiteral):
        raise _shape_error(node, "set! target")
    return Set(target.name, parse_fn(node[2], env, tables))


KEYWORD_FORMS: dict[Keyword, KeywordParser] = {
    Keyword.BEGIN: begin_form,
    Keyword.QUOTE: quote_form,
    Keyword.IF: if_form,
    Keyword.COND: cond_form,
    Keyword.LAMBDA: lambda_form,
    Keyword.DEFINE: define_form,
    Keyword.LET: let_form,
    Keyword.LETREC: letrec_form,
    Keyword.SET: set_form,
}
