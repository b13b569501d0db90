"""Core evaluator for the Kappa interpreter.

A recursive walk over the analysed expression tree. `evaluate` produces a
value; `execute` additionally returns the environment in effect afterwards,
which differs from the input only for `define` (and for a `begin` that
contains one). The driver and `begin` use `execute` so that definitions
extend the scope of the forms that follow them.
"""

from __future__ import annotations

from kappa import Value
from kappa.errors import KappaTypeError, KappaUnboundVariable
from kappa.evaluation.apply import apply_form
from kappa.evaluation.special_forms import (
    and_form,
    begin_form,
    cond_form,
    define_form,
    if_form,
    let_form,
    letrec_form,
    or_form,
    quote_form,
    set_form,
)
from kappa.expr import (
    AndVar,
    Apply,
    ApplyPrimitive,
    Begin,
    Binary,
    Cond,
    Const,
    Define,
    Else,
    Exit,
    Expr,
    If,
    Lambda,
    Let,
    Letrec,
    MakeVoid,
    OrVar,
    Quote,
    Set,
    Unary,
    Var,
    Variadic,
)
from kappa.primitives import (
    apply_binary,
    apply_unary,
    apply_variadic,
    list_to_python,
    primitive_procedure,
)
from kappa.types.environment import Environment
from kappa.types.singletons import Terminate, Void
from kappa.types.values import TRUE, Procedure


def lookup(node: Var, env: Environment) -> Value:
    value = env.find(node.name)
    if value is not None:
        return value
    if node.primitive is not None:
        return primitive_procedure(node.primitive)
    raise KappaUnboundVariable(node.name)


def execute(expr: Expr, env: Environment) -> tuple[Value, Environment]:
    match expr:
        case Define():
            return define_form(expr, env, evaluate)
        case Begin():
            return begin_form(expr, env, execute)
    return evaluate(expr, env), env


def evaluate(expr: Expr, env: Environment) -> Value:
    match expr:
        case Const(value=value):
            return value
        case Var():
            return lookup(expr, env)
        case MakeVoid():
            return Void
        case Exit():
            return Terminate
        case Else():
            return TRUE

        # --- Primitive operators ---
        case Unary(op=op, operand=operand):
            return apply_unary(op, evaluate(operand, env))
        case Binary(op=op, left=left, right=right):
            lhs = evaluate(left, env)
            return apply_binary(op, lhs, evaluate(right, env))
        case Variadic(op=op, operands=operands):
            return apply_variadic(op, [evaluate(operand, env) for operand in operands])
        case ApplyPrimitive(op=op, arguments=arguments):
            return apply_variadic(op, list_to_python(evaluate(arguments, env)))
        case AndVar():
            return and_form(expr, env, evaluate)
        case OrVar():
            return or_form(expr, env, evaluate)

        # --- Special forms ---
        case If():
            return if_form(expr, env, evaluate)
        case Cond():
            return cond_form(expr, env, evaluate)
        case Begin() | Define():
            value, _ = execute(expr, env)
            return value
        case Quote():
            return quote_form(expr)
        case Lambda(params=params, body=body, variadic=variadic):
            return Procedure(params, body, env, variadic)
        case Let():
            return let_form(expr, env, evaluate)
        case Letrec():
            return letrec_form(expr, env, evaluate)
        case Set():
            return set_form(expr, env, evaluate)
        case Apply():
            return apply_form(expr, env, evaluate)

    raise KappaTypeError(f"Cannot evaluate {expr!r}")
