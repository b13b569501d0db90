"""Application engine for Kappa.

Centralises procedure-call semantics so the evaluator, and anything else that
needs to call a Procedure, shares one definition:

- the operator must evaluate to a Procedure (else KappaNotProcedure);
- operands are evaluated left to right before the call;
- a variadic procedure receives every argument as one list;
- otherwise the argument count must match exactly (else KappaWrongArgCount);
- the body runs in the procedure's captured environment, extended with the
  parameters, never in the caller's environment.
"""

from __future__ import annotations

from typing import Callable

from kappa import Value
from kappa.errors import KappaNotProcedure, KappaWrongArgCount
from kappa.expr import Apply, Expr
from kappa.primitives import make_list
from kappa.printer import render
from kappa.types.environment import Environment
from kappa.types.values import Procedure

EvaluatorFn = Callable[[Expr, Environment], Value]


def bind_arguments(proc: Procedure, args: list[Value]) -> Environment:
    """Extend the procedure's captured environment with its parameters."""
    env = proc.env
    if proc.variadic:
        return env.extend(proc.params[0], make_list(args))
    if len(args) != len(proc.params):
        raise KappaWrongArgCount(
            f"{render(proc)} expects {len(proc.params)} argument(s), got {len(args)}"
        )
    for name, value in zip(proc.params, args):
        env = env.extend(name, value)
    return env


def apply_procedure(proc: Value, args: list[Value], evaluate_fn: EvaluatorFn) -> Value:
    if not isinstance(proc, Procedure):
        raise KappaNotProcedure(f"Cannot apply non-procedure {render(proc)}")
    return evaluate_fn(proc.body, bind_arguments(proc, args))


def apply_form(node: Apply, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    proc = evaluate_fn(node.operator, env)
    if not isinstance(proc, Procedure):
        raise KappaNotProcedure(f"Cannot apply non-procedure {render(proc)}")
    args = [evaluate_fn(operand, env) for operand in node.operands]
    return apply_procedure(proc, args, evaluate_fn)
