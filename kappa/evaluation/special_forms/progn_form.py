from typing import Callable

from kappa import Value
from kappa.expr import Begin, Expr
from kappa.types.environment import Environment
from kappa.types.singletons import Void

ExecuteFn = Callable[[Expr, Environment], tuple[Value, Environment]]


def begin_form(node: Begin, env: Environment, execute_fn: ExecuteFn) -> tuple[Value, Environment]:
    # Definitions inside the sequence extend the scope for the forms after them.
    result: Value = Void
    for expr in node.body:
        result, env = execute_fn(expr, env)
    return result, env
