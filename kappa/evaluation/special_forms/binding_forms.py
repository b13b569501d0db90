from kappa import Value
from kappa.evaluation.apply import EvaluatorFn
from kappa.expr import Define, Let, Letrec, Set
from kappa.types.environment import Environment
from kappa.types.singletons import Void, VoidType


def define_form(node: Define, env: Environment, evaluate_fn: EvaluatorFn) -> tuple[VoidType, Environment]:
    """
    (define name expr)
    The name is bound before `expr` runs, so a lambda can refer to itself. The
    returned environment replaces the caller's for the forms that follow.
    """
    new_env = env.extend(node.name, Void)
    value = evaluate_fn(node.value, new_env)
    new_env.modify(node.name, value)
    return Void, new_env


def let_form(node: Let, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    # Every binding expression sees the outer environment only.
    values = [(name, evaluate_fn(expr, env)) for name, expr in node.bindings]
    body_env = env
    for name, value in values:
        body_env = body_env.extend(name, value)
    return evaluate_fn(node.body, body_env)


def letrec_form(node: Letrec, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    body_env = env
    for name, _ in node.bindings:
        body_env = body_env.extend(name, Void)
    for name, expr in node.bindings:
        body_env.modify(name, evaluate_fn(expr, body_env))
    return evaluate_fn(node.body, body_env)


def set_form(node: Set, env: Environment, evaluate_fn: EvaluatorFn) -> VoidType:
    value = evaluate_fn(node.value, env)
    env.modify(node.name, value)
    return Void
