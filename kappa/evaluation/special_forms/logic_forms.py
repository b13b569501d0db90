from kappa import Value
from kappa.evaluation.apply import EvaluatorFn
from kappa.expr import AndVar, Cond, Else, If, OrVar
from kappa.types.environment import Environment
from kappa.types.singletons import Void
from kappa.types.values import FALSE, TRUE, is_truthy


def if_form(node: If, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    if is_truthy(evaluate_fn(node.test, env)):
        return evaluate_fn(node.consequent, env)
    return evaluate_fn(node.alternate, env)


def cond_form(node: Cond, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """First clause whose test is truthy wins; its body's last value is the result.

    A matching clause with no body, or no matching clause at all, gives Void.
    """
    for test, *body in node.clauses:
        if isinstance(test, Else) or is_truthy(evaluate_fn(test, env)):
            result: Value = Void
            for expr in body:
                result = evaluate_fn(expr, env)
            return result
    return Void


def and_form(node: AndVar, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """Short-circuiting logical AND.

    (and a b c ...) evaluates operands left to right and returns #f at the
    first false one, without evaluating the rest. If every operand is truthy
    the last value is returned. With zero operands, returns #t.
    """
    result: Value = TRUE
    for expr in node.operands:
        result = evaluate_fn(expr, env)
        if not is_truthy(result):
            return FALSE
    return result


def or_form(node: OrVar, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """Short-circuiting logical OR.

    (or a b c ...) returns the first truthy operand value, evaluating nothing
    after it. If none is truthy (or there are no operands), returns #f.
    """
    for expr in node.operands:
        value = evaluate_fn(expr, env)
        if is_truthy(value):
            return value
    return FALSE
