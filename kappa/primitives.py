"""Primitive operators: arity policy and a single dispatch table per arity class.

The analyzer consults the arity policy to pick an Expr node (Unary, Binary,
Variadic, AndVar/OrVar, or a nullary node) and to reject bad operand counts
up front. The evaluator then calls `apply_unary`, `apply_binary` or
`apply_variadic` with already-evaluated operands.

A primitive that is referenced as a value (e.g. passed to a procedure) is
wrapped by `primitive_procedure` into an ordinary Procedure.
"""

from __future__ import annotations

from typing import Callable

from kappa import Value
from kappa import numeric
from kappa.config import Primitive
from kappa.errors import KappaTypeError, KappaWrongArgCount
from kappa.expr import ApplyPrimitive, Binary, Exit, MakeVoid, Unary, Var
from kappa.runtime_context import get_output
from kappa.types.environment import Environment
from kappa.types.singletons import Null, Terminate, Void, VoidType
from kappa.types.symbol import Symbol
from kappa.types.values import (
    Boolean,
    Integer,
    Pair,
    Procedure,
    String,
    boolean,
    is_number,
    is_truthy,
    TRUE,
    FALSE,
)

# -------------------------------
# Arity policy
# -------------------------------
# Two operands -> Binary node; any other count -> Variadic node.
FOLD_OPS = frozenset({Primitive.PLUS, Primitive.MUL})

# Two operands -> Binary node; three or more -> Variadic; fewer is an error.
CHAIN_OPS = frozenset({
    Primitive.MINUS,
    Primitive.DIV,
    Primitive.LT,
    Primitive.LE,
    Primitive.EQ,
    Primitive.GE,
    Primitive.GT,
})

# Short-circuiting, any operand count.
LOGIC_OPS = frozenset({Primitive.AND, Primitive.OR})

# Any operand count, always a Variadic node.
LIST_OPS = frozenset({Primitive.LIST})

FIXED_ARITY: dict[Primitive, int] = {
    Primitive.MODULO: 2,
    Primitive.EXPT: 2,
    Primitive.CONS: 2,
    Primitive.SET_CAR: 2,
    Primitive.SET_CDR: 2,
    Primitive.IS_EQ: 2,
    Primitive.CAR: 1,
    Primitive.CDR: 1,
    Primitive.NOT: 1,
    Primitive.DISPLAY: 1,
    Primitive.IS_LIST: 1,
    Primitive.IS_BOOLEAN: 1,
    Primitive.IS_NUMBER: 1,
    Primitive.IS_NULL: 1,
    Primitive.IS_PAIR: 1,
    Primitive.IS_PROCEDURE: 1,
    Primitive.IS_SYMBOL: 1,
    Primitive.IS_STRING: 1,
    Primitive.VOID: 0,
    Primitive.EXIT: 0,
}


def minimum_operands(op: Primitive) -> int:
    if op in CHAIN_OPS:
        return 1 if op in (Primitive.MINUS, Primitive.DIV) else 2
    return 0


# -------------------------------
# Structural helpers
# -------------------------------
def _pair(value: Value, op: str) -> Pair:
    if not isinstance(value, Pair):
        raise KappaTypeError(f"{op} expects a pair, got {value!r}")
    return value


def car(value: Value) -> Value:
    return _pair(value, "car").car


def cdr(value: Value) -> Value:
    return _pair(value, "cdr").cdr


def set_car(target: Value, value: Value) -> VoidType:
    _pair(target, "set-car!").car = value
    return Void


def set_cdr(target: Value, value: Value) -> VoidType:
    _pair(target, "set-cdr!").cdr = value
    return Void


def make_list(values: list[Value]) -> Value:
    result: Value = Null
    for value in reversed(values):
        result = Pair(value, result)
    return result


def list_to_python(value: Value) -> list[Value]:
    """Elements of a proper list; anything else is a type error."""
    items: list[Value] = []
    seen: set[int] = set()
    while isinstance(value, Pair):
        if id(value) in seen:
            raise KappaTypeError("Expected a proper list, got a cyclic structure")
        seen.add(id(value))
        items.append(value.car)
        value = value.cdr
    if value is not Null:
        raise KappaTypeError(f"Expected a proper list, got an improper tail {value!r}")
    return items


def is_list(value: Value) -> bool:
    # Floyd's cycle check: a cyclic cdr chain is not a list.
    slow = fast = value
    while True:
        if fast is Null:
            return True
        if not isinstance(fast, Pair):
            return False
        fast = fast.cdr
        if fast is Null:
            return True
        if not isinstance(fast, Pair):
            return False
        fast = fast.cdr
        slow = slow.cdr
        if fast is slow:
            return False


def is_eq(a: Value, b: Value) -> bool:
    if isinstance(a, Integer) and isinstance(b, Integer):
        return a.value == b.value
    if isinstance(a, Boolean) and isinstance(b, Boolean):
        return a.value == b.value
    if isinstance(a, Symbol) and isinstance(b, Symbol):
        return a.name == b.name
    if (a is Null and b is Null) or (a is Void and b is Void):
        return True
    return a is b


def display(value: Value) -> VoidType:
    from kappa.printer import display_text
    get_output().write(display_text(value))
    return Void


def _not(value: Value) -> Boolean:
    return boolean(not is_truthy(value))


# -------------------------------
# Dispatch tables
# -------------------------------
UNARY_OPS: dict[Primitive, Callable[[Value], Value]] = {
    Primitive.NOT: _not,
    Primitive.CAR: car,
    Primitive.CDR: cdr,
    Primitive.DISPLAY: display,
    Primitive.IS_LIST: lambda v: boolean(is_list(v)),
    Primitive.IS_BOOLEAN: lambda v: boolean(isinstance(v, Boolean)),
    Primitive.IS_NUMBER: lambda v: boolean(is_number(v)),
    Primitive.IS_NULL: lambda v: boolean(v is Null),
    Primitive.IS_PAIR: lambda v: boolean(isinstance(v, Pair)),
    Primitive.IS_PROCEDURE: lambda v: boolean(isinstance(v, Procedure)),
    Primitive.IS_SYMBOL: lambda v: boolean(isinstance(v, Symbol)),
    Primitive.IS_STRING: lambda v: boolean(isinstance(v, String)),
}

BINARY_OPS: dict[Primitive, Callable[[Value, Value], Value]] = {
    Primitive.PLUS: numeric.add,
    Primitive.MINUS: numeric.sub,
    Primitive.MUL: numeric.mul,
    Primitive.DIV: numeric.div,
    Primitive.MODULO: numeric.modulo,
    Primitive.EXPT: numeric.expt,
    Primitive.LT: lambda a, b: boolean(numeric.less(a, b)),
    Primitive.LE: lambda a, b: boolean(numeric.less_equal(a, b)),
    Primitive.EQ: lambda a, b: boolean(numeric.num_equal(a, b)),
    Primitive.GE: lambda a, b: boolean(numeric.greater_equal(a, b)),
    Primitive.GT: lambda a, b: boolean(numeric.greater(a, b)),
    Primitive.CONS: Pair,
    Primitive.SET_CAR: set_car,
    Primitive.SET_CDR: set_cdr,
    Primitive.IS_EQ: lambda a, b: boolean(is_eq(a, b)),
}

_COMPARISONS: dict[Primitive, Callable[[Value, Value], bool]] = {
    Primitive.LT: numeric.less,
    Primitive.LE: numeric.less_equal,
    Primitive.EQ: numeric.num_equal,
    Primitive.GE: numeric.greater_equal,
    Primitive.GT: numeric.greater,
}


def _fold(step: Callable[[Value, Value], Value], initial: Value, values: list[Value]) -> Value:
    result = initial
    for value in values:
        result = step(result, value)
    return result


def _and_values(values: list[Value]) -> Value:
    result: Value = TRUE
    for value in values:
        if not is_truthy(value):
            return FALSE
        result = value
    return result


def _or_values(values: list[Value]) -> Value:
    for value in values:
        if is_truthy(value):
            return value
    return FALSE


def apply_unary(op: Primitive, operand: Value) -> Value:
    return UNARY_OPS[op](operand)


def apply_binary(op: Primitive, left: Value, right: Value) -> Value:
    return BINARY_OPS[op](left, right)


def apply_nullary(op: Primitive) -> Value:
    if op is Primitive.EXIT:
        return Terminate
    return Void


def apply_variadic(op: Primitive, values: list[Value]) -> Value:
    """Apply an n-ary operator to already-evaluated operands."""
    if len(values) < minimum_operands(op):
        raise KappaWrongArgCount(
            f"{op.value} expects at least {minimum_operands(op)} arguments, got {len(values)}"
        )
    if op is Primitive.PLUS:
        return _fold(numeric.add, Integer(0), values)
    if op is Primitive.MUL:
        return _fold(numeric.mul, Integer(1), values)
    if op is Primitive.MINUS:
        if len(values) == 1:
            return numeric.negate(values[0])
        return _fold(numeric.sub, values[0], values[1:])
    if op is Primitive.DIV:
        if len(values) == 1:
            return numeric.reciprocal(values[0])
        return _fold(numeric.div, values[0], values[1:])
    if op in _COMPARISONS:
        return boolean(numeric.chain(_COMPARISONS[op], values))
    if op is Primitive.LIST:
        return make_list(values)
    if op is Primitive.AND:
        return _and_values(values)
    if op is Primitive.OR:
        return _or_values(values)
    raise KappaTypeError(f"{op.value} is not an n-ary operator")


# -------------------------------
# Primitives as values
# -------------------------------
_ARGS = "args"
_FIXED_PARAMS = {0: (), 1: ("x",), 2: ("x", "y")}
_PRIMITIVE_PROCEDURES: dict[Primitive, Procedure] = {}


def _build_procedure(op: Primitive) -> Procedure:
    # Closes over an empty frame: the body only mentions its own parameters.
    env = Environment()
    arity = FIXED_ARITY.get(op)
    if arity is None:
        return Procedure((_ARGS,), ApplyPrimitive(op, Var(_ARGS)), env, variadic=True, name=op.value)
    params = _FIXED_PARAMS[arity]
    if arity == 0:
        body = Exit() if op is Primitive.EXIT else MakeVoid()
    elif arity == 1:
        body = Unary(op, Var(params[0]))
    else:
        body = Binary(op, Var(params[0]), Var(params[1]))
    return Procedure(params, body, env, name=op.value)


def primitive_procedure(op: Primitive) -> Procedure:
    proc = _PRIMITIVE_PROCEDURES.get(op)
    if proc is None:
        proc = _PRIMITIVE_PROCEDURES[op] = _build_procedure(op)
    return proc
