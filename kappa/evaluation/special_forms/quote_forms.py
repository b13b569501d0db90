from kappa import Value
from kappa.config import DOT
from kappa.errors import KappaTypeError
from kappa.expr import Quote
from kappa.types.singletons import Null
from kappa.types.symbol import Symbol
from kappa.types.syntax import (
    BooleanLiteral,
    IntegerLiteral,
    ListNode,
    RationalLiteral,
    StringLiteral,
    Syntax,
    SymbolLiteral,
)
from kappa.types.values import Integer, Pair, String, boolean, make_rational


def _is_dot(node: Syntax) -> bool:
    return isinstance(node, SymbolLiteral) and node.name == DOT


def reify(datum: Syntax) -> Value:
    """Turn quoted syntax into data without evaluating anything.

    Lists become Null-terminated pair chains; `(a b . c)` puts `c` in the
    final cdr instead of Null.
    """
    match datum:
        case IntegerLiteral(value=n):
            return Integer(n)
        case RationalLiteral(numerator=n, denominator=d):
            return make_rational(n, d)
        case StringLiteral(value=s):
            return String(s)
        case SymbolLiteral(name=name):
            return Symbol(name)
        case BooleanLiteral(value=flag):
            return boolean(flag)
        case ListNode(items=items):
            tail: Value = Null
            if len(items) >= 2 and _is_dot(items[-2]):
                tail = reify(items[-1])
                items = items[:-2]
            result = tail
            for item in reversed(items):
                result = Pair(reify(item), result)
            return result
    raise KappaTypeError(f"Cannot quote {datum!r}")


def quote_form(node: Quote) -> Value:
    return reify(node.datum)
