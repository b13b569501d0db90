"""Text rendering of runtime values.

`render` produces the written form (strings quoted); `display_text` is what
the `display` primitive writes (a top-level string goes out raw). Shared or
cyclic pair structure is rendered with `...` at the point a cell would be
revisited, so rendering always terminates.
"""

from __future__ import annotations

from kappa import Value
from kappa.types.singletons import NullType, TerminateType, VoidType
from kappa.types.symbol import Symbol
from kappa.types.values import Boolean, Integer, Pair, Procedure, Rational, String

_ESCAPES = {'"': '\\"', "\\": "\\\\", "\n": "\\n", "\t": "\\t"}


def _quote_string(s: str) -> str:
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in s) + '"'


def _render_pair(pair: Pair, active: set[int]) -> str:
    if id(pair) in active:
        return "..."
    parts: list[str] = []
    visited: list[int] = []
    tail = ""
    node: Value = pair
    while isinstance(node, Pair):
        if id(node) in active:
            tail = " . ..."
            break
        active.add(id(node))
        visited.append(id(node))
        parts.append(_render(node.car, active))
        node = node.cdr
    else:
        if not isinstance(node, NullType):
            tail = " . " + _render(node, active)
    for cell in visited:
        active.discard(cell)
    return "(" + " ".join(parts) + tail + ")"


def _render(value: Value, active: set[int]) -> str:
    match value:
        case Integer(value=n):
            return str(n)
        case Rational(numerator=n, denominator=d):
            return f"{n}/{d}"
        case Boolean(value=flag):
            return "#t" if flag else "#f"
        case String(value=s):
            return _quote_string(s)
        case Symbol():
            return value.name
        case NullType():
            return "()"
        case Pair():
            return _render_pair(value, active)
        case Procedure():
            return "#<procedure>"
        case VoidType():
            return "#<void>"
        case TerminateType():
            return "#<terminate>"
    return repr(value)


def render(value: Value) -> str:
    return _render(value, set())


def display_text(value: Value) -> str:
    if isinstance(value, String):
        return value.value
    return render(value)
