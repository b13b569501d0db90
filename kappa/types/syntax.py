"""Syntax tree nodes handed from the reader to the analyzer.

These are plain data: the reader builds them, the analyzer pattern-matches on
them, and `quote` keeps them verbatim until evaluation reifies them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class IntegerLiteral:
    value: int


@dataclass(frozen=True)
class RationalLiteral:
    numerator: int
    denominator: int


@dataclass(frozen=True)
class SymbolLiteral:
    name: str


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool


@dataclass(frozen=True)
class ListNode:
    items: tuple[Syntax, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]


Syntax = Union[IntegerLiteral, RationalLiteral, SymbolLiteral, StringLiteral, BooleanLiteral, ListNode]


def unparse(node: Syntax) -> str:
    """Source-like text for a syntax node, used in error messages."""
    match node:
        case IntegerLiteral(value=n):
            return str(n)
        case RationalLiteral(numerator=n, denominator=d):
            return f"{n}/{d}"
        case SymbolLiteral(name=name):
            return name
        case StringLiteral(value=s):
            return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'
        case BooleanLiteral(value=flag):
            return "#t" if flag else "#f"
        case ListNode(items=items):
            return "(" + " ".join(unparse(item) for item in items) + ")"
    return repr(node)
