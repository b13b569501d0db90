from __future__ import annotations
import sys


class Symbol:
    """A quoted name. Two symbols are eq? exactly when their names match."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        # Interned, so equal names share one str object
        self.name: str = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.name is other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"

    def __str__(self) -> str:
        return self.name
