"""Immutable configuration consulted by the analyzer and the numeric tower.

The primitive and reserved-word tables are built once and handed to the
analyzer explicitly (see `kappa.analysis.analyzer.parse`). The integer width
is read from the environment at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Primitive(Enum):
    # Arithmetic
    PLUS = "+"
    MINUS = "-"
    MUL = "*"
    DIV = "/"
    MODULO = "modulo"
    EXPT = "expt"

    # Comparison
    LT = "<"
    LE = "<="
    EQ = "="
    GE = ">="
    GT = ">"

    # Logic
    AND = "and"
    OR = "or"
    NOT = "not"

    # Pairs / lists
    CONS = "cons"
    CAR = "car"
    CDR = "cdr"
    SET_CAR = "set-car!"
    SET_CDR = "set-cdr!"
    LIST = "list"

    # Predicates
    IS_LIST = "list?"
    IS_EQ = "eq?"
    IS_BOOLEAN = "boolean?"
    IS_NUMBER = "number?"
    IS_NULL = "null?"
    IS_PAIR = "pair?"
    IS_PROCEDURE = "procedure?"
    IS_SYMBOL = "symbol?"
    IS_STRING = "string?"

    # Effects
    DISPLAY = "display"
    VOID = "void"
    EXIT = "exit"


class Keyword(Enum):
    BEGIN = "begin"
    QUOTE = "quote"
    IF = "if"
    COND = "cond"
    LAMBDA = "lambda"
    DEFINE = "define"
    LET = "let"
    LETREC = "letrec"
    SET = "set!"


# Reserved inside cond clauses only; always matches.
ELSE = "else"

# Marks an improper tail inside quoted list syntax.
DOT = "."


@dataclass(frozen=True)
class SyntaxTables:
    primitives: Mapping[str, Primitive] = field(default_factory=dict)
    reserved_words: Mapping[str, Keyword] = field(default_factory=dict)


def default_tables() -> SyntaxTables:
    return SyntaxTables(
        primitives=MappingProxyType({p.value: p for p in Primitive}),
        reserved_words=MappingProxyType({k.value: k for k in Keyword}),
    )


DEFAULT_TABLES = default_tables()


# -------------------------------
# Integer width
# -------------------------------
_DEFAULT_INT_BITS = 32


def int_bits_from_env(var: str = "KAPPA_INT_BITS", default: int = _DEFAULT_INT_BITS) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        bits = int(raw.strip())
    except ValueError:
        return default
    return bits if bits >= 2 else default


INT_BITS = int_bits_from_env()
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1
