from kappa.types.symbol import Symbol
from kappa.types.singletons import Null, Void, Terminate, NullType, VoidType, TerminateType
from kappa.types.values import (
    Integer,
    Rational,
    Boolean,
    String,
    Pair,
    Procedure,
    TRUE,
    FALSE,
    make_rational,
    boolean,
    is_truthy,
    is_number,
)
from kappa.types.environment import Environment

__all__ = [
    "Symbol",
    "Null",
    "Void",
    "Terminate",
    "NullType",
    "VoidType",
    "TerminateType",
    "Integer",
    "Rational",
    "Boolean",
    "String",
    "Pair",
    "Procedure",
    "TRUE",
    "FALSE",
    "make_rational",
    "boolean",
    "is_truthy",
    "is_number",
    "Environment",
]
