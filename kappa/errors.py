from __future__ import annotations

from typing import Any


class KappaError(Exception):
    """ Base class for all Kappa errors"""
    pass


# -------------------------------
# Analysis-time errors
# -------------------------------
class KappaParseError(KappaError):
    """ Raised when a syntax tree cannot be turned into an expression"""

    def __init__(self, message: str, form: Any = None):
        super().__init__(message)
        self.form = form


class KappaSyntaxError(KappaParseError):
    """ Raised by the reader on malformed source text"""


class KappaArityError(KappaParseError):
    """ Raised when a primitive or special form has the wrong number of operands"""


class KappaShapeError(KappaParseError):
    """ Raised on a malformed binding list, parameter list or cond clause"""


class KappaUnknownForm(KappaParseError):
    """ Raised when a reserved word has no registered shape parser"""


# -------------------------------
# Run-time errors
# -------------------------------
class KappaRuntimeError(KappaError):
    """ Base class for errors raised while evaluating an expression"""


class KappaUnboundVariable(KappaRuntimeError):
    """ Raised when a variable is read or assigned before it is bound"""

    def __init__(self, name: str):
        super().__init__(f"Unbound variable: {name}")
        self.name = name


class KappaNotProcedure(KappaRuntimeError):
    """ Raised when a non-procedure value is applied"""


class KappaWrongArgCount(KappaRuntimeError):
    """ Raised when a procedure receives the wrong number of arguments"""


class KappaTypeError(KappaRuntimeError):
    """ Raised when operand variants do not match what an operator requires"""


class KappaDivisionByZero(KappaRuntimeError):
    """ Raised on division or modulo by zero"""


class KappaNegativeExponent(KappaRuntimeError):
    """ Raised when expt receives a negative exponent"""


class KappaZeroToZerothPower(KappaRuntimeError):
    """ Raised for (expt 0 0)"""


class KappaIntegerOverflow(KappaRuntimeError):
    """ Raised when an integer result leaves the fixed-width range"""
