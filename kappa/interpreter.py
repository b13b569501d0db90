from __future__ import annotations

import logging
from typing import Optional, TextIO

from kappa import Value
from kappa.analysis import parse
from kappa.config import DEFAULT_TABLES, SyntaxTables
from kappa.evaluation import execute
from kappa.reader.parser import TokenStream, lex
from kappa.runtime_context import set_output
from kappa.types.environment import Environment
from kappa.types.singletons import Terminate, Void
from kappa.types.syntax import unparse

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Feeds source text through reader -> analyzer -> evaluator.
    Keeps the top-level environment across calls, so definitions persist.
    """

    def __init__(self, output: Optional[TextIO] = None, tables: Optional[SyntaxTables] = None):
        self.env: Environment = Environment()
        self.tables: SyntaxTables = tables if tables is not None else DEFAULT_TABLES
        self.output = output
        self.terminated = False

    def eval(self, code: str) -> Value:
        """Evaluate every form in `code` and return the last value.

        Stops at (exit) and returns the terminate signal. Errors propagate;
        forms before the failing one keep their effects.
        """
        previous = None
        if self.output is not None:
            previous = set_output(self.output)
        try:
            result: Value = Void
            stream = TokenStream(lex(code))
            for node in stream.parse_all():
                expr = parse(node, self.env, self.tables)
                logger.debug("analysed %s -> %r", unparse(node), expr)
                result, self.env = execute(expr, self.env)
                if result is Terminate:
                    logger.debug("session terminated by %s", unparse(node))
                    self.terminated = True
                    break
            return result
        finally:
            if self.output is not None:
                set_output(previous)
