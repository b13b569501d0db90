"""
  Kappa Reader: lexer and token stream

- Streaming, lazy parsing of source text into syntax tree nodes
  (kappa.types.syntax). The reader knows nothing about special forms or
  primitives; that is the analyzer's job.

    - integers        -> IntegerLiteral
    - n/d             -> RationalLiteral
    - #t / #f         -> BooleanLiteral
    - "..."           -> StringLiteral
    - anything else   -> SymbolLiteral (including a lone ".")
    - ( ... )         -> ListNode
    - 'x              -> ListNode((SymbolLiteral("quote"), x))
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from kappa.errors import KappaSyntaxError
from kappa.types.syntax import (
    BooleanLiteral,
    IntegerLiteral,
    ListNode,
    RationalLiteral,
    StringLiteral,
    Syntax,
    SymbolLiteral,
)


TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>')"  # '
    r"|(?P<lparen>[(\[])"  # ( or [
    r"|(?P<rparen>[)\]])"  # ) or ]
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<unterminated>"(?:\\.|[^\\"])*\Z)'  # string running off the end
    r'|(?P<symbol>[^\s()\[\]\'";]+)'  # fallback: atoms
    r")",
    re.DOTALL,
)

INTEGER_RE = re.compile(r"[+-]?\d+\Z")
RATIONAL_RE = re.compile(r"([+-]?\d+)/(\d+)\Z")

STRING_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m or m.end() == pos:
            if source[pos:].strip() == "":
                break
            raise KappaSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        kind = m.lastgroup
        if kind == "comment":
            continue
        if kind == "unterminated":
            raise KappaSyntaxError("Unterminated string literal")
        yield kind, m.group(kind)


def _unescape(body: str) -> str:
    out: list[str] = []
    chars = iter(body)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, "")
            out.append(STRING_ESCAPES.get(nxt, nxt))
        else:
            out.append(ch)
    return "".join(out)


def atom(token: str) -> Syntax:
    """Classify a bare atom token."""
    if token == "#t":
        return BooleanLiteral(True)
    if token == "#f":
        return BooleanLiteral(False)
    if INTEGER_RE.match(token):
        return IntegerLiteral(int(token))
    m = RATIONAL_RE.match(token)
    if m:
        denominator = int(m.group(2))
        if denominator == 0:
            raise KappaSyntaxError(f"Zero denominator in literal {token}")
        return RationalLiteral(int(m.group(1)), denominator)
    return SymbolLiteral(token)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[Syntax]:
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            self.advance()
            return atom(tok_val)

        if tok_type == "string":
            self.advance()
            return StringLiteral(_unescape(tok_val[1:-1]))

        if tok_type == "quote":
            self.advance()
            quoted = self.parse_expr()
            if quoted is None:
                raise KappaSyntaxError("Expected an expression after '")
            return ListNode((SymbolLiteral("quote"), quoted))

        if tok_type == "lparen":
            self.advance()
            items: list[Syntax] = []
            while True:
                nxt, _ = self.peek()
                if nxt is None:
                    raise KappaSyntaxError("Unmatched '('")
                if nxt == "rparen":
                    self.advance()
                    break
                items.append(self.parse_expr())
            return ListNode(tuple(items))

        if tok_type == "rparen":
            raise KappaSyntaxError("Unexpected ')'")

        raise KappaSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[Syntax]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read(source: str) -> list[Syntax]:
    """Read every top-level form in `source`."""
    return list(TokenStream(lex(source)).parse_all())
