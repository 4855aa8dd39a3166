"""
  Frothy Lexer

- Streaming, lazy tokenisation: `lex` is a generator, `TokenStream` re-runs it
  on every iteration so a stream can be walked more than once.
- Emits Token records carrying kind, source text, decoded value and position.

    - numbers     -> NUMBER, value is float
    - identifiers -> SYMBOL, value is the name
    - fn / call   -> RESERVED, value is the word
    - + - * / % == != < <= > >= -> OPERATOR, value is the operator text
    - =           -> ASSIGN
    - { and }     -> LBRACE / RBRACE
    - '#' starts a comment running to end of line
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from frothy.errors import FrothyLexError, FrothyUnbalancedBlock


NUMBER = "number"
SYMBOL = "symbol"
OPERATOR = "operator"
RESERVED = "reserved"
ASSIGN = "assign"
LBRACE = "lbrace"
RBRACE = "rbrace"

RESERVED_WORDS = frozenset({"fn", "call"})
OPERATORS = ("==", "!=", "<=", ">=", "+", "-", "*", "/", "%", "<", ">")

TOKEN_RE = re.compile(
    r"(?P<comment>#[^\n]*)"  # single-line comment
    r"|(?P<number>[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?(?![A-Za-z0-9_.]))"
    r"|(?P<symbol>[A-Za-z_][A-Za-z0-9_]*)"  # identifiers and reserved words
    r"|(?P<lbrace>\{)"
    r"|(?P<rbrace>\})"
    r"|(?P<operator>==|!=|<=|>=|[+\-*/%<>])"  # two-char operators first
    r"|(?P<assign>=)"
)

_BAD_RUN_RE = re.compile(r"[^\s{}#]+|\S")


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    value: float | str | None
    offset: int
    line: int
    col: int

    def __str__(self) -> str:
        return self.text


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Tokens in source order, skipping whitespace and comments."""
    pos = 0
    n = len(source)
    line = 1
    line_start = 0

    while pos < n:
        ch = source[pos]
        if ch.isspace():
            if ch == "\n":
                line += 1
                line_start = pos + 1
            pos += 1
            continue

        m = TOKEN_RE.match(source, pos)
        col = pos - line_start + 1
        if not m:
            bad = _BAD_RUN_RE.match(source, pos).group(0)
            raise FrothyLexError(bad, pos, line, col)

        kind = m.lastgroup
        text = m.group(0)
        pos = m.end()
        if kind == "comment":
            continue
        if kind == "number":
            yield Token(NUMBER, text, float(text), m.start(), line, col)
        elif kind == "symbol":
            tok_kind = RESERVED if text in RESERVED_WORDS else SYMBOL
            yield Token(tok_kind, text, text, m.start(), line, col)
        elif kind == "operator":
            yield Token(OPERATOR, text, text, m.start(), line, col)
        else:
            yield Token(kind, text, None, m.start(), line, col)


class TokenStream:
    """Restartable view over the tokens of a source string."""

    def __init__(self, source: str):
        self.source = source

    def __iter__(self) -> Iterator[Token]:
        return lex(self.source)

    def parse_all(self) -> list[Token]:
        """Lex the whole source and check that braces balance."""
        tokens = list(self)
        check_balance(tokens)
        return tokens


def check_balance(tokens: Iterable[Token]) -> None:
    """Raise FrothyUnbalancedBlock if '{' and '}' do not nest properly."""
    open_braces: list[Token] = []
    for tok in tokens:
        if tok.kind == LBRACE:
            open_braces.append(tok)
        elif tok.kind == RBRACE:
            if not open_braces:
                raise FrothyUnbalancedBlock("unexpected '}' without a matching '{'", tok)
            open_braces.pop()
    if open_braces:
        raise FrothyUnbalancedBlock("expected '}' to close block", open_braces[-1])


def read(source: str) -> list[Token]:
    """Lex `source` eagerly and validate block nesting before evaluation."""
    return TokenStream(source).parse_all()
