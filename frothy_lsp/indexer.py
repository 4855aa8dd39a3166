from __future__ import annotations

"""
Lightweight indexer for Frothy files without evaluating code.

We lex the buffer and walk the top level with a simulated operand stack so
that `name value =` statements can be recognised:
- definitions: `name { ... } fn =` (function), `name { ... } =` (block),
  anything else bound with `=` (var)
- lexing problems and unbalanced braces, for diagnostics

The scan is tolerant: an unrecognised character run is recorded and blanked
out, and lexing restarts, so a half-typed buffer still yields an index.
All positions here are 0-based (LSP convention).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from frothy.builtin.env_builtin import BUILTINS, CONSTANTS
from frothy.errors import FrothyLexError
from frothy.reader import lexer
from frothy.reader.lexer import Token


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function" | "block"
    line: int
    col: int


@dataclass
class Issue:
    message: str
    line: int
    col: int
    length: int = 1


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    lex_errors: List[Issue] = field(default_factory=list)
    brace_errors: List[Issue] = field(default_factory=list)
    tokens: List[Token] = field(default_factory=list)


def _lex_tolerant(text: str, idx: DocumentIndex) -> List[Token]:
    while True:
        try:
            return list(lexer.lex(text))
        except FrothyLexError as exc:
            idx.lex_errors.append(Issue(exc.message, exc.line - 1, exc.col - 1, len(exc.text)))
            # Blank out the bad run and lex again from the top
            end = exc.offset + len(exc.text)
            text = text[:exc.offset] + " " * len(exc.text) + text[end:]


def _check_braces(tokens: List[Token], idx: DocumentIndex) -> None:
    open_braces: List[Token] = []
    for tok in tokens:
        if tok.kind == lexer.LBRACE:
            open_braces.append(tok)
        elif tok.kind == lexer.RBRACE:
            if open_braces:
                open_braces.pop()
            else:
                idx.brace_errors.append(Issue("Unexpected '}' without a matching '{'", tok.line - 1, tok.col - 1))
    for tok in open_braces:
        idx.brace_errors.append(Issue("Unclosed '{'", tok.line - 1, tok.col - 1))


def _collect_definitions(tokens: List[Token], idx: DocumentIndex) -> None:
    # Each entry is (kind, token): kind in "name", "value", "block", "fn"
    stack: List[Tuple[str, Optional[Token]]] = []

    def pop() -> Tuple[str, Optional[Token]]:
        return stack.pop() if stack else ("value", None)

    i = 0
    while i < len(tokens):
        tok = tokens[i]
        i += 1
        if tok.kind == lexer.NUMBER:
            stack.append(("value", None))
        elif tok.kind == lexer.SYMBOL:
            stack.append(("name", tok))
        elif tok.kind == lexer.LBRACE:
            depth = 1
            while i < len(tokens) and depth:
                if tokens[i].kind == lexer.LBRACE:
                    depth += 1
                elif tokens[i].kind == lexer.RBRACE:
                    depth -= 1
                i += 1
            stack.append(("block", None))
        elif tok.kind == lexer.OPERATOR:
            pop()
            pop()
            stack.append(("value", None))
        elif tok.kind == lexer.RESERVED and tok.text == "fn":
            pop()
            stack.append(("fn", None))
        elif tok.kind == lexer.RESERVED and tok.text == "call":
            # assume the callee leaves one result
            pop()
            stack.append(("value", None))
        elif tok.kind == lexer.ASSIGN:
            value_kind, _ = pop()
            name_kind, name_tok = pop()
            if name_kind == "name" and name_tok is not None:
                kind = {"fn": "function", "block": "block"}.get(value_kind, "var")
                idx.symbols.setdefault(
                    name_tok.text,
                    SymbolDef(name=name_tok.text, kind=kind, line=name_tok.line - 1, col=name_tok.col - 1),
                )


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = _lex_tolerant(text, idx)
    idx.tokens = tokens
    _check_braces(tokens, idx)
    _collect_definitions(tokens, idx)
    return idx


def word_at(text: str, line: int, character: int) -> Optional[str]:
    """Return the whitespace/brace-delimited word under a 0-based position."""
    lines = text.splitlines()
    if line >= len(lines):
        return None
    src = lines[line]
    stops = " \t{}#"
    start = min(character, len(src))
    while start > 0 and src[start - 1] not in stops:
        start -= 1
    end = min(character, len(src))
    while end < len(src) and src[end] not in stops:
        end += 1
    word = src[start:end]
    return word or None


# Builtin signatures for quick hover/completion without eval
BUILTIN_SIGNATURES: Dict[str, str] = {name: b.signature for name, b in BUILTINS.items()}
BUILTIN_SIGNATURES.update({name: f"{name} -> {value!r}" for name, value in CONSTANTS.items()})

RESERVED_SIGNATURES: Dict[str, str] = {
    "fn": "{ body } fn -> function",
    "call": "target call -> runs a function or builtin",
    "=": "name value = -> binds name",
}
