"""Core evaluator for Frothy.

Walks a token sequence left to right against a Machine. Numbers and names
are pushed, blocks are captured unevaluated, operators run immediately, and
the reserved words `fn`, `call` and `=` are dispatched to special forms.
`call` re-enters `evaluate` on the function's tokens, so a callee shares
the caller's stack and bindings.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from frothy.errors import FrothyError, FrothyUnbalancedBlock, FrothyUnboundName
from frothy.evaluation.apply import apply_builtin
from frothy.evaluation.machine import Machine
from frothy.evaluation.special_forms import SPECIAL_FORMS
from frothy.reader import lexer
from frothy.reader.lexer import Token
from frothy.types.values import Block, DeferredRef


def evaluate(tokens: Iterable[Token], machine: Machine) -> None:
    """Evaluate every token in order; the first error aborts the walk."""
    stream = iter(tokens)
    for token in stream:
        try:
            step(token, stream, machine)
        except FrothyError as err:
            # Innermost token wins, so nested calls report the failing body token
            if err.token is None:
                err.token = token
            raise


def step(token: Token, stream: Iterator[Token], machine: Machine) -> None:
    """Evaluate a single token. `stream` is consumed further only for blocks."""
    match token.kind:
        case lexer.NUMBER:
            machine.stack.push(token.value)
        case lexer.SYMBOL:
            machine.stack.push(DeferredRef(token.value))
        case lexer.LBRACE:
            machine.stack.push(capture_block(token, stream))
        case lexer.RBRACE:
            raise FrothyUnbalancedBlock("unexpected '}' without a matching '{'", token)
        case lexer.OPERATOR:
            builtin = machine.builtins.get(token.value)
            if builtin is None:
                raise FrothyUnboundName(token.value, token)
            apply_builtin(builtin, machine)
        case lexer.RESERVED | lexer.ASSIGN:
            SPECIAL_FORMS[token.text](machine, evaluate)
        case _:
            raise FrothyError(f"unknown token kind {token.kind!r}", token)


def capture_block(opener: Token, stream: Iterator[Token]) -> Block:
    """Collect tokens up to the '}' matching `opener`, tracking nested blocks."""
    depth = 1
    body: list[Token] = []
    for tok in stream:
        if tok.kind == lexer.LBRACE:
            depth += 1
        elif tok.kind == lexer.RBRACE:
            depth -= 1
            if depth == 0:
                return Block(body)
        body.append(tok)
    raise FrothyUnbalancedBlock("expected '}' to close block", opener)
