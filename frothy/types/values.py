"""Runtime value variants for Frothy.

Numbers are plain Python floats. Everything else that can sit on the operand
stack or in the environment is one of the small slot classes below.
"""

from __future__ import annotations

import math
import sys
from typing import TYPE_CHECKING, Callable, Sequence

from frothy import FrothyValue

if TYPE_CHECKING:
    from frothy.reader.lexer import Token


class DeferredRef:
    """A pushed name whose binding has not been read yet."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash
        self.name = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DeferredRef) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self):
        return f"DeferredRef({self.name!r})"

    def __str__(self):
        return self.name


class Block:
    """An unevaluated token sequence captured between '{' and '}'."""

    __slots__ = ("tokens",)

    def __init__(self, tokens: Sequence[Token]):
        self.tokens: tuple[Token, ...] = tuple(tokens)

    @property
    def source(self) -> str:
        return " ".join(t.text for t in self.tokens)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Block) and self.source == other.source

    def __hash__(self) -> int:
        return hash(self.source)

    def __str__(self) -> str:
        return f"{{ {self.source} }}" if self.tokens else "{ }"

    def __repr__(self) -> str:
        return f"Block({str(self)!r})"


class Function:
    """A Block marked callable by `fn`."""

    __slots__ = ("block",)

    def __init__(self, block: Block):
        self.block = block

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self.block.tokens

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Function) and self.block == other.block

    def __hash__(self) -> int:
        return hash(("fn", self.block))

    def __str__(self) -> str:
        return "<fn>"

    def __repr__(self) -> str:
        return f"Function({str(self.block)!r})"


BuiltinFn = Callable[..., FrothyValue]


class Builtin:
    """A native primitive.

    `arity` operands are popped before `fn(machine, args)` runs; they are
    resolved first unless `raw` is set. A non-None return value is pushed
    back onto the stack.
    """

    __slots__ = ("name", "fn", "arity", "signature", "raw")

    def __init__(
        self, name: str, fn: BuiltinFn, arity: int = 0, signature: str = "", raw: bool = False
    ):
        self.name = name
        self.fn = fn
        self.arity = arity
        self.signature = signature or name
        self.raw = raw

    def __call__(self, machine, args: list[FrothyValue]) -> FrothyValue:
        return self.fn(machine, args)

    def __str__(self) -> str:
        return f"<builtin-fn:{self.name}>"

    def __repr__(self) -> str:
        return f"Builtin({self.name!r})"


def is_number(value: FrothyValue) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_number(n: float) -> str:
    """Integral values print without a fraction; others use the shortest round-trip form."""
    if math.isfinite(n) and float(n).is_integer():
        return str(int(n))
    return repr(float(n))


def format_value(value: FrothyValue) -> str:
    if is_number(value):
        return format_number(value)
    return str(value)
