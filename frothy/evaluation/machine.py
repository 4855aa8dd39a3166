"""Mutable state of one Frothy execution: operand stack, environment and builtins."""

from __future__ import annotations

import sys
from typing import TextIO

from frothy import FrothyValue
from frothy.config import get_max_call_depth
from frothy.errors import FrothyUnboundName
from frothy.types.environment import Environment
from frothy.types.stack import Stack
from frothy.types.values import Builtin, DeferredRef


class Machine:
    """Owns the Stack and Environment for the duration of a program run."""

    def __init__(
        self,
        env: Environment | None = None,
        builtins: dict[str, Builtin] | None = None,
        out: TextIO | None = None,
        max_depth: int | None = None,
    ):
        self.stack = Stack()
        self.env: Environment = env if env is not None else Environment()
        self.builtins: dict[str, Builtin] = builtins if builtins is not None else {}
        self._out = out
        self.max_depth: int = max_depth if max_depth is not None else get_max_call_depth()
        self.depth = 0

    @property
    def out(self) -> TextIO:
        # Resolved per write so redirected sys.stdout is honoured
        return self._out if self._out is not None else sys.stdout

    def lookup(self, name: str) -> FrothyValue:
        """Resolve `name`: environment bindings first, then builtins."""
        if name in self.env:
            return self.env.get(name)
        builtin = self.builtins.get(name)
        if builtin is not None:
            return builtin
        raise FrothyUnboundName(name)

    def resolve(self, value: FrothyValue) -> FrothyValue:
        if isinstance(value, DeferredRef):
            return self.lookup(value.name)
        return value
