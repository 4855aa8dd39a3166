from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from frothy import FrothyValue
from frothy.builtin.env_builtin import register
from frothy.config import get_strict_stack
from frothy.errors import FrothyStackNotEmpty
from frothy.evaluation.evaluator import evaluate
from frothy.evaluation.machine import Machine
from frothy.reader.lexer import read
from frothy.types.environment import Environment
from frothy.types.stack import Stack
from frothy.types.values import format_value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates Frothy source against one Machine.
    Bindings and the operand stack persist across `eval` calls; `run` treats
    its source as a whole program and applies the end-of-program stack policy.
    """

    def __init__(
        self,
        *,
        out: TextIO | None = None,
        max_depth: int | None = None,
        strict_stack: bool | None = None,
        prelude: str | None = None,
    ):
        self._out = out
        self._max_depth = max_depth
        self.strict_stack: bool = get_strict_stack() if strict_stack is None else strict_stack
        self.machine = self._new_machine()
        if prelude:
            self.eval(prelude)

    def _new_machine(self) -> Machine:
        machine = Machine(out=self._out, max_depth=self._max_depth)
        register(machine)
        return machine

    @property
    def env(self) -> Environment:
        return self.machine.env

    @property
    def stack(self) -> Stack:
        return self.machine.stack

    def eval(self, code: str) -> list[FrothyValue]:
        """Evaluate `code` and return a snapshot of the stack, bottom first.

        Braces are checked for balance before anything is evaluated.
        """
        tokens = read(code)
        evaluate(tokens, self.machine)
        return self.machine.stack.snapshot()

    def run(self, code: str) -> None:
        """Evaluate `code` as a complete program.

        Leftover stack values are discarded, or raise FrothyStackNotEmpty when
        `strict_stack` is set.
        """
        logger.debug("running program (%d chars)", len(code))
        leftovers = self.eval(code)
        self.machine.stack.clear()
        if leftovers:
            shown = " ".join(format_value(v) for v in leftovers)
            if self.strict_stack:
                raise FrothyStackNotEmpty(f"{len(leftovers)} value(s) left on the stack: {shown}")
            logger.info("discarding %d value(s) left on the stack: %s", len(leftovers), shown)

    def run_file(self, path: str | Path) -> None:
        source = Path(path).read_text(encoding="utf-8")
        logger.info("loaded %s", path)
        self.run(source)

    def reset(self) -> None:
        """Drop all bindings and stack contents."""
        self.machine = self._new_machine()
