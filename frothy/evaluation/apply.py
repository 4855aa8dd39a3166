"""Invocation of functions and builtins."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable

from frothy import FrothyValue
from frothy.errors import FrothyNotCallable, FrothyRecursionError
from frothy.types.values import Builtin, Function, format_value

if TYPE_CHECKING:
    from frothy.evaluation.machine import Machine
    from frothy.reader.lexer import Token

logger = logging.getLogger(__name__)

EvaluatorFn = Callable[[Iterable["Token"], "Machine"], None]


def apply_builtin(builtin: Builtin, machine: Machine) -> None:
    """Pop the builtin's operands, run it and push its result (if any)."""
    args: list[FrothyValue] = machine.stack.pop_n(builtin.arity)
    if not builtin.raw:
        args = [machine.resolve(a) for a in args]
    result = builtin(machine, args)
    if result is not None:
        machine.stack.push(result)


def apply(callee: FrothyValue, machine: Machine, evaluate_fn: EvaluatorFn) -> None:
    """Call `callee` against the shared stack and environment."""
    if isinstance(callee, Function):
        if machine.depth >= machine.max_depth:
            raise FrothyRecursionError(f"maximum call depth of {machine.max_depth} exceeded")
        machine.depth += 1
        logger.debug("call %r at depth %d", callee, machine.depth)
        try:
            evaluate_fn(callee.tokens, machine)
        except RecursionError:
            raise FrothyRecursionError("host recursion limit exceeded") from None
        finally:
            machine.depth -= 1
    elif isinstance(callee, Builtin):
        apply_builtin(callee, machine)
    else:
        raise FrothyNotCallable(f"value '{format_value(callee)}' is not callable")
