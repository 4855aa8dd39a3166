from __future__ import annotations

from typing import TYPE_CHECKING

from frothy.errors import FrothyTypeMismatch
from frothy.types.values import Block, Function, format_value

if TYPE_CHECKING:
    from frothy.evaluation.machine import Machine


def fn_form(machine: Machine, evaluate_fn) -> None:
    """{ body } fn  ->  Function(body)

    A name on top of the stack is resolved first, so a block bound with `=`
    can be turned into a function later.
    """
    value = machine.resolve(machine.stack.pop())
    if not isinstance(value, Block):
        raise FrothyTypeMismatch(f"fn expects a block but got '{format_value(value)}'")
    machine.stack.push(Function(value))
