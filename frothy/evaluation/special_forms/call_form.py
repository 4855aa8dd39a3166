from __future__ import annotations

from typing import TYPE_CHECKING

from frothy.evaluation.apply import apply
from frothy.types.values import DeferredRef

if TYPE_CHECKING:
    from frothy.evaluation.machine import Machine


def call_form(machine: Machine, evaluate_fn) -> None:
    """target call

    A name is resolved (bindings, then builtins) and the result is called.
    """
    target = machine.stack.pop()
    if isinstance(target, DeferredRef):
        target = machine.lookup(target.name)
    apply(target, machine, evaluate_fn)
