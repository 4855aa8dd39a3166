from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from frothy.errors import FrothyTypeMismatch
from frothy.types.values import DeferredRef, format_value

if TYPE_CHECKING:
    from frothy.evaluation.machine import Machine

logger = logging.getLogger(__name__)


def assign_form(machine: Machine, evaluate_fn) -> None:
    """name value =

    The value is the top of the stack and the name is beneath it. The name
    must still be unresolved; the value is resolved before it is bound.
    """
    name, value = machine.stack.pop_n(2)
    if not isinstance(name, DeferredRef):
        raise FrothyTypeMismatch(f"= expects a name to bind but got '{format_value(name)}'")
    value = machine.resolve(value)
    machine.env.set(name.name, value)
    logger.debug("bind %s = %r", name.name, value)
