import pytest

from frothy.builtin.env_builtin import register
from frothy.evaluation.evaluator import evaluate
from frothy.evaluation.machine import Machine
from frothy.interpreter import Interpreter
from frothy.reader.lexer import read

AREA_PROGRAM = """\
area { r r * PI * } fn =
r 5 =
print_arg area call =
print call
"""


@pytest.fixture
def machine():
    """Fresh machine with builtins and constants loaded."""
    m = Machine(max_depth=50)
    register(m)
    return m


@pytest.fixture
def run(machine):
    """Evaluate source on the shared machine and return the stack contents."""

    def _run(source: str):
        evaluate(read(source), machine)
        return machine.stack.snapshot()

    return _run


@pytest.fixture
def interp():
    return Interpreter(strict_stack=False, max_depth=50)


@pytest.fixture
def area_program():
    return AREA_PROGRAM
