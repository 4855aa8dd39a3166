"""Built-in functions for the Frothy runtime.

This module defines arithmetic, comparison, output and stack words, the
pre-bound constants, and the registration helper used by the interpreter.
Operators (+, ==, ...) are looked up here directly by the evaluator; named
builtins (print, dup, ...) are reached through `call` when no environment
binding shadows them.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

from frothy import FrothyValue
from frothy.errors import FrothyArithmeticError, FrothyTypeMismatch
from frothy.types.values import Builtin, format_value, is_number

if TYPE_CHECKING:
    from frothy.evaluation.machine import Machine

PRINT_ARG = "print_arg"


def _numbers(name: str, args: list[FrothyValue]) -> list[float]:
    for a in args:
        if not is_number(a):
            raise FrothyTypeMismatch(f"all arguments to {name} must be numbers, got '{format_value(a)}'")
    return args


def _truth(flag: bool) -> float:
    return 1.0 if flag else 0.0


# -------------------------------
# Arithmetic
# -------------------------------
def add(machine: Machine, args: list[FrothyValue]) -> float:
    a, b = _numbers("+", args)
    return float(a + b)


def sub(machine: Machine, args: list[FrothyValue]) -> float:
    a, b = _numbers("-", args)
    return float(a - b)


def mul(machine: Machine, args: list[FrothyValue]) -> float:
    a, b = _numbers("*", args)
    return float(a * b)


def div(machine: Machine, args: list[FrothyValue]) -> float:
    """a b / => a / b; checks zero division."""
    a, b = _numbers("/", args)
    if b == 0:
        raise FrothyArithmeticError("division by zero")
    return float(a / b)


def mod(machine: Machine, args: list[FrothyValue]) -> float:
    """a b % => a mod b, with the sign of b."""
    a, b = _numbers("%", args)
    if b == 0:
        raise FrothyArithmeticError("modulo by zero")
    return float(a % b)


# -------------------------------
# Comparison (1 for true, 0 for false)
# -------------------------------
def eq(machine: Machine, args: list[FrothyValue]) -> float:
    a, b = _numbers("==", args)
    return _truth(a == b)


def ne(machine: Machine, args: list[FrothyValue]) -> float:
    a, b = _numbers("!=", args)
    return _truth(a != b)


def lt(machine: Machine, args: list[FrothyValue]) -> float:
    a, b = _numbers("<", args)
    return _truth(a < b)


def lte(machine: Machine, args: list[FrothyValue]) -> float:
    a, b = _numbers("<=", args)
    return _truth(a <= b)


def gt(machine: Machine, args: list[FrothyValue]) -> float:
    a, b = _numbers(">", args)
    return _truth(a > b)


def gte(machine: Machine, args: list[FrothyValue]) -> float:
    a, b = _numbers(">=", args)
    return _truth(a >= b)


# -------------------------------
# Output
# -------------------------------
def print_builtin(machine: Machine, args: list[FrothyValue]) -> None:
    """Write the value bound to print_arg followed by a newline."""
    value = machine.env.get(PRINT_ARG)
    print(format_value(value), file=machine.out)


def show_stack(machine: Machine, args: list[FrothyValue]) -> None:
    """Print `<depth> v1 v2 ...`, bottom first; the stack is left untouched."""
    items = " ".join(format_value(v) for v in machine.stack)
    print(f"<{len(machine.stack)}> {items}".rstrip(), file=machine.out)


# -------------------------------
# Stack words
# -------------------------------
def dup(machine: Machine, args: list[FrothyValue]) -> None:
    (a,) = args
    machine.stack.push(a)
    machine.stack.push(a)


def drop(machine: Machine, args: list[FrothyValue]) -> None:
    return None


def swap(machine: Machine, args: list[FrothyValue]) -> None:
    a, b = args
    machine.stack.push(b)
    machine.stack.push(a)


def over(machine: Machine, args: list[FrothyValue]) -> None:
    a, b = args
    machine.stack.push(a)
    machine.stack.push(b)
    machine.stack.push(a)


BUILTINS: dict[str, Builtin] = {
    b.name: b
    for b in (
        Builtin("+", add, 2, "a b + -> a+b"),
        Builtin("-", sub, 2, "a b - -> a-b"),
        Builtin("*", mul, 2, "a b * -> a*b"),
        Builtin("/", div, 2, "a b / -> a/b"),
        Builtin("%", mod, 2, "a b % -> a mod b"),
        Builtin("==", eq, 2, "a b == -> 1 if a = b else 0"),
        Builtin("!=", ne, 2, "a b != -> 1 if a != b else 0"),
        Builtin("<", lt, 2, "a b < -> 1 if a < b else 0"),
        Builtin("<=", lte, 2, "a b <= -> 1 if a <= b else 0"),
        Builtin(">", gt, 2, "a b > -> 1 if a > b else 0"),
        Builtin(">=", gte, 2, "a b >= -> 1 if a >= b else 0"),
        Builtin("print", print_builtin, 0, "print call -> writes print_arg"),
        Builtin("show_stack", show_stack, 0, "show_stack call -> writes the stack"),
        Builtin("dup", dup, 1, "a dup call -> a a", raw=True),
        Builtin("drop", drop, 1, "a drop call -> ", raw=True),
        Builtin("swap", swap, 2, "a b swap call -> b a", raw=True),
        Builtin("over", over, 2, "a b over call -> a b a", raw=True),
    )
}

CONSTANTS: dict[str, float] = {
    "PI": math.pi,
    "E": math.e,
}


def register(machine: Machine) -> None:
    """Install all builtins and pre-bind the constants on a fresh machine."""
    machine.builtins.update(BUILTINS)
    machine.env.update(CONSTANTS)
