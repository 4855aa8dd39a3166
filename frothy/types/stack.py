from __future__ import annotations

from typing import Iterator

from frothy import FrothyValue
from frothy.errors import FrothyStackUnderflow


class Stack:
    """Last-in-first-out operand stack. Index 0 is the bottom."""

    __slots__ = ("items",)

    def __init__(self, items: list[FrothyValue] | None = None):
        self.items: list[FrothyValue] = list(items) if items else []

    def push(self, value: FrothyValue) -> None:
        self.items.append(value)

    def pop(self) -> FrothyValue:
        if not self.items:
            raise FrothyStackUnderflow(1, 0)
        return self.items.pop()

    def pop_n(self, n: int) -> list[FrothyValue]:
        """Pop `n` values and return them in push order (deepest first)."""
        have = len(self.items)
        if have < n:
            raise FrothyStackUnderflow(n, have)
        if n == 0:
            return []
        args = self.items[have - n:]
        del self.items[have - n:]
        return args

    def peek(self) -> FrothyValue:
        if not self.items:
            raise FrothyStackUnderflow(1, 0)
        return self.items[-1]

    def clear(self) -> None:
        self.items.clear()

    def snapshot(self) -> list[FrothyValue]:
        return list(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[FrothyValue]:
        return iter(self.items)

    def __repr__(self) -> str:
        return f"Stack({self.items!r})"
