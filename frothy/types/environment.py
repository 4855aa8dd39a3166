"""Runtime environment for Frothy.

A single global table mapping names to values. There are no nested scopes:
functions read and write the same bindings as their callers, and the last
assignment to a name wins.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Mapping

from frothy import FrothyValue
from frothy.errors import FrothyTypeMismatch, FrothyUnboundName
from frothy.types.values import DeferredRef


class Environment:
    """Flat mapping from names to Frothy values."""

    __slots__ = ("vars",)

    def __init__(self, bindings: Mapping[str, FrothyValue] | None = None):
        self.vars: dict[str, FrothyValue] = {}
        if bindings:
            self.update(bindings)

    def set(self, name: str, value: FrothyValue) -> None:
        """Bind `name` to `value`, overwriting any earlier binding.

        Raises FrothyTypeMismatch if `name` is not a string or `value` is an
        unresolved DeferredRef.
        """
        if not isinstance(name, str):
            raise FrothyTypeMismatch(f"cannot bind {name!r}: names must be strings")
        if isinstance(value, DeferredRef):
            raise FrothyTypeMismatch(f"cannot bind '{name}' to the unresolved name '{value}'")
        self.vars[name] = value

    def get(self, name: str) -> FrothyValue:
        """Look up the value bound to `name`.

        Raises FrothyUnboundName if nothing is bound.
        """
        try:
            return self.vars[name]
        except KeyError:
            raise FrothyUnboundName(name) from None

    def update(self, mapping: Mapping[str, FrothyValue]) -> None:
        """Bulk-bind a mapping of name -> value."""
        for k, v in mapping.items():
            self.set(k, v)

    def names(self) -> list[str]:
        return sorted(self.vars)

    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __len__(self) -> int:
        return len(self.vars)

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment ")
            self._write_vars(buffer)
            buffer.write(">")
            return buffer.getvalue()
