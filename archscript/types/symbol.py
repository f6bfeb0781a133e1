from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from archscript.types.value import Value
from archscript.types.collections import Struct
from archscript.types.errors import ArchKeyError, ArchTypeError

if TYPE_CHECKING:
    from archscript.types.environment import Environment


class Symbol(Value):
    """A name, possibly a dotted path such as ``a.b.c`` into nested Structs."""

    __slots__ = ("name", "segments")
    kind = "Symbol"

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        self.name: str = sys.intern(name)
        self.segments: tuple[str, ...] = tuple(name.split("."))

    def source(self) -> str:
        return self.name

    def evaluate(self, env: Environment) -> Value:
        value = env.lookup(self.segments[0])
        return self._walk(value, 1, len(self.segments))

    def assign(self, env: Environment, value: Value) -> Value:
        """Write `value` to the slot this path names.

        A plain name goes through Environment.set; a dotted path writes into
        the last Struct on the path, creating the key if needed.
        """
        if len(self.segments) == 1:
            env.set(self.name, value)
            return value
        container = self._walk(env.lookup(self.segments[0]), 1, len(self.segments) - 1)
        if not isinstance(container, Struct):
            raise ArchTypeError(f"Struct expected [{'.'.join(self.segments[:-1])}]")
        container.fields[self.segments[-1]] = value
        return value

    def _walk(self, value: Value, start: int, stop: int) -> Value:
        for i in range(start, stop):
            if not isinstance(value, Struct):
                raise ArchTypeError(f"Struct expected [{'.'.join(self.segments[:i])}]")
            key = self.segments[i]
            if key not in value.fields:
                raise ArchKeyError(f"unknown key [{key}] in [{'.'.join(self.segments[:i])}]")
            value = value.fields[key]
        return value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)
