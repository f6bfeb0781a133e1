"""Base class shared by every ArchScript value variant.

A parsed node and a runtime value are the same object: each variant knows how
to print its canonical source text and how to evaluate itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from archscript.types.environment import Environment


class Value:
    __slots__ = ()

    # Name used in "<Kind> expected" messages
    kind = "Value"

    def source(self) -> str:
        """Canonical source text; parsing it yields an equivalent node."""
        raise NotImplementedError

    def evaluate(self, env: Environment) -> Value:
        # Atoms evaluate to themselves
        return self

    def __str__(self) -> str:
        return self.source()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source()})"


def is_truthy(value: Value) -> bool:
    """Only Nil is false."""
    from archscript.types.nil import Nil

    return value is not Nil
