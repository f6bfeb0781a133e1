"""Control signals: Return, Break, Goto and Label.

Signals travel as ordinary return values. Only block, the loop forms and
closures interpret them; every other construct hands them back unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from archscript.types.value import Value
from archscript.types.errors import ArchUsageError

if TYPE_CHECKING:
    from archscript.types.environment import Environment


class Return(Value):
    __slots__ = ("value",)
    kind = "Return"

    def __init__(self, value: Value):
        self.value: Value = value

    def source(self) -> str:
        return f"(return {self.value.source()})"


class Break(Value):
    """Ends the innermost block or loop; unlike Return it never leaves a lambda."""

    __slots__ = ("value",)
    kind = "Break"

    def __init__(self, value: Value):
        self.value: Value = value

    def source(self) -> str:
        return f"(break {self.value.source()})"


class Goto(Value):
    __slots__ = ("target",)
    kind = "Goto"

    def __init__(self, target: str):
        self.target: str = target

    def source(self) -> str:
        return f"(goto {self.target})"


class Label(Value):
    __slots__ = ("name",)
    kind = "Label"

    def __init__(self, name: str):
        self.name: str = name

    def source(self) -> str:
        return f"(label {self.name})"


def is_signal(value: Value) -> bool:
    """True for signals that must be propagated to the caller untouched."""
    return isinstance(value, (Return, Break, Goto))


def evaluate_operand(node: Value, env: Environment) -> Value:
    """Evaluate a node whose result is about to be used as data.

    Return, Break and Goto come back as-is for the caller to propagate; a
    Label can never be data.
    """
    value = node.evaluate(env)
    if isinstance(value, Label):
        raise ArchUsageError(f"improper use of labels [{value.name}]")
    return value
