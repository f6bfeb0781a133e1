"""Compound values: List (quoted literal data) and Struct (name -> value map).

Evaluating either one produces a fresh copy, so a literal node in the parse
tree is never aliased by the runtime value built from it.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from archscript.types.value import Value
from archscript.types.nil import Nil

if TYPE_CHECKING:
    from archscript.types.environment import Environment


def _literal_source(value: Value) -> str:
    # Inside a quoted list nested lists need no extra apostrophe
    if isinstance(value, List):
        return value.body_source()
    return value.source()


class List(Value):
    __slots__ = ("items",)
    kind = "List"

    def __init__(self, items: list[Value]):
        self.items: list[Value] = items

    def body_source(self) -> str:
        with StringIO() as buffer:
            buffer.write("(")
            buffer.write(" ".join(_literal_source(item) for item in self.items))
            buffer.write(")")
            return buffer.getvalue()

    def source(self) -> str:
        # An empty quoted list reads back as Nil
        if not self.items:
            return Nil.source()
        return "'" + self.body_source()

    def evaluate(self, env: Environment) -> Value:
        return List([item.evaluate(env) for item in self.items])

    def __eq__(self, other: object) -> bool:
        return isinstance(other, List) and self.items == other.items

    __hash__ = None  # mutable through set@


class Struct(Value):
    __slots__ = ("fields",)
    kind = "Struct"

    def __init__(self, fields: dict[str, Value] | None = None):
        self.fields: dict[str, Value] = fields if fields is not None else {}

    def source(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            buffer.write(" ".join(f"{k}: {v.source()}" for k, v in self.fields.items()))
            buffer.write("}")
            return buffer.getvalue()

    def evaluate(self, env: Environment) -> Value:
        """Evaluate every field into a new Struct."""
        from archscript.types.signals import evaluate_operand, is_signal

        fields: dict[str, Value] = {}
        for key, node in self.fields.items():
            value = evaluate_operand(node, env)
            if is_signal(value):
                return value
            fields[key] = value
        return Struct(fields)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Struct) and self.fields == other.fields

    __hash__ = None
