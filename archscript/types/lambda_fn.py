"""Closure representation and argument binding for ArchScript."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Sequence

from archscript.types.value import Value
from archscript.types.nil import Nil
from archscript.types.function import Function
from archscript.types.signals import Break, Label, Return, evaluate_operand, is_signal
from archscript.types.errors import ArchUsageError

if TYPE_CHECKING:
    from archscript.types.environment import Environment


class Closure(Function):
    """A first-class lambda: captured snapshot, parameter names and body."""

    __slots__ = ("captured", "params", "body")

    def __init__(self, captured: dict[str, Value], params: list[str], body: Value):
        self.captured: dict[str, Value] = captured
        self.params: list[str] = params
        self.body: Value = body

    def source(self) -> str:
        with StringIO() as buffer:
            buffer.write("(lambda (")
            buffer.write(" ".join(self.captured))
            buffer.write(") (")
            buffer.write(" ".join(self.params))
            buffer.write(") ")
            buffer.write(self.body.source())
            buffer.write(")")
            return buffer.getvalue()

    def call(self, args: Sequence[Value], env: Environment) -> Value:
        # Arguments past the declared parameters are ignored, not evaluated
        supplied = min(len(args), len(self.params))
        values: list[Value] = []
        for node in args[:supplied]:
            value = evaluate_operand(node, env)
            if is_signal(value):
                return value
            values.append(value)

        with env.scope(self.captured):
            for i, param in enumerate(self.params):
                env.set_local(param, values[i] if i < supplied else Nil)
            result = self.body.evaluate(env)

        if isinstance(result, Return):
            return result.value
        if isinstance(result, Break):
            raise ArchUsageError("break used outside of a block or loop")
        if isinstance(result, Label):
            raise ArchUsageError(f"improper use of labels [{result.name}]")
        return result
