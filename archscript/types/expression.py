from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from archscript.types.value import Value
from archscript.types.atoms import String
from archscript.types.errors import ArchError, ArchTypeError
from archscript.types.function import Function
from archscript.types.signals import is_signal

if TYPE_CHECKING:
    from archscript.types.environment import Environment


class Expression(Value):
    """The call form ``(head arg ...)``.

    The head is evaluated to a callable which receives the remaining
    subforms unevaluated, so each callee decides evaluation order and
    strictness. Errors passing through get this form's source appended.
    """

    __slots__ = ("items",)
    kind = "Expression"

    def __init__(self, items: tuple[Value, ...] | list[Value]):
        self.items: tuple[Value, ...] = tuple(items)

    @property
    def head(self) -> Value:
        return self.items[0]

    @property
    def args(self) -> tuple[Value, ...]:
        return self.items[1:]

    def source(self) -> str:
        with StringIO() as buffer:
            buffer.write("(")
            buffer.write(" ".join(item.source() for item in self.items))
            buffer.write(")")
            return buffer.getvalue()

    def evaluate(self, env: Environment) -> Value:
        try:
            callee = self.head.evaluate(env)
            if is_signal(callee):
                return callee
            if isinstance(callee, String):
                callee = _named_function(callee.value, env)
            if not isinstance(callee, Function):
                raise ArchTypeError(f"function expected [{callee.source()}]")
            return callee.call(self.args, env)
        except ArchError as error:
            error.add_context(self.source())
            raise

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Expression) and self.items == other.items

    def __hash__(self) -> int:
        return hash(self.items)


def _named_function(name: str, env: Environment) -> Function:
    """Resolve ``("add" 1 2)`` style heads through the global bindings."""
    binding = env.globals.get(name)
    if binding is None:
        raise ArchTypeError(f"unknown function [{name}]")
    if not isinstance(binding, Function):
        raise ArchTypeError(f"function expected [{name}]")
    return binding
