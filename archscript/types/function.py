"""Callable values: unchecked Primitives and contract-checked Primitives.

Both receive the unevaluated argument forms of the call. A Primitive either
evaluates all of them left to right (the default) or, when ``special`` is set,
passes the raw forms through so it can implement a special form. A
CheckedPrimitive walks its ``ArgKind`` contract to decide, per position,
whether to evaluate and what variant to require.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, Callable, Sequence

from archscript.types.value import Value
from archscript.types.atoms import Integer, Double, String
from archscript.types.collections import List, Struct
from archscript.types.errors import ArchArityError, ArchTypeError
from archscript.types.signals import evaluate_operand, is_signal

if TYPE_CHECKING:
    from archscript.types.environment import Environment

# fn(env, values) for ordinary primitives; fn(forms, env) for special ones
NativeFn = Callable[..., Value]


class ArgKind(Enum):
    FUNCTION = "Function"
    INTEGER = "Integer"
    DOUBLE = "Double"
    LIST = "List"
    NUMBER = "Number"
    EXPRESSION = "Expression"
    SYMBOL = "Symbol"
    STRING = "String"
    UNEVALUATED = "Unevaluated"
    ANY = "Any"
    STRUCT = "Struct"
    REST = "Rest"
    REST_UNEVALUATED = "RestUnevaluated"

    @property
    def evaluates(self) -> bool:
        return self not in (ArgKind.UNEVALUATED, ArgKind.REST_UNEVALUATED)

    @property
    def is_rest(self) -> bool:
        return self in (ArgKind.REST, ArgKind.REST_UNEVALUATED)

    def check(self, value: Value) -> Value:
        """Return `value` (converted where the kind allows) or raise."""
        from archscript.types.symbol import Symbol

        match self:
            case ArgKind.ANY | ArgKind.REST | ArgKind.UNEVALUATED | ArgKind.REST_UNEVALUATED:
                return value
            case ArgKind.SYMBOL if isinstance(value, String):
                return Symbol(value.value)
            case ArgKind.NUMBER if isinstance(value, (Integer, Double)):
                return value
            case _ if isinstance(value, _kind_types().get(self, ())):
                return value
        raise ArchTypeError(f"{self.value} expected [{value.source()}]")


@lru_cache(maxsize=None)
def _kind_types() -> dict[ArgKind, tuple[type, ...]]:
    from archscript.types.expression import Expression
    from archscript.types.symbol import Symbol

    return {
        ArgKind.FUNCTION: (Function,),
        ArgKind.INTEGER: (Integer,),
        ArgKind.DOUBLE: (Double,),
        ArgKind.LIST: (List,),
        ArgKind.EXPRESSION: (Expression,),
        ArgKind.SYMBOL: (Symbol,),
        ArgKind.STRING: (String,),
        ArgKind.STRUCT: (Struct,),
    }


class Function(Value):
    """Common base of every callable variant."""

    __slots__ = ()
    kind = "Function"

    name: str = "lambda"
    help: str = ""

    def call(self, args: Sequence[Value], env: Environment) -> Value:
        raise NotImplementedError

    def source(self) -> str:
        return self.name


class Primitive(Function):
    __slots__ = ("name", "fn", "help", "special")

    def __init__(self, name: str, fn: NativeFn, help: str = "", special: bool = False):
        self.name = name
        self.fn: NativeFn = fn
        self.help = help
        self.special: bool = special

    def call(self, args: Sequence[Value], env: Environment) -> Value:
        if self.special:
            return self.fn(list(args), env)
        values: list[Value] = []
        for node in args:
            value = evaluate_operand(node, env)
            if is_signal(value):
                return value
            values.append(value)
        return self.fn(env, values)


class CheckedPrimitive(Function):
    __slots__ = ("name", "fn", "help", "kinds")

    def __init__(self, name: str, fn: NativeFn, kinds: Sequence[ArgKind], help: str = ""):
        self.name = name
        self.fn: NativeFn = fn
        self.help = help
        self.kinds: tuple[ArgKind, ...] = tuple(kinds)

    def call(self, args: Sequence[Value], env: Environment) -> Value:
        from archscript.types.symbol import Symbol

        rest = self.kinds[-1] if self.kinds and self.kinds[-1].is_rest else None
        fixed = self.kinds[:-1] if rest else self.kinds
        if len(args) < len(fixed):
            raise ArchArityError(f"too few arguments [{self.name}]")
        if rest is None and len(args) > len(fixed):
            raise ArchArityError(f"too many arguments [{self.name}]")

        values: list[Value] = []
        for i, node in enumerate(args):
            kind = fixed[i] if i < len(fixed) else rest
            if not kind.evaluates:
                values.append(node)
                continue
            if kind is ArgKind.SYMBOL and isinstance(node, Symbol):
                # A bare name is taken as written rather than looked up
                values.append(node)
                continue
            value = evaluate_operand(node, env)
            if is_signal(value):
                return value
            values.append(kind.check(value))
        return self.fn(env, values)
