"""Self-evaluating scalar values: Integer, Double and String."""

from __future__ import annotations

import math
from decimal import Decimal

from archscript.types.value import Value

_INT64_MOD = 1 << 64
INT64_MAX = (1 << 63) - 1
INT64_MIN = -(1 << 63)


def wrap_int64(n: int) -> int:
    """Wrap an unbounded Python int into the signed 64-bit range."""
    n %= _INT64_MOD
    return n - _INT64_MOD if n > INT64_MAX else n


class Integer(Value):
    __slots__ = ("value",)
    kind = "Integer"

    def __init__(self, value: int):
        self.value: int = wrap_int64(int(value))

    def source(self) -> str:
        return str(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Integer) and self.value == other.value

    def __hash__(self) -> int:
        return hash(("Integer", self.value))


class Double(Value):
    __slots__ = ("value",)
    kind = "Double"

    def __init__(self, value: float):
        self.value: float = float(value)

    def source(self) -> str:
        return double_text(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Double) and self.value == other.value

    def __hash__(self) -> int:
        return hash(("Double", self.value))


def double_text(x: float) -> str:
    """Positional notation that reads back to the same float.

    The reader has no exponent syntax, so non-finite values are written as
    the call that rebuilds them.
    """
    if math.isnan(x):
        return '(double "nan")'
    if math.isinf(x):
        return '(double "inf")' if x > 0 else '(double "-inf")'
    # repr gives the shortest digits that round-trip; Decimal drops the exponent
    text = format(Decimal(repr(x)), "f")
    return text if "." in text else text + ".0"


class String(Value):
    __slots__ = ("value",)
    kind = "String"

    def __init__(self, value: str):
        self.value: str = value

    def source(self) -> str:
        # The reader has no escape sequences, so neither does the printer
        return f'"{self.value}"'

    def __eq__(self, other: object) -> bool:
        return isinstance(other, String) and self.value == other.value

    def __hash__(self) -> int:
        return hash(("String", self.value))


def is_number(value: Value) -> bool:
    return isinstance(value, (Integer, Double))


def text_of(value: Value) -> str:
    """Raw text for Strings, canonical source for everything else."""
    return value.value if isinstance(value, String) else value.source()
