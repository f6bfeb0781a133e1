from __future__ import annotations

from archscript.types.value import Value


class NilType(Value):
    __slots__ = ()
    kind = "Nil"

    def source(self) -> str:
        return "Nil"

    def __bool__(self) -> bool:
        return False


class TrueType(Value):
    __slots__ = ()
    kind = "True"

    def source(self) -> str:
        return "True"


# Process-wide singletons; compare with `is`
Nil = NilType()
T = TrueType()


def from_bool(flag: bool) -> Value:
    return T if flag else Nil
