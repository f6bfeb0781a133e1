"""The ArchScript value family.

Every variant renders its canonical source text via ``source()`` and
evaluates itself via ``evaluate(env)``.
"""

from archscript.types.value import Value, is_truthy
from archscript.types.nil import Nil, NilType, T, TrueType
from archscript.types.atoms import Integer, Double, String
from archscript.types.collections import List, Struct
from archscript.types.symbol import Symbol
from archscript.types.expression import Expression
from archscript.types.function import ArgKind, Function, Primitive, CheckedPrimitive
from archscript.types.lambda_fn import Closure
from archscript.types.signals import Return, Break, Goto, Label
from archscript.types.errors import ArchError
from archscript.types.environment import Environment

__all__ = [
    "Value",
    "is_truthy",
    "Nil",
    "NilType",
    "T",
    "TrueType",
    "Integer",
    "Double",
    "String",
    "List",
    "Struct",
    "Symbol",
    "Expression",
    "ArgKind",
    "Function",
    "Primitive",
    "CheckedPrimitive",
    "Closure",
    "Return",
    "Break",
    "Goto",
    "Label",
    "ArchError",
    "Environment",
]
