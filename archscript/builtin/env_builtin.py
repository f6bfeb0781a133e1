"""Built-in functions for the ArchScript runtime environment.

This module defines arithmetic, comparison, string, list and struct helpers,
textual I/O and help, plus the registration routine that binds them (and the
special forms) into a global environment.
"""
from __future__ import annotations

import math
import sys
from typing import Optional, TextIO

from archscript import ArchValue
from archscript.types.value import Value, is_truthy
from archscript.types.nil import Nil, from_bool
from archscript.types.atoms import Integer, Double, String, is_number, text_of
from archscript.types.collections import List, Struct
from archscript.types.function import ArgKind, CheckedPrimitive, Function, Primitive
from archscript.types.environment import Environment
from archscript.types.errors import ArchArityError, ArchError, ArchKeyError, ArchTypeError
from archscript.evaluation.special_forms import SPECIAL_FORMS

R = ArgKind.REST
A = ArgKind.ANY
N = ArgKind.NUMBER


def _numbers(args: list[Value]) -> list[Value]:
    for arg in args:
        if not is_number(arg):
            raise ArchTypeError(f"Number expected [{arg.source()}]")
    return args


def _number(value: int | float, double: bool) -> Value:
    return Double(value) if double else Integer(value)


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[Value]) -> Value:
    """Sum of all arguments; Double if any argument is a Double."""
    _numbers(args)
    double = any(isinstance(a, Double) for a in args)
    return _number(sum(a.value for a in args), double)


def sub(env: Environment, args: list[Value]) -> Value:
    """Subtract the rest from the first; unary negation for one argument."""
    _numbers(args)
    double = any(isinstance(a, Double) for a in args)
    first, rest = args[0], args[1:]
    if not rest:
        return _number(-first.value, double)
    return _number(first.value - sum(a.value for a in rest), double)


def mul(env: Environment, args: list[Value]) -> Value:
    _numbers(args)
    result = 1
    for a in args:
        result *= a.value
    return _number(result, any(isinstance(a, Double) for a in args))


def div(env: Environment, args: list[Value]) -> Value:
    """Divide; two Integers divide with truncation toward zero."""
    n, d = args
    if d.value == 0:
        raise ArchError("division by zero")
    if isinstance(n, Integer) and isinstance(d, Integer):
        q = abs(n.value) // abs(d.value)
        return Integer(q if (n.value < 0) == (d.value < 0) else -q)
    return Double(n.value / d.value)


def mod(env: Environment, args: list[Value]) -> Value:
    n, d = args
    if d.value == 0:
        raise ArchError("division by zero")
    return Integer(n.value % d.value)


# -------------------------------
# Comparison and logic
# -------------------------------
def is_equal(a: Value, b: Value) -> bool:
    """Structural equality; Integer and Double compare by numeric value at any depth."""
    if a is b:
        return True
    if is_number(a) and is_number(b):
        return a.value == b.value
    match a, b:
        case List(), List():
            return len(a.items) == len(b.items) and all(map(is_equal, a.items, b.items))
        case Struct(), Struct():
            return a.fields.keys() == b.fields.keys() and all(is_equal(v, b.fields[k]) for k, v in a.fields.items())
    return type(a) is type(b) and a == b


def eq(env: Environment, args: list[Value]) -> Value:
    return from_bool(is_equal(args[0], args[1]))


def lt(env: Environment, args: list[Value]) -> Value:
    return from_bool(args[0].value < args[1].value)


def gt(env: Environment, args: list[Value]) -> Value:
    return from_bool(args[0].value > args[1].value)


def leq(env: Environment, args: list[Value]) -> Value:
    return from_bool(args[0].value <= args[1].value)


def geq(env: Environment, args: list[Value]) -> Value:
    return from_bool(args[0].value >= args[1].value)


def logical_not(env: Environment, args: list[Value]) -> Value:
    return from_bool(not is_truthy(args[0]))


# -------------------------------
# Strings and conversion
# -------------------------------
def cat(env: Environment, args: list[Value]) -> Value:
    """Concatenate; non-Strings contribute their canonical text."""
    return String("".join(text_of(a) for a in args))


def to_int(env: Environment, args: list[Value]) -> Value:
    x = args[0]
    match x:
        case Integer():
            return x
        case Double() if math.isfinite(x.value):
            return Integer(int(x.value))
        case String():
            try:
                return Integer(int(x.value.strip()))
            except ValueError:
                return Nil
    return Nil


def to_double(env: Environment, args: list[Value]) -> Value:
    x = args[0]
    match x:
        case Integer() | Double():
            return Double(x.value)
        case String():
            try:
                return Double(float(x.value.strip()))
            except ValueError:
                return Nil
    return Nil


def length(env: Environment, args: list[Value]) -> Value:
    x = args[0]
    match x:
        case String():
            return Integer(len(x.value))
        case List():
            return Integer(len(x.items))
        case Struct():
            return Integer(len(x.fields))
    if x is Nil:
        return Integer(0)
    raise ArchTypeError(f"String, List or Struct expected [{x.source()}]")


# -------------------------------
# Lists and structs
# -------------------------------
def list_builtin(env: Environment, args: list[Value]) -> Value:
    """Construct a list from the arguments; no arguments gives Nil."""
    return List(list(args)) if args else Nil


def append(env: Environment, args: list[Value]) -> Value:
    """New list with the remaining arguments added to the end of the first."""
    base = args[0]
    if base is Nil:
        items = []
    elif isinstance(base, List):
        items = list(base.items)
    else:
        raise ArchTypeError(f"List expected [{base.source()}]")
    items.extend(args[1:])
    return List(items) if items else Nil


def _key(key: Value) -> str:
    if not isinstance(key, String):
        raise ArchTypeError(f"invalid key [{key.source()}]")
    return key.value


def _index(container: List, index: Value) -> int:
    if not isinstance(index, Integer):
        raise ArchTypeError(f"Integer expected [{index.source()}]")
    if not 0 <= index.value < len(container.items):
        raise ArchKeyError(f"index out of range [{index.value}]")
    return index.value


def item_at(env: Environment, args: list[Value]) -> Value:
    """(@ struct|list key|index) -> item at key|index."""
    container, key = args
    match container:
        case Struct():
            name = _key(key)
            if name not in container.fields:
                raise ArchKeyError(f"unknown key [{name}]")
            return container.fields[name]
        case List():
            return container.items[_index(container, key)]
    raise ArchTypeError(f"Struct or List expected [{container.source()}]")


def set_item_at(env: Environment, args: list[Value]) -> Value:
    """(set@ struct|list key|index value) -> the container, changed in place."""
    container, key, value = args
    match container:
        case Struct():
            container.fields[_key(key)] = value
            return container
        case List():
            container.items[_index(container, key)] = value
            return container
    raise ArchTypeError(f"Struct or List expected [{container.source()}]")


def struct_builtin(env: Environment, args: list[Value]) -> Value:
    """(struct key value ...) -> new Struct."""
    if len(args) % 2 == 1:
        raise ArchArityError("insufficient arguments [struct]")
    return Struct({_key(k): v for k, v in zip(args[::2], args[1::2])})


def keys(env: Environment, args: list[Value]) -> Value:
    names = [String(k) for k in args[0].fields]
    return List(names) if names else Nil


# -------------------------------
# Help
# -------------------------------
def help_texts(env: Environment, prefix: str = "") -> list[str]:
    """Usage lines of every documented global function whose name starts with prefix."""
    return [
        value.help
        for name, value in sorted(env.globals.items())
        if isinstance(value, Function) and value.help and name.startswith(prefix)
    ]


def help_builtin(env: Environment, args: list[Value]) -> Value:
    if len(args) > 1:
        raise ArchArityError("too many arguments [help]")
    prefix = text_of(args[0]) if args else ""
    return String("\n".join(help_texts(env, prefix)))


# -------------------------------
# I/O
# -------------------------------
def _make_print(stdout: Optional[TextIO]):
    def print_builtin(env: Environment, args: list[Value]) -> Value:
        """Print space-separated texts followed by newline; returns Nil."""
        out = stdout or sys.stdout
        out.write(" ".join(text_of(a) for a in args) + "\n")
        out.flush()
        return Nil

    return print_builtin


def _make_read(stdout: Optional[TextIO], stdin: Optional[TextIO]):
    def read_builtin(env: Environment, args: list[Value]) -> Value:
        """(read [prompt]) -> one line of input as a String, Nil at end of input."""
        if len(args) > 1:
            raise ArchArityError("too many arguments [read]")
        if args:
            out = stdout or sys.stdout
            out.write(text_of(args[0]))
            out.flush()
        line = (stdin or sys.stdin).readline()
        if not line:
            return Nil
        return String(line.rstrip("\r\n"))

    return read_builtin


def register(env: Environment, stdout: Optional[TextIO] = None, stdin: Optional[TextIO] = None) -> None:
    """Register all special forms and builtin functions into the given environment."""
    builtins: dict[str, ArchValue] = {
        "add": Primitive("add", add, "(add n ...) -> sum; Double if any argument is a Double"),
        "sub": CheckedPrimitive("sub", sub, [N, R], "(sub n ...) -> first minus the rest, or -n"),
        "mul": Primitive("mul", mul, "(mul n ...) -> product"),
        "div": CheckedPrimitive("div", div, [N, N], "(div n d) -> quotient, truncated for Integers"),
        "mod": CheckedPrimitive("mod", mod, [ArgKind.INTEGER, ArgKind.INTEGER], "(mod n d) -> remainder"),
        "eq": CheckedPrimitive("eq", eq, [A, A], "(eq a b) -> True if a and b are equal"),
        "lt": CheckedPrimitive("lt", lt, [N, N], "(lt a b) -> True if a < b"),
        "gt": CheckedPrimitive("gt", gt, [N, N], "(gt a b) -> True if a > b"),
        "leq": CheckedPrimitive("leq", leq, [N, N], "(leq a b) -> True if a <= b"),
        "geq": CheckedPrimitive("geq", geq, [N, N], "(geq a b) -> True if a >= b"),
        "not": CheckedPrimitive("not", logical_not, [A], "(not x) -> True if x is Nil, else Nil"),
        "cat": Primitive("cat", cat, "(cat x ...) -> string concatenation"),
        "int": CheckedPrimitive("int", to_int, [A], "(int number|string) -> Integer, or Nil"),
        "double": CheckedPrimitive("double", to_double, [A], "(double number|string) -> Double, or Nil"),
        "len": CheckedPrimitive("len", length, [A], "(len string|list|struct) -> length"),
        "list": Primitive("list", list_builtin, "(list x ...) -> list of the arguments"),
        "append": CheckedPrimitive("append", append, [A, R], "(append list x ...) -> new list"),
        "@": CheckedPrimitive("@", item_at, [A, A], "(@ struct|list key|index) -> item at key|index of struct|list"),
        "set@": CheckedPrimitive("set@", set_item_at, [A, A, A],
                                 "(set@ struct|list key|index value) -> container with the item replaced"),
        "struct": Primitive("struct", struct_builtin, "(struct key value ...) -> new struct"),
        "keys": CheckedPrimitive("keys", keys, [ArgKind.STRUCT], "(keys struct) -> list of field names"),
        "help": Primitive("help", help_builtin, "(help [prefix]) -> usage of matching functions"),
        "print": Primitive("print", _make_print(stdout), "(print x ...) -> Nil, after printing the arguments"),
        "read": Primitive("read", _make_read(stdout, stdin), "(read [prompt]) -> line of input"),
    }
    env.update(SPECIAL_FORMS)
    env.update(builtins)
