"""Core evaluation helpers shared by the special forms.

Dispatch itself lives on the value variants (``Value.evaluate``); this module
holds the pieces that interpret control signals: running a body with labels
and gotos, and settling whatever reaches the top level.
"""

from __future__ import annotations

from typing import Optional, Sequence

from archscript import Form, ArchValue
from archscript.types.value import Value
from archscript.types.nil import Nil
from archscript.types.atoms import String
from archscript.types.symbol import Symbol
from archscript.types.expression import Expression
from archscript.types.environment import Environment
from archscript.types.signals import Break, Goto, Label, Return, evaluate_operand, is_signal
from archscript.types.errors import ArchUsageError

__all__ = [
    "evaluate_operand",
    "is_signal",
    "run_body",
    "settle",
]


def _static_label(form: Value) -> Optional[str]:
    """Name of a literal ``(label name)`` subform, else None."""
    if (
        isinstance(form, Expression)
        and len(form.items) == 2
        and isinstance(form.head, Symbol)
        and form.head.name == "label"
    ):
        target = form.items[1]
        if isinstance(target, Symbol):
            return target.name
        if isinstance(target, String):
            return target.value
    return None


def run_body(forms: Sequence[Form], env: Environment) -> ArchValue:
    """Run `forms` in order, resolving gotos against this body's labels.

    Labels written directly in the body are known before it starts, so jumps
    may go forward or backward; a Label produced by a nested form registers
    at that form's position once it runs. A Goto naming an unknown label, or
    a Return or Break, stops the body and is handed back to the caller.
    """
    labels: dict[str, int] = {}
    for index, form in enumerate(forms):
        name = _static_label(form)
        if name is not None:
            labels.setdefault(name, index)

    result: Value = Nil
    index = 0
    while index < len(forms):
        result = forms[index].evaluate(env)
        match result:
            case Label(name=name):
                labels[name] = index
                result = Nil
            case Goto(target=target) if target in labels:
                index = labels[target] + 1
                result = Nil
                continue
            case Goto() | Return() | Break():
                return result
        index += 1
    return result


def settle(result: ArchValue) -> ArchValue:
    """Reject control signals that escaped every construct able to handle them."""
    match result:
        case Return():
            raise ArchUsageError("return used outside of a block, loop or lambda")
        case Break():
            raise ArchUsageError("break used outside of a block or loop")
        case Goto(target=target):
            raise ArchUsageError(f"unknown label [{target}]")
        case Label(name=name):
            raise ArchUsageError(f"improper use of labels [{name}]")
    return result
