"""Looping special forms: while, until, do, loop, for.

Every iteration runs its body in a fresh frame. A Return or Break ends the
loop with the wrapped value; a Goto the body could not resolve ends the loop and is
handed to the enclosing construct.
"""

from __future__ import annotations

from typing import Optional, Sequence

from archscript import Form, ArchValue
from archscript.types.environment import Environment, Frame
from archscript.types.nil import Nil
from archscript.types.atoms import Integer
from archscript.types.value import is_truthy
from archscript.types.signals import Break, Goto, Return
from archscript.evaluation.evaluator import evaluate_operand, is_signal, run_body


def _iteration(body: Sequence[Form], env: Environment, frame: Optional[Frame] = None) -> tuple[bool, ArchValue]:
    """Run one pass of the body; returns (stop, value)."""
    with env.scope(frame):
        result = run_body(body, env)
    if isinstance(result, (Return, Break)):
        return True, result.value
    if isinstance(result, Goto):
        return True, result
    return False, result


def _conditional_loop(env: Environment, args: list, until: bool, test_first: bool) -> ArchValue:
    condition, *body = args
    result = Nil
    first = True
    while True:
        if test_first or not first:
            test = evaluate_operand(condition, env)
            if is_signal(test):
                return test
            if is_truthy(test) == until:
                return result
        first = False
        stop, result = _iteration(body, env)
        if stop:
            return result


def while_form(env: Environment, args: list) -> ArchValue:
    """(while cond body...): repeat while cond is truthy."""
    return _conditional_loop(env, args, until=False, test_first=True)


def until_form(env: Environment, args: list) -> ArchValue:
    """(until cond body...): repeat until cond becomes truthy."""
    return _conditional_loop(env, args, until=True, test_first=True)


def do_form(env: Environment, args: list) -> ArchValue:
    """(do cond body...): run the body, then repeat while cond is truthy."""
    return _conditional_loop(env, args, until=False, test_first=False)


def loop_form(env: Environment, args: list) -> ArchValue:
    """(loop body...): repeat until a return or an outward goto."""
    while True:
        stop, result = _iteration(args, env)
        if stop:
            return result


def for_form(env: Environment, args: list) -> ArchValue:
    """(for var lo hi body...): var runs over the half-open range [lo, hi)."""
    var, lo, hi, *body = args
    result = Nil
    for i in range(lo.value, hi.value):
        stop, result = _iteration(body, env, {var.name: Integer(i)})
        if stop:
            return result
    return result
