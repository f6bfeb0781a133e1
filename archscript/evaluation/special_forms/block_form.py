"""Special forms: block, label, goto, return, break.

``block`` opens a local frame seeded from its first argument and runs the
remaining forms with label/goto resolution (see evaluator.run_body).
"""

from archscript import Form, ArchValue
from archscript.types.environment import Environment, Frame
from archscript.types.errors import ArchArityError, ArchSyntaxError, ArchTypeError
from archscript.types.nil import Nil
from archscript.types.atoms import String
from archscript.types.collections import List, Struct
from archscript.types.symbol import Symbol
from archscript.types.signals import Break, Goto, Label, Return
from archscript.evaluation.evaluator import evaluate_operand, is_signal, run_body


def _locals_frame(declared: ArchValue) -> Frame:
    # {name: init ...} declares with initial values; '(a b) declares names bound to Nil
    if isinstance(declared, Struct):
        return dict(declared.fields)
    if declared is Nil:
        return {}
    if isinstance(declared, List) and all(isinstance(item, String) for item in declared.items):
        return {item.value: Nil for item in declared.items}
    raise ArchTypeError(f"Struct expected [{declared.source()}]")


def block_form(tail: list[Form], env: Environment) -> ArchValue:
    if not tail:
        raise ArchArityError("too few arguments [block]")
    declared = evaluate_operand(tail[0], env)
    if is_signal(declared):
        return declared

    with env.scope(_locals_frame(declared)):
        result = run_body(tail[1:], env)

    if isinstance(result, (Return, Break)):
        return result.value
    return result


def _target_name(form: Form) -> str:
    if isinstance(form, Symbol):
        return form.name
    if isinstance(form, String):
        return form.value
    raise ArchSyntaxError(f"label name expected [{form.source()}]")


def label_form(env: Environment, args: list) -> ArchValue:
    return Label(_target_name(args[0]))


def goto_form(env: Environment, args: list) -> ArchValue:
    return Goto(_target_name(args[0]))


def return_form(env: Environment, args: list) -> ArchValue:
    # Arguments arrive evaluated; a signal among them already short-circuited
    if len(args) > 1:
        raise ArchArityError("too many arguments [return]")
    return Return(args[0] if args else Nil)


def break_form(env: Environment, args: list) -> ArchValue:
    if len(args) > 1:
        raise ArchArityError("too many arguments [break]")
    return Break(args[0] if args else Nil)
