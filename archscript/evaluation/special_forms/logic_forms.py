"""Short-circuit boolean forms: and, or."""

from archscript import Form, ArchValue
from archscript.types.environment import Environment
from archscript.types.nil import Nil, T
from archscript.types.value import is_truthy
from archscript.evaluation.evaluator import evaluate_operand, is_signal


def and_form(env: Environment, forms: list[Form]) -> ArchValue:
    """Value of the last form if every form is truthy, else Nil."""
    result = T
    for form in forms:
        result = evaluate_operand(form, env)
        if is_signal(result):
            return result
        if not is_truthy(result):
            return Nil
    return result


def or_form(env: Environment, forms: list[Form]) -> ArchValue:
    """Value of the first truthy form, else Nil."""
    for form in forms:
        result = evaluate_operand(form, env)
        if is_signal(result) or is_truthy(result):
            return result
    return Nil
