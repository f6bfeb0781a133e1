from archscript import ArchValue
from archscript.types.environment import Environment
from archscript.types.atoms import String
from archscript.types.nil import Nil
from archscript.evaluation.evaluator import evaluate_operand, is_signal


def eval_form(env: Environment, args: list) -> ArchValue:
    """(eval x): parse and run a String, or evaluate any other value again."""
    from archscript.reader.parser import parse_all

    target = args[0]
    if not isinstance(target, String):
        return target.evaluate(env)

    result = Nil
    for form in parse_all(target.value):
        result = evaluate_operand(form, env)
        if is_signal(result):
            return result
    return result
