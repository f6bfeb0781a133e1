from archscript import Form, ArchValue
from archscript.types.environment import Environment
from archscript.types.errors import ArchArityError
from archscript.types.nil import Nil
from archscript.types.value import is_truthy
from archscript.evaluation.evaluator import evaluate_operand, is_signal


def if_form(tail: list[Form], env: Environment) -> ArchValue:
    if len(tail) < 2:
        raise ArchArityError("then expression expected")
    if len(tail) > 3:
        raise ArchArityError("too many arguments [if]")

    cond = evaluate_operand(tail[0], env)
    if is_signal(cond):
        return cond

    # Branch results, signals included, go straight back to the caller
    if is_truthy(cond):
        return tail[1].evaluate(env)
    elif len(tail) > 2:
        return tail[2].evaluate(env)
    return Nil
