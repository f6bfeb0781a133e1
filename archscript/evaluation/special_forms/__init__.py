"""Registry of special forms for the ArchScript evaluator.

Special forms are ordinary Function values bound in the global environment;
what sets them apart is that they control which of their argument forms are
evaluated, how often, and in which frame. Unchecked ones receive the raw
forms; checked ones declare an ArgKind contract.
"""

from archscript.types.function import ArgKind, CheckedPrimitive, Function, Primitive
from archscript.evaluation.special_forms.if_form import if_form
from archscript.evaluation.special_forms.logic_forms import and_form, or_form
from archscript.evaluation.special_forms.set_form import setq_form
from archscript.evaluation.special_forms.eval_form import eval_form
from archscript.evaluation.special_forms.lambda_form import lambda_form
from archscript.evaluation.special_forms.block_form import block_form, label_form, goto_form, return_form, break_form
from archscript.evaluation.special_forms.do_loop_forms import while_form, until_form, do_form, loop_form, for_form
from archscript.evaluation.special_forms.throw_catch_form import throw_form, try_form

U = ArgKind.UNEVALUATED
RU = ArgKind.REST_UNEVALUATED

_SETQ = CheckedPrimitive("setq", setq_form, [ArgKind.SYMBOL, ArgKind.ANY],
                         "(setq name value) -> value, assigned to name or a dotted struct path")

SPECIAL_FORMS: dict[str, Function] = {
    "if": Primitive("if", if_form, "(if cond then [else]) -> then if cond is not Nil, else else", special=True),
    "and": CheckedPrimitive("and", and_form, [RU], "(and x ...) -> last value if all are non-Nil, else Nil"),
    "or": CheckedPrimitive("or", or_form, [RU], "(or x ...) -> first non-Nil value, else Nil"),
    "setq": _SETQ,
    "=": _SETQ,
    "eval": CheckedPrimitive("eval", eval_form, [ArgKind.ANY], "(eval string|value) -> parse and evaluate"),
    "lambda": Primitive("lambda", lambda_form,
                        "(lambda (captures) (params) body) -> closure", special=True),
    "block": Primitive("block", block_form, "(block {locals} form ...) -> value of the last form", special=True),
    "label": CheckedPrimitive("label", label_form, [U], "(label name) -> jump target inside a block or loop"),
    "goto": CheckedPrimitive("goto", goto_form, [U], "(goto name) -> continue after (label name)"),
    "return": CheckedPrimitive("return", return_form, [ArgKind.REST],
                               "(return [value]) -> leave the enclosing block, loop or lambda"),
    "break": CheckedPrimitive("break", break_form, [ArgKind.REST],
                              "(break [value]) -> leave the innermost block or loop"),
    "while": CheckedPrimitive("while", while_form, [U, RU], "(while cond form ...) -> repeat while cond"),
    "until": CheckedPrimitive("until", until_form, [U, RU], "(until cond form ...) -> repeat until cond"),
    "do": CheckedPrimitive("do", do_form, [U, RU], "(do cond form ...) -> run forms, repeat while cond"),
    "loop": CheckedPrimitive("loop", loop_form, [RU], "(loop form ...) -> repeat until return"),
    "for": CheckedPrimitive("for", for_form, [ArgKind.SYMBOL, ArgKind.INTEGER, ArgKind.INTEGER, RU],
                            "(for var lo hi form ...) -> var over [lo, hi)"),
    "throw": CheckedPrimitive("throw", throw_form, [ArgKind.ANY], "(throw message) -> raise an error"),
    "try": CheckedPrimitive("try", try_form, [U, ArgKind.SYMBOL, U],
                            "(try form name handler) -> handler with the error bound to name"),
}
