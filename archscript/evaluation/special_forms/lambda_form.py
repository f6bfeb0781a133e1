from archscript import Form, ArchValue
from archscript.types.environment import Environment
from archscript.types.errors import ArchArityError, ArchSyntaxError
from archscript.types.nil import Nil
from archscript.types.atoms import String
from archscript.types.collections import List
from archscript.types.symbol import Symbol
from archscript.types.expression import Expression
from archscript.types.lambda_fn import Closure


def _names(form: Form) -> list[str]:
    """Names from ``(a b c)``, a quoted ``'(a b c)`` or Nil."""
    if form is Nil:
        return []
    if isinstance(form, Expression):
        items = form.items
    elif isinstance(form, List):
        items = form.items
    else:
        raise ArchSyntaxError(f"parameter list expected [{form.source()}]")

    names = []
    for item in items:
        if isinstance(item, Symbol) and len(item.segments) == 1:
            names.append(item.name)
        elif isinstance(item, String):
            names.append(item.value)
        else:
            raise ArchSyntaxError(f"parameter list expected [{form.source()}]")
    return names


def lambda_form(tail: list[Form], env: Environment) -> ArchValue:
    # (lambda (captures) (params) body), or (lambda (params) body) with no captures
    if len(tail) == 3:
        captures, params, body = tail
    elif len(tail) == 2:
        captures = Nil
        params, body = tail
    else:
        raise ArchArityError("lambda requires a capture list, a parameter list and a body")

    # Captures are snapshots: later reassignment outside is not seen
    captured = {name: env.lookup(name) for name in _names(captures)}
    return Closure(captured, _names(params), body)
