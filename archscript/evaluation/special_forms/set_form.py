from archscript import ArchValue
from archscript.types.environment import Environment
from archscript.types.symbol import Symbol


def setq_form(env: Environment, args: list) -> ArchValue:
    """(setq name value): assign through Environment.set or a dotted Struct path."""
    target: Symbol = args[0]
    value = args[1]
    return target.assign(env, value)
