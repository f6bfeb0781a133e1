# Try-Throw handling
# Usage:
#   (try (throw "boom") e (cat "caught: " e))   ; => "caught: boom"
#   (try (add 1 "x") e e)                       ; => the Error value itself
#
# try is the only construct that turns an Error back into a normal value.

import logging

from archscript import ArchValue
from archscript.types.environment import Environment
from archscript.types.atoms import String
from archscript.types.errors import ArchError

logger = logging.getLogger(__name__)


def throw_form(env: Environment, args: list) -> ArchValue:
    """(throw message): raise an Error; a caught Error is raised again by message."""
    value = args[0]
    if isinstance(value, ArchError):
        # The stored Error keeps its context; the copy collects the new one
        raise type(value)(value.message)
    if isinstance(value, String):
        raise ArchError(value.value)
    raise ArchError(value.source())


def try_form(env: Environment, args: list) -> ArchValue:
    """(try form name handler): on Error, bind it to name and run handler in a new frame."""
    body, name, handler = args
    try:
        return body.evaluate(env)
    except ArchError as error:
        logger.debug("try caught %s", error)
        with env.scope({name.name: error}):
            return handler.evaluate(env)
