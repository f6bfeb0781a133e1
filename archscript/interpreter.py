from __future__ import annotations

import logging
from typing import Optional, TextIO

from archscript import ArchValue, Form, MoreInputFn
from archscript.reader.parser import Parser
from archscript.types.nil import Nil
from archscript.types.environment import Environment
from archscript.types.errors import ArchError
from archscript.builtin.env_builtin import register
from archscript.evaluation.evaluator import settle

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates ArchScript text against one long-lived Environment.
    Definitions persist across calls; frames never outlive a call.
    """

    def __init__(self, stdout: Optional[TextIO] = None, stdin: Optional[TextIO] = None):
        self.env: Environment = Environment()
        register(self.env, stdout=stdout, stdin=stdin)

    def eval_form(self, form: Form) -> ArchValue:
        try:
            result = form.evaluate(self.env)
        except RecursionError:
            # Unwinding that deep can skip frame pops; top level owns no frames
            self.env.frames.clear()
            raise ArchError("recursion too deep") from None
        return settle(result)

    def eval(self, code: str, more_input: Optional[MoreInputFn] = None) -> ArchValue:
        """Evaluate every form in `code`, returning the value of the last one.

        `more_input` is called when the text ends inside an open form; see
        archscript.reader.parser for the protocol.
        """
        logger.debug("evaluating %r", code)
        result: ArchValue = Nil
        for form in Parser(code, more_input).parse_all():
            result = self.eval_form(form)
        return result
