from __future__ import annotations

"""
Lightweight indexer for ArchScript documents without evaluating code.

Top-level forms are read with the real parser (no continuation callback, so
an unterminated form becomes a problem instead of a prompt) and scanned for:
- definitions: (setq name ...), (= name ...); a lambda value marks a function
- the first structural error, with its position
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple
import logging

from archscript.reader.parser import Parser
from archscript.types.environment import Environment
from archscript.types.errors import ArchIncompleteInput, ArchSyntaxError
from archscript.types.expression import Expression
from archscript.types.function import Function
from archscript.types.symbol import Symbol
from archscript.builtin.env_builtin import register

logger = logging.getLogger(__name__)

_DEFINING_HEADS = ("setq", "=")


def _builtin_signatures() -> Dict[str, str]:
    env = Environment()
    register(env)
    return {name: value.help for name, value in env.globals.items() if isinstance(value, Function)}


BUILTIN_SIGNATURES: Dict[str, str] = _builtin_signatures()


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int


@dataclass
class Problem:
    message: str
    line: int
    col: int
    incomplete: bool = False


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    problems: List[Problem] = field(default_factory=list)


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _definition(form) -> Tuple[str, str] | None:
    """(name, kind) when `form` is a top-level setq of a plain name."""
    if not isinstance(form, Expression) or len(form.items) != 3:
        return None
    head, target, value = form.items
    if not (isinstance(head, Symbol) and head.name in _DEFINING_HEADS and isinstance(target, Symbol)
            and len(target.segments) == 1):
        return None
    is_lambda = isinstance(value, Expression) and isinstance(value.head, Symbol) and value.head.name == "lambda"
    return target.name, "function" if is_lambda else "var"


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    parser = Parser(text)
    while True:
        try:
            form = parser.parse_one_form()
        except ArchSyntaxError as error:
            line, col = _position_from_offset(text, error.position)
            idx.problems.append(
                Problem(error.message, line, col, incomplete=isinstance(error, ArchIncompleteInput))
            )
            # The reader cannot resynchronise after a structural error
            break
        if form is None:
            break
        found = _definition(form)
        if found is None:
            continue
        name, kind = found
        offset = text.find(name, parser.form_start)
        line, col = _position_from_offset(text, offset if offset != -1 else parser.form_start)
        idx.symbols[name] = SymbolDef(name, kind, line, col)
    logger.debug("indexed %d symbols, %d problems", len(idx.symbols), len(idx.problems))
    return idx
