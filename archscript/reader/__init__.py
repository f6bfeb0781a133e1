"""ArchScript reader: character classifier and recursive-descent parser."""

from archscript.reader.lexer import TokenClass, token_at
from archscript.reader.parser import Parser, parse, parse_all

__all__ = ["TokenClass", "token_at", "Parser", "parse", "parse_all"]
