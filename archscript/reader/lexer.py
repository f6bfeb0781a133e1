"""Character classifier for the ArchScript reader.

The lexer is stateless: given the source and a cursor it names the class of
the character under the cursor and never advances. The parser decides how
many characters a construct consumes.
"""

from __future__ import annotations

from enum import Enum


class TokenClass(Enum):
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    OPEN_BRACE = "{"
    CLOSE_BRACE = "}"
    APOSTROPHE = "'"
    QUOTE = '"'
    DOT = "."
    WHITESPACE = "whitespace"
    LETTER = "letter"
    DIGIT = "digit"
    UNKNOWN = "unknown"
    END = "end"


_PUNCTUATION: dict[str, TokenClass] = {
    "(": TokenClass.OPEN_PAREN,
    ")": TokenClass.CLOSE_PAREN,
    "{": TokenClass.OPEN_BRACE,
    "}": TokenClass.CLOSE_BRACE,
    "'": TokenClass.APOSTROPHE,
    '"': TokenClass.QUOTE,
    ".": TokenClass.DOT,
}

# Characters that end a symbol or number lexeme
DELIMITERS = frozenset({
    TokenClass.OPEN_PAREN,
    TokenClass.CLOSE_PAREN,
    TokenClass.OPEN_BRACE,
    TokenClass.CLOSE_BRACE,
    TokenClass.WHITESPACE,
    TokenClass.END,
})


def token_at(source: str, pos: int) -> TokenClass:
    if pos >= len(source):
        return TokenClass.END
    c = source[pos]
    token = _PUNCTUATION.get(c)
    if token is not None:
        return token
    if c.isspace():
        return TokenClass.WHITESPACE
    if "0" <= c <= "9":
        return TokenClass.DIGIT
    if c.isalpha() or c == "_":
        return TokenClass.LETTER
    return TokenClass.UNKNOWN
