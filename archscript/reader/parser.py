"""
  ArchScript reader: recursive-descent parser

- Dispatches purely on the class of the next character (see lexer.token_at)
- Emits Value nodes directly; code and data share one representation:

    - digits            -> Integer, or Double when a '.' appears
    - letters           -> Symbol (dotted paths allowed), Nil / True keywords
    - "text"            -> String
    - 'literal          -> Integer / Double / String / List (empty list -> Nil)
    - (head args...)    -> Expression (empty -> Nil)
    - {key: form ...}   -> Struct literal

When input ends inside an open form the parser asks its collaborator for
more text through the ``more_input`` callback, passing the partial source.
Non-empty text is appended on a new line and parsing resumes where it
stopped. An empty answer appends a single blank, after which running out
again is a structural error.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from archscript import MoreInputFn
from archscript.reader.lexer import DELIMITERS, TokenClass, token_at
from archscript.types.value import Value
from archscript.types.nil import Nil, T
from archscript.types.atoms import INT64_MAX, INT64_MIN, Integer, Double, String
from archscript.types.collections import List, Struct
from archscript.types.symbol import Symbol
from archscript.types.expression import Expression
from archscript.types.errors import ArchIncompleteInput, ArchSyntaxError

logger = logging.getLogger(__name__)

KEYWORDS: dict[str, Value] = {"nil": Nil, "true": T}

# Characters that also end a symbol lexeme, on top of lexer.DELIMITERS
_SYMBOL_STOPS = frozenset({TokenClass.QUOTE, TokenClass.APOSTROPHE})


class Parser:
    def __init__(self, source: str, more_input: Optional[MoreInputFn] = None):
        self.source: str = source
        self.pos: int = 0
        self.more_input: Optional[MoreInputFn] = more_input
        self._exhausted: bool = False
        # Offset where the most recent top-level form began
        self.form_start: int = 0

    # ------------------------
    # Cursor helpers
    # ------------------------
    def peek(self) -> TokenClass:
        return token_at(self.source, self.pos)

    @property
    def char(self) -> str:
        return self.source[self.pos] if self.pos < len(self.source) else ""

    def _error(self, message: str, start: int, error_cls: type[ArchSyntaxError] = ArchSyntaxError,
               end: Optional[int] = None) -> ArchSyntaxError:
        end = self.pos + 1 if end is None else end
        return error_cls(f"{message} [{self.source[start:end]}]", f" ### {self.source}", start)

    def _need_more(self, message: str, start: int) -> None:
        """End of input inside an open form: extend the buffer or fail."""
        if self.more_input is None:
            raise self._error(message, start, ArchIncompleteInput)
        if self._exhausted:
            raise self._error(message, start)
        logger.debug("incomplete form, requesting more input after %r", self.source)
        text = self.more_input(self.source)
        if text:
            self.source += "\n" + text
        else:
            self.source += " "
            self._exhausted = True

    def _skip_whitespace(self, message: Optional[str] = None, start: int = 0) -> TokenClass:
        """Skip blanks. With a message we are inside a form and END pulls more input."""
        while True:
            token = self.peek()
            if token is TokenClass.WHITESPACE:
                self.pos += 1
            elif token is TokenClass.END and message is not None:
                self._need_more(message, start)
            else:
                return token

    def _at_negative_number(self) -> bool:
        return self.char == "-" and token_at(self.source, self.pos + 1) is TokenClass.DIGIT

    # ------------------------
    # Entry points
    # ------------------------
    def parse_one_form(self) -> Optional[Value]:
        """Read the next top-level form; None once the input is used up."""
        if self._skip_whitespace() is TokenClass.END:
            return None
        self.form_start = self.pos
        return self._form()

    def parse_all(self) -> Iterator[Value]:
        while (form := self.parse_one_form()) is not None:
            yield form

    # ------------------------
    # Forms
    # ------------------------
    def _form(self) -> Value:
        start = self.pos
        match self.peek():
            case TokenClass.DIGIT:
                return self._number()
            case TokenClass.LETTER:
                return self._symbol()
            case TokenClass.QUOTE:
                self.pos += 1
                return self._string(start)
            case TokenClass.APOSTROPHE:
                self.pos += 1
                return self._literal(start)
            case TokenClass.OPEN_PAREN:
                self.pos += 1
                return self._expression(start)
            case TokenClass.OPEN_BRACE:
                self.pos += 1
                return self._struct(start, literal=False)
            case TokenClass.CLOSE_PAREN:
                raise self._error("mismatched close parenthesis", start)
            case TokenClass.CLOSE_BRACE:
                raise self._error("mismatched close brace", start)
            case TokenClass.UNKNOWN if self._at_negative_number():
                return self._number()
            case TokenClass.UNKNOWN if self.char != ":":
                # Operator-like names such as @, set@ or =
                return self._symbol()
        raise self._error("unexpected character", start)

    def _number(self) -> Value:
        start = self.pos
        if self.char == "-":
            self.pos += 1
        dotted = False
        while True:
            token = self.peek()
            if token is TokenClass.DIGIT:
                self.pos += 1
            elif token is TokenClass.DOT:
                if dotted:
                    raise self._error("invalid number format", start)
                dotted = True
                self.pos += 1
            elif token in DELIMITERS:
                break
            else:
                raise self._error("invalid number format", start)
        text = self.source[start:self.pos]
        if dotted:
            return Double(float(text))
        value = int(text)
        if not INT64_MIN <= value <= INT64_MAX:
            raise self._error("invalid number format", start, end=self.pos)
        return Integer(value)

    def _symbol(self) -> Value:
        start = self.pos
        while not (self.peek() in DELIMITERS or self.peek() in _SYMBOL_STOPS or self.char == ":"):
            self.pos += 1
        name = self.source[start:self.pos]
        keyword = KEYWORDS.get(name.lower())
        if keyword is not None:
            return keyword
        if not all(name.split(".")):
            raise self._error("invalid symbol", start, end=self.pos)
        return Symbol(name)

    def _string(self, start: int) -> String:
        while (end := self.source.find('"', self.pos)) == -1:
            self.pos = len(self.source)
            self._need_more("unterminated string", start)
        text = self.source[start + 1:end]
        self.pos = end + 1
        return String(text)

    def _expression(self, start: int) -> Value:
        items: list[Value] = []
        while True:
            token = self._skip_whitespace("unterminated expression", start)
            if token is TokenClass.CLOSE_PAREN:
                self.pos += 1
                return Expression(items) if items else Nil
            if token is TokenClass.CLOSE_BRACE:
                raise self._error("mismatched close brace", start)
            items.append(self._form())

    def _struct(self, start: int, literal: bool) -> Struct:
        fields: dict[str, Value] = {}
        while True:
            token = self._skip_whitespace("unterminated struct", start)
            if token is TokenClass.CLOSE_BRACE:
                self.pos += 1
                return Struct(fields)
            if token is TokenClass.CLOSE_PAREN:
                raise self._error("mismatched close parenthesis", start)
            if token is not TokenClass.LETTER:
                raise self._error("struct key expected", self.pos)
            key_start = self.pos
            while self.peek() in (TokenClass.LETTER, TokenClass.DIGIT) or self.char == "-":
                self.pos += 1
            key = self.source[key_start:self.pos]
            self._skip_whitespace("unterminated struct", start)
            if self.char != ":":
                raise self._error(f"':' expected after key {key}", key_start)
            self.pos += 1
            self._skip_whitespace("unterminated struct", start)
            fields[key] = self._literal_item() if literal else self._form()

    # ------------------------
    # Quoted literals
    # ------------------------
    def _literal(self, start: int) -> Value:
        if self.peek() in (TokenClass.WHITESPACE, TokenClass.END, TokenClass.CLOSE_PAREN, TokenClass.CLOSE_BRACE):
            raise self._error("bad literal", start)
        return self._literal_item()

    def _literal_item(self) -> Value:
        start = self.pos
        match self.peek():
            case TokenClass.DIGIT:
                return self._number()
            case TokenClass.UNKNOWN if self._at_negative_number():
                return self._number()
            case TokenClass.OPEN_PAREN:
                self.pos += 1
                return self._literal_list(start)
            case TokenClass.QUOTE:
                self.pos += 1
                return self._string(start)
            case TokenClass.OPEN_BRACE:
                self.pos += 1
                return self._struct(start, literal=True)
            case TokenClass.APOSTROPHE:
                self.pos += 1
                return self._literal(start)
            case TokenClass.CLOSE_PAREN | TokenClass.CLOSE_BRACE:
                raise self._error("bad literal", start)
        # A bare word is taken as a string, never looked up
        while not (self.peek() in DELIMITERS or self.peek() in _SYMBOL_STOPS):
            self.pos += 1
        word = self.source[start:self.pos]
        keyword = KEYWORDS.get(word.lower())
        return keyword if keyword is not None else String(word)

    def _literal_list(self, start: int) -> Value:
        items: list[Value] = []
        while True:
            token = self._skip_whitespace("unterminated list", start)
            if token is TokenClass.CLOSE_PAREN:
                self.pos += 1
                return List(items) if items else Nil
            if token is TokenClass.CLOSE_BRACE:
                raise self._error("mismatched close brace", start)
            items.append(self._literal_item())


def parse(source: str, more_input: Optional[MoreInputFn] = None) -> Optional[Value]:
    """Parse the first form of `source` (None for blank input)."""
    return Parser(source, more_input).parse_one_form()


def parse_all(source: str, more_input: Optional[MoreInputFn] = None) -> Iterator[Value]:
    return Parser(source, more_input).parse_all()
