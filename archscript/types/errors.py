"""The Error variant: raised as an exception and inspected as a value.

While unwinding, every enclosing Expression appends its own source to
``context`` so the printed message reads innermost failure first.
"""

from __future__ import annotations

from archscript.types.value import Value


class ArchError(Value, Exception):
    """Base class for all ArchScript errors"""

    kind = "Error"

    def __init__(self, message: str, context: str = ""):
        super().__init__(message)
        self.message: str = message
        self.context: str = context

    def add_context(self, source: str) -> None:
        self.context += f" ### {source}"

    def source(self) -> str:
        return self.message

    def __str__(self) -> str:
        return self.message + self.context

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class ArchUnboundSymbol(ArchError):
    """ Raised when a symbol is used before it is bound"""


class ArchKeyError(ArchError):
    """ Raised when a dotted path names a key the Struct does not have"""


class ArchTypeError(ArchError):
    """ Raised when a value has the wrong variant for its position"""


class ArchArityError(ArchError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class ArchSyntaxError(ArchError):
    """ Raised when the reader finds malformed source text"""

    def __init__(self, message: str, context: str = "", position: int = 0):
        super().__init__(message, context)
        self.position: int = position


class ArchIncompleteInput(ArchSyntaxError):
    """ Raised when input ends inside an open form and nobody can supply more"""


class ArchUsageError(ArchError):
    """ Raised when return, goto or label is used outside a construct that handles it"""
