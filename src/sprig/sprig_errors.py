"""
Error hierarchy for the Sprig tokenizer and parser.

Both stages stop at the first problem they find and raise one of the
exceptions below. Every error carries the 1-based source position it was
raised at and renders as::

    <input>:3:7: error: unterminated string literal

Hierarchy:
    SprigError (SyntaxError)
    ├── LexError
    │   ├── InvalidFloatLiteral
    │   ├── InvalidNumberLiteral
    │   ├── InvalidStringEscapeSequence
    │   ├── UnterminatedStringLiteral
    │   └── InvalidCharacter
    └── ParseError

`SprigError` subclasses the built-in `SyntaxError`, so code that already
guards a lex/parse call with `except SyntaxError` keeps working.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from sprig.sprig_lexer import Token

DEFAULT_FILENAME = "<input>"


class SprigError(SyntaxError):
    """Base class for every positioned Sprig error.

    Attributes:
        message (str): Description without the location prefix.
        line (int): 1-based line of the error.
        col (int): 1-based column of the error.
        filename (str): Source name used in the rendered message.
    """

    def __init__(
        self, message: str, line: int = 0, col: int = 0, filename: str | None = None
    ) -> None:
        self.message = message
        self.line = line
        self.col = col
        self.filename = filename or DEFAULT_FILENAME
        super().__init__(self.format())
        # SyntaxError.__init__ owns these slots; set them after it runs
        self.filename = filename or DEFAULT_FILENAME
        self.lineno = line
        self.offset = col

    def format(self) -> str:
        return f"{self.filename}:{self.line}:{self.col}: error: {self.message}"

    def __str__(self) -> str:
        return self.format()


class LexError(SprigError):
    """Raised by the tokenizer.

    Attributes:
        tokens (list[Token]): Tokens emitted before the failure.
    """

    description = "lexical error"

    def __init__(
        self,
        line: int,
        col: int,
        filename: str | None = None,
        tokens: list[Token] | None = None,
        detail: str | None = None,
    ) -> None:
        self.tokens: list[Token] = tokens if tokens is not None else []
        message = self.description
        if detail is not None:
            message = f"{message}: {detail}"
        super().__init__(message, line, col, filename)


class InvalidFloatLiteral(LexError):
    description = "invalid float literal"


class InvalidNumberLiteral(LexError):
    description = "invalid number literal"


class InvalidStringEscapeSequence(LexError):
    description = "invalid escape sequence in string literal"


class UnterminatedStringLiteral(LexError):
    description = "unterminated string literal"


class InvalidCharacter(LexError):
    """Raised for a character that cannot start any token."""

    description = "invalid character"

    def __init__(
        self,
        char: str,
        line: int,
        col: int,
        filename: str | None = None,
        tokens: list[Token] | None = None,
    ) -> None:
        self.char = char
        super().__init__(line, col, filename, tokens, detail=repr(char))


class ParseError(SprigError):
    """Raised by the parser.

    Attributes:
        token (Token | None): The offending token, or None at end of input.
        expected (str | None): What the parser was looking for.
    """

    def __init__(
        self,
        message: str,
        token: Token | None = None,
        expected: str | None = None,
        line: int = 0,
        col: int = 0,
        filename: str | None = None,
    ) -> None:
        self.token = token
        self.expected = expected
        if token is not None:
            line, col = token.line, token.col
        super().__init__(message, line, col, filename)


__all__ = [
    "DEFAULT_FILENAME",
    "InvalidCharacter",
    "InvalidFloatLiteral",
    "InvalidNumberLiteral",
    "InvalidStringEscapeSequence",
    "LexError",
    "ParseError",
    "SprigError",
    "UnterminatedStringLiteral",
]
