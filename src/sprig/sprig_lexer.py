"""
Lexical analyzer for the Sprig expression language.

This module provides core components for converting raw source text into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, source location and length.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips spaces, tabs and newlines; drops carriage returns and NUL characters
    - Recognizes:
        * Identifiers and the `typeof` keyword
        * Decimal numbers with optional fraction and exponent
        * Hexadecimal (`0x`), octal (`0o`) and binary (`0b`) integers
        * Strings (escape pairs kept verbatim)
        * One- and two-character operators and punctuation
    - Every token records how many source characters it consumed

Raises:
    LexError: One of its subclasses on the first malformed token; see
    `sprig.sprig_errors`.

Example:
    >>> tokens = tokenize("0x1A + y")
    >>> tokens[0]
    Token(NUMBER, 26.0)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
    - token_hashmap
"""

import logging
import string
from typing import Any

from sprig.sprig_constants import (
    EOF,
    IDENT,
    NUMBER,
    STRING,
    compound_prefixes,
    doubled_only,
    keyword_tokens,
    radix_prefixes,
    string_escapes,
    token_hashmap,
)
from sprig.sprig_errors import (
    InvalidCharacter,
    InvalidFloatLiteral,
    InvalidNumberLiteral,
    InvalidStringEscapeSequence,
    LexError,
    UnterminatedStringLiteral,
)
from sprig.sprig_format import format_number

logger = logging.getLogger(__name__)

IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CHARS = IDENT_START | frozenset(string.digits)
DECIMAL_DIGITS = frozenset(string.digits)
RADIX_DIGITS: dict[int, str] = {
    16: string.hexdigits,
    8: string.octdigits,
    2: "01",
}

# Characters consumed without moving the column cursor
SILENT_CHARS = frozenset("\r\0")


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    This stream is used by the Sprig lexer to support character-by-character scanning
    with precise source location metadata for error reporting.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        A newline moves the cursor to column 1 of the next line; carriage
        returns and NUL characters leave the column untouched.

        Returns:
            str: The next character.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        elif char not in SILENT_CHARS:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Args:
            offset (int, optional): Number of characters to look ahead. Defaults to 0.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        """Checks if the stream has reached the end of the source input."""
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Sprig language.

    Attributes:
        type (str): The canonical token type (e.g. 'IDENT', 'NUMBER', 'PLUS', 'EOF').
        value (str | float): Identifier text, string body, numeric value, or symbol text.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
        length (int): Number of source characters the token consumed.
    """

    def __init__(
        self,
        type_: str,
        value: str | float,
        line: int = 0,
        col: int = 0,
        length: int | None = None,
    ):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col
        if length is None:
            length = len(value) if isinstance(value, str) else 0
        self.length = length

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.length == other.length
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col, self.length))

    def describe(self) -> str:
        """Human-readable form used in parser error messages."""
        if self.type == EOF:
            return "end of input"
        if self.type == STRING:
            return f'string "{self.value}"'
        if self.type == NUMBER:
            if isinstance(self.value, float):
                return f"number {format_number(self.value)}"
            return "number"
        if self.type == IDENT:
            return f"identifier '{self.value}'"
        return f"'{self.value}'"


class Lexer:
    """Lexical analyzer for the Sprig language.

    The Lexer takes a CharacterStream and converts it into a stream of Token objects.
    Scanning is single-pass; lookahead never exceeds two characters and never
    reaches back into a token that has already been emitted.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        filename (str | None): Source name reported in errors.
    """

    def __init__(self, stream: CharacterStream, filename: str | None = None) -> None:
        self.stream = stream
        self.filename = filename

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips spaces, tabs, newlines, carriage returns and NUL characters."""
        while not self.stream.end_of_file() and self.peek() in " \t\n\r\0":
            self.advance()

    def make_token(
        self, type_: str, value: str | float, line: int, col: int, start: int
    ) -> Token:
        return Token(type_, value, line, col, self.stream.position - start)

    def read_run(self, charset: frozenset[str] | str) -> str:
        run = ""
        while not self.stream.end_of_file() and self.peek() in charset:
            run += self.advance()
        return run

    def read_fraction_and_exponent(self, text: str) -> str:
        """Extends `text` with `.digits` and then `e digits` where present.

        A dot or `e` that is not immediately followed by a digit is left in
        the stream for the next token.
        """
        if self.peek() == "." and self.peek(1) in DECIMAL_DIGITS:
            text += self.advance()
            text += self.read_run(DECIMAL_DIGITS)
        if self.peek() == "e" and self.peek(1) in DECIMAL_DIGITS:
            text += self.advance()
            text += self.read_run(DECIMAL_DIGITS)
        return text

    def lex_radix(self, prefix: str, line: int, col: int) -> float:
        base = radix_prefixes[prefix]
        digits = self.read_run(RADIX_DIGITS[base])
        if not digits:
            raise InvalidNumberLiteral(
                line, col, self.filename, detail=f"'0{prefix}' has no digits"
            )
        value = 0.0
        for digit in digits:
            value = value * base + int(digit, base)
        return value

    def lex_number(self, line: int, col: int, start: int) -> Token:
        """Scans a numeric literal whose first character is a digit."""
        first = self.advance()

        if first == "0":
            nxt = self.peek()
            if nxt in radix_prefixes:
                self.advance()
                value = self.lex_radix(nxt, line, col)
                return self.make_token(NUMBER, value, line, col, start)
            if nxt == "." and self.peek(1) in DECIMAL_DIGITS:
                text = self.read_fraction_and_exponent(first)
            else:
                return self.make_token(NUMBER, 0.0, line, col, start)
        else:
            digits = first + self.read_run(DECIMAL_DIGITS)
            text = self.read_fraction_and_exponent(digits)

        try:
            number = float(text)
        except ValueError:
            raise InvalidFloatLiteral(
                line, col, self.filename, detail=repr(text)
            ) from None
        return self.make_token(NUMBER, number, line, col, start)

    def lex_string(self, line: int, col: int, start: int) -> Token:
        """Scans a double-quoted string; escape pairs are copied, not decoded."""
        self.advance()  # opening quote
        body = ""
        while True:
            ch = self.peek()
            if ch == "" or ch == "\n":
                raise UnterminatedStringLiteral(line, col, self.filename)
            if ch == '"':
                self.advance()
                break
            if ch == "\\":
                escaped = self.peek(1)
                if escaped == "":
                    raise UnterminatedStringLiteral(line, col, self.filename)
                if escaped not in string_escapes:
                    raise InvalidStringEscapeSequence(
                        self.stream.line,
                        self.stream.column,
                        self.filename,
                        detail=repr("\\" + escaped),
                    )
                body += self.advance()
                body += self.advance()
                continue
            body += self.advance()
        return self.make_token(STRING, body, line, col, start)

    def lex_operator(self, line: int, col: int, start: int) -> Token:
        """Matches a one- or two-character symbol at the current position."""
        ch = self.peek()
        if ch in compound_prefixes and self.peek(1) == "=":
            symbol = self.advance() + self.advance()
        elif ch in doubled_only:
            if self.peek(1) != ch:
                raise InvalidCharacter(ch, line, col, self.filename)
            symbol = self.advance() + self.advance()
        elif ch in token_hashmap:
            symbol = self.advance()
        else:
            raise InvalidCharacter(ch, line, col, self.filename)
        return self.make_token(token_hashmap[symbol], symbol, line, col, start)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or an `EOF` token of length 0 once input is exhausted.

        Raises:
            LexError: If a malformed token is encountered.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(EOF, EOF, line, col, 0)

        ch = self.peek()
        start = self.stream.position

        # 1. Identifier or keyword
        if ch in IDENT_START:
            ident = self.read_run(IDENT_CHARS)
            type_ = keyword_tokens.get(ident, IDENT)
            return self.make_token(type_, ident, line, col, start)

        # 2. Number
        if ch in DECIMAL_DIGITS:
            return self.lex_number(line, col, start)

        # 3. String
        if ch == '"':
            return self.lex_string(line, col, start)

        # 4. Operator, punctuation, or invalid character
        return self.lex_operator(line, col, start)


def tokenize(source: str, filename: str | None = None) -> list[Token]:
    """Tokenizes a complete source string.

    Args:
        source (str): Source text.
        filename (str | None): Name used in error messages.

    Returns:
        list[Token]: All tokens in source order, without the trailing EOF token.

    Raises:
        LexError: On the first malformed token. `tokens` on the error holds
        everything emitted before it.
    """
    lexer = Lexer(CharacterStream(source), filename)
    tokens: list[Token] = []
    try:
        while True:
            tok = lexer.next_token()
            if tok.type == EOF:
                break
            tokens.append(tok)
    except LexError as err:
        err.tokens = tokens
        logger.debug("lexing stopped after %d tokens: %s", len(tokens), err.message)
        raise
    logger.debug("tokenized %d tokens", len(tokens))
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "token_hashmap", "tokenize"]
