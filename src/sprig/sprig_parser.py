"""
Sprig Expression Parser

Parses Sprig tokens into structured abstract syntax trees (ASTs).

This module implements a precedence-climbing recursive-descent parser which turns
the flat token list produced by `sprig.sprig_lexer` into a single `ASTNode`
expression tree. Each precedence tier is one method that only handles its own
operators and delegates tighter-binding operands to the next tier.

Precedence (loosest to tightest)
--------------------------------
1. Assignment       `=`                     right-associative
2. Logical OR       `||`                    left-associative
3. Logical AND      `&&`                    left-associative
4. Equality         `==` `!=`               left-associative
5. Relational       `<` `<=` `>` `>=`       left-associative
6. Additive         `+` `-`                 left-associative
7. Multiplicative   `*` `/` `%`             left-associative
8. Unary            `!` `typeof` `-`        prefix, nests (`!!x`)
9. Postfix          `.value` `(args)`       applied left to right
10. Value           literal, identifier, `( expression )`

Parser Behavior
---------------
- Fails fast: the first unexpected token or premature end of input raises
  `ParseError`; no partial tree is returned.
- Lookahead is the current token plus, occasionally, the one after it.
- Call argument lists reject a trailing comma.
- Grouping, call arguments, prefix operators and chained assignments may nest
  at most `MAX_NESTING_DEPTH` levels; deeper input raises `ParseError`
  instead of exhausting the Python stack.

Entry Points
------------
- `Parser.parse()`: Parse one expression and require the tokens to be exhausted.
- `Parser.parse_expression()`: Parse one expression from the current position.
- `parse_expression(tokens)`: Module-level helper over a token list.
- `parse(source)`: Tokenize and parse a source string.

Raises
------
ParseError
    Raised when malformed input is encountered or input ends early.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sprig.sprig_ast import CALL_KIND, ASTNode
from sprig.sprig_constants import (
    EOF,
    additive_ops,
    assignment_ops,
    equality_ops,
    literal_tokens,
    logical_and_ops,
    logical_or_ops,
    multiplicative_ops,
    relational_ops,
    unary_ops,
)
from sprig.sprig_errors import ParseError
from sprig.sprig_lexer import Token, tokenize

logger = logging.getLogger(__name__)

# Each grouped level costs about twenty interpreter frames
MAX_NESTING_DEPTH = 32


class Parser:
    """
    Sprig Parser Class

    Responsible for transforming a list of lexical tokens into a single
    `ASTNode` expression tree.

    The token list is never mutated; the parser walks it with an index cursor,
    which behaves exactly like popping tokens off the front of a queue.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream to be parsed (without a trailing EOF token).
    position : int
        Current index into the token stream.
    filename : str | None
        Source name reported in errors.

    Methods
    -------
    parse() -> ASTNode
        Parse a complete expression; trailing tokens are an error.
    parse_expression() -> ASTNode
        Parse an expression starting at the assignment tier.
    parse_assignment() -> ASTNode
        Parse `target = value`, recursing on the right for right-associativity.
    parse_logical_or() / parse_logical_and() / parse_equality() /
    parse_relational() / parse_additive() / parse_multiplicative() -> ASTNode
        Left-associative binary tiers.
    parse_unary() -> ASTNode
        Parse prefix `!`, `typeof` and `-`.
    parse_postfix() -> ASTNode
        Parse a value followed by member accesses and call argument lists.
    parse_call(callee) -> ASTNode
        Parse a parenthesised, comma-separated argument list.
    parse_value() -> ASTNode
        Parse a literal, identifier or parenthesised expression.

    Raises
    ------
    ParseError
        When an invalid construct or premature end of input is encountered.
    """

    def __init__(self, tokens: list[Token], filename: str | None = None) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.depth: int = 0
        self.filename = filename

    def end_token(self) -> Token:
        """Synthetic EOF token placed just after the last real token."""
        if not self.tokens:
            return Token(EOF, EOF, 1, 1, 0)
        last = self.tokens[-1]
        return Token(EOF, EOF, last.line, last.col + last.length, 0)

    def current(self) -> Token:
        return (
            self.tokens[self.position]
            if self.position < len(self.tokens)
            else self.end_token()
        )

    def peek(self, offset: int = 1) -> Token:
        index = self.position + offset
        return self.tokens[index] if index < len(self.tokens) else self.end_token()

    def advance(self) -> Token:
        """Consumes the current token and returns it."""
        tok = self.current()
        if tok.type == EOF:
            raise self.error("a token")
        self.position += 1
        return tok

    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def error(self, expected: str) -> ParseError:
        """Builds an error describing the current token against `expected`."""
        tok = self.current()
        if tok.type == EOF:
            return ParseError(
                f"unexpected end of input, expected {expected}",
                expected=expected,
                line=tok.line,
                col=tok.col,
                filename=self.filename,
            )
        return ParseError(
            f"expected {expected} but found {tok.describe()}",
            token=tok,
            expected=expected,
            filename=self.filename,
        )

    def match(self, type_: str, expected: str) -> Token:
        if self.current().type == type_:
            return self.advance()
        raise self.error(expected)

    def descend(self, parse: Callable[[], ASTNode]) -> ASTNode:
        """Runs `parse` one nesting level deeper.

        Raises:
            ParseError: If the input nests deeper than `MAX_NESTING_DEPTH`,
            positioned at the token that would open the extra level.
        """
        if self.depth >= MAX_NESTING_DEPTH:
            tok = self.current()
            raise ParseError(
                f"expression nested too deeply (limit {MAX_NESTING_DEPTH})",
                token=None if tok.type == EOF else tok,
                line=tok.line,
                col=tok.col,
                filename=self.filename,
            )
        self.depth += 1
        try:
            return parse()
        finally:
            self.depth -= 1

    def parse(self) -> ASTNode:
        """Parse a full expression and ensure no tokens remain."""
        expr = self.parse_expression()
        if not self.at_end():
            raise self.error("end of input")
        logger.debug("parsed %s from %d tokens", expr.kind, len(self.tokens))
        return expr

    def parse_expression(self) -> ASTNode:
        return self.descend(self.parse_assignment)

    def parse_assignment(self) -> ASTNode:
        target = self.parse_logical_or()
        tok = self.current()
        if tok.type in assignment_ops:
            self.advance()
            value = self.descend(self.parse_assignment)
            return ASTNode(
                assignment_ops[tok.type],
                children=[target, value],
                line=tok.line,
                col=tok.col,
            )
        return target

    def fold_left(self, operand: Callable[[], ASTNode], ops: dict[str, str]) -> ASTNode:
        """Parses `operand (op operand)*`, nesting repeated operators to the left."""
        left = operand()
        while self.current().type in ops:
            op_tok = self.advance()
            right = operand()
            left = ASTNode(
                ops[op_tok.type],
                children=[left, right],
                line=op_tok.line,
                col=op_tok.col,
            )
        return left

    def parse_logical_or(self) -> ASTNode:
        return self.fold_left(self.parse_logical_and, logical_or_ops)

    def parse_logical_and(self) -> ASTNode:
        return self.fold_left(self.parse_equality, logical_and_ops)

    def parse_equality(self) -> ASTNode:
        return self.fold_left(self.parse_relational, equality_ops)

    def parse_relational(self) -> ASTNode:
        return self.fold_left(self.parse_additive, relational_ops)

    def parse_additive(self) -> ASTNode:
        return self.fold_left(self.parse_multiplicative, additive_ops)

    def parse_multiplicative(self) -> ASTNode:
        return self.fold_left(self.parse_unary, multiplicative_ops)

    def parse_unary(self) -> ASTNode:
        tok = self.current()
        if tok.type in unary_ops:
            self.advance()
            operand = self.descend(self.parse_unary)
            return ASTNode(
                unary_ops[tok.type], children=[operand], line=tok.line, col=tok.col
            )
        return self.parse_postfix()

    def parse_postfix(self) -> ASTNode:
        expr = self.parse_value()
        while True:
            tok = self.current()
            if tok.type == "DOT":
                self.advance()
                member = self.parse_value()
                expr = ASTNode(
                    "member_access",
                    children=[expr, member],
                    line=tok.line,
                    col=tok.col,
                )
            elif tok.type == "LPAREN":
                expr = self.parse_call(expr)
            else:
                return expr

    def parse_call(self, callee: ASTNode) -> ASTNode:
        """Parse `( [expr {, expr}] )` after `callee`."""
        lparen = self.match("LPAREN", "'('")
        args: list[ASTNode] = []
        if self.current().type == "RPAREN":
            self.advance()
        else:
            while True:
                args.append(self.parse_expression())
                if self.current().type == "COMMA":
                    self.advance()
                    continue
                self.match("RPAREN", "',' or ')' in argument list")
                break
        return ASTNode(
            CALL_KIND, value=callee, children=args, line=lparen.line, col=lparen.col
        )

    def parse_value(self) -> ASTNode:
        tok = self.current()
        if tok.type in literal_tokens:
            self.advance()
            return ASTNode(
                literal_tokens[tok.type], tok.value, line=tok.line, col=tok.col
            )
        if tok.type == "LPAREN":
            self.advance()
            inner = self.parse_expression()
            self.match("RPAREN", "')'")
            return inner
        raise self.error("an expression")


def parse_expression(tokens: list[Token], filename: str | None = None) -> ASTNode:
    """Parse one expression from the front of `tokens`; trailing tokens are ignored."""
    return Parser(tokens, filename).parse_expression()


def parse(source: str, filename: str | None = None) -> ASTNode:
    """Tokenize and parse `source` as exactly one expression.

    Raises:
        LexError: If the source cannot be tokenized.
        ParseError: If the tokens do not form exactly one expression.
    """
    return Parser(tokenize(source, filename), filename).parse()


__all__ = ["MAX_NESTING_DEPTH", "Parser", "parse", "parse_expression"]
