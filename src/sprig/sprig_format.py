"""
Renders Sprig AST nodes as text.

This module defines the `SourceEmitter` class, which turns the trees produced by
`sprig.sprig_parser` back into readable text. It is used by the CLI and REPL to
display parse results and by the test suite to check that a rendered tree
parses back to the same shape.

Output Forms:
    - S-expression: `(addition (number 1) (multiplication (number 2) (number 3)))`
    - Source: fully parenthesised Sprig, e.g. `(1 + (2 * 3))`

Behavior:
    - Dispatches on `node.kind` to an `emit_<kind>` method, falling back to the
      grouped `emit_unary` / `emit_binary` handlers.
    - Numbers print without a trailing `.0` when they are integral, and infinity
      prints as `1e999`.

Raises:
    - `NotImplementedError`: If a node kind has no corresponding emitter.
"""

import json
import math
from decimal import Decimal
from typing import Any

from sprig.sprig_ast import BINARY_KINDS, UNARY_KINDS, ASTNode
from sprig.sprig_constants import binary_symbols, unary_symbols

# A literal the lexer reads back as float("inf")
OVERFLOW_LITERAL = "1e999"


def format_number(value: Any) -> str:
    """Shortest positional spelling of `value` that the lexer reads back unchanged."""
    if value == math.inf:
        # overflowing literals such as 1e999 or long hex runs lex to inf
        return OVERFLOW_LITERAL
    if not isinstance(value, float) or not math.isfinite(value):
        return repr(value)
    if value.is_integer():
        return str(int(value))
    # the lexer has no signed exponents, so never emit "1e-05"
    return format(Decimal(repr(value)), "f")


class SourceEmitter:
    """Emits text from Sprig AST nodes.

    Methods:
        to_sexpr(node): Renders a tree as a nested S-expression.
        to_source(node): Renders a tree as fully parenthesised Sprig source.
        to_json(node): Renders a tree as indented JSON.
        emit_expr(node): Dispatches a node to its `emit_*` method.
    """

    def to_sexpr(self, node: ASTNode) -> str:
        if node.kind == "number":
            return f"(number {format_number(node.value)})"
        if node.kind == "string":
            return f'(string "{node.value}")'
        if node.kind == "variable":
            return f"(variable {node.value})"
        parts = [node.kind]
        if isinstance(node.value, ASTNode):
            parts.append(self.to_sexpr(node.value))
        parts.extend(self.to_sexpr(c) for c in node.children)
        return f"({' '.join(parts)})"

    def to_source(self, node: ASTNode) -> str:
        return self.emit_expr(node)

    def to_json(self, node: ASTNode) -> str:
        return json.dumps(node.to_dict(), indent=2)

    def emit_string(self, node: ASTNode) -> str:
        # escape pairs were never decoded, so the body is already source text
        return f'"{node.value}"'

    def emit_number(self, node: ASTNode) -> str:
        return format_number(node.value)

    def emit_variable(self, node: ASTNode) -> str:
        return str(node.value)

    def emit_member_access(self, node: ASTNode) -> str:
        # `1.5` would lex as one number and `a.b.c` would regroup to the left
        obj = self.emit_expr(node.left)
        if node.left.kind == "number":
            obj = f"({obj})"
        member = self.emit_expr(node.right)
        if node.right.kind not in ("variable", "string"):
            member = f"({member})"
        return f"{obj}.{member}"

    def emit_function_call(self, node: ASTNode) -> str:
        if not isinstance(node.value, ASTNode):
            raise TypeError("Expected ASTNode for call callee")
        args = ", ".join(self.emit_expr(a) for a in node.children)
        return f"{self.emit_expr(node.value)}({args})"

    def emit_unary(self, node: ASTNode) -> str:
        return f"({unary_symbols[node.kind]}{self.emit_expr(node.operand)})"

    def emit_binary(self, node: ASTNode) -> str:
        symbol = binary_symbols[node.kind]
        return f"({self.emit_expr(node.left)} {symbol} {self.emit_expr(node.right)})"

    def emit_expr(self, node: ASTNode) -> str:
        """
        Emits a source expression for `node`.

        Parameters
        ----------
        node : ASTNode
            The expression node to emit.

        Returns
        -------
        str
            Fully parenthesised Sprig source for the expression.

        Raises
        ------
        NotImplementedError
            If no emitter exists for the node kind.
        """
        method = getattr(self, f"emit_{node.kind}", None)
        if callable(method):
            return str(method(node))
        if node.kind in UNARY_KINDS:
            return self.emit_unary(node)
        if node.kind in BINARY_KINDS:
            return self.emit_binary(node)
        raise NotImplementedError(f"No expression emitter for kind '{node.kind}'")


__all__ = ["SourceEmitter", "format_number"]
