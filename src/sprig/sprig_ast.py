"""
Defines the abstract syntax tree (AST) node structure for the Sprig expression language.

Classes:
    ASTNode:
        Represents a node in the syntax tree, produced by the parser and consumed by
        the formatter and test suites.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python dictionaries,
        suitable for JSON output or debugging.

Each ASTNode tracks:
    kind (str): One of the node kinds listed in `NODE_KINDS`.
    value: Leaf payload (string body, float, variable name) or, for `function_call`,
        the callee node.
    children (list[ASTNode]): Operands in source order; call arguments for `function_call`.
    line (int): Source line of the token that introduced the node.
    col (int): Source column of the token that introduced the node.

Shapes:
    leaf   (string, number, variable)   value=payload,   children=[]
    unary  (logical_not, ...)           value=None,      children=[operand]
    binary (addition, ...)              value=None,      children=[left, right]
    call   (function_call)              value=callee,    children=[*arguments]

Example:
    node = ASTNode("addition", children=[ASTNode("number", 1.0), ASTNode("number", 2.0)])
"""

from typing import Any, TypedDict, Union

LEAF_KINDS = frozenset({"string", "number", "variable"})

UNARY_KINDS = frozenset({"logical_not", "unary_negation", "typeof"})

BINARY_KINDS = frozenset(
    {
        "member_access",
        "multiplication",
        "division",
        "remainder",
        "addition",
        "subtraction",
        "less_than",
        "less_than_eq",
        "greater_than",
        "greater_than_eq",
        "equality",
        "inequality",
        "logical_and",
        "logical_or",
        "assignment",
    }
)

CALL_KIND = "function_call"

NODE_KINDS = LEAF_KINDS | UNARY_KINDS | BINARY_KINDS | {CALL_KIND}


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): The type of AST node (e.g., "addition", "function_call").
        value (Any): Leaf payload, nested ASTDict for a call's callee, or None.
        line (int): Line number in the source code where the node originates.
        col (int): Column number in the source code where the node originates.
        children (List[ASTDict]): Operands or call arguments.
    """

    kind: str
    value: Any
    line: int
    col: int
    children: list["ASTDict"]


class ASTNode:
    """
    Represents a node in the abstract syntax tree (AST) for the Sprig language.

    Nodes own their children outright; the parser never shares a node between
    two parents, so every tree it returns is acyclic.

    Args:
        kind (str): One of `NODE_KINDS`.
        value (Union[str, float, ASTNode], optional): Leaf payload or call callee.
        children (list[ASTNode], optional): Operands or call arguments.
        line (int): Source line number (default is 0).
        col (int): Source column number (default is 0).

    Raises:
        ValueError: If `kind` is not a known node kind.
    """

    def __init__(
        self,
        kind: str,
        value: Union[str, float, "ASTNode"] | None = None,
        children: list["ASTNode"] | None = None,
        line: int = 0,
        col: int = 0,
    ):
        if kind not in NODE_KINDS:
            raise ValueError(f"Unknown AST node kind: {kind!r}")
        self.kind = kind
        self.value = value
        self.children: list["ASTNode"] = children or []
        self.line = line
        self.col = col

    @property
    def left(self) -> "ASTNode":
        return self.children[0]

    @property
    def right(self) -> "ASTNode":
        return self.children[1]

    @property
    def operand(self) -> "ASTNode":
        return self.children[0]

    def is_leaf(self) -> bool:
        return self.kind in LEAF_KINDS

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.value is not None:
            parts.append(f"value={repr(self.value)}")
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return (
            self.kind == other.kind
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.children == other.children
        )

    def same_shape(self, other: "ASTNode") -> bool:
        """Structural equality that ignores source positions."""
        if self.kind != other.kind or len(self.children) != len(other.children):
            return False
        if isinstance(self.value, ASTNode):
            if not isinstance(other.value, ASTNode) or not self.value.same_shape(
                other.value
            ):
                return False
        elif self.value != other.value:
            return False
        return all(a.same_shape(b) for a, b in zip(self.children, other.children))

    def walk(self) -> list["ASTNode"]:
        """Returns this node and all descendants in pre-order."""
        nodes = [self]
        if isinstance(self.value, ASTNode):
            nodes.extend(self.value.walk())
        for child in self.children:
            nodes.extend(child.walk())
        return nodes

    def to_dict(self) -> ASTDict:
        val: Any = self.value
        if isinstance(val, ASTNode):
            val = val.to_dict()

        return {
            "kind": self.kind,
            "value": val,
            "line": self.line,
            "col": self.col,
            "children": [c.to_dict() for c in self.children],
        }


__all__ = [
    "ASTDict",
    "ASTNode",
    "BINARY_KINDS",
    "CALL_KIND",
    "LEAF_KINDS",
    "NODE_KINDS",
    "UNARY_KINDS",
]
