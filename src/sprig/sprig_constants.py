"""
Shared token and operator tables for the Sprig expression language.

The lexer uses `token_hashmap` to classify fixed symbols and reserved words;
the parser uses the per-tier tables to map an operator token type onto the
AST node kind it produces.

Exports:
    - token_hashmap: symbol or keyword text -> token type
    - keyword_tokens: reserved words -> token type
    - literal_tokens: token types that form a leaf value
    - unary_ops, multiplicative_ops, additive_ops, relational_ops,
      equality_ops, logical_and_ops, logical_or_ops, assignment_ops
"""

# Token types that carry a payload rather than a fixed spelling
IDENT = "IDENT"
STRING = "STRING"
NUMBER = "NUMBER"
EOF = "EOF"

keyword_tokens: dict[str, str] = {
    "typeof": "TYPEOF",
}

token_hashmap: dict[str, str] = {
    # Comparison / assignment
    "=": "ASSIGN",
    "==": "EQ",
    "!=": "NE",
    "<": "LT",
    "<=": "LE",
    ">": "GT",
    ">=": "GE",
    # Arithmetic
    "+": "PLUS",
    "-": "SUB",
    "*": "MULT",
    "/": "DIV",
    "%": "MOD",
    # Logic
    "!": "NOT",
    "&&": "AND",
    "||": "OR",
    # Punctuation
    ".": "DOT",
    ",": "COMMA",
    ";": "SEMICOLON",
    "(": "LPAREN",
    ")": "RPAREN",
    "{": "LBRACE",
    "}": "RBRACE",
    "[": "LBRACK",
    "]": "RBRACK",
    **keyword_tokens,
}

# Symbols that may be followed by "=" to form a two-character token
compound_prefixes: frozenset[str] = frozenset("=!<>")

# Symbols that are only valid when doubled
doubled_only: frozenset[str] = frozenset("&|")

# Escape characters accepted after a backslash inside a string literal
string_escapes: frozenset[str] = frozenset('ntr\\"')

radix_prefixes: dict[str, int] = {
    "x": 16,
    "o": 8,
    "b": 2,
}

literal_tokens: dict[str, str] = {
    STRING: "string",
    NUMBER: "number",
    IDENT: "variable",
}

# PARSER TIERS (token type -> AST node kind)

assignment_ops: dict[str, str] = {"ASSIGN": "assignment"}

logical_or_ops: dict[str, str] = {"OR": "logical_or"}

logical_and_ops: dict[str, str] = {"AND": "logical_and"}

equality_ops: dict[str, str] = {
    "EQ": "equality",
    "NE": "inequality",
}

relational_ops: dict[str, str] = {
    "LT": "less_than",
    "LE": "less_than_eq",
    "GT": "greater_than",
    "GE": "greater_than_eq",
}

additive_ops: dict[str, str] = {
    "PLUS": "addition",
    "SUB": "subtraction",
}

multiplicative_ops: dict[str, str] = {
    "MULT": "multiplication",
    "DIV": "division",
    "MOD": "remainder",
}

unary_ops: dict[str, str] = {
    "NOT": "logical_not",
    "TYPEOF": "typeof",
    "SUB": "unary_negation",
}

# Reverse tables used when rendering an AST back to source
binary_symbols: dict[str, str] = {
    kind: sym
    for table in (
        assignment_ops,
        logical_or_ops,
        logical_and_ops,
        equality_ops,
        relational_ops,
        additive_ops,
        multiplicative_ops,
    )
    for tok_type, kind in table.items()
    for sym, mapped in token_hashmap.items()
    if mapped == tok_type
}

unary_symbols: dict[str, str] = {
    "logical_not": "!",
    "typeof": "typeof ",
    "unary_negation": "-",
}

__all__ = [
    "EOF",
    "IDENT",
    "NUMBER",
    "STRING",
    "additive_ops",
    "assignment_ops",
    "binary_symbols",
    "compound_prefixes",
    "doubled_only",
    "equality_ops",
    "keyword_tokens",
    "literal_tokens",
    "logical_and_ops",
    "logical_or_ops",
    "multiplicative_ops",
    "radix_prefixes",
    "relational_ops",
    "string_escapes",
    "token_hashmap",
    "unary_ops",
    "unary_symbols",
]
