import pytest
from hypothesis import given
from hypothesis import strategies as st

from sprig.sprig_errors import (
    InvalidCharacter,
    InvalidNumberLiteral,
    InvalidStringEscapeSequence,
    LexError,
    UnterminatedStringLiteral,
)
from sprig.sprig_lexer import CharacterStream, Lexer, Token, tokenize


def types_of(source: str) -> list[str]:
    return [tok.type for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    code = "= + - * / % . , ; ( ) { } [ ] ! < >"
    expected = [
        "ASSIGN",
        "PLUS",
        "SUB",
        "MULT",
        "DIV",
        "MOD",
        "DOT",
        "COMMA",
        "SEMICOLON",
        "LPAREN",
        "RPAREN",
        "LBRACE",
        "RBRACE",
        "LBRACK",
        "RBRACK",
        "NOT",
        "LT",
        "GT",
    ]
    assert types_of(code) == expected


def test_two_char_tokens() -> None:
    assert types_of("== != <= >= && ||") == ["EQ", "NE", "LE", "GE", "AND", "OR"]


def test_two_char_tokens_without_spaces() -> None:
    assert types_of("a<=b==!c") == ["IDENT", "LE", "IDENT", "EQ", "NOT", "IDENT"]


def test_equals_followed_by_equals_twice() -> None:
    # "===" is "==" then "="
    assert types_of("===") == ["EQ", "ASSIGN"]


def test_identifier_token() -> None:
    tok = tokenize("my_Var9")[0]
    assert tok == Token("IDENT", "my_Var9", 1, 1, 7)


def test_identifier_may_start_with_underscore() -> None:
    assert tokenize("_x")[0].type == "IDENT"


def test_typeof_is_keyword() -> None:
    tok = tokenize("typeof")[0]
    assert tok.type == "TYPEOF"
    assert tok.value == "typeof"


def test_typeof_prefix_is_identifier() -> None:
    assert types_of("typeofx Typeof") == ["IDENT", "IDENT"]


@given(st.integers(min_value=1, max_value=10**15))  # type: ignore[misc]
def test_decimal_integer_literal(n: int) -> None:
    tokens = tokenize(str(n))
    assert len(tokens) == 1
    assert tokens[0].type == "NUMBER"
    assert tokens[0].value == float(n)
    assert tokens[0].length == len(str(n))


@pytest.mark.parametrize(
    "source,value,length",
    [
        ("0x1A", 26.0, 4),
        ("0xff", 255.0, 4),
        ("0b101", 5.0, 5),
        ("0o17", 15.0, 4),
        ("0", 0.0, 1),
        ("0.5", 0.5, 3),
        ("0.5e2", 50.0, 5),
        ("3.14", 3.14, 4),
        ("1e3", 1000.0, 3),
        ("2.5e10", 2.5e10, 6),
    ],
)  # type: ignore[misc]
def test_number_literals(source: str, value: float, length: int) -> None:
    tokens = tokenize(source)
    assert len(tokens) == 1
    assert tokens[0].type == "NUMBER"
    assert tokens[0].value == value
    assert tokens[0].length == length


def test_trailing_dot_is_not_consumed() -> None:
    tokens = tokenize("3.")
    assert tokens[0] == Token("NUMBER", 3.0, 1, 1, 1)
    assert tokens[1] == Token("DOT", ".", 1, 2, 1)


def test_dot_then_identifier_is_member_access() -> None:
    assert types_of("3.x") == ["NUMBER", "DOT", "IDENT"]


def test_exponent_without_digit_is_not_consumed() -> None:
    tokens = tokenize("1e")
    assert tokens[0] == Token("NUMBER", 1.0, 1, 1, 1)
    assert tokens[1] == Token("IDENT", "e", 1, 2, 1)


def test_exponent_sign_is_not_consumed() -> None:
    assert types_of("1e-5") == ["NUMBER", "IDENT", "SUB", "NUMBER"]


def test_zero_without_fraction_stops() -> None:
    tokens = tokenize("0e5")
    assert tokens[0] == Token("NUMBER", 0.0, 1, 1, 1)
    assert tokens[1] == Token("IDENT", "e5", 1, 2, 2)


def test_leading_zero_splits_number() -> None:
    tokens = tokenize("012")
    assert [t.value for t in tokens] == [0.0, 12.0]
    assert tokens[1].col == 2


def test_zero_then_trailing_dot() -> None:
    assert types_of("0.") == ["NUMBER", "DOT"]


def test_radix_digits_stop_at_invalid_digit() -> None:
    tokens = tokenize("0b102")
    assert tokens[0] == Token("NUMBER", 2.0, 1, 1, 4)
    assert tokens[1] == Token("NUMBER", 2.0, 1, 5, 1)


@pytest.mark.parametrize("source", ["0x", "0o", "0b", "0xg"])  # type: ignore[misc]
def test_radix_prefix_without_digits_is_rejected(source: str) -> None:
    with pytest.raises(InvalidNumberLiteral) as excinfo:
        tokenize(source)
    assert (excinfo.value.line, excinfo.value.col) == (1, 1)


def test_string_token() -> None:
    tok = tokenize('"hello world"')[0]
    assert tok.type == "STRING"
    assert tok.value == "hello world"
    assert tok.length == 13


def test_string_escape_pairs_are_preserved() -> None:
    tok = tokenize('"a\\nb"')[0]
    assert tok.type == "STRING"
    assert tok.value == "a\\nb"
    assert tok.length == 6


@pytest.mark.parametrize("escape", ["n", "t", "r", "\\", '"'])  # type: ignore[misc]
def test_all_valid_escapes(escape: str) -> None:
    tok = tokenize(f'"x\\{escape}y"')[0]
    assert tok.value == f"x\\{escape}y"


def test_column_after_string_with_escapes() -> None:
    tokens = tokenize('"\\"q\\"" + 1')
    assert tokens[1].col == 9


def test_invalid_escape() -> None:
    with pytest.raises(InvalidStringEscapeSequence) as excinfo:
        tokenize('"ab\\q"')
    assert excinfo.value.col == 4
    assert "\\\\q" in str(excinfo.value)


def test_unterminated_string_at_end_of_input() -> None:
    with pytest.raises(UnterminatedStringLiteral):
        tokenize('"unterminated')


def test_unterminated_string_at_newline() -> None:
    with pytest.raises(UnterminatedStringLiteral) as excinfo:
        tokenize('x = "abc\n"')
    assert (excinfo.value.line, excinfo.value.col) == (1, 5)


def test_unterminated_string_with_trailing_escape() -> None:
    with pytest.raises(UnterminatedStringLiteral):
        tokenize('"abc\\')


@pytest.mark.parametrize("char", ["&", "|", "@", "#", "$", "~", "'", "é"])  # type: ignore[misc]
def test_invalid_character(char: str) -> None:
    with pytest.raises(InvalidCharacter) as excinfo:
        tokenize(f"a {char} b")
    assert excinfo.value.char == char
    assert excinfo.value.col == 3


def test_invalid_character_keeps_partial_tokens() -> None:
    with pytest.raises(LexError) as excinfo:
        tokenize("a + b & c")
    assert [t.value for t in excinfo.value.tokens] == ["a", "+", "b"]


def test_lex_errors_are_syntax_errors() -> None:
    with pytest.raises(SyntaxError):
        tokenize("@")


def test_error_message_includes_filename_and_position() -> None:
    with pytest.raises(LexError) as excinfo:
        tokenize("\n  @", filename="demo.sprig")
    assert str(excinfo.value) == "demo.sprig:2:3: error: invalid character: '@'"


def test_line_and_column_tracking() -> None:
    tokens = tokenize("x = 1\ny  ==\t2")
    assert [(t.line, t.col) for t in tokens] == [
        (1, 1),
        (1, 3),
        (1, 5),
        (2, 1),
        (2, 4),
        (2, 7),
    ]


def test_carriage_return_and_nul_do_not_move_column() -> None:
    tokens = tokenize("a\r\n\0b")
    assert tokens[1] == Token("IDENT", "b", 2, 1, 1)


def test_radix_literal_length_advances_column() -> None:
    tokens = tokenize("0x1A+1")
    assert tokens[1].col == 5
    assert tokens[2].col == 6


def test_empty_input() -> None:
    assert tokenize("") == []
    assert tokenize("  \n\t ") == []


def test_next_token_returns_eof() -> None:
    lexer = Lexer(CharacterStream("x"))
    assert lexer.next_token().type == "IDENT"
    eof = lexer.next_token()
    assert eof.type == "EOF"
    assert eof.length == 0
    assert lexer.next_token().type == "EOF"


def test_peek_beyond_end_returns_empty() -> None:
    stream = CharacterStream("abc")
    stream.next()
    stream.next()
    stream.next()
    assert stream.peek() == ""
    assert stream.peek(5) == ""
    with pytest.raises(EOFError):
        stream.next()


def test_token_repr() -> None:
    assert repr(Token("PLUS", "+", 1, 1)) == "Token(PLUS, +)"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1234567", "number 1234567"),
        ("3.14159265", "number 3.14159265"),
        ("0xffffffff", "number 4294967295"),
        ("1e999", "number 1e999"),
        ('"s"', 'string "s"'),
        ("x", "identifier 'x'"),
        ("<=", "'<='"),
    ],
)  # type: ignore[misc]
def test_token_describe_keeps_full_value(source: str, expected: str) -> None:
    assert tokenize(source)[0].describe() == expected


def test_token_default_length() -> None:
    assert Token("IDENT", "abc").length == 3
    assert Token("NUMBER", 1.0).length == 0


def test_token_hash_matches_equality() -> None:
    assert len({Token("IDENT", "a", 1, 1), Token("IDENT", "a", 1, 1)}) == 1


@given(st.text(alphabet="abc019xob.e\"\\ \n+-=!<>&|()", max_size=40))  # type: ignore[misc]
def test_tokenizing_is_deterministic(text: str) -> None:
    try:
        first = tokenize(text)
    except LexError as e:
        with pytest.raises(type(e)):
            tokenize(text)
        return
    assert tokenize(text) == first


@given(st.text(alphabet=st.characters(blacklist_categories=["Cs"]), min_size=1))  # type: ignore[misc]
def test_unicode_survival(text: str) -> None:
    try:
        tokenize(text)
    except LexError:
        # Acceptable: malformed input is part of the valid input space
        pass


@given(st.lists(st.sampled_from(["abc", "12", "0x1f", '"s\\n"', "<=", "&&"]), min_size=1))  # type: ignore[misc]
def test_token_lengths_cover_source(parts: list[str]) -> None:
    source = " ".join(parts)
    tokens = tokenize(source)
    assert sum(t.length for t in tokens) + len(parts) - 1 == len(source)
