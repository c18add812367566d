import io

import pytest

from minicomp.tokenizer import (
    Token,
    TokenizeError,
    TokenType,
    format_tokens,
    tokenize,
    token_type_name,
)


def types(tokens):
    return [t.type for t in tokens]


def values(tokens):
    return [t.value for t in tokens]


def test_declaration_tokens():
    tokens = tokenize("int x = 5;")
    assert types(tokens) == [
        TokenType.INT,
        TokenType.IDENTIFIER,
        TokenType.ASSIGN,
        TokenType.INT,
        TokenType.END,
        TokenType.EOF,
    ]
    assert values(tokens) == ["int", "x", "=", "5", ";", "404"]


def test_empty_source_has_only_eof():
    assert tokenize("") == [Token(TokenType.EOF, "404")]


def test_keywords():
    tokens = tokenize("void float int")
    assert types(tokens)[:3] == [TokenType.VOID, TokenType.FLOAT, TokenType.INT]


def test_char_is_an_identifier():
    tokens = tokenize("char")
    assert tokens[0] == Token(TokenType.IDENTIFIER, "char")


def test_logical_and_and_bitwise_and():
    tokens = tokenize("a && b & c")
    assert types(tokens) == [
        TokenType.IDENTIFIER,
        TokenType.AND,
        TokenType.IDENTIFIER,
        TokenType.BITWISE_AND,
        TokenType.IDENTIFIER,
        TokenType.EOF,
    ]
    assert tokens[1].value == "&&"
    assert tokens[3].value == "&"


def test_text_token():
    tokens = tokenize('"hello world";')
    assert tokens[0] == Token(TokenType.TEXT, "hello world")
    assert tokens[1].type is TokenType.END


def test_unterminated_text_runs_to_end():
    tokens = tokenize('"open')
    assert tokens == [Token(TokenType.TEXT, "open"), Token(TokenType.EOF, "404")]


def test_symbols_split_words():
    tokens = tokenize("main(){}")
    assert types(tokens) == [
        TokenType.IDENTIFIER,
        TokenType.LPAREN,
        TokenType.RPAREN,
        TokenType.LBRACE,
        TokenType.RBRACE,
        TokenType.EOF,
    ]


def test_comparison_symbols():
    tokens = tokenize("a > b < c")
    assert tokens[1].type is TokenType.MAJOR
    assert tokens[3].type is TokenType.MINOR


def test_trailing_word_is_flushed():
    tokens = tokenize("abc")
    assert tokens[0] == Token(TokenType.IDENTIFIER, "abc")
    assert tokens[-1].type is TokenType.EOF


def test_mixed_letters_and_digits_is_identifier():
    assert tokenize("x1")[0].type is TokenType.IDENTIFIER
    assert tokenize("123")[0].type is TokenType.INT


def test_long_word_is_truncated():
    tokens = tokenize("a" * 300)
    assert tokens[0].value == "a" * 255


def test_long_text_is_truncated():
    tokens = tokenize('"' + "b" * 300 + '"')
    assert tokens[0].type is TokenType.TEXT
    assert len(tokens[0].value) == 255


def test_invalid_character_raises():
    with pytest.raises(TokenizeError):
        tokenize("int x = 5 * 2;")


def test_file_like_source():
    assert tokenize(io.StringIO("int x;")) == tokenize("int x;")


def test_type_names():
    assert token_type_name(TokenType.BITWISE_AND) == "&"
    assert token_type_name(TokenType.EOF) == "OEF"
    assert token_type_name(TokenType.EQUAL) == "UNKNOWN"
    assert token_type_name(TokenType.POINTER) == "UNKNOWN"


def test_format_tokens():
    listing = format_tokens(tokenize("int x;"))
    lines = listing.splitlines()
    assert lines[0] == "[00] int, INT"
    assert lines[-1] == "[03] 404, OEF"
    assert len(lines) == 4