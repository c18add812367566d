"""Lexical analysis: turn source text into a flat list of tokens."""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass
from typing import Iterable, List, TextIO, Union

MAX_TOKEN_LENGTH = 255
EOF_VALUE = "404"

_WHITESPACE = frozenset(" \t\n\v\f\r")
_LETTERS = frozenset(string.ascii_letters + "_")
_DIGITS = frozenset(string.digits)
_SYMBOLS = frozenset("=,;{}()>&<")


class TokenizeError(ValueError):
    """Raised when the source holds a character the language does not know."""


class TokenType(enum.Enum):
    TEXT = enum.auto()
    VOID = enum.auto()
    INT = enum.auto()
    FLOAT = enum.auto()
    CHAR = enum.auto()
    IDENTIFIER = enum.auto()
    EQUAL = enum.auto()
    MAJOR = enum.auto()
    MINOR = enum.auto()
    AND = enum.auto()
    BITWISE_AND = enum.auto()
    POINTER = enum.auto()
    ASSIGN = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    RBRACE = enum.auto()
    LBRACE = enum.auto()
    COMMA = enum.auto()
    END = enum.auto()
    EOF = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str = ""


_SINGLE_SYMBOLS = {
    ">": TokenType.MAJOR,
    "<": TokenType.MINOR,
    "=": TokenType.ASSIGN,
    ";": TokenType.END,
    ",": TokenType.COMMA,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

_KEYWORDS = {
    "int": TokenType.INT,
    "float": TokenType.FLOAT,
    "void": TokenType.VOID,
}

_TYPE_NAMES = {
    TokenType.MAJOR: "MAJOR",
    TokenType.MINOR: "MINOR",
    TokenType.AND: "AND",
    TokenType.BITWISE_AND: "&",
    TokenType.TEXT: "TEXT",
    TokenType.INT: "INT",
    TokenType.FLOAT: "FLOAT",
    TokenType.CHAR: "CHAR",
    TokenType.VOID: "VOID",
    TokenType.IDENTIFIER: "IDENTIFIER",
    TokenType.ASSIGN: "ASSIGN",
    TokenType.LPAREN: "LPAREN",
    TokenType.RPAREN: "RPAREN",
    TokenType.RBRACE: "RBRACE",
    TokenType.LBRACE: "LBRACE",
    TokenType.COMMA: "COMMA",
    TokenType.END: "END",
    TokenType.EOF: "OEF",
}


def _word_token(word: str) -> Token:
    if word in _KEYWORDS:
        return Token(_KEYWORDS[word], word)
    if all(ch in _DIGITS for ch in word):
        return Token(TokenType.INT, word)
    return Token(TokenType.IDENTIFIER, word)


def tokenize(source: Union[str, TextIO]) -> List[Token]:
    """Split source text into tokens; the list always ends with an EOF token."""
    text = source if isinstance(source, str) else source.read()
    tokens: List[Token] = []
    word: List[str] = []

    def flush() -> None:
        if word:
            tokens.append(_word_token("".join(word)))
            word.clear()

    pos = 0
    length = len(text)
    while pos < length:
        ch = text[pos]

        if ch == '"':
            end = pos + 1
            while end < length and text[end] != '"' and end - pos - 1 < MAX_TOKEN_LENGTH:
                end += 1
            tokens.append(Token(TokenType.TEXT, text[pos + 1:end]))
            # The character that stopped the scan is consumed as well.
            pos = end + 1
            continue

        if ch in _WHITESPACE:
            flush()
            pos += 1
            continue

        if ch in _LETTERS or ch in _DIGITS:
            if len(word) < MAX_TOKEN_LENGTH:
                word.append(ch)
            pos += 1
            continue

        if ch in _SYMBOLS or ch == "\0":
            flush()
            if ch == "&":
                if pos + 1 < length and text[pos + 1] == "&":
                    tokens.append(Token(TokenType.AND, "&&"))
                    pos += 2
                else:
                    tokens.append(Token(TokenType.BITWISE_AND, "&"))
                    pos += 1
                continue
            if ch == "\0":
                tokens.append(Token(TokenType.IDENTIFIER, ""))
            else:
                tokens.append(Token(_SINGLE_SYMBOLS[ch], ch))
            pos += 1
            continue

        raise TokenizeError(f"Invalid syntax {ch}")

    flush()
    tokens.append(Token(TokenType.EOF, EOF_VALUE))
    return tokens


def token_type_name(token_type: TokenType) -> str:
    """Return the display name of a token type."""
    return _TYPE_NAMES.get(token_type, "UNKNOWN")


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render a token listing, one numbered token per line."""
    return "\n".join(
        f"[{index:02d}] {token.value}, {token_type_name(token.type)}"
        for index, token in enumerate(tokens)
    )