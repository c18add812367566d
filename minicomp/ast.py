"""Syntax tree types and the parser that builds them from tokens."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .tokenizer import EOF_VALUE, Token, TokenType

log = logging.getLogger(__name__)

_EOF_TOKEN = Token(TokenType.EOF, EOF_VALUE)


class ParseError(ValueError):
    """Raised when the token stream does not follow the grammar."""


class ArgumentType(enum.Enum):
    INT = enum.auto()
    FLOAT = enum.auto()
    CHAR = enum.auto()


@dataclass
class Argument:
    type: ArgumentType
    value: object = None


class NodeType(enum.Enum):
    BODY = enum.auto()
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    ASSIGN_INT = enum.auto()
    ASSIGN_FLOAT = enum.auto()
    ASSIGN_CHAR = enum.auto()
    PRINT = enum.auto()
    RETURN = enum.auto()
    ASM = enum.auto()
    IF = enum.auto()
    MAJOR = enum.auto()
    MINOR = enum.auto()
    EQUAL_TO = enum.auto()
    WHILE = enum.auto()
    FOR = enum.auto()
    FUNCALL = enum.auto()


@dataclass
class Node:
    type: NodeType
    name: str = ""
    number: int = 0
    char: str = ""
    lnode: Optional[Node] = None
    rnode: Optional[Node] = None
    then: List[Node] = field(default_factory=list)
    els: List[Node] = field(default_factory=list)
    init: Optional[Node] = None
    inc: Optional[Node] = None


class ReturnType(enum.Enum):
    INT = enum.auto()
    CHAR = enum.auto()
    FLOAT = enum.auto()
    VOID = enum.auto()


@dataclass
class Function:
    name: str
    return_type: ReturnType
    arguments: List[Argument] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)

    @property
    def node_count(self) -> int:
        return len(self.body)


_RETURN_TYPES = {
    TokenType.VOID: ReturnType.VOID,
    TokenType.INT: ReturnType.INT,
    TokenType.CHAR: ReturnType.CHAR,
    TokenType.FLOAT: ReturnType.FLOAT,
}

_ARGUMENT_TYPES = {
    TokenType.INT: ArgumentType.INT,
    TokenType.FLOAT: ArgumentType.FLOAT,
    TokenType.CHAR: ArgumentType.CHAR,
}


def _token_at(tokens: Sequence[Token], index: int) -> Token:
    if 0 <= index < len(tokens):
        return tokens[index]
    return _EOF_TOKEN


def _is_literal_int(token: Token) -> bool:
    return token.type is TokenType.INT and token.value != "int"


def _expect(token: Token, expected: TokenType, message: str) -> None:
    if token.type is not expected:
        raise ParseError(f"Syntax Error: {message}. Found '{token.value}'")


def parse_params(tokens: Sequence[Token], first_param_index: int) -> List[Argument]:
    """Read a parameter list starting just after '(' up to the closing ')'."""
    arguments: List[Argument] = []
    index = first_param_index
    while True:
        token = _token_at(tokens, index)
        if token.type in (TokenType.RPAREN, TokenType.EOF):
            return arguments
        arg_type = _ARGUMENT_TYPES.get(token.type)
        if arg_type is None:
            raise ParseError(f"Invalid param: {token.value}")
        arguments.append(Argument(arg_type))
        index += 2
        if _token_at(tokens, index).type is TokenType.COMMA:
            index += 1


class Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.position = 0

    def _peek(self, offset: int = 0) -> Token:
        return _token_at(self.tokens, self.position + offset)

    def _parse_block(self) -> List[Node]:
        nodes: List[Node] = []
        while self._peek().type not in (TokenType.RBRACE, TokenType.EOF):
            nodes.append(self.parse_statement())
        return nodes

    def parse_statement(self) -> Node:
        """Parse one statement at the current position."""
        token = self._peek()

        if token.type is TokenType.IDENTIFIER and token.value == "if":
            log.debug("Found if")
            return self.parse_if()

        if token.type is TokenType.INT and token.value == "int":
            name_token = self._peek(1)
            if name_token.type is TokenType.IDENTIFIER:
                after = self._peek(2)
                if after.type is TokenType.END:
                    self.position += 3
                    log.debug("Added not defined int named %s", name_token.value)
                    return Node(NodeType.ASSIGN_INT, name=name_token.value)
                if after.type is TokenType.ASSIGN:
                    literal = self._peek(3)
                    if not _is_literal_int(literal):
                        raise ParseError("Syntax error")
                    self.position += 5
                    log.debug("Added defined int named %s", name_token.value)
                    return Node(
                        NodeType.ASSIGN_INT,
                        name=name_token.value,
                        number=int(literal.value),
                    )
                raise ParseError("Invalid var")

        if token.type is TokenType.IDENTIFIER and token.value == "return":
            literal = self._peek(1)
            if not _is_literal_int(literal):
                raise ParseError("Invalid syntax on return function")
            self.position += 3
            log.debug("Added return that returns %s", literal.value)
            return Node(NodeType.RETURN, number=int(literal.value))

        previous = self._peek(-1) if self.position > 0 else None
        if token.type is TokenType.TEXT and (
            previous is None or previous.type is not TokenType.ASSIGN
        ):
            if self._peek(1).type is TokenType.END:
                self.position += 2
                log.debug('Added text "%s"', token.value)
                return Node(NodeType.PRINT, name=token.value)

        raise ParseError(
            f"Unknown or unsupported token at index {self.position} "
            f"(type={token.type.name}, value='{token.value}')"
        )

    def parse_if(self) -> Node:
        """Parse an if statement; the condition between parentheses must be empty."""
        _expect(self._peek(1), TokenType.LPAREN, "expected '(' after 'if'")
        self.position += 2
        _expect(self._peek(), TokenType.RPAREN, "expected ')' after condition")
        self.position += 1
        _expect(self._peek(), TokenType.LBRACE, "expected '{' after if()")
        self.position += 1
        then = self._parse_block()
        _expect(self._peek(), TokenType.RBRACE, "expected '}' to close if body")
        self.position += 1
        return Node(NodeType.IF, then=then)

    def parse_function(self) -> Function:
        """Parse a function definition starting at its return type."""
        start = self.position
        identifier = self._peek(1)
        return_type = _RETURN_TYPES.get(self._peek().type)
        if return_type is None:
            raise ParseError(f"Can't find return type of {identifier.value}")

        arguments = parse_params(self.tokens, start + 3)
        _expect(identifier, TokenType.IDENTIFIER, "invalid function identifier")

        while self._peek().type is not TokenType.LBRACE:
            if self._peek().type is TokenType.EOF:
                raise ParseError(f"expected '{{' to open body of {identifier.value}")
            self.position += 1
        self.position += 1

        log.debug("Defining function %s", identifier.value)
        body = self._parse_block()
        self.position += 1
        function = Function(identifier.value, return_type, arguments, body)
        log.debug("%s function has %d nodes", function.name, function.node_count)
        return function

    def parse_program(self) -> List[Function]:
        """Parse every function definition in the token stream."""
        functions: List[Function] = []
        while self._peek().type is not TokenType.EOF:
            if (
                self._peek().type in _RETURN_TYPES
                and self._peek(1).type is TokenType.IDENTIFIER
                and self._peek(2).type is TokenType.LPAREN
            ):
                functions.append(self.parse_function())
            else:
                self.position += 1
        return functions


def parse_program(tokens: Sequence[Token]) -> List[Function]:
    """Parse all function definitions from a token list."""
    return Parser(tokens).parse_program()


def get_function_by_name(name: str, functions: Sequence[Function]) -> Optional[Function]:
    """Return the first function with the given name, or None."""
    return next((fun for fun in functions if fun.name == name), None)