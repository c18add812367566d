import pytest

from minicomp.ast import (
    Argument,
    ArgumentType,
    NodeType,
    ParseError,
    Parser,
    ReturnType,
    get_function_by_name,
    parse_params,
    parse_program,
)
from minicomp.tokenizer import tokenize


def parse(source):
    return parse_program(tokenize(source))


def test_main_with_statements():
    functions = parse('int main() { "hi"; int x; int y = 3; return 0; }')
    assert len(functions) == 1
    main = functions[0]
    assert main.name == "main"
    assert main.return_type is ReturnType.INT
    assert main.arguments == []
    assert [n.type for n in main.body] == [
        NodeType.PRINT,
        NodeType.ASSIGN_INT,
        NodeType.ASSIGN_INT,
        NodeType.RETURN,
    ]
    assert main.node_count == 4
    assert main.body[0].name == "hi"
    assert main.body[1].name == "x"
    assert main.body[2].name == "y"
    assert main.body[2].number == 3
    assert main.body[3].number == 0


def test_void_function():
    functions = parse('void greet() { "hey"; }')
    assert functions[0].return_type is ReturnType.VOID
    assert functions[0].node_count == 1


def test_parameters():
    functions = parse("int f(int a, float b) { return 1; }")
    assert [a.type for a in functions[0].arguments] == [
        ArgumentType.INT,
        ArgumentType.FLOAT,
    ]


def test_parse_params_directly():
    tokens = tokenize("(int a, int b)")
    assert parse_params(tokens, 1) == [
        Argument(ArgumentType.INT),
        Argument(ArgumentType.INT),
    ]


def test_parse_params_invalid():
    with pytest.raises(ParseError):
        parse_params(tokenize("(void a)"), 1)


def test_multiple_functions_and_lookup():
    functions = parse("int a() { return 1; } int main() { return 0; }")
    assert [f.name for f in functions] == ["a", "main"]
    assert get_function_by_name("main", functions) is functions[1]
    assert get_function_by_name("missing", functions) is None


def test_stray_tokens_are_skipped():
    functions = parse("x ; int main() { return 0; }")
    assert [f.name for f in functions] == ["main"]


def test_if_with_empty_condition():
    functions = parse('int main() { if () { "x"; } return 0; }')
    body = functions[0].body
    assert [n.type for n in body] == [NodeType.IF, NodeType.RETURN]
    assert [n.type for n in body[0].then] == [NodeType.PRINT]
    assert body[0].then[0].name == "x"


def test_if_with_condition_is_rejected():
    with pytest.raises(ParseError, match="after condition"):
        parse('int main() { if (x) { "x"; } }')


def test_if_without_paren():
    with pytest.raises(ParseError, match="after 'if'"):
        parse("int main() { if { } }")


def test_return_without_number():
    with pytest.raises(ParseError, match="return"):
        parse("int main() { return x; }")


def test_invalid_var():
    with pytest.raises(ParseError, match="Invalid var"):
        parse("int main() { int x > 3; }")


def test_assignment_needs_literal():
    with pytest.raises(ParseError, match="Syntax error"):
        parse("int main() { int x = y; }")


def test_unknown_statement():
    with pytest.raises(ParseError, match="Unknown or unsupported"):
        parse("int main() { foo; }")


def test_parser_position_advances_past_function():
    tokens = tokenize("int main() { return 0; }")
    parser = Parser(tokens)
    function = parser.parse_function()
    assert function.name == "main"
    assert parser.position == len(tokens) - 1


def test_parse_statement_text():
    parser = Parser(tokenize('"hello";'))
    node = parser.parse_statement()
    assert node.type is NodeType.PRINT
    assert node.name == "hello"
    assert parser.position == 2


def test_parse_if_directly():
    parser = Parser(tokenize('if () { "a"; "b"; }'))
    node = parser.parse_if()
    assert node.type is NodeType.IF
    assert [n.name for n in node.then] == ["a", "b"]


def test_empty_program():
    assert parse("") == []