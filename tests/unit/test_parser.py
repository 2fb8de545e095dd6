"""
Tests for the recursive-descent parser.
"""

import dataclasses

import pytest
from tests.test_utils import ADD_SUBTRACT, add_subtract_ast, parse_source
from tinycompiler.frontend.lexer import tokenize
from tinycompiler.frontend.parser import Parser, parse
from tinycompiler.shared.errors import ParseError
from tinycompiler.shared.nodes import CallExpression, NumberLiteral, Program, StringLiteral


class TestParse:
    """Well-formed programs"""

    def test_add_subtract(self):
        assert parse(tokenize(ADD_SUBTRACT)) == add_subtract_ast()

    def test_zero_argument_call(self):
        assert parse_source("(foo)") == Program([CallExpression("foo", [])])

    def test_string_argument(self):
        assert parse_source('(add "x" 1)') == Program([
            CallExpression("add", [StringLiteral("x"), NumberLiteral("1")]),
        ])

    def test_sibling_top_level_expressions_keep_order(self):
        assert parse_source("(a) (b 1)\n(c)") == Program([
            CallExpression("a"),
            CallExpression("b", [NumberLiteral("1")]),
            CallExpression("c"),
        ])

    def test_bare_literals_at_top_level(self):
        assert parse_source('1 "x"') == Program([NumberLiteral("1"), StringLiteral("x")])

    def test_empty_token_list(self):
        assert parse([]) == Program([])

    def test_deep_nesting(self):
        depth = 50
        ast = parse_source("(f " * depth + "1" + ")" * depth)
        node = ast.body[0]
        for _ in range(depth - 1):
            assert node.name == "f"
            node = node.params[0]
        assert node.params == (NumberLiteral("1"),)

    def test_call_location_is_open_paren(self):
        ast = parse_source("  (a\n (b))")
        outer = ast.body[0]
        inner = outer.params[0]
        assert (outer.location.line, outer.location.column) == (1, 3)
        assert (inner.location.line, inner.location.column) == (2, 2)

    def test_parser_consumes_every_token(self):
        parser = Parser(tokenize("(a 1) 2"))
        parser.parse()
        assert parser.current == 5


class TestParsedTreeIsImmutable:

    def test_nodes_are_frozen(self):
        call = parse_source("(a 1)").body[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            call.name = "b"

    def test_children_are_tuples(self):
        ast = parse_source("(a 1)")
        assert isinstance(ast.body, tuple)
        assert isinstance(ast.body[0].params, tuple)

    def test_call_requires_name(self):
        with pytest.raises(ValueError):
            CallExpression("", [])


class TestParseErrors:
    """Every malformed token stream fails with ParseError, never IndexError"""

    @pytest.mark.parametrize("source,kind,text", [
        ("(1 2)", "number", "1"),
        ('("a")', "string", "a"),
        ("((a))", "paren", "("),
        ("()", "paren", ")"),
        (")", "paren", ")"),
        ("foo", "name", "foo"),
        ("(a b)", "name", "b"),
    ])
    def test_unexpected_token(self, source, kind, text):
        with pytest.raises(ParseError) as exc_info:
            parse_source(source)
        assert exc_info.value.token_kind == kind
        assert exc_info.value.token_text == text
        assert not exc_info.value.at_end_of_input

    @pytest.mark.parametrize("source", ["(", "(add", "(add 1", "(a (b 2)"])
    def test_unexpected_end_of_input(self, source):
        with pytest.raises(ParseError, match="end of input") as exc_info:
            parse_source(source)
        assert exc_info.value.at_end_of_input
        assert exc_info.value.token_kind == "EOF"

    def test_error_location_points_at_token(self):
        with pytest.raises(ParseError) as exc_info:
            parse_source("(add\n (3))")
        loc = exc_info.value.location
        assert (loc.line, loc.column) == (2, 3)
