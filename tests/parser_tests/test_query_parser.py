# tests/parser_tests/test_query_parser.py
# This file is part of Causeway - Causal Log Motif Search
#
# Test suite for the structured text query lexer and parser

"""Test suite for structured text queries.

Tests tokenization, operator precedence, AST construction and string
round-tripping, and that malformed queries raise QuerySyntaxError (which is
also a ParseError) with a meaningful message.
"""

import pytest
from parser import ParseError, QuerySyntaxError, parse_query
from parser.ast_nodes import And, FieldMatch, Implicit, Or, Pattern, Word
from parser.lexer import QueryLexer
from utils.logger import get_logger


def _token_types(text):
    return [t.type for t in QueryLexer().tokenize(text)]


class TestQueryLexer:
    """Token recognition."""

    def test_operators_and_words(self):
        assert _token_types("host=A && event!=x || (y)") == [
            "WORD", "EQ", "WORD", "AND", "WORD", "NEQ", "WORD", "OR",
            "LPAREN", "WORD", "RPAREN",
        ]

    def test_string_and_regex_values(self):
        tokens = list(QueryLexer().tokenize(r'"lost \"ack\"" /a\/b/'))

        assert [t.type for t in tokens] == ["STRING", "REGEX"]
        assert tokens[0].value == 'lost "ack"'
        assert tokens[1].value == "a/b"

    def test_words_keep_punctuation(self):
        tokens = list(QueryLexer().tokenize("send_B:42 node-1.local"))

        assert [t.value for t in tokens] == ["send_B:42", "node-1.local"]


class TestQueryParser:
    """AST construction and precedence."""

    def setup_method(self):
        """Initialize logger for each test method."""
        self.logger = get_logger()

    def test_bare_word_is_implicit_search(self):
        assert parse_query("ERROR") == Implicit(Word("ERROR"))

    def test_field_conditions(self):
        assert parse_query("host=A") == FieldMatch("host", Word("A"))
        assert parse_query('event!="lost ack"') == FieldMatch(
            "event", Word("lost ack"), negated=True
        )
        assert parse_query(r"event=/retry \d+/") == FieldMatch("event", Pattern(r"retry \d+"))

    def test_and_binds_tighter_than_or(self):
        assert parse_query("a || b && c") == Or(
            Implicit(Word("a")), And(Implicit(Word("b")), Implicit(Word("c")))
        )

    def test_parentheses_override_precedence(self):
        assert parse_query("(a || b) && c") == And(
            Or(Implicit(Word("a")), Implicit(Word("b"))), Implicit(Word("c"))
        )

    def test_left_associative(self):
        assert parse_query("a && b && c") == And(
            And(Implicit(Word("a")), Implicit(Word("b"))), Implicit(Word("c"))
        )

    VALID_QUERIES = [
        "ERROR",
        "host=A",
        "host!=B && /time(out)?/",
        '(event="lost ack" || event=retry) && host=A',
        r"event=/a\/b/",
        "  padded  ",
    ]

    @pytest.mark.parametrize("query", VALID_QUERIES)
    def test_round_trip_parsing_integrity(self, query):
        """Test that parsing -> stringifying -> parsing preserves AST structure."""
        original_ast = parse_query(query)
        stringified = str(original_ast)
        self.logger.debug(f"Original: {query} Stringified: {stringified}")

        assert parse_query(stringified) == original_ast

    INVALID_QUERIES = [
        ("", "Empty query"),
        ("   ", "Whitespace only"),
        ("host=", "Missing value"),
        ("&& a", "Leading operator"),
        ("a ||", "Trailing operator"),
        ("(a", "Unclosed parenthesis"),
        ("a)", "Unopened parenthesis"),
        ("a b", "Missing operator"),
        ("!a", "Bare negation"),
        ("a & b", "Single ampersand"),
        ("event=/[/", "Invalid regular expression"),
        ('"unterminated', "Unterminated string"),
    ]

    @pytest.mark.parametrize("query, description", INVALID_QUERIES)
    def test_syntax_errors(self, query, description):
        """Test that invalid queries raise QuerySyntaxError."""
        self.logger.debug(f"Testing query error for: '{query}' ({description})")

        with pytest.raises(QuerySyntaxError) as exc_info:
            parse_query(query)

        assert isinstance(exc_info.value, ParseError)
        assert len(str(exc_info.value)) > 0
