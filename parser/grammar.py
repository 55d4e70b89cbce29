# parser/grammar.py
# This file is part of Causeway - Causal Log Motif Search
#
# LALR(1) grammar and parser for structured text queries using SLY

"""Text query grammar implementation using SLY parser generator.

Grammar Features:
- Field conditions: ``host=A``, ``event!="lost ack"``, ``event=/retry \\d+/``
- Implicit search: a bare value matches anywhere in the line
- Boolean connectives ``&&`` and ``||`` with parenthetical grouping

Operator Precedence (lowest to highest):
- OR ('||'): left-associative
- AND ('&&'): left-associative
"""

import re

from sly import Parser
from .lexer import QueryLexer
from .ast_nodes import And, Expr, FieldMatch, Implicit, Or, Pattern, Word
from .exceptions import QuerySyntaxError
from utils.logger import get_logger


class _QueryParser(Parser):
    """SLY-based LALR(1) parser for text queries.

    Attributes:
        tokens: Token types from QueryLexer
        precedence: Operator precedence and associativity rules
    """

    tokens = QueryLexer.tokens

    precedence = (
        ("left", "OR"),
        ("left", "AND"),
    )

    @_("expr")
    def start(self, p) -> Expr:
        """Start rule: complete query is a single expression."""
        return p.expr

    @_("expr OR expr")
    def expr(self, p) -> Expr:
        return Or(p.expr0, p.expr1)

    @_("expr AND expr")
    def expr(self, p) -> Expr:
        return And(p.expr0, p.expr1)

    @_("LPAREN expr RPAREN")
    def expr(self, p) -> Expr:
        return p.expr

    @_("WORD EQ value")
    def expr(self, p) -> Expr:
        return FieldMatch(p.WORD, p.value)

    @_("WORD NEQ value")
    def expr(self, p) -> Expr:
        return FieldMatch(p.WORD, p.value, negated=True)

    @_("value")
    def expr(self, p) -> Expr:
        """A bare value searches the whole line."""
        return Implicit(p.value)

    @_("WORD")
    def value(self, p):
        return Word(p.WORD)

    @_("STRING")
    def value(self, p):
        return Word(p.STRING)

    @_("REGEX")
    def value(self, p):
        try:
            re.compile(p.REGEX)
        except re.error as exc:
            raise QuerySyntaxError(f"Invalid regular expression /{p.REGEX}/: {exc}") from exc
        return Pattern(p.REGEX)

    def parse(self, text: str) -> Expr:
        """Parse query text into an AST.

        Raises:
            QuerySyntaxError: If the query is empty or contains syntax errors
        """
        logger = get_logger()
        logger.debug(f"Parsing query: {text}")

        try:
            ast_result = super().parse(QueryLexer().tokenize(text))

            if ast_result is None and text.strip() == "":
                raise QuerySyntaxError("Query is empty.")

            if ast_result is None:
                raise QuerySyntaxError("Failed to parse query (syntax error).")

            return ast_result

        except QuerySyntaxError:
            logger.debug("Query syntax error encountered")
            raise
        except Exception as e:
            logger.debug(f"Unexpected query parsing error: {e}")
            raise QuerySyntaxError(f"Parse failed: {e}") from e

    def error(self, token):
        """Handle syntax errors during parsing.

        Raises:
            QuerySyntaxError: Always raises with detailed error information
        """
        if token:
            error_msg = (
                f"Syntax error near '{token.value}' "
                f"(type: {token.type}) at position {token.index}"
            )
        else:
            error_msg = "Syntax error: Unexpected end of query"

        raise QuerySyntaxError(error_msg)
