# parser/lexer.py
# This file is part of Causeway - Causal Log Motif Search
#
# Lexical analyzer for structured text queries using SLY

"""Lexical analyzer for structured text queries.

Supported Tokens:
- Operators: =, !=, &&, ||, (, )
- Values: bare words, "quoted strings" and /regular expressions/
- Whitespace: ignored during tokenization
"""

import re

from sly import Lexer
from utils.logger import get_logger

_ESCAPE = re.compile(r"\\(.)")


class QueryLexer(Lexer):
    """SLY-based lexer for text queries.

    Attributes:
        tokens: Set of valid token types
        ignore: Characters to skip during tokenization
    """

    tokens = {
        "WORD",
        "STRING",
        "REGEX",
        "EQ",
        "NEQ",
        "AND",
        "OR",
        "LPAREN",
        "RPAREN",
    }

    ignore = " \t\r\n"

    # Longer operators first: patterns are tried in definition order
    AND = r"&&"
    OR = r"\|\|"
    NEQ = r"!="
    EQ = r"="
    LPAREN = r"\("
    RPAREN = r"\)"

    @_(r'"(?:[^"\\]|\\.)*"')
    def STRING(self, t):
        t.value = _ESCAPE.sub(r"\1", t.value[1:-1])
        return t

    @_(r"/(?:[^/\\]|\\.)*/")
    def REGEX(self, t):
        t.value = t.value[1:-1].replace("\\/", "/")
        return t

    WORD = r'[^\s=!&|()"/]+'

    def error(self, t):
        """Handle illegal characters during tokenization.

        Raises:
            ValueError: Always raised with character and position information
        """
        logger = get_logger()

        illegal_char = t.value[0]
        error_pos = self.index

        logger.debug(f"Illegal character '{illegal_char}' at position {error_pos}")

        # Skip the illegal character
        self.index += 1

        raise ValueError(
            f"Illegal character '{illegal_char}' encountered at position {error_pos}"
        )
