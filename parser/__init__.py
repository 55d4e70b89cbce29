# parser/__init__.py
# This file is part of Causeway - Causal Log Motif Search
#
# Log and query parsing components

"""Log parsing and structured text query parsing.

The log side turns raw text into labeled LogEvents using a user-supplied
regular expression; the query side parses the small text query language
used by text searches into an AST that can be evaluated per log line.

Core Functions:
    parse_log: Splits text into labels and parses each line into an event
    parse_query: Converts a structured text query into an AST

Example:
    >>> from parser import parse_log
    >>> parser = parse_log('A start {"A":1}\\nB recv {"A":1,"B":1}\\n')
    >>> parser.labels
    ['']
"""

from typing import Optional

from .exceptions import NoEventsParsedError, ParseError, QuerySyntaxError
from .grammar import _QueryParser
from .log_parser import (
    DEFAULT_LINE_PATTERN,
    LogParser,
    compile_pattern,
    parse_clock,
)
from utils.logger import get_logger


def parse_log(
    text: str,
    line_pattern: str = DEFAULT_LINE_PATTERN,
    delimiter: Optional[str] = None,
    base_offset: int = 0,
) -> LogParser:
    """Parse log text into labeled events.

    Args:
        text: Raw log text
        line_pattern: Regular expression with ``host`` and ``clock`` groups
        delimiter: Optional regular expression separating executions
        base_offset: Byte offset of `text` within its file

    Returns:
        LogParser holding labels, events and per-line errors

    Raises:
        ParseError: A pattern is invalid
        NoEventsParsedError: A label has no parsable line
    """
    return LogParser(text, delimiter, line_pattern, base_offset)


def parse_query(source: str):
    """Parse a structured text query into an AST.

    Uses a fresh parser instance for each invocation to keep parsing
    stateless.

    Raises:
        QuerySyntaxError: The query is malformed
    """
    logger = get_logger()
    logger.debug(f"Parsing text query: {source}")
    return _QueryParser().parse(source)


__all__ = [
    "parse_log",
    "parse_query",
    "parse_clock",
    "compile_pattern",
    "LogParser",
    "DEFAULT_LINE_PATTERN",
    "ParseError",
    "QuerySyntaxError",
    "NoEventsParsedError",
]

__version__ = "1.0.0"
__description__ = "Log and text query parsing components"
