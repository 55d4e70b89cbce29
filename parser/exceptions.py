# parser/exceptions.py
# This file is part of Causeway - Causal Log Motif Search
#
# Custom exceptions for log and query parsing

"""Domain-specific exceptions for log and search-query parsing.

Per-line problems are recoverable: the log parser records a ParseError for
the offending line and keeps going. A label that yields no event at all is
fatal for that label and raises NoEventsParsedError.
"""

from typing import Optional

from model.exceptions import CausewayError


class ParseError(CausewayError):
    """Exception raised when a pattern, a log line or a query cannot be parsed.

    Attributes:
        line_number: 1-based line number of the offending line, if any
        line: Text of the offending line, if any
    """

    def __init__(
        self, message: str, line_number: Optional[int] = None, line: Optional[str] = None
    ) -> None:
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class QuerySyntaxError(ParseError):
    """Exception raised when a structured text query is malformed."""

    pass


class NoEventsParsedError(ParseError):
    """Exception raised when no line of a label matches the line pattern."""

    def __init__(self, label: str) -> None:
        self.label = label
        name = f"label {label!r}" if label else "the log"
        super().__init__(
            f"No events could be parsed from {name}. "
            f"Check that the parser regular expression matches the log lines."
        )
