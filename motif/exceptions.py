# motif/exceptions.py
# This file is part of Causeway - Causal Log Motif Search
#
# Custom exceptions for motif search

from model.exceptions import CausewayError


class InvalidPatternError(CausewayError):
    """Exception raised when a motif query or pattern is unusable.

    Raised while building a finder, before any traversal starts, so a bad
    query never leaves a half-finished search behind.
    """

    pass
