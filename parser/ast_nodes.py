# parser/ast_nodes.py
# This file is part of Causeway - Causal Log Motif Search
#
# Abstract Syntax Tree node classes for structured text queries

"""AST node classes for representing parsed text queries.

A query is a Boolean combination of conditions on a log line:

Node Types:
    Word, Pattern: Values (plain text or a /regular expression/)
    Implicit: A bare value, searched for anywhere in the line
    FieldMatch: ``field=value`` or ``field!=value`` on a named capture group
    And, Or: Boolean connectives

All nodes support the visitor design pattern for evaluation.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Union


class Visitor(Protocol):
    """Interface for query visitors."""

    def visit_implicit(self, n: Implicit): ...

    def visit_field(self, n: FieldMatch): ...

    def visit_and(self, n: And): ...

    def visit_or(self, n: Or): ...


@dataclass(frozen=True, slots=True)
class Word:
    """Plain text value, bare or quoted in the query."""

    text: str

    def __str__(self) -> str:
        escaped = self.text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'


@dataclass(frozen=True, slots=True)
class Pattern:
    """Regular expression value written as ``/source/``."""

    source: str

    def __str__(self) -> str:
        return "/" + self.source.replace("/", "\\/") + "/"


Value = Union[Word, Pattern]


@dataclass(frozen=True, slots=True)
class Expr:
    """Base class for all query AST nodes."""

    def accept(self, v: Visitor):
        """Dispatch to the appropriate visitor method.

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError

    def __str__(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Implicit(Expr):
    """A value searched for in the whole line.

    Attributes:
        value: Text searched as a substring, or pattern searched as a regex
    """

    value: Value

    def accept(self, v: Visitor):
        return v.visit_implicit(self)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class FieldMatch(Expr):
    """Condition on one named capture group.

    Attributes:
        field: Capture group name (``host``, ``event``, ...)
        value: Exact text, or pattern searched in the field
        negated: True for ``!=``
    """

    field: str
    value: Value
    negated: bool = False

    def accept(self, v: Visitor):
        return v.visit_field(self)

    def __str__(self) -> str:
        op = "!=" if self.negated else "="
        return f"{self.field}{op}{self.value}"


@dataclass(frozen=True, slots=True)
class And(Expr):
    """Both operands must match."""

    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_and(self)

    def __str__(self) -> str:
        return f"({self.left} && {self.right})"


@dataclass(frozen=True, slots=True)
class Or(Expr):
    """At least one operand must match."""

    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_or(self)

    def __str__(self) -> str:
        return f"({self.left} || {self.right})"
