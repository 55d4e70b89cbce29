# parser/log_parser.py
# This file is part of Causeway - Causal Log Motif Search
#
# Regular-expression driven log reader producing labeled, timestamped events

"""Log text to LogEvent conversion.

A single input may contain several executions separated by delimiter lines;
each execution becomes a label. Every other line is searched with the line
pattern, whose named groups must include ``host`` and ``clock``. Any further
named group (``event`` for instance) is kept in the event's ``fields`` and
can be queried later.

Expected input (with the default pattern):
    A start {"A":1}
    B recv {"A":1,"B":1}
"""

import json
import re
from typing import Dict, List, Optional, Pattern, Union

from model.exceptions import MalformedTimestampError
from model.log_event import LogEvent
from model.vector_timestamp import VectorTimestamp
from utils.logger import get_logger
from .exceptions import NoEventsParsedError, ParseError

REQUIRED_GROUPS = ("host", "clock")

DEFAULT_LINE_PATTERN = r"^(?P<host>\S+)\s+(?P<event>.*?)\s*(?P<clock>\{[^{}]*\})\s*$"

# JavaScript-style named group, but not a lookbehind
_JS_NAMED_GROUP = re.compile(r"\(\?<(?![=!])")


def compile_pattern(source: Union[str, Pattern], what: str = "parser") -> Pattern:
    """Compile a user-supplied regular expression.

    Accepts ``(?<name>...)`` groups as well as Python's ``(?P<name>...)``.

    Raises:
        ParseError: The expression does not compile
    """
    if isinstance(source, re.Pattern):
        return source
    try:
        return re.compile(_JS_NAMED_GROUP.sub("(?P<", source), re.MULTILINE)
    except re.error as exc:
        raise ParseError(f"The {what} regular expression is invalid: {exc}") from exc


def parse_clock(payload: str) -> Dict[str, int]:
    """Parse a clock payload into a host -> counter mapping.

    Accepts JSON objects (``{"A":1,"B":2}``) and the relaxed unquoted form
    (``{A:1, B:2}``). Values are validated later by VectorTimestamp.

    Raises:
        MalformedTimestampError: The payload is not a mapping of host to counter
    """
    raw = payload.strip()
    try:
        clock = json.loads(raw)
    except ValueError:
        clock = _parse_relaxed_clock(raw)

    if not isinstance(clock, dict):
        raise MalformedTimestampError(f"Clock must be an object, got: {payload!r}")
    return clock


def _parse_relaxed_clock(raw: str) -> Dict[str, int]:
    if not (raw.startswith("{") and raw.endswith("}")):
        raise MalformedTimestampError(f"Clock must be enclosed in braces: {raw!r}")

    clock: Dict[str, int] = {}
    body = raw[1:-1].strip()
    if not body:
        return clock

    for component in body.split(","):
        host, separator, value = component.rpartition(":")
        host = host.strip().strip("\"'")
        if not separator or not host:
            raise MalformedTimestampError(f"Invalid clock component: {component.strip()!r}")
        try:
            clock[host] = int(value.strip())
        except ValueError:
            raise MalformedTimestampError(
                f"Invalid clock value for {host!r}: {value.strip()!r}"
            ) from None
    return clock


class LogParser:
    """Splits a log into labels and extracts one LogEvent per matching line.

    Args:
        text: The complete log text
        delimiter: Optional execution delimiter pattern; empty or None for a
            single execution
        line_pattern: Line pattern with ``host`` and ``clock`` named groups
        base_offset: Byte offset of `text` within the underlying file, added
            to every event offset

    Raises:
        ParseError: A pattern is invalid or lacks a required group
        NoEventsParsedError: Some label contains no parsable line
    """

    def __init__(
        self,
        text: str,
        delimiter: Optional[Union[str, Pattern]],
        line_pattern: Union[str, Pattern] = DEFAULT_LINE_PATTERN,
        base_offset: int = 0,
    ) -> None:
        self._regexp = compile_pattern(line_pattern, "parser")
        for group in REQUIRED_GROUPS:
            if group not in self._regexp.groupindex:
                raise ParseError(
                    f"The parser regular expression does not have the "
                    f"necessary named capture group: {group}"
                )

        if isinstance(delimiter, str) and not delimiter.strip():
            delimiter = None
        self._delimiter = compile_pattern(delimiter, "delimiter") if delimiter else None

        self._labels: List[str] = []
        self._events: Dict[str, List[LogEvent]] = {}
        self._delimiter_lines: Dict[str, str] = {}
        self.errors: List[ParseError] = []

        self._parse(text, base_offset)

    @property
    def labels(self) -> List[str]:
        """Labels in first-seen order."""
        return list(self._labels)

    def events(self, label: str) -> List[LogEvent]:
        """Events of `label` in file order."""
        return list(self._events[label])

    def delimiter_line(self, label: str) -> Optional[str]:
        """The delimiter line that opened `label`, if any."""
        return self._delimiter_lines.get(label)

    def _open(self, label: str) -> None:
        if label not in self._events:
            self._labels.append(label)
            self._events[label] = []

    def _parse(self, text: str, base_offset: int) -> None:
        logger = get_logger()
        label = ""
        skipped: Dict[str, int] = {}
        offset = base_offset
        executions = 0

        for line_number, raw in enumerate(text.split("\n"), start=1):
            line_offset = offset
            offset += len(raw.encode("utf-8")) + 1
            line = raw.rstrip("\r")

            if self._delimiter is not None:
                match = self._delimiter.search(line)
                if match is not None:
                    executions += 1
                    label = self._execution_label(match, line, line_number, executions)
                    self._open(label)
                    self._delimiter_lines[label] = line
                    continue

            if not line.strip():
                continue
            self._open(label)

            match = self._regexp.search(line)
            if match is None:
                skipped[label] = skipped.get(label, 0) + 1
                logger.debug(f"Line {line_number} does not match the parser pattern")
                continue

            try:
                event = self._make_event(match, line, label, line_number, line_offset)
            except ParseError as exc:
                self.errors.append(exc)
                skipped[label] = skipped.get(label, 0) + 1
                logger.line_skipped(line_number, str(exc))
                continue
            self._events[label].append(event)

        if not self._labels:
            raise NoEventsParsedError("")

        for name in self._labels:
            logger.events_parsed(name, len(self._events[name]), skipped.get(name, 0))
            if not self._events[name]:
                raise NoEventsParsedError(name)

    def _execution_label(
        self, match: re.Match, line: str, line_number: int, execution: int
    ) -> str:
        """Name of the execution opened by a delimiter line.

        A ``trace`` group names the execution and must be unique. Otherwise
        the stripped delimiter line is used, suffixed with the 1-based
        execution index when an earlier execution already has that name.
        """
        trace = match.groupdict().get("trace")
        if trace:
            if trace in self._events:
                raise ParseError(f"Duplicate execution name: {trace!r}", line_number, line)
            return trace

        label = line.strip()
        suffix = execution
        while label in self._events:
            label = f"{line.strip()} #{suffix}".strip()
            suffix += 1
        return label

    def _make_event(
        self, match: re.Match, line: str, label: str, line_number: int, offset: int
    ) -> LogEvent:
        fields = {k: v for k, v in match.groupdict().items() if v is not None}

        host = fields.get("host", "").strip()
        if not host:
            raise ParseError("Empty host identifier", line_number, line)

        payload = fields.get("clock", "")
        try:
            timestamp = VectorTimestamp(host, parse_clock(payload))
        except MalformedTimestampError as exc:
            raise ParseError(
                f"Malformed vector clock {payload!r}: {exc}", line_number, line
            ) from exc

        return LogEvent(
            text=line,
            host=host,
            timestamp=timestamp,
            label=label,
            line_number=line_number,
            offset=offset,
            fields=fields,
        )
