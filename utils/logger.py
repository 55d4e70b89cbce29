# utils/logger.py
# This file is part of Causeway - Causal Log Motif Search
#
# Logging utility for graph construction and motif search with configurable levels

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for causal log analysis."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class CausewayLogger:
    """Centralized logger for parsing, graph building and motif search."""

    def __init__(self, name: str = "causeway", level: LogLevel = LogLevel.INFO):
        """Initialize the logger.

        Args:
            name: Logger name (typically module name)
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(CausewayFormatter())

        self.logger.addHandler(console_handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (serious problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for the analysis pipeline
    def events_parsed(self, label: str, count: int, skipped: int):
        """Log the parse summary of one label."""
        name = label or "<default>"
        self.debug(f"Label {name}: {count} events parsed, {skipped} lines skipped")

    def line_skipped(self, line_number: int, reason: str):
        """Log a matching line that could not be turned into an event."""
        self.warning(f"⚠️  Line {line_number} skipped: {reason}")

    def graph_built(self, label: str, hosts: int, nodes: int, edges: int):
        """Log causal graph construction."""
        name = label or "<default>"
        self.debug(f"Graph {name}: {hosts} hosts, {nodes} nodes, {edges} cross-host edges")

    def search_started(self, query: str, mode: str):
        """Log the start of a motif search."""
        self.debug(f"🔍 Searching {mode} query: {query}")

    def search_finished(self, finder: str, label: str, count: int):
        """Log the number of instances a finder produced."""
        name = label or "<default>"
        self.debug(f"    {finder} found {count} instance(s) in {name}")

    def navigation(self, index: int, total: int, offset: Optional[int]):
        """Log a navigator move."""
        self.debug(f"    ➡️  Result {index + 1}/{total} at offset {offset}")


class CausewayFormatter(logging.Formatter):
    """Custom formatter with clean output."""

    def format(self, record):
        # For INFO level and above, show message only (clean output)
        if record.levelno >= logging.INFO:
            return record.getMessage()

        # For DEBUG level, show with level indicator
        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        # Default formatting for other levels
        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[CausewayLogger] = None


def get_logger(name: str = "causeway") -> CausewayLogger:
    """Get or create the global logger instance.

    Args:
        name: Logger name (default: "causeway")

    Returns:
        CausewayLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = CausewayLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    logger = get_logger()
    logger.set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on command line flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)
