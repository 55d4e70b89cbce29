# utils/__init__.py
# This file is part of Causeway - Causal Log Motif Search
#
# Utility module exports

from .logger import LogLevel, get_logger, set_log_level, configure_logging
from .log_generator import generate_log

__all__ = [
    "LogLevel",
    "get_logger",
    "set_log_level",
    "configure_logging",
    "generate_log",
]
