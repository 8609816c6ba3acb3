"""
Run context for cross-cutting front-end options.

This module defines the RunContext dataclass which holds the options shared
by the command-line front end and the interactive driver (logging level,
log format, prompt).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Hierarchical logging levels for the Monkey front end."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # Stage progress messages (-v)
    DEBUG = 30      # Tokens and trees (-vvv)


@dataclass
class RunContext:
    """
    Holds front-end options that affect more than one stage.

    Attributes:
        log_rich_format:    If True, emit logs in rich format: timestamp and level prefix.
        log_level:          Current logging level.
        prompt:             Prompt written by the interactive driver before each read.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING
    prompt: str = "> "

    @staticmethod
    def default() -> 'RunContext':
        """Create a RunContext with default settings."""
        return RunContext(log_level=LogLevel.WARNING)
