"""
Logging utilities for the Monkey front end.

Messages go to stderr and are filtered by the RunContext log level, so they
never mix with the canonical output written to stdout.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import sys
import time
from typing import Optional

from mk_context import RunContext, LogLevel


def log(context: Optional[RunContext], log_level: LogLevel, message: str) -> None:
    """
    Log a message if the context's level admits it.

    Args:
        context:    The run context holding the logging level; None means defaults.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    if context is None:
        context = RunContext.default()
    if context.log_level < log_level:
        return
    prefix = ""
    if context.log_rich_format:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = f"{timestamp} [{log_level.name}] "
    print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: Optional[RunContext], message: str) -> None:
    log(context, LogLevel.ERROR, message)


def log_warning(context: Optional[RunContext], message: str) -> None:
    log(context, LogLevel.WARNING, message)


def log_info(context: Optional[RunContext], message: str) -> None:
    log(context, LogLevel.INFO, message)


def log_debug(context: Optional[RunContext], message: str) -> None:
    log(context, LogLevel.DEBUG, message)


def log_stage(context: Optional[RunContext], stage: str, source_name: Optional[str] = None) -> None:
    """
    Log the start of a front-end stage.

    Args:
        context: The run context.
        stage: The name of the stage (e.g., "Lexing", "Parsing").
        source_name: Optional name of the input being processed.
    """
    if source_name:
        log(context, LogLevel.INFO, f"{stage} '{source_name}'")
    else:
        log(context, LogLevel.INFO, f"{stage}...")
