#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from typing import Optional, TextIO

from mk_context import RunContext
from mk_logger import log_debug, log_stage
from mk_parser import ParseError, Parser


def eval_line(line: str, context: Optional[RunContext] = None) -> str:
    """
    Parse one line of input as a whole program.

    Returns the program's canonical form, or `ERROR: <message>` for the
    first syntax error or a tree too deep to render.
    """
    log_stage(context, "Parsing", "<repl>")
    try:
        program = Parser.from_source(line).parse_program()
    except ParseError as e:
        log_debug(context, f"parse aborted: {e.kind.name}")
        return f"ERROR: {e.message}"
    log_debug(context, f"parsed {len(program.statements)} statement(s)")
    try:
        return str(program)
    except RecursionError:
        log_debug(context, "canonical form too deep to render")
        return "ERROR: [REPL-0010] program nested too deeply to print"


def start_repl(reader: TextIO, writer: TextIO, context: Optional[RunContext] = None) -> None:
    """
    Line-oriented read-parse-print loop.

    Writes the prompt, reads one line, writes the result and a newline. There
    is no exit command; the loop ends when `reader` reaches end of input.
    """
    if context is None:
        context = RunContext.default()
    while True:
        writer.write(context.prompt)
        writer.flush()
        line = reader.readline()
        if not line:
            return
        writer.write(eval_line(line, context))
        writer.write("\n")
        writer.flush()
