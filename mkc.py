#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional, Tuple

from mk_ast import Program
from mk_ast_printer import format_program
from mk_context import RunContext, LogLevel
from mk_lexer import Lexer, TokenKind
from mk_logger import log_debug, log_error, log_info, log_stage, log_warning
from mk_parser import ParseError, Parser
from mk_repl import start_repl


def build_run_context(args: argparse.Namespace) -> RunContext:
    """Build a RunContext from command-line arguments."""
    log_rich_format = getattr(args, 'log', False)

    # Convert verbosity count to LogLevel
    verbosity = getattr(args, 'verbosity', 0)
    if verbosity >= 3:
        log_level = LogLevel.DEBUG
    elif verbosity >= 1:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.ERROR

    return RunContext(log_rich_format=log_rich_format, log_level=log_level)


def _read_source(args: argparse.Namespace, context: RunContext) -> Optional[Tuple[str, str]]:
    """Return (name, text) for the input selected by `-e` or the file argument, or None on error."""
    if args.expr is not None:
        return "<expr>", args.expr
    if args.file is None:
        log_error(context, "error: [MKC-0010] no input: pass a file or -e SOURCE")
        return None
    path = Path(args.file)
    try:
        return str(path), path.read_text(encoding="utf-8")
    except OSError as e:
        log_error(context, f"error: [MKC-0020] cannot read {path}: {e}")
        return None


def _parse_input(args: argparse.Namespace, context: RunContext) -> Optional[Program]:
    source = _read_source(args, context)
    if source is None:
        return None
    name, text = source
    log_stage(context, "Parsing", name)
    try:
        program = Parser.from_source(text).parse_program()
    except ParseError as e:
        log_error(context, f"{name}: error: {e.message}")
        return None
    log_info(context, f"Parsed {len(program.statements)} statement(s) from '{name}'")
    return program


def _print_rendered(context: RunContext, render: Callable[[Program], str], program: Program) -> int:
    try:
        text = render(program)
    except RecursionError:
        log_error(context, "error: [MKC-0030] program nested too deeply to print")
        return 1
    print(text)
    return 0


def cmd_repl(args: argparse.Namespace) -> int:
    """Run the interactive driver on stdin/stdout."""
    context = build_run_context(args)
    log_info(context, "Starting interactive session")
    start_repl(sys.stdin, sys.stdout, context)
    return 0


def cmd_tok(args: argparse.Namespace) -> int:
    """Dump lexer tokens."""
    context = build_run_context(args)
    source = _read_source(args, context)
    if source is None:
        return 1
    name, text = source
    log_stage(context, "Lexing", name)

    tokens = Lexer.from_source(text).tokenize()
    for tok in tokens:
        if not args.include_eof and tok.kind is TokenKind.EOF:
            continue
        # Format: KIND (padded to 12)  'literal'
        print(f"{tok.kind.name:<12} {tok.literal!r}")
    log_debug(context, f"{len(tokens)} token(s) including end of input")

    illegal = [tok for tok in tokens if tok.kind is TokenKind.ILLEGAL]
    if illegal:
        log_warning(context, f"{name}: warning: {len(illegal)} illegal token(s), first {illegal[0]!r}")
    return 0


def cmd_ast(args: argparse.Namespace) -> int:
    """Dump the parsed tree structure."""
    context = build_run_context(args)
    program = _parse_input(args, context)
    if program is None:
        return 1
    return _print_rendered(context, format_program, program)


def cmd_fmt(args: argparse.Namespace) -> int:
    """Print the canonical, fully parenthesised form of the program."""
    context = build_run_context(args)
    program = _parse_input(args, context)
    if program is None:
        return 1
    return _print_rendered(context, str, program)


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    """Add the source file argument and the inline -e alternative."""
    parser.add_argument("file", nargs="?", help="Source file to read")
    parser.add_argument("-e", "--expr", help="Use SOURCE as program text instead of reading a file",
                        metavar="SOURCE")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="mkc", description="Monkey language front end")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=0,
                        dest='verbosity',
                        help="Increase verbosity: -v=INFO, -vvv=DEBUG")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")

    ###########################
    # repl command
    ###########################
    p_repl = subparsers.add_parser("repl", help="Start the interactive parser loop")
    p_repl.set_defaults(func=cmd_repl)

    ###########################
    # tok command
    ###########################
    p_tok = subparsers.add_parser("tok", help="Dump lexer tokens", aliases=["tokens"])
    p_tok.add_argument("--include-eof", "-I", action="store_true",
                       help="Include the EOF token in the output")
    _add_input_args(p_tok)
    p_tok.set_defaults(func=cmd_tok)

    ###########################
    # ast command
    ###########################
    p_ast = subparsers.add_parser("ast", help="Dump the parsed tree")
    _add_input_args(p_ast)
    p_ast.set_defaults(func=cmd_ast)

    ###########################
    # fmt command
    ###########################
    p_fmt = subparsers.add_parser("fmt", help="Print the canonical form", aliases=["format"])
    _add_input_args(p_fmt)
    p_fmt.set_defaults(func=cmd_fmt)

    args = parser.parse_args(argv)

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
