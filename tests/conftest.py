#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from mk_ast import ExpressionStatement, Program
from mk_parser import Parser


@pytest.fixture
def parse_program():
    """Parse source text into a Program.

    Usage:
        def test_something(parse_program):
            program = parse_program("let x = 5;")
            assert len(program.statements) == 1
    """

    def _parse(src: str) -> Program:
        return Parser.from_source(src).parse_program()

    return _parse


@pytest.fixture
def parse_single_expression(parse_program):
    """Parse source text holding exactly one expression statement and return its expression."""

    def _parse(src: str):
        program = parse_program(src)
        assert len(program.statements) == 1
        stmt = program.statements[0]
        assert isinstance(stmt, ExpressionStatement)
        return stmt.expression

    return _parse


def canonical(src: str) -> str:
    """Canonical form of the program parsed from `src`."""
    return str(Parser.from_source(src).parse_program())
