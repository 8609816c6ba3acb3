#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from mk_ast_printer import format_node, format_program


def test_tree_dump_of_let_statement(parse_program):
    printed = format_program(parse_program("let x = 1 + y;"))

    assert printed.splitlines() == [
        "Program <'let'>",
        "  statements:",
        "    LetStatement <'let'>",
        "      name:",
        "        Identifier(value='x') <'x'>",
        "      value:",
        "        InfixExpression(operator='+') <'+'>",
        "          left:",
        "            IntegerLiteral(value=1) <'1'>",
        "          right:",
        "            Identifier(value='y') <'y'>",
    ]


def test_tree_dump_skips_missing_alternative_and_empty_sequences(parse_program):
    program = parse_program("if (ok) { }")
    lines = format_node(program.statements[0].expression)

    assert lines[0] == "IfExpression <'if'>"
    assert "  alternative:" not in lines
    assert "      statements:" not in lines
    assert "  consequence:" in lines


def test_empty_program_dump(parse_program):
    assert format_program(parse_program("")) == "Program"
