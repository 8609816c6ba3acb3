#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import dataclasses

import pytest

from mk_ast import (
    ALL_NODE_TYPES, CallExpression, ExpressionStatement, Expression, Identifier, IntegerLiteral, LetStatement,
    NodeKind, Program, Statement, downcast, walk)
from mk_lexer import Token, TokenKind


def test_program_string_from_hand_built_tree():
    program = Program(
        Token(TokenKind.EOF, ""),
        (
            LetStatement(
                Token(TokenKind.LET, "let"),
                Identifier(Token(TokenKind.IDENT, "myVar"), "myVar"),
                Identifier(Token(TokenKind.IDENT, "anotherVar"), "anotherVar"),
            ),
        ),
    )

    assert str(program) == "let myVar = anotherVar;"
    assert program.token_literal() == "let"
    assert program.kind is NodeKind.PROGRAM


def test_every_node_kind_has_a_class():
    assert set(ALL_NODE_TYPES) == set(NodeKind)
    for kind, cls in ALL_NODE_TYPES.items():
        assert cls.kind is kind


def test_statements_and_expressions_are_disjoint():
    for cls in ALL_NODE_TYPES.values():
        assert not (issubclass(cls, Statement) and issubclass(cls, Expression))
    assert issubclass(ALL_NODE_TYPES[NodeKind.BLOCK_STATEMENT], Statement)
    assert issubclass(ALL_NODE_TYPES[NodeKind.IF_EXPRESSION], Expression)


def test_nodes_are_immutable(parse_program):
    program = parse_program("let x = 5;")

    with pytest.raises(dataclasses.FrozenInstanceError):
        program.statements[0].value = IntegerLiteral(Token(TokenKind.INT, "6"), 6)


def test_downcast(parse_program):
    stmt = parse_program("add(1)").statements[0]

    expr_stmt = downcast(stmt, ExpressionStatement)
    call = downcast(expr_stmt.expression, CallExpression)
    assert call.function.value == "add"

    with pytest.raises(TypeError) as excinfo:
        downcast(stmt, LetStatement)
    assert "EXPRESSION_STATEMENT" in str(excinfo.value)


def test_walk_visits_nodes_in_source_order(parse_program):
    program = parse_program("let f = fn(a) { if (a > 1) { g(a, 2) } else { -a } };")

    kinds = [node.kind for node in walk(program)]

    assert kinds == [
        NodeKind.PROGRAM,
        NodeKind.LET_STATEMENT,
        NodeKind.IDENTIFIER,  # f
        NodeKind.FUNCTION_LITERAL,
        NodeKind.IDENTIFIER,  # a
        NodeKind.BLOCK_STATEMENT,
        NodeKind.EXPRESSION_STATEMENT,
        NodeKind.IF_EXPRESSION,
        NodeKind.INFIX_EXPRESSION,
        NodeKind.IDENTIFIER,
        NodeKind.INTEGER_LITERAL,
        NodeKind.BLOCK_STATEMENT,
        NodeKind.EXPRESSION_STATEMENT,
        NodeKind.CALL_EXPRESSION,
        NodeKind.IDENTIFIER,
        NodeKind.IDENTIFIER,
        NodeKind.INTEGER_LITERAL,
        NodeKind.BLOCK_STATEMENT,
        NodeKind.EXPRESSION_STATEMENT,
        NodeKind.PREFIX_EXPRESSION,
        NodeKind.IDENTIFIER,
    ]


def test_token_literals(parse_program):
    program = parse_program("if (x) { fn(y) { y } }")
    literals = {node.kind: node.token_literal() for node in walk(program)}

    assert literals[NodeKind.IF_EXPRESSION] == "if"
    assert literals[NodeKind.BLOCK_STATEMENT] == "{"
    assert literals[NodeKind.FUNCTION_LITERAL] == "fn"
    statement_literals = [node.token_literal() for node in walk(program) if node.kind is NodeKind.EXPRESSION_STATEMENT]
    assert statement_literals == ["if", "fn", "y"]
