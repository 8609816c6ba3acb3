#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from mk_ast import (
    BlockStatement, CallExpression, ExpressionStatement, FunctionLiteral, Identifier, IfExpression, InfixExpression,
    LetStatement, NodeKind, ReturnStatement)


def test_if_expression(parse_single_expression):
    expr = parse_single_expression("if (x < y) { x }")

    assert isinstance(expr, IfExpression)
    assert isinstance(expr.condition, InfixExpression)
    assert str(expr.condition) == "(x < y)"
    assert len(expr.consequence.statements) == 1
    assert isinstance(expr.consequence.statements[0], ExpressionStatement)
    assert expr.consequence.statements[0].expression.value == "x"
    assert expr.alternative is None
    assert str(expr) == "if (x < y) {x}"


def test_if_else_expression(parse_single_expression):
    expr = parse_single_expression("if (x < y) { x } else { y }")

    assert isinstance(expr, IfExpression)
    assert str(expr.condition) == "(x < y)"
    assert str(expr.consequence) == "{x}"
    assert isinstance(expr.alternative, BlockStatement)
    assert str(expr.alternative) == "{y}"
    assert expr.alternative.kind is NodeKind.BLOCK_STATEMENT
    assert str(expr) == "if (x < y) {x} else {y}"


def test_if_condition_without_operator_is_parenthesised(parse_single_expression):
    expr = parse_single_expression("if (ready) { go() }")

    assert isinstance(expr.condition, Identifier)
    assert str(expr) == "if (ready) {go()}"


def test_block_with_several_statements(parse_single_expression):
    expr = parse_single_expression("if (true) { let a = 1; return a; a }")

    kinds = [s.kind for s in expr.consequence.statements]
    assert kinds == [NodeKind.LET_STATEMENT, NodeKind.RETURN_STATEMENT, NodeKind.EXPRESSION_STATEMENT]
    assert str(expr.consequence) == "{let a = 1;return a;a}"


def test_empty_block(parse_single_expression):
    expr = parse_single_expression("if (x) {}")

    assert expr.consequence.statements == ()
    assert str(expr) == "if (x) {}"


def test_block_closed_by_end_of_input(parse_single_expression):
    expr = parse_single_expression("if (x) { y")

    assert str(expr.consequence) == "{y}"


def test_function_literal(parse_single_expression):
    expr = parse_single_expression("fn(x, y) { x + y; }")

    assert isinstance(expr, FunctionLiteral)
    assert [p.value for p in expr.parameters] == ["x", "y"]
    assert len(expr.body.statements) == 1
    body_expr = expr.body.statements[0].expression
    assert isinstance(body_expr, InfixExpression)
    assert body_expr.operator == "+"
    assert str(expr.body) == "{(x + y)}"
    assert str(expr) == "fn(x, y) {(x + y)}"


@pytest.mark.parametrize(
    "src, params",
    [
        ("fn() {};", []),
        ("fn(x) {};", ["x"]),
        ("fn(x, y, z) {};", ["x", "y", "z"]),
    ],
)
def test_function_parameters(parse_single_expression, src, params):
    expr = parse_single_expression(src)

    assert [p.value for p in expr.parameters] == params


def test_call_expression(parse_single_expression):
    expr = parse_single_expression("add(1, 2 * 3, 4 + 5);")

    assert isinstance(expr, CallExpression)
    assert isinstance(expr.function, Identifier)
    assert expr.function.value == "add"
    assert expr.token_literal() == "("
    assert [str(a) for a in expr.arguments] == ["1", "(2 * 3)", "(4 + 5)"]


def test_call_without_arguments(parse_single_expression):
    expr = parse_single_expression("noop()")

    assert expr.arguments == ()
    assert str(expr) == "noop()"


def test_call_on_function_literal(parse_single_expression):
    expr = parse_single_expression("fn(x) { x * x }(3)")

    assert isinstance(expr, CallExpression)
    assert isinstance(expr.function, FunctionLiteral)
    assert str(expr) == "fn(x) {(x * x)}(3)"


def test_let_bound_function_and_call(parse_program):
    program = parse_program("let add = fn(a, b) { return a + b; }; add(1, 2);")

    assert len(program.statements) == 2
    let_stmt, call_stmt = program.statements
    assert isinstance(let_stmt, LetStatement)
    assert isinstance(let_stmt.value, FunctionLiteral)
    assert isinstance(let_stmt.value.body.statements[0], ReturnStatement)
    assert isinstance(call_stmt.expression, CallExpression)
    assert str(program) == "let add = fn(a, b) {return (a + b);};add(1, 2)"
