#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Dict, Iterator, Optional, Tuple, Type, TypeVar

from mk_lexer import Token


# ==========================
# AST definitions
# ==========================


class NodeKind(Enum):
    PROGRAM = auto()
    LET_STATEMENT = auto()
    IDENTIFIER = auto()
    RETURN_STATEMENT = auto()
    EXPRESSION_STATEMENT = auto()
    INTEGER_LITERAL = auto()
    PREFIX_EXPRESSION = auto()
    INFIX_EXPRESSION = auto()
    BOOLEAN = auto()
    IF_EXPRESSION = auto()
    BLOCK_STATEMENT = auto()
    FUNCTION_LITERAL = auto()
    CALL_EXPRESSION = auto()


@dataclass(frozen=True)
class Node:
    """
    Common base of every AST node.

    `token` is the token that introduced the node. `str(node)` is the node's
    canonical form: fully parenthesised operators, `;` after let/return.
    """
    token: Token

    kind: ClassVar[NodeKind]

    def token_literal(self) -> str:
        return self.token.literal

    def children(self) -> Tuple["Node", ...]:
        return ()


class Statement(Node):
    pass


class Expression(Node):
    pass


# --- root ---

@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Statement, ...]

    kind: ClassVar[NodeKind] = NodeKind.PROGRAM

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def children(self) -> Tuple[Node, ...]:
        return self.statements

    def __str__(self) -> str:
        return "".join(str(stmt) for stmt in self.statements)


# --- expressions ---

@dataclass(frozen=True)
class Identifier(Expression):
    value: str

    kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int  # signed 64-bit, range checked by the parser

    kind: ClassVar[NodeKind] = NodeKind.INTEGER_LITERAL

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Expression):
    value: bool

    kind: ClassVar[NodeKind] = NodeKind.BOOLEAN

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: str
    right: Expression

    kind: ClassVar[NodeKind] = NodeKind.PREFIX_EXPRESSION

    def children(self) -> Tuple[Node, ...]:
        return (self.right,)

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression

    kind: ClassVar[NodeKind] = NodeKind.INFIX_EXPRESSION

    def children(self) -> Tuple[Node, ...]:
        return self.left, self.right

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


# --- statements ---

@dataclass(frozen=True)
class LetStatement(Statement):
    name: Identifier
    value: Expression

    kind: ClassVar[NodeKind] = NodeKind.LET_STATEMENT

    def children(self) -> Tuple[Node, ...]:
        return self.name, self.value

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    return_value: Expression

    kind: ClassVar[NodeKind] = NodeKind.RETURN_STATEMENT

    def children(self) -> Tuple[Node, ...]:
        return (self.return_value,)

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.return_value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression

    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION_STATEMENT

    def children(self) -> Tuple[Node, ...]:
        return (self.expression,)

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    statements: Tuple[Statement, ...]

    kind: ClassVar[NodeKind] = NodeKind.BLOCK_STATEMENT

    def children(self) -> Tuple[Node, ...]:
        return self.statements

    def __str__(self) -> str:
        return "{" + "".join(str(stmt) for stmt in self.statements) + "}"


# --- compound expressions ---

@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    kind: ClassVar[NodeKind] = NodeKind.IF_EXPRESSION

    def children(self) -> Tuple[Node, ...]:
        if self.alternative is None:
            return self.condition, self.consequence
        return self.condition, self.consequence, self.alternative

    def __str__(self) -> str:
        # operator expressions already print their own parentheses
        cond = str(self.condition)
        if not isinstance(self.condition, (PrefixExpression, InfixExpression)):
            cond = f"({cond})"
        out = f"{self.token_literal()} {cond} {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    kind: ClassVar[NodeKind] = NodeKind.FUNCTION_LITERAL

    def children(self) -> Tuple[Node, ...]:
        return self.parameters + (self.body,)

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    function: Expression  # Identifier or FunctionLiteral, or any callee expression
    arguments: Tuple[Expression, ...]

    kind: ClassVar[NodeKind] = NodeKind.CALL_EXPRESSION

    def children(self) -> Tuple[Node, ...]:
        return (self.function,) + self.arguments

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


ALL_NODE_TYPES: Dict[NodeKind, Type[Node]] = {
    cls.kind: cls
    for cls in (
        Program, LetStatement, Identifier, ReturnStatement, ExpressionStatement, IntegerLiteral,
        PrefixExpression, InfixExpression, Boolean, IfExpression, BlockStatement, FunctionLiteral,
        CallExpression,
    )
}

N = TypeVar("N", bound=Node)


def downcast(node: Node, cls: Type[N]) -> N:
    """Return `node` typed as `cls`, or raise TypeError if it is another kind of node."""
    if not isinstance(node, cls):
        raise TypeError(f"expected {cls.__name__}, got {type(node).__name__} ({node.kind.name})")
    return node


def walk(node: Node) -> Iterator[Node]:
    """Yield `node` and all of its descendants, depth-first in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))
