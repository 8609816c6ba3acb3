#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Callable, Dict, List, Optional, Tuple

from mk_ast import (
    Program, Statement, Expression, LetStatement, ReturnStatement, ExpressionStatement, BlockStatement, Identifier,
    IntegerLiteral, Boolean, PrefixExpression, InfixExpression, IfExpression, FunctionLiteral, CallExpression)
from mk_lexer import TokenKind, Token, Lexer


# ==========================
# Parser
# ==========================

INT64_MAX = 2 ** 63 - 1


class Precedence(IntEnum):
    LOWEST = auto()
    EQUALS = auto()  # ==
    LESS_GREATER = auto()  # > or <
    SUM = auto()  # +
    PRODUCT = auto()  # *
    PREFIX = auto()  # -x or !x
    CALL = auto()  # f(x)


PRECEDENCES: Dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESS_GREATER,
    TokenKind.GT: Precedence.LESS_GREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}


class ParseErrorKind(Enum):
    UNEXPECTED_TOKEN = auto()  # a specific token kind was required
    MISSING_PREFIX_RULE = auto()  # token cannot start an expression
    MISSING_INFIX_RULE = auto()  # token cannot continue an expression
    INVALID_INTEGER = auto()  # integer literal outside the signed 64-bit range
    NESTING_TOO_DEEP = auto()  # input nests deeper than the interpreter stack allows


@dataclass
class ParseError(Exception):
    kind: ParseErrorKind
    message: str
    found: Optional[Token] = None
    expected: Optional[TokenKind] = None

    def __str__(self) -> str:
        return self.message


PrefixParseFn = Callable[[], Expression]
InfixParseFn = Callable[[Expression], Expression]


class Parser:
    """
    Pratt parser over a two-token window (`cur_token`, `peek_token`).

    Every parse method starts with `cur_token` on the first token of its
    construct and returns with `cur_token` on the last one. The first syntax
    error raises ParseError and aborts the whole parse.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.cur_token: Token = Token(TokenKind.EOF, "")
        self.peek_token: Token = Token(TokenKind.EOF, "")

        self.prefix_parse_fns: Dict[TokenKind, PrefixParseFn] = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns: Dict[TokenKind, InfixParseFn] = {
            TokenKind.PLUS: self.parse_infix_expression,
            TokenKind.MINUS: self.parse_infix_expression,
            TokenKind.SLASH: self.parse_infix_expression,
            TokenKind.ASTERISK: self.parse_infix_expression,
            TokenKind.EQ: self.parse_infix_expression,
            TokenKind.NOT_EQ: self.parse_infix_expression,
            TokenKind.LT: self.parse_infix_expression,
            TokenKind.GT: self.parse_infix_expression,
            TokenKind.LPAREN: self.parse_call_expression,
        }

        # fill both slots of the window
        self.next_token()
        self.next_token()

    @classmethod
    def from_source(cls, source: str) -> "Parser":
        return cls(Lexer.from_source(source))

    # --- token utilities ---

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.kind is kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind is kind

    def expect_peek(self, kind: TokenKind) -> None:
        """Advance if the next token has the given kind, raise otherwise."""
        if not self.peek_token_is(kind):
            raise ParseError(
                ParseErrorKind.UNEXPECTED_TOKEN,
                f"[PAR-0010] expected next token to be {kind.name}, got {self.peek_token!r} instead",
                found=self.peek_token,
                expected=kind,
            )
        self.next_token()

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    def _skip_optional_semicolon(self) -> None:
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()

    # --- entry point ---

    def parse_program(self) -> Program:
        statements: List[Statement] = []
        try:
            while not self.cur_token_is(TokenKind.EOF):
                statements.append(self.parse_statement())
                self.next_token()
        except RecursionError:
            raise ParseError(
                ParseErrorKind.NESTING_TOO_DEEP,
                f"[PAR-0040] input nested too deeply, stopped at {self.cur_token!r}",
                found=self.cur_token,
            ) from None
        return Program(self.cur_token, tuple(statements))

    # --- statements ---

    def parse_statement(self) -> Statement:
        if self.cur_token_is(TokenKind.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        # let <ident> = <expr> ;?
        token = self.cur_token
        self.expect_peek(TokenKind.IDENT)
        name = Identifier(self.cur_token, self.cur_token.literal)

        self.expect_peek(TokenKind.ASSIGN)
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)
        self._skip_optional_semicolon()
        return LetStatement(token, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        token = self.cur_token
        self.next_token()
        return_value = self.parse_expression(Precedence.LOWEST)
        self._skip_optional_semicolon()
        return ReturnStatement(token, return_value)

    def parse_expression_statement(self) -> ExpressionStatement:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        self._skip_optional_semicolon()
        return ExpressionStatement(token, expression)

    def parse_block_statement(self) -> BlockStatement:
        # cur_token is '{'; stops on '}' or end of input
        token = self.cur_token
        statements: List[Statement] = []
        self.next_token()
        while not self.cur_token_is(TokenKind.RBRACE) and not self.cur_token_is(TokenKind.EOF):
            statements.append(self.parse_statement())
            self.next_token()
        return BlockStatement(token, tuple(statements))

    # --- expressions with precedence ---

    def parse_expression(self, precedence: Precedence) -> Expression:
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            raise ParseError(
                ParseErrorKind.MISSING_PREFIX_RULE,
                f"[PAR-0020] no prefix parse function for {self.cur_token.kind.name}",
                found=self.cur_token,
            )
        left = prefix()

        while not self.peek_token_is(TokenKind.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                raise ParseError(
                    ParseErrorKind.MISSING_INFIX_RULE,
                    f"[PAR-0021] no infix parse function for {self.peek_token.kind.name}",
                    found=self.peek_token,
                )
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> IntegerLiteral:
        token = self.cur_token
        value = int(token.literal)
        if value > INT64_MAX:
            raise ParseError(
                ParseErrorKind.INVALID_INTEGER,
                f"[PAR-0030] integer literal '{token.literal}' out of 64-bit signed range",
                found=token,
            )
        return IntegerLiteral(token, value)

    def parse_boolean(self) -> Boolean:
        return Boolean(self.cur_token, self.cur_token_is(TokenKind.TRUE))

    def parse_prefix_expression(self) -> PrefixExpression:
        token = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        # same level on the right keeps equal-precedence chains left-associative
        right = self.parse_expression(precedence)
        return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self) -> Expression:
        self.next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RPAREN)
        return expr

    def parse_if_expression(self) -> IfExpression:
        # if ( <cond> ) { ... } [else { ... }]
        token = self.cur_token
        self.expect_peek(TokenKind.LPAREN)
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RPAREN)

        self.expect_peek(TokenKind.LBRACE)
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            self.expect_peek(TokenKind.LBRACE)
            alternative = self.parse_block_statement()

        return IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self) -> FunctionLiteral:
        # fn ( <params> ) { ... }
        token = self.cur_token
        self.expect_peek(TokenKind.LPAREN)
        parameters = self.parse_function_parameters()
        self.expect_peek(TokenKind.LBRACE)
        body = self.parse_block_statement()
        return FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self) -> Tuple[Identifier, ...]:
        identifiers: List[Identifier] = []
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return ()

        self.expect_peek(TokenKind.IDENT)
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.expect_peek(TokenKind.IDENT)
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        self.expect_peek(TokenKind.RPAREN)
        return tuple(identifiers)

    def parse_call_expression(self, function: Expression) -> CallExpression:
        token = self.cur_token
        arguments = self.parse_call_arguments()
        return CallExpression(token, function, arguments)

    def parse_call_arguments(self) -> Tuple[Expression, ...]:
        args: List[Expression] = []
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return ()

        self.next_token()
        args.append(self.parse_expression(Precedence.LOWEST))

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            args.append(self.parse_expression(Precedence.LOWEST))

        self.expect_peek(TokenKind.RPAREN)
        return tuple(args)


def parse(source: str) -> Program:
    """Parse a whole program from source text, raising ParseError on the first syntax error."""
    return Parser.from_source(source).parse_program()
