#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional


# ==========================
# Tokens and lexer
# ==========================

class TokenKind(Enum):
    # Special
    ILLEGAL = auto()  # any character the language does not know
    EOF = auto()

    IDENT = auto()  # identifier, e.g. x, add, foo_bar, etc.
    INT = auto()  # integer literal, e.g. 5, 838383, etc.

    # Operators
    ASSIGN = auto()  # =
    PLUS = auto()  # +
    MINUS = auto()  # -
    BANG = auto()  # !
    ASTERISK = auto()  # *
    SLASH = auto()  # /
    LT = auto()  # <
    GT = auto()  # >
    EQ = auto()  # ==
    NOT_EQ = auto()  # !=

    # Delimiters
    COMMA = auto()  # ,
    SEMICOLON = auto()  # ;
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACE = auto()  # {
    RBRACE = auto()  # }

    # Keywords
    FUNCTION = auto()
    LET = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()


KEYWORDS = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}

SINGLE_CHAR_TOKENS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}

WHITESPACE = (" ", "\t", "\n", "\r")
DIGITS = "0123456789"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: str

    def __repr__(self) -> str:
        return f"{self.kind.name}({self.literal!r})" if self.kind is not TokenKind.EOF else "end-of-input"


def lookup_ident(word: str) -> TokenKind:
    return KEYWORDS.get(word, TokenKind.IDENT)


def _is_ident_start(c: str) -> bool:
    return c.isalpha() or c == "_"


def _is_ident_char(c: str) -> bool:
    return c.isalnum() or c == "_"


class Lexer:
    """
    Pull-based scanner: every call to `next_token` returns exactly one token.

    The lexer never fails. Characters outside the language are returned as
    ILLEGAL tokens and left for the parser to reject. Once the input is
    exhausted every further call returns an EOF token.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.length = len(source)
        self.position = 0  # index of `ch`
        self.read_position = 0  # index of the next char to read
        self.ch: Optional[str] = None
        self.read_char()

    @classmethod
    def from_source(cls, source: str) -> "Lexer":
        return cls(source)

    # --- low-level char utilities ---

    def read_char(self) -> None:
        if self.read_position >= self.length:
            self.ch = None
        else:
            self.ch = self.source[self.read_position]
        self.position = self.read_position
        if self.read_position <= self.length:
            self.read_position += 1

    def peek_char(self) -> Optional[str]:
        if self.read_position >= self.length:
            return None
        return self.source[self.read_position]

    # --- main API ---

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.kind is TokenKind.EOF:
                break
        return tokens

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            if tok.kind is TokenKind.EOF:
                return
            yield tok

    def next_token(self) -> Token:
        self._skip_whitespace()

        c = self.ch
        if c is None:
            return Token(TokenKind.EOF, "")

        # identifiers / keywords
        if _is_ident_start(c):
            text = self._read_identifier()
            return Token(lookup_ident(text), text)

        # numbers (literal text only, converted by the parser)
        if c in DIGITS:
            return Token(TokenKind.INT, self._read_number())

        # two-character operators with one char of lookahead
        if c == "=":
            if self.peek_char() == "=":
                self.read_char()
                self.read_char()
                return Token(TokenKind.EQ, "==")
            self.read_char()
            return Token(TokenKind.ASSIGN, c)

        if c == "!":
            if self.peek_char() == "=":
                self.read_char()
                self.read_char()
                return Token(TokenKind.NOT_EQ, "!=")
            self.read_char()
            return Token(TokenKind.BANG, c)

        kind = SINGLE_CHAR_TOKENS.get(c, TokenKind.ILLEGAL)
        self.read_char()
        return Token(kind, c)

    def _read_identifier(self) -> str:
        start = self.position
        while self.ch is not None and _is_ident_char(self.ch):
            self.read_char()
        return self.source[start:self.position]

    def _read_number(self) -> str:
        start = self.position
        while self.ch is not None and self.ch in DIGITS:
            self.read_char()
        return self.source[start:self.position]

    def _skip_whitespace(self) -> None:
        while self.ch in WHITESPACE:
            self.read_char()
