"""
Token types for the Lox scanner.

Tokens come in two shapes: a plain ``Token`` carrying kind, lexeme and line,
and a ``LiteralToken`` that additionally carries the literal payload. Only
STRING, NUMBER, TRUE, FALSE and NIL tokens are ever literal tokens.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Union


class TokenType(Enum):
    """All token types recognized by the scanner."""

    # --- Single-character tokens ---
    LEFT_PAREN = auto()         # (
    RIGHT_PAREN = auto()        # )
    LEFT_BRACE = auto()         # {
    RIGHT_BRACE = auto()        # }
    COMMA = auto()              # ,
    DOT = auto()                # .
    MINUS = auto()              # -
    PLUS = auto()               # +
    SEMICOLON = auto()          # ;
    SLASH = auto()              # /
    STAR = auto()               # *

    # --- One or two character tokens ---
    BANG = auto()               # !
    BANG_EQUAL = auto()         # !=
    EQUAL = auto()              # =
    EQUAL_EQUAL = auto()        # ==
    GREATER = auto()            # >
    GREATER_EQUAL = auto()      # >=
    LESS = auto()               # <
    LESS_EQUAL = auto()         # <=

    # --- Literals ---
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # --- Keywords ---
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    # --- Special ---
    EOF = auto()


# Payload of a literal token: str for STRING, float for NUMBER,
# True/False for the boolean keywords and None for nil.
LiteralValue = Union[str, float, bool, None]


@dataclass(frozen=True)
class Token:
    """A single token from the scanner."""
    type: TokenType
    lexeme: str         # The original source text
    line: int           # 1-indexed source line

    def __str__(self) -> str:
        return f"{self.type.name} {self.lexeme!r} (line {self.line})"


@dataclass(frozen=True)
class LiteralToken(Token):
    """A token that also carries a literal value."""
    literal: LiteralValue = None

    def __str__(self) -> str:
        return f"{self.type.name} {self.lexeme!r} {self.literal!r} (line {self.line})"


# Keyword mapping - maps identifier text to token type
KEYWORDS: dict[str, TokenType] = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}

# Keywords that scan straight into literal tokens
KEYWORD_LITERALS: dict[TokenType, LiteralValue] = {
    TokenType.TRUE: True,
    TokenType.FALSE: False,
    TokenType.NIL: None,
}

LITERAL_TOKEN_TYPES = frozenset({
    TokenType.STRING,
    TokenType.NUMBER,
    TokenType.TRUE,
    TokenType.FALSE,
    TokenType.NIL,
})


def is_literal_type(token_type: TokenType) -> bool:
    """Check if a token type carries a literal payload."""
    return token_type in LITERAL_TOKEN_TYPES


def describe_location(token: Token) -> str:
    """Describe where a token sits, for error messages."""
    if token.type == TokenType.EOF:
        return "at end"
    return f"at '{token.lexeme}'"


def keyword_type(text: str) -> Optional[TokenType]:
    """Look up a keyword, returning None for plain identifiers."""
    return KEYWORDS.get(text)
