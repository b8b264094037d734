"""
Scanner for Lox expressions.

Converts source text into a list of tokens for the parser.
Supports:
- Single and two-character operators (one character of lookahead)
- Line comments (// to end of line)
- String literals, which may span lines
- Number literals with an optional fractional part
- Identifiers and the reserved keywords

Lexical errors do not stop the scan. Each one is recorded and scanning
carries on, so a single pass reports every problem in the source. The token
list always ends with exactly one EOF token.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .tokens import (
    Token, LiteralToken, TokenType, LiteralValue,
    KEYWORD_LITERALS, keyword_type,
)
from .errors import (
    LexError,
    DiagnosticCollector,
    error_unexpected_character,
    error_unterminated_string,
)

logger = logging.getLogger(__name__)


SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
}

# first char -> (type if followed by '=', type otherwise)
ONE_OR_TWO_CHAR_TOKENS = {
    '!': (TokenType.BANG_EQUAL, TokenType.BANG),
    '=': (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    '<': (TokenType.LESS_EQUAL, TokenType.LESS),
    '>': (TokenType.GREATER_EQUAL, TokenType.GREATER),
}

WHITESPACE = ' \r\t'


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def _is_alpha(ch: str) -> bool:
    return ch.isalpha() or ch == '_'


def _is_alphanumeric(ch: str) -> bool:
    return ch.isalnum() or ch == '_'


@dataclass
class ScanResult:
    """Tokens plus every lexical error met while scanning."""
    tokens: List[Token]
    errors: List[LexError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def diagnostics(self) -> DiagnosticCollector:
        collector = DiagnosticCollector()
        for error in self.errors:
            collector.add_error(error)
        return collector


class Scanner:
    """
    Single-pass scanner with an explicit cursor.

    Usage:
        scanner = Scanner(source)
        tokens = scanner.scan_tokens()
        if scanner.errors:
            ...
    """

    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.errors: List[LexError] = []
        self.start = 0          # Start of the lexeme being scanned
        self.current = 0        # Next character to consume
        self.line = 1           # Current line (1-indexed)

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _advance(self) -> str:
        """Consume and return current character."""
        ch = self.source[self.current]
        self.current += 1
        return ch

    def _match(self, expected: str) -> bool:
        """Consume character if it matches expected."""
        if self._is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def _peek(self) -> str:
        if self._is_at_end():
            return '\0'
        return self.source[self.current]

    def _peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    def _lexeme(self) -> str:
        return self.source[self.start:self.current]

    def _add_token(self, token_type: TokenType) -> None:
        self.tokens.append(Token(token_type, self._lexeme(), self.line))

    def _add_literal_token(self, token_type: TokenType, literal: LiteralValue) -> None:
        self.tokens.append(LiteralToken(token_type, self._lexeme(), self.line, literal))

    def _report(self, error: LexError) -> None:
        logger.debug("lexical error: %s", error)
        self.errors.append(error)

    def _scan_string(self) -> None:
        """Scan a string literal; the opening quote is already consumed."""
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == '\n':
                self.line += 1
            self._advance()

        if self._is_at_end():
            self._report(error_unterminated_string(self.line))
            return

        self._advance()  # closing quote
        value = self.source[self.start + 1:self.current - 1]
        self._add_literal_token(TokenType.STRING, value)

    def _scan_number(self) -> None:
        """Scan a number literal; the first digit is already consumed."""
        while _is_digit(self._peek()):
            self._advance()

        # A '.' only belongs to the number when a digit follows it
        if self._peek() == '.' and _is_digit(self._peek_next()):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        self._add_literal_token(TokenType.NUMBER, float(self._lexeme()))

    def _scan_identifier(self) -> None:
        """Scan an identifier or keyword."""
        while _is_alphanumeric(self._peek()):
            self._advance()

        token_type = keyword_type(self._lexeme())
        if token_type is None:
            self._add_token(TokenType.IDENTIFIER)
        elif token_type in KEYWORD_LITERALS:
            self._add_literal_token(token_type, KEYWORD_LITERALS[token_type])
        else:
            self._add_token(token_type)

    def _scan_token(self) -> None:
        """Scan the next lexeme, adding at most one token."""
        ch = self._advance()

        if ch in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[ch])
        elif ch in ONE_OR_TWO_CHAR_TOKENS:
            with_equal, alone = ONE_OR_TWO_CHAR_TOKENS[ch]
            self._add_token(with_equal if self._match('=') else alone)
        elif ch == '/':
            if self._match('/'):
                # Comment runs to end of line
                while self._peek() != '\n' and not self._is_at_end():
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
        elif ch in WHITESPACE:
            pass
        elif ch == '\n':
            self.line += 1
        elif ch == '"':
            self._scan_string()
        elif _is_digit(ch):
            self._scan_number()
        elif _is_alpha(ch):
            self._scan_identifier()
        else:
            self._report(error_unexpected_character(ch, self.line))

    def scan_tokens(self) -> List[Token]:
        """Scan the entire source, returning the tokens.

        Lexical errors are collected on ``self.errors``.
        """
        while not self._is_at_end():
            self.start = self.current
            self._scan_token()

        self.tokens.append(Token(TokenType.EOF, "", self.line))
        logger.debug("scanned %d token(s), %d error(s)", len(self.tokens), len(self.errors))
        return self.tokens


def scan(source: str) -> ScanResult:
    """
    Convenience function to scan source code.

    Args:
        source: The source code to scan

    Returns:
        ScanResult holding the tokens (always EOF-terminated) and any
        lexical errors
    """
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    return ScanResult(tokens, scanner.errors)
