"""
Recursive descent parser for Lox expressions.

Converts a token list into an expression tree. Each precedence level is a
left-associative loop over the next tighter level:

    expression  -> equality
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | primary
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | "(" expression ")"

The parser stops at the first syntax error. No partial tree is returned and
no attempt is made to resynchronize.

Nesting is bounded twice. Parentheses and prefix operators open a level of
parser recursion each, and at most ``MAX_NESTING`` may be open at once.
Every node built must also be at most ``MAX_DEPTH`` levels deep, which
bounds long operator chains that the loops below build without recursing.
"""

import logging
from typing import Callable, List, Optional

from .tokens import Token, LiteralToken, TokenType, is_literal_type
from .ast import MAX_DEPTH, Expr, Binary, Unary, Grouping, Literal, print_ast
from .errors import (
    error_expect_expression,
    error_expect_token,
    error_trailing_tokens,
    error_nesting_too_deep,
    error_malformed_tokens,
)

logger = logging.getLogger(__name__)


class Parser:
    """
    Recursive descent parser over a scanned token list.

    Usage:
        parser = Parser(tokens)
        expr = parser.parse()
    """

    EQUALITY_OPERATORS = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
    COMPARISON_OPERATORS = (
        TokenType.GREATER, TokenType.GREATER_EQUAL,
        TokenType.LESS, TokenType.LESS_EQUAL,
    )
    TERM_OPERATORS = (TokenType.MINUS, TokenType.PLUS)
    FACTOR_OPERATORS = (TokenType.SLASH, TokenType.STAR)
    UNARY_OPERATORS = (TokenType.BANG, TokenType.MINUS)

    # Each open parenthesis costs about a dozen Python frames
    MAX_NESTING = 64

    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise error_malformed_tokens("Token list must end with an EOF token.")
        self.tokens = tokens
        self.pos = 0
        self.nesting = 0

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def _is_at_end(self) -> bool:
        return self._current().type == TokenType.EOF

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self._current().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._current()
        if not self._is_at_end():
            self.pos += 1
        return token

    def _match(self, *token_types: TokenType) -> Optional[Token]:
        """Consume token if it matches any of the given types."""
        if self._current().type in token_types:
            return self._advance()
        return None

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type, or raise error."""
        if self._check(token_type):
            return self._advance()
        raise error_expect_token(message, self._current())

    # =========================================================================
    # Nesting Limits
    # =========================================================================

    def _open_level(self, token: Token) -> None:
        """Enter a parenthesis or prefix operator."""
        self.nesting += 1
        if self.nesting > self.MAX_NESTING:
            raise error_nesting_too_deep(token, self.MAX_NESTING)

    def _close_level(self) -> None:
        self.nesting -= 1

    def _checked(self, expr: Expr, token: Token) -> Expr:
        """Reject a node deeper than the tree walkers accept."""
        if expr.depth > MAX_DEPTH:
            raise error_nesting_too_deep(token, MAX_DEPTH)
        return expr

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def _parse_left_associative(self, operand: Callable[[], Expr],
                                operators: tuple) -> Expr:
        """Fold ``operand (op operand)*`` into a left-deep tree."""
        expr = operand()
        while True:
            operator = self._match(*operators)
            if operator is None:
                return expr
            right = operand()
            expr = self._checked(Binary(left=expr, operator=operator, right=right), operator)

    def _parse_expression(self) -> Expr:
        return self._parse_equality()

    def _parse_equality(self) -> Expr:
        return self._parse_left_associative(self._parse_comparison, self.EQUALITY_OPERATORS)

    def _parse_comparison(self) -> Expr:
        return self._parse_left_associative(self._parse_term, self.COMPARISON_OPERATORS)

    def _parse_term(self) -> Expr:
        return self._parse_left_associative(self._parse_factor, self.TERM_OPERATORS)

    def _parse_factor(self) -> Expr:
        return self._parse_left_associative(self._parse_unary, self.FACTOR_OPERATORS)

    def _parse_unary(self) -> Expr:
        """Parse prefix operators, which nest to the right (``!!x``)."""
        operator = self._match(*self.UNARY_OPERATORS)
        if operator is None:
            return self._parse_primary()
        self._open_level(operator)
        right = self._parse_unary()
        self._close_level()
        return self._checked(Unary(operator=operator, right=right), operator)

    def _parse_primary(self) -> Expr:
        """Parse literals and parenthesized expressions."""
        token = self._current()

        if is_literal_type(token.type):
            if not isinstance(token, LiteralToken):
                raise error_malformed_tokens(
                    f"{token.type.name} token on line {token.line} has no literal value."
                )
            self._advance()
            return Literal(value=token.literal)

        if self._match(TokenType.LEFT_PAREN):
            self._open_level(token)
            expr = self._parse_expression()
            closing = self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            self._close_level()
            return self._checked(Grouping(expression=expr), closing)

        raise error_expect_expression(token)

    def parse(self) -> Expr:
        """Parse a single expression spanning the whole token list."""
        try:
            expr = self._parse_expression()
        except RecursionError:
            # only reachable when called from an already deep stack
            raise error_nesting_too_deep(self._current(), self.MAX_NESTING) from None
        if not self._is_at_end():
            raise error_trailing_tokens(self._current())
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("parsed %s", print_ast(expr))
        return expr


def parse(tokens: List[Token]) -> Expr:
    """
    Convenience function to parse tokens into an expression.

    Args:
        tokens: List of tokens from the scanner, ending with EOF

    Returns:
        The root of the expression tree

    Raises:
        ParseError: At the first syntax error
        InternalError: If the token list is not EOF-terminated
    """
    return Parser(tokens).parse()
