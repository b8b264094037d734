"""
Unit tests for the Lox scanner.
"""

import dataclasses

import pytest
from lox import scan, Scanner, Token, LiteralToken, TokenType, LexError


def token_types(source: str):
    return [t.type for t in scan(source).tokens]


class TestScannerBasics:
    """Test basic scanner functionality."""

    def test_empty_source(self):
        """Empty source produces only EOF."""
        result = scan("")
        assert len(result.tokens) == 1
        assert result.tokens[0].type == TokenType.EOF
        assert result.tokens[0].lexeme == ""
        assert result.tokens[0].line == 1
        assert not result.has_errors

    def test_whitespace_only(self):
        """Whitespace produces no tokens."""
        assert token_types(" \t\r ") == [TokenType.EOF]

    def test_single_character_tokens(self):
        """Every single-character token is recognized."""
        assert token_types("(){},.-+;*/") == [
            TokenType.LEFT_PAREN,
            TokenType.RIGHT_PAREN,
            TokenType.LEFT_BRACE,
            TokenType.RIGHT_BRACE,
            TokenType.COMMA,
            TokenType.DOT,
            TokenType.MINUS,
            TokenType.PLUS,
            TokenType.SEMICOLON,
            TokenType.STAR,
            TokenType.SLASH,
            TokenType.EOF,
        ]

    def test_two_character_operators(self):
        """Lookahead picks the two-character form when '=' follows."""
        assert token_types("!= == <= >= ! = < >") == [
            TokenType.BANG_EQUAL,
            TokenType.EQUAL_EQUAL,
            TokenType.LESS_EQUAL,
            TokenType.GREATER_EQUAL,
            TokenType.BANG,
            TokenType.EQUAL,
            TokenType.LESS,
            TokenType.GREATER,
            TokenType.EOF,
        ]

    def test_operators_without_spaces(self):
        """'!==' scans as '!=' followed by '='."""
        assert token_types("!==") == [TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EOF]

    def test_lexemes(self):
        """Tokens keep their exact source text."""
        tokens = scan("1 >= 22.5").tokens
        assert [t.lexeme for t in tokens] == ["1", ">=", "22.5", ""]

    def test_scanner_class(self):
        """Scanner exposes tokens and errors directly."""
        scanner = Scanner("1 + 2")
        tokens = scanner.scan_tokens()
        assert [t.type for t in tokens] == [
            TokenType.NUMBER, TokenType.PLUS, TokenType.NUMBER, TokenType.EOF,
        ]
        assert scanner.errors == []

    def test_tokens_are_immutable(self):
        """Tokens cannot be modified once produced."""
        token = scan("+").tokens[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.line = 5


class TestLineTracking:
    """Test line numbers on tokens."""

    def test_lines_advance_on_newline(self):
        """Each newline advances the line counter."""
        tokens = scan("1\n2\n\n3").tokens
        assert [t.line for t in tokens] == [1, 2, 4, 4]

    def test_token_lines_within_source(self):
        """Every token before EOF sits within the source's lines."""
        source = "(1 +\n2)\n// comment\n* \"a\nb\" == nil"
        tokens = scan(source).tokens
        total_lines = source.count("\n") + 1
        assert tokens[-1].type == TokenType.EOF
        for token in tokens[:-1]:
            assert 1 <= token.line <= total_lines

    def test_exactly_one_eof(self):
        """Only the last token is EOF."""
        tokens = scan("1 + 2 // trailing\n").tokens
        assert [t.type for t in tokens].count(TokenType.EOF) == 1
        assert tokens[-1].type == TokenType.EOF


class TestComments:
    """Test comment handling."""

    def test_line_comment(self):
        """Comments produce no tokens."""
        assert token_types("// nothing here") == [TokenType.EOF]

    def test_comment_then_code(self):
        """Code after a comment's newline is scanned."""
        tokens = scan("// comment\n1").tokens
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].line == 2

    def test_comment_after_code(self):
        """Comment at end of line."""
        assert token_types("1 // one") == [TokenType.NUMBER, TokenType.EOF]

    def test_slash_is_division(self):
        """A lone slash is an operator."""
        assert token_types("4 / 2") == [
            TokenType.NUMBER, TokenType.SLASH, TokenType.NUMBER, TokenType.EOF,
        ]


class TestStringLiterals:
    """Test string literal handling."""

    def test_simple_string(self):
        """Payload excludes the quotes, lexeme includes them."""
        token = scan('"hello world"').tokens[0]
        assert isinstance(token, LiteralToken)
        assert token.type == TokenType.STRING
        assert token.literal == "hello world"
        assert token.lexeme == '"hello world"'

    def test_empty_string(self):
        """Empty string literal."""
        assert scan('""').tokens[0].literal == ""

    def test_no_escape_processing(self):
        """Backslashes are kept verbatim."""
        assert scan(r'"a\nb"').tokens[0].literal == "a\\nb"

    def test_multiline_string(self):
        """Newlines inside a string advance the line counter."""
        tokens = scan('"a\nb" 1').tokens
        assert tokens[0].literal == "a\nb"
        assert tokens[1].line == 2

    def test_unterminated_string(self):
        """Unterminated string is an error and produces no token."""
        result = scan('"abc')
        assert [t.type for t in result.tokens] == [TokenType.EOF]
        assert len(result.errors) == 1
        assert result.errors[0].message == "Unterminated string."
        assert str(result.errors[0]) == "[line 1] Error: Unterminated string."

    def test_unterminated_string_reports_last_line(self):
        """The error is reported on the line where input ran out."""
        result = scan('"abc\ndef\n')
        assert result.errors[0].line == 3


class TestNumberLiterals:
    """Test number literal handling."""

    def test_integer(self):
        """Integers are stored as floats."""
        token = scan("123").tokens[0]
        assert token.type == TokenType.NUMBER
        assert token.literal == 123.0
        assert isinstance(token.literal, float)

    def test_fraction(self):
        """Fractional part after a dot."""
        assert scan("12.5").tokens[0].literal == 12.5

    def test_trailing_dot(self):
        """A dot without a following digit is not part of the number."""
        tokens = scan("12.").tokens
        assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]
        assert tokens[0].literal == 12.0

    def test_leading_dot(self):
        """A leading dot is its own token."""
        tokens = scan(".5").tokens
        assert [t.type for t in tokens] == [TokenType.DOT, TokenType.NUMBER, TokenType.EOF]
        assert tokens[1].literal == 5.0

    def test_negative_number_is_two_tokens(self):
        """The minus sign is an operator."""
        assert token_types("-3") == [TokenType.MINUS, TokenType.NUMBER, TokenType.EOF]


class TestKeywordsAndIdentifiers:
    """Test identifiers and reserved words."""

    def test_identifier(self):
        """Identifiers are plain tokens."""
        token = scan("foo_bar123").tokens[0]
        assert token.type == TokenType.IDENTIFIER
        assert token.lexeme == "foo_bar123"
        assert not isinstance(token, LiteralToken)

    def test_underscore_identifier(self):
        """Identifiers may start with an underscore."""
        assert scan("_x").tokens[0].type == TokenType.IDENTIFIER

    def test_keywords(self):
        """Every reserved word maps to its own type."""
        source = "and class else false for fun if nil or print return super this true var while"
        assert token_types(source) == [
            TokenType.AND, TokenType.CLASS, TokenType.ELSE, TokenType.FALSE,
            TokenType.FOR, TokenType.FUN, TokenType.IF, TokenType.NIL,
            TokenType.OR, TokenType.PRINT, TokenType.RETURN, TokenType.SUPER,
            TokenType.THIS, TokenType.TRUE, TokenType.VAR, TokenType.WHILE,
            TokenType.EOF,
        ]

    def test_keyword_prefix_is_identifier(self):
        """Longer words that start with a keyword are identifiers."""
        assert token_types("orchid classy") == [
            TokenType.IDENTIFIER, TokenType.IDENTIFIER, TokenType.EOF,
        ]

    def test_keyword_literals(self):
        """true, false and nil carry their literal values."""
        true, false, nil = scan("true false nil").tokens[:3]
        assert isinstance(true, LiteralToken) and true.literal is True
        assert isinstance(false, LiteralToken) and false.literal is False
        assert isinstance(nil, LiteralToken) and nil.literal is None

    def test_operators_carry_no_payload(self):
        """Non-literal tokens have no literal attribute at all."""
        token = scan("+").tokens[0]
        assert type(token) is Token
        assert not hasattr(token, "literal")


class TestLexicalErrors:
    """Test error accumulation."""

    def test_unexpected_character(self):
        """Unknown characters are reported."""
        result = scan("@")
        assert len(result.errors) == 1
        error = result.errors[0]
        assert isinstance(error, LexError)
        assert error.message == "Unexpected character."
        assert error.line == 1
        assert error.diagnostic.code == "E001"

    def test_scanning_continues_after_error(self):
        """Tokens around a bad character are still produced."""
        result = scan("1 @ 2")
        assert [t.type for t in result.tokens] == [
            TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF,
        ]
        assert len(result.errors) == 1

    def test_errors_accumulate(self):
        """Every lexical error is reported in a single scan."""
        result = scan('@\n"unterminated')
        assert [e.message for e in result.errors] == [
            "Unexpected character.",
            "Unterminated string.",
        ]
        assert [e.line for e in result.errors] == [1, 2]
        assert result.tokens[-1].type == TokenType.EOF

    def test_several_bad_characters(self):
        """Each bad character gets its own error."""
        result = scan("#$ 1 ?")
        assert len(result.errors) == 3
        assert result.diagnostics().error_count == 3
