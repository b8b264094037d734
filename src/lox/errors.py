"""
Lox exceptions and diagnostics.

Error code ranges:
- E0xx: Lexical errors (collected, scanning continues)
- E1xx: Syntax errors (fail-fast)
- E2xx: Runtime type errors (fail-fast)
- E9xx: Internal errors (implementation bugs, no source line)
"""

from dataclasses import dataclass, field
from typing import Optional, List

from .tokens import Token, describe_location


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    code: str                       # E001, E101, etc.
    message: str                    # Human-readable message
    line: Optional[int] = None      # None for internal errors
    location: str = ""              # "at 'x'", "at end" or empty
    hints: List[str] = field(default_factory=list)

    def format(self, show_hints: bool = False) -> str:
        """Format the diagnostic for display.

        Positional errors read ``[line N] Error at 'x': message``; internal
        errors drop the line prefix.
        """
        where = f" {self.location}" if self.location else ""
        text = f"Error{where}: {self.message}"
        if self.line is not None:
            text = f"[line {self.line}] {text}"
        if show_hints:
            parts = [text]
            for hint in self.hints:
                parts.append(f"    = hint: {hint}")
            return "\n".join(parts)
        return text

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "message": self.message,
            "line": self.line,
            "location": self.location,
            "hints": self.hints,
        }


class LoxError(Exception):
    """Base exception for Lox errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def line(self) -> Optional[int]:
        return self.diagnostic.line

    @property
    def message(self) -> str:
        return self.diagnostic.message

    def __str__(self) -> str:
        return self.diagnostic.format()


class LexError(LoxError):
    """Error during scanning (E0xx)."""
    pass


class ParseError(LoxError):
    """Error during parsing (E1xx)."""
    pass


class LoxRuntimeError(LoxError):
    """Error during evaluation (E2xx)."""
    pass


class InternalError(LoxRuntimeError):
    """Invariant violated inside the interpreter itself (E9xx)."""
    pass


# --- Lexical error codes ---

def error_unexpected_character(char: str, line: int) -> LexError:
    """E001: Unexpected character."""
    diag = Diagnostic(
        code="E001",
        message="Unexpected character.",
        line=line,
        hints=[f"'{char}' is not part of the language"],
    )
    return LexError(diag)


def error_unterminated_string(line: int) -> LexError:
    """E002: Unterminated string literal."""
    diag = Diagnostic(
        code="E002",
        message="Unterminated string.",
        line=line,
        hints=['string literals must be closed with a matching "'],
    )
    return LexError(diag)


# --- Syntax error codes ---

def error_expect_expression(token: Token) -> ParseError:
    """E101: No expression where one was required."""
    diag = Diagnostic(
        code="E101",
        message="Expect expression.",
        line=token.line,
        location=describe_location(token),
    )
    return ParseError(diag)


def error_expect_token(message: str, token: Token) -> ParseError:
    """E102: A required token is missing."""
    diag = Diagnostic(
        code="E102",
        message=message,
        line=token.line,
        location=describe_location(token),
    )
    return ParseError(diag)


def error_trailing_tokens(token: Token) -> ParseError:
    """E103: Tokens left over after a complete expression."""
    diag = Diagnostic(
        code="E103",
        message="Expect end of expression.",
        line=token.line,
        location=describe_location(token),
        hints=["only a single expression is allowed per input"],
    )
    return ParseError(diag)


def error_nesting_too_deep(token: Token, limit: int) -> ParseError:
    """E104: Expression nests deeper than the interpreter can walk."""
    diag = Diagnostic(
        code="E104",
        message="Expression nests too deeply.",
        line=token.line,
        location=describe_location(token),
        hints=[f"expressions may nest at most {limit} levels deep"],
    )
    return ParseError(diag)


# --- Runtime error codes ---

def error_operand_not_number(operator: Token) -> LoxRuntimeError:
    """E201: Numeric operator applied to a non-number."""
    diag = Diagnostic(
        code="E201",
        message="Couldn't parse number",
        line=operator.line,
        location=describe_location(operator),
        hints=[f"operands of '{operator.lexeme}' must be numbers"],
    )
    return LoxRuntimeError(diag)


def error_invalid_plus_operands(operator: Token) -> LoxRuntimeError:
    """E202: '+' applied to a mix of types."""
    diag = Diagnostic(
        code="E202",
        message="expected string or number operands",
        line=operator.line,
        location=describe_location(operator),
        hints=["'+' adds two numbers or concatenates two strings"],
    )
    return LoxRuntimeError(diag)


# --- Internal error codes ---

def error_unexpected_operator(operator: Token, context: str) -> InternalError:
    """E901: An operator reached an evaluation branch that cannot handle it."""
    diag = Diagnostic(
        code="E901",
        message=f"Unexpected {context} operator {operator.type.name}.",
        location=describe_location(operator),
    )
    return InternalError(diag)


def error_malformed_tokens(message: str) -> InternalError:
    """E902: Token stream does not satisfy the scanner's guarantees."""
    diag = Diagnostic(
        code="E902",
        message=message,
    )
    return InternalError(diag)


def error_tree_too_deep(depth: int, limit: int) -> InternalError:
    """E903: A tree deeper than the parser would ever build."""
    diag = Diagnostic(
        code="E903",
        message=f"Expression tree is too deep to evaluate ({depth} levels, limit {limit}).",
    )
    return InternalError(diag)


class DiagnosticCollector:
    """Collects diagnostics across a pipeline run."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic."""
        self.diagnostics.append(diagnostic)

    def add_error(self, error: LoxError) -> None:
        """Add an error exception as a diagnostic."""
        self.add(error.diagnostic)

    @property
    def error_count(self) -> int:
        return len(self.diagnostics)

    def format_all(self, show_hints: bool = False) -> str:
        """Format all diagnostics for display, one per line."""
        return "\n".join(d.format(show_hints) for d in self.diagnostics)

    def to_json(self) -> dict:
        """Convert all diagnostics to JSON format."""
        return {
            "diagnostics": [d.to_json() for d in self.diagnostics],
            "error_count": self.error_count,
        }
