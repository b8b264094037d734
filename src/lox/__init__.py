"""
Lox expression interpreter.

This package provides:
- Scanner: Tokenizes source text, collecting every lexical error
- Parser: Builds an expression tree from tokens
- Interpreter: Evaluates the tree into a runtime value

Usage:
    from lox import scan, parse, evaluate, print_ast

    result = scan('(1 + 2) * 3')
    if result.has_errors:
        for error in result.errors:
            print(error)
    else:
        expr = parse(result.tokens)
        print(print_ast(expr))    # (* (group (+ 1 2)) 3)
        print(evaluate(expr))     # 9

    # Or run the whole pipeline at once
    outcome = run('"foo" + "bar"')
    print(outcome.value)          # foobar
"""

from importlib.metadata import PackageNotFoundError, version

from .tokens import (
    Token,
    LiteralToken,
    TokenType,
    KEYWORDS,
)

from .scanner import (
    Scanner,
    ScanResult,
    scan,
)

from .parser import (
    Parser,
    parse,
)

from .ast import (
    Expr,
    Binary,
    Unary,
    Grouping,
    Literal,
    AstVisitor,
    AstPrinter,
    print_ast,
)

from .errors import (
    LoxError,
    LexError,
    ParseError,
    LoxRuntimeError,
    InternalError,
    Diagnostic,
    DiagnosticCollector,
)

from .runtime import (
    Interpreter,
    RunResult,
    Value,
    ValueType,
    evaluate,
    run,
)

try:
    __version__ = version("lox-expr")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

__all__ = [
    # Tokens
    'Token',
    'LiteralToken',
    'TokenType',
    'KEYWORDS',

    # Scanner
    'Scanner',
    'ScanResult',
    'scan',

    # Parser
    'Parser',
    'parse',

    # AST nodes
    'Expr',
    'Binary',
    'Unary',
    'Grouping',
    'Literal',
    'AstVisitor',
    'AstPrinter',
    'print_ast',

    # Errors
    'LoxError',
    'LexError',
    'ParseError',
    'LoxRuntimeError',
    'InternalError',
    'Diagnostic',
    'DiagnosticCollector',

    # Runtime
    'Interpreter',
    'RunResult',
    'Value',
    'ValueType',
    'evaluate',
    'run',
]
