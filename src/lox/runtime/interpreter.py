"""
Tree-walking interpreter for Lox expressions.

Evaluates an expression tree bottom-up into a single ``Value``. Both
operands of a binary node are evaluated, left first, before the operator is
applied; nothing short-circuits. The first error aborts the walk.

``run`` drives the whole pipeline for one piece of source text and returns
a ``RunResult`` describing how far it got.
"""

import logging
import math
import operator as op
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .values import Value, number_val, string_val, bool_val
from ..ast import MAX_DEPTH, AstVisitor, Expr, Binary, Unary, Grouping, Literal
from ..tokens import Token, TokenType
from ..scanner import scan
from ..parser import parse
from ..errors import (
    Diagnostic,
    DiagnosticCollector,
    LoxError,
    LoxRuntimeError,
    error_operand_not_number,
    error_invalid_plus_operands,
    error_unexpected_operator,
    error_tree_too_deep,
)

logger = logging.getLogger(__name__)


def divide(left: float, right: float) -> float:
    """IEEE 754 division: x/0 is +-inf and 0/0 is NaN."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


# Operators that take two numbers
ARITHMETIC_OPERATORS: Dict[TokenType, Callable[[float, float], float]] = {
    TokenType.MINUS: op.sub,
    TokenType.STAR: op.mul,
    TokenType.SLASH: divide,
}

COMPARISON_OPERATORS: Dict[TokenType, Callable[[float, float], bool]] = {
    TokenType.GREATER: op.gt,
    TokenType.GREATER_EQUAL: op.ge,
    TokenType.LESS: op.lt,
    TokenType.LESS_EQUAL: op.le,
}


class Interpreter(AstVisitor):
    """
    Tree-walking evaluator.

    Holds no state between calls; ``evaluate`` is a pure function of the
    tree.
    """

    def evaluate(self, expr: Expr) -> Value:
        return expr.accept(self)

    def _number_operand(self, value: Value, operator: Token) -> float:
        if not value.is_number:
            raise error_operand_not_number(operator)
        return value.data

    def visit_Literal(self, node: Literal) -> Value:
        return Value.from_literal(node.value)

    def visit_Grouping(self, node: Grouping) -> Value:
        return self.evaluate(node.expression)

    def visit_Unary(self, node: Unary) -> Value:
        right = self.evaluate(node.right)
        operator = node.operator

        if operator.type == TokenType.BANG:
            return bool_val(not right.is_truthy())
        if operator.type == TokenType.MINUS:
            return number_val(-self._number_operand(right, operator))
        raise error_unexpected_operator(operator, "unary")

    def visit_Binary(self, node: Binary) -> Value:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        operator = node.operator
        kind = operator.type

        if kind in ARITHMETIC_OPERATORS:
            lhs = self._number_operand(left, operator)
            rhs = self._number_operand(right, operator)
            return number_val(ARITHMETIC_OPERATORS[kind](lhs, rhs))

        if kind in COMPARISON_OPERATORS:
            lhs = self._number_operand(left, operator)
            rhs = self._number_operand(right, operator)
            return bool_val(COMPARISON_OPERATORS[kind](lhs, rhs))

        if kind == TokenType.PLUS:
            if left.is_number and right.is_number:
                return number_val(left.data + right.data)
            if left.is_string and right.is_string:
                return string_val(left.data + right.data)
            raise error_invalid_plus_operands(operator)

        if kind == TokenType.EQUAL_EQUAL:
            return bool_val(left.is_equal(right))
        if kind == TokenType.BANG_EQUAL:
            return bool_val(not left.is_equal(right))

        raise error_unexpected_operator(operator, "binary")


def evaluate(expr: Expr) -> Value:
    """
    Evaluate an expression tree.

    Raises:
        LoxRuntimeError: On an operand of the wrong type
        InternalError: On an operator the evaluator cannot handle, or a
            tree deeper than the parser builds
    """
    if expr.depth > MAX_DEPTH:
        raise error_tree_too_deep(expr.depth, MAX_DEPTH)
    try:
        value = Interpreter().evaluate(expr)
    except RecursionError:
        raise error_tree_too_deep(expr.depth, MAX_DEPTH) from None
    logger.debug("evaluated to %r", value)
    return value


@dataclass
class RunResult:
    """Result of running one piece of source through the pipeline."""
    success: bool
    value: Optional[Value] = None
    tokens: List[Token] = field(default_factory=list)
    expression: Optional[Expr] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)
    error: Optional[LoxError] = None  # the fatal syntax or runtime error

    @property
    def had_error(self) -> bool:
        """True when scanning or parsing failed."""
        return not self.success and not self.had_runtime_error

    @property
    def had_runtime_error(self) -> bool:
        return self.expression is not None and isinstance(self.error, LoxRuntimeError)

    def _collector(self) -> DiagnosticCollector:
        collector = DiagnosticCollector()
        for diagnostic in self.diagnostics:
            collector.add(diagnostic)
        return collector

    def format_diagnostics(self, show_hints: bool = False) -> str:
        return self._collector().format_all(show_hints)

    def to_json(self) -> dict:
        result = self._collector().to_json()
        result["success"] = self.success
        result["value"] = None if self.value is None else str(self.value)
        return result


def run(source: str) -> RunResult:
    """
    Scan, parse and evaluate source text.

    Every lexical error is reported before giving up; parsing and
    evaluation stop at their first error. Each call is independent.
    """
    scanned = scan(source)
    if scanned.has_errors:
        return RunResult(
            success=False,
            tokens=scanned.tokens,
            diagnostics=scanned.diagnostics().diagnostics,
        )

    try:
        expr = parse(scanned.tokens)
    except LoxError as e:
        return RunResult(
            success=False,
            tokens=scanned.tokens,
            diagnostics=[e.diagnostic],
            error=e,
        )

    try:
        value = evaluate(expr)
    except LoxRuntimeError as e:
        return RunResult(
            success=False,
            tokens=scanned.tokens,
            expression=expr,
            diagnostics=[e.diagnostic],
            error=e,
        )

    return RunResult(
        success=True,
        value=value,
        tokens=scanned.tokens,
        expression=expr,
    )
