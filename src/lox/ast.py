"""
Abstract Syntax Tree (AST) node definitions for Lox expressions.

The tree is a closed set of four immutable node shapes. Each node owns its
children outright; nothing is shared and nothing points back up the tree.

Traversal goes through ``AstVisitor``, whose visit methods are all
abstract: a visitor that forgets one of the node shapes cannot be
instantiated, so adding a node shape forces every visitor to be updated.

Every node records its ``depth``, the height of the subtree it roots. The
visitors recurse once per level, so the parser refuses trees deeper than
``MAX_DEPTH``.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from .tokens import Token, LiteralValue

# Deepest tree the parser builds and the evaluator accepts
MAX_DEPTH = 200


# =============================================================================
# Nodes
# =============================================================================

@dataclass(frozen=True)
class Expr(ABC):
    """Base class for all expressions."""
    depth: int = field(default=1, init=False, repr=False, compare=False)

    def accept(self, visitor: "AstVisitor") -> Any:
        """Accept a visitor for traversal."""
        method = getattr(visitor, f"visit_{self.__class__.__name__}")
        return method(self)

    def _set_depth(self, *children: "Expr") -> None:
        object.__setattr__(self, "depth", 1 + max(child.depth for child in children))


@dataclass(frozen=True)
class Binary(Expr):
    """A binary operation (e.g., a + b, x == y)."""
    left: Expr
    operator: Token
    right: Expr

    def __post_init__(self):
        self._set_depth(self.left, self.right)


@dataclass(frozen=True)
class Unary(Expr):
    """A unary operation (e.g., !x, -n)."""
    operator: Token
    right: Expr

    def __post_init__(self):
        self._set_depth(self.right)


@dataclass(frozen=True)
class Grouping(Expr):
    """A parenthesized expression."""
    expression: Expr

    def __post_init__(self):
        self._set_depth(self.expression)


@dataclass(frozen=True)
class Literal(Expr):
    """A literal value (number, string, boolean or nil)."""
    value: LiteralValue


class AstVisitor(ABC):
    """Base class for AST visitors."""

    @abstractmethod
    def visit_Binary(self, node: Binary) -> Any:
        pass

    @abstractmethod
    def visit_Unary(self, node: Unary) -> Any:
        pass

    @abstractmethod
    def visit_Grouping(self, node: Grouping) -> Any:
        pass

    @abstractmethod
    def visit_Literal(self, node: Literal) -> Any:
        pass


# =============================================================================
# Printing
# =============================================================================

def format_number(n: float) -> str:
    """Render a number the way the language displays it.

    Integral values drop the fraction (``7``). Others use the shortest
    digits that round-trip, always in positional notation (``2.5``,
    ``0.0000001``), never with an exponent.
    """
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "inf" if n > 0 else "-inf"
    if n.is_integer():
        text = str(int(n))
        # keep the sign of negative zero
        return "-0" if text == "0" and math.copysign(1.0, n) < 0 else text
    text = repr(n)
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


def format_literal(value: LiteralValue) -> str:
    """Render a literal payload for display."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return value


class AstPrinter(AstVisitor):
    """Renders a tree in fully parenthesized prefix form.

    ``1 + 2 * 3`` prints as ``(+ 1 (* 2 3))``. The output is a structural
    fingerprint of the tree, so two trees print alike exactly when they
    have the same shape and payloads.
    """

    def print(self, expr: Expr) -> str:
        return expr.accept(self)

    def _parenthesize(self, name: str, *exprs: Expr) -> str:
        parts = [name]
        for expr in exprs:
            parts.append(expr.accept(self))
        return "(" + " ".join(parts) + ")"

    def visit_Binary(self, node: Binary) -> str:
        return self._parenthesize(node.operator.lexeme, node.left, node.right)

    def visit_Unary(self, node: Unary) -> str:
        return self._parenthesize(node.operator.lexeme, node.right)

    def visit_Grouping(self, node: Grouping) -> str:
        return self._parenthesize("group", node.expression)

    def visit_Literal(self, node: Literal) -> str:
        return format_literal(node.value)


def print_ast(expr: Expr) -> str:
    """Return the prefix form of an expression tree."""
    return AstPrinter().print(expr)
