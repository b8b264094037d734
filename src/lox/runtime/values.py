"""
Runtime values for the Lox interpreter.

A ``Value`` pairs the Python data with its language type. The set of types
is closed: strings, numbers, booleans and nil. There are no implicit
conversions between them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..ast import format_literal
from ..tokens import LiteralValue


class ValueType(Enum):
    """Runtime value types."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NIL = "nil"


@dataclass(frozen=True)
class Value:
    """
    A runtime value with its language type.

    The `data` field holds a str, float, bool or None.
    """
    data: Union[str, float, bool, None]
    type: ValueType

    def __repr__(self) -> str:
        return f"Value({self.data!r}, {self.type.name})"

    def __str__(self) -> str:
        return format_literal(self.data)

    def is_truthy(self) -> bool:
        """Only nil and false are falsy."""
        if self.type == ValueType.NIL:
            return False
        if self.type == ValueType.BOOLEAN:
            return bool(self.data)
        return True

    def is_equal(self, other: "Value") -> bool:
        """Equality without coercion: same type and same data."""
        if self.type == ValueType.NIL:
            return other.type == ValueType.NIL
        return self.type == other.type and self.data == other.data

    @property
    def is_number(self) -> bool:
        return self.type == ValueType.NUMBER

    @property
    def is_string(self) -> bool:
        return self.type == ValueType.STRING

    @classmethod
    def from_literal(cls, literal: LiteralValue) -> "Value":
        """Wrap a literal payload from the parser."""
        if literal is None:
            return NIL
        if isinstance(literal, bool):
            return bool_val(literal)
        if isinstance(literal, float):
            return number_val(literal)
        if isinstance(literal, str):
            return string_val(literal)
        raise TypeError(f"not a literal value: {literal!r}")


# Convenience constructors

def number_val(x: float) -> Value:
    """Create a number value."""
    return Value(float(x), ValueType.NUMBER)


def string_val(s: str) -> Value:
    """Create a string value."""
    return Value(str(s), ValueType.STRING)


def bool_val(b: bool) -> Value:
    """Create a boolean value."""
    return Value(bool(b), ValueType.BOOLEAN)


NIL = Value(None, ValueType.NIL)
