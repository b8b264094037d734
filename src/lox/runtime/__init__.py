"""
Lox runtime - tree-walking evaluation of expression trees.

This module provides:
- Value: Runtime values tagged with their type
- Interpreter: Evaluates an expression tree into a Value
- run: Drives scanning, parsing and evaluation for one input
"""

from .values import (
    Value,
    ValueType,
    NIL,
    number_val,
    string_val,
    bool_val,
)

from .interpreter import (
    Interpreter,
    RunResult,
    divide,
    evaluate,
    run,
)

__all__ = [
    'Value',
    'ValueType',
    'NIL',
    'number_val',
    'string_val',
    'bool_val',
    'Interpreter',
    'RunResult',
    'divide',
    'evaluate',
    'run',
]
