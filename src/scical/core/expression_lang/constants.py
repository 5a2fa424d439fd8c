"""
Read-only lookup tables for the expression engine: constants, operator
precedence, function arity, and display limits.
"""

from __future__ import annotations

import math

from scical.core.ir.expressions import BinaryOp, ConstantName, FunctionName

MATH_CONSTANTS: dict[ConstantName, float] = {
    ConstantName.PI: math.pi,
    ConstantName.E: math.e,
    ConstantName.PHI: (1 + math.sqrt(5)) / 2,  # golden ratio
}

# Higher binds tighter
OPERATOR_PRECEDENCE: dict[BinaryOp, int] = {
    BinaryOp.ADD: 1,
    BinaryOp.SUB: 1,
    BinaryOp.MUL: 2,
    BinaryOp.DIV: 2,
    BinaryOp.MOD: 2,
    BinaryOp.POW: 3,
}

RIGHT_ASSOCIATIVE: frozenset[BinaryOp] = frozenset({BinaryOp.POW})

# Functions reachable from source text, keyed by lower-case identifier
FUNCTION_NAMES: dict[str, FunctionName] = {f.value: f for f in FunctionName}

# Identifier -> constant, matched case-insensitively
CONSTANT_NAMES: dict[str, ConstantName] = {c.value.lower(): c for c in ConstantName}

FUNCTION_ARITY: dict[FunctionName, int] = {f: 1 for f in FunctionName}
FUNCTION_ARITY[FunctionName.POW] = 2

# Parenthesis/function nesting allowed by the parser
MAX_RECURSION_DEPTH = 100

MAX_DISPLAY_DIGITS = 15


def get_constant(name: ConstantName) -> float:
    """Get constant value by name."""
    return MATH_CONSTANTS[name]


def arity_message(name: FunctionName) -> str:
    """Error message for a call with the wrong number of arguments."""
    if name == FunctionName.POW:
        return "pow() requires two arguments: base and exponent"
    expected = FUNCTION_ARITY[name]
    plural = "argument" if expected == 1 else "arguments"
    return f"{name.value}() takes exactly {expected} {plural}"
