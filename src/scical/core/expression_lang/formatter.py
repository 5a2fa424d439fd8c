"""
Display formatting for evaluation results and expression trees.

Results are returned as plain, unlocalized strings; grouping separators and
locale-specific digits are the caller's concern.
"""

from __future__ import annotations

import math
from decimal import Decimal

from scical.core.expression_lang.constants import (
    MAX_DISPLAY_DIGITS,
    OPERATOR_PRECEDENCE,
    RIGHT_ASSOCIATIVE,
)
from scical.core.ir.expressions import (
    BinaryOp,
    BinaryOpNode,
    ConstantNode,
    Expr,
    FunctionNode,
    NumberNode,
    UnaryOp,
    UnaryOpNode,
)

# Magnitudes below this (but non-zero) are floating-point noise
ZERO_THRESHOLD = 1e-15
SCIENTIFIC_UPPER = 1e10
SCIENTIFIC_LOWER = 1e-6
# Digits kept for the exponent suffix in scientific form
EXPONENT_RESERVE = 5


def format_result(value: float) -> str:
    """Format a number for display.

    - NaN renders as ``Error``; infinities as ``Infinity`` / ``-Infinity``
    - Non-zero magnitudes below 1e-15 collapse to ``0``
    - Magnitudes >= 1e10 or below 1e-6 use scientific notation
    - Everything else uses up to 15 significant digits, without trailing zeros
    """
    if math.isnan(value):
        return "Error"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    magnitude = abs(value)
    if value != 0 and magnitude < ZERO_THRESHOLD:
        return "0"

    if magnitude >= SCIENTIFIC_UPPER or (value != 0 and magnitude < SCIENTIFIC_LOWER):
        return _to_exponential(value, MAX_DISPLAY_DIGITS - EXPONENT_RESERVE)

    rounded = float(f"{value:.{MAX_DISPLAY_DIGITS}g}")
    if rounded.is_integer() and abs(rounded) < 10**MAX_DISPLAY_DIGITS:
        return str(int(rounded))
    return _plain_decimal(rounded)


def _to_exponential(value: float, fraction_digits: int) -> str:
    """Scientific notation with an unpadded, signed exponent: 1.5000000000e+10."""
    mantissa, exponent = f"{value:.{fraction_digits}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def _plain_decimal(value: float) -> str:
    """Shortest round-trip digits, never in exponent form."""
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def round_to_decimals(value: float, decimals: int = 10) -> float:
    """Round to a fixed number of decimal places, halves away from zero.

    Infinities and NaN pass through unchanged.
    """
    if not math.isfinite(value):
        return value
    multiplier = 10.0**decimals
    scaled = value * multiplier
    if not math.isfinite(scaled):
        return value
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / multiplier


# ---------------------------------------------------------------------------
# Expression rendering
# ---------------------------------------------------------------------------


def render_expression(expr: Expr) -> str:
    """Render an AST back to infix text with only the parentheses it needs.

    The output re-parses to an equal tree (except for the reserved MOD
    operator, which has no surface syntax).
    """
    if isinstance(expr, NumberNode):
        return str(expr)

    if isinstance(expr, ConstantNode):
        return expr.name.value

    if isinstance(expr, FunctionNode):
        args = ", ".join(render_expression(a) for a in expr.arguments)
        return f"{expr.name.value}({args})"

    if isinstance(expr, UnaryOpNode):
        if expr.operator == UnaryOp.NEGATE:
            operand = render_expression(expr.operand)
            if _binds_looser_than_negation(expr.operand):
                operand = f"({operand})"
            return f"-{operand}"
        operand = render_expression(expr.operand)
        if not _is_postfix_operand(expr.operand):
            operand = f"({operand})"
        return f"{operand}{'!' if expr.operator == UnaryOp.FACTORIAL else '%'}"

    if isinstance(expr, BinaryOpNode):
        return _render_binary(expr)

    raise TypeError(f"Unknown node type: {type(expr).__name__}")


def _render_binary(expr: BinaryOpNode) -> str:
    precedence = OPERATOR_PRECEDENCE[expr.operator]
    right_assoc = expr.operator in RIGHT_ASSOCIATIVE

    left = render_expression(expr.left)
    if _needs_parens(expr.left, precedence, right_assoc) or (
        expr.operator == BinaryOp.POW and not _is_postfix_operand(expr.left)
    ):
        left = f"({left})"

    right = render_expression(expr.right)
    if _needs_parens(expr.right, precedence, not right_assoc):
        right = f"({right})"

    symbol = " mod " if expr.operator == BinaryOp.MOD else f" {expr.operator.value} "
    return f"{left}{symbol}{right}"


def _needs_parens(child: Expr, precedence: int, wrap_equal: bool) -> bool:
    if not isinstance(child, BinaryOpNode):
        return False
    child_precedence = OPERATOR_PRECEDENCE[child.operator]
    return child_precedence < precedence or (child_precedence == precedence and wrap_equal)


def _is_postfix_operand(expr: Expr) -> bool:
    """True when the node can be written directly before '!', '%' or '^'."""
    if isinstance(expr, NumberNode):
        return expr.value >= 0 or math.isnan(expr.value)
    if isinstance(expr, UnaryOpNode):
        return expr.operator != UnaryOp.NEGATE
    return isinstance(expr, (ConstantNode, FunctionNode))


def _binds_looser_than_negation(expr: Expr) -> bool:
    if isinstance(expr, BinaryOpNode):
        return expr.operator != BinaryOp.POW
    return False
