"""
scical Intermediate Representation (IR) types.

Expression AST nodes and the outcome models passed between stages.
"""

from .expressions import (
    AngleMode,
    BinaryOp,
    BinaryOpNode,
    ConstantName,
    ConstantNode,
    Expr,
    FunctionName,
    FunctionNode,
    NumberNode,
    UnaryOp,
    UnaryOpNode,
)
from .results import (
    CalculationOutcome,
    EvalOutcome,
    ParseOutcome,
    ValidationIssue,
    ValidationOutcome,
)

__all__ = [
    # Expressions
    "AngleMode",
    "BinaryOp",
    "BinaryOpNode",
    "ConstantName",
    "ConstantNode",
    "Expr",
    "FunctionName",
    "FunctionNode",
    "NumberNode",
    "UnaryOp",
    "UnaryOpNode",
    # Results
    "CalculationOutcome",
    "EvalOutcome",
    "ParseOutcome",
    "ValidationIssue",
    "ValidationOutcome",
]
