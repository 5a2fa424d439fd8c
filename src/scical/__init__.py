"""
scical - a scientific-calculator expression engine.

Tokenizes, parses, evaluates, and formats free-form mathematical
expressions such as ``2 * sin(30) + sqrt(16)``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core import ir
from .core.calculator import evaluate_expression, validate_expression
from .core.errors import (
    DomainError,
    ExpressionSyntaxError,
    InternalError,
    LexicalError,
    RecursionLimitError,
    ScicalError,
)
from .core.ir.expressions import AngleMode


def _get_version() -> str:
    try:
        return _metadata_version("scical")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "AngleMode",
    "evaluate_expression",
    "validate_expression",
    "ScicalError",
    "LexicalError",
    "ExpressionSyntaxError",
    "RecursionLimitError",
    "DomainError",
    "InternalError",
]
