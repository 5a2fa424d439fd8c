"""Core scical functionality: IR, expression engine, settings, and the public facade."""

from . import ir
from .calculator import evaluate_expression, validate_expression
from .errors import (
    ConfigError,
    DomainError,
    ErrorKind,
    ExpressionSyntaxError,
    InternalError,
    LexicalError,
    RecursionLimitError,
    ScicalError,
    UnbalancedParenthesisError,
)
from .settings import EngineSettings, find_settings, load_settings

__all__ = [
    "ir",
    "evaluate_expression",
    "validate_expression",
    # Errors
    "ScicalError",
    "ErrorKind",
    "LexicalError",
    "ExpressionSyntaxError",
    "UnbalancedParenthesisError",
    "RecursionLimitError",
    "DomainError",
    "InternalError",
    "ConfigError",
    # Settings
    "EngineSettings",
    "find_settings",
    "load_settings",
]
