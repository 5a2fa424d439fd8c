"""
Error types for scical tokenizing, parsing, and evaluation.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Category of a scical error, carried on results so callers can filter."""

    LEXICAL = "lexical"
    SYNTAX = "syntax"
    PARENTHESIS = "parenthesis"
    RECURSION_LIMIT = "recursion_limit"
    DOMAIN = "domain"
    INTERNAL = "internal"
    CONFIG = "config"


class ScicalError(Exception):
    """Base exception for all scical errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, position: int | None = None):
        self.message = message
        self.position = position
        super().__init__(message)


class LexicalError(ScicalError):
    """
    Raised when the tokenizer cannot make sense of the input.

    Examples:
    - Unknown identifier (``foo(2)``)
    - Unrecognized character when strict character checking is enabled
    """

    kind = ErrorKind.LEXICAL


class ExpressionSyntaxError(ScicalError):
    """
    Raised when a token sequence does not form a valid expression.

    Examples:
    - Unexpected token
    - Empty expression
    - Malformed function call or wrong argument count
    """

    kind = ErrorKind.SYNTAX


class UnbalancedParenthesisError(ExpressionSyntaxError):
    """A missing or unexpected closing parenthesis."""

    kind = ErrorKind.PARENTHESIS


class RecursionLimitError(ExpressionSyntaxError):
    """Raised when nesting exceeds the configured maximum depth."""

    kind = ErrorKind.RECURSION_LIMIT


class DomainError(ScicalError):
    """
    Raised when an operation is mathematically undefined for its inputs.

    Examples:
    - Division or modulo by zero
    - Square root or logarithm of an out-of-range number
    - Factorial of a non-integer, negative, or too large number
    - Any result that would be NaN
    """

    kind = ErrorKind.DOMAIN


class InternalError(ScicalError):
    """Raised for AST shapes a correct parser never produces."""

    kind = ErrorKind.INTERNAL


class ConfigError(ScicalError):
    """Raised when an engine settings file is unreadable or invalid."""

    kind = ErrorKind.CONFIG


def format_location(source: str, position: int) -> str:
    """
    Render a source line with a marker under the given column.

    Returns:
        Two lines, e.g.::

              | 1+2)
              |    ^
    """
    prefix = "  | "
    column = max(0, min(position, len(source)))
    return f"{prefix}{source}\n{prefix}{' ' * column}^"
