"""
Result types returned across the engine's stage boundaries.

Every stage reports failure as a value, never as a silent sentinel.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from scical.core.errors import ErrorKind
from scical.core.ir.expressions import Expr


class ParseOutcome(BaseModel):
    """Outcome of parsing a token list: an AST or an error with position."""

    ok: bool
    ast: Expr | None = None
    error: str | None = None
    position: int | None = None
    kind: ErrorKind | None = Field(default=None, description="Error category on failure")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def success(cls, ast: Expr) -> ParseOutcome:
        return cls(ok=True, ast=ast)

    @classmethod
    def failure(
        cls,
        message: str,
        position: int | None = None,
        kind: ErrorKind = ErrorKind.SYNTAX,
    ) -> ParseOutcome:
        return cls(ok=False, error=message, position=position, kind=kind)


class EvalOutcome(BaseModel):
    """Outcome of evaluating an AST."""

    ok: bool
    value: float | None = None
    error: str | None = None

    model_config = ConfigDict(frozen=True)


class CalculationOutcome(BaseModel):
    """The single public result of evaluating an expression string."""

    ok: bool
    value: float | None = None
    formatted: str | None = None
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def failure(cls, message: str) -> CalculationOutcome:
        return cls(ok=False, error=message)


class ValidationIssue(BaseModel):
    """A single validation error, optionally pinned to a source position."""

    message: str
    position: int | None = None

    model_config = ConfigDict(frozen=True)


class ValidationOutcome(BaseModel):
    """Syntax feedback for an expression that has not been evaluated."""

    valid: bool
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] | None = None

    model_config = ConfigDict(frozen=True)
