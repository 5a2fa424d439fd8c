"""
Public entry points for the expression engine.

raw string → tokenize → parse → evaluate(angle mode) → format

Both functions are side-effect free and never raise: every failure comes
back as a result object with a short, stable message.
"""

from __future__ import annotations

import logging

from scical.core.errors import ScicalError
from scical.core.expression_lang.evaluator import evaluate_ast
from scical.core.expression_lang.formatter import format_result
from scical.core.expression_lang.parser import parse
from scical.core.expression_lang.tokenizer import tokenize
from scical.core.expression_lang.validation import validate_expression as _validate
from scical.core.ir.expressions import AngleMode
from scical.core.ir.results import CalculationOutcome, ValidationIssue, ValidationOutcome
from scical.core.settings import EngineSettings

logger = logging.getLogger(__name__)


def evaluate_expression(
    expression: str,
    angle_mode: AngleMode | str = AngleMode.RADIANS,
    *,
    settings: EngineSettings | None = None,
) -> CalculationOutcome:
    """Calculate an expression and format the result.

    Args:
        expression: Expression text, e.g. ``"2 * sin(30)"``.
        angle_mode: ``"degrees"`` or ``"radians"`` for trigonometric functions.
        settings: Engine tunables; defaults when omitted.

    Returns:
        ``CalculationOutcome`` with ``value`` and ``formatted`` on success,
        ``error`` otherwise.
    """
    settings = settings or EngineSettings()
    try:
        mode = AngleMode(str(angle_mode).lower())
    except ValueError:
        return CalculationOutcome.failure(f"Invalid angle mode: {angle_mode!r}")

    try:
        if not expression.strip():
            return CalculationOutcome.failure("Empty expression")

        tokens = tokenize(expression, strict=settings.strict_characters)
        parsed = parse(tokens, settings.max_depth)
        if not parsed.ok or parsed.ast is None:
            return CalculationOutcome.failure(parsed.error or "Parse error")

        result = evaluate_ast(parsed.ast, mode)
        if not result.ok or result.value is None:
            return CalculationOutcome.failure(result.error or "Evaluation error")

        return CalculationOutcome(
            ok=True,
            value=result.value,
            formatted=format_result(result.value),
        )
    except ScicalError as e:
        return CalculationOutcome.failure(e.message)
    except Exception:
        logger.exception("Unexpected failure evaluating %r", expression)
        return CalculationOutcome.failure("Calculation error")


def validate_expression(
    expression: str,
    *,
    settings: EngineSettings | None = None,
) -> ValidationOutcome:
    """Check expression syntax without evaluating it."""
    settings = settings or EngineSettings()
    try:
        return _validate(
            expression,
            max_depth=settings.max_depth,
            strict=settings.strict_characters,
        )
    except Exception:
        logger.exception("Unexpected failure validating %r", expression)
        return ValidationOutcome(valid=False, errors=[ValidationIssue(message="Validation error")])
