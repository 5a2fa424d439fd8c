"""
Syntax validation without evaluation.

Gives live feedback on a partially typed expression: a cheap parenthesis
balance scan first, then a full tokenize + parse for everything else.
"""

from __future__ import annotations

import logging

from scical.core.errors import ErrorKind, LexicalError
from scical.core.expression_lang.constants import MAX_RECURSION_DEPTH
from scical.core.expression_lang.parser import parse
from scical.core.expression_lang.tokenizer import Tokenizer
from scical.core.ir.results import ValidationIssue, ValidationOutcome

logger = logging.getLogger(__name__)


def check_parentheses(expression: str) -> list[ValidationIssue]:
    """Report unbalanced parentheses in a single left-to-right pass.

    A closing parenthesis that drives the running depth negative is
    reported at its position and ends the scan; a positive depth at the
    end is reported as the number of missing closers.
    """
    depth = 0
    for i, c in enumerate(expression):
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth < 0:
                return [ValidationIssue(message="unmatched closing parenthesis", position=i)]
    if depth > 0:
        return [ValidationIssue(message=f"missing {depth} closing parenthesis(es)")]
    return []


def validate_expression(
    expression: str,
    *,
    max_depth: int = MAX_RECURSION_DEPTH,
    strict: bool = False,
) -> ValidationOutcome:
    """Validate expression syntax.

    Parser errors that only restate a parenthesis problem already found by
    the balance scan are not repeated. Characters the tokenizer skipped are
    reported as warnings.
    """
    if not expression.strip():
        return ValidationOutcome(valid=False, errors=[ValidationIssue(message="Expression is empty")])

    errors = check_parentheses(expression)
    warnings: list[str] = []

    tokenizer = Tokenizer(expression, strict=strict)
    try:
        tokens = tokenizer.tokenize()
    except LexicalError as e:
        errors.append(ValidationIssue(message=e.message, position=e.position))
    else:
        outcome = parse(tokens, max_depth)
        restates_scan = bool(errors) and outcome.kind == ErrorKind.PARENTHESIS
        if not outcome.ok and not restates_scan:
            errors.append(
                ValidationIssue(message=outcome.error or "Parse error", position=outcome.position)
            )

    for skipped in tokenizer.skipped:
        warnings.append(
            f"Ignored unrecognized character {skipped.char!r} at position {skipped.pos}"
        )

    logger.debug("Validated %r: %d error(s), %d warning(s)", expression, len(errors), len(warnings))
    return ValidationOutcome(valid=not errors, errors=errors, warnings=warnings or None)
