"""
scical expression language.

Tokenizer, parser, evaluator, formatter, and validator for free-form
scientific-calculator expressions.

Usage:
    from scical.core.expression_lang import evaluate_ast, format_result, parse_expr

    expr = parse_expr("2 ^ 10")
    outcome = evaluate_ast(expr)
    format_result(outcome.value)
    # "1024"
"""

from scical.core.expression_lang.evaluator import Evaluator, FactorialCache, evaluate_ast
from scical.core.expression_lang.formatter import (
    format_result,
    render_expression,
    round_to_decimals,
)
from scical.core.expression_lang.parser import parse, parse_expr
from scical.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from scical.core.expression_lang.validation import check_parentheses, validate_expression

__all__ = [
    "Evaluator",
    "FactorialCache",
    "Token",
    "TokenKind",
    "check_parentheses",
    "evaluate_ast",
    "format_result",
    "parse",
    "parse_expr",
    "render_expression",
    "round_to_decimals",
    "tokenize",
    "validate_expression",
]
