"""Tests for syntax validation."""

from __future__ import annotations

import pytest

from scical.core.expression_lang.validation import check_parentheses, validate_expression


class TestCheckParentheses:
    def test_balanced(self) -> None:
        assert check_parentheses("(1+(2*3))") == []

    def test_missing_closers(self) -> None:
        issues = check_parentheses("((1+2")
        assert len(issues) == 1
        assert issues[0].message == "missing 2 closing parenthesis(es)"
        assert issues[0].position is None

    def test_unmatched_closer_stops_scan(self) -> None:
        issues = check_parentheses("1)+(((")
        assert len(issues) == 1
        assert issues[0].message == "unmatched closing parenthesis"
        assert issues[0].position == 1


class TestValidateExpression:
    @pytest.mark.parametrize(
        "source",
        ["3+4*2", "sin(30)", "2^-1", "pow(2, 3)", "5!%", "√16 × π", "  -(1)  "],
    )
    def test_valid(self, source: str) -> None:
        outcome = validate_expression(source)
        assert outcome.valid
        assert outcome.errors == []
        assert outcome.warnings is None

    @pytest.mark.parametrize("source", ["", "   "])
    def test_empty(self, source: str) -> None:
        outcome = validate_expression(source)
        assert not outcome.valid
        assert [e.message for e in outcome.errors] == ["Expression is empty"]

    def test_missing_paren_reported_once(self) -> None:
        outcome = validate_expression("(3+4")
        assert not outcome.valid
        assert [e.message for e in outcome.errors] == ["missing 1 closing parenthesis(es)"]

    def test_unmatched_paren_position(self) -> None:
        outcome = validate_expression("1+2)")
        assert len(outcome.errors) == 1
        assert outcome.errors[0].message == "unmatched closing parenthesis"
        assert outcome.errors[0].position == 3

    def test_empty_parentheses_after_unmatched(self) -> None:
        outcome = validate_expression("())(")
        assert [e.message for e in outcome.errors] == ["unmatched closing parenthesis"]
        assert outcome.errors[0].position == 2

    def test_syntax_error_with_position(self) -> None:
        outcome = validate_expression("2+*3")
        assert len(outcome.errors) == 1
        assert outcome.errors[0].message == "Unexpected token: *"
        assert outcome.errors[0].position == 2

    def test_paren_and_syntax_errors_both_reported(self) -> None:
        outcome = validate_expression("(2+*3")
        assert [e.message for e in outcome.errors] == [
            "missing 1 closing parenthesis(es)",
            "Unexpected token: *",
        ]

    def test_unknown_identifier(self) -> None:
        outcome = validate_expression("foo + 1")
        assert outcome.errors[0].message == "Unknown identifier: foo at position 0"
        assert outcome.errors[0].position == 0

    def test_too_deeply_nested(self) -> None:
        source = "(" * 101 + "1" + ")" * 101
        outcome = validate_expression(source)
        assert [e.message for e in outcome.errors] == ["Expression too deeply nested"]

    def test_custom_depth(self) -> None:
        assert not validate_expression("((1))", max_depth=1).valid

    def test_skipped_character_warning(self) -> None:
        outcome = validate_expression("2 @+ 3")
        assert outcome.valid
        assert outcome.warnings == ["Ignored unrecognized character '@' at position 2"]

    def test_strict_rejects_unknown_character(self) -> None:
        outcome = validate_expression("2@+3", strict=True)
        assert not outcome.valid
        assert outcome.errors[0].message == "Unexpected character: '@'"
        assert outcome.errors[0].position == 1
        assert outcome.warnings is None
