"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from scical.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command from an empty directory so no stray scical.toml is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestEvalCommand:
    def test_prints_formatted_result(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "3+4*2"])
        assert result.exit_code == 0
        assert result.output.strip() == "11"

    def test_degrees(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "sin(30)", "--degrees"])
        assert result.exit_code == 0
        assert result.output.strip() == "0.5"

    def test_radians_flag(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "cos(PI)", "--radians"])
        assert result.output.strip() == "-1"

    def test_negative_expression_after_separator(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "--", "-2^2"])
        assert result.exit_code == 0
        assert result.output.strip() == "-4"

    def test_error_exit_code(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "10/0"])
        assert result.exit_code == 1
        assert "Error: Division by zero" in result.output

    def test_json_output(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "2^10", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"ok": True, "value": 1024.0, "formatted": "1024"}

    def test_json_error(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output) == {"ok": False, "error": "Empty expression"}

    def test_angle_mode_from_config(self, cli_runner, settings_file) -> None:
        path = settings_file('[engine]\nangle_mode = "degrees"\n')
        result = cli_runner.invoke(app, ["eval", "sin(90)", "--config", str(path)])
        assert result.exit_code == 0
        assert result.output.strip() == "1"

    def test_config_found_in_working_directory(self, cli_runner, settings_file) -> None:
        settings_file('[engine]\nangle_mode = "degrees"\n')
        result = cli_runner.invoke(app, ["eval", "cos(60)"])
        assert result.output.strip() == "0.5"

    def test_bad_config(self, cli_runner, settings_file) -> None:
        path = settings_file("[engine]\nmax_depth = 0\n")
        result = cli_runner.invoke(app, ["eval", "1", "--config", str(path)])
        assert result.exit_code == 2
        assert "Configuration error" in result.output


class TestValidateCommand:
    def test_valid(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["validate", "1+2"])
        assert result.exit_code == 0
        assert "Valid expression" in result.output

    def test_missing_paren(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["validate", "(1+2"])
        assert result.exit_code == 1
        assert "missing 1 closing parenthesis(es)" in result.output

    def test_location_marker(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["validate", "1+2)"])
        assert result.exit_code == 1
        assert "  | 1+2)\n  |    ^" in result.output

    def test_warning(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["validate", "1 @+ 2"])
        assert result.exit_code == 0
        assert "Warning: Ignored unrecognized character '@' at position 2" in result.output

    def test_json_output(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["validate", "2+*3", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["valid"] is False
        assert data["errors"] == [{"message": "Unexpected token: *", "position": 2}]


class TestParseCommand:
    def test_minimal_parentheses(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["parse", "(2+3)*4^2"])
        assert result.exit_code == 0
        assert result.output.strip() == "(2 + 3) * 4 ^ 2"

    def test_canonical(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["parse", "2+3*4", "--canonical"])
        assert result.output.strip() == "(2 + (3 * 4))"

    def test_error(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["parse", "sin()"])
        assert result.exit_code == 1
        assert "Function sin requires at least one argument" in result.output


class TestTokensCommand:
    def test_table(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["tokens", "sin(PI)"])
        assert result.exit_code == 0
        assert "Tokens" in result.output
        assert "function" in result.output
        assert "constant" in result.output
        assert "eof" in result.output

    def test_skipped_characters(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["tokens", "1 $ 2"])
        assert result.exit_code == 0
        assert "Skipped: '$' at position 2" in result.output

    def test_unknown_identifier(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["tokens", "foo"])
        assert result.exit_code == 1
        assert "Unknown identifier: foo" in result.output


class TestGlobalOptions:
    def test_version(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "scical" in result.output

    def test_no_args_shows_help(self, cli_runner) -> None:
        result = cli_runner.invoke(app, [])
        assert "eval" in result.output
