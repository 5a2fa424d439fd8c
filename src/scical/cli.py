"""
scical command line interface.

Commands:
- eval: Evaluate an expression and print the formatted result
- validate: Check expression syntax without evaluating
- parse: Print the parsed expression tree
- tokens: Show the token stream for an expression

Expressions that start with '-' must follow '--', e.g. ``scical eval -- -2^2``.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scical import __version__
from scical.core.calculator import evaluate_expression, validate_expression
from scical.core.errors import ConfigError, ScicalError, format_location
from scical.core.expression_lang.formatter import render_expression
from scical.core.expression_lang.parser import parse_expr
from scical.core.expression_lang.tokenizer import Tokenizer
from scical.core.ir.expressions import AngleMode
from scical.core.settings import EngineSettings, find_settings, load_settings

app = typer.Typer(
    help="scical - scientific calculator expression engine",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"scical {__version__}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """scical CLI main callback for global options."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )


def _resolve_settings(config: Path | None) -> EngineSettings:
    """Load settings from --config, or scical.toml in the working directory."""
    try:
        if config is not None:
            return load_settings(config)
        return find_settings()
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {escape(e.message)}")
        raise typer.Exit(2) from e


def _config_option() -> typer.models.OptionInfo:
    return typer.Option(None, "--config", "-c", help="Path to a scical.toml settings file")


@app.command(name="eval")
def eval_command(
    expression: str = typer.Argument(..., help="Expression to evaluate"),
    degrees: bool | None = typer.Option(
        None,
        "--degrees/--radians",
        help="Angle mode for trigonometric functions (default from settings: radians)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
    config: Path | None = _config_option(),
) -> None:
    """Evaluate an expression and print the result."""
    settings = _resolve_settings(config)
    if degrees is None:
        angle_mode = settings.angle_mode
    else:
        angle_mode = AngleMode.DEGREES if degrees else AngleMode.RADIANS

    outcome = evaluate_expression(expression, angle_mode, settings=settings)

    if as_json:
        typer.echo(outcome.model_dump_json(exclude_none=True))
    elif outcome.ok:
        console.print(escape(outcome.formatted or ""), highlight=False)
    else:
        console.print(f"[red]Error:[/red] {escape(outcome.error or '')}")

    if not outcome.ok:
        raise typer.Exit(1)


@app.command(name="validate")
def validate_command(
    expression: str = typer.Argument(..., help="Expression to check"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
    config: Path | None = _config_option(),
) -> None:
    """Check expression syntax without evaluating it."""
    settings = _resolve_settings(config)
    outcome = validate_expression(expression, settings=settings)

    if as_json:
        typer.echo(outcome.model_dump_json(exclude_none=True))
    else:
        for issue in outcome.errors:
            console.print(f"[red]Error:[/red] {escape(issue.message)}")
            if issue.position is not None:
                console.print(escape(format_location(expression, issue.position)), highlight=False)
        for warning in outcome.warnings or []:
            console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
        if outcome.valid:
            console.print("[green]✓ Valid expression[/green]")

    if not outcome.valid:
        raise typer.Exit(1)


@app.command(name="parse")
def parse_command(
    expression: str = typer.Argument(..., help="Expression to parse"),
    canonical: bool = typer.Option(
        False, "--canonical", help="Fully parenthesize every operation"
    ),
    config: Path | None = _config_option(),
) -> None:
    """Print the parsed expression tree."""
    settings = _resolve_settings(config)
    try:
        expr = parse_expr(
            expression,
            max_depth=settings.max_depth,
            strict=settings.strict_characters,
        )
    except ScicalError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        if e.position is not None:
            console.print(escape(format_location(expression, e.position)), highlight=False)
        raise typer.Exit(1) from e

    text = str(expr) if canonical else render_expression(expr)
    console.print(escape(text), highlight=False)


@app.command(name="tokens")
def tokens_command(
    expression: str = typer.Argument(..., help="Expression to tokenize"),
) -> None:
    """Show the token stream for an expression."""
    tokenizer = Tokenizer(expression)
    try:
        tokens = tokenizer.tokenize()
    except ScicalError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(1) from e

    table = Table(title="Tokens")
    table.add_column("Kind", style="cyan")
    table.add_column("Value")
    table.add_column("Position", justify="right")
    for tok in tokens:
        table.add_row(str(tok.kind), escape(str(tok.value)), str(tok.pos))
    console.print(table)

    for skipped in tokenizer.skipped:
        console.print(
            f"[yellow]Skipped:[/yellow] {escape(repr(skipped.char))} at position {skipped.pos}"
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
