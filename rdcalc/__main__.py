"""CLI for the rdcalc integer calculator.

Usage:
    python -m rdcalc eval "3+2*1"            # Evaluate one expression
    python -m rdcalc eval -- "-1*-4"         # Leading '-' needs the -- separator
    python -m rdcalc prompt                  # Read one line from stdin
    python -m rdcalc batch exprs.txt         # One expression per line
    python -m rdcalc check                   # Run the built-in self-check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from rdcalc.config import Settings
from rdcalc.evaluator import calculate
from rdcalc.models import ErrorKind, EvalFailure, EvalResult
from rdcalc.report import render_batch, render_checks, render_failure
from rdcalc.selfcheck import run_checks

app = typer.Typer(
    name="rdcalc",
    help="Recursive-descent integer calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)

PROMPT = "Enter an arithmetic expression: "


def _settings(ctx: typer.Context, legacy: Optional[bool]) -> Settings:
    settings: Settings = ctx.obj or Settings.from_env()
    return settings.override(legacy=legacy)


def _evaluate(text: str, settings: Settings) -> EvalResult:
    """Apply the input length limit, then evaluate."""
    body = text.rstrip("\r\n")
    if len(body) > settings.max_input:
        failure = EvalFailure(
            ErrorKind.INPUT_TOO_LONG,
            settings.max_input,
            f"{len(body)} characters, limit is {settings.max_input}",
        )
        return EvalResult(expression=text, failure=failure)
    return calculate(text, settings=settings)


@app.callback()
def main(
    ctx: typer.Context,
    max_input: Optional[int] = typer.Option(None, "--max-input", min=1, help="Longest expression accepted"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", min=1, help="Deepest parenthesis nesting"),
) -> None:
    """Evaluate integer arithmetic: + - * / unary minus and parentheses."""
    ctx.obj = Settings.from_env().override(max_input=max_input, max_depth=max_depth)


@app.command("eval")
def cmd_eval(
    ctx: typer.Context,
    expression: str = typer.Argument(help="Expression, e.g. '(1+3*(-4))/2'"),
    legacy: Optional[bool] = typer.Option(None, "--legacy/--strict", help="Use the lenient legacy grammar"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Evaluate a single expression."""
    result = _evaluate(expression, _settings(ctx, legacy))
    if as_json:
        typer.echo(json.dumps(result.to_dict()))
        if not result.ok:
            raise typer.Exit(1)
        return
    if not result.ok:
        render_failure(result, console)
        raise typer.Exit(1)
    typer.echo(result.value)


@app.command("prompt")
def cmd_prompt(
    ctx: typer.Context,
    legacy: Optional[bool] = typer.Option(None, "--legacy/--strict", help="Use the lenient legacy grammar"),
    check: bool = typer.Option(False, "--check", help="Run the self-check before prompting"),
) -> None:
    """Prompt for one expression on stdin and print the result."""
    settings = _settings(ctx, legacy)
    if check:
        checks = run_checks(settings)
        failed = [c for c in checks if not c.passed]
        if failed:
            render_checks(checks, console)
            raise typer.Exit(1)

    typer.echo(PROMPT, nl=False)
    line = sys.stdin.readline()
    if not line:
        console.print("\n[yellow]No input.[/yellow]")
        raise typer.Exit(1)

    result = _evaluate(line, settings)
    if not result.ok:
        typer.echo()
        render_failure(result, console)
        raise typer.Exit(1)
    typer.echo(f"Result: {result.value}")


@app.command("batch")
def cmd_batch(
    ctx: typer.Context,
    path: Path = typer.Argument(help="File with one expression per line ('-' for stdin)"),
    legacy: Optional[bool] = typer.Option(None, "--legacy/--strict", help="Use the lenient legacy grammar"),
) -> None:
    """Evaluate every non-empty line of a file independently."""
    settings = _settings(ctx, legacy)
    if str(path) == "-":
        lines = sys.stdin.read().splitlines(keepends=True)
    else:
        try:
            lines = path.read_text(encoding="utf-8").splitlines(keepends=True)
        except OSError as e:
            console.print(f"[red]Error:[/red] cannot read {path}: {e}")
            raise typer.Exit(1)

    results = [_evaluate(line, settings) for line in lines if line.strip()]
    render_batch(results, console)
    for r in results:
        typer.echo(r.value if r.ok else f"error: {r.failure.message}")
    if any(not r.ok for r in results):
        raise typer.Exit(1)


@app.command("check")
def cmd_check(ctx: typer.Context) -> None:
    """Run the built-in self-check against known expressions."""
    checks = run_checks(ctx.obj)
    render_checks(checks, console)
    if not all(c.passed for c in checks):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
