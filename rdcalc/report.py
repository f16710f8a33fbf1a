"""Console output for rdcalc: failure diagnostics and Rich tables.

All operator-facing messages go through a Rich Console (stderr for the CLI);
computed values are printed by the caller on stdout.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rdcalc.models import EvalResult
from rdcalc.selfcheck import CheckResult


def _display(expression: str) -> str:
    """Expression without its line terminator, for display."""
    return expression.rstrip("\r\n")


def render_failure(result: EvalResult, console: Console) -> None:
    """Print the diagnostic for a failed result with a caret under the position."""
    failure = result.failure
    if failure is None:
        return
    shown = _display(result.expression)
    console.print(f"[red]Error:[/red] {escape(failure.message)}")
    if shown:
        console.print(f"  {escape(shown)}", highlight=False)
        # position can sit one past the end when input ran out
        caret = " " * min(failure.position, len(shown)) + "^"
        console.print(f"  [red]{caret}[/red]")


def render_batch(results: list[EvalResult], console: Console) -> None:
    """Render a table with one row per evaluated expression."""
    if not results:
        console.print("[yellow]No expressions found.[/yellow]")
        return

    table = Table(title="Batch results", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Expression", min_width=20)
    table.add_column("Result", justify="right", min_width=10)

    for i, r in enumerate(results, 1):
        if r.ok:
            outcome = f"[green]{r.value}[/green]"
        else:
            outcome = f"[red]{r.failure.kind.value}[/red]"
        table.add_row(str(i), escape(_display(r.expression)), outcome)

    failed = sum(1 for r in results if not r.ok)
    console.print()
    console.print(table)
    if failed:
        console.print(f"[yellow]{failed} of {len(results)} expressions failed[/yellow]")
    console.print()


def render_checks(checks: list[CheckResult], console: Console) -> None:
    """Render the self-check table."""
    table = Table(title="Self-check", show_header=True, header_style="bold")
    table.add_column("Expression", min_width=20)
    table.add_column("Mode", style="dim")
    table.add_column("Expected", justify="right")
    table.add_column("Got", justify="right")
    table.add_column("Verdict")

    for c in checks:
        got = str(c.result.value) if c.result.ok else c.result.failure.kind.value
        verdict = "[green]pass[/green]" if c.passed else "[red]fail[/red]"
        table.add_row(
            escape(c.case.expression),
            "legacy" if c.case.legacy else "strict",
            str(c.case.expected),
            got,
            verdict,
        )

    passed = sum(1 for c in checks if c.passed)
    console.print()
    console.print(table)
    console.print(f"  {passed}/{len(checks)} passed")
    console.print()
