"""Tests for console rendering and the self-check."""

import io

from rich.console import Console

from rdcalc import calculate
from rdcalc.report import render_batch, render_checks, render_failure
from rdcalc.selfcheck import KNOWN_CASES, run_checks


def _console() -> Console:
    return Console(file=io.StringIO(), width=100)


def test_render_failure_points_at_position():
    console = _console()
    render_failure(calculate("1+a"), console)
    out = console.file.getvalue()
    assert "Wrong character in the expression at position 2" in out
    assert "  1+a" in out
    assert "    ^" in out


def test_render_failure_ignores_success():
    console = _console()
    render_failure(calculate("1+2"), console)
    assert console.file.getvalue() == ""


def test_render_batch_lists_each_expression():
    console = _console()
    render_batch([calculate("1+2"), calculate("1/0")], console)
    out = console.file.getvalue()
    assert "1+2" in out
    assert "division-by-zero" in out
    assert "1 of 2 expressions failed" in out


def test_render_checks_summary():
    console = _console()
    checks = run_checks()
    render_checks(checks, console)
    assert f"{len(KNOWN_CASES)}/{len(KNOWN_CASES)} passed" in console.file.getvalue()


def test_known_cases_all_pass():
    failed = [c.case.expression for c in run_checks() if not c.passed]
    assert failed == []
