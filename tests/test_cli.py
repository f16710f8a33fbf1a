"""Tests for the rdcalc command line."""

import json

import pytest
from typer.testing import CliRunner

from rdcalc.__main__ import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("RDCALC_MAX_INPUT", "RDCALC_MAX_DEPTH", "RDCALC_LEGACY"):
        monkeypatch.delenv(key, raising=False)


# --- eval ---

def test_eval_prints_value():
    result = runner.invoke(app, ["eval", "3+2*1"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "5"


def test_eval_leading_minus_after_separator():
    result = runner.invoke(app, ["eval", "--", "-1*-4"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "4"


def test_eval_division_by_zero_exits_nonzero():
    result = runner.invoke(app, ["eval", "1/0"])
    assert result.exit_code == 1
    assert "Division by zero" in result.output


def test_eval_invalid_character_exits_nonzero():
    result = runner.invoke(app, ["eval", "2^3"])
    assert result.exit_code == 1
    assert "Wrong character" in result.output


def test_eval_legacy_flag():
    result = runner.invoke(app, ["eval", "--legacy", "(1*(-1+2*1)/3"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "0"


def test_eval_legacy_from_env(monkeypatch):
    monkeypatch.setenv("RDCALC_LEGACY", "1")
    result = runner.invoke(app, ["eval", "1+2)"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "3"


def test_eval_json():
    result = runner.invoke(app, ["eval", "--json", "2/2"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"expression": "2/2", "ok": True, "value": 1}


def test_eval_json_failure():
    result = runner.invoke(app, ["eval", "--json", "(1+2"])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["ok"] is False
    assert data["error"]["kind"] == "unbalanced-parenthesis"


# --- limits ---

def test_max_input_option():
    result = runner.invoke(app, ["--max-input", "3", "eval", "1+2+3"])
    assert result.exit_code == 1
    assert "too long" in result.output


def test_max_depth_from_env(monkeypatch):
    monkeypatch.setenv("RDCALC_MAX_DEPTH", "2")
    result = runner.invoke(app, ["eval", "(((1)))"])
    assert result.exit_code == 1
    assert "nested too deeply" in result.output


# --- prompt ---

def test_prompt_reads_one_line():
    result = runner.invoke(app, ["prompt"], input="1+2/(1*3)-2\n")
    assert result.exit_code == 0
    assert "Enter an arithmetic expression: " in result.stdout
    assert "Result: -1" in result.stdout


def test_prompt_with_self_check():
    result = runner.invoke(app, ["prompt", "--check"], input="4*4-3*2\n")
    assert result.exit_code == 0
    assert "Result: 10" in result.stdout


def test_prompt_failure():
    result = runner.invoke(app, ["prompt"], input="8/(4-4)\n")
    assert result.exit_code == 1
    assert "Result:" not in result.stdout


def test_prompt_without_input():
    result = runner.invoke(app, ["prompt"], input="")
    assert result.exit_code == 1


# --- batch ---

def test_batch_file(tmp_path):
    exprs = tmp_path / "exprs.txt"
    exprs.write_text("1+2\n\n4*4-3*2\n(1+3*(-4))/2\n", encoding="utf-8")
    result = runner.invoke(app, ["batch", str(exprs)])
    assert result.exit_code == 0
    lines = [l for l in result.stdout.splitlines() if l.strip() in ("3", "10", "-5")]
    assert [l.strip() for l in lines] == ["3", "10", "-5"]


def test_batch_reports_failures(tmp_path):
    exprs = tmp_path / "exprs.txt"
    exprs.write_text("1+2\n1/0\n", encoding="utf-8")
    result = runner.invoke(app, ["batch", str(exprs)])
    assert result.exit_code == 1
    assert "error: Division by zero" in result.stdout


def test_batch_stdin():
    result = runner.invoke(app, ["batch", "-"], input="2/2\n")
    assert result.exit_code == 0
    assert "1" in result.stdout


def test_batch_missing_file(tmp_path):
    result = runner.invoke(app, ["batch", str(tmp_path / "nope.txt")])
    assert result.exit_code == 1


# --- check ---

def test_check_passes():
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 0
    assert "Self-check" in result.output


def test_max_depth_option_is_capped():
    text = "(" * 2000 + "1" + ")" * 2000
    result = runner.invoke(app, ["--max-input", "100000", "--max-depth", "100000", "eval", text])
    assert result.exit_code == 1
    assert not isinstance(result.exception, RecursionError)
    assert "nested too deeply" in result.output
