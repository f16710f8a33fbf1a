"""Data models for the rdcalc evaluator.

ErrorKind, EvalFailure, Parsed and EvalResult: the typed structures that flow
through evaluator -> report -> CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ErrorKind(str, Enum):
    """Reasons an evaluation can fail."""

    INVALID_CHARACTER = "invalid-character"
    DIVISION_BY_ZERO = "division-by-zero"
    UNBALANCED_PARENTHESIS = "unbalanced-parenthesis"
    MISSING_OPERAND = "missing-operand"
    TRAILING_INPUT = "trailing-input"
    NESTING_TOO_DEEP = "nesting-too-deep"
    INPUT_TOO_LONG = "input-too-long"


_DESCRIPTIONS: dict[ErrorKind, str] = {
    ErrorKind.INVALID_CHARACTER: "Wrong character in the expression",
    ErrorKind.DIVISION_BY_ZERO: "Division by zero",
    ErrorKind.UNBALANCED_PARENTHESIS: "Unbalanced parenthesis",
    ErrorKind.MISSING_OPERAND: "Missing operand",
    ErrorKind.TRAILING_INPUT: "Unexpected input after the expression",
    ErrorKind.NESTING_TOO_DEEP: "Parentheses nested too deeply",
    ErrorKind.INPUT_TOO_LONG: "Expression is too long",
}


@dataclass(frozen=True)
class Parsed:
    """A value computed by one grammar level and the cursor just past it."""

    value: int
    cursor: int


@dataclass(frozen=True)
class EvalFailure:
    """Structured failure carried back up through every grammar level."""

    kind: ErrorKind
    position: int
    detail: str = ""

    @property
    def message(self) -> str:
        text = f"{_DESCRIPTIONS[self.kind]} at position {self.position}"
        if self.detail:
            text += f": {self.detail}"
        return text

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "position": self.position,
            "detail": self.detail,
            "message": self.message,
        }


Outcome = Union[Parsed, EvalFailure]


@dataclass
class EvalResult:
    """Complete result of evaluating one expression."""

    expression: str
    value: Optional[int] = None
    failure: Optional[EvalFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        d: dict = {"expression": self.expression, "ok": self.ok}
        if self.failure:
            d["error"] = self.failure.to_dict()
        else:
            d["value"] = self.value
        return d


class CalculationError(Exception):
    """Raised by evaluate() when a calculation fails."""

    def __init__(self, failure: EvalFailure):
        super().__init__(failure.message)
        self.failure = failure

    @property
    def kind(self) -> ErrorKind:
        return self.failure.kind
