"""Built-in self-check: known expressions and the values they must produce.

Run by `rdcalc check` and optionally before `rdcalc prompt --check`.
"""

from __future__ import annotations

from dataclasses import dataclass

from rdcalc.config import Settings
from rdcalc.evaluator import calculate
from rdcalc.models import EvalResult


@dataclass(frozen=True)
class KnownCase:
    expression: str
    expected: int
    legacy: bool = False


@dataclass
class CheckResult:
    case: KnownCase
    result: EvalResult

    @property
    def passed(self) -> bool:
        return self.result.ok and self.result.value == self.case.expected


KNOWN_CASES: list[KnownCase] = [
    KnownCase("1+2", 3),
    KnownCase("3+2*1", 5),
    KnownCase("1*4+2", 6),
    KnownCase("4*4-3*2", 10),
    KnownCase("0*4-3*2+1", -5),
    KnownCase("1*2", 2),
    KnownCase("-3*4", -12),
    KnownCase("-1*-4", 4),
    KnownCase("0*-4", 0),
    KnownCase("7/2", 3),
    KnownCase("-7/2", -3),
    KnownCase("2/2", 1),
    KnownCase("1+2/(1*3)-2", -1),
    KnownCase("(1+3*(-4))/2", -5),
    KnownCase("((-1)+1)", 0),
    KnownCase("(1*(-2))*(-2)-1*(2+4*2)/3+1", 2),
    # unclosed group, accepted only by the lenient grammar
    KnownCase("(1*(-1+2*1)/3", 0, legacy=True),
]


def run_checks(settings: Settings | None = None) -> list[CheckResult]:
    """Evaluate every known case with a fresh cursor and record the outcome."""
    settings = settings or Settings()
    return [
        CheckResult(case=case, result=calculate(case.expression, legacy=case.legacy, settings=settings))
        for case in KNOWN_CASES
    ]
