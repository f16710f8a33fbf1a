"""rdcalc: recursive-descent integer calculator.

Evaluates + - * / with unary minus and parentheses straight off the input
text, returning an integer or a structured failure.

Usage:
    python -m rdcalc eval "1+2/(1*3)-2"     # -1
    python -m rdcalc prompt                 # Read one line from stdin
    python -m rdcalc batch exprs.txt        # One expression per line
    python -m rdcalc check                  # Built-in self-check
"""

from rdcalc.evaluator import calculate, evaluate
from rdcalc.models import CalculationError, ErrorKind, EvalFailure, EvalResult, Parsed

__all__ = [
    "CalculationError",
    "ErrorKind",
    "EvalFailure",
    "EvalResult",
    "Parsed",
    "calculate",
    "evaluate",
]
