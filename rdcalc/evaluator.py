"""Recursive-descent evaluator for integer arithmetic.

Grammar:
    expression := term (('+' | '-') term)*
    term       := primary (('*' | '/') primary)*
    primary    := '-'? (digit+ | '(' expression ')')
    digit      := '0'..'9'

Each level takes the text and a cursor and returns either Parsed(value,
cursor) or an EvalFailure. Nothing is built besides the integer itself.

Strict mode (the default) reports unbalanced parentheses, empty operands and
unconsumed trailing text. Legacy mode keeps the lenient behaviour of the
original calculator: the final character is never validated, a missing ')'
is skipped over blindly, an empty operand reads as 0 and trailing text is
ignored. Invalid characters and division by zero fail in both modes.
"""

from __future__ import annotations

from typing import Optional

from rdcalc.config import DEFAULT_MAX_DEPTH, Settings
from rdcalc.models import (
    CalculationError,
    ErrorKind,
    EvalFailure,
    EvalResult,
    Outcome,
    Parsed,
)

DIGITS = "0123456789"
ALPHABET = DIGITS + "+-*/()"


def _peek(text: str, cursor: int) -> str:
    """Character at cursor, or '' past the end."""
    if 0 <= cursor < len(text):
        return text[cursor]
    return ""


def _strip_terminator(text: str) -> str:
    """Drop a single trailing line terminator, if present."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def _truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def validate(text: str, legacy: bool = False) -> Optional[EvalFailure]:
    """Check that text only uses the grammar's alphabet.

    Legacy mode leaves the final character unchecked, as it is reserved for
    the line terminator. Strict mode drops one terminator and checks the rest.
    """
    body = text[:-1] if legacy else _strip_terminator(text)
    for i, c in enumerate(body):
        if c not in ALPHABET:
            return EvalFailure(ErrorKind.INVALID_CHARACTER, i, repr(c))
    return None


def get_natural(
    text: str,
    cursor: int = 0,
    legacy: bool = False,
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Outcome:
    """Parse a primary: an optionally negated literal or parenthesised group."""
    sign = 1
    if _peek(text, cursor) == "-":
        sign = -1
        cursor += 1

    if _peek(text, cursor) == "(":
        if depth >= max_depth:
            return EvalFailure(
                ErrorKind.NESTING_TOO_DEEP, cursor, f"limit is {max_depth}"
            )
        open_at = cursor
        inner = evaluate_expression(text, cursor + 1, legacy, depth + 1, max_depth)
        if isinstance(inner, EvalFailure):
            return inner
        cursor = inner.cursor
        if not legacy and _peek(text, cursor) != ")":
            return EvalFailure(
                ErrorKind.UNBALANCED_PARENTHESIS,
                cursor,
                f"'(' at position {open_at} is never closed",
            )
        # a blind skip past a missing ')' stops one past the end
        return Parsed(inner.value * sign, min(cursor + 1, len(text) + 1))

    start = cursor
    natural = 0
    while _peek(text, cursor) and _peek(text, cursor) in DIGITS:
        natural = natural * 10 + ord(text[cursor]) - ord("0")
        cursor += 1

    if cursor == start and not legacy:
        found = _peek(text, cursor)
        detail = f"found {found!r}" if found else "reached end of input"
        return EvalFailure(ErrorKind.MISSING_OPERAND, cursor, detail)
    return Parsed(natural * sign, cursor)


def evaluate_term(
    text: str,
    cursor: int = 0,
    legacy: bool = False,
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Outcome:
    """Parse a left-associative chain of '*' and '/' over primaries."""
    left = get_natural(text, cursor, legacy, depth, max_depth)
    if isinstance(left, EvalFailure):
        return left
    result, cursor = left.value, left.cursor

    while _peek(text, cursor) in ("*", "/"):
        operator = text[cursor]
        right = get_natural(text, cursor + 1, legacy, depth, max_depth)
        if isinstance(right, EvalFailure):
            return right
        if operator == "*":
            result *= right.value
        else:
            if right.value == 0:
                return EvalFailure(ErrorKind.DIVISION_BY_ZERO, cursor + 1)
            result = _truncating_div(result, right.value)
        cursor = right.cursor

    return Parsed(result, cursor)


def evaluate_expression(
    text: str,
    cursor: int = 0,
    legacy: bool = False,
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Outcome:
    """Parse a left-associative chain of '+' and '-' over terms."""
    left = evaluate_term(text, cursor, legacy, depth, max_depth)
    if isinstance(left, EvalFailure):
        return left
    result, cursor = left.value, left.cursor

    while _peek(text, cursor) in ("+", "-"):
        operator = text[cursor]
        right = evaluate_term(text, cursor + 1, legacy, depth, max_depth)
        if isinstance(right, EvalFailure):
            return right
        if operator == "+":
            result += right.value
        else:
            result -= right.value
        cursor = right.cursor

    return Parsed(result, cursor)


def calculate(
    text: str,
    legacy: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> EvalResult:
    """Validate and evaluate a whole expression starting at cursor 0.

    Args:
        text: Expression text, optionally ending in a line terminator.
        legacy: Force legacy (True) or strict (False) grammar. Defaults to
            settings.legacy.
        settings: Limits to apply. Defaults to Settings() so repeated calls
            never depend on the environment.

    Returns:
        EvalResult holding either the integer value or the failure.
    """
    settings = settings or Settings()
    if legacy is None:
        legacy = settings.legacy

    failure = validate(text, legacy)
    if failure:
        return EvalResult(expression=text, failure=failure)

    body = text if legacy else _strip_terminator(text)
    try:
        outcome = evaluate_expression(body, 0, legacy, 0, settings.max_depth)
    except RecursionError:
        # caller was already deep in the stack
        failure = EvalFailure(
            ErrorKind.NESTING_TOO_DEEP, 0, "exceeded the interpreter recursion limit"
        )
        return EvalResult(expression=text, failure=failure)

    if isinstance(outcome, EvalFailure):
        return EvalResult(expression=text, failure=outcome)

    if not legacy and outcome.cursor != len(body):
        if body[outcome.cursor] == ")":
            failure = EvalFailure(
                ErrorKind.UNBALANCED_PARENTHESIS, outcome.cursor, "')' without matching '('"
            )
        else:
            failure = EvalFailure(
                ErrorKind.TRAILING_INPUT, outcome.cursor, repr(body[outcome.cursor:])
            )
        return EvalResult(expression=text, failure=failure)

    return EvalResult(expression=text, value=outcome.value)


def evaluate(
    text: str,
    legacy: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> int:
    """Like calculate(), but return the integer or raise CalculationError."""
    result = calculate(text, legacy=legacy, settings=settings)
    if result.failure:
        raise CalculationError(result.failure)
    return result.value
