"""Pipeline helpers: text → tokens → RPN → value → display string."""

from __future__ import annotations

from scicalc.errors import CalcError
from scicalc.evaluator import evaluate
from scicalc.formatter import ERROR_TEXT, format_result
from scicalc.models import AngleMode
from scicalc.parser import to_rpn
from scicalc.tokenizer import tokenize


def calculate(text: str, angle_mode: AngleMode = AngleMode.DEGREES, last_answer: float = 0.0) -> float:
    """Evaluate an expression. Raises CalcError on lex, parse or eval failure."""
    return evaluate(to_rpn(tokenize(text)), angle_mode, last_answer)


def compute(text: str, angle_mode: AngleMode = AngleMode.DEGREES, last_answer: float = 0.0) -> str:
    """Evaluate and format an expression; every failure becomes "Error"."""
    try:
        return format_result(calculate(text, angle_mode, last_answer))
    except CalcError:
        return ERROR_TEXT
