"""Display formatting: bounded-width results and the human-facing preview line."""

from __future__ import annotations

import math
from decimal import Decimal

ERROR_TEXT = "Error"

SCIENTIFIC_UPPER = 1e12
SCIENTIFIC_LOWER = 1e-9
SCIENTIFIC_DIGITS = 8
FIXED_DECIMALS = 10


def format_result(value: float) -> str:
    """Format an evaluator result for the display.

    Non-finite values are "Error". Very large or very small magnitudes use
    scientific notation (1.00000000e+12); everything else is rounded to 10
    decimals and printed without trailing zeros.
    """
    if not math.isfinite(value):
        return ERROR_TEXT
    magnitude = abs(value)
    if magnitude != 0 and (magnitude >= SCIENTIFIC_UPPER or magnitude < SCIENTIFIC_LOWER):
        return f"{value:.{SCIENTIFIC_DIGITS}e}"

    rounded = float(f"{value:.{FIXED_DECIMALS}f}")
    if rounded == 0:
        return "0"
    # repr() gives the shortest round-tripping digits; Decimal keeps them out
    # of exponent form, so 2.5e-7 prints as 0.00000025.
    text = format(Decimal(repr(rounded)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_expression(expression: str) -> str:
    """Render a canonical expression with display glyphs (√, π, ×, ÷, −)."""
    return (
        expression.replace("sqrt(", "√(")
        .replace("pi", "π")
        .replace("*", "×")
        .replace("/", "÷")
        .replace("-", "−")
    )
