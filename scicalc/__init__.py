"""scicalc — expression engine of a scientific calculator.

Tokenizer → Shunting-Yard parser → RPN evaluator → result formatter, fed by an
input builder that turns key presses into a canonical expression.

Usage:
    from scicalc import Calculator, compute
    compute("2^3^2")                     # "512"

    python -m scicalc eval "3+4*2"       # 11
    python -m scicalc press 2 sin 9 0 ")" =
"""

from scicalc.builder import Calculator, apply
from scicalc.engine import calculate, compute
from scicalc.models import AngleMode, CalculatorState, Event, EventKind

__all__ = [
    "AngleMode",
    "Calculator",
    "CalculatorState",
    "Event",
    "EventKind",
    "apply",
    "calculate",
    "compute",
]
