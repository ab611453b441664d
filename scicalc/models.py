"""Data models for the scicalc expression engine.

Token kinds, the operator table, angle mode, input events and the immutable
CalculatorState — all the typed structures that flow through
tokenizer → parser → evaluator → builder.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenKind(str, Enum):
    """Lexical token categories."""

    NUMBER = "number"
    OPERATOR = "operator"
    FUNCTION = "function"
    CONSTANT = "constant"
    VARIABLE = "variable"
    PAREN = "paren"
    POSTFIX = "postfix"


@dataclass(frozen=True)
class Token:
    """A single lexical token. Produced by the tokenizer, consumed by the parser."""

    kind: TokenKind
    value: str

    def is_open_paren(self) -> bool:
        return self.kind is TokenKind.PAREN and self.value == "("


class Assoc(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class OperatorInfo:
    """Precedence, associativity and arity of an operator."""

    prec: int
    assoc: Assoc
    arity: int


# Unary minus is rewritten to "neg" by the parser.
NEG = "neg"

OPERATORS: dict[str, OperatorInfo] = {
    "+": OperatorInfo(1, Assoc.LEFT, 2),
    "-": OperatorInfo(1, Assoc.LEFT, 2),
    "*": OperatorInfo(2, Assoc.LEFT, 2),
    "/": OperatorInfo(2, Assoc.LEFT, 2),
    "^": OperatorInfo(3, Assoc.RIGHT, 2),
    NEG: OperatorInfo(4, Assoc.RIGHT, 1),
    "!": OperatorInfo(5, Assoc.LEFT, 1),
    "%": OperatorInfo(5, Assoc.LEFT, 1),
}

BINARY_OPERATORS = "+-*/^"
POSTFIX_OPERATORS = "!%"
FUNCTIONS = ("sin", "cos", "tan", "log", "ln", "sqrt")
TRIG_FUNCTIONS = ("sin", "cos", "tan")


class AngleMode(str, Enum):
    """How trigonometric arguments are interpreted."""

    DEGREES = "deg"
    RADIANS = "rad"

    def toggled(self) -> AngleMode:
        return AngleMode.RADIANS if self is AngleMode.DEGREES else AngleMode.DEGREES


class Phase(str, Enum):
    """Input builder phases."""

    COMPOSING = "composing"
    JUST_EVALUATED = "just_evaluated"


class EventKind(str, Enum):
    """Discrete inputs accepted by the input builder."""

    DIGIT = "digit"
    OPERATOR = "operator"
    FUNCTION = "function"
    CONSTANT = "constant"
    VARIABLE = "variable"
    POSTFIX = "postfix"
    PAREN_OPEN = "paren_open"
    PAREN_CLOSE = "paren_close"
    CLEAR = "clear"
    BACKSPACE = "backspace"
    EVALUATE = "evaluate"
    TOGGLE_ANGLE_MODE = "toggle_angle_mode"


@dataclass(frozen=True)
class Event:
    """One user action, e.g. Event(EventKind.DIGIT, "7")."""

    kind: EventKind
    payload: Optional[str] = None


@dataclass(frozen=True)
class CalculatorState:
    """Complete state of one calculator instance.

    `expression` is the canonical ASCII form fed to the tokenizer, `display` is
    the big readout and `preview` the human-facing expression line above it.
    """

    expression: str = ""
    display: str = "0"
    preview: str = ""
    last_answer: float = 0.0
    angle_mode: AngleMode = AngleMode.DEGREES
    phase: Phase = Phase.COMPOSING

    @property
    def just_evaluated(self) -> bool:
        return self.phase is Phase.JUST_EVALUATED

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "expression": self.expression,
            "display": self.display,
            "preview": self.preview,
            "last_answer": self.last_answer,
            "angle_mode": self.angle_mode.value,
            "phase": self.phase.value,
        }
