"""Input builder — turns discrete key presses into a canonical expression.

The builder is a pure reducer, apply(state, event) -> state, over the
immutable CalculatorState. Two phases:

    composing       the user is typing; events edit `expression`
    just_evaluated  a result (or "Error") is showing; a digit starts a fresh
                    expression, any other editing event continues from the
                    current one

Canonical expressions use ASCII operators and never leave multiplication
implicit: pressing `2` then `sin` yields "2*sin(".
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Callable, Iterable, Optional

from scicalc.engine import calculate
from scicalc.errors import CalcError
from scicalc.formatter import ERROR_TEXT, format_expression, format_result
from scicalc.models import (
    BINARY_OPERATORS,
    FUNCTIONS,
    POSTFIX_OPERATORS,
    AngleMode,
    CalculatorState,
    Event,
    EventKind,
    Phase,
)

log = logging.getLogger(__name__)

# Expression ends in a value that a following operand must be multiplied with
_CLOSED_VALUE_RE = re.compile(r"(?:[)!%]|pi|Ans)$")
# Expression ends in any value
_VALUE_END_RE = re.compile(r"(?:[0-9.)!%]|pi|Ans)$")
# Multi-character tokens removed atomically by backspace
_TRAILING_TOKEN_RE = re.compile(r"(?:Ans|pi|(?:sqrt|sin|cos|tan|log|ln)\()$")
_OPERATOR_RUN_RE = re.compile(r"[-+*/^]+$")
# The number being typed, including the exponent of a scientific result
_TRAILING_NUMBER_RE = re.compile(r"[0-9.]*(?:e[+-]?[0-9]*)?$")
_DANGLING_EXPONENT_RE = re.compile(r"(?<=[0-9.])e[+-]?$")
_NUMBER_RE = re.compile(r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?")

_DIGITS = "0123456789."
# '-' after one of these is a sign, not a replacement
_SIGN_AFTER = "*/^"


def _entry_display(expression: str) -> str:
    """What the big readout shows while composing: the entry being typed."""
    if not expression:
        return "0"
    match = _TRAILING_TOKEN_RE.search(expression)
    if match:
        return format_expression(match.group())
    numbers = _NUMBER_RE.findall(expression)
    return numbers[-1] if numbers else "0"


def _composing(state: CalculatorState, expression: str, display: Optional[str] = None) -> CalculatorState:
    return replace(
        state,
        expression=expression,
        display=_entry_display(expression) if display is None else display,
        preview=format_expression(expression),
        phase=Phase.COMPOSING,
    )


def _press_digit(state: CalculatorState, digit: Optional[str]) -> CalculatorState:
    if digit is None or len(digit) != 1 or digit not in _DIGITS:
        raise ValueError(f"Invalid digit: {digit!r}")

    base = "" if state.just_evaluated else state.expression
    current = _TRAILING_NUMBER_RE.search(base).group()

    if digit == ".":
        if "." in current or "e" in current:
            return state
        # Keep the expression numerically well-formed: ".5" is entered as "0.5"
        token = "0." if not current else "."
    else:
        token = digit
        if current == "0":
            base = base[:-1]

    prefix = "*" if _CLOSED_VALUE_RE.search(base) else ""
    return _composing(state, base + prefix + token)


def _press_value_start(state: CalculatorState, token: str, update_display: bool = True) -> CalculatorState:
    """Append a function opener, constant, variable or '('."""
    expression = state.expression
    prefix = "*" if _VALUE_END_RE.search(expression) else ""
    display = None if update_display else state.display
    return _composing(state, expression + prefix + token, display)


def _press_function(state: CalculatorState, name: Optional[str]) -> CalculatorState:
    if name not in FUNCTIONS:
        raise ValueError(f"Unknown function: {name!r}")
    return _press_value_start(state, f"{name}(")


def _press_constant(state: CalculatorState, name: Optional[str]) -> CalculatorState:
    if name not in ("pi", "π"):
        raise ValueError(f"Unknown constant: {name!r}")
    return _press_value_start(state, "pi")


def _press_variable(state: CalculatorState, name: Optional[str]) -> CalculatorState:
    if name is None or name.lower() != "ans":
        raise ValueError(f"Unknown variable: {name!r}")
    return _press_value_start(state, "Ans")


def _press_operator(state: CalculatorState, symbol: Optional[str]) -> CalculatorState:
    if symbol is None or len(symbol) != 1 or symbol not in BINARY_OPERATORS:
        raise ValueError(f"Invalid operator: {symbol!r}")

    expression = state.expression
    run = _OPERATOR_RUN_RE.search(expression)

    if not run:
        if (not expression or expression.endswith("(")) and symbol != "-":
            return state
        return _composing(state, expression + symbol, state.display)

    head = expression[: run.start()]
    trailing = run.group()
    if not head or head.endswith("("):
        # Only a leading sign is pending; nothing can replace it
        return state
    if symbol == "-" and trailing[0] in _SIGN_AFTER:
        return _composing(state, head + trailing[0] + "-", state.display)
    return _composing(state, head + symbol, state.display)


def _press_postfix(state: CalculatorState, symbol: Optional[str]) -> CalculatorState:
    if symbol is None or len(symbol) != 1 or symbol not in POSTFIX_OPERATORS:
        raise ValueError(f"Invalid postfix operator: {symbol!r}")
    if not _VALUE_END_RE.search(state.expression):
        return state
    return _composing(state, state.expression + symbol, state.display)


def _press_paren_open(state: CalculatorState, _payload: Optional[str]) -> CalculatorState:
    return _press_value_start(state, "(", update_display=False)


def _press_paren_close(state: CalculatorState, _payload: Optional[str]) -> CalculatorState:
    # Balance is checked by the parser, not here
    return _composing(state, state.expression + ")", state.display)


def _remove_last_token(expression: str) -> str:
    match = _TRAILING_TOKEN_RE.search(expression)
    if match:
        return expression[: match.start()]
    # "1.5e+1" loses its last exponent digit and the "e+" with it
    return _DANGLING_EXPONENT_RE.sub("", expression[:-1])


def _press_backspace(state: CalculatorState, _payload: Optional[str]) -> CalculatorState:
    if not state.expression:
        return state
    return _composing(state, _remove_last_token(state.expression))


def _press_evaluate(state: CalculatorState, _payload: Optional[str]) -> CalculatorState:
    target = state.expression or state.display
    preview = f"{format_expression(target)} ="
    failed = replace(state, display=ERROR_TEXT, preview=preview, phase=Phase.JUST_EVALUATED)

    try:
        value = calculate(target, state.angle_mode, state.last_answer)
    except CalcError as e:
        log.debug("Evaluation of %r failed: %s", target, e)
        return failed

    formatted = format_result(value)
    if formatted == ERROR_TEXT:
        log.debug("Evaluation of %r gave non-finite result %r", target, value)
        return failed

    return replace(
        state,
        expression=formatted,
        display=formatted,
        preview=preview,
        last_answer=value,
        phase=Phase.JUST_EVALUATED,
    )


def _press_clear(state: CalculatorState, _payload: Optional[str]) -> CalculatorState:
    # Angle mode belongs to its own toggle and survives a clear
    return CalculatorState(angle_mode=state.angle_mode)


def _press_toggle_angle(state: CalculatorState, _payload: Optional[str]) -> CalculatorState:
    return replace(state, angle_mode=state.angle_mode.toggled())


_HANDLERS: dict[EventKind, Callable[[CalculatorState, Optional[str]], CalculatorState]] = {
    EventKind.DIGIT: _press_digit,
    EventKind.OPERATOR: _press_operator,
    EventKind.FUNCTION: _press_function,
    EventKind.CONSTANT: _press_constant,
    EventKind.VARIABLE: _press_variable,
    EventKind.POSTFIX: _press_postfix,
    EventKind.PAREN_OPEN: _press_paren_open,
    EventKind.PAREN_CLOSE: _press_paren_close,
    EventKind.CLEAR: _press_clear,
    EventKind.BACKSPACE: _press_backspace,
    EventKind.EVALUATE: _press_evaluate,
    EventKind.TOGGLE_ANGLE_MODE: _press_toggle_angle,
}


def apply(state: CalculatorState, event: Event) -> CalculatorState:
    """Return the state that results from applying one event.

    Raises:
        ValueError: the event payload is not valid for its kind (e.g. a
            DIGIT event carrying "x"). Malformed expressions never raise;
            they evaluate to the "Error" display.
    """
    return _HANDLERS[event.kind](state, event.payload)


class Calculator:
    """One calculator instance: owns a CalculatorState and feeds it events."""

    def __init__(self, angle_mode: AngleMode = AngleMode.DEGREES) -> None:
        self.state = CalculatorState(angle_mode=angle_mode)

    def press(self, event: Event) -> CalculatorState:
        self.state = apply(self.state, event)
        return self.state

    def press_all(self, events: Iterable[Event]) -> CalculatorState:
        for event in events:
            self.press(event)
        return self.state

    @property
    def display(self) -> str:
        return self.state.display

    @property
    def preview(self) -> str:
        return self.state.preview

    @property
    def angle_mode(self) -> AngleMode:
        return self.state.angle_mode

    def snapshot(self) -> dict:
        """The outbound view the UI renders after each event."""
        return {
            "display": self.state.display,
            "preview": self.state.preview,
            "angle_mode": self.state.angle_mode.value,
        }
