"""Keypad layouts and keyboard bindings.

Buttons carry a canonical `value` (what the engine sees) and a `label` (what
the user sees). `button_event`, `key_event` and `token_event` turn buttons,
keyboard keys and scripted button values into builder events.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from scicalc.models import BINARY_OPERATORS, FUNCTIONS, POSTFIX_OPERATORS, Event, EventKind


class Layout(str, Enum):
    """Keypad layouts, from fewest to most keys."""

    BASIC = "basic"
    STANDARD = "standard"
    SCIENTIFIC = "scientific"


class ButtonKind(str, Enum):
    DIGIT = "digit"
    OPERATOR = "operator"
    FUNCTION = "function"
    CONTROL = "control"
    EQUALS = "equals"
    CONSTANT = "constant"
    TOGGLE = "toggle"


@dataclass(frozen=True)
class Button:
    label: str
    value: str
    kind: ButtonKind
    span: int = 1


def _b(label: str, value: str, kind: ButtonKind, span: int = 1) -> Button:
    return Button(label, value, kind, span)


_D, _O, _F, _C, _E, _K, _T = (
    ButtonKind.DIGIT,
    ButtonKind.OPERATOR,
    ButtonKind.FUNCTION,
    ButtonKind.CONTROL,
    ButtonKind.EQUALS,
    ButtonKind.CONSTANT,
    ButtonKind.TOGGLE,
)

LAYOUTS: dict[Layout, tuple[tuple[Button, ...], int]] = {
    Layout.BASIC: ((
        _b("C", "clear", _C), _b("⌫", "backspace", _C), _b("%", "%", _O), _b("÷", "/", _O),
        _b("7", "7", _D), _b("8", "8", _D), _b("9", "9", _D), _b("×", "*", _O),
        _b("4", "4", _D), _b("5", "5", _D), _b("6", "6", _D), _b("−", "-", _O),
        _b("1", "1", _D), _b("2", "2", _D), _b("3", "3", _D), _b("+", "+", _O),
        _b("0", "0", _D, span=2), _b(".", ".", _D), _b("=", "=", _E),
    ), 4),
    Layout.STANDARD: ((
        _b("C", "clear", _C), _b("⌫", "backspace", _C), _b("(", "(", _O), _b(")", ")", _O),
        _b("√", "sqrt", _F), _b("^", "^", _O), _b("%", "%", _O), _b("÷", "/", _O),
        _b("7", "7", _D), _b("8", "8", _D), _b("9", "9", _D), _b("×", "*", _O),
        _b("4", "4", _D), _b("5", "5", _D), _b("6", "6", _D), _b("−", "-", _O),
        _b("1", "1", _D), _b("2", "2", _D), _b("3", "3", _D), _b("+", "+", _O),
        _b("Ans", "Ans", _K), _b("0", "0", _D), _b(".", ".", _D), _b("=", "=", _E),
    ), 4),
    Layout.SCIENTIFIC: ((
        _b("RAD", "angle", _T), _b("sin", "sin", _F), _b("cos", "cos", _F), _b("tan", "tan", _F), _b("π", "pi", _K),
        _b("C", "clear", _C), _b("⌫", "backspace", _C), _b("log", "log", _F), _b("ln", "ln", _F), _b("√", "sqrt", _F),
        _b("7", "7", _D), _b("8", "8", _D), _b("9", "9", _D), _b("÷", "/", _O), _b("^", "^", _O),
        _b("4", "4", _D), _b("5", "5", _D), _b("6", "6", _D), _b("×", "*", _O), _b("%", "%", _O),
        _b("1", "1", _D), _b("2", "2", _D), _b("3", "3", _D), _b("−", "-", _O), _b("x!", "!", _O),
        _b("0", "0", _D), _b(".", ".", _D), _b("Ans", "Ans", _K), _b("+", "+", _O), _b("=", "=", _E),
    ), 5),
}

_CONTROL_EVENTS = {
    "clear": EventKind.CLEAR,
    "c": EventKind.CLEAR,
    "backspace": EventKind.BACKSPACE,
    "=": EventKind.EVALUATE,
    "angle": EventKind.TOGGLE_ANGLE_MODE,
    "(": EventKind.PAREN_OPEN,
    ")": EventKind.PAREN_CLOSE,
}


def token_event(value: str) -> Event:
    """Map a button value ("7", "sin", "pi", "Ans", "=", "clear", ...) to an event.

    Raises:
        ValueError: the value names no button.
    """
    control = _CONTROL_EVENTS.get(value.lower())
    if control:
        return Event(control)
    if len(value) == 1 and value in "0123456789.":
        return Event(EventKind.DIGIT, value)
    if len(value) == 1 and value in BINARY_OPERATORS:
        return Event(EventKind.OPERATOR, value)
    if len(value) == 1 and value in POSTFIX_OPERATORS:
        return Event(EventKind.POSTFIX, value)
    if value in FUNCTIONS:
        return Event(EventKind.FUNCTION, value)
    if value in ("pi", "π"):
        return Event(EventKind.CONSTANT, "pi")
    if value.lower() == "ans":
        return Event(EventKind.VARIABLE, "Ans")
    raise ValueError(f"Unknown key: {value!r}")


def button_event(button: Button) -> Event:
    """Event produced by pressing a keypad button."""
    return token_event(button.value)


_KEY_ALIASES = {
    ",": ".",
    "x": "*",
    "X": "*",
    "Enter": "=",
    "Backspace": "backspace",
    "Delete": "clear",
}


def key_event(key: str) -> Optional[Event]:
    """Map a keyboard key name to an event, or None if the key is unbound."""
    key = _KEY_ALIASES.get(key, key)
    if not key:
        return None
    if len(key) == 1 and key not in "0123456789.+-*/^()!%=":
        return None
    if len(key) > 1 and key not in ("backspace", "clear"):
        return None
    return token_event(key)
