"""Evaluator: RPN token list → float.

A plain value-stack machine. Arithmetic follows IEEE float semantics: division
by zero, overflow and math-domain errors yield inf/nan values (which the
formatter turns into "Error") rather than Python exceptions.
"""

from __future__ import annotations

import math

from scicalc.errors import MalformedExpression, MissingOperand
from scicalc.models import NEG, OPERATORS, TRIG_FUNCTIONS, AngleMode, Token, TokenKind

# Largest n with n! representable as a float
FACTORIAL_LIMIT = 170


def factorial(value: float) -> float:
    """n! for non-negative integers, nan otherwise, inf past FACTORIAL_LIMIT."""
    if not math.isfinite(value) or value < 0 or math.floor(value) != value:
        return math.nan
    if value > FACTORIAL_LIMIT:
        return math.inf
    return float(math.factorial(int(value)))


def _divide(left: float, right: float) -> float:
    if right != 0:
        return left / right
    if left == 0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value == math.floor(value) and value % 2 == 1


def _power(left: float, right: float) -> float:
    try:
        return math.pow(left, right)
    except OverflowError:
        if left < 0 and _is_odd_integer(right):
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ** negative is a pole, negative ** fraction has no real value
        if left == 0:
            if _is_odd_integer(right):
                return math.copysign(math.inf, left)
            return math.inf
        return math.nan


def _log(fn, value: float) -> float:
    if value == 0:
        return -math.inf
    if value < 0 or math.isnan(value):
        return math.nan
    return fn(value)


def _apply_function(name: str, value: float, angle_mode: AngleMode) -> float:
    if name in TRIG_FUNCTIONS:
        if not math.isfinite(value):
            return math.nan
        arg = math.radians(value) if angle_mode is AngleMode.DEGREES else value
        return getattr(math, name)(arg)
    if name == "log":
        return _log(math.log10, value)
    if name == "ln":
        return _log(math.log, value)
    if name == "sqrt":
        return math.sqrt(value) if value >= 0 else math.nan
    raise ValueError(f"Unknown function: {name}")


_BINARY = {
    "+": lambda left, right: left + right,
    "-": lambda left, right: left - right,
    "*": lambda left, right: left * right,
    "/": _divide,
    "^": _power,
}


def evaluate(rpn: list[Token], angle_mode: AngleMode = AngleMode.DEGREES, last_answer: float = 0.0) -> float:
    """Run an RPN program and return its single result.

    Args:
        rpn: Parser output.
        angle_mode: Interpretation of sin/cos/tan arguments.
        last_answer: Value substituted for the `ans` variable.

    Raises:
        MissingOperand: an operator or function found too few values.
        MalformedExpression: the program did not leave exactly one value.
    """
    stack: list[float] = []

    def pop(symbol: str) -> float:
        if not stack:
            raise MissingOperand(symbol)
        return stack.pop()

    for token in rpn:
        kind = token.kind
        if kind is TokenKind.NUMBER:
            stack.append(float(token.value))
        elif kind is TokenKind.CONSTANT:
            stack.append(math.pi)
        elif kind is TokenKind.VARIABLE:
            stack.append(last_answer)
        elif kind is TokenKind.FUNCTION:
            stack.append(_apply_function(token.value, pop(token.value), angle_mode))
        elif kind is TokenKind.POSTFIX:
            value = pop(token.value)
            stack.append(factorial(value) if token.value == "!" else value / 100)
        elif kind is TokenKind.OPERATOR:
            if OPERATORS[token.value].arity == 1:
                stack.append(-pop(NEG))
                continue
            # Right operand is on top; the second pop is the left operand.
            right = pop(token.value)
            left = pop(token.value)
            stack.append(_BINARY[token.value](left, right))
        else:
            # Parentheses never survive to_rpn
            raise MalformedExpression(len(stack))

    if len(stack) != 1:
        raise MalformedExpression(len(stack))
    return stack[0]
