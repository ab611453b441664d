"""Error taxonomy for the expression engine.

Every failure derives from CalcError (a ValueError), so callers that only want
"did it work" can catch one type. The input builder normalizes all of them to
the "Error" display.
"""

from __future__ import annotations


class CalcError(ValueError):
    """Base class for tokenizer, parser and evaluator failures."""


class LexError(CalcError):
    """The expression text could not be tokenized."""


class InvalidCharacter(LexError):
    def __init__(self, char: str) -> None:
        super().__init__(f"Invalid character: {char!r}")
        self.char = char


class UnknownIdentifier(LexError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown identifier: {name!r}")
        self.name = name


class ParseError(CalcError):
    """The token stream is not a well-formed infix expression."""


class MismatchedParen(ParseError):
    def __init__(self) -> None:
        super().__init__("Mismatched parentheses")


class EvalError(CalcError):
    """The RPN program could not be executed."""


class MissingOperand(EvalError):
    def __init__(self, symbol: str) -> None:
        super().__init__(f"Missing operand for {symbol!r}")
        self.symbol = symbol


class MalformedExpression(EvalError):
    def __init__(self, remaining: int) -> None:
        super().__init__(f"Malformed expression ({remaining} values left on the stack)")
        self.remaining = remaining
