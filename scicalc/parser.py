"""Parser: infix token list → RPN token list (Shunting-Yard).

A '-' is rewritten to the unary "neg" operator when it is the first token or
follows an operator, '(' or a function; every other '-' is subtraction.
Postfix tokens (! and %) go straight to the output because they apply to the
value already computed.
"""

from __future__ import annotations

from typing import Optional

from scicalc.errors import MismatchedParen
from scicalc.models import NEG, OPERATORS, Assoc, Token, TokenKind

_OPERANDS = (TokenKind.NUMBER, TokenKind.CONSTANT, TokenKind.VARIABLE)


def _is_unary_position(previous: Optional[Token]) -> bool:
    if previous is None:
        return True
    return (
        previous.kind in (TokenKind.OPERATOR, TokenKind.FUNCTION)
        or previous.is_open_paren()
    )


def _should_pop(top: Token, incoming: Token) -> bool:
    """True if the operator on the stack binds before the incoming one."""
    if top.kind is not TokenKind.OPERATOR:
        return False
    top_info = OPERATORS[top.value]
    info = OPERATORS[incoming.value]
    if top_info.prec > info.prec:
        return True
    return top_info.prec == info.prec and info.assoc is Assoc.LEFT


def to_rpn(tokens: list[Token]) -> list[Token]:
    """Convert infix tokens to Reverse Polish Notation.

    Raises:
        MismatchedParen: a ')' without an open '(' or an unclosed '('.
    """
    output: list[Token] = []
    stack: list[Token] = []
    previous: Optional[Token] = None

    for token in tokens:
        if token.kind is TokenKind.OPERATOR and token.value == "-" and _is_unary_position(previous):
            token = Token(TokenKind.OPERATOR, NEG)

        if token.kind in _OPERANDS or token.kind is TokenKind.POSTFIX:
            output.append(token)
        elif token.kind is TokenKind.FUNCTION:
            stack.append(token)
        elif token.kind is TokenKind.OPERATOR:
            while stack and _should_pop(stack[-1], token):
                output.append(stack.pop())
            stack.append(token)
        elif token.is_open_paren():
            stack.append(token)
        else:
            while stack and not stack[-1].is_open_paren():
                output.append(stack.pop())
            if not stack:
                raise MismatchedParen()
            stack.pop()
            # Bind the closed argument to its function
            if stack and stack[-1].kind is TokenKind.FUNCTION:
                output.append(stack.pop())

        previous = token

    while stack:
        token = stack.pop()
        if token.kind is TokenKind.PAREN:
            raise MismatchedParen()
        output.append(token)

    return output
