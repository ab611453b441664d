"""Tokenizer: expression text → ordered token list.

Single left-to-right pass, no position tracking. The display glyphs ×, ÷ and
− are accepted as aliases for *, / and - so a preview line can be fed back in.
"""

from __future__ import annotations

import re

from scicalc.errors import InvalidCharacter, UnknownIdentifier
from scicalc.models import BINARY_OPERATORS, FUNCTIONS, POSTFIX_OPERATORS, Token, TokenKind

_NUMBER_RE = re.compile(r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_IDENT_RE = re.compile(r"[a-zA-Z]+")

_GLYPHS = str.maketrans({"×": "*", "÷": "/", "−": "-"})


def normalize_expression(text: str) -> str:
    """Replace display glyphs with their ASCII operators."""
    return text.translate(_GLYPHS)


def _identifier_token(name: str) -> Token:
    ident = name.lower()
    if ident in FUNCTIONS:
        return Token(TokenKind.FUNCTION, ident)
    if ident == "pi":
        return Token(TokenKind.CONSTANT, "pi")
    if ident == "ans":
        return Token(TokenKind.VARIABLE, "ans")
    raise UnknownIdentifier(name)


def tokenize(text: str) -> list[Token]:
    """Split an expression into tokens.

    Raises:
        InvalidCharacter: a character (or a lone '.') that starts no token.
        UnknownIdentifier: a letter run that is not a function, pi or ans.
    """
    source = normalize_expression(text)
    tokens: list[Token] = []
    pos = 0

    while pos < len(source):
        char = source[pos]
        if char == " ":
            pos += 1
            continue

        if char.isascii() and (char.isdigit() or char == "."):
            match = _NUMBER_RE.match(source, pos)
            if not match:
                raise InvalidCharacter(char)
            tokens.append(Token(TokenKind.NUMBER, match.group()))
            pos = match.end()
            continue

        match = _IDENT_RE.match(source, pos)
        if match:
            tokens.append(_identifier_token(match.group()))
            pos = match.end()
            continue

        if char == "π":
            tokens.append(Token(TokenKind.CONSTANT, "pi"))
        elif char in "()":
            tokens.append(Token(TokenKind.PAREN, char))
        elif char in BINARY_OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, char))
        elif char in POSTFIX_OPERATORS:
            tokens.append(Token(TokenKind.POSTFIX, char))
        else:
            raise InvalidCharacter(char)
        pos += 1

    return tokens


def detokenize(tokens: list[Token]) -> str:
    """Render tokens back to text, one space between tokens.

    tokenize(detokenize(tokens)) == tokens for any tokenizer output.
    """
    return " ".join(token.value for token in tokens)
