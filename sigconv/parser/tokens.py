"""Tokenizer for signal expressions.

Whitespace is insignificant and removed before tokenizing. Numbers are
unsigned (signs are operator tokens) and may use a leading dot or
scientific notation, so ``1e+5`` stays a single token.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from sigconv.errors import ParseError, ParseErrorCode


class TokenKind(Enum):
    """Lexical categories of the expression language."""

    NUMBER = "number"
    IDENT = "ident"
    LBRACKET = "["
    RBRACKET = "]"
    COMMA = ","
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    CARET = "^"


@dataclass(frozen=True)
class Token:
    """A lexeme with its position in the whitespace-free expression."""

    kind: TokenKind
    text: str
    pos: int


IDENTIFIERS = frozenset({"n", "u", "delta", "sin", "cos", "tan", "gauss", "abs"})

_IMAGINARY_UNITS = frozenset({"i", "j"})

_NUMBER_RE = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_IDENT_RE = re.compile(r"[A-Za-z_]\w*")

_SINGLE_CHAR = {
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ",": TokenKind.COMMA,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "^": TokenKind.CARET,
}


def compact(text: str) -> str:
    """Remove all whitespace from ``text``."""
    return "".join(text.split())


def tokenize(text: str) -> List[Token]:
    """
    Split an expression into tokens.

    Parameters
    ----------
    text : str
        Expression source; whitespace is dropped first.

    Returns
    -------
    list of Token
        Tokens in source order.

    Raises
    ------
    ParseError
        ``DIVISION_NOT_SUPPORTED`` for ``/``, ``NESTED_BRACKETS`` for
        ``[[``, ``COMPLEX_LITERAL`` for imaginary units,
        ``UNKNOWN_IDENTIFIER`` for names outside the fixed vocabulary and
        ``UNEXPECTED_CHARACTER`` for anything else.
    """
    source = compact(text)

    if "/" in source:
        raise ParseError(
            f"Division is not supported: {text!r}",
            ParseErrorCode.DIVISION_NOT_SUPPORTED,
            text,
        )
    if "[[" in source:
        raise ParseError(
            f"Nested brackets are not supported: {text!r}",
            ParseErrorCode.NESTED_BRACKETS,
            text,
        )

    tokens: List[Token] = []
    pos = 0
    while pos < len(source):
        char = source[pos]

        match = _NUMBER_RE.match(source, pos)
        if match:
            tokens.append(Token(TokenKind.NUMBER, match.group(), pos))
            pos = match.end()
            continue

        match = _IDENT_RE.match(source, pos)
        if match:
            name = match.group()
            if name in _IMAGINARY_UNITS:
                raise ParseError(
                    f"Complex literals are not supported: {text!r}",
                    ParseErrorCode.COMPLEX_LITERAL,
                    text,
                )
            if name not in IDENTIFIERS:
                raise ParseError(
                    f"Unknown identifier {name!r} in {text!r}",
                    ParseErrorCode.UNKNOWN_IDENTIFIER,
                    text,
                )
            tokens.append(Token(TokenKind.IDENT, name, pos))
            pos = match.end()
            continue

        kind = _SINGLE_CHAR.get(char)
        if kind is None:
            raise ParseError(
                f"Unexpected character {char!r} at position {pos} in {text!r}",
                ParseErrorCode.UNEXPECTED_CHARACTER,
                text,
            )
        tokens.append(Token(kind, char, pos))
        pos += 1

    return tokens


def bracket_depths(tokens: Sequence[Token]) -> List[int]:
    """Bracket nesting depth in front of each token.

    A closing bracket reports the depth it closes back to, so top-level
    operators are exactly the tokens with depth 0. Unbalanced input yields
    negative or non-zero trailing depths, which the parser rejects.
    """
    depths = []
    depth = 0
    for tok in tokens:
        if tok.kind is TokenKind.RBRACKET:
            depth -= 1
        depths.append(depth)
        if tok.kind is TokenKind.LBRACKET:
            depth += 1
    return depths


def is_balanced(tokens: Sequence[Token]) -> bool:
    depth = 0
    for tok in tokens:
        if tok.kind is TokenKind.LBRACKET:
            depth += 1
        elif tok.kind is TokenKind.RBRACKET:
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def matching_bracket(tokens: Sequence[Token], open_index: int) -> int:
    """Index of the bracket closing ``tokens[open_index]``, or -1."""
    depth = 0
    for index in range(open_index, len(tokens)):
        kind = tokens[index].kind
        if kind is TokenKind.LBRACKET:
            depth += 1
        elif kind is TokenKind.RBRACKET:
            depth -= 1
            if depth == 0:
                return index
    return -1


__all__ = [
    "TokenKind",
    "Token",
    "IDENTIFIERS",
    "compact",
    "tokenize",
    "bracket_depths",
    "is_balanced",
    "matching_bracket",
]
