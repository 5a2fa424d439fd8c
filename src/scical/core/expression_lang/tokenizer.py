"""
Tokenizer for scical expressions.

Normalizes common Unicode math glyphs and converts an expression string
into a sequence of typed tokens. Token positions always refer to the
caller's original string, not the normalized one.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum, auto
from typing import NamedTuple

from scical.core.errors import LexicalError
from scical.core.expression_lang.constants import CONSTANT_NAMES, FUNCTION_NAMES

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    NUMBER = auto()
    OPERATOR = auto()
    FUNCTION = auto()
    CONSTANT = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # Postfix markers
    FACTORIAL = auto()
    PERCENT = auto()

    # End of input
    EOF = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str | float, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


class SkippedCharacter(NamedTuple):
    """A character the tokenizer did not recognize and dropped."""

    char: str
    pos: int


_GLYPHS: dict[str, str] = {
    "×": "*",  # multiplication sign
    "÷": "/",  # division sign
    "−": "-",  # minus sign
    "π": "PI",
    "√": "sqrt",
    "∛": "cbrt",
}

_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.OPERATOR,
    "-": TokenKind.OPERATOR,
    "*": TokenKind.OPERATOR,
    "/": TokenKind.OPERATOR,
    "^": TokenKind.OPERATOR,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    "!": TokenKind.FACTORIAL,
    "%": TokenKind.PERCENT,
}

# ".5", "5.", "5.5", each with an optional exponent
_NUMBER_RE = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
# ASCII letters followed by ASCII letters or digits
_IDENT_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")
_DIGITS = frozenset("0123456789")


def normalize(source: str) -> tuple[str, list[int]]:
    """Map Unicode math glyphs to ASCII and drop whitespace.

    Returns:
        The normalized text and, for each of its characters, the index of
        the source character it came from.
    """
    chars: list[str] = []
    offsets: list[int] = []
    for i, c in enumerate(source):
        if c.isspace():
            continue
        replacement = _GLYPHS.get(c, c)
        chars.append(replacement)
        offsets.extend([i] * len(replacement))
    return "".join(chars), offsets


class Tokenizer:
    """Scans one expression string into tokens.

    Unrecognized characters are dropped and recorded in ``skipped``, unless
    ``strict`` is set, in which case they raise ``LexicalError``.
    """

    def __init__(self, source: str, *, strict: bool = False) -> None:
        self.source = source
        self.strict = strict
        self.text, self._offsets = normalize(source)
        self.skipped: list[SkippedCharacter] = []

    def _source_pos(self, i: int) -> int:
        if i < len(self._offsets):
            return self._offsets[i]
        return len(self.source)

    def tokenize(self) -> list[Token]:
        """Tokenize the entire input; the result always ends with EOF."""
        tokens: list[Token] = []
        text = self.text
        i = 0
        n = len(text)

        while i < n:
            c = text[i]
            pos = self._source_pos(i)

            # Numbers
            if c in _DIGITS or (c == "." and i + 1 < n and text[i + 1] in _DIGITS):
                m = _NUMBER_RE.match(text, i)
                assert m is not None
                tokens.append(Token(TokenKind.NUMBER, float(m.group(0)), pos))
                i = m.end()
                continue

            # Single-character operators and punctuation
            kind = _SINGLE_CHAR.get(c)
            if kind is not None:
                tokens.append(Token(kind, c, pos))
                i += 1
                continue

            # Identifiers: constants first, then functions
            m = _IDENT_RE.match(text, i)
            if m is not None:
                tokens.append(self._identifier(m.group(0), pos))
                i = m.end()
                continue

            if self.strict:
                raise LexicalError(f"Unexpected character: {c!r}", pos)
            logger.debug("Skipping unrecognized character %r at position %d", c, pos)
            self.skipped.append(SkippedCharacter(c, pos))
            i += 1

        tokens.append(Token(TokenKind.EOF, "", len(self.source)))
        return tokens

    def _identifier(self, word: str, pos: int) -> Token:
        lowered = word.lower()
        constant = CONSTANT_NAMES.get(lowered)
        if constant is not None:
            return Token(TokenKind.CONSTANT, constant, pos)
        function = FUNCTION_NAMES.get(lowered)
        if function is not None:
            return Token(TokenKind.FUNCTION, function, pos)
        raise LexicalError(f"Unknown identifier: {word} at position {pos}", pos)


def tokenize(source: str, *, strict: bool = False) -> list[Token]:
    """Tokenize an expression string into a list of tokens."""
    return Tokenizer(source, strict=strict).tokenize()
