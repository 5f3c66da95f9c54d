"""
Cursor context — What the user is pointing at

Two readings of the text around a cursor offset:
- completion_token: the partial token typed just before the cursor
- hover_target: the whole token under the cursor, classified as a
  function reference (immediately followed by `(`) or a plain symbol
"""

from dataclasses import dataclass
from enum import Enum

from .parsing.config import DialectConfig


class TargetKind(Enum):
    """How a hovered token is used."""
    FUNCTION = "function"
    SYMBOL = "symbol"


@dataclass(frozen=True)
class CursorTarget:
    """The token under the cursor and its classification."""
    kind: TargetKind
    word: str
    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.word == ""


def completion_token(text: str, offset: int, dialect: DialectConfig) -> str:
    """
    Token characters immediately before the cursor.

    `int coun|` -> "coun"; an offset right after whitespace gives "".
    """
    token_char = dialect.token_char_pattern
    offset = max(0, min(offset, len(text)))
    start = offset
    while start > 0 and token_char.match(text[start - 1]):
        start -= 1
    return text[start:offset]


def hover_target(text: str, offset: int, dialect: DialectConfig) -> CursorTarget:
    """
    Token that contains the character at the cursor.

    The token extends backward over token characters and forward over
    identifier characters; when the character right after it is `(`, the
    token is a function reference.
    """
    token_char = dialect.token_char_pattern
    forward_char = dialect.hover_forward_pattern
    offset = max(0, min(offset, len(text)))

    start = offset
    while start > 0 and token_char.match(text[start - 1]):
        start -= 1
    end = offset
    while end < len(text) and forward_char.match(text[end]):
        end += 1

    word = text[start:end]
    if word and end < len(text) and text[end] == "(":
        return CursorTarget(TargetKind.FUNCTION, word, start, end)
    return CursorTarget(TargetKind.SYMBOL, word, start, end)
