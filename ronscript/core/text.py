"""
Text masking — Length-preserving rewrites of document text

Every transform here keeps the text length unchanged so that an offset in
the masked text is the same offset in the original document. Masked
regions are replaced by spaces.

Transforms:
- strip_comments: blank comments and string literals
- replace_between: blank an inclusive offset range
- rewrite_function_headers: move parameter lists inside their body scope
- shifted_parameter_spans: where the rewrite moved parameter lists to
"""

import re
from typing import Iterator, List, Pattern, Tuple

from .parsing.config import DialectConfig


# Block comments, double-quoted strings (escapes respected), line comments
COMMENTS_PATTERN = re.compile(
    r'/\*[\s\S]*?\*/'
    r'|"(?:[^"\\\n]|\\.)*"'
    r'|//[^\n]*'
)


def replace_between(text: str, start: int, end: int, replace_with: str = " ") -> str:
    """
    Replace every character in the inclusive range [start, end].

    Invalid ranges (negative, or start after end) leave the text unchanged.
    """
    if start < 0 or end < 0 or start > end:
        return text
    end = min(end, len(text) - 1)
    if start > end:
        return text
    return text[:start] + replace_with * (end - start + 1) + text[end + 1:]


def blank_matches(text: str, pattern: Pattern) -> str:
    """Blank every match of a pattern, keeping newlines so lines stay aligned."""
    def _blank(match: re.Match) -> str:
        return re.sub(r'[^\n]', ' ', match.group(0))
    return pattern.sub(_blank, text)


def strip_comments(text: str) -> str:
    """Blank comments and string literals so brackets inside them are ignored."""
    return blank_matches(text, COMMENTS_PATTERN)


def rewrite_function_headers(text: str, dialect: DialectConfig) -> str:
    """
    Make function parameters belong to the function body scope.

    Forward declarations are blanked first. Each remaining header
    `scenario foo(int a) {` becomes `scenario foo{(int a)  `. The brace
    moves to where the parameter list opened and the list shifts
    one character right. The original brace becomes a space.
    """
    text = blank_matches(text, dialect.forward_declaration_pattern)

    chars = list(text)
    for open_paren, close_paren, brace in _function_headers(text, dialect):
        params = text[open_paren:close_paren + 1]
        chars[brace] = " "
        chars[open_paren] = "{"
        for i, char in enumerate(params):
            chars[open_paren + 1 + i] = char

    return "".join(chars)


def shifted_parameter_spans(text: str, dialect: DialectConfig) -> List[Tuple[int, int]]:
    """
    Half-open spans the parameter lists occupy after rewrite_function_headers.

    An offset inside one of these spans is one character to the right of
    the same text in the document.
    """
    text = blank_matches(text, dialect.forward_declaration_pattern)
    return [
        (open_paren + 1, close_paren + 2)
        for open_paren, close_paren, _ in _function_headers(text, dialect)
    ]


def _function_headers(text: str, dialect: DialectConfig) -> Iterator[Tuple[int, int, int]]:
    """(open paren, close paren, opening brace) offsets of each function header."""
    for match in dialect.function_body_pattern.finditer(text):
        header = match.group(0)
        yield (
            match.start() + header.index("("),
            match.start() + header.index(")"),
            match.end() - 1,
        )


# =============================================================================
# Offset / position conversion
# =============================================================================

def position_at(text: str, offset: int) -> Tuple[int, int]:
    """
    Convert a character offset to a zero-based (line, character) pair.

    Offsets past the end clamp to the end of the text.
    """
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start


def offset_at(text: str, line: int, character: int) -> int:
    """Convert a zero-based (line, character) pair to a character offset."""
    if line < 0:
        return 0
    line_start = 0
    for _ in range(line):
        next_break = text.find("\n", line_start)
        if next_break == -1:
            return len(text)
        line_start = next_break + 1
    line_end = text.find("\n", line_start)
    if line_end == -1:
        line_end = len(text)
    return min(line_start + max(character, 0), line_end)
