"""
Brackets — Structural validation and scope building

Both passes scan masked text (comments and strings already blanked) one
character at a time with an explicit stack.

- validate_brackets: reports unmatched and mismatched `{}`, `[]`, `()`
- build_scope_tree: nests `{...}` regions into a ScopeTree
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .diagnostics import Diagnostic, DiagnosticKind, error, warning
from .scope import ROOT, ScopeTree

logger = logging.getLogger(__name__)


BRACKET_PAIRS = {
    '{': '}',
    '[': ']',
    '(': ')',
}
CLOSERS = set(BRACKET_PAIRS.values())


@dataclass
class BracketPair:
    """An opener waiting on the validator stack."""
    char: str
    offset: int


def _unmatched(char: str) -> str:
    return f"No matching bracket for character {char}"


def validate_brackets(text: str, source: str = "ronscript") -> List[Diagnostic]:
    """
    Report bracket structure problems.

    - A closer with nothing open: error at the closer.
    - A closer that does not fit the innermost opener: error at the opener.
    - Openers never closed: one warning each, at the opener.

    Returns:
        Diagnostics in discovery order (errors during the scan, then warnings)
    """
    stack: List[BracketPair] = []
    diagnostics: List[Diagnostic] = []

    for index, char in enumerate(text):
        if char in BRACKET_PAIRS:
            stack.append(BracketPair(char, index))
        elif char in CLOSERS:
            if not stack:
                diagnostics.append(error(index, index + 1, _unmatched(char), DiagnosticKind.STRUCTURAL, source))
                continue
            opener = stack.pop()
            if BRACKET_PAIRS[opener.char] != char:
                diagnostics.append(
                    error(opener.offset, opener.offset + 1, _unmatched(char), DiagnosticKind.STRUCTURAL, source)
                )

    for opener in stack:
        diagnostics.append(
            warning(opener.offset, opener.offset + 1, _unmatched(opener.char), DiagnosticKind.STRUCTURAL, source)
        )

    if diagnostics:
        logger.debug("bracket validation found %d problem(s)", len(diagnostics))
    return diagnostics


def build_scope_tree(text: str) -> ScopeTree:
    """
    Nest every `{...}` region of the text.

    A node is added to the arena when its `}` is seen, then attached to the
    scope still open around it or, when none is, to the synthetic root.
    A stray `}` is ignored; an unclosed `{` never becomes a scope.
    """
    tree = ScopeTree(len(text))
    # (start offset, handles of already closed children)
    stack: List[Tuple[int, List[int]]] = []

    for index, char in enumerate(text):
        if char == '{':
            stack.append((index, []))
        elif char == '}':
            if not stack:
                continue
            start, children = stack.pop()
            handle = tree.add(start, index, children)
            if stack:
                stack[-1][1].append(handle)
            else:
                tree.attach(ROOT, handle)

    return tree
