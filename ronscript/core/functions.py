"""
Functions and labels — Document-wide declarations

Both extractors scan the whole masked document once, independent of the
scope tree; what they find belongs to the document root.

- extract_functions: function headers and forward declarations, with a
  duplicate check on the rendered signature label
- extract_labels: names listed in `labels { ... }` blocks
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Tuple

from .diagnostics import Diagnostic, DiagnosticKind, error
from .parsing.config import DialectConfig
from .symbols import INITIALIZER, Symbol, SymbolKind

logger = logging.getLogger(__name__)


WORD = re.compile(r'\w+')


@dataclass(frozen=True)
class DocumentFunction:
    """A function declared in the document being edited."""
    name: str
    arguments: Tuple[str, ...]
    declaration_offset: int
    declaration_length: int
    keyword: str = ""

    @property
    def label(self) -> str:
        """Signature label, e.g. `foo(a, b)`."""
        return f"{self.name}({', '.join(self.arguments)})"

    @property
    def snippet(self) -> str:
        """Insert text with numbered placeholders, e.g. `foo(${1:a}, ${2:b})`."""
        placeholders = [f"${{{i}:{arg}}}" for i, arg in enumerate(self.arguments, start=1)]
        return f"{self.name}({', '.join(placeholders)})"

    def to_symbol(self) -> Symbol:
        return Symbol(self.name, SymbolKind.FUNCTION, self.declaration_offset, self.declaration_length)


def parameter_names(params: str) -> Tuple[str, ...]:
    """
    Names of a parameter list: `int a, string[] b = ""` -> ('a', 'b').

    Each parameter's name is its last word once any default is dropped.
    """
    names = []
    for param in params.split(","):
        words = WORD.findall(INITIALIZER.sub("", param))
        if words:
            names.append(words[-1])
    return tuple(names)


def extract_functions(text: str, dialect: DialectConfig) -> Tuple[List[DocumentFunction], List[Diagnostic]]:
    """
    Collect function declarations, rejecting repeated signatures.

    The function list starts empty on every call. A header whose label was
    already collected in this call yields an error spanning the header and
    is not collected again.

    Returns:
        (functions in document order, duplicate diagnostics)
    """
    functions: List[DocumentFunction] = []
    seen = set()
    diagnostics: List[Diagnostic] = []

    for match in dialect.function_pattern.finditer(text):
        function = DocumentFunction(
            name=match.group("name"),
            arguments=parameter_names(match.group("params")),
            declaration_offset=match.start(),
            declaration_length=match.end() - match.start(),
            keyword=match.group("keyword"),
        )
        if function.label in seen:
            diagnostics.append(error(
                match.start(), match.end(), f"{function.name} is already declared",
                DiagnosticKind.FUNCTION, dialect.source,
            ))
            continue
        seen.add(function.label)
        functions.append(function)

    logger.debug("found %d function(s), %d duplicate(s)", len(functions), len(diagnostics))
    return functions, diagnostics


def extract_labels(text: str, dialect: DialectConfig) -> List[Symbol]:
    """
    Collect label names from every `labels { ... }` block.

    `labels { start = 1, finish }` -> start, finish. Names may repeat
    across blocks; no duplicate check applies.
    """
    labels: List[Symbol] = []
    for match in dialect.label_block_pattern.finditer(text):
        body_start = match.start("body")
        offset = body_start
        for entry in match.group("body").split(","):
            name = INITIALIZER.sub("", entry).strip()
            if name:
                labels.append(Symbol(name, SymbolKind.LABEL, offset + entry.index(name), len(name)))
            offset += len(entry) + 1
    return labels
