"""
Symbols — Scoped declaration extraction

Walks a ScopeTree top-down. For every scope the extractor looks only at
the scope's own text (child scopes blanked out), recognizes typed
declarations, validates each declared name, and records the accepted
names on the scope.

Validation order per name:
1. contains the pointer marker  -> error
2. is a reserved type keyword    -> error
3. already declared in this scope or any enclosing scope -> error
4. otherwise registered as a variable of this scope

Consequence of rule 3: a nested scope may not shadow an enclosing
declaration, while sibling scopes may reuse a name freely.
"""

import logging
import re
from dataclasses import dataclass, asdict
from enum import Enum
from typing import List, Sequence, Set, Tuple

from .diagnostics import Diagnostic, DiagnosticKind, error
from .parsing.config import DialectConfig
from .scope import ROOT, ScopeTree
from .text import replace_between

logger = logging.getLogger(__name__)


# Balanced (...) and [...] groups nested up to three levels deep
PAREN_GROUP = re.compile(r'\((?:[^)(]+|\((?:[^)(]+|\([^)(]*\))*\))*\)')
SQUARE_GROUP = re.compile(r'\[(?:[^\][]+|\[(?:[^\][]+|\[[^\][]*\])*\])*\]')
INITIALIZER = re.compile(r'\s*=.*', re.DOTALL)


class SymbolKind(Enum):
    """What a symbol names."""
    VARIABLE = "variable"
    FUNCTION = "function"
    LABEL = "label"


@dataclass(frozen=True)
class Symbol:
    """A named declaration and where it was declared."""
    name: str
    kind: SymbolKind
    declaration_offset: int
    declaration_length: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


def declared_names(declaration: str, dialect: DialectConfig) -> List[str]:
    """
    Split a matched declaration into the names it declares.

    `int a = f(1, 2), b[]` -> ['a', 'b']. Pointer markers are kept so the
    caller can reject them.
    """
    body = dialect.type_prefix_pattern.sub("", declaration)
    body = PAREN_GROUP.sub("", body)
    body = SQUARE_GROUP.sub("", body)

    names = []
    for entry in body.split(","):
        name = INITIALIZER.sub("", entry.strip().replace(";", "")).strip()
        if name:
            names.append(name)
    return names


class SymbolExtractor:
    """
    Extracts variable declarations scope by scope.

    Usage:
        extractor = SymbolExtractor(RON_DIALECT)
        diagnostics = extractor.extract(tree, rewritten_text)
        # every node of tree now has `symbols` set
    """

    def __init__(self, dialect: DialectConfig):
        self.dialect = dialect
        self._shifted: Sequence[Tuple[int, int]] = ()

    def extract(
        self,
        tree: ScopeTree,
        text: str,
        shifted: Sequence[Tuple[int, int]] = (),
    ) -> List[Diagnostic]:
        """
        Populate `symbols` on every node of the tree.

        Args:
            tree: Scope tree built from `text`
            text: Masked, header-rewritten document text
            shifted: Parameter-list spans the rewrite moved one character
                right; offsets found there are reported at their document
                position

        Returns:
            Declaration diagnostics, outer scopes before inner ones
        """
        self._shifted = shifted
        diagnostics: List[Diagnostic] = []
        # Explicit stack instead of recursion: (handle, names visible from ancestors)
        pending: List[Tuple[int, Set[str]]] = [(ROOT, set())]
        while pending:
            handle, inherited = pending.pop()
            local, found = self._extract_scope(tree, handle, text, inherited)
            diagnostics.extend(found)

            visible = inherited | {s.name for s in local}
            children = tree.node(handle).children
            for child in reversed(children):
                pending.append((child, visible))

        return diagnostics

    def _document_span(self, start: int, end: int) -> Tuple[int, int]:
        for low, high in self._shifted:
            if low <= start < high:
                return start - 1, end - 1
        return start, end

    def _scope_text(self, tree: ScopeTree, handle: int, text: str) -> str:
        """The scope's own text with every direct child scope blanked."""
        node = tree.node(handle)
        local = text[node.start_offset:node.end_offset + 1]
        for child in tree.children(handle):
            local = replace_between(
                local,
                child.start_offset - node.start_offset,
                child.end_offset - node.start_offset,
            )
        return local

    def _extract_scope(
        self,
        tree: ScopeTree,
        handle: int,
        text: str,
        inherited: Set[str],
    ) -> Tuple[List[Symbol], List[Diagnostic]]:
        node = tree.node(handle)
        local_text = self._scope_text(tree, handle, text)
        source = self.dialect.source

        symbols: List[Symbol] = []
        local_names: Set[str] = set()
        diagnostics: List[Diagnostic] = []

        for match in self.dialect.declaration_pattern.finditer(local_text):
            start, end = self._document_span(
                node.start_offset + match.start(),
                node.start_offset + match.end(),
            )

            for name in declared_names(match.group(0), self.dialect):
                if self.dialect.pointer_marker in name:
                    diagnostics.append(error(
                        start, end, "Pointers are not allowed in RoN script.",
                        DiagnosticKind.DECLARATION, source,
                    ))
                elif self.dialect.is_type_keyword(name):
                    diagnostics.append(error(
                        start, end, f"Can't have name {name}, reserved keyword",
                        DiagnosticKind.DECLARATION, source,
                    ))
                elif name in local_names or name in inherited:
                    diagnostics.append(error(
                        start, end, f"{name} is already declared",
                        DiagnosticKind.DECLARATION, source,
                    ))
                else:
                    local_names.add(name)
                    symbols.append(Symbol(name, SymbolKind.VARIABLE, start, end - start))

        node.symbols = symbols
        if symbols:
            logger.debug(
                "scope [%d, %d] declares %s",
                node.start_offset, node.end_offset, ", ".join(s.name for s in symbols),
            )
        return symbols, diagnostics
