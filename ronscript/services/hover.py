"""
Hover — Documentation for the token under the cursor

A function reference (`Rand(`) is looked up by prefix among catalog
functions, then among the document's own functions. Any other token is
looked up by prefix in the symbol documentation table, which is empty
unless configured.
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional

from lsprotocol import types as lsp

from ..core.analysis import DocumentAnalysis
from ..core.cursor import CursorTarget, TargetKind, hover_target
from ..core.parsing.config import DialectConfig
from .catalog import FunctionCatalog


@dataclass(frozen=True)
class SymbolDoc:
    """Configured documentation for a plain symbol."""
    name: str
    contents: str


@dataclass(frozen=True)
class HoverMatch:
    """
    What a hover lookup found.

    `kind` mirrors the target kind: FUNCTION matches carry function
    documentation, SYMBOL matches carry a configured symbol entry.
    """
    kind: TargetKind
    name: str
    contents: str


def symbol_docs_from_mapping(mapping: Mapping[str, str]) -> List[SymbolDoc]:
    """Symbol documentation table from `{name: markdown}` configuration."""
    return [SymbolDoc(name=str(name), contents=str(contents)) for name, contents in mapping.items()]


def _lookup_function(
    target: CursorTarget,
    catalog: FunctionCatalog,
    analysis: Optional[DocumentAnalysis],
) -> Optional[HoverMatch]:
    item = catalog.find_function(target.word)
    if item is not None:
        detail = catalog.detail(item.data)
        return HoverMatch(TargetKind.FUNCTION, item.label, detail.documentation if detail else "")

    if analysis is not None:
        for function in analysis.functions:
            if function.label.startswith(target.word):
                return HoverMatch(TargetKind.FUNCTION, function.label, f"```\n(function) {function.label}\n```")
    return None


def _lookup_symbol(target: CursorTarget, symbol_docs: List[SymbolDoc]) -> Optional[HoverMatch]:
    for doc in symbol_docs:
        if doc.name.startswith(target.word):
            return HoverMatch(TargetKind.SYMBOL, doc.name, doc.contents)
    return None


def lookup(
    target: CursorTarget,
    catalog: FunctionCatalog,
    analysis: Optional[DocumentAnalysis],
    symbol_docs: List[SymbolDoc],
) -> Optional[HoverMatch]:
    """Resolve a cursor target to documentation; empty words never match."""
    if target.is_empty:
        return None
    if target.kind == TargetKind.FUNCTION:
        return _lookup_function(target, catalog, analysis)
    if target.kind == TargetKind.SYMBOL:
        return _lookup_symbol(target, symbol_docs)
    raise ValueError(f"Unknown target kind: {target.kind}")


def hover(
    catalog: FunctionCatalog,
    analysis: Optional[DocumentAnalysis],
    symbol_docs: List[SymbolDoc],
    text: str,
    offset: int,
    dialect: DialectConfig,
) -> Optional[lsp.Hover]:
    """Hover response for a cursor offset, or None when nothing matches."""
    target = hover_target(text, offset, dialect)
    match = lookup(target, catalog, analysis, symbol_docs)
    if match is None:
        return None
    return lsp.Hover(contents=lsp.MarkupContent(kind=lsp.MarkupKind.Markdown, value=match.contents))
