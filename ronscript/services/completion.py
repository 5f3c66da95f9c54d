"""
Completion — Merge static and document-derived suggestions

The typed token before the cursor filters every source by substring:

1. catalog entries (keywords and database functions)
2. labels declared in the document
3. variables visible at the cursor (scope resolution)
4. functions declared in the document
"""

from typing import List, Optional

from lsprotocol import types as lsp

from ..core.analysis import DocumentAnalysis
from ..core.cursor import completion_token
from ..core.parsing.config import DialectConfig
from ..core.symbols import Symbol
from .catalog import FunctionCatalog


def _symbol_item(symbol: Symbol) -> lsp.CompletionItem:
    return lsp.CompletionItem(
        label=symbol.name,
        insert_text=symbol.name,
        insert_text_format=lsp.InsertTextFormat.PlainText,
        kind=lsp.CompletionItemKind.Variable,
    )


def complete(
    catalog: FunctionCatalog,
    analysis: Optional[DocumentAnalysis],
    text: str,
    offset: int,
    dialect: DialectConfig,
) -> List[lsp.CompletionItem]:
    """
    Completion items for a cursor offset.

    Args:
        catalog: Static entries
        analysis: Declarations of the document, None before its first pass
        text: Current document text
        offset: Cursor offset in `text`
        dialect: Dialect of the document
    """
    token = completion_token(text, offset, dialect)

    items = [item for item in catalog.items if token in item.label]
    if analysis is None:
        return items

    items.extend(_symbol_item(label) for label in analysis.labels if token in label.name)
    items.extend(
        _symbol_item(symbol) for symbol in analysis.visible_symbols(offset)
        if token in symbol.name
    )
    items.extend(
        lsp.CompletionItem(
            label=function.label,
            insert_text=function.snippet,
            insert_text_format=lsp.InsertTextFormat.Snippet,
            kind=lsp.CompletionItemKind.Function,
        )
        for function in analysis.functions
        if token in function.label
    )
    return items


def resolve(catalog: FunctionCatalog, item: lsp.CompletionItem) -> lsp.CompletionItem:
    """
    Fill in detail and documentation for a selected item.

    Variables get a `(variable) name` detail; catalog entries get their row
    of the detail table; anything else is returned unchanged.
    """
    if item.kind == lsp.CompletionItemKind.Variable:
        item.detail = f"(variable) {item.label}"
        item.documentation = ""
        return item

    detail = catalog.detail(item.data)
    if detail is not None:
        item.detail = detail.detail
        item.documentation = detail.markup()
    return item
