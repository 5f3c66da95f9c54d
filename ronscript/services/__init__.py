"""
Services — Editor-facing features

- Catalog: Static keywords and database functions
- Completion: Merged completion items and resolve
- Hover: Documentation for the token under the cursor
"""

from .catalog import FunctionCatalog, FunctionSignature, CompletionDetail, load_function_database
from .completion import complete, resolve
from .hover import HoverMatch, SymbolDoc, hover, lookup, symbol_docs_from_mapping

__all__ = [
    # Catalog
    "FunctionCatalog", "FunctionSignature", "CompletionDetail", "load_function_database",
    # Completion
    "complete", "resolve",
    # Hover
    "HoverMatch", "SymbolDoc", "hover", "lookup", "symbol_docs_from_mapping",
]
