"""
Core — Analysis layer

Contains the document analysis pipeline:
- Text: Length-preserving masking and offset/position conversion
- Brackets: Structural validation and scope nesting
- Scope: Arena-backed scope tree
- Symbols: Scoped variable extraction
- Functions: Document functions and labels
- Analysis: One validation pass over a document
- Store: Per-document validation state
- Cursor: Completion token and hover target under the cursor
"""

from .text import (
    replace_between, strip_comments, rewrite_function_headers, shifted_parameter_spans,
    position_at, offset_at,
)
from .diagnostics import Diagnostic, DiagnosticKind, Severity
from .brackets import validate_brackets, build_scope_tree
from .scope import ROOT, ScopeNode, ScopeTree
from .symbols import Symbol, SymbolKind, SymbolExtractor, declared_names
from .functions import DocumentFunction, extract_functions, extract_labels
from .analysis import DocumentAnalysis, analyze_document
from .store import AnalysisStore, DocumentState
from .cursor import CursorTarget, TargetKind, completion_token, hover_target

__all__ = [
    # Text
    "replace_between", "strip_comments", "rewrite_function_headers", "shifted_parameter_spans",
    "position_at", "offset_at",
    # Diagnostics
    "Diagnostic", "DiagnosticKind", "Severity",
    # Structure
    "validate_brackets", "build_scope_tree",
    "ROOT", "ScopeNode", "ScopeTree",
    # Declarations
    "Symbol", "SymbolKind", "SymbolExtractor", "declared_names",
    "DocumentFunction", "extract_functions", "extract_labels",
    # Analysis
    "DocumentAnalysis", "analyze_document",
    "AnalysisStore", "DocumentState",
    # Cursor
    "CursorTarget", "TargetKind", "completion_token", "hover_target",
]
