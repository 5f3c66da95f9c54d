"""
Analysis — One validation pass over a document

The pass is a pure function of the document text and the dialect:

    text -> strip comments/strings
         -> validate brackets            (stop here on any problem)
         -> functions and labels         (masked text)
         -> rewrite function headers
         -> build scope tree
         -> extract scoped symbols

Nothing is shared between passes; running the same text twice yields
equal results.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .brackets import build_scope_tree, validate_brackets
from .diagnostics import Diagnostic
from .functions import DocumentFunction, extract_functions, extract_labels
from .parsing.config import DialectConfig
from .scope import ScopeTree
from .symbols import Symbol, SymbolExtractor
from .text import rewrite_function_headers, shifted_parameter_spans, strip_comments

logger = logging.getLogger(__name__)


@dataclass
class DocumentAnalysis:
    """
    Everything a validation pass learned about one document text.

    When the bracket structure is broken, `structural_ok` is False and only
    the bracket diagnostics are present; the tree is the bare root scope.
    """
    text: str
    tree: ScopeTree
    functions: List[DocumentFunction] = field(default_factory=list)
    labels: List[Symbol] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    structural_ok: bool = True

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    def visible_symbols(self, offset: int) -> List[Symbol]:
        """Variables visible at an offset of this analysis' text."""
        return self.tree.visible_symbols(offset)

    def fingerprint(self) -> dict:
        """Comparable summary of the pass result."""
        return {
            "tree": self.tree.snapshot(),
            "functions": [f.label for f in self.functions],
            "labels": [s.name for s in self.labels],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


def analyze_document(text: str, dialect: DialectConfig) -> DocumentAnalysis:
    """
    Run a full validation pass.

    Diagnostics are ordered declaration, function, then bracket findings.
    """
    masked = strip_comments(text)

    bracket_diagnostics = validate_brackets(masked, dialect.source)
    if bracket_diagnostics:
        logger.info("bracket structure broken; skipping declaration checks")
        return DocumentAnalysis(
            text=text,
            tree=ScopeTree(len(text)),
            diagnostics=bracket_diagnostics,
            structural_ok=False,
        )

    functions, function_diagnostics = extract_functions(masked, dialect)
    labels = extract_labels(masked, dialect)

    rewritten = rewrite_function_headers(masked, dialect)
    tree = build_scope_tree(rewritten)
    shifted = shifted_parameter_spans(masked, dialect)
    declaration_diagnostics = SymbolExtractor(dialect).extract(tree, rewritten, shifted)

    analysis = DocumentAnalysis(
        text=text,
        tree=tree,
        functions=functions,
        labels=labels,
        diagnostics=declaration_diagnostics + function_diagnostics,
    )
    logger.debug(
        "analysis: %d scope(s), %d function(s), %d label(s), %d diagnostic(s)",
        len(tree) - 1, len(functions), len(labels), len(analysis.diagnostics),
    )
    return analysis
