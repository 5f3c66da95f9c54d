"""
AnalysisStore — Per-document validation state

Keeps, for every open document URI, the result of its latest validation
pass. Each pass replaces the entry wholesale; documents never see each
other's scopes, functions or labels.

While a document's bracket structure is broken, completion keeps serving
the declarations of its last structurally sound pass.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from .analysis import DocumentAnalysis


@dataclass
class DocumentState:
    """Latest pass and last structurally sound pass of one document."""
    latest: DocumentAnalysis
    last_good: Optional[DocumentAnalysis] = None

    @property
    def declarations(self) -> Optional[DocumentAnalysis]:
        """The analysis completion and hover should read declarations from."""
        if self.latest.structural_ok:
            return self.latest
        return self.last_good


class AnalysisStore:
    """Validation results keyed by document URI."""

    def __init__(self):
        self._states: Dict[str, DocumentState] = {}

    def update(self, uri: str, analysis: DocumentAnalysis) -> DocumentState:
        """Record a finished pass for a document."""
        previous = self._states.get(uri)
        last_good = analysis if analysis.structural_ok else (previous.declarations if previous else None)
        state = DocumentState(latest=analysis, last_good=last_good)
        self._states[uri] = state
        return state

    def get(self, uri: str) -> Optional[DocumentState]:
        return self._states.get(uri)

    def declarations(self, uri: str) -> Optional[DocumentAnalysis]:
        state = self._states.get(uri)
        return state.declarations if state else None

    def discard(self, uri: str) -> bool:
        """Forget a document. Returns True if it was known."""
        return self._states.pop(uri, None) is not None

    def uris(self) -> Iterator[str]:
        return iter(list(self._states))

    def __contains__(self, uri: str) -> bool:
        return uri in self._states

    def __len__(self) -> int:
        return len(self._states)
