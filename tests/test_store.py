"""
Tests for AnalysisStore — Per-document validation state

These tests validate:
- Results are kept per URI and replaced wholesale
- Broken passes keep serving the last sound declarations
- Documents never see each other's state
"""

from ronscript.core.store import AnalysisStore


class TestAnalysisStore:
    """Per-URI bookkeeping."""

    def test_update_and_get(self, analyze):
        """The latest pass is stored under its URI."""
        store = AnalysisStore()
        analysis = analyze("int a;")
        store.update("file:///a.bhs", analysis)
        assert store.get("file:///a.bhs").latest is analysis
        assert "file:///a.bhs" in store
        assert len(store) == 1

    def test_unknown_uri(self):
        """Unknown documents have no state and no declarations."""
        store = AnalysisStore()
        assert store.get("file:///missing.bhs") is None
        assert store.declarations("file:///missing.bhs") is None

    def test_replaced_wholesale(self, analyze):
        """A new pass supersedes the old one."""
        store = AnalysisStore()
        store.update("file:///a.bhs", analyze("int a;"))
        second = analyze("int b;")
        store.update("file:///a.bhs", second)
        assert store.declarations("file:///a.bhs") is second

    def test_broken_pass_keeps_last_good(self, analyze):
        """Declarations come from the last structurally sound pass."""
        store = AnalysisStore()
        good = analyze("scenario main() { int a; }")
        broken = analyze("scenario main() { int a; int b;")
        store.update("file:///a.bhs", good)
        state = store.update("file:///a.bhs", broken)
        assert state.latest is broken
        assert store.declarations("file:///a.bhs") is good

    def test_repeated_broken_passes(self, analyze):
        """Several broken passes in a row still serve the same good pass."""
        store = AnalysisStore()
        good = analyze("int a;")
        store.update("file:///a.bhs", good)
        store.update("file:///a.bhs", analyze("{"))
        store.update("file:///a.bhs", analyze("{ {"))
        assert store.declarations("file:///a.bhs") is good

    def test_broken_first_pass(self, analyze):
        """A document that never parsed has no declarations."""
        store = AnalysisStore()
        store.update("file:///a.bhs", analyze("{"))
        assert store.declarations("file:///a.bhs") is None

    def test_documents_isolated(self, analyze):
        """Each URI keeps its own result."""
        store = AnalysisStore()
        first = analyze("int a;")
        second = analyze("int b;")
        store.update("file:///a.bhs", first)
        store.update("file:///b.bhs", second)
        assert store.declarations("file:///a.bhs") is first
        assert store.declarations("file:///b.bhs") is second
        assert sorted(store.uris()) == ["file:///a.bhs", "file:///b.bhs"]

    def test_discard(self, analyze):
        """Discarding forgets a document once."""
        store = AnalysisStore()
        store.update("file:///a.bhs", analyze("int a;"))
        assert store.discard("file:///a.bhs") is True
        assert store.discard("file:///a.bhs") is False
        assert len(store) == 0
