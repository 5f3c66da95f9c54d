"""
Tests for Brackets — Structural validation and scope nesting

These tests validate:
- Unmatched closers, mismatched pairs and unclosed openers
- Diagnostic anchoring and severity
- Scope tree shape built from braces
"""

from ronscript.core.brackets import build_scope_tree, validate_brackets
from ronscript.core.diagnostics import DiagnosticKind, Severity
from ronscript.core.scope import ROOT


class TestValidateBrackets:
    """Bracket structure diagnostics."""

    def test_balanced_text(self):
        """Balanced nesting of all three kinds reports nothing."""
        assert validate_brackets("{ ( [ ] ) }") == []

    def test_stray_closer_is_error_at_closer(self):
        """A closer with nothing open is an error at the closer."""
        diagnostics = validate_brackets("a }")
        assert len(diagnostics) == 1
        assert diagnostics[0].severity == Severity.ERROR
        assert (diagnostics[0].start, diagnostics[0].end) == (2, 3)
        assert diagnostics[0].message == "No matching bracket for character }"

    def test_mismatch_is_error_at_opener(self):
        """A closer of the wrong kind is reported at the opener."""
        diagnostics = validate_brackets("( }")
        assert len(diagnostics) == 1
        assert diagnostics[0].is_error
        assert (diagnostics[0].start, diagnostics[0].end) == (0, 1)
        assert diagnostics[0].message == "No matching bracket for character }"

    def test_unclosed_openers_are_warnings(self):
        """Every opener left open gets a warning at its position."""
        diagnostics = validate_brackets("{ {")
        assert [d.severity for d in diagnostics] == [Severity.WARNING, Severity.WARNING]
        assert [d.start for d in diagnostics] == [0, 2]
        assert diagnostics[0].message == "No matching bracket for character {"

    def test_kind_and_source(self):
        """Bracket diagnostics are structural and carry the source tag."""
        diagnostic = validate_brackets("]", source="ronscript")[0]
        assert diagnostic.kind == DiagnosticKind.STRUCTURAL
        assert diagnostic.source == "ronscript"


class TestBuildScopeTree:
    """Scope nesting from braces."""

    def test_root_spans_document(self):
        """The synthetic root covers [0, length]."""
        tree = build_scope_tree("int a;")
        assert (tree.root.start_offset, tree.root.end_offset) == (0, 6)
        assert tree.root.children == []

    def test_nested_children_ordered(self):
        """Children are attached under their enclosing scope in document order."""
        tree = build_scope_tree("{ { } { } }")
        assert len(tree.forest) == 1
        outer_handle = tree.root.children[0]
        outer = tree.node(outer_handle)
        assert (outer.start_offset, outer.end_offset) == (0, 10)
        assert [c.start_offset for c in tree.children(outer_handle)] == [2, 6]

    def test_parents_recorded(self):
        """Every node knows its parent handle."""
        tree = build_scope_tree("{ { } }")
        outer_handle = tree.root.children[0]
        inner_handle = tree.node(outer_handle).children[0]
        assert tree.node(inner_handle).parent == outer_handle
        assert tree.node(outer_handle).parent == ROOT

    def test_top_level_forest(self):
        """Sibling top-level scopes are all children of the root."""
        tree = build_scope_tree("{ } { }")
        assert [n.start_offset for n in tree.forest] == [0, 4]

    def test_stray_closer_ignored(self):
        """A `}` with nothing open does not create a scope."""
        tree = build_scope_tree("} { }")
        assert len(tree.forest) == 1
        assert tree.forest[0].start_offset == 2
