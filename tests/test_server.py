"""
Tests for Server â LSP handlers with a recording publisher

These tests validate:
- Validation publishes converted diagnostics per document
- Closing clears diagnostics and state
- Editor settings switch the trigger and revalidate open documents
- Completion and hover are served from each document's own state
"""

from lsprotocol import types as lsp
from pygls.workspace import PositionCodec

from ronscript.core.diagnostics import DiagnosticKind, warning
from ronscript.server import RonScriptServer, create_server, to_lsp_diagnostic
from tests.factories import cursor


URI = "file:///maps/coast.bhs"
OTHER_URI = "file:///maps/island.bhs"


class TestDiagnosticConversion:
    """Offsets to LSP ranges."""

    def test_error_range(self, analyze):
        """Ranges are zero-based line/character pairs."""
        text = "int a;\nint a;"
        diagnostic = to_lsp_diagnostic(text, analyze(text).errors[0])
        assert diagnostic.range.start == lsp.Position(line=1, character=0)
        assert diagnostic.range.end == lsp.Position(line=1, character=5)
        assert diagnostic.severity == lsp.DiagnosticSeverity.Error
        assert diagnostic.source == "ronscript"
        assert diagnostic.message == "a is already declared"

    def test_astral_characters_use_utf16_units(self, analyze):
        """A character outside the BMP counts as two columns for the client."""
        text = "/* 😀 */ int a; int a;"
        diagnostic = to_lsp_diagnostic(text, analyze(text).errors[0])
        assert diagnostic.range.start == lsp.Position(line=0, character=16)
        assert diagnostic.range.end == lsp.Position(line=0, character=21)

    def test_negotiated_encoding(self, analyze):
        """Another negotiated encoding is honored."""
        text = "/* 😀 */ int a; int a;"
        codec = PositionCodec(lsp.PositionEncodingKind.Utf32)
        diagnostic = to_lsp_diagnostic(text, analyze(text).errors[0], codec)
        assert diagnostic.range.start.character == 15

    def test_astral_character_on_earlier_line(self, analyze):
        """Only characters on the diagnostic's own line shift its column."""
        text = "// 😀\nint a; int a;"
        diagnostic = to_lsp_diagnostic(text, analyze(text).errors[0])
        assert diagnostic.range.start == lsp.Position(line=1, character=7)

    def test_warning_severity(self):
        """Warnings keep their severity."""
        diagnostic = to_lsp_diagnostic("{", warning(0, 1, "No matching bracket for character {", DiagnosticKind.STRUCTURAL))
        assert diagnostic.severity == lsp.DiagnosticSeverity.Warning


class TestValidation:
    """Publishing diagnostics."""

    def test_validate_publishes(self, server):
        """A pass publishes every diagnostic for its URI."""
        server.validate(URI, "int a; int a;")
        published = server.last_published(URI)
        assert [d.message for d in published.diagnostics] == ["a is already declared"]
        assert URI in server.store

    def test_clean_document_publishes_empty(self, server):
        """Clean documents clear earlier diagnostics."""
        server.validate(URI, "int a; int a;")
        server.validate(URI, "int a;")
        assert server.last_published(URI).diagnostics == []

    def test_forget_document(self, server):
        """Closing drops state and publishes an empty list."""
        server.validate(URI, "int a; int a;")
        server.forget_document(URI)
        assert URI not in server.store
        assert server.last_published(URI).diagnostics == []

    def test_unsupported_document(self, server):
        """Documents of another language are not validated."""
        assert server.validate("file:///notes.txt", "int a; int a;") is None
        assert server.published == []


class TestSettings:
    """didChangeConfiguration."""

    def test_switch_to_save_revalidates(self, server):
        """A trigger change revalidates every open document."""
        server.validate(URI, "int a;")
        before = len(server.published)
        changed = server.apply_settings({"bhs": {"validationMethod": False}}, {URI: "int a; int a;"})
        assert changed is True
        assert server.config.validation.trigger == "save"
        assert len(server.published) == before + 1
        assert len(server.last_published(URI).diagnostics) == 1

    def test_same_setting_no_revalidation(self, server):
        """Unchanged settings publish nothing."""
        server.validate(URI, "int a;")
        before = len(server.published)
        assert server.apply_settings({"bhs": {"validationMethod": True}}, {URI: "int a;"}) is False
        assert len(server.published) == before


class TestRequests:
    """Completion and hover."""

    def test_completion_uses_document_scope(self, server):
        """Completion offers the variables visible at the cursor."""
        text, offset = cursor("scenario main() {\n  int score;\n  sc|\n}")
        server.validate(URI, text)
        result = server.completion_at(URI, text, offset)
        assert isinstance(result, lsp.CompletionList)
        assert [item.label for item in result.items] == ["scenario", "score"]

    def test_completion_before_validation(self, server):
        """Unvalidated documents still get catalog entries."""
        text, offset = cursor("Sq|")
        labels = [item.label for item in server.completion_at(URI, text, offset).items]
        assert labels == ["Sqrt(value)"]

    def test_completion_keeps_last_good_declarations(self, server):
        """While brackets are broken, the last sound declarations are served."""
        good = "scenario main() {\n  int score;\n" + "\n" * 10 + "}"
        server.validate(URI, good)
        broken, offset = cursor("scenario main() {\n  int score;\n  sc|\n")
        server.validate(URI, broken)
        labels = [item.label for item in server.completion_at(URI, broken, offset).items]
        assert "score" in labels

    def test_documents_isolated(self, server):
        """One document's declarations never appear in another."""
        server.validate(URI, "scenario main() { int alpha; }")
        text, offset = cursor("scenario main() { al| }")
        server.validate(OTHER_URI, text)
        labels = [item.label for item in server.completion_at(OTHER_URI, text, offset).items]
        assert "alpha" not in labels

    def test_resolve_item(self, server):
        """Resolve fills in catalog details."""
        rand = next(item for item in server.catalog.items if item.label == "Rand(max)")
        item = lsp.CompletionItem(label=rand.label, kind=rand.kind, data=rand.data)
        assert server.resolve_item(item).detail == "(function) Rand(max: int): int"

    def test_hover_document_function(self, server):
        """Hover sees functions of the document it is asked about."""
        text, offset = cursor("ai helper(int a) { }\nscenario main() { hel|per(1); }")
        server.validate(URI, text)
        result = server.hover_at(URI, text, offset)
        assert result.contents.value == "```\n(function) helper(a)\n```"

    def test_hover_configured_symbols(self, script_factory):
        """Symbol documentation comes from the hover config section."""
        from ronscript.config import Config

        config = Config()
        config.hover.symbols["PLAYER_ONE"] = "First player slot."
        server = script_factory.create_server(config)
        text, offset = cursor("x = PLAYER|_ONE;")
        assert server.hover_at(URI, text, offset).contents.value == "First player slot."


def _did_change(server, uri, text, version=2):
    server.put_document(uri, text, version)
    server.handler(lsp.TEXT_DOCUMENT_DID_CHANGE)(
        lsp.DidChangeTextDocumentParams(
            text_document=lsp.VersionedTextDocumentIdentifier(uri=uri, version=version),
            content_changes=[],
        )
    )


def _did_save(server, uri):
    server.handler(lsp.TEXT_DOCUMENT_DID_SAVE)(
        lsp.DidSaveTextDocumentParams(text_document=lsp.TextDocumentIdentifier(uri=uri))
    )


def _did_open(server, uri, text):
    server.put_document(uri, text)
    server.handler(lsp.TEXT_DOCUMENT_DID_OPEN)(
        lsp.DidOpenTextDocumentParams(
            text_document=lsp.TextDocumentItem(uri=uri, language_id="bhs", version=1, text=text)
        )
    )


class TestValidationTrigger:
    """Registered document-sync handlers and the change/save switch."""

    def _save_config(self):
        from ronscript.config import Config

        config = Config()
        config.validation.trigger = "save"
        return config

    def test_open_validates(self, script_factory):
        """didOpen validates under either trigger."""
        server = script_factory.create_lsp_server(self._save_config())
        _did_open(server, URI, "int a; int a;")
        assert len(server.last_published(URI).diagnostics) == 1

    def test_change_trigger_validates_on_change(self, script_factory):
        """With the change trigger, edits publish and saves do not."""
        server = script_factory.create_lsp_server()
        _did_open(server, URI, "int a;")
        _did_change(server, URI, "int a; int a;")
        assert [d.message for d in server.last_published(URI).diagnostics] == ["a is already declared"]

        before = len(server.published)
        _did_save(server, URI)
        assert len(server.published) == before

    def test_save_trigger_validates_on_save(self, script_factory):
        """With the save trigger, edits are silent until the document is saved."""
        server = script_factory.create_lsp_server(self._save_config())
        _did_open(server, URI, "int a;")
        before = len(server.published)
        _did_change(server, URI, "int a; int a;")
        assert len(server.published) == before

        _did_save(server, URI)
        assert len(server.published) == before + 1
        assert len(server.last_published(URI).diagnostics) == 1

    def test_settings_switch_handlers(self, script_factory):
        """didChangeConfiguration flips which handler validates."""
        server = script_factory.create_lsp_server()
        _did_open(server, URI, "int a;")
        server.handler(lsp.WORKSPACE_DID_CHANGE_CONFIGURATION)(
            lsp.DidChangeConfigurationParams(settings={"bhs": {"validationMethod": False}})
        )
        assert server.config.validation.trigger == "save"

        before = len(server.published)
        _did_change(server, URI, "int b; int b;")
        assert len(server.published) == before
        _did_save(server, URI)
        assert [d.message for d in server.last_published(URI).diagnostics] == ["b is already declared"]

    def test_close_clears(self, script_factory):
        """didClose clears the document's diagnostics."""
        server = script_factory.create_lsp_server()
        _did_open(server, URI, "int a; int a;")
        server.handler(lsp.TEXT_DOCUMENT_DID_CLOSE)(
            lsp.DidCloseTextDocumentParams(text_document=lsp.TextDocumentIdentifier(uri=URI))
        )
        assert server.last_published(URI).diagnostics == []
        assert URI not in server.store

    def test_initialize_adopts_negotiated_encoding(self, script_factory):
        """Published columns follow the encoding the workspace negotiated."""
        server = script_factory.create_lsp_server()
        server.attach_workspace(lsp.PositionEncodingKind.Utf32)
        server.handler(lsp.INITIALIZE)(lsp.InitializeParams(capabilities=lsp.ClientCapabilities()))
        server.validate(URI, "/* 😀 */ int a; int a;")
        assert server.last_published(URI).diagnostics[0].range.start.character == 15

    def test_published_columns_default_to_utf16(self, server):
        """Before negotiation, columns are UTF-16 units."""
        server.validate(URI, "/* 😀 */ int a; int a;")
        assert server.last_published(URI).diagnostics[0].range.start.character == 16


class TestCreateServer:
    """Server construction."""

    def test_create_server(self, catalog):
        """create_server returns a configured server."""
        server = create_server(catalog=catalog)
        assert isinstance(server, RonScriptServer)
        assert server.catalog is catalog
        assert server.config.validation.trigger == "change"

    def test_loads_configured_database(self, tmp_path):
        """Without a catalog the configured database is loaded."""
        from ronscript.config import Config

        path = tmp_path / "functions.yaml"
        path.write_text("- name: Ping\n  arguments: []\n", encoding="utf-8")
        config = Config()
        config.catalog.functions_path = str(path)
        server = RonScriptServer(config=config)
        assert [s.name for s in server.catalog.signatures] == ["Ping"]
