"""
Server — RoN script language server over LSP

Wires the analysis pipeline into pygls:

- didOpen / didChange / didSave: run a validation pass, publish diagnostics
  (change or save, depending on the configured trigger)
- didClose: forget the document, clear its diagnostics
- didChangeConfiguration: pick up `bhs.validationMethod`, revalidate
- completion + completionItem/resolve, hover

Handler logic lives on RonScriptServer and takes document text explicitly;
the registered features only fetch text from the workspace and convert
LSP positions to offsets.
"""

import logging
from typing import Dict, List, Optional

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer
from pygls.workspace import PositionCodec

from . import __version__
from .config import Config
from .core.analysis import DocumentAnalysis, analyze_document
from .core.diagnostics import Diagnostic, Severity
from .core.parsing import DialectRegistry
from .core.parsing.dialects import RON_DIALECT
from .core.store import AnalysisStore
from .core.text import position_at
from .services.catalog import FunctionCatalog, load_function_database
from .services.completion import complete, resolve
from .services.hover import SymbolDoc, hover, symbol_docs_from_mapping

logger = logging.getLogger(__name__)


SEVERITIES = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
}


def to_lsp_diagnostic(
    text: str,
    diagnostic: Diagnostic,
    codec: Optional[PositionCodec] = None,
) -> lsp.Diagnostic:
    """
    Convert an offset-based diagnostic to an LSP diagnostic for `text`.

    Characters are counted in the client's position encoding (UTF-16
    unless the client negotiated another one).
    """
    codec = codec or PositionCodec()
    lines = text.split("\n")

    def client_position(offset: int) -> lsp.Position:
        line, character = position_at(text, offset)
        return codec.position_to_client_units(lines, lsp.Position(line=line, character=character))

    return lsp.Diagnostic(
        range=lsp.Range(
            start=client_position(diagnostic.start),
            end=client_position(diagnostic.end),
        ),
        message=diagnostic.message,
        severity=SEVERITIES[diagnostic.severity],
        source=diagnostic.source,
    )


class RonScriptServer(LanguageServer):
    """
    Language server state.

    Attributes:
        config: Loaded configuration (trigger may change at runtime)
        catalog: Static completion entries, built once
        registry: Dialect routing by document extension
        store: Latest validation results per document URI
        symbol_docs: Hover documentation for plain symbols
        position_codec: Client position encoding, negotiated on initialize
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        catalog: Optional[FunctionCatalog] = None,
        registry: Optional[DialectRegistry] = None,
        **kwargs,
    ):
        kwargs.setdefault("text_document_sync_kind", lsp.TextDocumentSyncKind.Incremental)
        super().__init__("ronscript", __version__, **kwargs)
        self.config = config or Config()
        self.registry = registry or DialectRegistry(default=RON_DIALECT)
        if catalog is None:
            path = self.config.catalog.functions_path
            catalog = FunctionCatalog.build(RON_DIALECT, load_function_database(path))
        self.catalog = catalog
        self.store = AnalysisStore()
        self.symbol_docs: List[SymbolDoc] = symbol_docs_from_mapping(self.config.hover.symbols)
        self.position_codec = PositionCodec()

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self, uri: str, text: str) -> Optional[DocumentAnalysis]:
        """Run a validation pass for a document and publish its diagnostics."""
        dialect = self.registry.get_config_for_uri(uri)
        if dialect is None:
            logger.debug("no dialect for %s; not validating", uri)
            return None

        analysis = analyze_document(text, dialect)
        self.store.update(uri, analysis)
        self.text_document_publish_diagnostics(
            lsp.PublishDiagnosticsParams(
                uri=uri,
                diagnostics=[to_lsp_diagnostic(text, d, self.position_codec) for d in analysis.diagnostics],
            )
        )
        logger.info("validated %s: %d diagnostic(s)", uri, len(analysis.diagnostics))
        return analysis

    def forget_document(self, uri: str) -> None:
        """Forget a document and clear its diagnostics."""
        self.store.discard(uri)
        self.text_document_publish_diagnostics(
            lsp.PublishDiagnosticsParams(uri=uri, diagnostics=[])
        )

    def apply_settings(self, settings, texts: Dict[str, str]) -> bool:
        """
        Apply editor settings; revalidate every open document when the
        trigger changed.

        Args:
            settings: `workspace/didChangeConfiguration` payload
            texts: Current text of each open document, keyed by URI
        """
        changed = self.config.apply_client_settings(settings)
        if changed:
            logger.info("validation trigger is now '%s'", self.config.validation.trigger)
            for uri, text in texts.items():
                self.validate(uri, text)
        return changed

    # =========================================================================
    # Requests
    # =========================================================================

    def completion_at(self, uri: str, text: str, offset: int) -> lsp.CompletionList:
        dialect = self.registry.get_config_for_uri(uri) or RON_DIALECT
        items = complete(self.catalog, self.store.declarations(uri), text, offset, dialect)
        return lsp.CompletionList(is_incomplete=False, items=items)

    def resolve_item(self, item: lsp.CompletionItem) -> lsp.CompletionItem:
        return resolve(self.catalog, item)

    def hover_at(self, uri: str, text: str, offset: int) -> Optional[lsp.Hover]:
        dialect = self.registry.get_config_for_uri(uri) or RON_DIALECT
        return hover(self.catalog, self.store.declarations(uri), self.symbol_docs, text, offset, dialect)


# =============================================================================
# Feature registration
# =============================================================================

def create_server(
    config: Optional[Config] = None,
    catalog: Optional[FunctionCatalog] = None,
    registry: Optional[DialectRegistry] = None,
) -> RonScriptServer:
    """Build a server with every feature registered."""
    return register_features(RonScriptServer(config=config, catalog=catalog, registry=registry))


def register_features(server: RonScriptServer) -> RonScriptServer:
    """Register the LSP features on a server and return it."""

    def _source(uri: str) -> str:
        return server.workspace.get_text_document(uri).source

    def _offset(uri: str, position: lsp.Position) -> int:
        return server.workspace.get_text_document(uri).offset_at_position(position)

    @server.feature(lsp.INITIALIZE)
    def initialize(ls: RonScriptServer, params: lsp.InitializeParams):
        ls.position_codec = ls.workspace.position_codec

    @server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
    def did_open(ls: RonScriptServer, params: lsp.DidOpenTextDocumentParams):
        ls.validate(params.text_document.uri, params.text_document.text)

    @server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
    def did_change(ls: RonScriptServer, params: lsp.DidChangeTextDocumentParams):
        if ls.config.validation.on_change:
            uri = params.text_document.uri
            ls.validate(uri, _source(uri))

    @server.feature(lsp.TEXT_DOCUMENT_DID_SAVE)
    def did_save(ls: RonScriptServer, params: lsp.DidSaveTextDocumentParams):
        if not ls.config.validation.on_change:
            uri = params.text_document.uri
            ls.validate(uri, _source(uri))

    @server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
    def did_close(ls: RonScriptServer, params: lsp.DidCloseTextDocumentParams):
        ls.forget_document(params.text_document.uri)

    @server.feature(lsp.WORKSPACE_DID_CHANGE_CONFIGURATION)
    def did_change_configuration(ls: RonScriptServer, params: lsp.DidChangeConfigurationParams):
        texts = {uri: _source(uri) for uri in ls.store.uris()}
        ls.apply_settings(params.settings, texts)

    @server.feature(lsp.TEXT_DOCUMENT_COMPLETION, lsp.CompletionOptions(resolve_provider=True))
    def completions(ls: RonScriptServer, params: lsp.CompletionParams):
        uri = params.text_document.uri
        return ls.completion_at(uri, _source(uri), _offset(uri, params.position))

    @server.feature(lsp.COMPLETION_ITEM_RESOLVE)
    def completion_item_resolve(ls: RonScriptServer, item: lsp.CompletionItem):
        return ls.resolve_item(item)

    @server.feature(lsp.TEXT_DOCUMENT_HOVER)
    def hovers(ls: RonScriptServer, params: lsp.HoverParams):
        uri = params.text_document.uri
        return ls.hover_at(uri, _source(uri), _offset(uri, params.position))

    return server
