"""
ronscript — Language tooling for Rise of Nations scenario scripts

Completion, hover and diagnostics for `.bhs` scripts, served over the
Language Server Protocol or run from the command line.

Usage:
    ronscript serve
    ronscript check maps/coast.bhs
    ronscript config --set validation.trigger=save
"""

__version__ = "0.1.0"

# Core layer (analysis)
from .core.analysis import DocumentAnalysis, analyze_document
from .core.diagnostics import Diagnostic, DiagnosticKind, Severity
from .core.scope import ScopeTree, ScopeNode
from .core.symbols import Symbol, SymbolKind
from .core.functions import DocumentFunction
from .core.store import AnalysisStore
from .core.parsing import DialectConfig, DialectRegistry
from .core.parsing.dialects import RON_DIALECT

# Services layer
from .services.catalog import FunctionCatalog, FunctionSignature, load_function_database

# Config (stays at root)
from .config import Config, ConfigManager, get_config

__all__ = [
    # Core
    'DocumentAnalysis', 'analyze_document',
    'Diagnostic', 'DiagnosticKind', 'Severity',
    'ScopeTree', 'ScopeNode',
    'Symbol', 'SymbolKind',
    'DocumentFunction',
    'AnalysisStore',
    'DialectConfig', 'DialectRegistry', 'RON_DIALECT',
    # Services
    'FunctionCatalog', 'FunctionSignature', 'load_function_database',
    # Config
    'Config', 'ConfigManager', 'get_config',
]
