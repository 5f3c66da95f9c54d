"""
Parsing module — Dialect-driven declaration recognition.

This module provides the configuration layer the extractors run on:
- DialectConfig: Per-dialect keyword sets and compiled patterns
- DialectRegistry: Extension-based routing

Design principle: Add new dialects via config, not code changes.

Usage:
    from ronscript.core.parsing import DialectRegistry
    from ronscript.core.parsing.dialects import RON_DIALECT

    registry = DialectRegistry(default=RON_DIALECT)
    config = registry.get_config_for_uri("file:///maps/coast.bhs")
"""

from .config import DialectConfig
from .registry import DialectRegistry

__all__ = [
    'DialectConfig',
    'DialectRegistry',
]
