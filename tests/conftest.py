"""
Shared pytest fixtures for the ronscript test suite.

Usage in tests:
    def test_something(analyze):
        analysis = analyze("int a; int a;")
        assert analysis.errors

    def test_server(server):
        server.validate("file:///map.bhs", "scenario main() { }")
        assert server.published
"""

import logging

import pytest

from ronscript.core.parsing.dialects import RON_DIALECT
from tests.factories import ScriptFactory


@pytest.fixture
def dialect():
    """The RoN script dialect every document is analyzed with."""
    return RON_DIALECT


@pytest.fixture
def script_factory(tmp_path):
    """
    Create a ScriptFactory rooted at a temporary directory.

    Use this when a test needs script files on disk, a project config,
    or its own server instance.
    """
    return ScriptFactory(tmp_path)


@pytest.fixture
def analyze(script_factory):
    """
    Run one validation pass over a text.

    Example:
        def test_duplicate(analyze):
            analysis = analyze("int a; int a;")
            assert analysis.errors[0].message == "a is already declared"
    """
    return script_factory.analyze


@pytest.fixture
def catalog(script_factory):
    """Function catalog built from the bundled database."""
    return script_factory.catalog


@pytest.fixture
def server(script_factory):
    """
    Language server with default configuration whose published
    diagnostics are recorded in `server.published`.
    """
    return script_factory.create_server()


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """
    Keep user config and RONSCRIPT_* variables out of every test, and
    undo the stderr handler the CLI installs on the package logger.
    """
    from ronscript.config import ConfigManager

    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", tmp_path / "home" / ".ronscript" / "config.yaml")
    for name in ("RONSCRIPT_VALIDATION_TRIGGER", "RONSCRIPT_FUNCTIONS", "RONSCRIPT_LOG_LEVEL", "RONSCRIPT_PROJECT_PATH"):
        monkeypatch.delenv(name, raising=False)

    yield

    package_logger = logging.getLogger("ronscript")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
