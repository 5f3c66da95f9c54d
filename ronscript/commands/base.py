"""
BaseCommand — Shared foundation for all CLI commands

Commands receive the CLI instance and access its resources through
properties instead of building their own.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..cli import RonScriptCLI


class BaseCommand:
    """Base class for CLI commands with access to shared resources."""

    def __init__(self, cli: 'RonScriptCLI'):
        """
        Initialize command with CLI instance.

        Args:
            cli: The main RonScriptCLI instance holding all resources
        """
        self._cli = cli

    # -------------------------------------------------------------------------
    # Core resources (convenience properties)
    # -------------------------------------------------------------------------

    @property
    def project_dir(self):
        """Project root directory."""
        return self._cli.project_dir

    @property
    def config_manager(self):
        """Configuration manager for the project."""
        return self._cli.config_manager

    @property
    def config(self):
        """Loaded configuration."""
        return self._cli.config

    @property
    def registry(self):
        """Dialect registry."""
        return self._cli.registry

    @property
    def catalog(self):
        """Static function catalog (built on first use)."""
        return self._cli.catalog
