"""
Dialect Registry — Routes documents to dialect configurations.

Central registry that maps file extensions to DialectConfig instances.
Enables adding new dialect support without modifying core code.

Usage:
    registry = DialectRegistry()
    registry.register(RON_DIALECT)

    config = registry.get_config(Path("scenario/main.bhs"))
    # Returns RON_DIALECT
"""

from pathlib import PurePosixPath
from typing import Dict, Optional, Set
from urllib.parse import unquote, urlparse

from .config import DialectConfig


class DialectRegistry:
    """
    Registry of dialect configurations.

    Maps file extensions to DialectConfig instances for routing.
    Documents without an extension (untitled buffers) fall back to the
    default dialect; a foreign extension has no dialect.
    """

    def __init__(self, default: Optional[DialectConfig] = None):
        """
        Initialize registry.

        Args:
            default: Dialect used for documents without an extension
        """
        self._configs: Dict[str, DialectConfig] = {}  # name -> config
        self._extension_map: Dict[str, str] = {}  # ext -> config name
        self._default = default
        if default is not None:
            self.register(default)

    def register(self, config: DialectConfig) -> None:
        """
        Register a dialect configuration.

        Args:
            config: DialectConfig to register

        Raises:
            ValueError: If extension already registered to different config
        """
        for ext in config.extensions:
            ext_lower = ext.lower()
            if ext_lower in self._extension_map:
                existing = self._extension_map[ext_lower]
                if existing != config.name:
                    raise ValueError(
                        f"Extension {ext} already registered to {existing}, "
                        f"cannot register to {config.name}"
                    )

        self._configs[config.name] = config
        for ext in config.extensions:
            self._extension_map[ext.lower()] = config.name

    def unregister(self, name: str) -> bool:
        """
        Unregister a dialect configuration by name.

        Returns:
            True if unregistered, False if not found
        """
        if name not in self._configs:
            return False

        config = self._configs[name]
        for ext in config.extensions:
            ext_lower = ext.lower()
            if self._extension_map.get(ext_lower) == name:
                del self._extension_map[ext_lower]

        del self._configs[name]
        if self._default is not None and self._default.name == name:
            self._default = None
        return True

    def get_config(self, path: PurePosixPath) -> Optional[DialectConfig]:
        """
        Get dialect config for a path based on extension.

        Returns:
            DialectConfig if extension is supported, the default when the
            path has no extension, else None
        """
        if not path.suffix:
            return self._default
        config_name = self._extension_map.get(path.suffix.lower())
        if config_name:
            return self._configs[config_name]
        return None

    def get_config_for_uri(self, uri: str) -> Optional[DialectConfig]:
        """Get dialect config for a document URI (file:// or untitled:)."""
        parsed = urlparse(uri)
        if parsed.scheme == "untitled":
            return self._default
        return self.get_config(PurePosixPath(unquote(parsed.path or uri)))

    def get_config_by_name(self, name: str) -> Optional[DialectConfig]:
        """Get dialect config by name."""
        return self._configs.get(name)

    def supported_extensions(self) -> Set[str]:
        """Get all supported file extensions."""
        return set(self._extension_map.keys())

    def __len__(self) -> int:
        return len(self._configs)

    def __contains__(self, name: str) -> bool:
        return name in self._configs
