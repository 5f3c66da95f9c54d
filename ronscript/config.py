"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Editor settings (`bhs.validationMethod`, applied at runtime)
  2. Environment variables
  3. Project config (.ronscript/config.yaml)
  4. User config (~/.ronscript/config.yaml)
  5. Defaults
"""

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


VALIDATION_TRIGGERS = ("change", "save")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Section the editor extension publishes its settings under
CLIENT_SECTION = "bhs"


@dataclass
class ValidationConfig:
    """When documents are validated."""
    trigger: str = "change"  # "change" | "save"

    @property
    def on_change(self) -> bool:
        return self.trigger == "change"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.trigger not in VALIDATION_TRIGGERS:
            return f"Unknown validation trigger '{self.trigger}'. Valid: {', '.join(VALIDATION_TRIGGERS)}"
        return None


@dataclass
class CatalogConfig:
    """Where the static function database comes from."""
    functions_path: Optional[str] = None  # None = bundled database

    def validate(self) -> Optional[str]:
        if self.functions_path and not Path(self.functions_path).expanduser().exists():
            return f"Function database not found: {self.functions_path}"
        return None


@dataclass
class HoverConfig:
    """Documentation shown when hovering plain symbols."""
    symbols: Dict[str, str] = field(default_factory=dict)

    def validate(self) -> Optional[str]:
        if not isinstance(self.symbols, dict):
            return "hover.symbols must be a mapping of name to markdown"
        return None


@dataclass
class LoggingConfig:
    """Server log verbosity (logs go to stderr)."""
    level: str = "INFO"

    def validate(self) -> Optional[str]:
        if self.level.upper() not in LOG_LEVELS:
            return f"Unknown log level '{self.level}'. Valid: {', '.join(LOG_LEVELS)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    hover: HoverConfig = field(default_factory=HoverConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "validation": {
                "trigger": self.validation.trigger
            },
            "catalog": {
                "functions_path": self.catalog.functions_path
            },
            "hover": {
                "symbols": dict(self.hover.symbols)
            },
            "logging": {
                "level": self.logging.level
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        validation_data = data.get("validation") or {}
        catalog_data = data.get("catalog") or {}
        hover_data = data.get("hover") or {}
        logging_data = data.get("logging") or {}

        return cls(
            validation=ValidationConfig(
                trigger=validation_data.get("trigger", "change")
            ),
            catalog=CatalogConfig(
                functions_path=catalog_data.get("functions_path")
            ),
            hover=HoverConfig(
                symbols=dict(hover_data.get("symbols") or {})
            ),
            logging=LoggingConfig(
                level=str(logging_data.get("level", "INFO")).upper()
            )
        )

    def validate(self) -> Optional[str]:
        """First error of any section, or None."""
        for section in (self.validation, self.catalog, self.hover, self.logging):
            error = section.validate()
            if error:
                return error
        return None

    def apply_client_settings(self, settings: Any) -> bool:
        """
        Apply settings pushed by the editor.

        Accepts either `{"bhs": {...}}` or the bare section. A boolean
        `validationMethod` selects change-triggered (true) or
        save-triggered (false) validation.

        Returns:
            True if the validation trigger changed
        """
        if not isinstance(settings, dict):
            return False
        section = settings.get(CLIENT_SECTION, settings)
        if not isinstance(section, dict):
            return False

        method = section.get("validationMethod")
        if not isinstance(method, bool):
            return False

        trigger = "change" if method else "save"
        changed = trigger != self.validation.trigger
        self.validation.trigger = trigger
        return changed


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment variables
      2. Project config (.ronscript/config.yaml)
      3. User config (~/.ronscript/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".ronscript"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".ronscript"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def _read(self, path: Path) -> Dict[str, Any]:
        """Read one config file; malformed files are logged and skipped."""
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: top level must be a mapping", path)
            return {}
        return data

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        if os.environ.get("RONSCRIPT_VALIDATION_TRIGGER"):
            config_data.setdefault("validation", {})["trigger"] = os.environ["RONSCRIPT_VALIDATION_TRIGGER"]
        if os.environ.get("RONSCRIPT_FUNCTIONS"):
            config_data.setdefault("catalog", {})["functions_path"] = os.environ["RONSCRIPT_FUNCTIONS"]
        if os.environ.get("RONSCRIPT_LOG_LEVEL"):
            config_data.setdefault("logging", {})["level"] = os.environ["RONSCRIPT_LOG_LEVEL"]

        self._config = Config.from_dict(config_data)
        return self._config

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self.project_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.project_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self.user_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.user_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "validation.trigger")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        config = self.load()

        parts = key.split(".", 1)
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'validation.trigger')"

        section, setting = parts

        if section == "validation":
            if setting != "trigger":
                return f"Unknown validation setting: {setting}. Valid: trigger"
            config.validation.trigger = value
            error = config.validation.validate()

        elif section == "catalog":
            if setting != "functions_path":
                return f"Unknown catalog setting: {setting}. Valid: functions_path"
            config.catalog.functions_path = value or None
            error = config.catalog.validate()

        elif section == "logging":
            if setting != "level":
                return f"Unknown logging setting: {setting}. Valid: level"
            config.logging.level = value.upper()
            error = config.logging.validate()

        elif section == "hover":
            # hover.<symbol name> = markdown
            config.hover.symbols[setting] = value
            error = config.hover.validate()

        else:
            return f"Unknown section: {section}. Valid: validation, catalog, hover, logging"

        if error:
            self._config = None  # drop the invalid in-memory change
            return error

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)

        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        config = self.load()

        parts = key.split(".", 1)
        if len(parts) != 2:
            return None

        section, setting = parts

        if section == "validation" and setting == "trigger":
            return config.validation.trigger
        elif section == "catalog" and setting == "functions_path":
            return config.catalog.functions_path
        elif section == "logging" and setting == "level":
            return config.logging.level
        elif section == "hover":
            return config.hover.symbols.get(setting)

        return None

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()

        lines = [
            "Configuration:",
            "",
            "Validation:",
            f"  Trigger: {config.validation.trigger}",
            "",
            "Catalog:",
            f"  Functions: {config.catalog.functions_path or '(bundled)'}",
            "",
            "Hover:",
            f"  Documented symbols: {len(config.hover.symbols)}",
            "",
            "Logging:",
            f"  Level: {config.logging.level}",
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ]

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
