"""
CLI -- Command interface

    ronscript serve              language server on stdio (editors spawn this)
    ronscript serve --tcp        language server on TCP, for debugging
    ronscript check FILE...      validate files, print diagnostics
    ronscript config             show configuration
    ronscript config --set validation.trigger=save

Logs go to stderr; stdout belongs to the LSP channel when serving.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import Config, ConfigManager
from .core.parsing import DialectRegistry
from .core.parsing.dialects import RON_DIALECT
from .services.catalog import FunctionCatalog, load_function_database
from . import __version__


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Route package logs to stderr at the given level."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("ronscript")
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.propagate = False


class RonScriptCLI:
    """Shared resources for CLI commands, created on first use."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)
        self.config_manager = ConfigManager(self.project_dir)
        self._registry: Optional[DialectRegistry] = None
        self._catalog: Optional[FunctionCatalog] = None

    @property
    def config(self) -> Config:
        return self.config_manager.load()

    @property
    def registry(self) -> DialectRegistry:
        if self._registry is None:
            self._registry = DialectRegistry(default=RON_DIALECT)
        return self._registry

    @property
    def catalog(self) -> FunctionCatalog:
        if self._catalog is None:
            signatures = load_function_database(self.config.catalog.functions_path)
            self._catalog = FunctionCatalog.build(RON_DIALECT, signatures)
        return self._catalog


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ronscript",
        description="ronscript -- Language server and checker for RoN scenario scripts",
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("RONSCRIPT_PROJECT_PATH", "."),
        help='Project directory (default: RONSCRIPT_PROJECT_PATH or current)'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'ronscript {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    from .commands import register_all
    register_all(subparsers)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the ronscript CLI.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    cli = RonScriptCLI(Path(args.project))

    error = cli.config.validate()
    setup_logging(cli.config.logging.level)
    if error:
        logging.getLogger(__name__).warning("configuration problem: %s", error)

    from .commands import dispatch
    try:
        return dispatch(args.command, cli, args) or 0
    except KeyError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_help()
        return 2


if __name__ == '__main__':
    sys.exit(main())
