"""
ConfigCommand — Configuration display and changes
"""

import sys

from ..commands.base import BaseCommand


class ConfigCommand(BaseCommand):
    """Shows or changes the layered configuration."""

    def show_config(self) -> int:
        print(self.config_manager.display())
        return 0

    def set_config(self, key: str, value: str, scope: str = "project") -> int:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "validation.trigger")
            value: Value to set
            scope: "project" or "user"
        """
        error = self.config_manager.set(key, value, scope)
        if error:
            print(f"Error: {error}", file=sys.stderr)
            return 1

        print(f"Set {key} = {value} ({scope} config)")
        return 0


def register_parser(subparsers):
    """Register config command parser."""
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., validation.trigger=save)')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    """Handle config command dispatch."""
    command = ConfigCommand(cli)
    if not args.set:
        return command.show_config()

    if '=' not in args.set:
        print("Error: Use format KEY=VALUE (e.g., validation.trigger=save)", file=sys.stderr)
        return 1

    key, value = args.set.split('=', 1)
    scope = "user" if args.user else "project"
    return command.set_config(key, value, scope)
