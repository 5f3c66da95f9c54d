"""
ServeCommand — Run the language server

stdio by default (what editors spawn); TCP for debugging with a client
that connects to a running server.
"""

import logging

from ..commands.base import BaseCommand
from ..server import create_server

logger = logging.getLogger(__name__)


class ServeCommand(BaseCommand):
    """Starts the language server with the project configuration."""

    def serve(self, tcp: bool = False, host: str = "127.0.0.1", port: int = 2087):
        server = create_server(config=self.config, catalog=self.catalog, registry=self.registry)
        if tcp:
            logger.info("serving on %s:%d", host, port)
            server.start_tcp(host, port)
        else:
            logger.info("serving on stdio")
            server.start_io()


def register_parser(subparsers):
    """Register serve command parser."""
    p = subparsers.add_parser('serve', help='Run the language server (stdio by default)')
    p.add_argument('--tcp', action='store_true',
                   help='Listen on TCP instead of stdio')
    p.add_argument('--host', default='127.0.0.1',
                   help='TCP host (with --tcp)')
    p.add_argument('--port', type=int, default=2087,
                   help='TCP port (with --tcp)')
    return p


def handle(cli, args):
    """Handle serve command dispatch."""
    ServeCommand(cli).serve(tcp=args.tcp, host=args.host, port=args.port)
    return 0
