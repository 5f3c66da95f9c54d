"""
CheckCommand — Validate script files from the command line

Runs the same validation pass the server runs on every change and prints
one line per diagnostic:

    maps/coast.bhs:12:5: error: x is already declared

Lines and columns are 1-based. Exit status is 1 when any file has an
error or cannot be read.
"""

import sys
from pathlib import Path
from typing import List

from ..commands.base import BaseCommand
from ..core.analysis import DocumentAnalysis, analyze_document
from ..core.text import position_at


def format_diagnostics(path: str, analysis: DocumentAnalysis) -> List[str]:
    """Render an analysis as `path:line:col: severity: message` lines."""
    lines = []
    for diagnostic in analysis.diagnostics:
        line, character = position_at(analysis.text, diagnostic.start)
        lines.append(f"{path}:{line + 1}:{character + 1}: {diagnostic.severity.value}: {diagnostic.message}")
    return lines


class CheckCommand(BaseCommand):
    """Validates files and reports their diagnostics."""

    def check(self, paths: List[str]) -> int:
        """
        Validate each file.

        Returns:
            Exit status: 0 when no errors were found, 1 otherwise
        """
        failed = False

        for path in paths:
            file_path = Path(path)
            try:
                text = file_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                print(f"{path}: error: cannot read file ({e})", file=sys.stderr)
                failed = True
                continue

            dialect = self.registry.get_config(file_path)
            if dialect is None:
                expected = ", ".join(sorted(self.registry.supported_extensions()))
                print(f"{path}: error: unsupported file type (expected {expected})", file=sys.stderr)
                failed = True
                continue

            analysis = analyze_document(text, dialect)
            for line in format_diagnostics(path, analysis):
                print(line)
            if analysis.errors:
                failed = True

        return 1 if failed else 0


def register_parser(subparsers):
    """Register check command parser."""
    p = subparsers.add_parser('check', help='Validate script files and print diagnostics')
    p.add_argument('files', nargs='+', metavar='FILE',
                   help='Script files to validate')
    return p


def handle(cli, args):
    """Handle check command dispatch."""
    return CheckCommand(cli).check(args.files)
