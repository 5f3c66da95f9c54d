"""
Function Catalog — Static completion entries

Built once at startup from the dialect's keywords and the function
database, then only read. Every entry is an LSP completion item whose
`data` is its index into a parallel detail table; the detail table holds
what completionItem/resolve fills in (detail line and markdown docs).

Database format (YAML or JSON), an ordered list of records:

    - name: Rand
      arguments:
        - {name: max, type: int}
      return: {name: value, type: int}
      description: Random number below max.
      notes: ""
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import orjson
import yaml
from lsprotocol import types as lsp

from ..core.parsing.config import DialectConfig

logger = logging.getLogger(__name__)


DEFAULT_DATABASE = Path(__file__).resolve().parent.parent / "data" / "functions.yaml"


@dataclass(frozen=True)
class Argument:
    """One parameter of a database function."""
    name: str
    type: str = ""


@dataclass(frozen=True)
class FunctionSignature:
    """A function of the scripting runtime, as described by the database."""
    name: str
    arguments: Tuple[Argument, ...] = ()
    return_name: Optional[str] = None
    return_type: Optional[str] = None
    description: str = ""
    notes: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FunctionSignature':
        """
        Create from a database record.

        Raises:
            ValueError: If the record has no name or malformed arguments
        """
        if not isinstance(data, dict) or not data.get("name"):
            raise ValueError(f"Function record without a name: {data!r}")

        arguments = []
        for arg in data.get("arguments") or []:
            if not isinstance(arg, dict) or "name" not in arg:
                raise ValueError(f"Malformed argument in {data['name']}: {arg!r}")
            arguments.append(Argument(name=str(arg["name"]), type=str(arg.get("type") or "")))

        returns = data.get("return") or {}
        if not isinstance(returns, dict):
            raise ValueError(f"Malformed return in {data['name']}: {returns!r}")

        return cls(
            name=str(data["name"]),
            arguments=tuple(arguments),
            return_name=returns.get("name"),
            return_type=returns.get("type"),
            description=data.get("description") or "",
            notes=data.get("notes") or "",
        )

    @property
    def label(self) -> str:
        return f"{self.name}({', '.join(a.name for a in self.arguments)})"

    @property
    def snippet(self) -> str:
        placeholders = [f"${{{i}:{a.name}}}" for i, a in enumerate(self.arguments, start=1)]
        return f"{self.name}({', '.join(placeholders)})"

    @property
    def detail(self) -> str:
        """`(function) Rand(max: int): int`"""
        args = [f"{a.name}: {a.type}" if a.type else a.name for a in self.arguments]
        detail = f"(function) {self.name}({', '.join(args)})"
        if self.return_type is not None:
            detail += f": {self.return_type}"
        elif self.return_name is not None:
            detail += ": free"
        return detail

    @property
    def documentation(self) -> str:
        """Markdown: description, notes, then @param and @return lines."""
        paragraphs = [p for p in (self.description, self.notes) if p]
        block = ""

        params = [
            f"_@param_ `{a.type}` `{a.name}`" if a.type else f"_@param_ `{a.name}`"
            for a in self.arguments
        ]
        if params:
            block += "\n\n" + "  \n".join(params)

        if self.return_name is not None:
            if self.return_type is not None:
                block += f"\n\n_@return_ `{self.return_type}` `{self.return_name}`"
            else:
                block += f"\n\n_@return_ `{self.return_name}`"

        return "\n\n".join(paragraphs) + block


@dataclass(frozen=True)
class CompletionDetail:
    """What completionItem/resolve adds to a static entry."""
    detail: str
    documentation: str = ""

    def markup(self) -> lsp.MarkupContent:
        return lsp.MarkupContent(kind=lsp.MarkupKind.Markdown, value=self.documentation)


def load_function_database(path: Optional[Path] = None) -> List[FunctionSignature]:
    """
    Load the function database.

    Args:
        path: `.json` or `.yaml`/`.yml` file; the bundled database when None

    Raises:
        ValueError: If the file is not a list of valid function records
        OSError: If the file cannot be read
    """
    path = Path(path) if path else DEFAULT_DATABASE

    if path.suffix.lower() == ".json":
        records = orjson.loads(path.read_bytes())
    else:
        records = yaml.safe_load(path.read_text(encoding="utf-8")) or []

    if not isinstance(records, list):
        raise ValueError(f"Function database {path} must contain a list of records")

    signatures = [FunctionSignature.from_dict(record) for record in records]
    logger.info("loaded %d function(s) from %s", len(signatures), path)
    return signatures


@dataclass
class FunctionCatalog:
    """
    Static completion entries with their parallel detail table.

    Keyword entries come first, then one entry per database function.
    """
    items: List[lsp.CompletionItem] = field(default_factory=list)
    details: List[CompletionDetail] = field(default_factory=list)
    signatures: List[FunctionSignature] = field(default_factory=list)

    @classmethod
    def build(cls, dialect: DialectConfig, signatures: List[FunctionSignature]) -> 'FunctionCatalog':
        catalog = cls(signatures=list(signatures))

        for keyword in dialect.completion_keywords:
            catalog._add(
                lsp.CompletionItem(
                    label=keyword,
                    insert_text=keyword,
                    insert_text_format=lsp.InsertTextFormat.PlainText,
                    kind=lsp.CompletionItemKind.Keyword,
                ),
                CompletionDetail(detail=f"(datatype) {keyword}"),
            )

        for signature in signatures:
            catalog._add(
                lsp.CompletionItem(
                    label=signature.label,
                    insert_text=signature.snippet,
                    insert_text_format=lsp.InsertTextFormat.Snippet,
                    kind=lsp.CompletionItemKind.Function,
                ),
                CompletionDetail(detail=signature.detail, documentation=signature.documentation),
            )

        return catalog

    def _add(self, item: lsp.CompletionItem, detail: CompletionDetail) -> None:
        item.data = len(self.items)
        self.items.append(item)
        self.details.append(detail)

    def detail(self, index: Any) -> Optional[CompletionDetail]:
        """Detail for an item's `data`, or None if it is not a catalog index."""
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if 0 <= index < len(self.details):
            return self.details[index]
        return None

    def find_function(self, prefix: str) -> Optional[lsp.CompletionItem]:
        """First database function whose label starts with prefix."""
        if not prefix:
            return None
        return next(
            (
                item for item in self.items
                if item.kind == lsp.CompletionItemKind.Function and item.label.startswith(prefix)
            ),
            None,
        )

    def __len__(self) -> int:
        return len(self.items)
