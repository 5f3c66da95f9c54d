"""
Scope — Lexical scope tree of a document

Scopes are brace-delimited regions. They are stored in an arena: every
node is addressed by an integer handle and records its parent and its
children as handles, so the tree has no reference cycles.

Handle 0 is always the synthetic document root spanning [0, length].
Its children are the top-level scopes (the scope forest).

Invariants:
- Children of a node are non-overlapping, strictly nested inside it,
  and ordered by start offset.
- `symbols` stays None until the symbol extractor visits the node.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .symbols import Symbol


ROOT = 0


@dataclass
class ScopeNode:
    """One brace-delimited scope (or the whole document for the root)."""
    start_offset: int
    end_offset: int
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    symbols: Optional[List['Symbol']] = None

    def contains(self, offset: int) -> bool:
        """Strict containment: the braces themselves are outside the scope."""
        return self.start_offset < offset < self.end_offset


class ScopeTree:
    """
    Arena of scope nodes rooted at a synthetic whole-document scope.

    Built fresh on every validation pass and never mutated once the
    pass that built it has finished.
    """

    def __init__(self, length: int):
        self.length = length
        self._nodes: List[ScopeNode] = [ScopeNode(start_offset=0, end_offset=length)]

    def add(self, start_offset: int, end_offset: int, children: Optional[List[int]] = None) -> int:
        """
        Add a closed scope and adopt the given child handles.

        The new node has no parent until it is attached.

        Returns:
            Handle of the new node
        """
        handle = len(self._nodes)
        node = ScopeNode(start_offset=start_offset, end_offset=end_offset, children=list(children or []))
        self._nodes.append(node)
        for child in node.children:
            self._nodes[child].parent = handle
        return handle

    def attach(self, parent: int, child: int) -> None:
        """Append a child handle to a parent's ordered child list."""
        self._nodes[parent].children.append(child)
        self._nodes[child].parent = parent

    def node(self, handle: int) -> ScopeNode:
        return self._nodes[handle]

    @property
    def root(self) -> ScopeNode:
        return self._nodes[ROOT]

    @property
    def forest(self) -> List[ScopeNode]:
        """Top-level scopes in document order."""
        return [self._nodes[h] for h in self.root.children]

    def children(self, handle: int) -> List[ScopeNode]:
        return [self._nodes[h] for h in self._nodes[handle].children]

    def walk(self, handle: int = ROOT) -> Iterator[int]:
        """Pre-order traversal of handles, children in document order."""
        stack = [handle]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self._nodes[current].children))

    def depth(self, handle: int) -> int:
        """Number of ancestors between a node and the root."""
        depth = 0
        parent = self._nodes[handle].parent
        while parent is not None:
            depth += 1
            parent = self._nodes[parent].parent
        return depth

    def __len__(self) -> int:
        return len(self._nodes)

    # =========================================================================
    # Resolution
    # =========================================================================

    def innermost(self, offset: int) -> List[int]:
        """
        Path of handles from the root to the innermost scope containing offset.

        Empty when the offset is outside the root (at either boundary).
        """
        path: List[int] = []
        if not self.root.contains(offset):
            return path

        current: Optional[int] = ROOT
        while current is not None:
            path.append(current)
            current = next(
                (h for h in self._nodes[current].children if self._nodes[h].contains(offset)),
                None,
            )
        return path

    def visible_symbols(self, offset: int) -> List['Symbol']:
        """
        Symbols visible at an offset.

        Ordered union of local symbol lists from the root down to the
        innermost containing scope. Sibling scopes are never visible.
        """
        visible: List['Symbol'] = []
        for handle in self.innermost(offset):
            visible.extend(self._nodes[handle].symbols or [])
        return visible

    def snapshot(self) -> list:
        """Plain structure of the whole tree, for comparisons and debugging."""
        return [
            {
                "start": n.start_offset,
                "end": n.end_offset,
                "parent": n.parent,
                "children": list(n.children),
                "symbols": [s.name for s in n.symbols] if n.symbols is not None else None,
            }
            for n in self._nodes
        ]
