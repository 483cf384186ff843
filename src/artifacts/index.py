"""Lookup index over an analyzed project tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.nodes import DirectoryNode, FileNode

if TYPE_CHECKING:
    from collections.abc import Iterator

    from artifacts.models.nodes import AnyNode

MIN_SEARCH_LENGTH = 2


def iter_tree(root: DirectoryNode) -> Iterator[AnyNode]:
    """Yield ``root`` and every descendant in depth-first pre-order."""
    stack: list[AnyNode] = [root]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, (DirectoryNode, FileNode)):
            stack.extend(reversed(node.children))


class NodeIndex:
    """Identifier and name index for inspection layers."""

    def __init__(self, root: DirectoryNode) -> None:
        self.root = root
        self._by_id: dict[str, AnyNode] = {}
        for node in iter_tree(root):
            self._by_id.setdefault(node.unique_id, node)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, unique_id: object) -> bool:
        return unique_id in self._by_id

    def get(self, unique_id: str) -> AnyNode | None:
        return self._by_id.get(unique_id)

    def search(self, term: str) -> list[AnyNode]:
        """Return file and symbol nodes whose name contains ``term``.

        Matching is case-insensitive; terms shorter than two characters
        match nothing.
        """
        needle = term.strip().casefold()
        if len(needle) < MIN_SEARCH_LENGTH:
            return []
        return [
            node
            for node in self._by_id.values()
            if not isinstance(node, DirectoryNode) and needle in node.name.casefold()
        ]


__all__ = ["MIN_SEARCH_LENGTH", "NodeIndex", "iter_tree"]
