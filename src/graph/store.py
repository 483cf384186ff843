"""Keyed node store shared by the extractors, the linker and the analyzer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.nodes import FileNode, SymbolNode, symbol_id

if TYPE_CHECKING:
    from collections.abc import Iterator

    from artifacts.models.nodes import AnyNode, SourceLocation, SymbolKind


class NodeStore:
    """Identifier -> node map with first-seen-wins symbol semantics.

    Every node of a run is registered here under its unique identifier. Edge
    lists on nodes hold identifiers into this map, never node references.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, AnyNode] = {}

    def __contains__(self, unique_id: object) -> bool:
        return unique_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, unique_id: str) -> AnyNode | None:
        return self._nodes.get(unique_id)

    def add(self, node: AnyNode) -> None:
        self._nodes[node.unique_id] = node

    def nodes(self) -> Iterator[AnyNode]:
        yield from self._nodes.values()

    def file_nodes(self) -> list[FileNode]:
        return [node for node in self._nodes.values() if isinstance(node, FileNode)]

    def symbol_nodes(self) -> list[SymbolNode]:
        return [node for node in self._nodes.values() if isinstance(node, SymbolNode)]

    def upsert_symbol(
        self,
        file_node: FileNode,
        name: str,
        kind: SymbolKind,
        *,
        display_name: str | None = None,
        loc: SourceLocation | None = None,
        exported: bool = False,
        complexity: int | None = None,
    ) -> SymbolNode:
        """Insert a symbol under ``<path>:<name>`` or patch the existing one.

        An existing node keeps its name, kind and position in the file. It may
        only gain the exported flag, a location it did not have yet, or a
        complexity score.
        """
        unique_id = symbol_id(file_node.path, name)
        existing = self._nodes.get(unique_id)
        if isinstance(existing, SymbolNode):
            if exported:
                existing.is_exported = True
            if loc is not None and existing.loc is None:
                existing.loc = loc
            if complexity is not None:
                existing.cognitive_complexity = complexity
            return existing

        node = SymbolNode(
            name=display_name or name,
            kind=kind,
            path=file_node.path,
            unique_id=unique_id,
            is_exported=exported,
            loc=loc,
            cognitive_complexity=complexity,
        )
        file_node.children.append(node)
        self._nodes[unique_id] = node
        return node

    def link(self, source_id: str, target_id: str) -> bool:
        """Record ``source -> target`` on both endpoints.

        Self edges and edges touching unknown identifiers are not recorded.
        """
        if source_id == target_id:
            return False
        source = self._nodes.get(source_id)
        target = self._nodes.get(target_id)
        if not isinstance(source, (FileNode, SymbolNode)):
            return False
        if not isinstance(target, (FileNode, SymbolNode)):
            return False
        source.dependencies.append(target_id)
        target.dependents.append(source_id)
        return True

    def dedupe_edges(self) -> None:
        """Drop repeated identifiers from every edge list, keeping first order."""
        for node in self._nodes.values():
            if isinstance(node, (FileNode, SymbolNode)):
                node.dependencies = list(dict.fromkeys(node.dependencies))
                node.dependents = list(dict.fromkeys(node.dependents))


__all__ = ["NodeStore"]
