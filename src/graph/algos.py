"""Graph algorithms for codemap-core."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.nodes import FileNode, SymbolNode, is_file_id

if TYPE_CHECKING:
    from collections.abc import Iterator

    from graph.store import NodeStore


def build_file_graph(file_nodes: list[FileNode]) -> dict[str, list[str]]:
    """Build the file-to-file adjacency list.

    Args:
        file_nodes: Linked file nodes

    Returns:
        Mapping of file identifier to the file identifiers it depends on,
        restricted to targets that are themselves in ``file_nodes``.
    """
    known = {node.unique_id for node in file_nodes}
    return {
        node.unique_id: list(
            dict.fromkeys(
                dep for dep in node.dependencies if is_file_id(dep) and dep in known
            )
        )
        for node in file_nodes
    }


class _TarjanState:
    """Mutable state container for Tarjan's SCC algorithm."""

    def __init__(self) -> None:
        self.index = 0
        self.indices: dict[str, int] = {}
        self.low_link: dict[str, int] = {}
        self.on_stack: set[str] = set()
        self.stack: list[str] = []
        self.sccs: list[list[str]] = []

    def visit(self, node: str) -> None:
        self.indices[node] = self.index
        self.low_link[node] = self.index
        self.index += 1
        self.stack.append(node)
        self.on_stack.add(node)

    def extract_scc(self, root: str) -> list[str]:
        scc: list[str] = []
        while self.stack:
            member = self.stack.pop()
            self.on_stack.remove(member)
            scc.append(member)
            if member == root:
                break
        if root not in scc:
            msg = (
                f"Tarjan algorithm invariant violated: root node {root!r} "
                "not found in stack during SCC extraction."
            )
            raise RuntimeError(msg)
        return scc


def _strongconnect(start: str, graph: dict[str, list[str]], state: _TarjanState) -> None:
    """Process one DFS tree of Tarjan's algorithm with an explicit stack."""
    state.visit(start)
    work: list[tuple[str, Iterator[str]]] = [(start, iter(graph.get(start, ())))]

    while work:
        node, neighbors = work[-1]
        advanced = False
        for neighbor in neighbors:
            if neighbor not in state.indices:
                state.visit(neighbor)
                work.append((neighbor, iter(graph.get(neighbor, ()))))
                advanced = True
                break
            if neighbor in state.on_stack:
                state.low_link[node] = min(state.low_link[node], state.indices[neighbor])
        if advanced:
            continue

        work.pop()
        if work:
            parent = work[-1][0]
            state.low_link[parent] = min(state.low_link[parent], state.low_link[node])

        if state.low_link[node] == state.indices[node]:
            scc = state.extract_scc(node)
            if len(scc) > 1 or node in graph.get(node, ()):
                state.sccs.append(scc)


def find_cycles(graph: dict[str, list[str]]) -> list[list[str]]:
    """Find cycles in a directed graph using Tarjan's algorithm.

    Each node is processed once; traversal uses an explicit stack, so chain
    depth is not limited by the interpreter recursion limit.

    Args:
        graph: Dictionary representing the graph

    Returns:
        List of cycles (strongly connected components with more than one
        node, or a self loop), each a list of nodes
    """
    state = _TarjanState()

    for node in graph:
        if node not in state.indices:
            _strongconnect(node, graph, state)

    return state.sccs


def mark_cyclic_files(store: NodeStore) -> list[list[str]]:
    """Flag every file that takes part in a dependency cycle.

    Returns:
        The cycles found, as lists of file identifiers.
    """
    file_nodes = store.file_nodes()
    cycles = find_cycles(build_file_graph(file_nodes))
    cyclic = {member for cycle in cycles for member in cycle}
    for node in file_nodes:
        node.is_cyclic = node.unique_id in cyclic
    return cycles


def coupling(node: FileNode, known_files: set[str] | None = None) -> tuple[int, int]:
    """Return (afferent, efferent) file-level coupling counts.

    When ``known_files`` is given, edges to other identifiers are skipped.
    """

    def counts(unique_id: str) -> bool:
        return is_file_id(unique_id) and (
            known_files is None or unique_id in known_files
        )

    afferent = sum(1 for dep in node.dependents if counts(dep))
    efferent = sum(1 for dep in node.dependencies if counts(dep))
    return afferent, efferent


def compute_instability(store: NodeStore) -> None:
    """Set instability = Ce / (Ca + Ce) on every file node (0 when isolated)."""
    file_nodes = store.file_nodes()
    known_files = {node.unique_id for node in file_nodes}
    for node in file_nodes:
        afferent, efferent = coupling(node, known_files)
        total = afferent + efferent
        node.instability = 0.0 if total == 0 else efferent / total


def mark_unused_exports(store: NodeStore) -> None:
    """Flag exported symbols that no other file depends on.

    Dependents missing from the store are skipped.
    """
    for node in store.symbol_nodes():
        if not node.is_exported:
            continue
        external_use = False
        for dependent_id in node.dependents:
            dependent = store.get(dependent_id)
            if isinstance(dependent, (FileNode, SymbolNode)) and dependent.path != node.path:
                external_use = True
                break
        node.is_unused = not external_use


def annotate_graph(store: NodeStore) -> list[list[str]]:
    """Run every derived analysis over a fully linked store."""
    mark_unused_exports(store)
    compute_instability(store)
    return mark_cyclic_files(store)


__all__ = [
    "annotate_graph",
    "build_file_graph",
    "compute_instability",
    "coupling",
    "find_cycles",
    "mark_cyclic_files",
    "mark_unused_exports",
]
