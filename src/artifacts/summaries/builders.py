"""Summary builders for artifact generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.index import iter_tree
from artifacts.models.nodes import FileNode, SymbolNode, file_path_of, is_file_id
from artifacts.models.summary import (
    AnalysisSummary,
    ComplexityHotspot,
    InstabilityHotspot,
)
from graph.algos import build_file_graph, find_cycles
from rules.languages import language_for_path

if TYPE_CHECKING:
    from artifacts.models.nodes import DirectoryNode


def file_edges(file_nodes: list[FileNode]) -> list[tuple[str, str]]:
    """Return (source path, target path) pairs of file-to-file edges."""
    edges: list[tuple[str, str]] = []
    for node in file_nodes:
        for dep in node.dependencies:
            if is_file_id(dep):
                edges.append((node.path, file_path_of(dep)))
    return edges


def compute_fan_stats(
    edges: list[tuple[str, str]],
) -> tuple[dict[str, int], dict[str, int]]:
    """Compute fan-in and fan-out statistics from edges."""
    fan_in: dict[str, int] = {}
    fan_out: dict[str, int] = {}

    for source, target in edges:
        fan_out[source] = fan_out.get(source, 0) + 1
        fan_in[target] = fan_in.get(target, 0) + 1

    return fan_in, fan_out


def build_summary(root: DirectoryNode, top_n: int = 10) -> AnalysisSummary:
    """Condense an analyzed project tree into hotspot lists.

    Args:
        root: Root node returned by ``analyze_project``
        top_n: Maximum length of the complexity and instability rankings

    Returns:
        AnalysisSummary with deterministic ordering throughout.
    """
    file_nodes: list[FileNode] = []
    symbol_nodes: list[SymbolNode] = []
    for node in iter_tree(root):
        if isinstance(node, FileNode):
            file_nodes.append(node)
        elif isinstance(node, SymbolNode):
            symbol_nodes.append(node)

    edges = file_edges(file_nodes)
    fan_in, fan_out = compute_fan_stats(edges)

    cycles = [
        sorted(file_path_of(member) for member in cycle)
        for cycle in find_cycles(build_file_graph(file_nodes))
    ]
    cycles.sort()

    languages: dict[str, int] = {}
    for file_node in file_nodes:
        language = language_for_path(file_node.path)
        if language is not None:
            languages[language.name] = languages.get(language.name, 0) + 1

    complex_symbols = sorted(
        (s for s in symbol_nodes if s.cognitive_complexity),
        key=lambda s: (-(s.cognitive_complexity or 0), s.unique_id),
    )
    most_complex = [
        ComplexityHotspot(
            unique_id=s.unique_id,
            name=s.name,
            path=s.path,
            cognitive_complexity=s.cognitive_complexity or 0,
        )
        for s in complex_symbols[:top_n]
    ]

    unstable_files = sorted(
        (f for f in file_nodes if f.instability),
        key=lambda f: (-(f.instability or 0.0), f.path),
    )
    most_unstable = [
        InstabilityHotspot(
            path=f.path,
            instability=f.instability or 0.0,
            afferent=fan_in.get(f.path, 0),
            efferent=fan_out.get(f.path, 0),
        )
        for f in unstable_files[:top_n]
    ]

    return AnalysisSummary(
        file_count=len(file_nodes),
        symbol_count=len(symbol_nodes),
        edge_count=len(edges),
        cycles=cycles,
        cyclic_files=sorted(f.path for f in file_nodes if f.is_cyclic),
        unused_exports=sorted(s.unique_id for s in symbol_nodes if s.is_unused),
        most_complex=most_complex,
        most_unstable=most_unstable,
        fan_in=dict(sorted(fan_in.items())),
        fan_out=dict(sorted(fan_out.items())),
        languages=dict(sorted(languages.items())),
    )


__all__ = ["build_summary", "compute_fan_stats", "file_edges"]
