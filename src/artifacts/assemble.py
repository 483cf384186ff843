"""Project tree assembly: the analysis engine entry point."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.models.nodes import (
    ROOT_ID,
    ROOT_NAME,
    DirectoryNode,
    FileNode,
    SourceFile,
    directory_id,
    file_id,
)
from graph.algos import annotate_graph
from graph.linker import link_dependencies
from graph.store import NodeStore
from parse.pattern_symbols import extract_symbols_patterns
from parse.treesitter_symbols import extract_symbols_treesitter
from parse.ts_imports import extract_imports
from rules.languages import TreeLanguage, language_for_path
from utils import normalize_path

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tree_sitter import Tree

logger = logging.getLogger(__name__)


def _child_sort_key(node: DirectoryNode | FileNode) -> tuple[int, str, str]:
    return (0 if node.kind == "directory" else 1, node.name.casefold(), node.name)


def sort_tree(root: DirectoryNode) -> None:
    """Sort every directory's children: directories first, then by name."""
    stack = [root]
    while stack:
        directory = stack.pop()
        directory.children.sort(key=_child_sort_key)
        stack.extend(
            child for child in directory.children if isinstance(child, DirectoryNode)
        )


class _TreeBuilder:
    """Creates directory and file nodes on demand along file paths."""

    def __init__(self, store: NodeStore) -> None:
        self.store = store
        self.root = DirectoryNode(name=ROOT_NAME, path="", unique_id=ROOT_ID)

    def _directory(self, parent: DirectoryNode, name: str, path: str) -> DirectoryNode:
        for child in parent.children:
            if isinstance(child, DirectoryNode) and child.name == name:
                return child
        directory = DirectoryNode(name=name, path=path, unique_id=directory_id(path))
        parent.children.append(directory)
        self.store.add(directory)
        return directory

    def add_file(self, path: str) -> FileNode:
        segments = path.split("/")
        parent = self.root
        for depth, segment in enumerate(segments[:-1], start=1):
            parent = self._directory(parent, segment, "/".join(segments[:depth]))

        file_node = FileNode(name=segments[-1], path=path, unique_id=file_id(path))
        parent.children.append(file_node)
        self.store.add(file_node)
        return file_node


def _admitted(files: Iterable[SourceFile]) -> list[SourceFile]:
    """Normalize paths, drop unsupported files and repeated paths."""
    admitted: list[SourceFile] = []
    seen: set[str] = set()
    for source in files:
        path = normalize_path(source.path)
        if not path or language_for_path(path) is None:
            continue
        if path in seen:
            logger.debug("Skipping duplicate input path %s", path)
            continue
        seen.add(path)
        admitted.append(SourceFile(path=path, content=source.content))
    return admitted


def analyze_project(files: Iterable[SourceFile]) -> DirectoryNode:
    """Analyze source files and return the annotated project tree.

    Phases run strictly in order: registry filtering, assembly with symbol
    extraction, dependency linking (with edge deduplication), graph analysis
    and finally child sorting.

    Args:
        files: (path, content) pairs of the project; files whose extension is
            not registered are ignored

    Returns:
        The root directory node of the project tree.
    """
    sources = _admitted(files)
    store = NodeStore()
    builder = _TreeBuilder(store)
    trees: dict[str, Tree] = {}

    for source in sources:
        language = language_for_path(source.path)
        file_node = builder.add_file(source.path)
        if isinstance(language, TreeLanguage):
            tree = extract_symbols_treesitter(source, language, file_node, store)
            if tree is not None:
                trees[source.path] = tree
                file_node.imports.extend(
                    declaration.specifier
                    for declaration in extract_imports(tree.root_node)
                )
        elif language is not None:
            extract_symbols_patterns(source, language, file_node, store)

    logger.debug("Extracted %d nodes from %d files", len(store), len(sources))

    link_dependencies(store, trees, [source.path for source in sources])
    cycles = annotate_graph(store)
    logger.debug("Found %d dependency cycles", len(cycles))

    sort_tree(builder.root)
    return builder.root


__all__ = ["analyze_project", "sort_tree"]
