"""Dependency linking: raw imports to identifier-level edges."""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from typing import TYPE_CHECKING

from artifacts.models.nodes import file_id, symbol_id
from parse.treesitter_symbols import iter_nodes, node_text
from parse.ts_imports import extract_imports, resolve_import_path

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from tree_sitter import Node, Tree

    from artifacts.models.nodes import FileNode
    from graph.store import NodeStore

logger = logging.getLogger(__name__)

_USE_TYPES = frozenset({"identifier", "type_identifier", "shorthand_property_identifier"})
_QUOTED_RE = re.compile(r"[\"']([^\"']+)[\"']")
_WORD_RE = re.compile(r"\w")


def _iter_identifier_uses(root: Node) -> Iterator[str]:
    """Yield identifier texts in document order, skipping import statements."""
    for statement in root.children:
        if statement.type == "import_statement":
            continue
        for node in iter_nodes(statement):
            if node.type in _USE_TYPES:
                yield node_text(node)


def link_tree_file(
    file_node: FileNode,
    tree: Tree,
    store: NodeStore,
    known_paths: Sequence[str],
    known_set: frozenset[str],
) -> None:
    """Link a parsed JavaScript/TypeScript file to the files and symbols it imports.

    Every resolved import adds a file-to-file edge. The first use of each
    imported binding then links the importing file to the concrete target
    symbol, or to the target file when no such symbol exists.
    """
    source_id = file_node.unique_id
    origins: dict[str, list[tuple[str, str]]] = defaultdict(list)

    for declaration in extract_imports(tree.root_node):
        target_path = resolve_import_path(
            declaration.specifier, file_node.path, known_paths, known_set
        )
        if target_path is None:
            logger.debug(
                "%s:%d: unresolved import %r",
                file_node.path,
                declaration.line,
                declaration.specifier,
            )
            continue

        store.link(source_id, file_id(target_path))
        for binding in declaration.bindings:
            origins[binding.local_name].append((target_path, binding.imported_name))

    if not origins:
        return

    linked: set[tuple[str, str, str]] = set()
    for name in _iter_identifier_uses(tree.root_node):
        for target_path, imported_name in origins.get(name, ()):
            key = (name, target_path, imported_name)
            if key in linked:
                continue
            linked.add(key)

            target_symbol = symbol_id(target_path, imported_name)
            if target_symbol in store:
                store.link(source_id, target_symbol)
            else:
                store.link(source_id, file_id(target_path))


def _first_containing(fragment: str, known_paths: Sequence[str]) -> str | None:
    if not _WORD_RE.search(fragment):
        return None
    return next((path for path in known_paths if fragment in path), None)


def _normalized(piece: str) -> str:
    normalized = piece.lstrip(".:").replace("::", "/").replace(".", "/")
    if normalized.endswith("/*"):
        normalized = normalized[:-2]
    return normalized


def resolve_raw_import(raw_import: str, known_paths: Sequence[str]) -> list[str]:
    """Resolve a raw pattern-captured import string to known file paths.

    The verbatim string wins when some path contains it. Otherwise each quoted
    piece (or the whole string) is retried, and then its separator-normalized
    form.

    Examples:
        >>> resolve_raw_import("util.h", ["src/util.h", "src/main.c"])
        ['src/util.h']
        >>> resolve_raw_import("pkg.models", ["pkg/models.py"])
        ['pkg/models.py']
        >>> resolve_raw_import('"a/b"\\n\\t"fmt"', ["a/b/b.go"])
        ['a/b/b.go']
    """
    verbatim = _first_containing(raw_import, known_paths)
    if verbatim is not None:
        return [verbatim]

    pieces = _QUOTED_RE.findall(raw_import) or [raw_import]
    resolved: list[str] = []
    for piece in pieces:
        for candidate in dict.fromkeys((piece, _normalized(piece))):
            target = _first_containing(candidate, known_paths)
            if target is not None:
                resolved.append(target)
                break
    return resolved


def link_pattern_file(
    file_node: FileNode,
    store: NodeStore,
    known_paths: Sequence[str],
) -> None:
    """Add file-to-file edges for every resolvable raw import of a file."""
    for raw_import in file_node.imports:
        targets = resolve_raw_import(raw_import, known_paths)
        if not targets:
            logger.debug("%s: unresolved import %r", file_node.path, raw_import)
        for target_path in targets:
            store.link(file_node.unique_id, file_id(target_path))


def link_dependencies(
    store: NodeStore,
    trees: dict[str, Tree],
    known_paths: Sequence[str],
) -> None:
    """Run both linking passes, then deduplicate every edge list.

    Args:
        store: Identifier map holding every extracted node
        trees: Parsed trees of the tree-based files, keyed by path
        known_paths: Every admitted file path, in input order
    """
    known_set = frozenset(known_paths)
    for file_node in store.file_nodes():
        tree = trees.get(file_node.path)
        if tree is not None:
            link_tree_file(file_node, tree, store, known_paths, known_set)
        elif file_node.imports:
            link_pattern_file(file_node, store, known_paths)

    store.dedupe_edges()


__all__ = [
    "link_dependencies",
    "link_pattern_file",
    "link_tree_file",
    "resolve_raw_import",
]
