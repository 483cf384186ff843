"""Import declaration analysis for JavaScript/TypeScript syntax trees."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import TYPE_CHECKING

from parse.treesitter_symbols import node_text
from rules.languages import TREE_LANGUAGES

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tree_sitter import Node

DEFAULT_EXPORT = "default"
NAMESPACE_IMPORT = "*"

_SCRIPT_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs")


@dataclass(frozen=True)
class ImportBinding:
    """A local name bound by an import and the exported name it refers to."""

    local_name: str
    imported_name: str


@dataclass(frozen=True)
class ImportDeclaration:
    """One import (or re-export) statement."""

    specifier: str
    bindings: tuple[ImportBinding, ...]
    line: int


def _string_value(node: Node | None) -> str:
    text = node_text(node)
    if len(text) >= 2 and text[0] in "\"'`" and text[-1] == text[0]:
        return text[1:-1]
    return text


def _clause_bindings(clause: Node) -> list[ImportBinding]:
    bindings: list[ImportBinding] = []
    for child in clause.named_children:
        if child.type == "identifier":
            bindings.append(ImportBinding(node_text(child), DEFAULT_EXPORT))
        elif child.type == "namespace_import":
            for name_node in child.named_children:
                if name_node.type == "identifier":
                    bindings.append(
                        ImportBinding(node_text(name_node), NAMESPACE_IMPORT)
                    )
        elif child.type == "named_imports":
            for specifier in child.named_children:
                if specifier.type != "import_specifier":
                    continue
                imported = _string_value(specifier.child_by_field_name("name"))
                alias = specifier.child_by_field_name("alias")
                local = _string_value(alias) if alias is not None else imported
                if imported and local:
                    bindings.append(ImportBinding(local, imported))
    return bindings


def extract_imports(root: Node) -> list[ImportDeclaration]:
    """Extract import and re-export statements from a program node.

    Args:
        root: The ``program`` node of a parsed file

    Returns:
        ImportDeclaration records in source order. Re-exports
        (``export ... from``) carry no bindings.
    """
    declarations: list[ImportDeclaration] = []
    for statement in root.named_children:
        if statement.type not in ("import_statement", "export_statement"):
            continue
        source = statement.child_by_field_name("source")
        if source is None:
            continue
        specifier = _string_value(source)
        if not specifier:
            continue

        bindings: list[ImportBinding] = []
        if statement.type == "import_statement":
            for child in statement.named_children:
                if child.type == "import_clause":
                    bindings.extend(_clause_bindings(child))

        declarations.append(
            ImportDeclaration(
                specifier=specifier,
                bindings=tuple(bindings),
                line=statement.start_point[0] + 1,
            )
        )
    return declarations


def _relative_candidates(resolved: str) -> list[str]:
    if resolved == ".":
        return [f"index.{ext}" for ext in TREE_LANGUAGES]
    candidates = [resolved]
    candidates.extend(f"{resolved}.{ext}" for ext in TREE_LANGUAGES)
    candidates.extend(f"{resolved}/index.{ext}" for ext in TREE_LANGUAGES)
    # TypeScript sources import their compiled name: "./util.js" -> util.ts
    for suffix in _SCRIPT_SUFFIXES:
        if resolved.endswith(suffix):
            stem = resolved[: -len(suffix)]
            candidates.extend(f"{stem}.{ext}" for ext in TREE_LANGUAGES)
            break
    return candidates


def resolve_import_path(
    specifier: str,
    importing_path: str,
    known_paths: Sequence[str],
    known_set: frozenset[str] | None = None,
) -> str | None:
    """Resolve an import specifier to a known project file.

    Relative specifiers are joined onto the importing file's directory and
    tried literally, with an implicit extension, and as a directory index.
    Bare specifiers resolve to the first known path containing their first
    path segment.

    Examples:
        >>> resolve_import_path("./a", "src/b.ts", ["src/a.ts", "src/b.ts"])
        'src/a.ts'
        >>> resolve_import_path("../lib", "src/app/b.ts", ["src/lib/index.js"])
        'src/lib/index.js'
        >>> resolve_import_path("react", "src/b.ts", ["src/b.ts"]) is None
        True
    """
    if not specifier.startswith("."):
        first_segment = specifier.split("/")[0]
        if not first_segment:
            return None
        return next((path for path in known_paths if first_segment in path), None)

    joined = posixpath.join(posixpath.dirname(importing_path), specifier)
    resolved = posixpath.normpath(joined)
    if resolved == ".." or resolved.startswith("../"):
        return None

    lookup = known_set if known_set is not None else frozenset(known_paths)
    for candidate in _relative_candidates(resolved):
        if candidate in lookup:
            return candidate
    return None


__all__ = [
    "DEFAULT_EXPORT",
    "NAMESPACE_IMPORT",
    "ImportBinding",
    "ImportDeclaration",
    "extract_imports",
    "resolve_import_path",
]
