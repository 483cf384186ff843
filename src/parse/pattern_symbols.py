"""Pattern-based symbol extraction for heuristically analyzed languages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from artifacts.models.nodes import SourceLocation, symbol_id
from parse.heuristic_complexity import (
    brace_complexity,
    extract_brace_body,
    indentation_complexity,
)

if TYPE_CHECKING:
    import re

    from artifacts.models.nodes import FileNode, SourceFile, SymbolKind
    from graph.store import NodeStore
    from rules.languages import PatternLanguage

logger = logging.getLogger(__name__)


def _offset_to_point(content: str, offset: int) -> tuple[int, int]:
    line = content.count("\n", 0, offset) + 1
    line_start = content.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def _match_location(content: str, match: re.Match[str]) -> SourceLocation:
    start_line, start_col = _offset_to_point(content, match.start(1))
    end_line, end_col = _offset_to_point(content, match.end())
    return SourceLocation(
        start_line=start_line,
        start_col=start_col,
        end_line=end_line,
        end_col=end_col,
    )


def _function_complexity(
    content: str,
    language: PatternLanguage,
    match: re.Match[str],
    name: str,
) -> int | None:
    if language.complexity == "indentation":
        return indentation_complexity(content, name)
    if language.complexity == "braces":
        body = extract_brace_body(content, match.end(1))
        return brace_complexity(body, name)
    return None


def extract_symbols_patterns(
    source: SourceFile,
    language: PatternLanguage,
    file_node: FileNode,
    store: NodeStore,
) -> None:
    """Apply every rule of ``language`` to the raw text of a file.

    Import captures are appended verbatim to ``file_node.imports``. Declaration
    captures become symbol nodes; a later match for an identifier that already
    exists is dropped, so earlier and narrower patterns win.

    Args:
        source: The file path and content
        language: Alias-resolved rule set for the file's extension
        file_node: The file node owning the extracted symbols
        store: Shared identifier map
    """
    content = source.content

    for category, patterns in language.patterns.items():
        for pattern in patterns:
            for match in pattern.finditer(content):
                captured = match.group(1)
                name = captured.strip() if captured else ""
                if not name:
                    continue

                if category == "imports":
                    file_node.imports.append(name)
                    continue

                if symbol_id(file_node.path, name) in store:
                    continue

                kind = cast("SymbolKind", category)
                complexity = None
                if category == "function":
                    complexity = _function_complexity(content, language, match, name)

                store.upsert_symbol(
                    file_node,
                    name,
                    kind,
                    loc=_match_location(content, match),
                    complexity=complexity,
                )

    logger.debug(
        "%s: %d symbols, %d imports (%s)",
        file_node.path,
        len(file_node.children),
        len(file_node.imports),
        language.name,
    )


__all__ = ["extract_symbols_patterns"]
