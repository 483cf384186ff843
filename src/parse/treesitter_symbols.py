"""Tree-sitter based symbol extraction for JavaScript and TypeScript."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from artifacts.models.nodes import SourceLocation, SymbolNode, symbol_id
from parse.complexity import cognitive_complexity
from utils import base_name

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from artifacts.models.nodes import FileNode, SourceFile, SymbolKind
    from graph.store import NodeStore
    from rules.languages import Grammar, TreeLanguage

logger = logging.getLogger(__name__)

_GRAMMARS: dict[str, Callable[[], object]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_PARSERS: dict[str, Parser] = {}

FUNCTION_EXPRESSION_TYPES = frozenset(
    {"arrow_function", "function_expression", "function", "generator_function"}
)
_FUNCTION_DECLARATION_TYPES = frozenset(
    {"function_declaration", "generator_function_declaration"}
)
_CLASS_DECLARATION_TYPES = frozenset({"class_declaration", "abstract_class_declaration"})
_CLASS_EXPRESSION_TYPES = frozenset({"class"})
_VARIABLE_DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})
_TOP_LEVEL_PARENTS = frozenset({"program", "export_statement"})
_TYPE_DECLARATIONS: dict[str, SymbolKind] = {
    "interface_declaration": "interface",
    "enum_declaration": "enum",
}


class SourceParseError(Exception):
    """Raised when a source file cannot be parsed into a clean syntax tree."""


def _get_parser(grammar: Grammar) -> Parser:
    """Initialize and return the Tree-sitter parser for a grammar."""
    parser = _PARSERS.get(grammar)
    if parser is None:
        parser = Parser(Language(_GRAMMARS[grammar]()))
        _PARSERS[grammar] = parser
    return parser


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and its descendants in pre-order without recursion."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf8", errors="ignore")


def _first_error(root: Node) -> Node | None:
    for node in iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


def parse_source(content: str, grammar: Grammar) -> Tree:
    """Parse ``content`` and reject trees containing syntax errors.

    Raises:
        SourceParseError: If tree-sitter had to recover from an error.
    """
    tree = _get_parser(grammar).parse(content.encode("utf8"))
    if tree.root_node.has_error:
        error = _first_error(tree.root_node)
        if error is None:
            msg = "syntax error"
        else:
            line, column = error.start_point
            msg = f"syntax error at line {line + 1}, column {column + 1}"
        raise SourceParseError(msg)
    return tree


def _location(node: Node) -> SourceLocation:
    return SourceLocation(
        start_line=node.start_point[0] + 1,
        start_col=node.start_point[1] + 1,
        end_line=node.end_point[0] + 1,
        end_col=node.end_point[1] + 1,
    )


def _function_name(node: Node) -> str | None:
    return node_text(node.child_by_field_name("name")) or None


class _SymbolCollector:
    """Walks one syntax tree and records its declarations in the store."""

    def __init__(self, file_node: FileNode, store: NodeStore) -> None:
        self.file_node = file_node
        self.store = store

    def _emit(
        self,
        name: str,
        kind: SymbolKind,
        node: Node,
        *,
        exported: bool = False,
        display_name: str | None = None,
        complexity: int | None = None,
    ) -> None:
        self.store.upsert_symbol(
            self.file_node,
            name,
            kind,
            display_name=display_name,
            loc=_location(node),
            exported=exported,
            complexity=complexity,
        )

    def _emit_methods(self, class_node: Node, class_name: str) -> None:
        body = class_node.child_by_field_name("body")
        if body is None:
            return
        for member in body.named_children:
            if member.type != "method_definition":
                continue
            method_body = member.child_by_field_name("body")
            name_node = member.child_by_field_name("name")
            if method_body is None or name_node is None:
                continue
            if name_node.type not in ("property_identifier", "private_property_identifier"):
                continue
            method_name = f"{class_name}.{node_text(name_node)}"
            self._emit(
                method_name,
                "function",
                member,
                complexity=cognitive_complexity(member),
            )

    def _handle_function(self, node: Node, exported: bool) -> None:
        name = _function_name(node)
        if name:
            self._emit(
                name,
                "function",
                node,
                exported=exported,
                complexity=cognitive_complexity(node, name),
            )

    def _handle_class(self, node: Node, exported: bool) -> None:
        name = _function_name(node)
        if name:
            self._emit(name, "class", node, exported=exported)
            self._emit_methods(node, name)

    def _handle_variables(self, node: Node, exported: bool) -> None:
        for declarator in node.named_children:
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field_name("name")
            if name_node is None or name_node.type != "identifier":
                continue
            name = node_text(name_node)
            value = declarator.child_by_field_name("value")
            if value is not None and value.type in FUNCTION_EXPRESSION_TYPES:
                self._emit(
                    name,
                    "arrow_function",
                    declarator,
                    exported=exported,
                    complexity=cognitive_complexity(value, _function_name(value)),
                )
            else:
                self._emit(name, "variable", declarator, exported=exported)

    def _handle_export_clause(self, node: Node) -> None:
        # Only local specifiers; `export {x} from "./y"` names no local binding.
        if node.child_by_field_name("source") is not None:
            return
        for clause in node.named_children:
            if clause.type != "export_clause":
                continue
            for specifier in clause.named_children:
                if specifier.type != "export_specifier":
                    continue
                local_name = node_text(specifier.child_by_field_name("name"))
                existing = self.store.get(symbol_id(self.file_node.path, local_name))
                if isinstance(existing, SymbolNode):
                    existing.is_exported = True

    def _handle_default_export(self, node: Node) -> list[Node]:
        target = node.child_by_field_name("declaration") or node.child_by_field_name(
            "value"
        )
        if target is None:
            return []

        kind: SymbolKind = "variable"
        complexity: int | None = None
        if target.type in _CLASS_DECLARATION_TYPES | _CLASS_EXPRESSION_TYPES:
            kind = "class"
        elif target.type in _FUNCTION_DECLARATION_TYPES:
            kind = "function"
            complexity = cognitive_complexity(target, _function_name(target))
        elif target.type in FUNCTION_EXPRESSION_TYPES:
            # `export default function name() {}` may parse as an expression.
            named = target.type != "arrow_function" and _function_name(target)
            kind = "function" if named else "arrow_function"
            complexity = cognitive_complexity(target, _function_name(target))

        if target.type == "identifier":
            label = node_text(target)
        else:
            label = _function_name(target) or ""
        display_name = label or base_name(self.file_node.path) or "default"

        self._emit(
            "default",
            kind,
            target,
            exported=True,
            display_name=display_name,
            complexity=complexity,
        )
        if kind == "class":
            self._emit_methods(target, display_name)
        return list(target.children)

    def _visit(self, node: Node) -> list[Node]:
        """Handle one node and return the nodes to descend into."""
        parent = node.parent
        exported = parent is not None and parent.type == "export_statement"
        kind = node.type

        if kind == "export_statement":
            if any(child.type == "default" for child in node.children):
                return self._handle_default_export(node)
            self._handle_export_clause(node)
        elif kind in _FUNCTION_DECLARATION_TYPES:
            self._handle_function(node, exported)
        elif kind in _CLASS_DECLARATION_TYPES:
            self._handle_class(node, exported)
        elif kind in _VARIABLE_DECLARATION_TYPES:
            if parent is not None and parent.type in _TOP_LEVEL_PARENTS:
                self._handle_variables(node, exported)
        elif kind in _TYPE_DECLARATIONS:
            name = _function_name(node)
            if name:
                self._emit(name, _TYPE_DECLARATIONS[kind], node, exported=exported)

        return list(node.children)

    def collect(self, root: Node) -> None:
        stack = [root]
        while stack:
            node = stack.pop()
            stack.extend(reversed(self._visit(node)))


def extract_symbols_treesitter(
    source: SourceFile,
    language: TreeLanguage,
    file_node: FileNode,
    store: NodeStore,
) -> Tree | None:
    """Extract symbols from a JavaScript/TypeScript file using Tree-sitter.

    Args:
        source: The file path and content
        language: Tree-based registry entry selecting the grammar
        file_node: The file node owning the extracted symbols
        store: Shared identifier map

    Returns:
        The parsed tree for the linking pass, or None when the file could not
        be parsed. A parse failure is logged and contributes no symbols.
    """
    try:
        tree = parse_source(source.content, language.grammar)
    except SourceParseError as exc:
        logger.warning("Could not parse %s as %s: %s", source.path, language.name, exc)
        return None

    _SymbolCollector(file_node, store).collect(tree.root_node)
    logger.debug("%s: %d symbols", file_node.path, len(file_node.children))
    return tree


__all__ = [
    "FUNCTION_EXPRESSION_TYPES",
    "SourceParseError",
    "extract_symbols_treesitter",
    "iter_nodes",
    "node_text",
    "parse_source",
]
