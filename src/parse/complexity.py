"""Exact cognitive complexity over tree-sitter JavaScript/TypeScript trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tree_sitter import Node

# Structures scored as 1 + nesting that also open a nesting level.
NESTING_TYPES = frozenset(
    {
        "if_statement",
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
        "ternary_expression",
        "switch_statement",
        "catch_clause",
    }
)

# Nested functions open a nesting level without scoring.
FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)

_LOGICAL_OPERATORS = frozenset({"&&", "||"})
# Operands that break a run of identical logical operators.
_CHAIN_RESETTERS = frozenset(
    {"member_expression", "unary_expression", "update_expression", "call_expression"}
)


def _logical_operator(node: Node | None) -> str | None:
    if node is None or node.type != "binary_expression":
        return None
    operator = node.child_by_field_name("operator")
    if operator is not None and operator.type in _LOGICAL_OPERATORS:
        return operator.type
    return None


def _logical_runs(chain: Node) -> int:
    """Count runs of identical operators in a logical chain, in source order."""
    runs = 0
    previous: str | None = None
    stack: list[Node | str] = [chain]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            if item != previous:
                runs += 1
            previous = item
            continue
        operator = _logical_operator(item)
        if operator is None:
            if item.type in _CHAIN_RESETTERS:
                previous = None
            continue
        right = item.child_by_field_name("right")
        left = item.child_by_field_name("left")
        if right is not None:
            stack.append(right)
        stack.append(operator)
        if left is not None:
            stack.append(left)
    return runs


class _ComplexityWalker:
    """Pre-order walk with explicit enter/leave events."""

    def __init__(self, function_name: str | None) -> None:
        self.function_name = function_name
        self.score = 0
        self.nesting = 0

    def _enter(self, node: Node) -> bool:
        """Score ``node``; return True when it opens a nesting level."""
        kind = node.type

        if kind in NESTING_TYPES:
            self.score += 1 + self.nesting
            return True

        if kind in FUNCTION_TYPES:
            return True

        if kind == "switch_case":
            if node.child_by_field_name("value") is not None:
                self.score += 1
        elif kind in ("break_statement", "continue_statement"):
            if node.child_by_field_name("label") is not None:
                self.score += 1
        elif kind == "call_expression":
            callee = node.child_by_field_name("function")
            if (
                self.function_name
                and callee is not None
                and callee.type == "identifier"
                and callee.text is not None
                and callee.text.decode("utf8") == self.function_name
            ):
                self.score += 1
        elif _logical_operator(node) and not _logical_operator(node.parent):
            # Nested operands of the same chain are counted with their root.
            self.score += _logical_runs(node)

        return False

    def run(self, body: Node) -> int:
        # None on the stack marks leaving a nesting level.
        stack: list[Node | None] = [body]
        while stack:
            node = stack.pop()
            if node is None:
                self.nesting -= 1
                continue
            if self._enter(node):
                self.nesting += 1
                stack.append(None)
            stack.extend(reversed(node.children))
        return self.score


def cognitive_complexity(function_node: Node, function_name: str | None = None) -> int:
    """Compute the cognitive complexity of a function-like node.

    Args:
        function_node: A function declaration/expression, arrow function or
            method definition
        function_name: The function's own name, used to detect direct
            recursion; None disables recursion scoring

    Returns:
        The complexity score of the function body (0 if it has no body).
    """
    body = function_node.child_by_field_name("body")
    if body is None:
        return 0
    return _ComplexityWalker(function_name).run(body)


__all__ = ["FUNCTION_TYPES", "NESTING_TYPES", "cognitive_complexity"]
