from __future__ import annotations

import pytest

from parse.complexity import cognitive_complexity
from parse.treesitter_symbols import iter_nodes, node_text, parse_source


def _score(source: str, grammar: str = "javascript", name: str | None = None) -> int:
    tree = parse_source(source, grammar)
    function = next(
        node
        for node in iter_nodes(tree.root_node)
        if node.type == "function_declaration"
        and (name is None or node_text(node.child_by_field_name("name")) == name)
    )
    return cognitive_complexity(function, node_text(function.child_by_field_name("name")))


def test_nested_loop_inside_if() -> None:
    assert _score("export function f(){ if (x) { for(;;){} } }", "typescript") == 3


def test_empty_function_scores_zero() -> None:
    assert _score("function f() {}") == 0


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ("if (a) {} if (b) {}", 2),
        ("while (a) { do { a--; } while (b); }", 3),
        ("for (const k in o) { for (const v of o[k]) {} }", 3),
        ("try { g(); } catch (e) { if (e) {} }", 3),
        ("return a ? (b ? 1 : 2) : 3;", 3),
        ("switch (a) { case 1: break; case 2: break; default: break; }", 3),
    ],
)
def test_structures_score_one_plus_nesting(body: str, expected: int) -> None:
    assert _score(f"function f(a, b, o, e) {{ {body} }}") == expected


def test_labelled_break_and_continue() -> None:
    source = """
function f(rows) {
  outer: for (const row of rows) {
    for (const cell of row) {
      if (cell) continue outer;
      if (!cell) break outer;
      break;
    }
  }
}
"""
    # for=1, nested for=2, two ifs at depth 2 = 6, two labelled jumps = 2
    assert _score(source) == 11


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("a && b && c", 1),
        ("a && b || c", 2),
        ("a && b || c && d", 3),
        ("a || b || c || d", 1),
        ("(a && b) || c", 2),
        ("a && b.c && d", 2),
        ("a && !b && c", 2),
        ("a && g() && c", 2),
    ],
)
def test_logical_operator_runs(expression: str, expected: int) -> None:
    assert _score(f"function f(a, b, c, d) {{ return {expression}; }}") == expected


def test_direct_recursion_counts_once_per_call() -> None:
    source = "function fact(n) { if (n <= 1) { return 1; } return n * fact(n - 1); }"
    assert _score(source) == 2


def test_calls_to_other_functions_do_not_count() -> None:
    source = "function fact(n) { return other(n) + factorial(n); }"
    assert _score(source) == 0


def test_nested_functions_increase_nesting_only() -> None:
    source = """
function outer(items) {
  return items.map((item) => {
    if (item) { return 1; }
    return 0;
  });
}
"""
    assert _score(source) == 2


def test_score_is_invariant_under_unrelated_changes() -> None:
    original = """
const unrelated = 1;
function target(a) { if (a && helper()) { while (a) { a--; } } }
function helper() { return true; }
"""
    renamed = """
function renamedHelper() { return true; }
function target(a) { if (a && renamedHelper()) { while (a) { a--; } } }
const somethingElse = 1;
"""
    assert _score(original, name="target") == _score(renamed, name="target") == 4


def test_function_without_body_scores_zero() -> None:
    tree = parse_source("declare function ambient(a: number): void;", "typescript")
    node = next(
        n for n in iter_nodes(tree.root_node) if n.type == "function_signature"
    )
    assert cognitive_complexity(node, "ambient") == 0


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ("if (a) {} else {}", 1),
        ("if (a) {} else if (b) {}", 3),
    ],
)
def test_else_adds_nothing_and_else_if_nests(body: str, expected: int) -> None:
    assert _score(f"function f(a, b) {{ {body} }}") == expected
