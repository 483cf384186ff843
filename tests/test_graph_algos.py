from __future__ import annotations

from artifacts.models.nodes import FileNode, SymbolNode, file_id, symbol_id
from graph.algos import (
    annotate_graph,
    compute_instability,
    find_cycles,
    mark_cyclic_files,
    mark_unused_exports,
)
from graph.store import NodeStore


def _store(*paths: str) -> NodeStore:
    store = NodeStore()
    for path in paths:
        store.add(FileNode(name=path, path=path, unique_id=file_id(path)))
    return store


def _file(store: NodeStore, path: str) -> FileNode:
    node = store.get(file_id(path))
    assert isinstance(node, FileNode)
    return node


def test_find_cycles_detects_strongly_connected_components() -> None:
    graph = {
        "a": ["b"],
        "b": ["c"],
        "c": ["a", "d"],
        "d": [],
        "e": ["e"],
    }
    cycles = [sorted(cycle) for cycle in find_cycles(graph)]

    assert sorted(cycles) == [["a", "b", "c"], ["e"]]


def test_find_cycles_tolerates_unknown_targets() -> None:
    assert find_cycles({"a": ["ghost"], "b": []}) == []


def test_find_cycles_handles_deep_chains() -> None:
    depth = 20_000
    graph = {str(i): [str(i + 1)] for i in range(depth)}
    graph[str(depth)] = ["0"]

    (cycle,) = find_cycles(graph)

    assert len(cycle) == depth + 1


def test_mutual_imports_are_cyclic_and_unrelated_file_is_not() -> None:
    store = _store("p", "q", "r")
    store.link(file_id("p"), file_id("q"))
    store.link(file_id("q"), file_id("p"))

    mark_cyclic_files(store)

    assert _file(store, "p").is_cyclic is True
    assert _file(store, "q").is_cyclic is True
    assert _file(store, "r").is_cyclic is False


def test_files_leading_into_a_cycle_are_not_cyclic() -> None:
    store = _store("entry", "a", "b")
    store.link(file_id("entry"), file_id("a"))
    store.link(file_id("a"), file_id("b"))
    store.link(file_id("b"), file_id("a"))

    mark_cyclic_files(store)

    assert _file(store, "entry").is_cyclic is False
    assert _file(store, "a").is_cyclic is True
    assert _file(store, "b").is_cyclic is True


def test_cycle_marking_is_symmetric() -> None:
    store = _store("a", "b", "c", "d")
    for source, target in (("a", "b"), ("b", "c"), ("c", "a"), ("c", "d")):
        store.link(file_id(source), file_id(target))

    mark_cyclic_files(store)

    cyclic = {node.path for node in store.file_nodes() if node.is_cyclic}
    assert cyclic == {"a", "b", "c"}


def test_instability_counts_file_edges_only() -> None:
    store = _store("core", "app", "cli", "alone")
    core = _file(store, "core")
    helper = store.upsert_symbol(core, "helper", "function", exported=True)
    store.link(file_id("app"), file_id("core"))
    store.link(file_id("app"), helper.unique_id)
    store.link(file_id("cli"), file_id("app"))

    compute_instability(store)

    assert _file(store, "core").instability == 0.0
    assert _file(store, "app").instability == 0.5
    assert _file(store, "cli").instability == 1.0
    assert _file(store, "alone").instability == 0.0
    for node in store.file_nodes():
        assert 0.0 <= node.instability <= 1.0


def test_unused_exports_ignore_same_file_dependents() -> None:
    store = _store("lib", "main")
    lib = _file(store, "lib")
    api = store.upsert_symbol(lib, "api", "function", exported=True)
    caller = store.upsert_symbol(lib, "caller", "function")
    store.link(caller.unique_id, api.unique_id)

    mark_unused_exports(store)

    assert api.is_unused is True
    assert caller.is_unused is None

    store.link(file_id("main"), api.unique_id)
    mark_unused_exports(store)

    assert api.is_unused is False


def test_dangling_identifiers_are_skipped() -> None:
    store = _store("a")
    a = _file(store, "a")
    symbol = store.upsert_symbol(a, "x", "variable", exported=True)
    symbol.dependents.append(symbol_id("gone", "y"))
    a.dependencies.append(file_id("gone"))

    cycles = annotate_graph(store)

    assert cycles == []
    assert symbol.is_unused is True
    assert a.is_cyclic is False
    assert a.instability == 0.0


def test_store_keeps_first_symbol_and_patches_flags() -> None:
    store = _store("f")
    f = _file(store, "f")
    first = store.upsert_symbol(f, "dup", "variable")
    second = store.upsert_symbol(f, "dup", "function", exported=True, complexity=4)

    assert first is second
    assert first.kind == "variable"
    assert first.is_exported
    assert first.cognitive_complexity == 4
    assert [child.unique_id for child in f.children] == ["f:dup"]
    assert isinstance(store.get("f:dup"), SymbolNode)


def test_store_link_rejects_self_and_unknown_edges() -> None:
    store = _store("a", "b")

    assert store.link(file_id("a"), file_id("a")) is False
    assert store.link(file_id("a"), file_id("missing")) is False
    assert store.link(file_id("a"), file_id("b")) is True
    assert store.link(file_id("a"), file_id("b")) is True

    store.dedupe_edges()

    assert _file(store, "a").dependencies == [file_id("b")]
    assert _file(store, "b").dependents == [file_id("a")]
