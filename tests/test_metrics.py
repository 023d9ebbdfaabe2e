from __future__ import annotations

from artifacts.models.graph import ModuleNode
from artifacts.summaries.builders import compute_fan_stats, compute_metrics
from graph.algos import build_dependency_graph


def _graph(adjacency: dict[str, list[str]]):
    return build_dependency_graph(
        ModuleNode(name=name, source_path=f"{name}.module.ts", imports=targets)
        for name, targets in adjacency.items()
    )


def test_compute_metrics_empty_graph_is_zeroed() -> None:
    metrics = compute_metrics(_graph({}))

    assert metrics.total_modules == 0
    assert metrics.total_edges == 0
    assert metrics.avg_dependencies == 0
    assert metrics.max_dependencies.module == ""
    assert metrics.max_dependencies.count == 0
    assert metrics.orphan_modules == ()
    assert metrics.unresolved_imports == ()


def test_compute_metrics_counts_and_max() -> None:
    metrics = compute_metrics(_graph({"a": ["b", "c"], "b": ["c"], "c": []}))

    assert metrics.total_modules == 3
    assert metrics.total_edges == 3
    assert metrics.avg_dependencies == 1.0
    assert metrics.max_dependencies.module == "a"
    assert metrics.max_dependencies.count == 2


def test_compute_metrics_max_ties_go_to_first_module() -> None:
    metrics = compute_metrics(_graph({"a": ["x"], "b": ["y", "z"], "c": ["x", "y"]}))

    assert metrics.max_dependencies.module == "b"
    assert metrics.max_dependencies.count == 2


def test_compute_metrics_orphans_exclude_imported_modules() -> None:
    metrics = compute_metrics(_graph({"A": ["E"], "D": [], "E": []}))

    assert metrics.orphan_modules == ("D",)
    assert "E" not in metrics.orphan_modules


def test_compute_metrics_average_rounds_half_up() -> None:
    adjacency: dict[str, list[str]] = {f"m{i}": [] for i in range(8)}
    adjacency["m0"] = ["x"]

    metrics = compute_metrics(_graph(adjacency))

    # 1 / 8 = 0.125, which round() would send to 0.12.
    assert metrics.avg_dependencies == 0.13


def test_compute_metrics_average_two_decimals() -> None:
    metrics = compute_metrics(_graph({"a": ["b", "c"], "b": [], "c": []}))

    assert metrics.avg_dependencies == 0.67


def test_compute_metrics_counts_unresolved_edges_in_out_degree() -> None:
    metrics = compute_metrics(_graph({"a": ["Z", "Y"], "b": ["a"]}))

    assert metrics.max_dependencies.count == 2
    assert metrics.total_edges == 3
    assert metrics.unresolved_imports == ("Y", "Z")


def test_compute_metrics_is_idempotent() -> None:
    graph = _graph({"a": ["b"], "b": ["a", "c"], "d": []})

    assert compute_metrics(graph) == compute_metrics(graph)


def test_compute_fan_stats_counts_edges() -> None:
    fan_in, fan_out = compute_fan_stats(_graph({"a": ["b", "c"], "b": ["c"]}))

    assert fan_in == {"b": 1, "c": 2}
    assert fan_out == {"a": 2, "b": 1}
