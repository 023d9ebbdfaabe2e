"""Summary builders for dependency reports."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from artifacts.models.report import GraphMetrics, MaxDependencies

if TYPE_CHECKING:
    from artifacts.models.graph import DependencyGraph


def compute_fan_stats(graph: DependencyGraph) -> tuple[dict[str, int], dict[str, int]]:
    """Compute fan-in and fan-out statistics from edges."""
    fan_in: dict[str, int] = {}
    fan_out: dict[str, int] = {}

    for edge in graph.edges:
        fan_out[edge.from_module] = fan_out.get(edge.from_module, 0) + 1
        fan_in[edge.to] = fan_in.get(edge.to, 0) + 1

    return fan_in, fan_out


def _round_half_up(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def compute_metrics(graph: DependencyGraph) -> GraphMetrics:
    """Compute aggregate statistics over a dependency graph.

    Out-degree is the length of a module's own imports. Orphans import
    nothing and are never the target of an edge.
    """
    if not graph.modules:
        return GraphMetrics(total_edges=len(graph.edges))

    fan_in, _ = compute_fan_stats(graph)
    counts = [len(module.imports) for module in graph.modules]

    # First module with the highest count wins ties.
    best = max(range(len(counts)), key=lambda i: (counts[i], -i))
    max_dependencies = MaxDependencies(
        module=graph.modules[best].name, count=counts[best]
    )

    orphan_modules = tuple(
        module.name
        for module in graph.modules
        if not module.imports and module.name not in fan_in
    )

    return GraphMetrics(
        total_modules=len(graph.modules),
        total_edges=len(graph.edges),
        avg_dependencies=_round_half_up(Decimal(sum(counts)) / Decimal(len(counts))),
        max_dependencies=max_dependencies,
        orphan_modules=orphan_modules,
        unresolved_imports=tuple(graph.unresolved_targets()),
    )
