"""Generate a Graphviz DOT digraph from a dependency report."""

from __future__ import annotations

from typing import TYPE_CHECKING

from utils import assign_node_ids

if TYPE_CHECKING:
    from artifacts.models.report import DependencyReport

# DOT keywords are case-insensitive and cannot be used as bare ids.
DOT_KEYWORDS = frozenset({"node", "edge", "graph", "digraph", "subgraph", "strict"})


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def render_dot(report: DependencyReport) -> str:
    """Produce a ``digraph Dependencies`` description.

    Cycle members carry ``color=red``; unresolved import targets are
    declared with ``style=dashed``.
    """
    in_cycle = report.cycle_members()
    unresolved = report.metrics.unresolved_imports
    ids = assign_node_ids(
        [
            *(module.name for module in report.modules),
            *unresolved,
            *(name for edge in report.edges for name in (edge.from_module, edge.to)),
        ],
        reserved=DOT_KEYWORDS,
    )
    lines = [
        "digraph Dependencies {",
        "  rankdir=TB;",
        "  node [shape=box, style=rounded];",
        "",
    ]

    for module in report.modules:
        color = ", color=red" if module.name in in_cycle else ""
        lines.append(f"  {ids[module.name]} [label={_quote(module.name)}{color}];")

    for name in unresolved:
        lines.append(f"  {ids[name]} [label={_quote(name)}, style=dashed];")

    lines.append("")
    for edge in report.edges:
        lines.append(f"  {ids[edge.from_module]} -> {ids[edge.to]};")

    lines.append("}")
    return "\n".join(lines) + "\n"


__all__ = ["render_dot"]
