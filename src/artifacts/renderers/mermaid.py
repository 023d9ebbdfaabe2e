"""Generate a Mermaid flowchart from a dependency report."""

from __future__ import annotations

from typing import TYPE_CHECKING

from utils import assign_node_ids

if TYPE_CHECKING:
    from artifacts.models.report import DependencyReport

CYCLE_STYLE = "fill:#f66"
UNRESOLVED_STYLE = "stroke-dasharray: 5 5"

# Words the flowchart grammar reads as statements rather than node ids.
MERMAID_KEYWORDS = frozenset(
    {
        "end",
        "graph",
        "flowchart",
        "subgraph",
        "direction",
        "style",
        "classDef",
        "class",
        "click",
        "linkStyle",
        "default",
        "call",
        "href",
    }
)


def _label(name: str) -> str:
    # Mermaid labels cannot hold raw double quotes.
    return '"' + name.replace('"', "#quot;") + '"'


def render_mermaid(report: DependencyReport) -> str:
    """Produce a Mermaid ``graph TD`` description.

    One node per module and one arrow per edge. Unresolved import targets
    are declared with a dashed outline, and every cycle member is filled red.
    """
    unresolved = report.metrics.unresolved_imports
    ids = assign_node_ids(
        [
            *(module.name for module in report.modules),
            *unresolved,
            *(name for edge in report.edges for name in (edge.from_module, edge.to)),
        ],
        reserved=MERMAID_KEYWORDS,
    )

    lines = ["graph TD"]
    for module in report.modules:
        lines.append(f"  {ids[module.name]}[{_label(module.name)}]")
    for name in unresolved:
        lines.append(f"  {ids[name]}[{_label(name)}]")

    lines.append("")
    for edge in report.edges:
        lines.append(f"  {ids[edge.from_module]} --> {ids[edge.to]}")

    if unresolved:
        lines.append("")
        lines.append("  %% Unresolved imports")
        for name in unresolved:
            lines.append(f"  style {ids[name]} {UNRESOLVED_STYLE}")

    if report.circular_dependencies:
        lines.append("")
        lines.append("  %% Circular dependencies")
        styled: set[str] = set()
        for cycle in report.circular_dependencies:
            for name in cycle.cycle:
                node_id = ids[name]
                if node_id in styled:
                    continue
                styled.add(node_id)
                lines.append(f"  style {node_id} {CYCLE_STYLE}")

    return "\n".join(lines) + "\n"


__all__ = ["render_mermaid"]
