"""Human-readable text rendering of a dependency report."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from artifacts.models.report import DependencyReport

MAX_LISTED_PROVIDERS = 5

CYCLE_HAZARDS = (
    "Runtime errors during module initialization",
    "Undefined dependencies at injection time",
    "Difficult-to-debug issues",
)


def _truncated(values: tuple[str, ...], limit: int) -> str:
    listed = ", ".join(values[:limit])
    return listed + ("..." if len(values) > limit else "")


def render_text(report: DependencyReport) -> str:
    """Summarize metrics, modules and cycles for a terminal."""
    metrics = report.metrics
    lines = [
        "Dependency Analysis Report",
        "",
        "Metrics:",
        f"  Total Modules: {metrics.total_modules}",
        f"  Total Dependencies: {metrics.total_edges}",
        f"  Avg Dependencies/Module: {metrics.avg_dependencies:g}",
        (
            f"  Most Dependencies: {metrics.max_dependencies.module} "
            f"({metrics.max_dependencies.count})"
        ),
    ]
    if metrics.orphan_modules:
        lines.append(f"  Orphan Modules: {', '.join(metrics.orphan_modules)}")
    if metrics.unresolved_imports:
        lines.append(f"  Unresolved Imports: {', '.join(metrics.unresolved_imports)}")

    lines.extend(["", "Modules:"])
    if not report.modules:
        lines.append("  (no modules found)")
    for module in report.modules:
        lines.append(f"  {module.name}")
        if module.imports:
            lines.append(f"    -> imports: {', '.join(module.imports)}")
        if module.providers:
            lines.append(
                "    -> providers: "
                + _truncated(module.providers, MAX_LISTED_PROVIDERS)
            )

    lines.append("")
    if report.circular_dependencies:
        lines.append("Circular Dependencies Detected:")
        for cycle in report.circular_dependencies:
            lines.append(f"  [{cycle.severity}] {' -> '.join(cycle.cycle)}")
        lines.extend(["", "  Circular dependencies can cause:"])
        lines.extend(f"  - {hazard}" for hazard in CYCLE_HAZARDS)
    else:
        lines.append("No circular dependencies detected.")

    return "\n".join(lines) + "\n"


__all__ = ["render_text"]
