"""Graph algorithms for module dependency analysis."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.models.graph import DependencyEdge, DependencyGraph
from artifacts.models.report import Cycle

if TYPE_CHECKING:
    from collections.abc import Iterable

    from artifacts.models.graph import ModuleNode

logger = logging.getLogger(__name__)


def build_dependency_graph(modules: Iterable[ModuleNode]) -> DependencyGraph:
    """Build a dependency graph from extracted modules.

    Modules sharing a name collapse to the last one seen (it keeps the
    position of the first). Every entry of a module's imports becomes one
    edge, whether or not the target is a known module.

    Args:
        modules: Extracted module nodes, in discovery order

    Returns:
        Immutable graph with edges in module-then-import order
    """
    by_name: dict[str, ModuleNode] = {}
    for module in modules:
        previous = by_name.get(module.name)
        if previous is not None:
            logger.warning(
                "duplicate module name %r: %s replaces %s",
                module.name,
                module.source_path,
                previous.source_path,
            )
        by_name[module.name] = module

    nodes = tuple(by_name.values())
    edges = tuple(
        DependencyEdge(from_module=module.name, to=imported)
        for module in nodes
        for imported in module.imports
    )
    return DependencyGraph(modules=nodes, edges=edges)


_EXHAUSTED = object()


class _CycleSearch:
    """Mutable state for the per-start depth-first cycle search."""

    def __init__(self, adjacency: dict[str, list[str]]) -> None:
        self.adjacency = adjacency
        self.found: list[list[str]] = []

    def run_from(self, start: str) -> None:
        """Walk every path from ``start``, recording closed walks.

        A neighbour already on the current path closes a cycle and is not
        followed further; otherwise it is entered once per start. Uses an
        explicit stack so deep chains stay off the interpreter call stack.
        """
        visited = {start}
        path = [start]
        position = {start: 0}
        pending = [iter(self.adjacency.get(start, ()))]

        while pending:
            neighbor = next(pending[-1], _EXHAUSTED)
            if neighbor is _EXHAUSTED:
                pending.pop()
                del position[path.pop()]
                continue
            if neighbor in position:
                self.found.append([*path[position[neighbor] :], neighbor])
                continue
            if neighbor in visited:
                continue
            visited.add(neighbor)
            position[neighbor] = len(path)
            path.append(neighbor)
            pending.append(iter(self.adjacency.get(neighbor, ())))


def _dedupe_cycles(raw_cycles: Iterable[list[str]]) -> tuple[Cycle, ...]:
    """Keep the first walk found for each distinct set of members."""
    seen: set[tuple[str, ...]] = set()
    unique: list[Cycle] = []
    for path in raw_cycles:
        cycle = Cycle.from_path(path)
        if cycle.key in seen:
            continue
        seen.add(cycle.key)
        unique.append(cycle)
    return tuple(unique)


def find_cycles(graph: DependencyGraph) -> tuple[Cycle, ...]:
    """Find circular dependencies with a depth-first search from every module.

    Args:
        graph: Dependency graph to search

    Returns:
        Distinct cycles, each a closed walk ``[m0, ..., m0]`` in the order
        first discovered, classified as "error" (two members or fewer) or
        "warning"
    """
    search = _CycleSearch(graph.adjacency())
    for name in graph.module_names():
        search.run_from(name)

    cycles = _dedupe_cycles(search.found)
    logger.info(
        "found %d distinct cycles (%d raw detections)", len(cycles), len(search.found)
    )
    return cycles


__all__ = ["build_dependency_graph", "find_cycles"]
