"""Report models for cycle and metric results."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from artifacts.models.base import FrozenModel
from artifacts.models.graph import DependencyEdge, DependencyGraph, ModuleNode

Severity = Literal["error", "warning"]


class Cycle(FrozenModel):
    """A closed walk ``[m0, ..., mk, m0]`` through the import graph."""

    cycle: tuple[str, ...]
    severity: Severity

    @classmethod
    def from_path(cls, path: list[str]) -> Cycle:
        """Build a cycle from a closed walk, classifying its severity.

        Direct mutual dependencies (and self-loops) are errors; anything
        longer is a warning.
        """
        length = len(path) - 1
        return cls(cycle=tuple(path), severity="error" if length <= 2 else "warning")

    @property
    def length(self) -> int:
        """Number of edges in the walk."""
        return len(self.cycle) - 1

    @property
    def key(self) -> tuple[str, ...]:
        """Rotation- and direction-independent identity."""
        return tuple(sorted(set(self.cycle)))


class MaxDependencies(FrozenModel):
    module: str = ""
    count: int = 0


class GraphMetrics(FrozenModel):
    """Aggregate statistics over a dependency graph."""

    total_modules: int = 0
    total_edges: int = 0
    avg_dependencies: float = 0.0
    max_dependencies: MaxDependencies = Field(default_factory=MaxDependencies)
    orphan_modules: tuple[str, ...] = ()
    unresolved_imports: tuple[str, ...] = ()


class DependencyReport(FrozenModel):
    """Complete result of one analysis run."""

    modules: tuple[ModuleNode, ...] = ()
    edges: tuple[DependencyEdge, ...] = ()
    circular_dependencies: tuple[Cycle, ...] = ()
    metrics: GraphMetrics = Field(default_factory=GraphMetrics)

    @property
    def graph(self) -> DependencyGraph:
        return DependencyGraph(modules=self.modules, edges=self.edges)

    def cycle_members(self) -> set[str]:
        """Names of every module taking part in at least one cycle."""
        return {name for cycle in self.circular_dependencies for name in cycle.cycle}


__all__ = [
    "Cycle",
    "DependencyReport",
    "GraphMetrics",
    "MaxDependencies",
    "Severity",
]
