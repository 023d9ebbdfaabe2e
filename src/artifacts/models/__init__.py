"""Model namespace for modgraph report schemas."""

from artifacts.models.graph import DependencyEdge, DependencyGraph, ModuleNode
from artifacts.models.report import (
    Cycle,
    DependencyReport,
    GraphMetrics,
    MaxDependencies,
)

__all__ = [
    "Cycle",
    "DependencyEdge",
    "DependencyGraph",
    "DependencyReport",
    "GraphMetrics",
    "MaxDependencies",
    "ModuleNode",
]
