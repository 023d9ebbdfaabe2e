"""Graph models for module dependency analysis.

This module contains models for representing discovered modules, the import
edges between them, and the immutable graph built from both.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from artifacts.models.base import FrozenModel

# Only "import" is produced by extraction; the other kinds are reserved.
EdgeKind = Literal["import", "inject", "extends"]


class ModuleNode(FrozenModel):
    """A module discovered in one module document."""

    name: str = Field(min_length=1)
    source_path: str
    imports: tuple[str, ...] = ()
    exports: tuple[str, ...] = ()
    providers: tuple[str, ...] = ()
    controllers: tuple[str, ...] = ()


class DependencyEdge(FrozenModel):
    """A directed relationship between two modules."""

    from_module: str = Field(alias="from")
    to: str
    kind: EdgeKind = "import"


class DependencyGraph(FrozenModel):
    """Modules plus the edges derived from their imports."""

    modules: tuple[ModuleNode, ...] = ()
    edges: tuple[DependencyEdge, ...] = ()

    def module_names(self) -> list[str]:
        return [module.name for module in self.modules]

    def get(self, name: str) -> ModuleNode | None:
        for module in self.modules:
            if module.name == name:
                return module
        return None

    def adjacency(self) -> dict[str, list[str]]:
        """Map each edge source to its targets, in edge order."""
        adjacency: dict[str, list[str]] = {}
        for edge in self.edges:
            adjacency.setdefault(edge.from_module, []).append(edge.to)
        return adjacency

    def unresolved_targets(self) -> list[str]:
        """Edge targets with no matching module, sorted."""
        known = set(self.module_names())
        return sorted({edge.to for edge in self.edges if edge.to not in known})


__all__ = ["DependencyEdge", "DependencyGraph", "EdgeKind", "ModuleNode"]
