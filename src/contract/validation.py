"""Validation helpers for JSON dependency reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from artifacts.models.graph import DependencyEdge, ModuleNode
from artifacts.models.report import (
    Cycle,
    DependencyReport,
    GraphMetrics,
    MaxDependencies,
)

if TYPE_CHECKING:
    from pathlib import Path


class _MaxDependenciesSchema(MaxDependencies):
    module: str
    count: int


class _MetricsSchema(GraphMetrics):
    """Metrics as written to disk: every key must be present."""

    total_modules: int
    total_edges: int
    avg_dependencies: float
    max_dependencies: _MaxDependenciesSchema
    orphan_modules: tuple[str, ...]
    unresolved_imports: tuple[str, ...]


class _ReportSchema(DependencyReport):
    """Report as written to disk: defaults do not apply."""

    modules: tuple[ModuleNode, ...]
    edges: tuple[DependencyEdge, ...]
    circular_dependencies: tuple[Cycle, ...]
    metrics: _MetricsSchema


@dataclass(frozen=True)
class ValidationMessage:
    path: Path
    message: str
    key: str | None = None

    def location(self) -> str:
        if self.key is None:
            return str(self.path)
        return f"{self.path}:{self.key}"

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "key": self.key,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_report(report_path: Path) -> ValidationResult:
    """Check a JSON report against the report schema and its invariants."""
    result = ValidationResult()

    if not report_path.is_file():
        result.errors.append(
            ValidationMessage(path=report_path, message="Report file does not exist.")
        )
        return result

    try:
        raw = orjson.loads(report_path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.errors.append(
            ValidationMessage(path=report_path, message=f"Invalid JSON: {exc}.")
        )
        return result

    try:
        report = _ReportSchema.model_validate(raw)
    except ValidationError as exc:
        result.errors.append(
            ValidationMessage(
                path=report_path, message=f"Schema validation failed: {exc}."
            )
        )
        return result

    _check_counts(report_path, report, result)
    _check_modules(report_path, report, result)
    for index, cycle in enumerate(report.circular_dependencies):
        _check_cycle(report_path, index, cycle, result)

    return result


def _check_counts(
    path: Path, report: DependencyReport, result: ValidationResult
) -> None:
    metrics = report.metrics
    if metrics.total_modules != len(report.modules):
        result.errors.append(
            ValidationMessage(
                path=path,
                key="metrics.totalModules",
                message=(
                    f"Expected {len(report.modules)} modules, "
                    f"got {metrics.total_modules}."
                ),
            )
        )
    if metrics.total_edges != len(report.edges):
        result.errors.append(
            ValidationMessage(
                path=path,
                key="metrics.totalEdges",
                message=(
                    f"Expected {len(report.edges)} edges, got {metrics.total_edges}."
                ),
            )
        )


def _check_modules(
    path: Path, report: DependencyReport, result: ValidationResult
) -> None:
    names = [module.name for module in report.modules]
    if len(set(names)) != len(names):
        result.errors.append(
            ValidationMessage(
                path=path, key="modules", message="Module names are not unique."
            )
        )

    for module in report.modules:
        if module.name in module.imports:
            result.errors.append(
                ValidationMessage(
                    path=path,
                    key=f"modules.{module.name}.imports",
                    message="Module imports itself.",
                )
            )

    known = set(names)
    unresolved = {edge.to for edge in report.edges if edge.to not in known}
    missing = sorted(unresolved - set(report.metrics.unresolved_imports))
    if missing:
        result.warnings.append(
            ValidationMessage(
                path=path,
                key="metrics.unresolvedImports",
                message=f"Unresolved targets not listed: {', '.join(missing)}.",
            )
        )


def _check_cycle(
    path: Path, index: int, cycle: Cycle, result: ValidationResult
) -> None:
    location = f"circularDependencies[{index}]"
    if len(cycle.cycle) < 2 or cycle.cycle[0] != cycle.cycle[-1]:
        result.errors.append(
            ValidationMessage(
                path=path,
                key=location,
                message="Cycle is not a closed walk.",
            )
        )
        return

    expected = Cycle.from_path(list(cycle.cycle)).severity
    if cycle.severity != expected:
        result.errors.append(
            ValidationMessage(
                path=path,
                key=location,
                message=(
                    f"Severity {cycle.severity!r} does not match cycle length "
                    f"{cycle.length} (expected {expected!r})."
                ),
            )
        )


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_report",
]
