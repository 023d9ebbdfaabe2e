"""Report generation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from artifacts.models.report import DependencyReport
    from rules.config import ModGraphConfig


def build_report(
    documents: Iterable[tuple[str, str]],
    *,
    config: ModGraphConfig | None = None,
) -> DependencyReport:
    """Build a report via lazy import to avoid package import cycles."""
    from artifacts.write import build_report as _build_report

    return _build_report(documents, config=config)


__all__ = ["build_report"]
