"""Report renderers, one per ReportFormat."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.renderers.dot import render_dot
from artifacts.renderers.json_report import render_json
from artifacts.renderers.mermaid import render_mermaid
from artifacts.renderers.text import render_text
from contract.artifacts import ReportFormat

if TYPE_CHECKING:
    from collections.abc import Callable

    from artifacts.models.report import DependencyReport

_RENDERERS: dict[ReportFormat, Callable[[DependencyReport], str]] = {
    ReportFormat.TEXT: render_text,
    ReportFormat.JSON: render_json,
    ReportFormat.MERMAID: render_mermaid,
    ReportFormat.DOT: render_dot,
}


class UnsupportedFormatError(ValueError):
    """Raised when a caller asks for a format outside ReportFormat."""

    def __init__(self, requested: object) -> None:
        self.requested = requested
        supported = ", ".join(fmt.value for fmt in ReportFormat)
        super().__init__(
            f"Unsupported report format {requested!r} (supported: {supported})"
        )


def resolve_format(fmt: ReportFormat | str) -> ReportFormat:
    """Coerce a format selector, failing closed on unknown values."""
    try:
        return ReportFormat(fmt)
    except ValueError as exc:
        raise UnsupportedFormatError(fmt) from exc


def render_report(report: DependencyReport, fmt: ReportFormat | str) -> str:
    """Render ``report`` in the selected format."""
    return _RENDERERS[resolve_format(fmt)](report)


__all__ = [
    "UnsupportedFormatError",
    "render_dot",
    "render_json",
    "render_mermaid",
    "render_report",
    "render_text",
    "resolve_format",
]
