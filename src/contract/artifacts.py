"""Report format contract definitions.

This module defines the closed set of report formats and the stable default
filenames used when a report is written to disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Default output filenames (stable contract identifiers).
DEPENDENCY_REPORT_JSON = "dependency-report.json"
DEPENDENCY_GRAPH_MMD = "dependency-graph.mmd"
DEPENDENCY_GRAPH_DOT = "dependency-graph.dot"
DEPENDENCY_REPORT_TXT = "dependency-report.txt"


class ReportFormat(str, Enum):
    """Output formats understood by the report renderer."""

    TEXT = "text"
    JSON = "json"
    MERMAID = "mermaid"
    DOT = "dot"


@dataclass(frozen=True)
class ReportFormatSpec:
    """Specification for one report format."""

    filename: str
    description: str


REPORT_FORMAT_SPECS: dict[ReportFormat, ReportFormatSpec] = {
    ReportFormat.TEXT: ReportFormatSpec(
        filename=DEPENDENCY_REPORT_TXT,
        description="Human-readable summary.",
    ),
    ReportFormat.JSON: ReportFormatSpec(
        filename=DEPENDENCY_REPORT_JSON,
        description="Lossless DependencyReport serialization.",
    ),
    ReportFormat.MERMAID: ReportFormatSpec(
        filename=DEPENDENCY_GRAPH_MMD,
        description="Mermaid flowchart with cycle members highlighted.",
    ),
    ReportFormat.DOT: ReportFormatSpec(
        filename=DEPENDENCY_GRAPH_DOT,
        description="Graphviz digraph with cycle members coloured red.",
    ),
}


__all__ = [
    "DEPENDENCY_GRAPH_DOT",
    "DEPENDENCY_GRAPH_MMD",
    "DEPENDENCY_REPORT_JSON",
    "DEPENDENCY_REPORT_TXT",
    "REPORT_FORMAT_SPECS",
    "ReportFormat",
    "ReportFormatSpec",
]
