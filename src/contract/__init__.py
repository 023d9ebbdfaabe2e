"""Stable contract surface for modgraph reports.

Report formats, default filenames and report validation. Downstream tooling
should consume the JSON format and may validate it with ``validate_report``.
"""

from contract.artifacts import (
    DEPENDENCY_GRAPH_DOT,
    DEPENDENCY_GRAPH_MMD,
    DEPENDENCY_REPORT_JSON,
    DEPENDENCY_REPORT_TXT,
    REPORT_FORMAT_SPECS,
    ReportFormat,
    ReportFormatSpec,
)


def __getattr__(name: str) -> object:
    if name in {"ValidationMessage", "ValidationResult", "validate_report"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_report,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_report": validate_report,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "DEPENDENCY_GRAPH_DOT",
    "DEPENDENCY_GRAPH_MMD",
    "DEPENDENCY_REPORT_JSON",
    "DEPENDENCY_REPORT_TXT",
    "REPORT_FORMAT_SPECS",
    "ReportFormat",
    "ReportFormatSpec",
    "ValidationMessage",
    "ValidationResult",
    "validate_report",
]
