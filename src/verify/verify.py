"""Determinism verification for modgraph JSON reports."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from artifacts.renderers import render_json
from artifacts.write import analyze_root

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import ModGraphConfig


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    diff: tuple[str, ...] = field(default_factory=tuple)


def verify_determinism(
    *,
    root: Path,
    report_path: Path,
    config: ModGraphConfig | None = None,
) -> DeterminismResult:
    """Verify that an existing JSON report matches a fresh analysis.

    Re-analyzes ``root`` and compares the rendered JSON byte-for-byte with
    the report on disk.

    Args:
        root: Repository root to analyze.
        report_path: Existing JSON report to verify.
        config: Optional configuration; loaded from ``root`` when omitted.

    Returns:
        DeterminismResult with ok status and a unified diff of any mismatch.

    Raises:
        FileNotFoundError: If report_path does not exist.
        IsADirectoryError: If report_path is a directory.
    """
    if not report_path.exists():
        msg = f"Report file does not exist: {report_path}"
        raise FileNotFoundError(msg)
    if report_path.is_dir():
        msg = f"Report path is a directory: {report_path}"
        raise IsADirectoryError(msg)

    original = report_path.read_text(encoding="utf-8")
    regenerated = render_json(analyze_root(root, config=config))
    if original == regenerated:
        return DeterminismResult(ok=True)

    diff = difflib.unified_diff(
        original.splitlines(),
        regenerated.splitlines(),
        fromfile=str(report_path),
        tofile="regenerated",
        lineterm="",
    )
    return DeterminismResult(ok=False, diff=tuple(diff))
