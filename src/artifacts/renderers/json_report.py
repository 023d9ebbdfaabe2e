"""Lossless JSON rendering of a dependency report."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.utils import _dump_json

if TYPE_CHECKING:
    from artifacts.models.report import DependencyReport


def render_json(report: DependencyReport) -> str:
    """Serialize the whole report; keys are sorted so output is byte-stable."""
    return _dump_json(report).decode("utf-8")


__all__ = ["render_json"]
