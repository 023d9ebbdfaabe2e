from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from artifacts.models.report import DependencyReport
from artifacts.renderers import render_report, resolve_format
from artifacts.summaries.builders import compute_metrics
from artifacts.utils import _write_text
from contract.artifacts import REPORT_FORMAT_SPECS, ReportFormat
from graph.algos import build_dependency_graph, find_cycles
from parse.module_decl import extract_module
from rules.config import CONFIG_FILENAME, ModGraphConfig, load_config
from scan.files import find_module_files, read_documents
from utils import path_to_module_name

if TYPE_CHECKING:
    from collections.abc import Iterable

    from artifacts.models.graph import ModuleNode

logger = logging.getLogger(__name__)


def build_report(
    documents: Iterable[tuple[str, str]],
    *,
    config: ModGraphConfig | None = None,
) -> DependencyReport:
    """Run extraction, graph building, cycle detection and metrics.

    Args:
        documents: ``(source_path, raw_text)`` pairs, one per module document
        config: Optional configuration for naming and extraction heuristics

    Returns:
        The completed report. No documents (or none declaring a module)
        yields an empty report rather than an error.
    """
    if config is None:
        config = ModGraphConfig()

    modules: list[ModuleNode] = []
    for source_path, text in documents:
        node = extract_module(
            source_path,
            text,
            name=path_to_module_name(source_path, config.shared_dirs),
            rules=config.extraction,
            use_class_name=config.naming == "class",
        )
        if node is not None:
            modules.append(node)

    if not modules:
        logger.info("no modules found; reporting an empty graph")

    graph = build_dependency_graph(modules)
    if config.naming == "path" and graph.edges:
        known = set(graph.module_names())
        if not any(edge.to in known for edge in graph.edges):
            logger.warning(
                "none of %d imports matched a module name; imports usually name "
                "classes, so set naming = \"class\" in %s to resolve them",
                len(graph.edges),
                CONFIG_FILENAME,
            )

    return DependencyReport(
        modules=graph.modules,
        edges=graph.edges,
        circular_dependencies=find_cycles(graph),
        metrics=compute_metrics(graph),
    )


def analyze_root(
    root: Path,
    *,
    config: ModGraphConfig | None = None,
) -> DependencyReport:
    """Discover module documents under ``root`` and analyze them."""
    if config is None:
        config = load_config(root)

    paths = find_module_files(
        root,
        module_globs=config.module_globs,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    )
    documents = read_documents(root, paths)
    logger.info("discovered %d module documents under %s", len(documents), root)
    return build_report(documents, config=config)


def default_output_path(root: Path, fmt: ReportFormat | str) -> Path:
    """Where a report lands when no destination is given."""
    return root / REPORT_FORMAT_SPECS[resolve_format(fmt)].filename


def write_report(
    report: DependencyReport,
    fmt: ReportFormat | str,
    destination: Path | None = None,
) -> str:
    """Render ``report`` and, when ``destination`` is given, write it there.

    Raises:
        UnsupportedFormatError: If ``fmt`` is not a ReportFormat value.
    """
    rendered = render_report(report, fmt)
    if destination is not None:
        _write_text(Path(destination), rendered)
        logger.info("%s report written to %s", resolve_format(fmt).value, destination)
    return rendered
