from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

import pytest

from artifacts import build_report
from artifacts.renderers import render_json
from artifacts.write import analyze_root
from rules.config import ModGraphConfig

FIXTURE_ROOT = Path(__file__).parent / "fixtures" / "nest_app"

CLASS_NAMING = ModGraphConfig(naming="class")


def _doc(name: str, *imports: str) -> tuple[str, str]:
    directory = name.lower()
    text = (
        "@Module({\n"
        f"  imports: [{', '.join(imports)}],\n"
        "})\n"
        f"export class {name} {{}}\n"
    )
    return f"src/modules/{directory}/{directory}.module.ts", text


def test_mutual_imports_yield_one_error_cycle() -> None:
    report = build_report([_doc("A", "B"), _doc("B", "A")], config=CLASS_NAMING)

    assert report.metrics.total_edges == 2
    assert len(report.circular_dependencies) == 1
    cycle = report.circular_dependencies[0]
    assert cycle.cycle in {("A", "B", "A"), ("B", "A", "B")}
    assert cycle.severity == "error"


def test_three_module_ring_yields_one_warning_cycle() -> None:
    report = build_report(
        [_doc("A", "B"), _doc("B", "C"), _doc("C", "A")], config=CLASS_NAMING
    )

    assert len(report.circular_dependencies) == 1
    assert len(report.circular_dependencies[0].cycle) == 4
    assert report.circular_dependencies[0].severity == "warning"


def test_orphans_exclude_imported_modules() -> None:
    report = build_report(
        [_doc("A", "E"), _doc("D"), _doc("E")], config=CLASS_NAMING
    )

    assert "D" in report.metrics.orphan_modules
    assert "E" not in report.metrics.orphan_modules


def test_empty_input_yields_empty_report() -> None:
    report = build_report([])
    payload = json.loads(render_json(report))

    assert payload["metrics"]["totalModules"] == 0
    assert payload["metrics"]["totalEdges"] == 0
    assert payload["metrics"]["avgDependencies"] == 0
    assert payload["metrics"]["maxDependencies"] == {"module": "", "count": 0}
    assert payload["circularDependencies"] == []
    assert payload["modules"] == []
    assert payload["edges"] == []


def test_documents_without_module_declaration_contribute_nothing() -> None:
    report = build_report(
        [("src/modules/a/a.service.ts", "export class AService {}\n")]
    )

    assert report.modules == ()


def test_unknown_import_keeps_dangling_edge_in_json() -> None:
    report = build_report([_doc("A", "Z")], config=CLASS_NAMING)
    payload = json.loads(render_json(report))

    assert payload["edges"] == [{"from": "A", "to": "Z", "kind": "import"}]
    assert [module["name"] for module in payload["modules"]] == ["A"]
    assert payload["metrics"]["unresolvedImports"] == ["Z"]


def test_self_import_never_becomes_an_edge() -> None:
    report = build_report([_doc("A", "A", "B")], config=CLASS_NAMING)

    assert [(edge.from_module, edge.to) for edge in report.edges] == [("A", "B")]
    assert report.circular_dependencies == ()


def test_path_naming_prefixes_shared_modules() -> None:
    documents = [
        ("src/modules/users/users.module.ts", "@Module({ imports: [] })\n"),
        ("src/shared/database/database.module.ts", "@Module({ imports: [] })\n"),
    ]

    report = build_report(documents)

    assert [module.name for module in report.modules] == ["users", "shared/database"]


def test_json_output_is_byte_identical_across_runs() -> None:
    documents = [_doc("A", "B", "Z"), _doc("B", "C"), _doc("C", "A"), _doc("D")]

    first = render_json(build_report(documents, config=CLASS_NAMING))
    second = render_json(build_report(list(documents), config=CLASS_NAMING))

    assert first == second


def test_json_round_trips_module_fields() -> None:
    text = (
        "@Module({\n"
        "  imports: [AuthModule],\n"
        "  controllers: [UsersController],\n"
        "  providers: [UsersService],\n"
        "  exports: [UsersService],\n"
        "})\n"
        "export class UsersModule {}\n"
    )
    report = build_report([("src/modules/users/users.module.ts", text)])
    payload = json.loads(render_json(report))

    assert payload["modules"] == [
        {
            "name": "users",
            "sourcePath": "src/modules/users/users.module.ts",
            "imports": ["AuthModule"],
            "exports": ["UsersService"],
            "providers": ["UsersService"],
            "controllers": ["UsersController"],
        }
    ]


def test_analyze_root_on_fixture(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    shutil.copytree(FIXTURE_ROOT, repo_root)

    report = analyze_root(repo_root)

    assert [module.name for module in report.modules] == [
        "AuthModule",
        "BillingModule",
        "HealthModule",
        "NotificationsModule",
        "OrdersModule",
        "UsersModule",
        "DatabaseModule",
    ]
    assert report.metrics.total_edges == 10
    assert report.metrics.avg_dependencies == 1.43
    assert report.metrics.max_dependencies.module == "AuthModule"
    assert report.metrics.max_dependencies.count == 3
    assert report.metrics.orphan_modules == ("HealthModule",)
    assert report.metrics.unresolved_imports == ("JwtModule", "TypeOrmModule")

    cycles = {cycle.key: cycle.severity for cycle in report.circular_dependencies}
    assert cycles == {
        ("AuthModule", "UsersModule"): "error",
        ("BillingModule", "NotificationsModule", "OrdersModule"): "warning",
    }

    auth = report.graph.get("AuthModule")
    assert auth is not None
    assert auth.imports == ("UsersModule", "JwtModule", "DatabaseModule")
    assert auth.providers == ("AuthService", "RolesGuard")
    assert auth.controllers == ("AuthController",)

    database = report.graph.get("DatabaseModule")
    assert database is not None
    assert database.imports == ("TypeOrmModule",)
    assert database.exports == ("TypeOrmModule",)


def test_path_naming_warns_when_no_import_resolves(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="artifacts.write"):
        report = build_report([_doc("A", "B"), _doc("B", "A")])

    assert report.circular_dependencies == ()
    assert 'set naming = "class" in modgraph.toml' in caplog.text


def test_class_naming_does_not_warn(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="artifacts.write"):
        build_report([_doc("A", "B"), _doc("B", "A")], config=CLASS_NAMING)

    assert "naming" not in caplog.text
