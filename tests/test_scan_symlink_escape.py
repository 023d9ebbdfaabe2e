from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from scan.files import _build_gitignore_matcher, find_module_files, read_documents

if TYPE_CHECKING:
    from pathlib import Path


def _write_module(root: Path, rel_path: str) -> None:
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("@Module({})\nexport class M {}\n", encoding="utf-8")


def _relative(root: Path, **kwargs: object) -> list[str]:
    return [
        path.relative_to(root).as_posix()
        for path in find_module_files(root, **kwargs)  # type: ignore[arg-type]
    ]


def test_find_module_files_sorted_by_relative_path(tmp_path: Path) -> None:
    for rel_path in (
        "src/modules/users/users.module.ts",
        "src/modules/auth/auth.module.ts",
        "src/modules/auth/auth.service.ts",
    ):
        _write_module(tmp_path, rel_path)

    assert _relative(tmp_path) == [
        "src/modules/auth/auth.module.ts",
        "src/modules/users/users.module.ts",
    ]


def test_module_globs_restrict_discovery(tmp_path: Path) -> None:
    _write_module(tmp_path, "src/modules/users/users.module.ts")
    _write_module(tmp_path, "src/shared/database/database.module.ts")
    _write_module(tmp_path, "src/app.module.ts")
    _write_module(tmp_path, "src/modules/users/nested/deep.module.ts")

    results = _relative(
        tmp_path,
        module_globs=["src/modules/*/*.module.ts", "src/shared/*/*.module.ts"],
    )

    assert results == [
        "src/modules/users/users.module.ts",
        "src/shared/database/database.module.ts",
    ]


def test_overlapping_globs_yield_each_file_once(tmp_path: Path) -> None:
    _write_module(tmp_path, "src/modules/users/users.module.ts")

    results = _relative(
        tmp_path, module_globs=["**/*.module.ts", "src/modules/*/*.module.ts"]
    )

    assert results == ["src/modules/users/users.module.ts"]


def test_include_and_exclude_patterns(tmp_path: Path) -> None:
    _write_module(tmp_path, "src/modules/users/users.module.ts")
    _write_module(tmp_path, "src/modules/legacy/legacy.module.ts")
    _write_module(tmp_path, "examples/demo/demo.module.ts")

    results = _relative(
        tmp_path,
        include_patterns=["src/**"],
        exclude_patterns=["src/modules/legacy/*"],
    )

    assert results == ["src/modules/users/users.module.ts"]


def test_root_gitignore_is_honoured(tmp_path: Path) -> None:
    _write_module(tmp_path, "src/modules/users/users.module.ts")
    _write_module(tmp_path, "dist/modules/users/users.module.ts")
    (tmp_path / ".gitignore").write_text("dist/**\n", encoding="utf-8")

    assert _relative(tmp_path) == ["src/modules/users/users.module.ts"]


def test_nested_gitignore_only_when_enabled(tmp_path: Path) -> None:
    _write_module(tmp_path, "src/modules/users/users.module.ts")
    _write_module(tmp_path, "src/modules/draft/draft.module.ts")
    (tmp_path / "src" / "modules" / ".gitignore").write_text(
        "draft.module.ts\n", encoding="utf-8"
    )

    assert len(_relative(tmp_path)) == 2
    assert _relative(tmp_path, nested_gitignore=True) == [
        "src/modules/users/users.module.ts"
    ]


def test_read_documents_skips_undecodable_files(tmp_path: Path) -> None:
    _write_module(tmp_path, "src/modules/users/users.module.ts")
    broken = tmp_path / "src" / "modules" / "broken" / "broken.module.ts"
    broken.parent.mkdir(parents=True)
    broken.write_bytes(b"\xff\xfe@Module")

    documents = read_documents(tmp_path, find_module_files(tmp_path))

    assert [doc.source_path for doc in documents] == [
        "src/modules/users/users.module.ts"
    ]
    assert documents[0].text.startswith("@Module")


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_find_module_files_skips_symlinked_dirs(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write_module(repo_root, "src/modules/users/users.module.ts")

    external_root = tmp_path / "external"
    _write_module(external_root, "leak/leak.module.ts")

    symlink_dir = repo_root / "src" / "modules" / "linked"
    symlink_dir.symlink_to(external_root / "leak", target_is_directory=True)

    results = _relative(repo_root)

    assert "src/modules/users/users.module.ts" in results
    assert "src/modules/linked/leak.module.ts" not in results


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_find_module_files_skips_symlinked_files(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write_module(repo_root, "src/modules/users/users.module.ts")

    external_root = tmp_path / "external"
    _write_module(external_root, "outside.module.ts")
    (repo_root / "src" / "modules" / "users" / "alias.module.ts").symlink_to(
        external_root / "outside.module.ts"
    )

    assert _relative(repo_root) == ["src/modules/users/users.module.ts"]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_nested_gitignore_skips_symlinked_gitignore(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write_module(repo_root, "src/modules/users/users.module.ts")
    (repo_root / ".gitignore").write_text("*.bin\n", encoding="utf-8")

    external_root = tmp_path / "external"
    external_root.mkdir()
    (external_root / "outside.gitignore").write_text(
        "src/modules/users/users.module.ts\n", encoding="utf-8"
    )

    symlink_gitignore = repo_root / "linked.gitignore"
    symlink_gitignore.symlink_to(external_root / "outside.gitignore")

    matcher = _build_gitignore_matcher(repo_root, nested_gitignore=True)
    assert matcher is not None
    assert (
        matcher(str(repo_root / "src" / "modules" / "users" / "users.module.ts"))
        is False
    )
