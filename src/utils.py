"""Shared utilities for modgraph."""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9]")


def path_to_module_name(
    file_path: str | Path,
    shared_dirs: Iterable[str] = ("shared",),
) -> str:
    """Derive a module name from the location of its module document.

    Args:
        file_path: Relative path of the module document
        shared_dirs: Directory names whose children are prefixed with the
            directory name

    Returns:
        Module name (the name of the directory holding the document)

    Examples:
        >>> path_to_module_name("src/modules/users/users.module.ts")
        'users'
        >>> path_to_module_name("src/shared/database/database.module.ts")
        'shared/database'
        >>> path_to_module_name("app.module.ts")
        'app'
    """
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    parts = PurePosixPath(path_str.replace("\\", "/")).parts

    # Documents at the root are named after the file (app.module.ts -> app).
    if len(parts) < 2:
        return parts[0].split(".")[0] if parts else ""

    directory = parts[-2]
    if len(parts) >= 3 and parts[-3] in set(shared_dirs):
        return f"{parts[-3]}/{directory}"
    return directory


def sanitize_identifier(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9]`` with ``_``.

    Examples:
        >>> sanitize_identifier("shared/database")
        'shared_database'
    """
    return _NON_IDENTIFIER.sub("_", name)


def assign_node_ids(
    names: Iterable[str],
    reserved: Iterable[str] = (),
) -> dict[str, str]:
    """Map each name to a distinct graph identifier.

    Identifiers come from ``sanitize_identifier``. One that starts with a
    digit or matches a ``reserved`` keyword (case-insensitively) gets an
    ``m_`` prefix, and one already taken by an earlier name gets a numeric
    suffix. Names are assigned in iteration order, so the mapping is stable.

    Examples:
        >>> assign_node_ids(["a-b", "a_b", "end"], reserved=["end"])
        {'a-b': 'a_b', 'a_b': 'a_b_2', 'end': 'm_end'}
    """
    keywords = {word.lower() for word in reserved}
    ids: dict[str, str] = {}
    used: set[str] = set()
    for name in names:
        if name in ids:
            continue
        base = sanitize_identifier(name) or "_"
        if base[0].isdigit() or base.lower() in keywords:
            base = f"m_{base}"
        node_id = base
        suffix = 2
        while node_id in used:
            node_id = f"{base}_{suffix}"
            suffix += 1
        used.add(node_id)
        ids[name] = node_id
    return ids
