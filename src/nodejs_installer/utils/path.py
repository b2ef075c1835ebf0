"""Path resolution utilities for project-relative paths."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union


def resolve_project_path(
    path: Union[str, Path],
    project_root: Union[str, Path],
) -> Path:
    """Resolve a path relative to the project root.

    Handles both absolute and relative paths correctly:
    - Absolute paths: returned as-is (resolved to canonical form)
    - Relative paths: resolved relative to project_root

    Args:
        path: Path to resolve (can be absolute or relative)
        project_root: Root directory of the project

    Returns:
        Resolved absolute Path object

    Examples:
        >>> resolve_project_path("vendor/nodejs/nodejs", "/project")
        Path("/project/vendor/nodejs/nodejs")

        >>> resolve_project_path("/opt/node", "/project")
        Path("/opt/node")
    """
    path_obj = Path(path)
    project_root_obj = Path(project_root).resolve()

    if path_obj.is_absolute():
        return path_obj.resolve()

    return (project_root_obj / path_obj).resolve()


def relative_posix_path(path: Union[str, Path], start: Union[str, Path]) -> str:
    """Return ``path`` relative to ``start`` with forward slashes.

    Unlike ``Path.relative_to`` this walks up with ``..`` when ``path`` is
    not below ``start``, which is what a bin script needs to reach a sibling
    vendor directory.

    Examples:
        >>> relative_posix_path("/project/vendor/nodejs/nodejs", "/project/vendor/bin")
        "../nodejs/nodejs"
    """
    relative = os.path.relpath(Path(path).resolve(), Path(start).resolve())
    return relative.replace(os.sep, "/")
