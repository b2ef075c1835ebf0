"""Utility modules (path, filesystem)."""

from .filesystem import SHIM_NAMES, is_dir_empty, remove
from .path import relative_posix_path, resolve_project_path

__all__ = [
    "SHIM_NAMES",
    "is_dir_empty",
    "remove",
    "relative_posix_path",
    "resolve_project_path",
]
