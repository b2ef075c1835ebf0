"""Package metadata loading for the Node.js installer."""

from .parser import (
    collect_packages,
    find_manifest_file,
    load_installed_packages,
    load_root_package,
)

__all__ = [
    "collect_packages",
    "find_manifest_file",
    "load_installed_packages",
    "load_root_package",
]
