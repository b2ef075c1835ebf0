"""Filesystem primitives used by install and uninstall.

Only the standard library is used here: uninstall runs these after the
rest of the installer may already be gone.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Union

# Everything the installer may write into the host bin directory
SHIM_NAMES = ("node", "npm", "node.bat", "npm.bat")


def remove(path: Union[str, Path]) -> bool:
    """Remove a file, symlink or directory tree.

    Returns:
        True if something was removed, False if nothing existed
    """
    path = Path(path)
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False


def is_dir_empty(path: Union[str, Path]) -> bool:
    """Check that ``path`` is an existing directory with no entries."""
    path = Path(path)
    return path.is_dir() and not any(path.iterdir())
