"""Bin directory shims that start the selected node and npm."""

from __future__ import annotations

import logging
import os
import shlex
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..runtime.specs import HostPlatform
from ..runtime.types import InstalledRuntime
from ..utils.path import relative_posix_path

logger = logging.getLogger(__name__)

_SH_HEADER = '#!/usr/bin/env sh\nDIR=$(cd "$(dirname "$0")" && pwd)\n'


def _sh_quote_inner(value: str) -> str:
    """Escape a value for use inside a double-quoted sh string."""
    for char in ("\\", '"', "$", "`"):
        value = value.replace(char, "\\" + char)
    return value


def _local_sh(rel: str, platform: HostPlatform) -> Dict[str, str]:
    layout = platform.layout
    base = f"$DIR/{_sh_quote_inner(rel)}"
    path_dir = base if layout.bin_dir == "." else f"{base}/{layout.bin_dir}"
    return {
        "node": f'{_SH_HEADER}exec "{base}/{layout.executable_path}" "$@"\n',
        "npm": (
            f'{_SH_HEADER}PATH="{path_dir}:$PATH"\nexport PATH\n'
            f'exec "{base}/{layout.companion_path}" "$@"\n'
        ),
    }


def _global_sh(runtime: InstalledRuntime) -> Dict[str, str]:
    npm_path = runtime.companion_path or os.path.join(os.path.dirname(runtime.path), "npm")
    node_dir = os.path.dirname(runtime.path)
    return {
        "node": f'#!/usr/bin/env sh\nexec {shlex.quote(runtime.path)} "$@"\n',
        "npm": (
            f"#!/usr/bin/env sh\nPATH={shlex.quote(node_dir)}:\"$PATH\"\nexport PATH\n"
            f'exec {shlex.quote(npm_path)} "$@"\n'
        ),
    }


def _local_bat(rel: str, platform: HostPlatform) -> Dict[str, str]:
    layout = platform.layout
    base = "%~dp0" + rel.replace("/", "\\")
    path_dir = base if layout.bin_dir == "." else base + "\\" + layout.bin_dir.replace("/", "\\")
    node = base + "\\" + layout.executable_path.replace("/", "\\")
    npm = base + "\\" + layout.companion_path.replace("/", "\\")
    return {
        "node.bat": f'@"{node}" %*\r\n',
        "npm.bat": f'@SETLOCAL\r\n@SET "PATH={path_dir};%PATH%"\r\n@"{npm}" %*\r\n',
    }


def _global_bat(runtime: InstalledRuntime) -> Dict[str, str]:
    npm_path = runtime.companion_path or os.path.join(os.path.dirname(runtime.path), "npm.cmd")
    node_dir = os.path.dirname(runtime.path)
    return {
        "node.bat": f'@"{runtime.path}" %*\r\n',
        "npm.bat": f'@SETLOCAL\r\n@SET "PATH={node_dir};%PATH%"\r\n@"{npm_path}" %*\r\n',
    }


def render_bin_scripts(
    bin_dir: Union[str, Path],
    target_dir: Union[str, Path],
    platform: HostPlatform,
    global_runtime: Optional[InstalledRuntime] = None,
) -> Dict[str, str]:
    """Return ``{shim name: content}`` for the selected runtime.

    Local shims address ``target_dir`` relative to ``bin_dir`` so the project
    can move; global shims use the global install's absolute paths.
    """
    if global_runtime is not None:
        scripts = _global_sh(global_runtime)
        if platform.is_windows:
            scripts.update(_global_bat(global_runtime))
        return scripts

    rel = relative_posix_path(target_dir, bin_dir)
    scripts = _local_sh(rel, platform)
    if platform.is_windows:
        scripts.update(_local_bat(rel, platform))
    return scripts


def create_bin_scripts(
    bin_dir: Union[str, Path],
    target_dir: Union[str, Path],
    platform: HostPlatform,
    global_runtime: Optional[InstalledRuntime] = None,
) -> List[Path]:
    """(Re)write the node and npm shims into ``bin_dir``.

    Args:
        bin_dir: Host bin directory
        target_dir: Local Node.js install (used when global_runtime is None)
        platform: Platform the shims are written for
        global_runtime: Global install to point at, or None for the local one

    Returns:
        Paths of the written shims
    """
    bin_path = Path(bin_dir)
    bin_path.mkdir(parents=True, exist_ok=True)

    written = []
    for name, content in render_bin_scripts(bin_dir, target_dir, platform, global_runtime).items():
        shim = bin_path / name
        # newline="" keeps the \r\n of batch files as written
        with open(shim, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        shim.chmod(0o755)
        written.append(shim)

    target = global_runtime.path if global_runtime else str(target_dir)
    logger.info(" - Bin scripts in %s point to %s", bin_path, target)
    return written


def register_path(bin_dir: Union[str, Path]) -> bool:
    """Prepend ``bin_dir`` to this process's PATH.

    Returns:
        True if PATH changed, False if ``bin_dir`` was already on it
    """
    bin_dir = os.path.abspath(bin_dir)
    current = os.environ.get("PATH", "")
    entries = [entry for entry in current.split(os.pathsep) if entry]

    if any(os.path.normcase(os.path.abspath(e)) == os.path.normcase(bin_dir) for e in entries):
        return False

    os.environ["PATH"] = os.pathsep.join([bin_dir] + entries)
    logger.info(" - Added %s to PATH", bin_dir)
    return True


def path_export_line(bin_dir: Union[str, Path]) -> str:
    """Shell line putting ``bin_dir`` first on PATH, for the host to eval.

    Examples:
        >>> path_export_line("/project/vendor/bin")
        'export PATH=/project/vendor/bin:"$PATH"'
    """
    return f'export PATH={shlex.quote(os.path.abspath(bin_dir))}{os.pathsep}"$PATH"'
