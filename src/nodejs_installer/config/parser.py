"""Readers for the package metadata the host build produces."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python 3.10

from ..errors import ManifestError
from ..packages import AliasPackage, CompletePackage, Package

logger = logging.getLogger(__name__)

MANIFEST_FILE = "pyproject.toml"
DEFAULT_INSTALLED_FILE = "vendor/installed.json"


def find_manifest_file(project_path: Path) -> Optional[Path]:
    """Find pyproject.toml in project root.

    Args:
        project_path: Root path of the project

    Returns:
        Path to pyproject.toml if found, None otherwise
    """
    manifest = project_path / MANIFEST_FILE
    if manifest.exists():
        return manifest
    return None


def load_root_package(project_path: Path) -> CompletePackage:
    """Load the root package from pyproject.toml.

    The ``[tool]`` table is the package's extension metadata, so the
    installer block lives under ``[tool.mouf.nodejs]``. A project without
    pyproject.toml is a root package with no metadata.

    Raises:
        ManifestError: If pyproject.toml exists but is not valid TOML
    """
    project_path = Path(project_path)
    manifest = find_manifest_file(project_path)
    if not manifest:
        return CompletePackage(name=project_path.name)

    try:
        with open(manifest, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {manifest}: {e}") from e

    project = data.get("project", {})
    extra = data.get("tool", {})
    if not isinstance(extra, dict):
        extra = {}

    return CompletePackage(
        name=project.get("name") or project_path.name,
        version=str(project.get("version", "0.0.0")),
        extra=extra,
    )


def _read_entries(data: Any, path: Path) -> List[Dict[str, Any]]:
    if isinstance(data, dict):
        data = data.get("packages", [])
    if not isinstance(data, list):
        raise ManifestError(f"Expected a list of packages in {path}")

    entries = []
    for entry in data:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise ManifestError(f"Package entries in {path} need a 'name'")
        entries.append(entry)
    return entries


def _resolve_alias(
    name: str,
    entries: Dict[str, Dict[str, Any]],
    packages: Dict[str, Package],
    path: Path,
    chain: List[str],
) -> Package:
    if name in packages:
        return packages[name]
    if name in chain:
        raise ManifestError(f"Alias cycle in {path}: {' -> '.join(chain + [name])}")
    if name not in entries:
        raise ManifestError(f"Alias target '{name}' not found in {path}")

    entry = entries[name]
    target = _resolve_alias(entry["alias_of"], entries, packages, path, chain + [name])
    alias = AliasPackage(
        name=entry["name"],
        version=str(entry.get("version", "0.0.0")),
        alias_of=target,
    )
    packages[name] = alias
    return alias


def load_installed_packages(path: Union[str, Path]) -> List[Package]:
    """Load the installed package list written by the host.

    The file is either ``{"packages": [...]}`` or a bare list. Entries carry
    ``name``, ``version`` and ``extra``; alias entries carry ``alias_of``
    naming another entry instead of ``extra``.

    Args:
        path: Path to the JSON file

    Returns:
        Packages in file order; an empty list when the file is missing

    Raises:
        ManifestError: On malformed JSON, entries or alias targets
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No installed package list at %s", path)
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e

    entries = _read_entries(data, path)
    by_name = {entry["name"]: entry for entry in entries}
    packages: Dict[str, Package] = {}

    for entry in entries:
        if "alias_of" in entry:
            continue
        extra = entry.get("extra", {})
        packages[entry["name"]] = CompletePackage(
            name=entry["name"],
            version=str(entry.get("version", "0.0.0")),
            extra=extra if isinstance(extra, dict) else {},
        )

    for entry in entries:
        if "alias_of" in entry:
            _resolve_alias(entry["name"], by_name, packages, path, [])

    return [packages[entry["name"]] for entry in entries]


def collect_packages(
    project_path: Path,
    installed_file: Optional[Union[str, Path]] = None,
) -> List[Package]:
    """Return every package of the build: installed ones, then the root."""
    project_path = Path(project_path)
    if installed_file is None:
        installed_file = project_path / DEFAULT_INSTALLED_FILE
    elif not Path(installed_file).is_absolute():
        installed_file = project_path / installed_file

    packages = load_installed_packages(installed_file)
    packages.append(load_root_package(project_path))
    return packages
