"""Merging of the Node.js version constraints declared across packages."""

from __future__ import annotations

from typing import Iterable, List, Set

from .packages import Package, get_nodejs_block, unwrap

WILDCARD = "*"
SEPARATOR = ", "


def declared_constraint(package: Package) -> str:
    """Return the constraint a single package declares, or ``""``."""
    version = get_nodejs_block(package).get("version")
    if isinstance(version, str):
        return version.strip()
    return ""


def merge_version_constraints(packages: Iterable[Package]) -> str:
    """Merge the constraints of every package into one expression.

    Aliases are resolved to the package they point at, and each underlying
    package contributes at most once. Constraints are joined with ``", "``,
    which the version matcher reads as a conjunction.

    Args:
        packages: Installed packages followed by the root package

    Returns:
        The joined constraints, or ``"*"`` when no package declares one
    """
    seen: Set[int] = set()
    versions: List[str] = []

    for package in packages:
        complete = unwrap(package)
        if id(complete) in seen:
            continue
        seen.add(id(complete))

        constraint = declared_constraint(complete)
        if constraint:
            versions.append(constraint)

    if versions:
        return SEPARATOR.join(versions)
    return WILDCARD
