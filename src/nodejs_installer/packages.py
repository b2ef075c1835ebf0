"""Package graph model: complete packages and aliases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Union

# extra["mouf"]["nodejs"] holds the installer's metadata block
EXTRA_NAMESPACE = "mouf"
EXTRA_TOOL = "nodejs"


@dataclass(frozen=True)
class CompletePackage:
    """A package carrying its own metadata."""

    name: str
    version: str = "0.0.0"
    extra: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AliasPackage:
    """A package published under another name/version of a real package."""

    name: str
    version: str
    alias_of: "Package"


Package = Union[CompletePackage, AliasPackage]


def unwrap(package: Package) -> CompletePackage:
    """Follow aliases until the underlying complete package is reached."""
    if isinstance(package, AliasPackage):
        return unwrap(package.alias_of)
    return package


def get_nodejs_block(package: Package) -> Dict[str, Any]:
    """Return the package's ``nodejs`` metadata block, or an empty dict.

    Malformed blocks (non-mappings at any level) read as absent.
    """
    extra = unwrap(package).extra
    namespace = extra.get(EXTRA_NAMESPACE) if isinstance(extra, Mapping) else None
    if not isinstance(namespace, Mapping):
        return {}
    block = namespace.get(EXTRA_TOOL)
    if not isinstance(block, Mapping):
        return {}
    return dict(block)
