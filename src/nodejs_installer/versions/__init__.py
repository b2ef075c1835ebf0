"""Node.js release catalog and version constraint matching."""

from .catalog import DEFAULT_DIST_URL, VersionCatalog
from .matcher import VersionMatcher, parse_constraint, parse_version

__all__ = [
    "DEFAULT_DIST_URL",
    "VersionCatalog",
    "VersionMatcher",
    "parse_constraint",
    "parse_version",
]
