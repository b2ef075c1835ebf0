"""Installs a Node.js matching the version constraints of a project's packages."""

from .constraints import merge_version_constraints
from .errors import (
    CatalogUnavailableError,
    ConstraintSyntaxError,
    ConstraintUnsatisfiableError,
    DownloadError,
    ManifestError,
    NodeJsInstallerError,
    SettingsError,
    UnsupportedPlatformError,
)
from .orchestrator import Mode, NodeJsOrchestrator, Outcome, uninstall
from .packages import AliasPackage, CompletePackage, unwrap
from .settings import DEFAULT_SETTINGS, Settings, load_settings, merge_settings

__all__ = [
    "AliasPackage",
    "CatalogUnavailableError",
    "CompletePackage",
    "ConstraintSyntaxError",
    "ConstraintUnsatisfiableError",
    "DEFAULT_SETTINGS",
    "DownloadError",
    "ManifestError",
    "Mode",
    "NodeJsInstallerError",
    "NodeJsOrchestrator",
    "Outcome",
    "Settings",
    "SettingsError",
    "UnsupportedPlatformError",
    "load_settings",
    "merge_settings",
    "merge_version_constraints",
    "uninstall",
    "unwrap",
]
