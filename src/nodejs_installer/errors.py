"""Exceptions raised by the Node.js installer."""

from __future__ import annotations


class NodeJsInstallerError(Exception):
    """Base class for every fatal installer condition."""


class ConstraintUnsatisfiableError(NodeJsInstallerError):
    """Raised when no published Node.js release matches the constraint."""

    def __init__(self, constraint: str):
        self.constraint = constraint
        super().__init__(
            f"No NodeJS version could be found for constraint '{constraint}'"
        )


class ConstraintSyntaxError(NodeJsInstallerError):
    """Raised when a version constraint cannot be parsed."""

    def __init__(self, constraint: str, term: str):
        self.constraint = constraint
        self.term = term
        super().__init__(f"Invalid term '{term}' in version constraint '{constraint}'")


class CatalogUnavailableError(NodeJsInstallerError):
    """Raised when the list of Node.js releases cannot be fetched."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Unable to fetch NodeJS versions from {url}: {reason}")


class DownloadError(NodeJsInstallerError):
    """Raised when a Node.js archive cannot be downloaded or unpacked."""


class SettingsError(NodeJsInstallerError):
    """Raised when the nodejs settings block is invalid."""


class ManifestError(NodeJsInstallerError):
    """Raised when the package metadata files cannot be read."""


class UnsupportedPlatformError(NodeJsInstallerError, ValueError):
    """Raised when nodejs.org publishes no binaries for this OS/CPU."""
