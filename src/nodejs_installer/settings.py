"""Installer settings read from the root package's ``nodejs`` block."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from .errors import SettingsError
from .packages import Package, get_nodejs_block

# Metadata key -> Settings attribute
SETTING_KEYS: Dict[str, str] = {
    "targetDir": "target_dir",
    "forceLocal": "force_local",
    "includeBinInPath": "include_bin_in_path",
}

# Declared by every package, consumed by the constraint merger instead
VERSION_KEY = "version"


@dataclass(frozen=True)
class Settings:
    """Immutable installer settings.

    Attributes:
        target_dir: Where the local Node.js copy is cached (project relative)
        force_local: Skip global install detection entirely
        include_bin_in_path: Register the bin directory in PATH after install
    """

    target_dir: str = "vendor/nodejs/nodejs"
    force_local: bool = False
    include_bin_in_path: bool = False

    def as_metadata(self) -> Dict[str, Any]:
        """Return the settings keyed the way package metadata spells them."""
        return {key: getattr(self, attr) for key, attr in SETTING_KEYS.items()}


DEFAULT_SETTINGS = Settings()


def normalize_target_dir(value: Any) -> str:
    """Strip surrounding slashes and use forward slashes throughout."""
    if not isinstance(value, str):
        raise SettingsError(f"'targetDir' must be a string, got {type(value).__name__}")

    normalized = value.strip("/\\").replace("\\", "/")
    if not normalized:
        raise SettingsError("'targetDir' must not be empty")
    return normalized


def merge_settings(defaults: Settings, overrides: Mapping[str, Any]) -> Settings:
    """Merge a metadata override block on top of ``defaults``.

    Args:
        defaults: Base settings
        overrides: Mapping keyed by metadata names (``targetDir`` ...)

    Returns:
        A new Settings instance

    Raises:
        SettingsError: On unknown keys or values of the wrong type
    """
    unknown = sorted(set(overrides) - set(SETTING_KEYS))
    if unknown:
        supported = ", ".join(SETTING_KEYS)
        raise SettingsError(
            f"Unknown nodejs setting(s): {', '.join(unknown)}. "
            f"Supported settings: {supported}"
        )

    values = defaults.as_metadata()
    values.update(overrides)

    for key in ("forceLocal", "includeBinInPath"):
        if not isinstance(values[key], bool):
            raise SettingsError(
                f"'{key}' must be a boolean, got {type(values[key]).__name__}"
            )

    return Settings(
        target_dir=normalize_target_dir(values["targetDir"]),
        force_local=values["forceLocal"],
        include_bin_in_path=values["includeBinInPath"],
    )


def load_settings(root_package: Package, defaults: Settings = DEFAULT_SETTINGS) -> Settings:
    """Build settings from the root package's extension metadata."""
    block = dict(get_nodejs_block(root_package))
    block.pop(VERSION_KEY, None)
    return merge_settings(defaults, block)
