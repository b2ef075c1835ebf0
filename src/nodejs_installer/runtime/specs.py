"""Declarative description of the Node.js runtime on each platform.

This is DATA, not code. Node's dist naming and archive layout live here.
"""

import platform as _platform
from dataclasses import dataclass
from typing import Dict, List

from ..errors import UnsupportedPlatformError


@dataclass(frozen=True)
class VersionCheck:
    """Configuration for checking runtime version."""
    args: List[str]
    parse: str  # Regex pattern to extract version


@dataclass(frozen=True)
class LocalLayout:
    """Where node and npm sit inside an extracted Node.js archive."""
    executable_path: str
    companion_path: str
    bin_dir: str  # Directory to put on PATH so npm finds node


@dataclass(frozen=True)
class RuntimeSpec:
    """Complete runtime specification for Node.js."""
    display_name: str
    executable_name: str
    companion_name: str
    version_check: VersionCheck
    layouts: Dict[str, LocalLayout]
    archive_ext: Dict[str, str]


NODE_SPEC = RuntimeSpec(
    display_name="Node.js",
    executable_name="node",
    companion_name="npm",
    version_check=VersionCheck(
        args=["--version"],
        parse=r"v?(\d+\.\d+\.\d+)",
    ),
    layouts={
        "posix": LocalLayout(
            executable_path="bin/node",
            companion_path="bin/npm",
            bin_dir="bin",
        ),
        "win": LocalLayout(
            executable_path="node.exe",
            companion_path="npm.cmd",
            bin_dir=".",
        ),
    },
    archive_ext={"linux": "tar.gz", "darwin": "tar.gz", "win": "zip"},
)


# platform.system() -> Node dist os name
OS_NAMES: Dict[str, str] = {
    "linux": "linux",
    "darwin": "darwin",
    "windows": "win",
}

# platform.machine() -> Node dist arch name
ARCH_NAMES: Dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "armv7l",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
}


@dataclass(frozen=True)
class HostPlatform:
    """Operating system and CPU, spelled the way nodejs.org/dist does."""

    os: str
    arch: str

    @property
    def is_windows(self) -> bool:
        return self.os == "win"

    @property
    def layout(self) -> LocalLayout:
        return NODE_SPEC.layouts["win" if self.is_windows else "posix"]

    @property
    def archive_ext(self) -> str:
        return NODE_SPEC.archive_ext[self.os]


def detect_platform() -> HostPlatform:
    """Detect the current platform.

    Raises:
        UnsupportedPlatformError: If Node.js publishes no binaries for this platform
    """
    system = _platform.system().lower()
    machine = _platform.machine().lower()

    if system not in OS_NAMES:
        raise UnsupportedPlatformError(f"Operating system '{system}' not supported by Node.js binaries")
    if machine not in ARCH_NAMES:
        raise UnsupportedPlatformError(f"Architecture '{machine}' not supported by Node.js binaries")

    return HostPlatform(os=OS_NAMES[system], arch=ARCH_NAMES[machine])
