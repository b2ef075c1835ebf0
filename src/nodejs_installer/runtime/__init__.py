"""Node.js runtime detection."""

from .probe import RuntimeProbe
from .specs import NODE_SPEC, HostPlatform, detect_platform
from .types import InstalledRuntime, RuntimeLocation

__all__ = [
    "RuntimeProbe",
    "InstalledRuntime",
    "RuntimeLocation",
    "HostPlatform",
    "NODE_SPEC",
    "detect_platform",
]
