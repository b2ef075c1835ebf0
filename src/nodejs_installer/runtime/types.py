"""Data types for runtime detection."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RuntimeLocation(Enum):
    """Where a detected Node.js install lives."""

    LOCAL = "local"
    GLOBAL = "global"


@dataclass
class InstalledRuntime:
    """A detected Node.js install.

    Attributes:
        version: Node.js version without the leading "v"
        location: Local (project cache) or global (found on PATH)
        path: Absolute path to the node executable
        companion_path: Absolute path to npm, if found next to node
    """

    version: str
    location: RuntimeLocation
    path: str
    companion_path: Optional[str] = None

    @property
    def has_companion_tool(self) -> bool:
        return self.companion_path is not None

    def __repr__(self) -> str:
        npm_note = "" if self.has_companion_tool else " (no npm)"
        return f"<InstalledRuntime node v{self.version} @ {self.path}{npm_note} ({self.location.value})>"
