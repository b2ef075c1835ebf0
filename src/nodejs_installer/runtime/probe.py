"""Detection of existing Node.js installs."""

import logging
import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, Optional, Union

from .specs import NODE_SPEC, HostPlatform, RuntimeSpec, detect_platform
from .types import InstalledRuntime, RuntimeLocation

logger = logging.getLogger(__name__)


class RuntimeProbe:
    """Finds global and project-local Node.js installs.

    Not finding an install is a normal outcome: every lookup returns None
    instead of raising.
    """

    def __init__(
        self,
        platform: Optional[HostPlatform] = None,
        spec: RuntimeSpec = NODE_SPEC,
    ):
        """Initialize probe.

        Args:
            platform: Target platform (auto-detected if None)
            spec: Runtime description (executable names, version check)
        """
        self.platform = platform or detect_platform()
        self.spec = spec

    def find_global(
        self,
        exclude_dirs: Iterable[Union[str, Path]] = (),
    ) -> Optional[InstalledRuntime]:
        """Find node (and npm) on PATH.

        Args:
            exclude_dirs: PATH entries to ignore, typically the bin directory
                holding our own shims

        Returns:
            InstalledRuntime, or None when node is missing or its version
            cannot be read
        """
        search_path = self._search_path(exclude_dirs)

        # Relative PATH entries give relative results, shims need absolute ones
        node_path = _absolute(shutil.which(self.spec.executable_name, path=search_path))
        if not node_path:
            logger.debug("No global %s on PATH", self.spec.display_name)
            return None

        version = self._get_version(node_path)
        if version is None:
            logger.debug("Could not read %s version of %s", self.spec.display_name, node_path)
            return None

        return InstalledRuntime(
            version=version,
            location=RuntimeLocation.GLOBAL,
            path=node_path,
            companion_path=_absolute(shutil.which(self.spec.companion_name, path=search_path)),
        )

    def find_local(self, target_dir: Union[str, Path]) -> Optional[InstalledRuntime]:
        """Find a Node.js install cached in ``target_dir``."""
        layout = self.platform.layout
        target = Path(target_dir)

        exe_path = target / layout.executable_path
        if not exe_path.exists():
            return None

        version = self._get_version(str(exe_path))
        if version is None:
            logger.debug("Could not read %s version of %s", self.spec.display_name, exe_path)
            return None

        companion = target / layout.companion_path
        return InstalledRuntime(
            version=version,
            location=RuntimeLocation.LOCAL,
            path=str(exe_path.resolve()),
            companion_path=str(companion) if companion.exists() else None,
        )

    def _search_path(self, exclude_dirs: Iterable[Union[str, Path]]) -> str:
        excluded = {os.path.normcase(os.path.abspath(d)) for d in exclude_dirs}
        entries = [
            entry
            for entry in os.environ.get("PATH", "").split(os.pathsep)
            if entry and os.path.normcase(os.path.abspath(entry)) not in excluded
        ]
        return os.pathsep.join(entries)

    def _get_version(self, executable: str) -> Optional[str]:
        """Get version of an executable."""
        version_check = self.spec.version_check

        try:
            result = subprocess.run(
                [executable] + version_check.args,
                capture_output=True,
                text=True,
                timeout=5,
            )
        except (subprocess.TimeoutExpired, OSError):
            return None

        if result.returncode != 0:
            return None

        match = re.search(version_check.parse, result.stdout + result.stderr)
        if match:
            return match.group(1)
        return None


def _absolute(path: Optional[str]) -> Optional[str]:
    return os.path.abspath(path) if path else None
