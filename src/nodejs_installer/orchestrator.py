"""Decides which Node.js install the build uses, installing one if needed."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .bootstrap.bin_scripts import create_bin_scripts, register_path
from .bootstrap.node_installer import NodeJsInstaller
from .constraints import merge_version_constraints
from .errors import ConstraintUnsatisfiableError
from .packages import Package
from .runtime.probe import RuntimeProbe
from .runtime.specs import HostPlatform, detect_platform
from .runtime.types import InstalledRuntime
from .settings import Settings
from .utils.filesystem import SHIM_NAMES, is_dir_empty, remove
from .utils.path import resolve_project_path
from .versions.catalog import DEFAULT_DIST_URL, VersionCatalog
from .versions.matcher import VersionMatcher

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Lifecycle event the host runs the installer for."""

    INSTALL = "install"
    UNINSTALL = "uninstall"


class Outcome(Enum):
    """Terminal state of a run."""

    REUSED_GLOBAL = "reused_global"
    REUSED_LOCAL = "reused_local"
    INSTALLED_LOCAL = "installed_local"
    UNINSTALLED = "uninstalled"


def uninstall(bin_dir: Union[str, Path], target_dir: Union[str, Path]) -> List[Path]:
    """Remove the local Node.js copy and the bin scripts.

    The parent of ``target_dir`` goes too when nothing else is left in it.
    Missing files are skipped, so this can run any number of times.

    Returns:
        Paths that were removed
    """
    removed: List[Path] = []
    target = Path(target_dir)

    if target.exists():
        logger.info("Removing NodeJS local install")
        remove(target)
        removed.append(target)

        parent = target.parent
        if is_dir_empty(parent):
            remove(parent)
            removed.append(parent)

    logger.info("Removing NodeJS and NPM links from bin directory")
    for name in SHIM_NAMES:
        shim = Path(bin_dir) / name
        if remove(shim):
            removed.append(shim)
    return removed


class NodeJsOrchestrator:
    """Runs one install or uninstall of Node.js for a project.

    Collaborators default to the real implementations and are only built
    when an install runs; pass them explicitly to substitute them.
    """

    def __init__(
        self,
        project_root: Union[str, Path],
        bin_dir: Union[str, Path],
        packages: Iterable[Package],
        settings: Settings,
        matcher: Optional[VersionMatcher] = None,
        catalog: Optional[VersionCatalog] = None,
        probe: Optional[RuntimeProbe] = None,
        installer: Optional[NodeJsInstaller] = None,
        platform: Optional[HostPlatform] = None,
        dist_url: str = DEFAULT_DIST_URL,
    ):
        self.project_root = Path(project_root)
        self.bin_dir = resolve_project_path(bin_dir, self.project_root)
        self.target_dir = resolve_project_path(settings.target_dir, self.project_root)
        self.packages = list(packages)
        self.settings = settings
        self.dist_url = dist_url

        self._matcher = matcher
        self._catalog = catalog
        self._probe = probe
        self._installer = installer
        self._platform = platform

    @property
    def platform(self) -> HostPlatform:
        if self._platform is None:
            self._platform = detect_platform()
        return self._platform

    @property
    def matcher(self) -> VersionMatcher:
        if self._matcher is None:
            self._matcher = VersionMatcher()
        return self._matcher

    @property
    def catalog(self) -> VersionCatalog:
        if self._catalog is None:
            self._catalog = VersionCatalog(self.dist_url)
        return self._catalog

    @property
    def probe(self) -> RuntimeProbe:
        if self._probe is None:
            self._probe = RuntimeProbe(self.platform)
        return self._probe

    @property
    def installer(self) -> NodeJsInstaller:
        if self._installer is None:
            self._installer = NodeJsInstaller(self.platform, self.dist_url)
        return self._installer

    def run(self, mode: Mode = Mode.INSTALL) -> Outcome:
        """Run the installer for a lifecycle event.

        Raises:
            ConstraintUnsatisfiableError: If no release matches the constraint
            CatalogUnavailableError: If the release list cannot be fetched
        """
        if mode is Mode.UNINSTALL:
            uninstall(self.bin_dir, self.target_dir)
            return Outcome.UNINSTALLED

        constraint = merge_version_constraints(self.packages)
        logger.info("NodeJS installer:")
        logger.info(" - Requested version: %s", constraint)

        global_runtime: Optional[InstalledRuntime] = None

        if self.settings.force_local:
            logger.info(" - Forcing local NodeJS install.")
            outcome = self.ensure_local(constraint)
        else:
            global_runtime = self.probe.find_global(exclude_dirs=[self.bin_dir])

            if global_runtime is None:
                logger.info(" - No global NodeJS install found")
                outcome = self.ensure_local(constraint)
            else:
                logger.info(" - Global NodeJS install found: v%s", global_runtime.version)

                if not global_runtime.has_companion_tool:
                    logger.info(" - No NPM install found")
                    global_runtime = None
                    outcome = self.ensure_local(constraint)
                elif not self.matcher.is_version_matching(global_runtime.version, constraint):
                    logger.info(" - Global NodeJS install does not match constraint %s", constraint)
                    global_runtime = None
                    outcome = self.ensure_local(constraint)
                else:
                    logger.info(" - Global NodeJS install matches constraint %s", constraint)
                    outcome = Outcome.REUSED_GLOBAL

        create_bin_scripts(self.bin_dir, self.target_dir, self.platform, global_runtime)

        if self.settings.include_bin_in_path:
            register_path(self.bin_dir)

        return outcome

    def ensure_local(self, constraint: str) -> Outcome:
        """Reuse the local install if it satisfies ``constraint``, else install.

        A cached version that still matches is kept even when a newer
        matching release exists.
        """
        local_runtime = self.probe.find_local(self.target_dir)

        if local_runtime is None:
            logger.info(" - No local NodeJS install found")
            self.install_best(constraint)
            return Outcome.INSTALLED_LOCAL

        logger.info(" - Local NodeJS install found: v%s", local_runtime.version)

        if not self.matcher.is_version_matching(local_runtime.version, constraint):
            self.install_best(constraint)
            return Outcome.INSTALLED_LOCAL

        logger.info(" - Local NodeJS install matches constraint %s", constraint)
        return Outcome.REUSED_LOCAL

    def install_best(self, constraint: str) -> str:
        """Install the highest published release matching ``constraint``.

        Returns:
            The installed version

        Raises:
            ConstraintUnsatisfiableError: If no release matches; nothing is
                written in that case
        """
        versions = self.catalog.get_list()
        best = self.matcher.find_best_matching_version(versions, constraint)

        if best is None:
            raise ConstraintUnsatisfiableError(constraint)

        logger.info(" - Installing NodeJS v%s", best)
        self.installer.install(best, self.target_dir)
        return best
