"""Download and extraction of Node.js binary archives."""

from __future__ import annotations

import logging
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path, PurePosixPath
from typing import Optional, Union

import httpx

from ..errors import DownloadError
from ..runtime.specs import HostPlatform, detect_platform
from ..versions.catalog import DEFAULT_DIST_URL

logger = logging.getLogger(__name__)


class NodeJsInstaller:
    """Installs a given Node.js release into a directory.

    The archive is downloaded and unpacked in a temporary directory first;
    the target directory is only replaced once that succeeded.
    """

    def __init__(
        self,
        platform: Optional[HostPlatform] = None,
        dist_url: str = DEFAULT_DIST_URL,
        client: Optional[httpx.Client] = None,
        timeout: float = 120.0,
    ):
        """
        Initialize installer.

        Args:
            platform: Platform to install binaries for (auto-detected if None)
            dist_url: Base URL of the Node.js dist mirror
            client: HTTP client to use (one is created per download if None)
            timeout: Download timeout in seconds
        """
        self.platform = platform or detect_platform()
        self.dist_url = dist_url.rstrip("/")
        self._client = client
        self.timeout = timeout

    def archive_name(self, version: str) -> str:
        """Return e.g. ``node-v14.2.0-linux-x64.tar.gz``."""
        return f"node-v{version}-{self.platform.os}-{self.platform.arch}.{self.platform.archive_ext}"

    def download_url(self, version: str) -> str:
        return f"{self.dist_url}/v{version}/{self.archive_name(version)}"

    def install(self, version: str, target_dir: Union[str, Path]) -> Path:
        """Install Node.js ``version`` into ``target_dir``, replacing it.

        Args:
            version: Exact version, without the ``v`` prefix
            target_dir: Directory that will contain bin/node (or node.exe)

        Returns:
            The target directory

        Raises:
            DownloadError: If the archive cannot be fetched or unpacked
        """
        target = Path(target_dir)
        url = self.download_url(version)
        logger.info(" - Downloading NodeJS v%s from %s", version, url)

        with tempfile.TemporaryDirectory(prefix="nodejs-installer-") as tmp_dir:
            archive = Path(tmp_dir) / self.archive_name(version)
            self._download(url, archive)

            staging = Path(tmp_dir) / "staging"
            staging.mkdir()
            self._extract(archive, staging)
            root = self._archive_root(staging)

            if target.exists():
                logger.debug("Removing previous install at %s", target)
                shutil.rmtree(target)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(root), str(target))

        logger.info(" - NodeJS v%s installed in %s", version, target)
        return target

    def _download(self, url: str, destination: Path) -> None:
        client = self._client or httpx.Client(timeout=self.timeout)
        try:
            with client.stream("GET", url, follow_redirects=True) as response:
                if response.status_code != 200:
                    raise DownloadError(f"Download of {url} failed: HTTP {response.status_code}")
                with open(destination, "wb") as f:
                    for chunk in response.iter_bytes():
                        f.write(chunk)
        except httpx.HTTPError as exc:
            raise DownloadError(f"Download of {url} failed: {exc}") from exc
        finally:
            if self._client is None:
                client.close()

    def _extract(self, archive: Path, destination: Path) -> None:
        try:
            if archive.name.endswith(".zip"):
                with zipfile.ZipFile(archive) as zf:
                    for name in zf.namelist():
                        _check_member(name, archive)
                    zf.extractall(destination)
            else:
                with tarfile.open(archive, "r:*") as tf:
                    for member in tf.getmembers():
                        _check_member(member.name, archive)
                    if hasattr(tarfile, "data_filter"):
                        tf.extractall(destination, filter="data")
                    else:
                        tf.extractall(destination)
        except (tarfile.TarError, zipfile.BadZipFile) as exc:
            raise DownloadError(f"Unable to extract {archive.name}: {exc}") from exc

    def _archive_root(self, staging: Path) -> Path:
        """Node archives hold a single ``node-v<V>-<os>-<arch>`` directory."""
        entries = list(staging.iterdir())
        if len(entries) == 1 and entries[0].is_dir():
            return entries[0]
        return staging


def _check_member(name: str, archive: Path) -> None:
    path = PurePosixPath(name.replace("\\", "/"))
    if path.is_absolute() or ".." in path.parts:
        raise DownloadError(f"Refusing to extract '{name}' from {archive.name}")
