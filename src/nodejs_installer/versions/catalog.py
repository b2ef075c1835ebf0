"""Listing of the Node.js releases published on a dist mirror."""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from ..errors import CatalogUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_DIST_URL = "https://nodejs.org/dist"


class VersionCatalog:
    """Fetches the list of installable Node.js versions.

    Reads ``<dist_url>/index.json``. Failures are reported once, without
    retrying.
    """

    def __init__(
        self,
        dist_url: str = DEFAULT_DIST_URL,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        self.dist_url = dist_url.rstrip("/")
        self._client = client
        self.timeout = timeout

    @property
    def index_url(self) -> str:
        return f"{self.dist_url}/index.json"

    def get_list(self) -> List[str]:
        """Return every published version, without the ``v`` prefix.

        Versions keep the mirror's order (newest first on nodejs.org).

        Raises:
            CatalogUnavailableError: On network errors, non-200 responses or
                a payload that is not a list of releases
        """
        url = self.index_url
        logger.info(" - Fetching NodeJS versions from %s", url)

        client = self._client or httpx.Client(timeout=self.timeout)
        try:
            response = client.get(url, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise CatalogUnavailableError(url, str(exc)) from exc
        finally:
            if self._client is None:
                client.close()

        if response.status_code != 200:
            raise CatalogUnavailableError(url, f"HTTP {response.status_code}")

        try:
            releases = response.json()
        except ValueError as exc:
            raise CatalogUnavailableError(url, "invalid JSON") from exc

        if not isinstance(releases, list):
            raise CatalogUnavailableError(url, "expected a list of releases")

        versions = []
        for release in releases:
            version = release.get("version") if isinstance(release, dict) else None
            if isinstance(version, str) and version:
                versions.append(version.lstrip("vV"))

        logger.debug("Found %d NodeJS versions", len(versions))
        return versions
