"""Unit tests for the Node.js release catalog."""

import httpx
import pytest

from nodejs_installer.errors import CatalogUnavailableError
from nodejs_installer.versions.catalog import DEFAULT_DIST_URL, VersionCatalog

INDEX = [
    {"version": "v16.1.0", "lts": False},
    {"version": "v16.0.0", "lts": False},
    {"version": "v14.2.0", "lts": "Fermium"},
]


def catalog_with(handler, dist_url: str = DEFAULT_DIST_URL) -> VersionCatalog:
    return VersionCatalog(dist_url, client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestVersionCatalog:
    """Test VersionCatalog.get_list."""

    def test_index_url(self):
        assert VersionCatalog("https://mirror.example/node/").index_url == (
            "https://mirror.example/node/index.json"
        )

    def test_returns_versions_without_prefix(self):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, json=INDEX)

        versions = catalog_with(handler).get_list()

        assert versions == ["16.1.0", "16.0.0", "14.2.0"]
        assert requested == ["https://nodejs.org/dist/index.json"]

    def test_entries_without_version_are_skipped(self):
        def handler(request):
            return httpx.Response(200, json=[{"version": "v14.2.0"}, {"files": []}, "junk"])

        assert catalog_with(handler).get_list() == ["14.2.0"]

    def test_http_error_status(self):
        def handler(request):
            return httpx.Response(503)

        with pytest.raises(CatalogUnavailableError, match="HTTP 503"):
            catalog_with(handler).get_list()

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(CatalogUnavailableError, match="connection refused") as exc_info:
            catalog_with(handler).get_list()

        assert exc_info.value.url == "https://nodejs.org/dist/index.json"

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>not json</html>")

        with pytest.raises(CatalogUnavailableError, match="invalid JSON"):
            catalog_with(handler).get_list()

    def test_unexpected_payload(self):
        def handler(request):
            return httpx.Response(200, json={"versions": []})

        with pytest.raises(CatalogUnavailableError, match="list of releases"):
            catalog_with(handler).get_list()

    def test_no_retry(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        with pytest.raises(CatalogUnavailableError):
            catalog_with(handler).get_list()

        assert len(calls) == 1
