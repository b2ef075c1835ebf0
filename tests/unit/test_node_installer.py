"""Unit tests for downloading and unpacking Node.js archives."""

import io
import tarfile
import zipfile

import httpx
import pytest

from nodejs_installer.bootstrap import NodeJsInstaller
from nodejs_installer.errors import DownloadError
from tests.helpers.fakes import make_node_tarball


def serving(archives, requested=None):
    """MockTransport handler serving ``{url: bytes}``, 404 otherwise."""

    def handler(request):
        url = str(request.url)
        if requested is not None:
            requested.append(url)
        if url in archives:
            return httpx.Response(200, content=archives[url])
        return httpx.Response(404)

    return httpx.Client(transport=httpx.MockTransport(handler))


class TestArchiveNaming:
    """Test dist URL construction."""

    def test_linux_archive(self, linux_platform):
        installer = NodeJsInstaller(linux_platform)

        assert installer.archive_name("14.2.0") == "node-v14.2.0-linux-x64.tar.gz"
        assert installer.download_url("14.2.0") == (
            "https://nodejs.org/dist/v14.2.0/node-v14.2.0-linux-x64.tar.gz"
        )

    def test_windows_archive_and_mirror(self, windows_platform):
        installer = NodeJsInstaller(windows_platform, dist_url="https://mirror.example/node/")

        assert installer.download_url("16.0.0") == (
            "https://mirror.example/node/v16.0.0/node-v16.0.0-win-x64.zip"
        )


class TestInstall:
    """Test NodeJsInstaller.install."""

    def test_installs_into_target_dir(self, temp_project_dir, linux_platform):
        target = temp_project_dir / "vendor" / "nodejs" / "nodejs"
        url = "https://nodejs.org/dist/v14.2.0/node-v14.2.0-linux-x64.tar.gz"
        requested = []
        installer = NodeJsInstaller(
            linux_platform, client=serving({url: make_node_tarball("14.2.0")}, requested)
        )

        result = installer.install("14.2.0", target)

        assert result == target
        assert requested == [url]
        assert (target / "bin" / "node").read_text() == "#!/bin/sh\necho v14.2.0\n"
        assert (target / "bin" / "npm").is_symlink()
        assert (target / "README.md").exists()

    def test_replaces_previous_install(self, temp_project_dir, linux_platform):
        target = temp_project_dir / "vendor" / "nodejs" / "nodejs"
        (target / "bin").mkdir(parents=True)
        (target / "stale.txt").write_text("old")
        url = "https://nodejs.org/dist/v16.0.0/node-v16.0.0-linux-x64.tar.gz"
        installer = NodeJsInstaller(linux_platform, client=serving({url: make_node_tarball("16.0.0")}))

        installer.install("16.0.0", target)

        assert not (target / "stale.txt").exists()
        assert "v16.0.0" in (target / "bin" / "node").read_text()

    def test_windows_zip(self, temp_project_dir, windows_platform):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as zf:
            zf.writestr("node-v16.0.0-win-x64/node.exe", "MZ")
            zf.writestr("node-v16.0.0-win-x64/npm.cmd", "@echo npm")
        url = "https://nodejs.org/dist/v16.0.0/node-v16.0.0-win-x64.zip"
        target = temp_project_dir / "node"
        installer = NodeJsInstaller(windows_platform, client=serving({url: buffer.getvalue()}))

        installer.install("16.0.0", target)

        assert (target / "node.exe").read_text() == "MZ"
        assert (target / "npm.cmd").exists()

    def test_missing_archive_leaves_target_untouched(self, temp_project_dir, linux_platform):
        target = temp_project_dir / "vendor" / "nodejs" / "nodejs"
        target.mkdir(parents=True)
        (target / "keep.txt").write_text("previous install")
        installer = NodeJsInstaller(linux_platform, client=serving({}))

        with pytest.raises(DownloadError, match="HTTP 404"):
            installer.install("99.0.0", target)

        assert (target / "keep.txt").read_text() == "previous install"

    def test_network_error(self, temp_project_dir, linux_platform):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        installer = NodeJsInstaller(linux_platform, client=client)

        with pytest.raises(DownloadError, match="timed out"):
            installer.install("14.2.0", temp_project_dir / "node")

        assert not (temp_project_dir / "node").exists()

    def test_corrupt_archive(self, temp_project_dir, linux_platform):
        url = "https://nodejs.org/dist/v14.2.0/node-v14.2.0-linux-x64.tar.gz"
        installer = NodeJsInstaller(linux_platform, client=serving({url: b"not an archive"}))

        with pytest.raises(DownloadError, match="Unable to extract"):
            installer.install("14.2.0", temp_project_dir / "node")

    def test_refuses_paths_outside_archive(self, temp_project_dir, linux_platform):
        buffer = io.BytesIO()
        with tarfile.open(fileobj=buffer, mode="w:gz") as tf:
            info = tarfile.TarInfo("../escaped.txt")
            info.size = 0
            tf.addfile(info, io.BytesIO(b""))
        url = "https://nodejs.org/dist/v14.2.0/node-v14.2.0-linux-x64.tar.gz"
        installer = NodeJsInstaller(linux_platform, client=serving({url: buffer.getvalue()}))

        with pytest.raises(DownloadError, match="Refusing"):
            installer.install("14.2.0", temp_project_dir / "node")

        assert not (temp_project_dir / "escaped.txt").exists()
