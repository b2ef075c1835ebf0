"""Unit tests for the node and npm bin scripts."""

import os
import stat

import pytest

from nodejs_installer.bootstrap import (
    create_bin_scripts,
    path_export_line,
    register_path,
    render_bin_scripts,
)
from nodejs_installer.utils.filesystem import SHIM_NAMES
from tests.helpers.fakes import global_runtime


@pytest.fixture
def dirs(temp_project_dir):
    return temp_project_dir / "vendor" / "bin", temp_project_dir / "vendor" / "nodejs" / "nodejs"


class TestRenderLocal:
    """Test shims pointing at the local install."""

    def test_posix_shims_use_relative_paths(self, dirs, linux_platform):
        bin_dir, target_dir = dirs

        scripts = render_bin_scripts(bin_dir, target_dir, linux_platform)

        assert set(scripts) == {"node", "npm"}
        assert scripts["node"] == (
            '#!/usr/bin/env sh\n'
            'DIR=$(cd "$(dirname "$0")" && pwd)\n'
            'exec "$DIR/../nodejs/nodejs/bin/node" "$@"\n'
        )
        assert 'PATH="$DIR/../nodejs/nodejs/bin:$PATH"' in scripts["npm"]
        assert scripts["npm"].endswith('exec "$DIR/../nodejs/nodejs/bin/npm" "$@"\n')
        assert str(target_dir) not in scripts["node"]

    def test_windows_adds_batch_files(self, dirs, windows_platform):
        bin_dir, target_dir = dirs

        scripts = render_bin_scripts(bin_dir, target_dir, windows_platform)

        assert set(scripts) == set(SHIM_NAMES)
        assert scripts["node.bat"] == '@"%~dp0..\\nodejs\\nodejs\\node.exe" %*\r\n'
        assert '@SET "PATH=%~dp0..\\nodejs\\nodejs;%PATH%"' in scripts["npm.bat"]
        assert scripts["npm.bat"].endswith('@"%~dp0..\\nodejs\\nodejs\\npm.cmd" %*\r\n')

    def test_special_characters_are_escaped(self, temp_project_dir, linux_platform):
        bin_dir = temp_project_dir / "vendor" / "bin"
        target_dir = temp_project_dir / "vendor" / "node $HOME"

        scripts = render_bin_scripts(bin_dir, target_dir, linux_platform)

        assert '"$DIR/../node \\$HOME/bin/node"' in scripts["node"]


class TestRenderGlobal:
    """Test shims pointing at the global install."""

    def test_posix_shims_use_absolute_paths(self, dirs, linux_platform):
        bin_dir, target_dir = dirs

        scripts = render_bin_scripts(bin_dir, target_dir, linux_platform, global_runtime())

        assert scripts["node"] == '#!/usr/bin/env sh\nexec /usr/local/bin/node "$@"\n'
        assert 'exec /usr/local/bin/npm "$@"' in scripts["npm"]
        assert "PATH=/usr/local/bin:" in scripts["npm"]

    def test_windows_batch_files(self, dirs, windows_platform):
        bin_dir, target_dir = dirs

        scripts = render_bin_scripts(bin_dir, target_dir, windows_platform, global_runtime())

        assert scripts["node.bat"] == '@"/usr/local/bin/node" %*\r\n'
        assert '@"/usr/local/bin/npm" %*' in scripts["npm.bat"]


class TestCreateBinScripts:
    """Test writing shims to disk."""

    def test_writes_executable_shims(self, dirs, linux_platform):
        bin_dir, target_dir = dirs

        written = create_bin_scripts(bin_dir, target_dir, linux_platform)

        assert sorted(p.name for p in written) == ["node", "npm"]
        for shim in written:
            assert shim.stat().st_mode & stat.S_IXUSR

    def test_creates_missing_bin_dir(self, empty_project_dir, linux_platform):
        bin_dir = empty_project_dir / "bin"

        create_bin_scripts(bin_dir, empty_project_dir / "node", linux_platform)

        assert (bin_dir / "node").is_file()

    def test_rewrite_is_byte_identical(self, dirs, linux_platform):
        bin_dir, target_dir = dirs

        create_bin_scripts(bin_dir, target_dir, linux_platform)
        first = {name: (bin_dir / name).read_bytes() for name in ("node", "npm")}
        create_bin_scripts(bin_dir, target_dir, linux_platform)
        second = {name: (bin_dir / name).read_bytes() for name in ("node", "npm")}

        assert first == second

    def test_switching_to_global_overwrites(self, dirs, linux_platform):
        bin_dir, target_dir = dirs

        create_bin_scripts(bin_dir, target_dir, linux_platform)
        create_bin_scripts(bin_dir, target_dir, linux_platform, global_runtime())

        assert "/usr/local/bin/node" in (bin_dir / "node").read_text()

    def test_batch_files_keep_crlf(self, dirs, windows_platform):
        bin_dir, target_dir = dirs

        create_bin_scripts(bin_dir, target_dir, windows_platform)

        assert (bin_dir / "node.bat").read_bytes().endswith(b"%*\r\n")


class TestRegisterPath:
    """Test adding the bin directory to PATH."""

    def test_prepends_bin_dir(self, dirs, restore_path):
        bin_dir, _ = dirs
        os.environ["PATH"] = os.pathsep.join(["/usr/bin", "/bin"])

        assert register_path(bin_dir) is True
        assert os.environ["PATH"].split(os.pathsep)[0] == str(bin_dir)

    def test_is_idempotent(self, dirs, restore_path):
        bin_dir, _ = dirs
        os.environ["PATH"] = "/usr/bin"

        register_path(bin_dir)
        assert register_path(bin_dir) is False
        assert os.environ["PATH"].split(os.pathsep).count(str(bin_dir)) == 1


class TestPathExportLine:
    """Test the PATH line handed back to the host shell."""

    def test_prepends_absolute_bin_dir(self, dirs):
        bin_dir, _ = dirs

        assert path_export_line(bin_dir) == f'export PATH={bin_dir}{os.pathsep}"$PATH"'

    def test_quotes_spaces(self, empty_project_dir):
        bin_dir = empty_project_dir / "my project" / "bin"

        assert path_export_line(bin_dir) == f"export PATH='{bin_dir}'{os.pathsep}\"$PATH\""
