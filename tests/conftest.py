"""Pytest configuration and shared fixtures."""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from nodejs_installer.runtime.specs import HostPlatform
from tests.helpers.fakes import FakeCatalog, FakeInstaller, FakeProbe


@pytest.fixture
def temp_project_dir() -> Generator[Path, None, None]:
    """Create a temporary project directory.

    Creates:
        temp_dir/
            pyproject.toml
            vendor/
                bin/
    """
    with tempfile.TemporaryDirectory() as tmp_dir:
        project_root = Path(tmp_dir).resolve()
        (project_root / "vendor" / "bin").mkdir(parents=True)
        (project_root / "pyproject.toml").write_text(
            '[project]\nname = "acme-app"\nversion = "1.0.0"\n'
        )
        yield project_root


@pytest.fixture
def empty_project_dir() -> Generator[Path, None, None]:
    """Create an empty temporary directory."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir).resolve()


@pytest.fixture
def linux_platform() -> HostPlatform:
    return HostPlatform(os="linux", arch="x64")


@pytest.fixture
def windows_platform() -> HostPlatform:
    return HostPlatform(os="win", arch="x64")


@pytest.fixture
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def fake_installer(fake_probe: FakeProbe) -> FakeInstaller:
    return FakeInstaller(fake_probe)


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog(["16.1.0", "16.0.0", "15.1.0", "14.2.0", "14.1.0"])


@pytest.fixture
def restore_path() -> Generator[None, None, None]:
    """Restore PATH after tests that register the bin directory."""
    original = os.environ.get("PATH")
    yield
    if original is None:
        os.environ.pop("PATH", None)
    else:
        os.environ["PATH"] = original
