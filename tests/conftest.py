"""
Pytest configuration and shared fixtures for setup-go tests.
"""

import io
import os
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Generator

import pytest

from setupgo.pipelines.integrations import Integration


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clean_pipeline_env(monkeypatch):
    """
    Isolate tests from pipeline variables of the machine running them.

    PATH, GOROOT and GOPATH are registered with monkeypatch so that exports
    made by the code under test are undone after each test.
    """
    for key in list(os.environ):
        if key.startswith(("int_", "task_input_", "TASK_INPUT_")):
            monkeypatch.delenv(key, raising=False)
    for key in (
        "os_family",
        "architecture",
        "step_workspace_dir",
        "TASK_EXPORT_FILE",
        "GOROOT",
        "GOPATH",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))


@pytest.fixture
def artifactory_integration() -> Integration:
    """Artifactory integration with basic-auth credentials."""
    return Integration(
        name="myArtifactory",
        master_name="Artifactory",
        id="1",
        url="https://acme.jfrog.io/artifactory",
        user="ci",
        api_key="secret",
    )


def _go_version_bytes() -> bytes:
    return b"go1.0.0"


@pytest.fixture
def go_tarball(temp_dir: Path) -> Path:
    """A tar.gz shaped like a Go distribution (single go/ root)."""
    archive = temp_dir / "go1.0.0.tgz"
    data = _go_version_bytes()
    with tarfile.open(archive, "w:gz") as tar:
        info = tarfile.TarInfo("go/go.version")
        info.size = len(data)
        tar.addfile(info, io.BytesIO(data))
    return archive


@pytest.fixture
def go_zip(temp_dir: Path) -> Path:
    """A zip shaped like a Go distribution (single go/ root)."""
    archive = temp_dir / "go1.0.0.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("go/go.version", _go_version_bytes())
    return archive
