"""
Pytest configuration for tracebuild tests.

Registers custom markers and shared fixtures.
"""

import logging

import pytest

from tracebuild.core.config import DispatchConfig


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that spawn real child processes"
    )


@pytest.fixture
def project_root(tmp_path):
    """Empty project checkout with the resources directory in place."""
    root = tmp_path / "lynx-devtool"
    (root / "packages" / "lynx-devtool-cli" / "resources").mkdir(parents=True)
    return root


@pytest.fixture
def dispatch_config(project_root):
    """DispatchConfig rooted at the temporary project."""
    return DispatchConfig(project_root=project_root)


@pytest.fixture
def cached_artifact(dispatch_config):
    """Write a 10 MiB archive at the expected artifact path."""
    path = dispatch_config.artifact_path
    with open(path, "wb") as f:
        f.truncate(10 * 1024 * 1024)
    return path


@pytest.fixture
def clean_env(monkeypatch):
    """Remove TRACEBUILD_* variables inherited from the developer shell."""
    for name in (
        "TRACEBUILD_CONFIG",
        "TRACEBUILD_PROJECT_ROOT",
        "TRACEBUILD_LOG_LEVEL",
        "TRACEBUILD_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_tracebuild_logger():
    """Drop handlers bound to captured streams once a test finishes."""
    yield
    logger = logging.getLogger("tracebuild")
    logger.handlers = []
    logger.propagate = True
