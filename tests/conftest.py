"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path
from typing import Optional

import pytest


def pytest_configure(config):
    """Keep every test offline - set before planning_copilot.config is imported."""
    os.environ["PLANNING_COPILOT_OFFLINE"] = "1"
    os.environ.setdefault("LOG_LEVEL", "WARNING")
    # Wide console so captured lines are not wrapped
    os.environ.setdefault("COLUMNS", "200")


class FailingRemoteProvider:
    """Stands in for the remote provider when the network is down."""

    name = "remote"

    def __init__(self):
        self.requested: list[str] = []

    def get(self, asset) -> Optional[str]:
        self.requested.append(asset.name)
        return None


class StaticRemoteProvider:
    """Remote provider that serves fixed text for every fetchable asset."""

    name = "remote"

    def __init__(self, text: str = "# fetched from remote\n"):
        self.text = text
        self.requested: list[str] = []

    def get(self, asset) -> Optional[str]:
        self.requested.append(asset.name)
        if asset.remote_path is None:
            return None
        return self.text


@pytest.fixture
def project_root(tmp_path) -> Path:
    """An empty project directory that looks like a git checkout."""
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    return root


@pytest.fixture
def failing_remote() -> FailingRemoteProvider:
    return FailingRemoteProvider()


@pytest.fixture
def static_remote() -> StaticRemoteProvider:
    return StaticRemoteProvider()


@pytest.fixture
def offline_chain(failing_remote):
    """Remote that always fails, followed by the embedded copies."""
    from planning_copilot.services.assets import EmbeddedAssetProvider, FirstSuccessProvider

    return FirstSuccessProvider([failing_remote, EmbeddedAssetProvider()])


@pytest.fixture
def installed_root(project_root, offline_chain) -> Path:
    """A project with a full default install (standards included)."""
    from planning_copilot.services.installer import InstallOptions, install

    install(InstallOptions(root=str(project_root)), provider=offline_chain)
    return project_root
