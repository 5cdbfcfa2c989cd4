"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from opverify.bootstrap.paths import VERSIONS_FILE_ENV
from opverify.registry.store import BUNDLED_REGISTRY_YAML


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the registry config root at a temporary directory.

    Keeps tests from reading or bootstrapping the real user registry.
    """
    config_root = tmp_path / "config"
    monkeypatch.delenv(VERSIONS_FILE_ENV, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_root))
    monkeypatch.setenv("APPDATA", str(config_root))
    return config_root


@pytest.fixture
def registry_file(tmp_path: Path) -> Path:
    """A valid registry file containing the bundled 2.31.1 entry."""
    path = tmp_path / "registry.yaml"
    path.write_text(BUNDLED_REGISTRY_YAML)
    return path
