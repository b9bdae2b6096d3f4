"""Shared fixtures for artfolio tests."""

from pathlib import Path

import pytest

from artfolio.artifacts import LocalArtifactStore
from artfolio.content.store import ContentStateStore


@pytest.fixture
def store(tmp_path: Path) -> ContentStateStore:
    return ContentStateStore(tmp_path / "data")


@pytest.fixture
def artifacts(tmp_path: Path) -> LocalArtifactStore:
    return LocalArtifactStore(tmp_path / "artifacts")
