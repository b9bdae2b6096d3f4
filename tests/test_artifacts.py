"""Tests for the local artifact store."""

from pathlib import Path

import pytest

from artfolio.artifacts import LocalArtifactStore, sites_key
from artfolio.errors import StorageError


def test_sites_key():
    assert sites_key("artist-a") == "sites/artist-a/site.json"
    assert sites_key("artist-a", "portfolios") == "portfolios/artist-a/site.json"


class TestLocalArtifactStore:
    def test_put_get_delete(self, artifacts: LocalArtifactStore, tmp_path: Path):
        artifacts.put("sites/a/site.json", b'{"v": 1}', "application/json")

        assert artifacts.get("sites/a/site.json") == b'{"v": 1}'
        assert (tmp_path / "artifacts" / "sites" / "a" / "site.json").exists()
        assert not (tmp_path / "artifacts" / "sites" / "a" / "site.json.tmp").exists()

        artifacts.delete("sites/a/site.json")
        assert artifacts.get("sites/a/site.json") is None

    def test_overwrite(self, artifacts: LocalArtifactStore):
        artifacts.put("k.json", b"1", "application/json")
        artifacts.put("k.json", b"2", "application/json")
        assert artifacts.get("k.json") == b"2"

    def test_missing_key(self, artifacts: LocalArtifactStore):
        assert artifacts.get("sites/none/site.json") is None

    def test_delete_missing_is_noop(self, artifacts: LocalArtifactStore):
        artifacts.delete("sites/none/site.json")

    @pytest.mark.parametrize("key", ["../outside.json", "sites/../../x", ""])
    def test_key_cannot_escape_root(self, artifacts: LocalArtifactStore, key: str):
        with pytest.raises(StorageError):
            artifacts.put(key, b"x", "application/json")
