"""Tests for configuration loading."""

from pathlib import Path

import pytest

from artfolio.config import ArtfolioConfig, load_config, merge_cli_overrides


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "ARTFOLIO_DATA_DIR",
        "ARTFOLIO_ARTIFACT_DIR",
        "ARTFOLIO_SITES_PREFIX",
        "ARTFOLIO_JWT_SECRET",
        "ARTFOLIO_HOST",
        "ARTFOLIO_PORT",
        "ARTFOLIO_TEMPLATES_DIR",
    ):
        monkeypatch.delenv(var, raising=False)


class TestLoadConfig:
    def test_defaults(self):
        config = ArtfolioConfig()
        assert config.server.port == 8000
        assert config.auth.header == "x-auth-token"
        assert config.artifacts.sites_prefix == "sites"
        assert config.data_path == Path("./artfolio-data")

    def test_toml_file(self, tmp_path: Path):
        path = tmp_path / "artfolio.toml"
        path.write_text(
            '[storage]\ndata_dir = "/srv/data"\n\n[server]\nport = 9001\n',
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.storage.data_dir == "/srv/data"
        assert config.server.port == 9001
        assert config.server.host == "127.0.0.1"

    def test_cwd_file_is_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / ".artfolio.toml").write_text('[auth]\njwt_secret = "s3"\n', encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert load_config().auth.jwt_secret == "s3"

    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "nope.toml")
        assert config == ArtfolioConfig()

    def test_malformed_file_falls_back_to_defaults(self, tmp_path: Path):
        path = tmp_path / "bad.toml"
        path.write_text("[storage\n", encoding="utf-8")
        assert load_config(path) == ArtfolioConfig()

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = tmp_path / "artfolio.toml"
        path.write_text("[server]\nport = 9001\n", encoding="utf-8")
        monkeypatch.setenv("ARTFOLIO_PORT", "9100")
        monkeypatch.setenv("ARTFOLIO_SITES_PREFIX", "portfolios")

        config = load_config(path)

        assert config.server.port == 9100
        assert config.artifacts.sites_prefix == "portfolios"


class TestMergeCliOverrides:
    def test_only_explicit_values(self):
        config = merge_cli_overrides(ArtfolioConfig(), data_dir="/tmp/d", port=None, host=None)
        assert config.storage.data_dir == "/tmp/d"
        assert config.server.port == 8000
        assert config.server.host == "127.0.0.1"

    def test_unknown_keys_ignored(self):
        assert merge_cli_overrides(ArtfolioConfig(), colour="red") == ArtfolioConfig()
