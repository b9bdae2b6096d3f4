"""Unified configuration loaded from .artfolio.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from artfolio.artifacts import DEFAULT_SITES_PREFIX

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".artfolio.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "artfolio" / "config.toml"


class StorageConfig(BaseModel):
    """[storage] section."""

    data_dir: str = "./artfolio-data"


class ArtifactsConfig(BaseModel):
    """[artifacts] section."""

    directory: str = "./artfolio-data/artifacts"
    sites_prefix: str = DEFAULT_SITES_PREFIX


class AuthConfig(BaseModel):
    """[auth] section."""

    jwt_secret: str = "dev-insecure-secret"
    header: str = "x-auth-token"
    token_ttl_minutes: int = 60 * 24


class ServerConfig(BaseModel):
    """[server] section."""

    host: str = "127.0.0.1"
    port: int = 8000


class RendererConfig(BaseModel):
    """[renderer] section."""

    templates_dir: str = ""
    empty_artworks_message: str = "No artworks selected."


class ArtfolioConfig(BaseModel):
    """Top-level configuration model."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    artifacts: ArtifactsConfig = Field(default_factory=ArtifactsConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    renderer: RendererConfig = Field(default_factory=RendererConfig)

    @property
    def data_path(self) -> Path:
        return Path(self.storage.data_dir)

    @property
    def artifacts_path(self) -> Path:
        return Path(self.artifacts.directory)


def load_config(path: str | Path | None = None) -> ArtfolioConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .artfolio.toml in CWD
    3. ~/.config/artfolio/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged ArtfolioConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = ArtfolioConfig.model_validate(data) if data else ArtfolioConfig()
    return _apply_env_vars(config)


def merge_cli_overrides(config: ArtfolioConfig, **cli_kwargs: object) -> ArtfolioConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "data_dir": ("storage", "data_dir"),
        "artifact_dir": ("artifacts", "directory"),
        "jwt_secret": ("auth", "jwt_secret"),
        "host": ("server", "host"),
        "port": ("server", "port"),
        "templates_dir": ("renderer", "templates_dir"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = value

    return ArtfolioConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: ArtfolioConfig) -> ArtfolioConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "ARTFOLIO_DATA_DIR": ("storage", "data_dir"),
        "ARTFOLIO_ARTIFACT_DIR": ("artifacts", "directory"),
        "ARTFOLIO_SITES_PREFIX": ("artifacts", "sites_prefix"),
        "ARTFOLIO_JWT_SECRET": ("auth", "jwt_secret"),
        "ARTFOLIO_HOST": ("server", "host"),
        "ARTFOLIO_TEMPLATES_DIR": ("renderer", "templates_dir"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    port_raw = os.environ.get("ARTFOLIO_PORT")
    if port_raw is not None:
        data["server"]["port"] = int(port_raw)

    return ArtfolioConfig.model_validate(data)
