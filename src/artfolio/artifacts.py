"""Artifact storage for compiled site documents.

The core depends only on ``put``/``get``/``delete`` plus the key scheme
``{prefix}/{artist_id}/site.json``. ``LocalArtifactStore`` keeps objects
on the local filesystem under a root directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from artfolio.errors import StorageError

logger = logging.getLogger(__name__)

DEFAULT_SITES_PREFIX = "sites"
SITE_FILENAME = "site.json"


def sites_key(artist_id: str, prefix: str = DEFAULT_SITES_PREFIX) -> str:
    """Deterministic artifact key for an artist's compiled site."""
    return f"{prefix}/{artist_id}/{SITE_FILENAME}"


class ArtifactStore(Protocol):
    """Minimal object storage interface."""

    def put(self, key: str, body: bytes, content_type: str) -> None: ...

    def get(self, key: str) -> bytes | None: ...

    def delete(self, key: str) -> None: ...


class LocalArtifactStore:
    """Filesystem-backed ArtifactStore.

    Objects are written to a temporary sibling and moved into place, so
    readers never observe a half-written artifact.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def _resolve(self, key: str) -> Path:
        root = self.root.resolve()
        target = (root / key).resolve()
        if target == root or root not in target.parents:
            raise StorageError(f"Artifact key escapes storage root: {key!r}")
        return target

    def put(self, key: str, body: bytes, content_type: str) -> None:
        target = self._resolve(key)
        tmp = target.with_name(target.name + ".tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(body)
            os.replace(tmp, target)
        except OSError as exc:
            raise StorageError(f"Failed to write artifact {key}: {exc}") from exc
        logger.debug("Wrote %d bytes (%s) to %s", len(body), content_type, target)

    def get(self, key: str) -> bytes | None:
        target = self._resolve(key)
        if not target.exists():
            return None
        try:
            return target.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read artifact {key}: {exc}") from exc

    def delete(self, key: str) -> None:
        target = self._resolve(key)
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to delete artifact {key}: {exc}") from exc
