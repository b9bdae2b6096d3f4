"""JSON-backed ContentState store.

Persists every artist's ContentState in a single JSON file, loaded on
init and saved after every write operation. All writes go through
``mutate``, a locked read-modify-write that performs the optimistic
version check and enforces published-slug uniqueness, so a write either
lands completely or not at all.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field

from artfolio.content.models import INITIAL_VERSION, ContentState
from artfolio.errors import ConflictError, NotFoundError, VersionConflictError

logger = logging.getLogger(__name__)

STORE_FILENAME = ".artfolio-content-state.json"

# Alias to avoid shadowing by ContentStateStore.list method
_list = list


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    states: list[ContentState] = Field(default_factory=list)


class ContentStateStore:
    """CRUD store for ContentState documents keyed by artist.

    Reads hand out deep copies; mutating a returned state has no effect
    until it is written back through ``mutate``.
    """

    def __init__(self, data_dir: Path) -> None:
        self._path = data_dir / STORE_FILENAME
        self._lock = threading.RLock()
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError, KeyError):
            logger.warning("Corrupt content state store at %s, starting fresh", self._path)
            return _StoreData()

    def _save(self, states: _list[ContentState]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"states": [s.to_wire() for s in states]}
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        os.replace(tmp, self._path)

    def _find(self, artist: str) -> ContentState | None:
        for state in self._data.states:
            if state.artist == artist:
                return state
        return None

    def _check_slug(self, state: ContentState) -> None:
        if not state.published_url:
            return
        for other in self._data.states:
            if other.artist != state.artist and other.published_url == state.published_url:
                raise ConflictError("Slug already taken", current=state.published_url)

    def _replace(self, state: ContentState) -> None:
        states = [s for s in self._data.states if s.artist != state.artist]
        states.append(state)
        self._save(states)
        self._data.states = states

    # ── Read operations ──────────────────────────────────────────

    def get(self, artist: str) -> ContentState | None:
        """Return a copy of the artist's state, or None if absent."""
        with self._lock:
            state = self._find(artist)
            return state.model_copy(deep=True) if state is not None else None

    def find_by_slug(self, slug: str) -> ContentState | None:
        """Return a copy of the state that owns ``slug``, or None."""
        with self._lock:
            for state in self._data.states:
                if state.published_url == slug:
                    return state.model_copy(deep=True)
            return None

    def list(self) -> _list[ContentState]:
        with self._lock:
            return [s.model_copy(deep=True) for s in self._data.states]

    def exists(self, artist: str) -> bool:
        with self._lock:
            return self._find(artist) is not None

    # ── Write operations ─────────────────────────────────────────

    def get_or_create(self, artist: str) -> ContentState:
        """Return the artist's state, creating a default one first if needed."""
        with self._lock:
            state = self._find(artist)
            if state is None:
                state = ContentState(artist=artist, last_modified=datetime.now(tz=UTC))
                self._replace(state)
                logger.info("Created content state for artist %s", artist)
            return state.model_copy(deep=True)

    def mutate(
        self,
        artist: str,
        fn: Callable[[ContentState], ContentState | None],
        *,
        expected_version: int | None = None,
        bump_version: bool = True,
        reset_version: bool = False,
    ) -> ContentState:
        """Apply ``fn`` to a copy of the current state and store the result.

        ``fn`` may modify the copy in place (returning None) or return a
        replacement. When ``expected_version`` is given it must equal the
        stored version. ``bump_version`` increments the version by exactly
        one for the whole write; ``reset_version`` restores the initial
        version instead.

        Raises NotFoundError if the artist has no state,
        VersionConflictError on a stale ``expected_version`` and
        ConflictError if the result claims another artist's slug. On any
        error the stored state is untouched.
        """
        with self._lock:
            current = self._find(artist)
            if current is None:
                raise NotFoundError(f"Content state not found for artist {artist}")
            if expected_version is not None and current.version != expected_version:
                raise VersionConflictError(current.version)

            working = current.model_copy(deep=True)
            result = fn(working)
            updated = result if result is not None else working
            updated.artist = artist
            if reset_version:
                updated.version = INITIAL_VERSION
            elif bump_version:
                updated.version = current.version + 1
            else:
                updated.version = current.version
            updated.last_modified = datetime.now(tz=UTC)
            self._check_slug(updated)

            self._replace(updated)
            return updated.model_copy(deep=True)

    def delete(self, artist: str) -> bool:
        """Remove the artist's state. Returns False if there was none."""
        with self._lock:
            if self._find(artist) is None:
                return False
            states = [s for s in self._data.states if s.artist != artist]
            self._save(states)
            self._data.states = states
            return True
